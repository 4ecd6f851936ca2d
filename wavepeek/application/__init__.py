"""Application layer: events and the event bus."""
