"""Immutable per-channel sample storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .data_model import AudioFormat, SampleFormat, ViewRange
from .errors import MalformedInputError, UnsupportedFormatError

logger = logging.getLogger(__name__)

SUPPORTED_CHANNELS = 2
SUPPORTED_BITS = 16
INT16_MIN = int(np.iinfo(np.int16).min)
INT16_MAX = int(np.iinfo(np.int16).max)


def validate_format(fmt: AudioFormat) -> None:
    """Reject anything that is not stereo, 16-bit, integer PCM."""
    if fmt.channels != SUPPORTED_CHANNELS:
        raise UnsupportedFormatError(
            f"Expected {SUPPORTED_CHANNELS} channels, got {fmt.channels}")
    if fmt.bits_per_sample != SUPPORTED_BITS:
        raise UnsupportedFormatError(
            f"Expected {SUPPORTED_BITS}-bit samples, got {fmt.bits_per_sample}-bit")
    if fmt.sample_format is not SampleFormat.INT:
        raise UnsupportedFormatError(
            f"Expected integer PCM, got {fmt.sample_format.value} samples")


def _to_int16(data: Sequence[int]) -> np.ndarray:
    """Copy one channel into a read-only int16 array.

    Values outside the signed 16-bit range are rejected instead of wrapped.
    """
    arr = np.asarray(data)
    if arr.ndim != 1:
        raise MalformedInputError(f"Channel data must be one-dimensional, got shape {arr.shape}")
    if arr.size:
        if arr.dtype.kind not in "iu":
            raise MalformedInputError(f"Channel data must be integers, got {arr.dtype}")
        low, high = int(arr.min()), int(arr.max())
        if low < INT16_MIN or high > INT16_MAX:
            raise MalformedInputError(
                f"Sample values {low}..{high} exceed the 16-bit range {INT16_MIN}..{INT16_MAX}")
    result = arr.astype(np.int16)
    result.setflags(write=False)
    return result


@dataclass(frozen=True)
class SampleStore:
    """Fully loaded stereo samples, read-only for the whole session.

    Build instances with from_channels(); it validates the format and copies
    the data into non-writeable int16 arrays.
    """
    format: AudioFormat
    channels: Tuple[np.ndarray, ...]

    @classmethod
    def from_channels(cls, fmt: AudioFormat, channels: Sequence[Sequence[int]]) -> SampleStore:
        validate_format(fmt)
        if len(channels) != fmt.channels:
            raise MalformedInputError(
                f"Format reports {fmt.channels} channels but {len(channels)} were decoded")

        arrays = [_to_int16(data) for data in channels]

        lengths = {len(a) for a in arrays}
        if len(lengths) != 1:
            raise MalformedInputError(f"Channels have unequal lengths: {sorted(lengths)}")
        if 0 in lengths:
            raise MalformedInputError("Decoded audio contains no samples")

        store = cls(format=fmt, channels=tuple(arrays))
        logger.debug("Sample store ready: %d samples x %d channels", store.total_samples, fmt.channels)
        return store

    @property
    def total_samples(self) -> int:
        return len(self.channels[0])

    @property
    def sample_rate(self) -> int:
        return self.format.sample_rate

    @property
    def duration_seconds(self) -> float:
        if self.format.sample_rate <= 0:
            return 0.0
        return self.total_samples / self.format.sample_rate

    def slice(self, channel: int, view_range: ViewRange) -> np.ndarray:
        """Return a read-only view of one channel over the visible range."""
        if not view_range.is_valid(self.total_samples):
            raise ValueError(f"View range {view_range} outside of 0..{self.total_samples}")
        return self.channels[channel][view_range.start:view_range.end]
