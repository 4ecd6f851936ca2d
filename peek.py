#!/usr/bin/env python3
"""WavePeek - scroll and zoom through the peak waveform of a stereo WAV file.

Usage:
    python peek.py <file.wav> [width] [height] [--config settings.yaml] [--style dark]

Controls:
    wheel           zoom (vertical) / pan (horizontal)
    Shift+wheel     swap wheel axes
    Ctrl+wheel      fine steps
    arrow keys      pan / zoom by one notch
    F, Home         show the whole file
    Ctrl+Home, End  jump to the start / end of the file
    Q, Escape       quit
"""

import argparse
import logging
import sys
from typing import List, Optional

from wavepeek.errors import WavePeekError
from wavepeek.settings import ViewerSettings, load_settings, save_settings

USAGE = "Usage: peek.py <file.wav> [width] [height]"

logger = logging.getLogger("wavepeek")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="WavePeek peak waveform viewer", usage=USAGE)
    parser.add_argument("audio_file", nargs="?", help="Stereo 16-bit PCM audio file")
    parser.add_argument("width", nargs="?", type=int, help="Raster width in pixels")
    parser.add_argument("height", nargs="?", type=int, help="Raster height in pixels")
    parser.add_argument("--config", type=str, help="YAML settings file")
    parser.add_argument("--style", choices=["default", "dark", "light"], help="Application style")
    parser.add_argument("--write-config", type=str, metavar="PATH",
                        help="Write the effective settings to PATH and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def resolve_settings(args: argparse.Namespace) -> ViewerSettings:
    """Settings file first, then command-line overrides."""
    settings = load_settings(args.config) if args.config else ViewerSettings()
    if args.width is not None:
        settings.width = args.width
    if args.height is not None:
        settings.height = args.height
    if args.style is not None:
        settings.style = args.style
    settings.validate()
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = resolve_settings(args)
    except WavePeekError as e:
        logger.error("%s", e)
        print(USAGE)
        return 0

    if args.write_config:
        save_settings(settings, args.write_config)
        print(f"Settings written to: {args.write_config}")
        return 0

    if not args.audio_file:
        print(USAGE)
        return 0

    from wavepeek.audio_loader import load_sample_store
    try:
        store = load_sample_store(args.audio_file)
    except WavePeekError as e:
        logger.error("%s", e)
        print(USAGE)
        return 0

    # Qt is only needed once there is something to show
    from PySide6.QtWidgets import QApplication
    from wavepeek.theme import apply_style
    from wavepeek.viewer import PeakViewer

    app = QApplication.instance() or QApplication(sys.argv[:1])
    apply_style(app, settings.style)

    try:
        viewer = PeakViewer(store, settings, file_path=args.audio_file)
    except WavePeekError as e:
        logger.error("%s", e)
        print(USAGE)
        return 0

    viewer.finished.connect(app.quit)
    viewer.start()
    app.exec()

    if viewer.last_error is not None:
        logger.error("Stopped after render failure: %s", viewer.last_error)
    return 0


if __name__ == "__main__":
    sys.exit(main())
