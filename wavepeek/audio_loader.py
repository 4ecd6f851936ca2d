"""Helper functions to decode audio files into a SampleStore."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

import soundfile as sf

from .data_model import AudioFormat, SampleFormat
from .errors import AudioLoadError
from .sample_store import SampleStore, validate_format

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# libsndfile subtype -> (bits per sample, sample format)
_SUBTYPE_MAP = {
    'PCM_S8': (8, SampleFormat.INT),
    'PCM_U8': (8, SampleFormat.INT),
    'PCM_16': (16, SampleFormat.INT),
    'PCM_24': (24, SampleFormat.INT),
    'PCM_32': (32, SampleFormat.INT),
    'FLOAT': (32, SampleFormat.FLOAT),
    'DOUBLE': (64, SampleFormat.FLOAT),
}


def read_audio_format(path: PathLike) -> AudioFormat:
    """Read the header of an audio file without decoding its samples."""
    try:
        info = sf.info(str(path))
    except (sf.LibsndfileError, RuntimeError, OSError) as e:
        raise AudioLoadError(f"Cannot open audio file '{path}': {e}") from e

    bits, sample_format = _SUBTYPE_MAP.get(info.subtype, (0, SampleFormat.INT))
    return AudioFormat(
        channels=info.channels,
        bits_per_sample=bits,
        sample_format=sample_format,
        sample_rate=info.samplerate,
    )


def load_sample_store(path: PathLike) -> SampleStore:
    """Decode a stereo 16-bit PCM file into a SampleStore.

    The header is validated before any sample is read, so unsupported files
    are rejected without decoding them.

    Raises:
        AudioLoadError: The file is missing or unreadable.
        UnsupportedFormatError: The file is not stereo 16-bit integer PCM.
        MalformedInputError: The file contains no samples.
    """
    if not os.path.isfile(path):
        raise AudioLoadError(f"Audio file not found: {path}")

    fmt = read_audio_format(path)
    validate_format(fmt)

    try:
        data, _ = sf.read(str(path), dtype='int16', always_2d=True)
    except (sf.LibsndfileError, RuntimeError, OSError) as e:
        raise AudioLoadError(f"Failed to decode '{path}': {e}") from e

    store = SampleStore.from_channels(fmt, [data[:, ch] for ch in range(data.shape[1])])
    logger.info(
        "Loaded %s: %d samples, %d Hz, %.2f s",
        os.path.basename(str(path)), store.total_samples, fmt.sample_rate, store.duration_seconds,
    )
    return store
