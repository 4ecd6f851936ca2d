"""Common test fixtures and utilities for WavePeek tests."""

import os
from pathlib import Path
from typing import Callable, Optional, Sequence

import numpy as np
import pytest
import soundfile as sf

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from wavepeek.data_model import AudioFormat
from wavepeek.sample_store import SampleStore

STEREO_16 = AudioFormat(channels=2, bits_per_sample=16, sample_rate=8000)


def make_store(left: Sequence[int], right: Optional[Sequence[int]] = None) -> SampleStore:
    """Build a stereo store; the right channel defaults to a copy of the left."""
    if right is None:
        right = left
    return SampleStore.from_channels(STEREO_16, [left, right])


def sine_channels(total: int, periods: float = 8.0, amplitude: int = 20000) -> np.ndarray:
    """(total, 2) int16 array: a sine on the left, a quieter inverted sine on the right."""
    t = np.arange(total) / total
    left = amplitude * np.sin(2 * np.pi * periods * t)
    right = -0.5 * left
    return np.stack([left, right], axis=1).astype(np.int16)


@pytest.fixture
def stereo_store() -> SampleStore:
    data = sine_channels(48000)
    return make_store(data[:, 0], data[:, 1])


@pytest.fixture
def write_wav(tmp_path: Path) -> Callable[..., Path]:
    """Write a WAV file into tmp_path and return its path."""
    def _write(data: np.ndarray, name: str = "test.wav", samplerate: int = 8000,
               subtype: str = "PCM_16") -> Path:
        path = tmp_path / name
        sf.write(str(path), data, samplerate, subtype=subtype)
        return path
    return _write


@pytest.fixture
def stereo_wav(write_wav) -> Path:
    return write_wav(sine_channels(8000))
