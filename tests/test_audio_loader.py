"""Tests for decoding audio files with soundfile."""

import numpy as np
import pytest

from wavepeek.audio_loader import load_sample_store, read_audio_format
from wavepeek.data_model import SampleFormat
from wavepeek.errors import AudioLoadError, MalformedInputError, UnsupportedFormatError

from conftest import sine_channels


def test_load_stereo_16_bit(stereo_wav) -> None:
    store = load_sample_store(stereo_wav)
    expected = sine_channels(8000)
    assert store.total_samples == 8000
    assert store.sample_rate == 8000
    assert np.array_equal(store.channels[0], expected[:, 0])
    assert np.array_equal(store.channels[1], expected[:, 1])


def test_read_format(stereo_wav) -> None:
    fmt = read_audio_format(stereo_wav)
    assert fmt.channels == 2
    assert fmt.bits_per_sample == 16
    assert fmt.sample_format is SampleFormat.INT


def test_mono_file_rejected(write_wav) -> None:
    path = write_wav(sine_channels(1000)[:, 0], name="mono.wav")
    with pytest.raises(UnsupportedFormatError):
        load_sample_store(path)


def test_24_bit_file_rejected(write_wav) -> None:
    path = write_wav(sine_channels(1000), name="hires.wav", subtype="PCM_24")
    assert read_audio_format(path).bits_per_sample == 24
    with pytest.raises(UnsupportedFormatError):
        load_sample_store(path)


def test_float_file_rejected(write_wav) -> None:
    data = sine_channels(1000).astype(np.float32) / 32768.0
    path = write_wav(data, name="float.wav", subtype="FLOAT")
    assert read_audio_format(path).sample_format is SampleFormat.FLOAT
    with pytest.raises(UnsupportedFormatError):
        load_sample_store(path)


def test_empty_file_rejected(write_wav) -> None:
    path = write_wav(np.zeros((0, 2), dtype=np.int16), name="empty.wav")
    with pytest.raises(MalformedInputError):
        load_sample_store(path)


def test_missing_file(tmp_path) -> None:
    with pytest.raises(AudioLoadError):
        load_sample_store(tmp_path / "missing.wav")


def test_not_an_audio_file(tmp_path) -> None:
    path = tmp_path / "notes.wav"
    path.write_text("definitely not RIFF data")
    with pytest.raises(AudioLoadError):
        load_sample_store(path)
