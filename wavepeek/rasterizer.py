"""Peak waveform rasterizer.

Reduces a run of signed 16-bit samples into a monochrome pixel buffer. The
sample slice is split into one chunk per pixel column, the peak absolute
amplitude of each chunk is scaled against full scale, and a vertically
centered bar of that height is drawn in the column.

Chunk i covers samples [i * L // W, (i + 1) * L // W), so a sample count
that is not a multiple of the width is spread evenly over the columns instead
of producing a short last chunk.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from . import config
from .errors import DegenerateGeometryError

RENDERING = config.RENDERING
MAX_AMPLITUDE = RENDERING.MAX_AMPLITUDE
PIXEL_ON = RENDERING.PIXEL_ON
PIXEL_OFF = RENDERING.PIXEL_OFF


class RenderScratch:
    """Per-column work arrays shared by every render of one width.

    Kept next to the pixel buffer so a frame only writes into memory that
    was allocated up front.
    """

    def __init__(self, width: int) -> None:
        self.width = width
        self.columns = np.arange(width, dtype=np.int64)
        self.starts = np.empty(width, dtype=np.int64)
        self.highs = np.empty(width, dtype=np.int16)
        self.lows = np.empty(width, dtype=np.int16)
        self.peaks = np.empty(width, dtype=np.int32)
        self.bars = np.empty(width, dtype=np.int64)
        self.tops = np.empty(width, dtype=np.int64)


class PixelBuffer:
    """Row-major width x height grid of PIXEL_ON / PIXEL_OFF values.

    Allocated once; renders overwrite the pixels in place.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise DegenerateGeometryError(f"Pixel buffer must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.full((height, width), PIXEL_OFF, dtype=np.uint8)
        self.scratch = RenderScratch(width)

    def clear(self) -> None:
        self.pixels.fill(PIXEL_OFF)

    def upper_half(self) -> np.ndarray:
        return self.pixels[: self.height // 2]

    def lower_half(self) -> np.ndarray:
        return self.pixels[self.height // 2:]

    def column(self, x: int) -> np.ndarray:
        return self.pixels[:, x]

    def on_count(self) -> int:
        return int(np.count_nonzero(self.pixels == PIXEL_ON))

    def copy_pixels(self) -> np.ndarray:
        return self.pixels.copy()


def _scratch_for(width: int, scratch: Optional[RenderScratch]) -> RenderScratch:
    if scratch is None:
        return RenderScratch(width)
    if scratch.width != width:
        raise DegenerateGeometryError(f"Scratch arrays are {scratch.width} wide, render needs {width}")
    return scratch


def chunk_bounds(length: int, width: int, scratch: Optional[RenderScratch] = None) -> np.ndarray:
    """Start index of each of the `width` chunks of a `length`-sample slice."""
    s = _scratch_for(width, scratch)
    np.multiply(s.columns, length, out=s.starts)
    np.floor_divide(s.starts, width, out=s.starts)
    return s.starts


def column_peaks(samples: np.ndarray, width: int,
                 scratch: Optional[RenderScratch] = None) -> np.ndarray:
    """Peak absolute amplitude of each column's chunk, clamped to MAX_AMPLITUDE.

    Max/min reductions run on the int16 data; the result is widened to int32
    before negating so abs(-32768) does not wrap.
    """
    if width < 1:
        raise DegenerateGeometryError(f"Width must be at least 1, got {width}")
    if len(samples) < width:
        raise DegenerateGeometryError(
            f"{len(samples)} samples cannot fill {width} columns")

    s = _scratch_for(width, scratch)
    samples = np.asarray(samples, dtype=np.int16)
    starts = chunk_bounds(len(samples), width, s)
    np.maximum.reduceat(samples, starts, out=s.highs)
    np.minimum.reduceat(samples, starts, out=s.lows)

    peaks = s.peaks
    np.copyto(peaks, s.lows)
    np.negative(peaks, out=peaks)
    np.maximum(peaks, s.highs, out=peaks)
    np.minimum(peaks, MAX_AMPLITUDE, out=peaks)
    return peaks


def bar_heights(peaks: np.ndarray, height: int, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Scale peaks linearly so MAX_AMPLITUDE spans the full height."""
    if out is None:
        out = np.empty(len(peaks), dtype=np.int64)
    np.multiply(peaks, height, out=out, dtype=np.int64)
    np.floor_divide(out, MAX_AMPLITUDE, out=out)
    return out


def render_into(samples: np.ndarray, target: np.ndarray,
                scratch: Optional[RenderScratch] = None) -> None:
    """Render one channel into a 2-D (rows x columns) view of a pixel buffer.

    The target is cleared first, then every column gets a bar of
    peak * rows // 32767 pixels starting at row (rows - bar) // 2.
    Input samples are not modified.
    """
    if target.ndim != 2:
        raise DegenerateGeometryError(f"Render target must be 2-D, got {target.ndim}-D")
    rows, width = target.shape
    if rows < 1 or width < 1:
        raise DegenerateGeometryError(f"Render target must be at least 1x1, got {width}x{rows}")

    s = _scratch_for(width, scratch)
    bars = bar_heights(column_peaks(samples, width, s), rows, out=s.bars)
    tops = s.tops
    np.subtract(rows, bars, out=tops)
    np.floor_divide(tops, 2, out=tops)

    target.fill(PIXEL_OFF)
    for x in range(width):
        bar = bars[x]
        if bar:
            top = tops[x]
            target[top:top + bar, x] = PIXEL_ON


def render(samples: np.ndarray, width: int, height: int,
           out: Optional[PixelBuffer] = None) -> PixelBuffer:
    """Render a single channel into a width x height buffer.

    Args:
        samples: int16 samples of the visible range
        width: Number of pixel columns
        height: Number of pixel rows
        out: Existing buffer to overwrite; a new one is allocated if None

    Returns:
        The rendered PixelBuffer
    """
    buffer = _checked_buffer(width, height, out)
    render_into(samples, buffer.pixels, buffer.scratch)
    return buffer


def render_stereo(left: np.ndarray, right: np.ndarray, width: int, height: int,
                  out: Optional[PixelBuffer] = None) -> PixelBuffer:
    """Render channel 1 into the upper half and channel 2 into the lower half."""
    if height < 2:
        raise DegenerateGeometryError(f"Stereo rendering needs at least 2 rows, got {height}")
    if min(len(left), len(right)) < width:
        raise DegenerateGeometryError(
            f"{min(len(left), len(right))} samples cannot fill {width} columns")
    buffer = _checked_buffer(width, height, out)
    render_into(left, buffer.upper_half(), buffer.scratch)
    render_into(right, buffer.lower_half(), buffer.scratch)
    return buffer


def _checked_buffer(width: int, height: int, out: Optional[PixelBuffer]) -> PixelBuffer:
    if width < 1 or height < 1:
        raise DegenerateGeometryError(f"Raster must be at least 1x1, got {width}x{height}")
    if out is None:
        return PixelBuffer(width, height)
    if (out.width, out.height) != (width, height):
        raise DegenerateGeometryError(
            f"Buffer is {out.width}x{out.height}, render requested {width}x{height}")
    return out
