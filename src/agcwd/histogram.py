"""
Histogram Builder
=================

Views a caller-owned pixel buffer as an (N, channels) uint8 array and
counts pixel intensities into 256 buckets.

Intensity is the max of the colour channels (the V of HSV). For RGBA
buffers the alpha channel does not take part.
"""

import logging
from typing import Union

import numpy as np

from .errors import MalformedBufferError

logger = logging.getLogger(__name__)

LEVELS = 256
COLOR_CHANNELS = 3
SUPPORTED_CHANNELS = (3, 4)

PixelBuffer = Union[bytearray, memoryview, np.ndarray]


def pixel_view(buffer: PixelBuffer, channels: int = 3) -> np.ndarray:
    """
    Return a writable (N, channels) uint8 view over ``buffer``.

    No data is copied, so writes through the view land in the caller's
    buffer. Raises MalformedBufferError when that is impossible.
    """
    if channels not in SUPPORTED_CHANNELS:
        raise MalformedBufferError(
            f"Unsupported channel count: {channels} (expected 3 or 4)"
        )

    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise MalformedBufferError(f"Expected uint8 pixels, got {buffer.dtype}")
        if not buffer.flags.c_contiguous:
            raise MalformedBufferError("Pixel array must be C-contiguous")
        if buffer.ndim == 3 and buffer.shape[-1] != channels:
            raise MalformedBufferError(
                f"Image has {buffer.shape[-1]} channels, expected {channels}"
            )
        flat = buffer.reshape(-1)
    else:
        try:
            view = memoryview(buffer)
        except TypeError as e:
            raise MalformedBufferError(
                f"Object of type {type(buffer).__name__} does not expose a buffer"
            ) from e
        if view.itemsize != 1:
            raise MalformedBufferError(
                f"Expected 8-bit samples, got {view.itemsize}-byte items"
            )
        if not view.c_contiguous:
            raise MalformedBufferError("Pixel buffer must be contiguous")
        if view.nbytes == 0:
            flat = np.zeros(0, dtype=np.uint8)
        else:
            flat = np.frombuffer(view.cast("B"), dtype=np.uint8)

    if flat.size % channels != 0:
        raise MalformedBufferError(
            f"Buffer length {flat.size} is not a multiple of {channels} channels"
        )

    return flat.reshape(-1, channels)


def intensities(pixels: np.ndarray) -> np.ndarray:
    """Per-pixel intensity: max over the colour channels."""
    return pixels[:, :COLOR_CHANNELS].max(axis=1)


def build_histogram(buffer: PixelBuffer, channels: int = 3) -> np.ndarray:
    """
    Count pixels per intensity level.

    Args:
        buffer: Packed 8-bit pixel data in RGB(A) order
        channels: 3 for RGB, 4 for RGBA

    Returns:
        int64 array of 256 counts summing to the pixel count
    """
    pixels = pixel_view(buffer, channels)
    if pixels.shape[0] == 0:
        return np.zeros(LEVELS, dtype=np.int64)

    histogram = np.bincount(intensities(pixels), minlength=LEVELS).astype(np.int64)

    logger.debug(
        f"Histogram: {pixels.shape[0]} pixels, "
        f"{int(np.count_nonzero(histogram))} populated levels"
    )
    return histogram
