"""
AGCWD Enhancer
==============

Adaptive Gamma Correction with Weighting Distribution.

Pipeline (one call = two passes over the pixels):
1. Histogram of per-pixel intensity (max of R, G, B)
2. Weighted cumulative distribution (exponent ``alpha``)
3. 256-entry gamma mapping table
4. Per-pixel remap: scale every colour channel by table[V] / V

The buffer is modified in place. Channel ratios are kept, so hue and
saturation survive while brightness follows the adaptive curve.

Usage:
    enhancer = Agcwd(alpha=0.5)
    enhancer.enhance_rgb_image(pixels)    # bytearray / uint8 ndarray
    enhancer.enhance_rgba_image(pixels)   # alpha channel left untouched
"""

import logging
import math
import numbers
from dataclasses import dataclass

import numpy as np

from .distribution import weighted_cdf
from .errors import InvalidConfigurationError, MalformedBufferError
from .histogram import (
    COLOR_CHANNELS,
    PixelBuffer,
    build_histogram,
    intensities,
    pixel_view,
)
from .mapping import MAX_LEVEL, build_mapping_table

logger = logging.getLogger(__name__)

# Weighting exponent used when none is given
DEFAULT_ALPHA = 0.5


# ============================================================================
# SETTINGS
# ============================================================================

@dataclass(frozen=True)
class AgcwdConfig:
    """Enhancer settings. ``alpha`` controls how hard rare levels are boosted."""
    alpha: float

    def __post_init__(self):
        alpha = self.alpha
        if isinstance(alpha, bool) or not isinstance(alpha, numbers.Real):
            raise InvalidConfigurationError(
                f"alpha must be a number, got {type(alpha).__name__}"
            )
        if not math.isfinite(alpha) or alpha <= 0:
            raise InvalidConfigurationError(f"alpha must be > 0, got {alpha}")
        object.__setattr__(self, "alpha", float(alpha))


# ============================================================================
# IMAGE ENHANCER
# ============================================================================

def apply_mapping(pixels: np.ndarray, table: np.ndarray) -> None:
    """
    Remap every pixel of an (N, channels) view through ``table`` in place.

    Black pixels (V == 0) are left alone. Channels beyond the first three
    (alpha) are never written.
    """
    if pixels.shape[0] == 0:
        return

    rgb = pixels[:, :COLOR_CHANNELS]
    v = intensities(pixels)
    new_v = table[v].astype(np.float64)

    scale = np.ones(v.shape, dtype=np.float64)
    lit = v > 0
    scale[lit] = new_v[lit] / v[lit]

    scaled = rgb.astype(np.float64) * scale[:, np.newaxis]
    rgb[...] = np.clip(np.floor(scaled + 0.5), 0, MAX_LEVEL).astype(np.uint8)


class Agcwd:
    """
    Adaptive gamma correction with a fixed weighting exponent.

    Instances hold no per-image state, so one enhancer can be shared
    and reused for any number of images.
    """

    def __init__(self, alpha: float):
        self.config = AgcwdConfig(alpha=alpha)

    @classmethod
    def with_defaults(cls) -> "Agcwd":
        """Enhancer using DEFAULT_ALPHA (0.5)."""
        return cls(DEFAULT_ALPHA)

    @property
    def alpha(self) -> float:
        return self.config.alpha

    def __repr__(self) -> str:
        return f"Agcwd(alpha={self.alpha})"

    def mapping_table(self, buffer: PixelBuffer, channels: int = 3) -> np.ndarray:
        """Run stages 1-3 and return the lookup table. ``buffer`` is not modified."""
        histogram = build_histogram(buffer, channels)
        cdf_w = weighted_cdf(histogram, self.alpha)
        return build_mapping_table(cdf_w)

    def enhance(self, buffer: PixelBuffer, channels: int = 3) -> None:
        """
        Enhance packed pixel data in place.

        Args:
            buffer: Writable 8-bit samples in RGB or RGBA order
            channels: 3 (RGB) or 4 (RGBA)

        Raises:
            MalformedBufferError: length not a multiple of ``channels``,
                unsupported layout, or read-only buffer. Raised before any
                pixel is written.
        """
        pixels = pixel_view(buffer, channels)
        if not pixels.flags.writeable:
            raise MalformedBufferError("Pixel buffer is read-only")

        histogram = build_histogram(pixels, channels)
        table = build_mapping_table(weighted_cdf(histogram, self.alpha))
        apply_mapping(pixels, table)

        logger.debug(f"Enhanced {pixels.shape[0]} pixels ({channels} channels, alpha={self.alpha})")

    def enhance_rgb_image(self, buffer: PixelBuffer) -> None:
        self.enhance(buffer, channels=3)

    def enhance_rgba_image(self, buffer: PixelBuffer) -> None:
        self.enhance(buffer, channels=4)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def enhance_rgb_image(buffer: PixelBuffer, alpha: float = DEFAULT_ALPHA) -> None:
    """One-shot RGB enhancement."""
    Agcwd(alpha).enhance_rgb_image(buffer)


def enhance_rgba_image(buffer: PixelBuffer, alpha: float = DEFAULT_ALPHA) -> None:
    """One-shot RGBA enhancement (alpha channel preserved)."""
    Agcwd(alpha).enhance_rgba_image(buffer)
