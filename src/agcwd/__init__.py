"""
AGCWD - Adaptive Gamma Correction with Weighting Distribution.

Histogram-driven global gamma correction for 8-bit RGB/RGBA pixel
buffers, applied in place.
"""

__version__ = "0.1.0"

from .distribution import weighted_cdf
from .enhancer import (
    DEFAULT_ALPHA,
    Agcwd,
    AgcwdConfig,
    enhance_rgb_image,
    enhance_rgba_image,
)
from .errors import AgcwdError, InvalidConfigurationError, MalformedBufferError
from .histogram import build_histogram
from .mapping import build_mapping_table

__all__ = [
    "Agcwd",
    "AgcwdConfig",
    "DEFAULT_ALPHA",
    "enhance_rgb_image",
    "enhance_rgba_image",
    "build_histogram",
    "weighted_cdf",
    "build_mapping_table",
    "AgcwdError",
    "InvalidConfigurationError",
    "MalformedBufferError",
]
