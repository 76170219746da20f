"""
Gamma Mapping Table Builder
===========================

Per-level gamma from the weighted CDF, then a 256-entry lookup table:

    gamma[i] = max(1 - cdf_w[i], GAMMA_FLOOR)
    table[i] = round(255 * (i / 255) ** gamma[i])

cdf_w is non-decreasing, so gamma is non-increasing and the table comes
out non-decreasing. check_monotonic() verifies it rather than assuming.
"""

import logging

import numpy as np

from .histogram import LEVELS

logger = logging.getLogger(__name__)

# A zero exponent would send every level (even 0) to 255
GAMMA_FLOOR = 1e-3

MAX_LEVEL = LEVELS - 1


def gamma_exponents(cdf_w: np.ndarray) -> np.ndarray:
    """Gamma exponent per intensity level."""
    cdf_w = np.asarray(cdf_w, dtype=np.float64)
    if cdf_w.shape != (LEVELS,):
        raise ValueError(f"cdf_w must have {LEVELS} entries, got shape {cdf_w.shape}")
    return np.maximum(1.0 - cdf_w, GAMMA_FLOOR)


def build_mapping_table(cdf_w: np.ndarray) -> np.ndarray:
    """
    Old intensity -> new intensity lookup table.

    Args:
        cdf_w: Cumulative weighted distribution (256 values in [0, 1])

    Returns:
        uint8 array of 256 entries
    """
    gamma = gamma_exponents(cdf_w)
    levels = np.arange(LEVELS, dtype=np.float64) / MAX_LEVEL
    curve = np.power(levels, gamma) * MAX_LEVEL
    table = np.clip(np.floor(curve + 0.5), 0, MAX_LEVEL).astype(np.uint8)

    if not check_monotonic(table):
        logger.warning("Mapping table is not monotonic")
    return table


def check_monotonic(table: np.ndarray) -> bool:
    """True when table[i] <= table[i + 1] for every level."""
    return bool(np.all(np.diff(table.astype(np.int16)) >= 0))
