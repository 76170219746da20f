"""
Weighted Distribution Computer
==============================

Turns an intensity histogram into the cumulative weighted distribution
(cdf_w) that drives the per-level gamma exponent.

    pdf[i]   = histogram[i] / total
    pdf_w[i] = pdf_max * ((pdf[i] - pdf_min) / (pdf_max - pdf_min)) ** alpha
    cdf_w[i] = sum(pdf_w[:i + 1]) / sum(pdf_w)

pdf_min and pdf_max are taken over all 256 levels, empty ones included.
Raising the normalised deviation to ``alpha`` damps the influence of
histogram spikes compared to plain histogram equalisation.
"""

import logging

import numpy as np

from .histogram import LEVELS

logger = logging.getLogger(__name__)


def _validate_histogram(histogram) -> np.ndarray:
    hist = np.asarray(histogram)
    if hist.shape != (LEVELS,):
        raise ValueError(f"Histogram must have {LEVELS} entries, got shape {hist.shape}")
    if np.any(hist < 0):
        raise ValueError("Histogram counts must be non-negative")
    return hist.astype(np.float64)


def probability_distribution(histogram) -> np.ndarray:
    """pdf over 256 levels; all zeros for an empty histogram."""
    hist = _validate_histogram(histogram)
    total = hist.sum()
    if total == 0:
        return np.zeros(LEVELS, dtype=np.float64)
    return hist / total


def weighting_distribution(pdf: np.ndarray, alpha: float) -> np.ndarray:
    """
    Reweight ``pdf`` with exponent ``alpha``.

    When every level has the same probability (max == min) there is no
    range to normalise against and the unweighted pdf is returned.
    """
    pdf_max = float(pdf.max())
    pdf_min = float(pdf.min())
    if pdf_max == pdf_min:
        logger.debug("Flat pdf, skipping weighting")
        return pdf.copy()

    normalized = (pdf - pdf_min) / (pdf_max - pdf_min)
    return pdf_max * np.power(normalized, alpha)


def weighted_cdf(histogram, alpha: float) -> np.ndarray:
    """
    Cumulative weighted distribution for ``histogram``.

    Args:
        histogram: 256 non-negative counts
        alpha: Weighting exponent (> 0)

    Returns:
        float64 array of 256 non-decreasing values in [0, 1]. All zeros
        for an empty histogram, which maps to gamma 1 (identity) downstream.
    """
    pdf = probability_distribution(histogram)
    if not pdf.any():
        logger.debug("Empty histogram, using identity distribution")
        return np.zeros(LEVELS, dtype=np.float64)

    pdf_w = weighting_distribution(pdf, alpha)
    cumulative = np.cumsum(pdf_w)
    # the most populated level keeps pdf_w == pdf_max > 0
    sum_w = cumulative[-1]

    cdf_w = cumulative / sum_w
    # cumsum rounding can leave the last entry a hair off 1.0
    cdf_w[-1] = 1.0

    logger.debug(
        f"Weighted pdf: min={pdf.min():.6f} max={pdf.max():.6f} "
        f"sum_w={sum_w:.6f} alpha={alpha}"
    )
    return np.clip(cdf_w, 0.0, 1.0)
