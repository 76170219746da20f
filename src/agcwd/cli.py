"""
AGCWD demo command
==================

Read an 8-bit image, enhance it, write the result.

Usage:
    agcwd-enhance photo.png
    agcwd-enhance photo.png --output-path out.png --alpha 0.75
    python -m agcwd.cli photo.jpg -v
"""

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from .enhancer import DEFAULT_ALPHA, Agcwd

logger = logging.getLogger(__name__)

# OpenCV order -> core order, and back
_TO_RGB = {3: cv2.COLOR_BGR2RGB, 4: cv2.COLOR_BGRA2RGBA}
_FROM_RGB = {3: cv2.COLOR_RGB2BGR, 4: cv2.COLOR_RGBA2BGRA}


def load_image(path: Path) -> np.ndarray:
    """Load an 8-bit RGB or RGBA image as a contiguous RGB(A) array."""
    try:
        img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        raise ValueError(f"Failed to load image: {path} ({e})") from e
    if img is None:
        raise ValueError(f"Failed to load image: {path}")
    if img.dtype != np.uint8:
        raise ValueError(f"Unsupported bit depth: {img.dtype} (expected 8-bit)")
    if img.ndim != 3 or img.shape[2] not in _TO_RGB:
        raise ValueError(f"Unsupported color layout: shape {img.shape}")

    return np.ascontiguousarray(cv2.cvtColor(img, _TO_RGB[img.shape[2]]))


def save_image(path: Path, pixels: np.ndarray) -> None:
    out = cv2.cvtColor(pixels, _FROM_RGB[pixels.shape[2]])
    try:
        written = cv2.imwrite(str(path), out)
    except cv2.error as e:
        raise ValueError(f"Failed to write image: {path} ({e})") from e
    if not written:
        raise ValueError(f"Failed to write image: {path}")


def enhance_file(input_path: Path, output_path: Path, alpha: float = DEFAULT_ALPHA) -> float:
    """Enhance ``input_path`` into ``output_path``. Returns elapsed seconds."""
    enhancer = Agcwd(alpha)

    pixels = load_image(input_path)
    height, width, channels = pixels.shape
    logger.info(f"Image resolution: {width}x{height}")
    logger.info(f"Image color type: {'RGBA' if channels == 4 else 'RGB'}")

    start = time.time()
    enhancer.enhance(pixels, channels=channels)
    elapsed = time.time() - start
    logger.info(f"Elapsed: {elapsed * 1000:.1f}ms")

    save_image(output_path, pixels)
    logger.info(f"Output path: {output_path}")
    return elapsed


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Adaptive gamma correction with weighting distribution (AGCWD)"
    )
    parser.add_argument("image_path", type=Path, help="Input image (8-bit PNG/JPEG)")
    parser.add_argument("--output-path", "-o", type=Path, default=Path("enhanced.png"),
                        help="Output image (default: enhanced.png)")
    parser.add_argument("--alpha", "-a", type=float, default=DEFAULT_ALPHA,
                        help=f"Weighting exponent, > 0 (default: {DEFAULT_ALPHA})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        enhance_file(args.image_path, args.output_path, args.alpha)
    except ValueError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
