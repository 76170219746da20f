import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


def create_test_image(width=64, height=48, scene='dark'):
    """Create synthetic RGB test image (row-major, RGB order)"""
    img = np.zeros((height, width, 3), dtype=np.uint8)

    if scene == 'dark':
        # Underexposed room with a small bright window
        img[:, :] = [40, 35, 30]
        img[int(height * 0.7):, :] = [20, 18, 15]
        img[2:10, width - 12:width - 2] = [230, 235, 240]

    elif scene == 'gradient':
        for x in range(width):
            v = int(x / max(1, width - 1) * 255)
            img[:, x] = [v, v // 2, v // 3]

    elif scene == 'spike':
        # One dominant level plus a sparse ramp
        img[:, :] = [90, 60, 30]
        for x in range(0, width, 4):
            v = int(x / width * 255)
            img[0, x] = [v, v, v]

    return img


@pytest.fixture
def dark_image():
    return create_test_image(scene='dark')


@pytest.fixture
def gradient_image():
    return create_test_image(scene='gradient')


@pytest.fixture
def spike_image():
    return create_test_image(scene='spike')
