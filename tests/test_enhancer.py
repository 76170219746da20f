"""Tests for the AGCWD enhancer (end to end)."""

import numpy as np
import pytest

from agcwd import (
    DEFAULT_ALPHA,
    Agcwd,
    AgcwdConfig,
    InvalidConfigurationError,
    MalformedBufferError,
    enhance_rgb_image,
    enhance_rgba_image,
)
from agcwd.enhancer import apply_mapping


class TestConfig:

    @pytest.mark.parametrize("alpha", [0, -0.5, float('nan'), float('inf'), True, "0.5", None])
    def test_rejects_invalid_alpha(self, alpha):
        with pytest.raises(InvalidConfigurationError):
            Agcwd(alpha)

    @pytest.mark.parametrize("alpha", [np.float32(0.5), np.float64(0.25), np.int64(2)])
    def test_numpy_scalar_alpha(self, alpha):
        enhancer = Agcwd(alpha)

        assert type(enhancer.alpha) is float
        assert enhancer.alpha == pytest.approx(float(alpha))

    def test_int_alpha_coerced(self):
        assert AgcwdConfig(alpha=2).alpha == 2.0

    def test_config_is_frozen(self):
        config = AgcwdConfig(alpha=0.5)
        with pytest.raises(Exception):
            config.alpha = 1.0

    def test_with_defaults(self):
        assert Agcwd.with_defaults().alpha == DEFAULT_ALPHA == 0.5

    def test_invalid_alpha_is_value_error(self):
        with pytest.raises(ValueError):
            Agcwd(-1)


class TestEnhance:

    def test_two_pixel_example(self):
        buf = bytearray([0, 1, 2, 3, 4, 5])
        Agcwd(0.5).enhance_rgb_image(buf)

        assert len(buf) == 6
        assert list(buf) == [0, 12, 23, 152, 203, 254]
        assert max(buf[3:]) >= max(buf[:3])

    def test_deterministic(self, dark_image):
        a = dark_image.copy()
        b = dark_image.copy()
        Agcwd(0.5).enhance(a)
        Agcwd(0.5).enhance(b)

        np.testing.assert_array_equal(a, b)

    def test_pure_black_unchanged(self):
        buf = bytearray(3 * 100)
        Agcwd(0.5).enhance_rgb_image(buf)
        assert buf == bytearray(300)

    def test_empty_buffer(self):
        buf = bytearray()
        Agcwd(0.5).enhance_rgb_image(buf)
        assert buf == bytearray()

    def test_not_idempotent(self):
        once = bytearray([0, 1, 2, 3, 4, 5])
        enhancer = Agcwd(0.5)
        enhancer.enhance_rgb_image(once)

        twice = bytearray(once)
        enhancer.enhance_rgb_image(twice)

        assert twice != once

    def test_brightens_dark_image(self, dark_image):
        out = dark_image.copy()
        Agcwd(0.5).enhance(out)

        assert out.shape == dark_image.shape
        assert out.dtype == np.uint8
        assert out.mean() > dark_image.mean()

    def test_channel_ratios_preserved(self, gradient_image):
        out = gradient_image.copy()
        Agcwd(0.5).enhance(out)

        before = gradient_image.reshape(-1, 3).astype(np.float64)
        after = out.reshape(-1, 3).astype(np.float64)
        lit = before.max(axis=1) > 0

        expected = before[lit] * (after[lit].max(axis=1) / before[lit].max(axis=1))[:, None]
        assert np.all(np.abs(after[lit] - expected) <= 1.0)

    def test_in_place_on_memoryview(self):
        buf = bytearray([0, 1, 2, 3, 4, 5])
        Agcwd(0.5).enhance(memoryview(buf))
        assert list(buf) == [0, 12, 23, 152, 203, 254]

    def test_malformed_buffer_untouched(self):
        buf = bytearray([10, 20, 30, 40])
        with pytest.raises(MalformedBufferError):
            Agcwd(0.5).enhance_rgb_image(buf)
        assert buf == bytearray([10, 20, 30, 40])

    def test_rgba_array_needs_rgba_channels(self):
        img = np.zeros((3, 1, 4), dtype=np.uint8)
        img[:, :, :3] = [[10, 20, 30]]
        img[:, :, 3] = 77
        before = img.copy()

        with pytest.raises(MalformedBufferError):
            Agcwd(0.5).enhance(img)
        np.testing.assert_array_equal(img, before)

        Agcwd(0.5).enhance(img, channels=4)
        assert np.all(img[:, :, 3] == 77)

    def test_read_only_rejected(self):
        with pytest.raises(MalformedBufferError):
            Agcwd(0.5).enhance_rgb_image(bytes([1, 2, 3]))

    def test_read_only_array_rejected(self, dark_image):
        dark_image.flags.writeable = False
        with pytest.raises(MalformedBufferError):
            Agcwd(0.5).enhance(dark_image)

    def test_mapping_table_does_not_mutate(self, dark_image):
        original = dark_image.copy()
        table = Agcwd(0.5).mapping_table(dark_image)

        assert table.shape == (256,)
        np.testing.assert_array_equal(dark_image, original)


class TestRgba:

    def test_alpha_channel_preserved(self):
        buf = bytearray([0, 1, 2, 17, 3, 4, 5, 200])
        Agcwd(0.5).enhance_rgba_image(buf)

        assert list(buf) == [0, 12, 23, 17, 152, 203, 254, 200]

    def test_rgba_matches_rgb(self, dark_image):
        h, w, _ = dark_image.shape
        rgba = np.dstack([dark_image, np.full((h, w), 128, dtype=np.uint8)])
        rgb = dark_image.copy()

        enhance_rgb_image(rgb)
        enhance_rgba_image(rgba)

        np.testing.assert_array_equal(rgba[:, :, :3], rgb)
        assert np.all(rgba[:, :, 3] == 128)


def test_apply_mapping_identity_table(dark_image):
    pixels = dark_image.reshape(-1, 3).copy()
    apply_mapping(pixels, np.arange(256, dtype=np.uint8))

    np.testing.assert_array_equal(pixels, dark_image.reshape(-1, 3))


def test_repr():
    assert repr(Agcwd(0.25)) == "Agcwd(alpha=0.25)"
