"""Tests for texture construction, the mipmap pyramid and sampling."""

import numpy as np
import pytest
from PIL import Image

from raytracer.color import BLACK, WHITE, rgb
from raytracer.texture import Texture, next_pow2


def gradient(width, height):
    """Texture whose red channel encodes x and green channel encodes y."""
    pixels = np.zeros((height, width, 3))
    pixels[..., 0] = np.arange(width)[None, :] / width
    pixels[..., 1] = np.arange(height)[:, None] / height
    return pixels


class TestLayout:
    @pytest.mark.parametrize("n, expected", [(1, 1), (2, 2), (3, 4), (5, 8), (64, 64), (100, 128)])
    def test_next_pow2(self, n, expected):
        assert next_pow2(n) == expected

    def test_packed_buffer_dimensions(self):
        texture = Texture(gradient(5, 3))
        assert texture.dimension == 8
        assert texture.fullwidth == 12
        assert texture.pixels.shape == (8, 12, 3)
        assert texture.levels == 4

    def test_levels_for_power_of_two(self):
        assert Texture(gradient(256, 256)).levels == 9

    def test_level_zero_is_source_image(self):
        source = gradient(5, 3)
        np.testing.assert_array_equal(Texture(source).level(0), source)

    def test_levels_halve_down_to_one_texel(self):
        texture = Texture(gradient(8, 8))
        shapes = [texture.level(k).shape[:2] for k in range(texture.levels)]
        assert shapes == [(8, 8), (4, 4), (2, 2), (1, 1)]

    def test_buffer_is_read_only(self, checkerboard):
        with pytest.raises(ValueError):
            checkerboard.pixels[0, 0] = rgb(0.5, 0.5, 0.5)

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            Texture(np.zeros((4, 4)))

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            Texture(np.zeros((0, 4, 3)))


class TestMipmap:
    def test_box_filter_averages_four_texels(self):
        source = np.array(
            [
                [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
                [[0.0, 0.0, 1.0], [1.0, 1.0, 1.0]],
            ]
        )
        texture = Texture(source)
        np.testing.assert_allclose(texture.level(1)[0, 0], [0.5, 0.5, 0.5])

    def test_checkerboard_mip_converges_to_mean(self):
        texture = Texture.checkerboard(2, 2, 4, WHITE, BLACK)
        np.testing.assert_allclose(texture.level(texture.levels - 1)[0, 0], [0.5, 0.5, 0.5])

    def test_one_texel_blocks_average_at_level_one(self):
        texture = Texture.checkerboard(4, 4, 1, WHITE, BLACK)
        np.testing.assert_allclose(texture.level(1), np.full((2, 2, 3), 0.5))

    def test_levels_do_not_overlap_level_zero(self):
        texture = Texture(np.ones((8, 8, 3)))
        np.testing.assert_array_equal(texture.level(0), 1.0)
        # Bottom row of the mip column is never used by an 8x8 pyramid
        np.testing.assert_array_equal(texture.pixels[7, 8:], 0.0)
        for k in range(1, texture.levels):
            np.testing.assert_allclose(texture.level(k), 1.0)

    def test_checkerboard_is_deterministic(self):
        a = Texture.checkerboard(2, 2, 100, WHITE, BLACK)
        b = Texture.checkerboard(2, 2, 100, WHITE, BLACK)
        assert a.pixels.tobytes() == b.pixels.tobytes()

    def test_single_texel_texture(self):
        texture = Texture([[[0.2, 0.4, 0.6]]])
        assert texture.levels == 1
        np.testing.assert_allclose(texture.color((0.7, 0.1)), [0.2, 0.4, 0.6])


class TestSampling:
    def test_checkerboard_quadrants(self, checkerboard):
        np.testing.assert_array_equal(checkerboard.color((0.1, 0.1)), WHITE)
        np.testing.assert_array_equal(checkerboard.color((0.6, 0.1)), BLACK)
        np.testing.assert_array_equal(checkerboard.color((0.1, 0.6)), BLACK)
        np.testing.assert_array_equal(checkerboard.color((0.6, 0.6)), WHITE)

    def test_uv_wraps(self, checkerboard):
        np.testing.assert_array_equal(checkerboard.color((1.1, -0.9)), checkerboard.color((0.1, 0.1)))

    def test_tiling_repeats_texture(self, checkerboard):
        # Tiling 2 maps u=0.3 to 0.6 of the texture
        np.testing.assert_array_equal(checkerboard.color((0.3, 0.05), (2.0, 1.0)), BLACK)

    def test_uv_just_below_one_stays_in_range(self):
        texture = Texture(gradient(3, 3))
        np.testing.assert_allclose(texture.color((0.9999999999999999, 0.0)), [2.0 / 3.0, 0.0, 0.0])

    def test_bilinear_at_texel_corner_is_exact(self):
        texture = Texture(gradient(4, 4))
        np.testing.assert_allclose(texture.bilinear_filtered_color((0.25, 0.5)), [0.25, 0.5, 0.0])

    def test_bilinear_interpolates_between_texels(self):
        texture = Texture(gradient(4, 4))
        np.testing.assert_allclose(texture.bilinear_filtered_color((0.375, 0.0)), [0.375, 0.0, 0.0])

    def test_bilinear_wraps_at_edge(self):
        texture = Texture(gradient(4, 1))
        # Halfway between the last texel (0.75) and the first (0.0)
        np.testing.assert_allclose(texture.bilinear_filtered_color((0.875, 0.0)), [0.375, 0.0, 0.0])

    def test_bilinear_ignores_mip_levels_beside_image(self):
        # A 3-wide image in a 4x6 buffer: wrapping must skip the unused column
        pixels = np.zeros((3, 3, 3))
        pixels[:, 0] = rgb(1.0, 1.0, 1.0)
        texture = Texture(pixels)
        color = texture.bilinear_filtered_color((2.5 / 3.0, 0.0))
        np.testing.assert_allclose(color, [0.5, 0.5, 0.5])


class TestImages:
    def test_from_image(self, tmp_path):
        path = tmp_path / "tex.png"
        data = np.zeros((2, 3, 3), dtype=np.uint8)
        data[0, 0] = [255, 0, 0]
        data[1, 2] = [0, 0, 255]
        Image.fromarray(data).save(path)

        texture = Texture.from_image(path)
        assert (texture.width, texture.height) == (3, 2)
        np.testing.assert_allclose(texture.level(0)[0, 0], [1.0, 0.0, 0.0])
        np.testing.assert_allclose(texture.level(0)[1, 2], [0.0, 0.0, 1.0])

    def test_from_image_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Texture.from_image(tmp_path / "missing.png")

    def test_save_writes_packed_buffer(self, tmp_path, checkerboard):
        path = tmp_path / "mipmap.png"
        checkerboard.save(path)
        with Image.open(path) as image:
            assert image.size == (checkerboard.fullwidth, checkerboard.dimension)

    def test_checkerboard_rejects_bad_sizes(self):
        with pytest.raises(ValueError):
            Texture.checkerboard(0, 2, 4, WHITE, BLACK)
