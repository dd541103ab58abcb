"""Tests for transform builders, camera transforms and colors.

This module tests rotations, translation, scale and perspective matrices,
the look-at camera and its viewport corrections, and packed color decoding.
"""

import sys
import unittest
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from tessermath.color import Rgb, decode_rgb, encode_rgb
from tessermath.errors import IndexOutOfRange
from tessermath.matrix import identity, transpose
from tessermath.multiplication import transform_chain
from tessermath.transform import (
    RotationPlane,
    perspective,
    pi,
    radians,
    rotation,
    scale,
    translation,
)
from tessermath.vector import vector3d, vector4d
from tessermath.view import aspect_ratio_correction, fov_x_scale, look_at, view


class TestRotation(unittest.TestCase):
    """Test rotation matrices."""

    def test_angles(self):
        self.assertAlmostEqual(radians(180.0), np.pi)
        self.assertAlmostEqual(pi(0.5), radians(90.0))

    def test_plane_axes(self):
        self.assertEqual(RotationPlane.AROUND_X.axes, (1, 2))
        self.assertEqual(RotationPlane.AROUND_Y.axes, (2, 0))
        self.assertEqual(RotationPlane.AROUND_Z.axes, (0, 1))
        self.assertEqual(RotationPlane.XQ.axes, (0, 3))

    def test_quarter_turn_around_z(self):
        rotated = vector3d(1.0, 0.0, 0.0) @ rotation(RotationPlane.AROUND_Z, radians(90.0))
        np.testing.assert_allclose(rotated, [0.0, 1.0, 0.0], atol=1e-12)

    def test_quarter_turn_around_x(self):
        rotated = vector3d(0.0, 1.0, 0.0) @ rotation(RotationPlane.AROUND_X, radians(90.0))
        np.testing.assert_allclose(rotated, [0.0, 0.0, 1.0], atol=1e-12)

    def test_quarter_turn_around_y(self):
        rotated = vector3d(0.0, 0.0, 1.0) @ rotation(RotationPlane.AROUND_Y, radians(90.0))
        np.testing.assert_allclose(rotated, [1.0, 0.0, 0.0], atol=1e-12)

    def test_xq_rotation_moves_x_into_q(self):
        rotated = vector4d(1.0, 0.0, 0.0, 0.0) @ rotation(RotationPlane.XQ, radians(90.0), size=5)
        np.testing.assert_allclose(rotated, [0.0, 0.0, 0.0, 1.0], atol=1e-12)

    def test_opposite_angles_cancel(self):
        angle = 0.7
        for plane in RotationPlane:
            with self.subTest(plane=plane.name):
                product = rotation(plane, angle, size=5) @ rotation(plane, -angle, size=5)
                np.testing.assert_allclose(product, np.eye(5), atol=1e-12)

    def test_inverse_is_transpose(self):
        angle = 1.3
        for plane in RotationPlane:
            with self.subTest(plane=plane.name):
                np.testing.assert_allclose(
                    rotation(plane, -angle), transpose(rotation(plane, angle)), atol=1e-12
                )

    def test_plane_outside_matrix(self):
        with self.assertRaises(IndexOutOfRange):
            rotation(RotationPlane.XQ, 0.5, size=3)

    def test_dtype(self):
        self.assertEqual(rotation(RotationPlane.AROUND_Z, 0.5, dtype=np.float32).dtype, np.float32)


class TestTranslationAndScale(unittest.TestCase):
    """Test translation and scale matrices."""

    def test_translation_moves_origin(self):
        offset = vector3d(1.0, -2.0, 3.0)
        m = translation(offset)
        self.assertEqual(m.size, 4)
        np.testing.assert_array_equal(vector3d(0.0, 0.0, 0.0) @ m, [1.0, -2.0, 3.0])
        np.testing.assert_array_equal(m.at(3, 1), -2.0)

    def test_translation_4d(self):
        m = translation(vector4d(0.0, 0.0, 0.0, 2.0))
        self.assertEqual(m.size, 5)
        np.testing.assert_array_equal(vector4d(1.0, 1.0, 1.0, 1.0) @ m, [1.0, 1.0, 1.0, 3.0])

    def test_scale(self):
        m = scale(vector3d(2.0, 3.0, 4.0))
        expected = np.diag([2.0, 3.0, 4.0, 1.0])
        np.testing.assert_array_equal(m, expected)
        np.testing.assert_array_equal(vector3d(1.0, 1.0, 1.0) @ m, [2.0, 3.0, 4.0])


class TestPerspective(unittest.TestCase):
    """Test the perspective matrix."""

    def test_depth_range(self):
        m = perspective(0.1, 100.0)
        self.assertAlmostEqual((vector3d(0.0, 0.0, -0.1) @ m).z, 0.0)
        self.assertAlmostEqual((vector3d(0.0, 0.0, -100.0) @ m).z, 1.0)

    def test_divides_by_distance(self):
        projected = vector3d(2.0, 4.0, -2.0) @ perspective(0.1, 100.0)
        self.assertAlmostEqual(projected.x, 1.0)
        self.assertAlmostEqual(projected.y, 2.0)

    def test_point_on_camera_plane(self):
        with self.assertLogs("tessermath.multiplication", level="WARNING"):
            projected = vector3d(1.0, 1.0, 0.0) @ perspective(0.1, 100.0)
        self.assertFalse(np.isfinite(np.asarray(projected)).all())

    def test_degenerate_planes(self):
        m = perspective(1.0, 1.0)
        self.assertFalse(np.isfinite(np.asarray(m)).all())


class TestView(unittest.TestCase):
    """Test the camera transforms."""

    def test_look_at_moves_origin_in_front(self):
        m = look_at(5.0)
        np.testing.assert_allclose(vector3d(0.0, 0.0, 0.0) @ m, [0.0, 0.0, -5.0], atol=1e-12)

    def test_look_at_camera_position(self):
        m = look_at(5.0)
        np.testing.assert_allclose(vector3d(5.0, 0.0, 0.0) @ m, [0.0, 0.0, 0.0], atol=1e-12)

    def test_look_at_keeps_up(self):
        m = look_at(5.0)
        np.testing.assert_allclose(vector3d(0.0, 1.0, 0.0) @ m, [0.0, 1.0, -5.0], atol=1e-12)

    def test_look_at_ignores_up_length(self):
        np.testing.assert_allclose(
            look_at(3.0, vector3d(0.0, 10.0, 0.0)), look_at(3.0), atol=1e-12
        )

    def test_degenerate_up(self):
        m = look_at(3.0, vector3d(0.0, 0.0, 0.0))
        self.assertFalse(np.isfinite(np.asarray(m)).all())

    def test_aspect_ratio_correction(self):
        np.testing.assert_allclose(aspect_ratio_correction(2.0), np.diag([0.5, 1.0, 1.0, 1.0]))
        np.testing.assert_allclose(aspect_ratio_correction(0.5), np.diag([1.0, 0.5, 1.0, 1.0]))
        np.testing.assert_allclose(aspect_ratio_correction(1.0), np.eye(4))

    def test_fov_x_scale(self):
        np.testing.assert_allclose(fov_x_scale(radians(90.0)), np.eye(4), atol=1e-12)

        m = fov_x_scale(radians(60.0))
        factor = 1.0 / np.tan(radians(30.0))
        np.testing.assert_allclose(m, np.diag([factor, factor, 1.0, 1.0]), atol=1e-12)

    def test_view_composition(self):
        h, v, distance, aspect, fov = 0.4, -0.2, 6.0, 1.5, radians(75.0)
        expected = transform_chain(
            rotation(RotationPlane.AROUND_Y, h),
            rotation(RotationPlane.AROUND_Z, v),
            look_at(distance),
            aspect_ratio_correction(aspect),
            fov_x_scale(fov),
        )
        np.testing.assert_allclose(view(h, v, distance, aspect, fov), expected, atol=1e-12)

    def test_view_without_rotation(self):
        np.testing.assert_allclose(view(0.0, 0.0, 4.0, 1.0), look_at(4.0), atol=1e-12)


class TestColor(unittest.TestCase):
    """Test packed color decoding."""

    def test_decode(self):
        rgb = decode_rgb(0xFF8000)
        self.assertIsInstance(rgb, Rgb)
        self.assertAlmostEqual(rgb.red, 1.0)
        self.assertAlmostEqual(rgb.green, 128.0 / 255.0)
        self.assertAlmostEqual(rgb.blue, 0.0)

    def test_decode_ignores_alpha(self):
        self.assertEqual(decode_rgb(0x7FFF8000), decode_rgb(0xFF8000))

    def test_decode_dtype(self):
        self.assertIsInstance(decode_rgb(0x33AAFF, dtype=np.float32).red, np.float32)

    def test_encode(self):
        self.assertEqual(encode_rgb(decode_rgb(0x33AAFF)), 0x33AAFF)
        self.assertEqual(encode_rgb(Rgb(2.0, -1.0, 0.5)), 0xFF0080)

    def test_unsupported_dtype(self):
        with pytest.raises(TypeError):
            decode_rgb(0xFFFFFF, dtype=np.complex64)


if __name__ == "__main__":
    unittest.main()
