"""Tests for vectors and vector arithmetic.

This module tests construction, component access and the arithmetic
operations of fixed-size vectors, along with the numeric traits they use.
"""

import sys
import unittest
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from tessermath import arithmetic, primitives
from tessermath.errors import DimensionMismatch, IndexOutOfRange
from tessermath.vector import Vector, vector, vector3d, vector4d


class TestPrimitives(unittest.TestCase):
    """Test numeric traits."""

    def test_zero_and_one_keep_scalar_type(self):
        self.assertIsInstance(primitives.zero(np.float32), np.float32)
        self.assertIsInstance(primitives.one(np.int32), np.int32)
        self.assertEqual(primitives.zero(), 0.0)
        self.assertEqual(primitives.one(), 1.0)

    def test_unsupported_scalar_type(self):
        with self.assertRaises(TypeError):
            primitives.zero(np.complex128)


class TestVector(unittest.TestCase):
    """Test vector construction and access."""

    def test_construction(self):
        v = vector4d(1.0, 2.0, 5.0, 4.0)
        self.assertEqual(v.size, 4)
        self.assertEqual(v.x, 1.0)
        self.assertEqual(v.y, 2.0)
        self.assertEqual(v.z, 5.0)
        self.assertEqual(v.q, 4.0)

    def test_wrong_component_count(self):
        with self.assertRaises(DimensionMismatch):
            Vector([1.0, 2.0, 3.0], size=4)

        # Dimension errors are value errors
        with self.assertRaises(ValueError):
            Vector([1.0], size=2)

    def test_empty_vector(self):
        with self.assertRaises(DimensionMismatch):
            vector()

    def test_generate_calls_initializer_in_order(self):
        calls = []

        def initializer(i):
            calls.append(i)
            return i * 2.0

        v = Vector.generate(4, initializer)
        self.assertEqual(calls, [0, 1, 2, 3])
        np.testing.assert_array_equal(v, [0.0, 2.0, 4.0, 6.0])

    def test_index_out_of_range(self):
        v = vector3d(1.0, 2.0, 3.0)
        with self.assertRaises(IndexOutOfRange):
            v[3]
        with self.assertRaises(IndexOutOfRange):
            v[-1]
        with self.assertRaises(IndexError):
            v.q

    def test_immutable(self):
        v = vector3d(1.0, 2.0, 3.0)
        with self.assertRaises(AttributeError):
            v.x = 5.0

        # Arrays handed out are copies
        a = np.asarray(v)
        a[0] = 10.0
        self.assertEqual(v.x, 1.0)

    def test_equality_and_hash(self):
        self.assertEqual(vector(1.0, 2.0), vector(1.0, 2.0))
        self.assertNotEqual(vector(1.0, 2.0), vector(1.0, 2.0, 0.0))
        self.assertEqual(len({vector(1.0, 2.0), vector(1.0, 2.0)}), 1)

    def test_string(self):
        self.assertEqual(str(vector3d(1.0, 2.0, 3.0)), "( 1.0, 2.0, 3.0 )")

    def test_astype(self):
        v = vector(1.5, 2.0).astype(np.float32)
        self.assertEqual(v.dtype, np.float32)
        np.testing.assert_array_equal(v, [1.5, 2.0])


class TestArithmetic(unittest.TestCase):
    """Test vector arithmetic."""

    def test_addition(self):
        u = vector4d(3.0, 1.0, 4.0, 1.0)
        v = vector4d(1.0, 2.0, 5.0, 0.0)
        np.testing.assert_array_equal(v + u, [4.0, 3.0, 9.0, 1.0])
        np.testing.assert_array_equal(arithmetic.add(v, u), [4.0, 3.0, 9.0, 1.0])

    def test_subtraction(self):
        u = vector4d(3.0, 1.0, 4.0, 1.0)
        v = vector4d(1.0, 2.0, 5.0, 0.0)
        np.testing.assert_array_equal(u - v, [2.0, -1.0, -1.0, 1.0])

    def test_size_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            vector3d(1.0, 2.0, 3.0) + vector4d(1.0, 2.0, 3.0, 4.0)
        with self.assertRaises(DimensionMismatch):
            arithmetic.dot(vector3d(1.0, 2.0, 3.0), vector(1.0, 2.0))

    def test_scale_and_divide(self):
        v = vector4d(3.0, 1.0, 4.0, 4.0)
        np.testing.assert_array_equal(v * 2.0, [6.0, 2.0, 8.0, 8.0])
        np.testing.assert_array_equal(2.0 * v, [6.0, 2.0, 8.0, 8.0])
        np.testing.assert_array_equal(v / 2.0, [1.5, 0.5, 2.0, 2.0])
        np.testing.assert_array_equal(-v, [-3.0, -1.0, -4.0, -4.0])

    def test_float32_stays_float32(self):
        v = vector(1.0, 2.0, dtype=np.float32)
        self.assertEqual((v * 2.0).dtype, np.float32)
        self.assertEqual((v + v).dtype, np.float32)

    def test_dot(self):
        v = vector4d(3.0, 1.0, 4.0, 0.0)
        u = vector4d(1.0, 2.0, 5.0, 3.0)
        self.assertEqual(v @ u, 25.0)
        self.assertEqual(arithmetic.dot(v, u), 25.0)

    def test_dot_with_itself_is_squared_length(self):
        v = vector3d(3.0, 1.0, 4.0)
        self.assertAlmostEqual(v @ v, 26.0)
        self.assertAlmostEqual(arithmetic.length(v) ** 2, 26.0)

    def test_length(self):
        self.assertAlmostEqual(arithmetic.length(vector(3.0, 4.0)), 5.0)

    def test_normalized(self):
        v = arithmetic.normalized(vector(3.0, 4.0))
        np.testing.assert_allclose(v, [0.6, 0.8], atol=1e-12)
        self.assertAlmostEqual(arithmetic.length(v), 1.0)

    def test_normalized_zero_vector_is_not_finite(self):
        v = arithmetic.normalized(vector3d(0.0, 0.0, 0.0))
        self.assertFalse(np.isfinite(np.asarray(v)).any())

    def test_cross(self):
        x = vector3d(1.0, 0.0, 0.0)
        y = vector3d(0.0, 1.0, 0.0)
        np.testing.assert_array_equal(arithmetic.cross(x, y), [0.0, 0.0, 1.0])
        np.testing.assert_array_equal(arithmetic.cross(y, x), [0.0, 0.0, -1.0])

    def test_cross_requires_3d(self):
        with self.assertRaises(DimensionMismatch):
            arithmetic.cross(vector4d(1.0, 0.0, 0.0, 0.0), vector4d(0.0, 1.0, 0.0, 0.0))

    def test_vector_product_is_not_elementwise(self):
        with pytest.raises(TypeError):
            vector(1.0, 2.0) * vector(1.0, 2.0)

    def test_numpy_scalar_factor_keeps_vector(self):
        u = vector3d(0.0, 3.0, 4.0)
        v = vector3d(1.0, 2.0, 3.0)

        scaled = arithmetic.length(u) * v
        self.assertIsInstance(scaled, Vector)
        np.testing.assert_array_equal(scaled, [5.0, 10.0, 15.0])

        scaled = np.float32(2.0) * v
        self.assertIsInstance(scaled, Vector)
        with self.assertRaises(AttributeError):
            scaled.x = 0.0

        self.assertIsInstance(v * np.float64(2.0), Vector)
        self.assertIsInstance(v / v.z, Vector)
        self.assertIsInstance(u.y * v, Vector)

    def test_numpy_scalar_cannot_be_added(self):
        v = vector3d(1.0, 2.0, 3.0)
        with pytest.raises(TypeError):
            np.float64(1.0) + v
        with pytest.raises(TypeError):
            np.float64(1.0) - v

    def test_array_factor_is_rejected(self):
        v = vector3d(1.0, 2.0, 3.0)
        with pytest.raises(TypeError):
            v * np.array([1.0, 0.0, 2.0])
        with pytest.raises(TypeError):
            np.array([1.0, 0.0, 2.0]) * v
        with pytest.raises(TypeError):
            v / np.array([1.0, 2.0, 3.0])
        with pytest.raises(TypeError):
            arithmetic.multiply(v, [1.0, 0.0, 2.0])
        with pytest.raises(TypeError):
            arithmetic.divide(v, np.ones(3))


if __name__ == "__main__":
    unittest.main()
