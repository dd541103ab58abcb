"""Vector arithmetic.

Componentwise addition and subtraction, scaling, dot product, length,
normalization and the 3D cross product. Every function returns a new vector;
operands are never modified.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import numpy as np

from tessermath.errors import DimensionMismatch
from tessermath.primitives import one

if TYPE_CHECKING:
    from tessermath.vector import Vector


def require_same_size(a: "Vector", b: "Vector") -> None:
    if a.size != b.size:
        raise DimensionMismatch(f"Vector sizes differ: {a.size} != {b.size}")


def require_scalar(value) -> None:
    if np.ndim(value) != 0:
        raise TypeError(f"Expected a scalar, got a value of shape {np.shape(value)}")


def combine_componentwise(
    a: "Vector",
    b: "Vector",
    combiner: Callable[[np.ndarray, np.ndarray], np.ndarray],
) -> "Vector":
    """Combine two equally sized vectors component by component.

    Args:
        a: Left operand
        b: Right operand
        combiner: Elementwise function applied to both component arrays

    Returns:
        Vector of the combined components
    """
    require_same_size(a, b)
    return type(a).from_array(combiner(np.asarray(a), np.asarray(b)))


def add(a: "Vector", b: "Vector") -> "Vector":
    return combine_componentwise(a, b, np.add)


def subtract(a: "Vector", b: "Vector") -> "Vector":
    return combine_componentwise(a, b, np.subtract)


def multiply(v: "Vector", factor) -> "Vector":
    """Scale every component by ``factor``."""
    require_scalar(factor)
    return type(v).from_array(np.asarray(v) * factor)


def divide(v: "Vector", divisor) -> "Vector":
    """Divide every component by ``divisor``.

    A zero divisor is not intercepted: components become ``inf`` or ``nan``.
    """
    require_scalar(divisor)
    with np.errstate(divide="ignore", invalid="ignore"):
        return type(v).from_array(np.true_divide(np.asarray(v), divisor))


def dot(a: "Vector", b: "Vector") -> np.generic:
    require_same_size(a, b)
    return np.dot(np.asarray(a), np.asarray(b))


def length(v: "Vector") -> np.generic:
    """Euclidean length, ``sqrt(v . v)``."""
    return np.sqrt(dot(v, v))


def normalized(v: "Vector") -> "Vector":
    """Scale ``v`` to unit length.

    The zero vector has no direction; its normalization is non-finite rather
    than silently returning zero.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        one_over_length = one(np.result_type(v.dtype, np.float32)) / length(v)
        return multiply(v, one_over_length)


def cross(lhs: "Vector", rhs: "Vector") -> "Vector":
    """Cross product of two 3D vectors."""
    if lhs.size != 3 or rhs.size != 3:
        raise DimensionMismatch(
            f"Cross product is only defined for 3D vectors, got {lhs.size} and {rhs.size}"
        )
    return type(lhs)(
        (
            lhs.y * rhs.z - lhs.z * rhs.y,
            lhs.z * rhs.x - lhs.x * rhs.z,
            lhs.x * rhs.y - lhs.y * rhs.x,
        ),
        dtype=np.result_type(lhs.dtype, rhs.dtype),
    )
