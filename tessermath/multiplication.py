"""Matrix products and homogeneous projection.

Points are row vectors multiplied from the left, ``v @ M``. A vector of size
``N - 1`` is extended with a homogeneous coordinate of one before being
multiplied with an ``N × N`` matrix, and the result is divided by the
resulting homogeneous coordinate ``w``. This perspective divide is what lets
a chain of transforms project a point into a space of one dimension less.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import TYPE_CHECKING

import numpy as np

from tessermath.errors import DimensionMismatch
from tessermath.primitives import one
from tessermath.vector import Vector

if TYPE_CHECKING:
    from tessermath.matrix import Matrix

logger = logging.getLogger(__name__)


def multiply_matrices(lhs: "Matrix", rhs: "Matrix") -> "Matrix":
    """Multiply two matrices of equal size.

    Args:
        lhs: Left matrix
        rhs: Right matrix

    Returns:
        Matrix whose cell (row, col) is ``sum(lhs[row, i] * rhs[i, col])``
    """
    if lhs.size != rhs.size:
        raise DimensionMismatch(f"Matrix sizes differ: {lhs.size} != {rhs.size}")
    return type(lhs).from_array(np.matmul(np.asarray(lhs), np.asarray(rhs)))


def transform_vector(v: Vector, m: "Matrix") -> Vector:
    """Apply a homogeneous transform to a vector.

    Args:
        v: Vector of size ``m.size - 1``
        m: Transform matrix

    Returns:
        Transformed vector of the same size as ``v``, divided by the
        homogeneous coordinate. A zero homogeneous coordinate yields
        non-finite components.
    """
    if v.size != m.size - 1:
        raise DimensionMismatch(
            f"Cannot multiply a vector of size {v.size} with a {m.size}x{m.size} matrix"
        )

    dtype = np.result_type(v.dtype, m.dtype)
    homogeneous = np.append(np.asarray(v, dtype=dtype), one(dtype))
    product = homogeneous @ np.asarray(m)
    w = product[-1]
    if w == 0:
        logger.warning(f"Homogeneous coordinate is zero when transforming {v}")

    with np.errstate(divide="ignore", invalid="ignore"):
        return Vector.from_array(product[:-1] / w)


def transform_points(points: np.ndarray, m: "Matrix") -> np.ndarray:
    """Apply a homogeneous transform to many points at once.

    Same semantics as :func:`transform_vector`, for a ``K × (N - 1)`` array.

    Args:
        points: Array of points, one per row
        m: Transform matrix

    Returns:
        ``K × (N - 1)`` array of transformed points
    """
    points = np.atleast_2d(np.asarray(points))
    if points.shape[1] != m.size - 1:
        raise DimensionMismatch(
            f"Cannot multiply points of size {points.shape[1]} with a {m.size}x{m.size} matrix"
        )

    homogeneous = np.hstack((points, np.ones((points.shape[0], 1), dtype=points.dtype)))
    product = homogeneous @ np.asarray(m)
    w = product[:, -1:]
    n_degenerate = int(np.count_nonzero(w == 0))
    if n_degenerate:
        logger.warning(f"{n_degenerate}/{points.shape[0]} points have a zero homogeneous coordinate")

    with np.errstate(divide="ignore", invalid="ignore"):
        return product[:, :-1] / w


def transform_chain(*matrices: "Matrix") -> "Matrix":
    """Multiply a bunch of matrices, ``M1 @ (M2 @ (... @ Mk))``.

    Order matters: the first matrix is applied first to a row vector.
    """
    if not matrices:
        raise ValueError("transform_chain requires at least one matrix")
    return reduce(lambda acc, matrix: matrix @ acc, reversed(matrices[:-1]), matrices[-1])
