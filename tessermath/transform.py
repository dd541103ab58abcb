"""Canonical transform builders.

Rotation about a named plane, translation, anisotropic scale and perspective.
All of them are an identity matrix with a handful of overridden cells, in the
row-vector convention used by :mod:`tessermath.multiplication`.
"""

from __future__ import annotations

import enum
import logging
from typing import Optional, Tuple

import numpy as np
from numpy.typing import DTypeLike

from tessermath.matrix import Matrix, identity
from tessermath.vector import Vector

logger = logging.getLogger(__name__)


def radians(degrees: float) -> float:
    """Convert an angle in degrees to radians."""
    return float(degrees) / 180.0 * np.pi


def pi(multiple: float) -> float:
    """An angle given as a multiple of pi, e.g. ``pi(0.5)`` for a right angle."""
    return float(multiple) * np.pi


class RotationPlane(enum.Enum):
    """The 2D sub-plane a rotation acts in, as a pair of axis indices.

    XQ rotates the x axis into the fourth dimension and has no 3D analogue.
    """

    AROUND_X = (1, 2)
    AROUND_Y = (2, 0)
    AROUND_Z = (0, 1)
    XQ = (0, 3)

    @property
    def axes(self) -> Tuple[int, int]:
        return self.value


def rotation(
    plane: RotationPlane,
    angle: float,
    size: int = 4,
    dtype: Optional[DTypeLike] = None,
) -> Matrix:
    """Create a rotation matrix.

    Args:
        plane: Plane to rotate in
        angle: Rotation angle in radians
        size: Side-length of the (homogeneous) matrix
        dtype: Scalar type of the coefficients

    Returns:
        Identity with the plane's 2x2 block replaced by the rotation
    """
    a, b = plane.axes
    cos, sin = np.cos(angle), np.sin(angle)
    logger.debug(f"Rotation in plane {plane.name}: angle={angle:.4f} rad, size={size}")
    return identity(
        size,
        [((a, a), cos), ((a, b), sin), ((b, a), -sin), ((b, b), cos)],
        dtype=dtype,
    )


def translation(v: Vector) -> Matrix:
    """Create a homogeneous translation matrix moving points by ``v``.

    The matrix is one larger than ``v``; the offset sits in the last row.
    """
    size = v.size + 1
    return identity(size, [((size - 1, col), v[col]) for col in range(v.size)], dtype=v.dtype)


def scale(v: Vector) -> Matrix:
    """Create a homogeneous scale matrix with ``v`` on the diagonal.

    The last diagonal cell, belonging to the homogeneous coordinate, stays one.
    """
    return identity(v.size + 1, [((i, i), v[i]) for i in range(v.size)], dtype=v.dtype)


def perspective(near: float, far: float, dtype: Optional[DTypeLike] = None) -> Matrix:
    """Create a perspective matrix.

    Points in front of the camera lie on the negative z axis. Their depth is
    mapped so that ``z = -near`` ends at 0 and ``z = -far`` at 1 after the
    perspective divide. ``near == far`` is degenerate and divides by zero.

    Args:
        near: Near plane distance
        far: Far plane distance

    Returns:
        4x4 perspective matrix
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        depth = np.float64(far) - np.float64(near)
        return identity(
            4,
            [
                ((2, 3), -1.0),
                ((3, 3), 0.0),
                ((2, 2), -far / depth),
                ((3, 2), -(far * near) / depth),
            ],
            dtype=dtype,
        )
