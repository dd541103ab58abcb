"""Camera transforms.

Builds the world-to-view part of the projection chain: an orbiting camera
looking along a fixed forward axis, corrected for the viewport's aspect ratio
and field of view.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import DTypeLike

from tessermath.arithmetic import cross, normalized
from tessermath.matrix import Matrix, identity, transpose
from tessermath.multiplication import transform_chain
from tessermath.primitives import one, scalar_type, zero
from tessermath.transform import RotationPlane, radians, rotation, scale, translation
from tessermath.vector import Vector, vector3d

logger = logging.getLogger(__name__)


def look_at(
    distance: float,
    reference_up: Optional[Vector] = None,
    dtype: Optional[DTypeLike] = None,
) -> Matrix:
    """Create a view matrix for a camera looking at the origin.

    The forward axis is fixed to x. The camera basis is derived from the
    reference up direction, transposed into a world-to-view rotation and
    preceded by a translation of ``-distance`` along forward.

    Args:
        distance: Distance between the camera and the origin
        reference_up: Approximate up direction, y if omitted
        dtype: Scalar type of the coefficients

    Returns:
        4x4 view matrix
    """
    dtype = scalar_type(dtype)
    if reference_up is None:
        reference_up = vector3d(zero(dtype), one(dtype), zero(dtype), dtype=dtype)

    forward = vector3d(one(dtype), zero(dtype), zero(dtype), dtype=dtype)
    right = cross(normalized(reference_up), forward)
    up = cross(forward, right)

    basis = [right, up, forward]
    view_direction = transpose(
        identity(
            4,
            [((row, col), basis[row][col]) for row in range(3) for col in range(3)],
            dtype=dtype,
        )
    )

    return translation(vector3d(-distance, zero(dtype), zero(dtype), dtype=dtype)) @ view_direction


def aspect_ratio_correction(aspect_ratio: float, dtype: Optional[DTypeLike] = None) -> Matrix:
    """Scale the wider screen axis so the narrower one stays unscaled.

    Args:
        aspect_ratio: Viewport width divided by height

    Returns:
        4x4 scale matrix
    """
    dtype = scalar_type(dtype)
    if aspect_ratio > 1:
        factors = vector3d(one(dtype) / aspect_ratio, one(dtype), one(dtype), dtype=dtype)
    else:
        factors = vector3d(one(dtype), aspect_ratio, one(dtype), dtype=dtype)
    return scale(factors)


def fov_x_scale(fov_x: float, dtype: Optional[DTypeLike] = None) -> Matrix:
    """Scale the first two axes so a horizontal field of view of ``fov_x`` radians fits the viewport."""
    dtype = scalar_type(dtype)
    necessary_viewport_width = np.tan(fov_x / 2.0)
    factor = one(dtype) / necessary_viewport_width
    return scale(vector3d(factor, factor, one(dtype), dtype=dtype))


def view(
    horizontal_rotation: float,
    vertical_rotation: float,
    distance: float,
    aspect_ratio: float,
    fov_x: float = radians(90.0),
    dtype: Optional[DTypeLike] = None,
) -> Matrix:
    """Create the full camera matrix of an orbiting camera.

    Args:
        horizontal_rotation: Orbit angle around y, in radians
        vertical_rotation: Orbit angle around z, in radians
        distance: Camera distance from the origin
        aspect_ratio: Viewport width divided by height
        fov_x: Horizontal field of view in radians
        dtype: Scalar type of the coefficients

    Returns:
        4x4 view matrix
    """
    logger.debug(
        f"View: horizontal={horizontal_rotation:.4f}, vertical={vertical_rotation:.4f}, "
        f"distance={distance:.3f}, aspect={aspect_ratio:.3f}, fov_x={fov_x:.4f}"
    )
    return transform_chain(
        rotation(RotationPlane.AROUND_Y, horizontal_rotation, dtype=dtype),
        rotation(RotationPlane.AROUND_Z, vertical_rotation, dtype=dtype),
        look_at(distance, dtype=dtype),
        aspect_ratio_correction(aspect_ratio, dtype=dtype),
        fov_x_scale(fov_x, dtype=dtype),
    )
