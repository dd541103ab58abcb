"""Projection of object point buffers into visualizable vertices.

This is the boundary with a rendering adapter. The adapter hands over a flat
buffer of homogeneous 4D point coordinates (four scalars per point) together
with the object's :class:`Transform`. Every point goes through the object's
5x5 model matrix and, for four-dimensional objects, through a visualizer that
maps it into 3D. The results come back as plain numpy arrays, packed ready
for a vertex buffer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

import numpy as np
from numpy.typing import DTypeLike

from tessermath.color import decode_rgb
from tessermath.errors import DimensionMismatch
from tessermath.matrix import Matrix
from tessermath.multiplication import transform_chain
from tessermath.primitives import scalar_type
from tessermath.transform import RotationPlane, radians, rotation, translation
from tessermath.vector import Vector, vector3d, vector4d
from tessermath.view import view

logger = logging.getLogger(__name__)

COMPONENTS_PER_POINT = 4
FLOATS_PER_VERTEX = 8

FourthDimensionVisualizer = Callable[[Vector], Vector]


@dataclass(frozen=True)
class Transform:
    """Rotation angles (radians) and translation offsets of one object."""

    rotation_x: float = 0.0
    rotation_y: float = 0.0
    rotation_z: float = 0.0
    rotation_q: float = 0.0
    translation_x: float = 0.0
    translation_y: float = 0.0
    translation_z: float = 0.0
    translation_q: float = 0.0


@dataclass(frozen=True)
class Camera:
    """An orbiting camera, see :func:`tessermath.view.view`."""

    distance: float
    aspect_ratio: float
    horizontal_rotation: float = 0.0
    vertical_rotation: float = 0.0
    fov_x: float = radians(90.0)

    def view_matrix(self, dtype: Optional[DTypeLike] = None) -> Matrix:
        return view(
            self.horizontal_rotation,
            self.vertical_rotation,
            self.distance,
            self.aspect_ratio,
            self.fov_x,
            dtype=dtype,
        )


def model_matrix(transform: Transform, dtype: Optional[DTypeLike] = None) -> Matrix:
    """Compose an object's 5x5 model matrix: the four rotations, then the translation."""
    return transform_chain(
        rotation(RotationPlane.AROUND_X, transform.rotation_x, size=5, dtype=dtype),
        rotation(RotationPlane.AROUND_Y, transform.rotation_y, size=5, dtype=dtype),
        rotation(RotationPlane.AROUND_Z, transform.rotation_z, size=5, dtype=dtype),
        rotation(RotationPlane.XQ, transform.rotation_q, size=5, dtype=dtype),
        translation(
            vector4d(
                transform.translation_x,
                transform.translation_y,
                transform.translation_z,
                transform.translation_q,
                dtype=dtype,
            )
        ),
    )


def project_wireframe(v: Vector) -> Vector:
    """Project a 4D point into 3D by dividing through its q component."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return Vector.generate(3, lambda i: v[i] / v.q, dtype=v.dtype)


def collapse_z(v: Vector) -> Vector:
    """Drop the z axis of a 4D point, showing q in its place."""
    return vector3d(v.x, v.y, v.q, dtype=v.dtype)


class ProjectedVertices(NamedTuple):
    """Projected vertex positions and their colors, one row per point."""

    positions: np.ndarray
    colors: np.ndarray


def project_points(
    buffer: np.ndarray,
    transform: Transform,
    color: int,
    four_dimensional: bool = True,
    visualizer: FourthDimensionVisualizer = project_wireframe,
    dtype: Optional[DTypeLike] = None,
) -> ProjectedVertices:
    """Project a buffer of object points into 3D.

    Args:
        buffer: Flat sequence of point coordinates, four scalars per point
        transform: Object transform the model matrix is built from
        color: Packed ``0xRRGGBB`` color shared by all points
        four_dimensional: Whether the q coordinate carries geometry; if not,
            the transformed x, y and z are used as-is
        visualizer: Maps transformed 4D points into 3D
        dtype: Scalar type used for the computation

    Returns:
        ``K x 3`` positions and ``K x 3`` colors
    """
    dtype = scalar_type(dtype)
    buffer = np.asarray(buffer, dtype=dtype).ravel()
    if buffer.shape[0] % COMPONENTS_PER_POINT != 0:
        raise DimensionMismatch(
            f"Point buffer length {buffer.shape[0]} is not a multiple of {COMPONENTS_PER_POINT}"
        )

    matrix = model_matrix(transform, dtype=dtype)
    points = buffer.reshape(-1, COMPONENTS_PER_POINT)

    positions = np.empty((points.shape[0], 3), dtype=dtype)
    for i, point in enumerate(points):
        transformed = Vector.from_array(point) @ matrix
        if four_dimensional:
            visualized = visualizer(transformed)
        else:
            visualized = vector3d(transformed.x, transformed.y, transformed.z, dtype=dtype)
        positions[i] = np.asarray(visualized)

    colors = np.tile(np.asarray(decode_rgb(color, dtype=dtype), dtype=dtype), (points.shape[0], 1))

    n_non_finite = int(np.count_nonzero(~np.isfinite(positions).all(axis=1)))
    if n_non_finite:
        logger.warning(f"{n_non_finite}/{points.shape[0]} projected points are not finite")
    logger.debug(f"Projected {points.shape[0]} points (four_dimensional={four_dimensional})")

    return ProjectedVertices(positions, colors)


def pack_vertices(projected: ProjectedVertices) -> np.ndarray:
    """Interleave positions and colors into a float32 vertex buffer.

    Each vertex is laid out as ``x, y, z, w, r, g, b, a`` with ``w`` and
    ``a`` set to one.

    Returns:
        ``K x 8`` float32 array, contiguous so it can be uploaded directly
    """
    n_vertices = projected.positions.shape[0]
    vertices = np.ones((n_vertices, FLOATS_PER_VERTEX), dtype=np.float32)
    vertices[:, 0:3] = projected.positions
    vertices[:, 4:7] = projected.colors
    return vertices
