"""Wireframe geometry for the visualizer.

Shapes are lists of lines, each line a pair of 4D points. Higher-dimensional
shapes are grown from lower ones by extrusion: a square extruded along z is a
cube, a cube extruded along q is a tesseract.
"""

from __future__ import annotations

import itertools
import logging
from typing import List, Tuple

import numpy as np

from tessermath.vector import Vector, vector4d

logger = logging.getLogger(__name__)

Line = Tuple[Vector, Vector]


def axis() -> List[Line]:
    """Axis indicator: one unit line along each of the four axes."""
    origin = vector4d(0.0, 0.0, 0.0, 0.0)
    return [
        (origin, vector4d(1.0, 0.0, 0.0, 0.0)),
        (origin, vector4d(0.0, 1.0, 0.0, 0.0)),
        (origin, vector4d(0.0, 0.0, 1.0, 0.0)),
        (origin, vector4d(0.0, 0.0, 0.0, 1.0)),
    ]


def quadrilateral(a: Vector, b: Vector, c: Vector, d: Vector) -> List[Line]:
    """Closed outline through four corners, in order."""
    return [(a, b), (b, c), (c, d), (d, a)]


def extruded(lines: List[Line], direction: Vector) -> List[Line]:
    """Extrude a wireframe along ``direction``.

    Args:
        lines: Wireframe to extrude
        direction: Offset of the extruded copy

    Returns:
        The original lines, the shifted copy, and one connecting line per
        original endpoint
    """
    duplicate = [(start + direction, end + direction) for start, end in lines]
    connections = []
    for start, end in lines:
        connections.append((start, start + direction))
        connections.append((end, end + direction))
    return lines + duplicate + connections


def cube(size: float = 2.0) -> List[Line]:
    """Cube centered at the origin of the q = 0 hyperplane."""
    h = size / 2.0
    square = quadrilateral(
        vector4d(-h, -h, -h, 0.0),
        vector4d(h, -h, -h, 0.0),
        vector4d(h, h, -h, 0.0),
        vector4d(-h, h, -h, 0.0),
    )
    return extruded(square, vector4d(0.0, 0.0, size, 0.0))


def tesseract(size: float = 2.0) -> List[Line]:
    """Tesseract centered at the origin."""
    h = size / 2.0
    offset = vector4d(0.0, 0.0, 0.0, -h)
    base = [(start + offset, end + offset) for start, end in cube(size)]
    return extruded(base, vector4d(0.0, 0.0, 0.0, size))


def pentachoron() -> List[Line]:
    """Regular pentachoron (4-simplex): a tetrahedron in q = 0 and an apex above it.

    The base tetrahedron has a radius of one, its base face lies in the
    ``y = 0`` plane centered around the origin. Every pair of the five
    corners is connected, giving ten lines.
    """
    corners = [
        vector4d(0.0, 0.0, 1.0, 0.0),
        vector4d(np.sqrt(3.0) / 2.0, 0.0, -0.5, 0.0),
        vector4d(-np.sqrt(3.0) / 2.0, 0.0, -0.5, 0.0),
        vector4d(0.0, np.sqrt(2.0), 0.0, 0.0),
        vector4d(0.0, np.sqrt(2.0) / 4.0, 0.0, np.sqrt(30.0) / 4.0),
    ]
    return list(itertools.combinations(corners, 2))


def lines_to_buffer(lines: List[Line]) -> np.ndarray:
    """Flatten lines into a point buffer of four scalars per point.

    Consecutive point pairs form a line, matching how the projected vertices
    are drawn.
    """
    buffer = np.array(
        [np.concatenate((np.asarray(start), np.asarray(end))) for start, end in lines]
    ).ravel()
    logger.debug(f"Flattened {len(lines)} lines into {buffer.shape[0]} scalars")
    return buffer
