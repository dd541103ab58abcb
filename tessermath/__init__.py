"""Dimension-generic linear algebra for projecting 4D geometry.

Fixed-size immutable vectors and square matrices, the transforms a
visualizer is built from (rotation about a named plane, translation, scale,
perspective, camera view) and the homogeneous perspective divide that
projects points of one dimension into the dimension below.
"""

from __future__ import annotations

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
