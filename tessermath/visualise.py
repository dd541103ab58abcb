"""Plotting of projected wireframes.

Stand-in for a GPU draw call when running headless: projected vertices are
drawn as line segments (consecutive vertex pairs) with matplotlib and saved
to an image.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection

from tessermath.projection import ProjectedVertices

logger = logging.getLogger(__name__)


def segments(positions: np.ndarray, axes: Sequence[int] = (0, 1)) -> np.ndarray:
    """Pair up consecutive vertices into line segments.

    Args:
        positions: K x 3 array of projected positions, K even
        axes: The two position axes to keep

    Returns:
        (K / 2) x 2 x 2 array of segment endpoints
    """
    if positions.shape[0] % 2 != 0:
        raise ValueError(f"Expected an even number of vertices, got {positions.shape[0]}")
    return positions[:, list(axes)].reshape(-1, 2, 2)


def save_wireframe(
    projected: ProjectedVertices,
    output_path: str,
    title: Optional[str] = None,
) -> None:
    """Save a projected wireframe seen from the front (x, y) and from above (x, z).

    Args:
        projected: Projected positions and colors
        output_path: Path to save the image
        title: Optional figure title
    """
    finite = np.isfinite(projected.positions).all(axis=1)
    # Drop whole segments if either endpoint is not finite
    keep = np.repeat(finite.reshape(-1, 2).all(axis=1), 2)
    positions = projected.positions[keep]
    colors = projected.colors[keep][::2]

    fig, axs = plt.subplots(1, 2, figsize=(12, 6))

    for ax, axes, label in zip(axs, [(0, 1), (0, 2)], ["Front (x, y)", "Top (x, z)"]):
        ax.add_collection(LineCollection(segments(positions, axes), colors=colors, linewidths=1.0))
        ax.set_title(label)
        ax.set_aspect("equal")
        ax.autoscale()
        ax.grid(True, alpha=0.3)

    if title:
        fig.suptitle(title)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    logger.info(f"Saved wireframe plot with {positions.shape[0] // 2} lines to {output_path}")
