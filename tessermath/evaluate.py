"""Diagnostics for transforms and projection runs.

This module checks how well built matrices keep the properties they should
have (rotations staying orthogonal, chains staying invertible) and collects
timings and counts for a projection run.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional, Union

import numpy as np
from scipy import linalg

from tessermath.matrix import Matrix

logger = logging.getLogger(__name__)


def orthogonality_error(m: Matrix) -> float:
    """Calculate how far a matrix is from being orthogonal.

    Args:
        m: Matrix to check

    Returns:
        Frobenius norm of ``M @ M.T - I``
    """
    a = np.asarray(m, dtype=np.float64)
    return float(linalg.norm(a @ a.T - np.eye(m.size)))


def determinant(m: Matrix) -> float:
    return float(linalg.det(np.asarray(m, dtype=np.float64)))


def is_rotation(m: Matrix, tol: float = 1e-9) -> bool:
    """Check whether a matrix is a proper rotation (orthogonal, determinant one).

    Args:
        m: Matrix to check
        tol: Absolute tolerance for both conditions

    Returns:
        True if the matrix is a rotation within tolerance
    """
    error = orthogonality_error(m)
    det = determinant(m)
    logger.debug(f"Rotation check: orthogonality error={error:.3e}, det={det:.6f}")
    return error < tol and abs(det - 1.0) < tol


class Timer:
    """Wall-clock timer for one pipeline stage.

    Used as a context manager. When given a :class:`ProjectionMetrics`, the
    measured time is added to that stage's running total on exit.
    """

    def __init__(self, stage: str, metrics: Optional["ProjectionMetrics"] = None):
        self.stage = stage
        self.metrics = metrics
        self.start_time = None
        self.end_time = None

    def start(self) -> None:
        self.start_time = time.perf_counter()
        self.end_time = None

    def stop(self) -> float:
        """Stop timing the stage.

        Returns:
            Seconds since :meth:`start`, or 0.0 if the timer never started
        """
        if self.start_time is None:
            logger.warning(f"Stage {self.stage!r} stopped before it was started")
            return 0.0

        self.end_time = time.perf_counter()
        elapsed = self.elapsed
        logger.debug(f"Stage {self.stage!r} took {elapsed:.4f}s")
        if self.metrics is not None:
            self.metrics.update_stage_timing(self.stage, elapsed)
        return elapsed

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    @property
    def elapsed(self) -> float:
        """Seconds measured so far; frozen once the timer is stopped."""
        if self.start_time is None:
            return 0.0
        end_time = self.end_time if self.end_time is not None else time.perf_counter()
        return end_time - self.start_time


class ProjectionMetrics:
    """Class for collecting and reporting projection run metrics."""

    def __init__(self):
        self.metrics = {
            "n_frames": 0,
            "n_points": 0,
            "n_non_finite_points": 0,
            "rotation_orthogonality_error": None,
            "runtime_s": 0.0,
            "stage_timings": {},
        }

    def update(self, metric_name: str, value: Union[int, float, Dict]) -> None:
        self.metrics[metric_name] = value

    def update_stage_timing(self, stage_name: str, time_s: float) -> None:
        """Accumulate time spent in a pipeline stage.

        Args:
            stage_name: Name of the pipeline stage
            time_s: Time in seconds
        """
        timings = self.metrics["stage_timings"]
        timings[stage_name] = timings.get(stage_name, 0.0) + time_s

    def compute_frame_metrics(self, positions: np.ndarray) -> None:
        """Count the points of one projected frame.

        Args:
            positions: K x 3 array of projected positions
        """
        self.metrics["n_frames"] += 1
        self.metrics["n_points"] += int(positions.shape[0])
        self.metrics["n_non_finite_points"] += int(
            np.count_nonzero(~np.isfinite(positions).all(axis=1))
        )

    def to_dict(self) -> Dict:
        return self.metrics.copy()

    def summary(self) -> str:
        """Generate a human-readable summary of metrics."""
        lines = [
            "Projection Metrics:",
            f"  Frames: {self.metrics['n_frames']}",
            f"  Points: {self.metrics['n_points']}",
            f"  Non-finite points: {self.metrics['n_non_finite_points']}",
        ]

        if self.metrics["rotation_orthogonality_error"] is not None:
            lines.append(
                f"  Model rotation orthogonality error: {self.metrics['rotation_orthogonality_error']:.3e}"
            )

        lines.append(f"  Total runtime: {self.metrics['runtime_s']:.2f}s")

        if self.metrics["stage_timings"]:
            lines.append("  Stage timings:")
            for stage, time_s in self.metrics["stage_timings"].items():
                lines.append(f"    {stage}: {time_s:.2f}s")

        return "\n".join(lines)
