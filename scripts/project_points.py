#!/usr/bin/env python3
"""
4D Wireframe Projection

This script runs the projection pipeline a rendering adapter would drive:
it builds a wireframe, rotates it through the fourth dimension frame by frame,
projects every point through the object's model matrix into 3D and then
through the camera view into screen space, and writes the packed vertex
buffers, the camera matrix and a run report.
"""

from __future__ import annotations

import argparse
import dataclasses
import datetime
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import yaml
from tqdm import tqdm

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from tessermath import evaluate, geometry, projection, visualise
from tessermath.matrix import Matrix
from tessermath.multiplication import transform_chain, transform_points
from tessermath.transform import perspective, radians


# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    handlers=[
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger("projection")

SHAPES = {
    "axis": lambda size: geometry.axis(),
    "cube": geometry.cube,
    "tesseract": geometry.tesseract,
    "pentachoron": lambda size: geometry.pentachoron(),
}

VISUALIZERS = {
    "project_wireframe": projection.project_wireframe,
    "collapse_z": projection.collapse_z,
}


def load_config(config_path: Optional[str] = None) -> Dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    # Default config path
    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    return config


def build_transform(config: Dict, frame: int = 0) -> projection.Transform:
    """Build the object transform for an animation frame.

    Args:
        config: Configuration dictionary
        frame: Frame index; each frame adds one rotation step in the XQ plane

    Returns:
        Object transform with angles in radians
    """
    t = config["transform"]
    rotation_q = t["rotation_q_degrees"] + frame * config["animation"]["rotation_q_step_degrees"]
    return projection.Transform(
        rotation_x=radians(t["rotation_x_degrees"]),
        rotation_y=radians(t["rotation_y_degrees"]),
        rotation_z=radians(t["rotation_z_degrees"]),
        rotation_q=radians(rotation_q),
        translation_x=t["translation_x"],
        translation_y=t["translation_y"],
        translation_z=t["translation_z"],
        translation_q=t["translation_q"],
    )


def build_camera(config: Dict) -> projection.Camera:
    c = config["camera"]
    return projection.Camera(
        distance=c["distance"],
        aspect_ratio=c["aspect_ratio"],
        horizontal_rotation=radians(c["horizontal_rotation_degrees"]),
        vertical_rotation=radians(c["vertical_rotation_degrees"]),
        fov_x=radians(c["fov_x_degrees"]),
    )


def build_camera_matrix(config: Dict) -> Matrix:
    """Compose the camera view with the perspective projection."""
    c = config["camera"]
    return transform_chain(build_camera(config).view_matrix(), perspective(c["near"], c["far"]))


def project_frames(
    config: Dict,
    camera_matrix: Matrix,
    metrics: evaluate.ProjectionMetrics,
) -> List[np.ndarray]:
    """Project every animation frame into packed screen-space vertices.

    Args:
        config: Configuration dictionary
        camera_matrix: View and perspective transform applied after the model projection
        metrics: Metrics collector updated per frame

    Returns:
        List of K x 8 float32 vertex buffers, one per frame
    """
    g = config["geometry"]
    lines = SHAPES[g["shape"]](g["size"])
    buffer = geometry.lines_to_buffer(lines)
    visualizer = VISUALIZERS[g["visualizer"]]

    frames = []
    for frame in tqdm(range(config["animation"]["frames"]), desc="Projecting frames"):
        with evaluate.Timer("model_projection", metrics):
            projected = projection.project_points(
                buffer, build_transform(config, frame), g["color"], visualizer=visualizer
            )

        with evaluate.Timer("view_projection", metrics):
            screen = projection.ProjectedVertices(
                transform_points(projected.positions, camera_matrix), projected.colors
            )

        metrics.compute_frame_metrics(screen.positions)
        frames.append(projection.pack_vertices(screen))

    return frames


def run_projection(
    output_dir: str,
    frames: Optional[int] = None,
    shape: Optional[str] = None,
    plot: Optional[bool] = None,
    config_path: Optional[str] = None,
) -> Dict:
    """Run the complete projection pipeline.

    Args:
        output_dir: Path to output directory
        frames: Number of animation frames, overriding the config
        shape: Wireframe shape, overriding the config
        plot: Whether to save a plot of the first frame, overriding the config
        config_path: Path to configuration file

    Returns:
        Dictionary of run metrics
    """
    run_timer = evaluate.Timer("projection_run")
    run_timer.start()

    os.makedirs(output_dir, exist_ok=True)

    # Set up file logging
    file_handler = logging.FileHandler(os.path.join(output_dir, "projection.log"))
    file_handler.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"))
    logging.getLogger().addHandler(file_handler)

    try:
        config = load_config(config_path)

        # Update configuration with command-line arguments
        config["output"]["directory"] = output_dir
        if frames is not None:
            config["animation"]["frames"] = frames
        if shape is not None:
            config["geometry"]["shape"] = shape
        if plot is not None:
            config["output"]["plot"] = plot

        metrics = evaluate.ProjectionMetrics()

        transform = build_transform(config)
        rotation_only = projection.model_matrix(
            dataclasses.replace(
                transform, translation_x=0.0, translation_y=0.0, translation_z=0.0, translation_q=0.0
            )
        )
        metrics.update("rotation_orthogonality_error", evaluate.orthogonality_error(rotation_only))

        camera_matrix = build_camera_matrix(config)
        logger.info(f"Camera matrix: {camera_matrix}")

        vertex_frames = project_frames(config, camera_matrix, metrics)

        with evaluate.Timer("save_results", metrics):
            np.save(os.path.join(output_dir, "vertices.npy"), np.array(vertex_frames, dtype=np.float32))
            np.save(os.path.join(output_dir, "camera.npy"), camera_matrix.coefficients(np.float32))

            if config["output"]["plot"] and vertex_frames:
                first = vertex_frames[0]
                visualise.save_wireframe(
                    projection.ProjectedVertices(first[:, 0:3], first[:, 4:7]),
                    os.path.join(output_dir, "frame0.png"),
                    title=f"{config['geometry']['shape']} (frame 0)",
                )

        metrics.update("runtime_s", run_timer.elapsed)
        metrics_dict = metrics.to_dict()
        metrics_dict["datetime"] = datetime.datetime.now().isoformat()

        with open(os.path.join(output_dir, "report.json"), "w") as f:
            json.dump(metrics_dict, f, indent=2)

        logger.info("\n" + metrics.summary())
        return metrics_dict
    finally:
        logging.getLogger().removeHandler(file_handler)
        file_handler.close()


def main():
    """Main function to parse arguments and run the projection."""
    parser = argparse.ArgumentParser(description="4D Wireframe Projection")
    parser.add_argument(
        "--output", "-o", dest="output_dir", default="results/run1",
        help="Path to output directory"
    )
    parser.add_argument(
        "--frames", "-n", dest="frames", type=int, default=None,
        help="Number of animation frames"
    )
    parser.add_argument(
        "--shape", "-s", dest="shape", default=None,
        choices=sorted(SHAPES),
        help="Wireframe shape to project"
    )
    parser.add_argument(
        "--no-plot", dest="plot", action="store_false", default=None,
        help="Do not save a plot of the first frame"
    )
    parser.add_argument(
        "--config", "-c", dest="config_path", default=None,
        help="Path to configuration file"
    )

    args = parser.parse_args()

    try:
        run_projection(
            args.output_dir,
            args.frames,
            args.shape,
            args.plot,
            args.config_path,
        )
    except Exception as e:
        logger.exception(f"Error running projection: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
