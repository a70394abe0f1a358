"""Test doubles for the capture pipeline.

Nothing here runs a landmark model. The builders fabricate landmark sets
with known geometry so the gate and crop logic can be exercised
deterministically.

Example:
    >>> from smartcapture.testing import face_landmarks, StaticPoseStrategy
    >>> lms = face_landmarks(box=(0.3, 0.7, 0.2, 0.6))
    >>> strategy = StaticPoseStrategy(yaw=20.0)
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .keypoints import FACE_MESH_POINTS, LANDMARKS
from .pose import PoseEstimationStrategy
from .types import PoseEstimate


def face_landmarks(
    box: Tuple[float, float, float, float] = (0.3, 0.7, 0.2, 0.6),
    nose_dx: float = 0.0,
    nose_dy: float = 0.0,
    nose_z: float = 0.1,
    ear_dz: float = 0.0,
    n: int = FACE_MESH_POINTS,
    image_order_ears: bool = False,
) -> np.ndarray:
    """Build an (n, 3) landmark set whose extent is exactly `box`.

    `box` is (min_x, max_x, min_y, max_y). The pose landmarks are placed
    symmetrically so both strategies read a level face; the keyword
    shifts move the nose or ear depth to produce a known yaw/pitch:

      - ear_depth:     yaw = atan2(ear_dz, 0.9 * box_w), pitch = atan2(nose_dy, nose_z)
      - eye_asymmetry: yaw = 2 * nose_dx / (0.5 * box_w + 0.001) * 45

    The ears are mirrored by default: landmark 234 sits on the image right
    and 454 on the image left, which is the layout ear_depth reads as a
    level face. A real FaceMesh puts 234 on the image left; pass
    `image_order_ears=True` for that layout, which ear_depth sees as
    turned 180 degrees.
    """
    min_x, max_x, min_y, max_y = box
    bw, bh = max_x - min_x, max_y - min_y
    cx, cy = (min_x + max_x) / 2.0, (min_y + max_y) / 2.0

    arr = np.zeros((n, 3), dtype=np.float64)
    arr[:, 0] = cx
    arr[:, 1] = cy
    if n > 2:
        arr[0] = (min_x, min_y, 0.0)
        arr[2] = (max_x, max_y, 0.0)

    def put(name, x, y, z=0.0):
        idx = LANDMARKS[name]
        if idx < n:
            arr[idx] = (x, y, z)

    put("nose", cx + nose_dx, cy + nose_dy, nose_z)
    put("left_eye", cx - 0.25 * bw, cy - 0.1 * bh)
    put("right_eye", cx + 0.25 * bw, cy - 0.1 * bh)
    put("nose_bridge", cx, cy - 0.1 * bh)
    put("forehead", cx, cy - 0.4 * bh)
    put("chin", cx, cy + 0.2 * bh)
    ear_x = -0.45 * bw if image_order_ears else 0.45 * bw
    put("left_ear", cx + ear_x, cy, ear_dz / 2.0)
    put("right_ear", cx - ear_x, cy, -ear_dz / 2.0)
    return arr


def synthetic_face_mesh(width: int, height: int) -> np.ndarray:
    """Fabricated 468-point ellipse, offset by image size.

    Stand-in for a face mesh when no model is available; returns an empty
    set for images smaller than 320x240.
    """
    if width < 320 or height < 240:
        return np.zeros((0, 3), dtype=np.float64)
    yaw_offset = ((width % 30) - 15.0) / 1000.0
    pitch_offset = ((height % 20) - 10.0) / 1000.0
    rows = []
    for i in range(FACE_MESH_POINTS):
        angle = i * 2.0 * math.pi / FACE_MESH_POINTS
        radius = 0.3 if i < FACE_MESH_POINTS // 2 else 0.3 * 0.8
        rows.append((
            0.5 + radius * math.cos(angle) + yaw_offset,
            0.5 + 0.4 * math.sin(angle) + pitch_offset,
            -0.05 + (i % 10) * 0.001,
        ))
    return np.asarray(rows, dtype=np.float64)


class StaticPoseStrategy(PoseEstimationStrategy):
    """Returns a fixed pose for any landmark set with at least one point."""

    name = "static"
    indices = (0,)

    def __init__(self, yaw: float = 0.0, pitch: float = 0.0, roll: float = 0.0, pitch_scale: float = 1.0):
        self.pose = PoseEstimate(yaw=yaw, pitch=pitch, roll=roll)
        self.default_pitch_scale = pitch_scale

    def _estimate(self, arr: np.ndarray) -> PoseEstimate:
        return self.pose


def coordinate_image(width: int = 1000, height: int = 1000, channels: int = 3) -> np.ndarray:
    """Image whose pixel at (x, y) encodes its coordinates, for checking crops."""
    ys, xs = np.mgrid[0:height, 0:width]
    img = np.zeros((height, width, channels), dtype=np.uint16)
    img[..., 0] = xs
    if channels > 1:
        img[..., 1] = ys
    return img


__all__ = ["face_landmarks", "synthetic_face_mesh", "StaticPoseStrategy", "coordinate_image"]
