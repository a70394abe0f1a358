"""Heuristic head-pose estimation from normalized face landmarks.

Two strategies are provided and are not interchangeable; their angles
and the thresholds tuned for them differ:

  - ``ear_depth``: yaw from the depth difference of the cheek/ear
    landmarks (234, 454), pitch from the nose tip against ear height.
  - ``eye_asymmetry``: yaw from the horizontal nose/eye-corner asymmetry,
    pitch from forehead/chin distances around the nose bridge, roll from
    the eye-corner line.

Both are approximations rather than true 3D pose recovery. A landmark set
too short for a strategy's indices yields the neutral estimate (0, 0, 0).
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Type

import numpy as np

from .keypoints import LANDMARKS, as_landmark_array, has_indices, required_points
from .types import NEUTRAL_POSE, PoseEstimate


class PoseEstimationStrategy(ABC):
    name: str = ""
    indices: Tuple[int, ...] = ()
    # Multiplier applied to max_pitch_degrees when none is configured
    default_pitch_scale: float = 1.0

    @property
    def required_points(self) -> int:
        return required_points(self.indices)

    def estimate(self, landmarks) -> PoseEstimate:
        arr = as_landmark_array(landmarks)
        if not has_indices(arr, self.indices):
            return NEUTRAL_POSE
        return self._estimate(arr)

    @abstractmethod
    def _estimate(self, arr: np.ndarray) -> PoseEstimate: ...


class EarDepthStrategy(PoseEstimationStrategy):
    name = "ear_depth"
    indices = (LANDMARKS["nose"], LANDMARKS["left_ear"], LANDMARKS["right_ear"])
    default_pitch_scale = 2.0

    def _estimate(self, arr: np.ndarray) -> PoseEstimate:
        nose = arr[LANDMARKS["nose"]]
        left_ear = arr[LANDMARKS["left_ear"]]
        right_ear = arr[LANDMARKS["right_ear"]]

        yaw = math.degrees(math.atan2(left_ear[2] - right_ear[2], left_ear[0] - right_ear[0]))
        ear_mid_y = (left_ear[1] + right_ear[1]) / 2.0
        pitch = math.degrees(math.atan2(nose[1] - ear_mid_y, nose[2]))
        return PoseEstimate(yaw=float(yaw), pitch=float(pitch), roll=0.0)


class EyeAsymmetryStrategy(PoseEstimationStrategy):
    name = "eye_asymmetry"
    indices = (
        LANDMARKS["nose"],
        LANDMARKS["left_eye"],
        LANDMARKS["right_eye"],
        LANDMARKS["nose_bridge"],
        LANDMARKS["chin"],
        LANDMARKS["forehead"],
    )
    eps = 0.001
    yaw_range = 45.0
    pitch_range = 30.0

    def _estimate(self, arr: np.ndarray) -> PoseEstimate:
        nose = arr[LANDMARKS["nose"]]
        left_eye = arr[LANDMARKS["left_eye"]]
        right_eye = arr[LANDMARKS["right_eye"]]
        bridge = arr[LANDMARKS["nose_bridge"]]
        chin = arr[LANDMARKS["chin"]]
        forehead = arr[LANDMARKS["forehead"]]

        left_dist = abs(nose[0] - left_eye[0])
        right_dist = abs(right_eye[0] - nose[0])
        yaw = (left_dist - right_dist) / (left_dist + right_dist + self.eps) * self.yaw_range

        upper = abs(forehead[1] - bridge[1])
        lower = abs(chin[1] - bridge[1])
        pitch = (upper - lower) / (upper + lower + self.eps) * self.pitch_range

        roll = math.degrees(math.atan2(right_eye[1] - left_eye[1], right_eye[0] - left_eye[0]))
        return PoseEstimate(yaw=float(yaw), pitch=float(pitch), roll=float(roll))


STRATEGIES: Dict[str, Type[PoseEstimationStrategy]] = {
    EarDepthStrategy.name: EarDepthStrategy,
    EyeAsymmetryStrategy.name: EyeAsymmetryStrategy,
}


def get_strategy(name: str) -> PoseEstimationStrategy:
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"Unknown pose strategy {name!r}; expected one of {sorted(STRATEGIES)}") from None


def estimate_pose(landmarks, strategy: PoseEstimationStrategy | str = "ear_depth") -> PoseEstimate:
    if isinstance(strategy, str):
        strategy = get_strategy(strategy)
    return strategy.estimate(landmarks)


__all__ = [
    "PoseEstimationStrategy",
    "EarDepthStrategy",
    "EyeAsymmetryStrategy",
    "STRATEGIES",
    "get_strategy",
    "estimate_pose",
]
