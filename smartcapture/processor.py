"""Interactive face processor for per-frame preview loops.

Unlike the calculator, `analyze` reports angles for every frame without
touching the capture counter; `capture_frame` is the counting path.
"""

from __future__ import annotations

import logging
from typing import List

from .filters import CaptureStatus, check_pose
from .keypoints import to_points, usable_landmarks
from .pose import get_strategy
from .types import CaptureSession, FaceAnalysis, LandmarkPoint

logger = logging.getLogger(__name__)

VERSION = "SmartCapture 1.0.0 - face landmark pose gate"
MIN_IMAGE_SIDE = 100
GOOD_QUALITY = "Good quality face detected!"
NOT_INITIALIZED = "Error: Not initialized"
IMAGE_TOO_SMALL = "Image too small"


class SmartFaceProcessor:
    version = VERSION

    def __init__(
        self,
        max_yaw: float = 15.0,
        max_pitch: float = 15.0,
        max_captures: int = 5,
        pose_strategy: str = "eye_asymmetry",
    ):
        self.max_yaw = float(max_yaw)
        self.max_pitch = float(max_pitch)
        self.strategy = get_strategy(pose_strategy)
        self.session = CaptureSession(max_captures=int(max_captures))
        self.initialized = False
        self._last_landmarks: List[LandmarkPoint] = []

    def initialize(self) -> bool:
        self.initialized = True
        self.session.reset()
        return True

    def set_max_yaw(self, degrees: float) -> None:
        self.max_yaw = float(degrees)

    def set_max_pitch(self, degrees: float) -> None:
        self.max_pitch = float(degrees)

    def set_max_captures(self, count: int) -> None:
        self.session.max_captures = int(count)

    @property
    def max_captures(self) -> int:
        return self.session.max_captures

    @property
    def capture_count(self) -> int:
        return self.session.current_count

    def analyze(self, width: int, height: int, landmarks) -> FaceAnalysis:
        if not self.initialized:
            return FaceAnalysis(message=NOT_INITIALIZED)
        if width < MIN_IMAGE_SIDE or height < MIN_IMAGE_SIDE:
            return FaceAnalysis(message=IMAGE_TOO_SMALL)

        arr = usable_landmarks(landmarks)
        if arr is None:
            self._last_landmarks = []
            return FaceAnalysis(message=CaptureStatus.NO_FACE.value)
        self._last_landmarks = to_points(arr)
        if len(arr) == 0 or len(arr) < self.strategy.required_points:
            return FaceAnalysis(message=CaptureStatus.NO_FACE.value)

        pose = self.strategy.estimate(arr)
        max_pitch = self.max_pitch * self.strategy.default_pitch_scale
        reason = check_pose(pose, self.max_yaw, max_pitch, with_angles=True)
        return FaceAnalysis(
            detected=True,
            landmark_count=len(arr),
            message=reason or GOOD_QUALITY,
            yaw=pose.yaw,
            pitch=pose.pitch,
            roll=pose.roll,
            quality_good=reason is None,
            landmarks=list(self._last_landmarks),
        )

    def capture_frame(self, width: int, height: int, landmarks) -> bool:
        if self.session.exhausted:
            return False
        result = self.analyze(width, height, landmarks)
        if result.detected and result.quality_good:
            self.session.record_capture()
            logger.info("Captured %d/%d", self.capture_count, self.max_captures)
            return True
        return False

    def reset_captures(self) -> None:
        self.session.reset()

    def get_landmark(self, index: int) -> LandmarkPoint:
        if 0 <= index < len(self._last_landmarks):
            return self._last_landmarks[index]
        return LandmarkPoint(0.0, 0.0, 0.0)

    def get_landmarks(self) -> List[LandmarkPoint]:
        return list(self._last_landmarks)

    def status_text(self) -> str:
        if not self.initialized:
            return "Not initialized"
        return f"Ready - Captured: {self.capture_count}/{self.max_captures}"

    def config_text(self) -> str:
        return f"Max Yaw: {int(self.max_yaw)}°, Max Pitch: {int(self.max_pitch)}°, Max Captures: {self.max_captures}"


__all__ = ["SmartFaceProcessor", "VERSION", "GOOD_QUALITY", "IMAGE_TOO_SMALL", "NOT_INITIALIZED"]
