"""Pose quality gate.

Checks run in order and stop at the first failure: exhausted session,
missing face, yaw, pitch. Passing frames are counted against the session.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional

from .keypoints import usable_landmarks
from .pose import PoseEstimationStrategy, get_strategy
from .types import CaptureConfig, CaptureSession, GateDecision, Outcome, PoseEstimate

logger = logging.getLogger(__name__)


class CaptureStatus(str, Enum):
    NO_FACE = "No face detected"
    YAW = "Face turned too much (Yaw)"
    PITCH = "Face tilted up/down too much (Pitch)"
    CAPTURED = "Captured!"


_ANGLE_TEMPLATES = {
    CaptureStatus.YAW: "Face turned too much (Yaw: {angle}°)",
    CaptureStatus.PITCH: "Face tilted up/down too much (Pitch: {angle}°)",
}


def format_status(status: CaptureStatus, angle: Optional[float] = None) -> str:
    """Render a status; yaw/pitch rejections embed the angle when one is given."""
    template = _ANGLE_TEMPLATES.get(status)
    if template is None or angle is None:
        return status.value
    return template.format(angle=int(angle))


def pitch_limit(config: CaptureConfig, strategy: PoseEstimationStrategy) -> float:
    scale = config.pitch_scale if config.pitch_scale is not None else strategy.default_pitch_scale
    return config.max_pitch_degrees * scale


def check_pose(pose: PoseEstimate, max_yaw: float, max_pitch: float, with_angles: bool = False) -> Optional[str]:
    """Return the rejection status for `pose`, or None if it passes."""
    if not (math.isfinite(pose.yaw) and math.isfinite(pose.pitch)):
        return CaptureStatus.NO_FACE.value
    if abs(pose.yaw) > max_yaw:
        return format_status(CaptureStatus.YAW, pose.yaw if with_angles else None)
    if abs(pose.pitch) > max_pitch:
        return format_status(CaptureStatus.PITCH, pose.pitch if with_angles else None)
    return None


def evaluate(
    session: CaptureSession,
    config: CaptureConfig,
    landmarks,
    strategy: Optional[PoseEstimationStrategy] = None,
) -> GateDecision:
    """Run the gate for one frame; increments `session` on accept."""
    if session.exhausted:
        return GateDecision(Outcome.EXHAUSTED)

    strategy = strategy or get_strategy(config.pose_strategy)
    arr = usable_landmarks(landmarks)
    if arr is None:
        logger.debug("Rejected: malformed or non-finite landmarks")
        return GateDecision(Outcome.REJECT, CaptureStatus.NO_FACE.value)
    if len(arr) == 0 or len(arr) < strategy.required_points:
        logger.debug("Rejected: %d landmarks (need %d)", len(arr), strategy.required_points)
        return GateDecision(Outcome.REJECT, CaptureStatus.NO_FACE.value)

    pose = strategy.estimate(arr)
    reason = check_pose(pose, config.max_yaw_degrees, pitch_limit(config, strategy), config.status_with_angles)
    if reason is not None:
        logger.debug("Rejected: %s (yaw=%.2f pitch=%.2f)", reason, pose.yaw, pose.pitch)
        return GateDecision(Outcome.REJECT, reason, pose)

    count = session.record_capture()
    logger.info("Captured %d/%d (yaw=%.2f pitch=%.2f)", count, session.max_captures, pose.yaw, pose.pitch)
    if session.exhausted:
        logger.info("Capture quota reached (%d)", session.max_captures)
    return GateDecision(Outcome.ACCEPT, CaptureStatus.CAPTURED.value, pose)


__all__ = ["CaptureStatus", "format_status", "pitch_limit", "check_pose", "evaluate"]
