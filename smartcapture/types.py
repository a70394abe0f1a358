from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np


@dataclass(frozen=True)
class LandmarkPoint:
    # x, y normalized to [0,1]; z is relative depth (more negative = closer)
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class PoseEstimate:
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0


NEUTRAL_POSE = PoseEstimate()

# Names accepted by pose.get_strategy
POSE_STRATEGIES = ("ear_depth", "eye_asymmetry")


@dataclass(frozen=True)
class CropRegion:
    x: int
    y: int
    width: int
    height: int

    def as_tuple(self):
        return self.x, self.y, self.width, self.height


@dataclass
class ImageMeta:
    path: str
    width: int
    height: int


@dataclass(frozen=True)
class CaptureConfig:
    """Per-session capture thresholds.

    `pitch_scale` multiplies `max_pitch_degrees` when gating; None means
    the selected pose strategy's default scale.
    """

    max_captures: int = 5
    max_yaw_degrees: float = 12.0
    max_pitch_degrees: float = 10.0
    padding: float = 0.3
    pose_strategy: str = "ear_depth"
    pitch_scale: Optional[float] = None
    status_with_angles: bool = False

    def __post_init__(self):
        if isinstance(self.max_captures, bool) or int(self.max_captures) != self.max_captures or self.max_captures <= 0:
            raise ValueError(f"max_captures must be a positive integer, got {self.max_captures!r}")
        if not self.max_yaw_degrees > 0:
            raise ValueError(f"max_yaw_degrees must be > 0, got {self.max_yaw_degrees!r}")
        if not self.max_pitch_degrees > 0:
            raise ValueError(f"max_pitch_degrees must be > 0, got {self.max_pitch_degrees!r}")
        if not self.padding >= 0:
            raise ValueError(f"padding must be >= 0, got {self.padding!r}")
        if self.pitch_scale is not None and not self.pitch_scale > 0:
            raise ValueError(f"pitch_scale must be > 0, got {self.pitch_scale!r}")
        if self.pose_strategy not in POSE_STRATEGIES:
            raise ValueError(f"Unknown pose strategy {self.pose_strategy!r}; expected one of {list(POSE_STRATEGIES)}")


class SessionState(str, Enum):
    ACCEPTING = "accepting"
    EXHAUSTED = "exhausted"


@dataclass
class CaptureSession:
    """Capture counter for one independent session.

    Only grows through `record_capture`; `reset` is the sole way back.
    """

    max_captures: int
    current_count: int = 0

    @classmethod
    def for_config(cls, config: CaptureConfig) -> "CaptureSession":
        return cls(max_captures=config.max_captures)

    @property
    def state(self) -> SessionState:
        if self.current_count >= self.max_captures:
            return SessionState.EXHAUSTED
        return SessionState.ACCEPTING

    @property
    def exhausted(self) -> bool:
        return self.state is SessionState.EXHAUSTED

    @property
    def remaining(self) -> int:
        return max(0, self.max_captures - self.current_count)

    def record_capture(self) -> int:
        if self.exhausted:
            return self.current_count
        self.current_count += 1
        return self.current_count

    def reset(self) -> None:
        self.current_count = 0


class Outcome(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class GateDecision:
    outcome: Outcome
    status: Optional[str] = None
    pose: Optional[PoseEstimate] = None

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPT


@dataclass
class CaptureResult:
    # status is None when the call was a no-op (exhausted session or missing input)
    status: Optional[str] = None
    cropped: Optional[np.ndarray] = None
    region: Optional[CropRegion] = None
    pose: Optional[PoseEstimate] = None
    accepted: bool = False
    capture_index: Optional[int] = None


@dataclass
class FaceAnalysis:
    detected: bool = False
    landmark_count: int = 0
    message: str = ""
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    quality_good: bool = False
    landmarks: List[LandmarkPoint] = field(default_factory=list)
