"""Smart face capture.

Gates face frames on a landmark-based head-pose estimate and crops the
accepted faces with padding, up to a per-session capture quota. The
landmarks come from an external face-mesh model (MediaPipe FaceMesh in
the CLI).
"""

from . import config as config
from . import types as types
from . import keypoints as keypoints
from . import pose as pose
from . import filters as filters
from . import crop as crop
from .calculator import SmartCaptureCalculator, smart_capture
from .processor import SmartFaceProcessor
from .types import CaptureConfig, CaptureResult, CaptureSession, CropRegion, LandmarkPoint, PoseEstimate

__all__ = [
    "config",
    "types",
    "keypoints",
    "pose",
    "filters",
    "crop",
    "SmartCaptureCalculator",
    "smart_capture",
    "SmartFaceProcessor",
    "CaptureConfig",
    "CaptureResult",
    "CaptureSession",
    "CropRegion",
    "LandmarkPoint",
    "PoseEstimate",
]
