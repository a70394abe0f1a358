"""Smart capture: gate a frame on head pose and crop the accepted face.

`smart_capture` is the pure per-frame transform; `SmartCaptureCalculator`
owns one config/session pair for a host that feeds it frames.

Usage:
    calc = SmartCaptureCalculator(CaptureConfig(max_captures=3))
    for image, faces in frames:
        result = calc.process(image, faces)
        if result.cropped is not None:
            save(result.cropped)
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from .crop import compute_crop, crop_image
from .filters import CaptureStatus, evaluate
from .pose import PoseEstimationStrategy, get_strategy
from .types import CaptureConfig, CaptureResult, CaptureSession, Outcome

logger = logging.getLogger(__name__)


def smart_capture(
    image: np.ndarray,
    landmarks,
    config: CaptureConfig,
    session: CaptureSession,
    strategy: Optional[PoseEstimationStrategy] = None,
) -> CaptureResult:
    """Evaluate one face and crop it from `image` when accepted.

    The session is the only state touched; `image` is never modified.
    """
    decision = evaluate(session, config, landmarks, strategy)
    if decision.outcome is Outcome.EXHAUSTED:
        return CaptureResult()
    if not decision.accepted:
        return CaptureResult(status=decision.status, pose=decision.pose)

    h, w = image.shape[:2]
    region = compute_crop(landmarks, w, h, config.padding)
    cropped = None
    if region is None:
        logger.debug("Degenerate crop region for %dx%d image; no output", w, h)
    else:
        cropped = crop_image(image, region)
    return CaptureResult(
        status=decision.status,
        cropped=cropped,
        region=region,
        pose=decision.pose,
        accepted=True,
        capture_index=session.current_count,
    )


class SmartCaptureCalculator:
    def __init__(self, config: Optional[CaptureConfig] = None, strategy: Optional[PoseEstimationStrategy] = None):
        self.config = config or CaptureConfig()
        self.strategy = strategy or get_strategy(self.config.pose_strategy)
        self.session = CaptureSession.for_config(self.config)

    def open(self) -> "SmartCaptureCalculator":
        self.session = CaptureSession.for_config(self.config)
        return self

    @property
    def current_count(self) -> int:
        return self.session.current_count

    def reset(self) -> None:
        self.session.reset()

    def process(self, image: Optional[np.ndarray], faces: Optional[Sequence]) -> CaptureResult:
        """Handle one frame carrying zero or more faces; only the first is evaluated.

        Missing image or landmark input is a no-op, as is an exhausted session.
        """
        if self.session.exhausted or image is None or faces is None:
            return CaptureResult()
        if len(faces) == 0:
            return CaptureResult(status=CaptureStatus.NO_FACE.value)
        return smart_capture(image, faces[0], self.config, self.session, self.strategy)


__all__ = ["smart_capture", "SmartCaptureCalculator"]
