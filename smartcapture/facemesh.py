from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

try:
    import cv2
    import mediapipe as mp
except Exception:  # pragma: no cover - environment import guard
    cv2 = None  # type: ignore
    mp = None  # type: ignore

from .crop import landmark_bounds
from .keypoints import as_landmark_array

logger = logging.getLogger(__name__)


@dataclass
class FaceMeshConfig:
    static_image_mode: bool = True
    refine_landmarks: bool = False
    max_faces: int = 1

    @classmethod
    def from_dict(cls, cfg: Optional[dict]) -> "FaceMeshConfig":
        cfg = cfg or {}
        return cls(
            static_image_mode=bool(cfg.get("static_image_mode", True)),
            refine_landmarks=bool(cfg.get("refine_landmarks", False)),
            max_faces=int(cfg.get("max_faces", 1)),
        )


def _box_area(landmarks: np.ndarray) -> float:
    min_x, max_x, min_y, max_y = landmark_bounds(landmarks)
    return max(0.0, max_x - min_x) * max(0.0, max_y - min_y)


def order_faces(faces: List[np.ndarray]) -> List[np.ndarray]:
    """Largest face first; the capture path only evaluates the first one."""
    return sorted(faces, key=_box_area, reverse=True)


class FaceMeshDetector:
    """Reusable wrapper around MediaPipe FaceMesh producing normalized landmark sets.

    Usage:
        with FaceMeshDetector(FaceMeshConfig()) as det:
            faces = det.detect(image_bgr)
    """

    def __init__(self, cfg: Optional[FaceMeshConfig] = None):
        if mp is None or cv2 is None:
            raise ImportError("mediapipe and opencv-python must be installed to use FaceMeshDetector")
        self.cfg = cfg or FaceMeshConfig()
        self._mesh = None

    def __enter__(self):
        self._mesh = mp.solutions.face_mesh.FaceMesh(
            static_image_mode=self.cfg.static_image_mode,
            refine_landmarks=self.cfg.refine_landmarks,
            max_num_faces=self.cfg.max_faces,
        )
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._mesh is not None:
            self._mesh.close()
            self._mesh = None

    def _ensure_open(self):
        if self._mesh is None:
            # Allow use without context manager by lazy init
            self.__enter__()

    def detect(self, image_bgr: np.ndarray) -> List[np.ndarray]:
        """Return one (N, 3) normalized landmark array per detected face."""
        self._ensure_open()
        assert self._mesh is not None

        # MediaPipe expects RGB
        img_rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
        results = self._mesh.process(img_rgb)
        if not results or not results.multi_face_landmarks:
            return []
        faces = [as_landmark_array(flm) for flm in results.multi_face_landmarks]
        logger.debug("FaceMesh found %d face(s)", len(faces))
        return order_faces(faces)


__all__ = ["FaceMeshDetector", "FaceMeshConfig", "order_faces"]
