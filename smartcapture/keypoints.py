from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

import numpy as np

from .types import LandmarkPoint


# MediaPipe FaceMesh landmark indices (468-point topology)
FACE_MESH_POINTS = 468

LANDMARKS: Dict[str, int] = {
    "nose": 1,
    "forehead": 10,
    "left_eye": 33,
    "chin": 152,
    "nose_bridge": 168,
    "left_ear": 234,
    "right_eye": 263,
    "right_ear": 454,
}


def as_landmark_array(landmarks) -> np.ndarray:
    """Return landmarks as a float64 array of shape (N, 3).

    Accepts an (N,2)/(N,3) array, a sequence of `LandmarkPoint`, a sequence
    of (x, y[, z]) tuples, or any objects exposing `.x/.y/.z` (e.g. a
    MediaPipe NormalizedLandmarkList's `.landmark`). Missing z is 0.
    """
    if landmarks is None:
        return np.zeros((0, 3), dtype=np.float64)
    if hasattr(landmarks, "landmark"):
        landmarks = landmarks.landmark
    if isinstance(landmarks, np.ndarray):
        arr = np.asarray(landmarks, dtype=np.float64)
    else:
        rows = []
        for pt in landmarks:
            if hasattr(pt, "x"):
                rows.append((pt.x, pt.y, getattr(pt, "z", 0.0)))
            else:
                rows.append(tuple(pt))
        if not rows:
            return np.zeros((0, 3), dtype=np.float64)
        arr = np.asarray(rows, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise ValueError(f"Landmarks must have shape (N, 2) or (N, 3), got {arr.shape}")
    if arr.shape[1] == 2:
        arr = np.hstack([arr, np.zeros((arr.shape[0], 1), dtype=np.float64)])
    return arr


def usable_landmarks(landmarks) -> Optional[np.ndarray]:
    """Like `as_landmark_array`, but None for input the gate cannot use.

    Wrongly shaped or non-numeric input and sets containing NaN/inf give None.
    """
    try:
        arr = as_landmark_array(landmarks)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(arr).all():
        return None
    return arr


def to_points(arr: np.ndarray) -> list:
    return [LandmarkPoint(float(x), float(y), float(z)) for x, y, z in as_landmark_array(arr)]


def required_points(indices: Iterable[int]) -> int:
    return max(indices) + 1


def has_indices(arr: np.ndarray, indices: Sequence[int]) -> bool:
    return len(arr) >= required_points(indices)


__all__ = [
    "FACE_MESH_POINTS",
    "LANDMARKS",
    "as_landmark_array",
    "usable_landmarks",
    "to_points",
    "required_points",
    "has_indices",
]
