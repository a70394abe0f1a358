"""Padded face crop region from the landmark extent."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .keypoints import as_landmark_array
from .types import CropRegion

# Pixel products within this distance of an integer are snapped to it before
# truncation so that e.g. (0.7 - 0.3) * 1000 counts as 400 px, not 399.
_SNAP = 1e-6


def _trunc(v: float) -> int:
    r = round(v)
    if abs(v - r) < _SNAP:
        return int(r)
    return int(v)


def landmark_bounds(landmarks):
    """Return (min_x, max_x, min_y, max_y) in normalized coordinates.

    Scan starts from (1, 0, 1, 0), so identical points collapse to a
    zero-size box.
    """
    arr = as_landmark_array(landmarks)
    min_x, max_x, min_y, max_y = 1.0, 0.0, 1.0, 0.0
    if len(arr):
        min_x = min(min_x, float(arr[:, 0].min()))
        max_x = max(max_x, float(arr[:, 0].max()))
        min_y = min(min_y, float(arr[:, 1].min()))
        max_y = max(max_y, float(arr[:, 1].max()))
    return min_x, max_x, min_y, max_y


def compute_crop(landmarks, image_width: int, image_height: int, padding: float) -> Optional[CropRegion]:
    """Padded bounding box of the landmarks in pixel space, clamped to the image.

    Returns None when the clamped region has no area.
    """
    min_x, max_x, min_y, max_y = landmark_bounds(landmarks)

    w = _trunc((max_x - min_x) * image_width)
    h = _trunc((max_y - min_y) * image_height)
    cx = _trunc(min_x * image_width + w // 2)
    cy = _trunc(min_y * image_height + h // 2)

    pad_w = _trunc(w * (1.0 + padding))
    pad_h = _trunc(h * (1.0 + padding))
    x = cx - pad_w // 2
    y = cy - pad_h // 2

    x = max(0, x)
    y = max(0, y)
    pad_w = min(pad_w, image_width - x)
    pad_h = min(pad_h, image_height - y)

    if pad_w <= 0 or pad_h <= 0:
        return None
    return CropRegion(x=x, y=y, width=pad_w, height=pad_h)


def crop_image(image: np.ndarray, region: CropRegion) -> np.ndarray:
    """Copy `region` out of `image` into a new array of the same dtype/channels."""
    return np.ascontiguousarray(image[region.y:region.y + region.height, region.x:region.x + region.width]).copy()


__all__ = ["landmark_bounds", "compute_crop", "crop_image"]
