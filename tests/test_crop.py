"""Tests for crop region computation and image cropping."""

import numpy as np
import pytest

from smartcapture.crop import compute_crop, crop_image, landmark_bounds
from smartcapture.testing import coordinate_image, face_landmarks
from smartcapture.types import CropRegion


class TestComputeCrop:
    def test_padded_box_centered_on_landmarks(self, frontal_landmarks):
        region = compute_crop(frontal_landmarks, 1000, 1000, 0.3)
        assert region == CropRegion(x=240, y=140, width=520, height=520)
        assert region.x + region.width // 2 == 500
        assert region.y + region.height // 2 == 400

    def test_no_padding(self):
        lms = face_landmarks(box=(0.25, 0.75, 0.25, 0.75))
        assert compute_crop(lms, 200, 100, 0.0) == CropRegion(50, 25, 100, 50)

    def test_clamped_at_top_left(self):
        lms = face_landmarks(box=(0.0, 0.2, 0.0, 0.2))
        assert compute_crop(lms, 100, 100, 1.0) == CropRegion(0, 0, 40, 40)

    def test_clamped_at_bottom_right(self):
        lms = face_landmarks(box=(0.8, 1.0, 0.8, 1.0))
        assert compute_crop(lms, 100, 100, 1.0) == CropRegion(70, 70, 30, 30)

    def test_identical_points_give_no_region(self):
        lms = np.full((468, 3), 0.5)
        assert compute_crop(lms, 1000, 1000, 5.0) is None

    def test_region_outside_image_gives_no_region(self):
        lms = face_landmarks(box=(1.2, 1.4, 0.4, 0.6))
        assert compute_crop(lms, 100, 100, 0.0) is None

    def test_empty_landmarks_give_no_region(self):
        assert compute_crop([], 100, 100, 0.3) is None

    def test_pure(self, frontal_landmarks):
        first = compute_crop(frontal_landmarks, 640, 480, 0.3)
        second = compute_crop(frontal_landmarks, 640, 480, 0.3)
        assert first == second

    def test_region_within_image(self):
        lms = face_landmarks(box=(0.05, 0.95, 0.1, 0.9))
        region = compute_crop(lms, 640, 480, 0.5)
        assert region.x >= 0 and region.y >= 0
        assert region.x + region.width <= 640
        assert region.y + region.height <= 480


class TestLandmarkBounds:
    def test_bounds_ordered(self, frontal_landmarks):
        min_x, max_x, min_y, max_y = landmark_bounds(frontal_landmarks)
        assert (min_x, max_x, min_y, max_y) == pytest.approx((0.3, 0.7, 0.2, 0.6))
        assert min_x <= max_x and min_y <= max_y

    def test_scan_starts_from_unit_box(self):
        # Scan starts at min=1, max=0, so an off-image set keeps min_x at 1
        lms = face_landmarks(box=(1.2, 1.4, 0.4, 0.6))
        assert landmark_bounds(lms)[0] == 1.0


class TestCropImage:
    def test_copies_region(self):
        img = coordinate_image(1000, 1000)
        out = crop_image(img, CropRegion(240, 140, 520, 520))
        assert out.shape == (520, 520, 3)
        assert out.dtype == img.dtype
        assert tuple(out[0, 0]) == (240, 140, 0)
        assert tuple(out[-1, -1]) == (759, 659, 0)

    def test_does_not_share_memory(self):
        img = coordinate_image(100, 100)
        before = img.copy()
        out = crop_image(img, CropRegion(10, 10, 20, 20))
        out[:] = 0
        assert np.array_equal(img, before)
        assert not np.shares_memory(img, out)

    def test_grayscale(self):
        img = np.arange(100, dtype=np.uint8).reshape(10, 10)
        out = crop_image(img, CropRegion(2, 3, 4, 5))
        assert out.shape == (5, 4)
        assert out[0, 0] == 32
