"""Tests for the FaceMesh adapter helpers (no model is run)."""

from smartcapture.facemesh import FaceMeshConfig, order_faces
from smartcapture.testing import face_landmarks


class TestFaceMeshConfig:
    def test_from_dict(self):
        cfg = FaceMeshConfig.from_dict({"max_faces": 3, "refine_landmarks": True})
        assert cfg.max_faces == 3
        assert cfg.refine_landmarks
        assert cfg.static_image_mode

    def test_from_none(self):
        assert FaceMeshConfig.from_dict(None) == FaceMeshConfig()


class TestOrderFaces:
    def test_largest_first(self):
        small = face_landmarks(box=(0.1, 0.2, 0.1, 0.2))
        large = face_landmarks(box=(0.3, 0.8, 0.2, 0.7))
        ordered = order_faces([small, large])
        assert ordered[0] is large
        assert ordered[1] is small
