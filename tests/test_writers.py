"""Tests for output writers."""

import json

import numpy as np
import yaml

from smartcapture.types import CaptureResult, CropRegion, ImageMeta, PoseEstimate
from smartcapture.writers import ResultsWriter, build_record

META = ImageMeta(path="in/a.png", width=640, height=480)


def _captured():
    return CaptureResult(
        status="Captured!",
        cropped=np.full((20, 10, 3), 200, dtype=np.uint8),
        region=CropRegion(1, 2, 10, 20),
        pose=PoseEstimate(1.0, 2.0, 0.0),
        accepted=True,
        capture_index=1,
    )


class TestBuildRecord:
    def test_captured(self):
        rec = build_record(META, _captured(), "out/crops/a_1.png")
        assert rec["accepted"]
        assert rec["region"] == {"x": 1, "y": 2, "width": 10, "height": 20}
        assert rec["angles"] == {"yaw": 1.0, "pitch": 2.0, "roll": 0.0}
        assert rec["crop"] == "out/crops/a_1.png"

    def test_rejected(self):
        rec = build_record(META, CaptureResult(status="No face detected"))
        assert not rec["accepted"]
        assert rec["angles"] is None
        assert rec["region"] is None


class TestResultsWriter:
    def test_save_crop(self, tmp_path):
        writer = ResultsWriter(tmp_path)
        path = writer.save_crop("in/a.png", _captured())
        assert path.endswith("a_1.png")
        import cv2

        img = cv2.imread(path)
        assert img.shape == (20, 10, 3)

    def test_no_crop_no_file(self, tmp_path):
        writer = ResultsWriter(tmp_path)
        assert writer.save_crop("in/a.png", CaptureResult(status="Captured!", accepted=True)) is None

    def test_finalize(self, tmp_path):
        writer = ResultsWriter(tmp_path, {"capture": {"max_captures": 2}})
        writer.add(build_record(META, _captured()))
        writer.add(build_record(META, CaptureResult(status="No face detected")))
        writer.add(build_record(META, CaptureResult(status="No face detected")))
        writer.add(build_record(META, CaptureResult()))
        summary = writer.finalize()

        assert summary["counts"] == {"captured": 1, "rejected": 2, "skipped": 1, "total": 4}
        assert summary["reasons"] == {"No face detected": 2}
        captured = json.loads((tmp_path / "captured_index.json").read_text(encoding="utf-8"))
        assert len(captured) == 1
        on_disk = yaml.safe_load((tmp_path / "summary.yaml").read_text(encoding="utf-8"))
        assert on_disk["capture"] == {"max_captures": 2}
