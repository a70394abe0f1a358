"""Output writers.

Cropped faces go to `<output_dir>/crops`; per-frame records are split
into captured/rejected JSON indices and a YAML summary is written last.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import cv2
import numpy as np
import yaml

from .types import CaptureResult, ImageMeta

logger = logging.getLogger(__name__)


def build_record(
    meta: ImageMeta,
    result: CaptureResult,
    crop_path: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    rec: Dict[str, Any] = {
        "file": meta.path,
        "width": meta.width,
        "height": meta.height,
        "status": result.status,
        "accepted": result.accepted,
        "angles": asdict(result.pose) if result.pose is not None else None,
        "region": asdict(result.region) if result.region is not None else None,
        "capture_index": result.capture_index,
        "crop": crop_path,
    }
    if extra:
        rec.update(extra)
    return rec


def write_image(path: str | Path, image: np.ndarray) -> bool:
    """Unicode-safe imwrite (encode in memory, then write bytes)."""
    p = Path(path)
    ok, buf = cv2.imencode(p.suffix or ".png", image)
    if not ok:
        logger.warning("Failed to encode image for %s", p)
        return False
    try:
        buf.tofile(str(p))
    except OSError as e:
        logger.warning("Failed to write %s (%s)", p, e)
        return False
    return True


class ResultsWriter:
    def __init__(self, output_dir: str | Path, cfg: Optional[Dict[str, Any]] = None):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.crops_dir = self.output_dir / "crops"
        self.cfg = cfg or {}
        self.captured: List[Dict[str, Any]] = []
        self.rejected: List[Dict[str, Any]] = []
        self.skipped = 0

    def save_crop(self, src_path: str | Path, result: CaptureResult) -> Optional[str]:
        if result.cropped is None:
            return None
        self.crops_dir.mkdir(exist_ok=True)
        dest = self.crops_dir / f"{Path(src_path).stem}_{result.capture_index}.png"
        if write_image(dest, result.cropped):
            return str(dest)
        return None

    def add(self, record: Dict[str, Any]) -> None:
        if record.get("status") is None:
            self.skipped += 1
        elif record.get("accepted"):
            self.captured.append(record)
        else:
            self.rejected.append(record)

    def _write_json(self, path: Path, data: List[Dict[str, Any]]):
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def finalize(self) -> Dict[str, Any]:
        out_dir = self.output_dir

        self._write_json(out_dir / "captured_index.json", self.captured)
        self._write_json(out_dir / "rejected_index.json", self.rejected)

        reasons: Dict[str, int] = {}
        for rec in self.rejected:
            reasons[rec["status"]] = reasons.get(rec["status"], 0) + 1

        summary = {
            "counts": {
                "captured": len(self.captured),
                "rejected": len(self.rejected),
                "skipped": self.skipped,
                "total": len(self.captured) + len(self.rejected) + self.skipped,
            },
            "reasons": reasons,
            "capture": (self.cfg or {}).get("capture", {}),
            "paths": (self.cfg or {}).get("paths", {}),
        }
        with (out_dir / "summary.yaml").open("w", encoding="utf-8") as f:
            yaml.safe_dump(summary, f, sort_keys=False, allow_unicode=True)

        return summary


__all__ = ["build_record", "write_image", "ResultsWriter"]
