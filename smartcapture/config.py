from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping

import yaml

from .types import CaptureConfig

logger = logging.getLogger(__name__)


DEFAULTS: Dict[str, Any] = {
    "paths": {
        "input_dir": "images",
        "output_dir": "outputs",
    },
    "capture": {
        "max_captures": 5,
        "max_yaw_degrees": 12.0,
        "max_pitch_degrees": 10.0,
        # Fraction added to the landmark box on each axis before clamping
        "padding": 0.3,
        # ear_depth | eye_asymmetry
        "pose_strategy": "ear_depth",
        # Multiplier on max_pitch_degrees; null uses the strategy default
        # (2.0 for ear_depth, 1.0 for eye_asymmetry)
        "pitch_scale": None,
        "status_with_angles": False,
    },
    "mediapipe": {
        "static_image_mode": True,
        "refine_landmarks": False,
        "max_faces": 1,
    },
    "runtime": {
        "max_files": None,
        "log_level": "INFO",
    },
}


def _deep_merge(base: MutableMapping[str, Any], override: Mapping[str, Any]) -> MutableMapping[str, Any]:
    for k, v in override.items():
        if k in base and isinstance(base[k], MutableMapping) and isinstance(v, Mapping):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_yaml(path: str | Path | None) -> Dict[str, Any]:
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        logger.warning("YAML config not found: %s", p)
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError("Top-level of YAML must be a mapping/dict")
    return data


def merge_config(yaml_cfg: Mapping[str, Any] | None = None, cli_overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
    cfg: Dict[str, Any] = copy.deepcopy(DEFAULTS)
    if yaml_cfg:
        _deep_merge(cfg, dict(yaml_cfg))
    if cli_overrides:
        _deep_merge(cfg, dict(cli_overrides))
    return cfg


def load_and_merge(yaml_path: str | Path | None, cli_overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
    yaml_cfg = load_yaml(yaml_path)
    return merge_config(yaml_cfg, cli_overrides)


def capture_config_from(cfg: Mapping[str, Any]) -> CaptureConfig:
    """Build a validated CaptureConfig from the `capture` section."""
    cap = dict(DEFAULTS["capture"])
    cap.update(cfg.get("capture") or {})
    pitch_scale = cap.get("pitch_scale")
    return CaptureConfig(
        max_captures=int(cap["max_captures"]),
        max_yaw_degrees=float(cap["max_yaw_degrees"]),
        max_pitch_degrees=float(cap["max_pitch_degrees"]),
        padding=float(cap["padding"]),
        pose_strategy=str(cap["pose_strategy"]),
        pitch_scale=float(pitch_scale) if pitch_scale is not None else None,
        status_with_angles=bool(cap.get("status_with_angles", False)),
    )


__all__ = ["DEFAULTS", "load_yaml", "merge_config", "load_and_merge", "capture_config_from"]
