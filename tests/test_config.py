"""Tests for YAML config loading and merging."""

from pathlib import Path

import pytest

from smartcapture.config import DEFAULTS, capture_config_from, load_and_merge, load_yaml, merge_config
from smartcapture.types import CaptureConfig

DEFAULT_YAML = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


class TestLoadYaml:
    def test_no_path(self):
        assert load_yaml(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_yaml(tmp_path / "nope.yaml") == {}

    def test_non_mapping(self, tmp_path):
        p = tmp_path / "list.yaml"
        p.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_yaml(p)

    def test_empty_file(self, tmp_path):
        p = tmp_path / "empty.yaml"
        p.write_text("", encoding="utf-8")
        assert load_yaml(p) == {}


class TestMerge:
    def test_defaults(self):
        cfg = merge_config()
        assert cfg["capture"]["max_captures"] == 5
        assert cfg["capture"]["pose_strategy"] == "ear_depth"

    def test_overrides_do_not_leak_into_defaults(self):
        merge_config({"capture": {"padding": 0.9}})
        assert DEFAULTS["capture"]["padding"] == 0.3

    def test_cli_beats_yaml(self, tmp_path):
        p = tmp_path / "cfg.yaml"
        p.write_text("capture:\n  max_captures: 7\n  padding: 0.5\n", encoding="utf-8")
        cfg = load_and_merge(p, {"capture": {"max_captures": 2}})
        assert cfg["capture"]["max_captures"] == 2
        assert cfg["capture"]["padding"] == 0.5
        assert cfg["capture"]["max_yaw_degrees"] == 12.0

    def test_shipped_default_yaml(self):
        cfg = load_and_merge(DEFAULT_YAML)
        assert capture_config_from(cfg) == capture_config_from(merge_config())


class TestCaptureConfigFrom:
    def test_builds_config(self):
        cfg = merge_config({"capture": {"max_captures": 3, "pose_strategy": "eye_asymmetry", "pitch_scale": 1.5}})
        cap = capture_config_from(cfg)
        assert cap == CaptureConfig(
            max_captures=3,
            max_yaw_degrees=12.0,
            max_pitch_degrees=10.0,
            padding=0.3,
            pose_strategy="eye_asymmetry",
            pitch_scale=1.5,
        )

    def test_missing_section_uses_defaults(self):
        assert capture_config_from({}) == CaptureConfig()

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            capture_config_from({"capture": {"pose_strategy": "pnp"}})

    def test_invalid_quota(self):
        with pytest.raises(ValueError):
            capture_config_from({"capture": {"max_captures": 0}})
