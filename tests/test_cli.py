"""Tests for movepose CLI argument parsing and helpers."""

import pytest

from movepose.cli import _build_config, _build_parser, _format_frame, _resolve_input
from movepose.output import FrameResult, PoseResult


class TestCLIParser:
    def test_run_basic(self):
        parser = _build_parser()
        args = parser.parse_args(["run", "--input", "video.mp4"])
        assert args.command == "run"
        assert args.input == "video.mp4"
        assert args.model is None
        assert args.config is None
        assert args.max_frames is None
        assert args.tracking is False
        assert args.json is False

    def test_run_options(self):
        parser = _build_parser()
        args = parser.parse_args([
            "run", "-i", "0",
            "--model", "movenet/multipose.onnx",
            "--max-frames", "100",
            "--min-confidence", "0.25",
            "--max-detected", "6",
            "--skip-frames", "10",
            "--tracking", "--json", "-v",
        ])
        assert args.input == "0"
        assert args.model == "movenet/multipose.onnx"
        assert args.max_frames == 100
        assert args.min_confidence == 0.25
        assert args.max_detected == 6
        assert args.skip_frames == 10
        assert args.tracking is True
        assert args.json is True
        assert args.verbose is True

    def test_run_requires_input(self):
        parser = _build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["run"])

    def test_info(self):
        parser = _build_parser()
        args = parser.parse_args(["info", "--model", "m.onnx"])
        assert args.command == "info"
        assert args.model == "m.onnx"

    def test_no_command(self):
        parser = _build_parser()
        args = parser.parse_args([])
        assert args.command is None


class TestResolveInput:
    def test_camera_index(self):
        assert _resolve_input("0") == 0

    def test_path(self):
        assert _resolve_input("video.mp4") == "video.mp4"


class TestBuildConfig:
    def test_defaults(self):
        args = _build_parser().parse_args(["run", "-i", "video.mp4"])
        config = _build_config(args)
        assert config.skip_frame is False
        assert config.max_detected == 1

    def test_overrides(self):
        args = _build_parser().parse_args([
            "run", "-i", "video.mp4", "--tracking", "--max-detected", "6",
            "--skip-frames", "3", "--model", "movenet/multipose.onnx",
        ])
        config = _build_config(args)
        assert config.skip_frame is True
        assert config.max_detected == 6
        assert config.skip_frames == 3
        assert config.model_path == "movenet/multipose.onnx"

    def test_yaml_then_overrides(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("body:\n  min_confidence: 0.4\n  max_detected: 3\n")
        args = _build_parser().parse_args([
            "run", "-i", "video.mp4", "--config", str(path), "--max-detected", "5",
        ])
        config = _build_config(args)
        assert config.min_confidence == 0.4
        assert config.max_detected == 5

    def test_invalid_override(self):
        args = _build_parser().parse_args(["run", "-i", "v.mp4", "--max-detected", "0"])
        with pytest.raises(ValueError):
            _build_config(args)


class TestFormatFrame:
    def test_summary_line(self):
        pose = PoseResult(id=0, score=0.87, box=(0, 0, 0, 0), box_raw=(0.0, 0.0, 0.0, 0.0))
        line = _format_frame(3, FrameResult(poses=[pose], full_frame=True))
        assert "frame=3" in line
        assert "poses=1" in line
        assert "0.87" in line
        assert "mode=full" in line
