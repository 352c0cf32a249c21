"""Tests for pose output types."""

import dataclasses

import pytest

from movepose.output import FrameResult, Keypoint, PoseResult


def _pose():
    kpts = (
        Keypoint(part="nose", score=0.9, position_raw=(0.5, 0.25), position=(320, 120)),
        Keypoint(part="leftEye", score=0.8, position_raw=(0.52, 0.24), position=(333, 115)),
    )
    return PoseResult(
        id=2,
        score=0.85,
        box=(320, 115, 13, 5),
        box_raw=(0.5, 0.24, 0.02, 0.01),
        keypoints=kpts,
        annotations={"head": []},
    )


class TestPoseResult:
    def test_get(self):
        pose = _pose()
        assert pose.get("leftEye").position == (333, 115)
        assert pose.get("rightEye") is None

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            _pose().score = 1.0

    def test_to_dict(self):
        d = _pose().to_dict()
        assert d["id"] == 2
        assert d["boxRaw"] == [0.5, 0.24, 0.02, 0.01]
        assert d["keypoints"][0] == {
            "part": "nose",
            "score": 0.9,
            "positionRaw": [0.5, 0.25],
            "position": [320, 120],
        }
        assert d["annotations"] == {"head": []}


class TestFrameResult:
    def test_defaults(self):
        result = FrameResult()
        assert result.poses == []
        assert result.full_frame is False
        assert result.cached_regions == 0
        assert result.timing is None
