"""Tests for keypoint definitions and PoseLayout."""

import pytest

from movepose.types import (
    KEYPOINT_NAMES,
    MULTI_POSE_SCORE_OFFSET,
    MULTI_POSE_SLOT_SIZE,
    SKELETON_CHAINS,
    KeypointIndex,
    PoseLayout,
)


class TestKeypoints:
    def test_names_match_indices(self):
        assert len(KEYPOINT_NAMES) == 17
        assert KEYPOINT_NAMES[KeypointIndex.NOSE] == "nose"
        assert KEYPOINT_NAMES[KeypointIndex.LEFT_WRIST] == "leftWrist"
        assert KEYPOINT_NAMES[KeypointIndex.RIGHT_ANKLE] == "rightAnkle"

    def test_multi_pose_slot(self):
        assert MULTI_POSE_SLOT_SIZE == 56
        assert MULTI_POSE_SCORE_OFFSET == 55

    def test_chains_use_known_parts(self):
        for parts in SKELETON_CHAINS.values():
            assert set(parts) <= set(KEYPOINT_NAMES)


class TestPoseLayout:
    def test_from_string(self):
        assert PoseLayout.from_string("single") is PoseLayout.SINGLE_POSE
        assert PoseLayout.from_string("MULTI") is PoseLayout.MULTI_POSE

    def test_from_string_invalid(self):
        with pytest.raises(ValueError):
            PoseLayout.from_string("triple")
