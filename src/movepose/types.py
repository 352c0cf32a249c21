"""MoveNet keypoint and skeleton definitions."""

from enum import Enum


class KeypointIndex:
    """Slot indices of the 17 MoveNet keypoints.

    Example:
        >>> raw = output[0, 0]                  # (17, 3) single-pose slots
        >>> y, x, score = raw[KeypointIndex.LEFT_WRIST]
    """

    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16


# Part names in slot order
KEYPOINT_NAMES = [
    "nose",
    "leftEye",
    "rightEye",
    "leftEar",
    "rightEar",
    "leftShoulder",
    "rightShoulder",
    "leftElbow",
    "rightElbow",
    "leftWrist",
    "rightWrist",
    "leftHip",
    "rightHip",
    "leftKnee",
    "rightKnee",
    "leftAnkle",
    "rightAnkle",
]

NUM_KEYPOINTS = len(KEYPOINT_NAMES)

# Multi-pose slot: 17 (y, x, score) triples + (ymin, xmin, ymax, xmax, score)
MULTI_POSE_SLOT_SIZE = NUM_KEYPOINTS * 3 + 5
MULTI_POSE_SCORE_OFFSET = NUM_KEYPOINTS * 3 + 4

# Named chains drawn as consecutive segments
SKELETON_CHAINS: dict[str, list[str]] = {
    "leftLeg": ["leftHip", "leftKnee", "leftAnkle"],
    "rightLeg": ["rightHip", "rightKnee", "rightAnkle"],
    "torso": ["leftShoulder", "rightShoulder", "rightHip", "leftHip", "leftShoulder"],
    "leftArm": ["leftShoulder", "leftElbow", "leftWrist"],
    "rightArm": ["rightShoulder", "rightElbow", "rightWrist"],
    "head": [],
}


class PoseLayout(Enum):
    """Raw output layout of a MoveNet model variant.

    SINGLE_POSE: ``(1, 1, 17, 3)`` - one pose, ``(y, x, score)`` per slot.
    MULTI_POSE: ``(1, N, 56)`` - up to N poses, 17 triples + box + score.
    """

    SINGLE_POSE = "single"
    MULTI_POSE = "multi"

    @classmethod
    def from_string(cls, s: str) -> "PoseLayout":
        """Parse a layout from ``"single"`` or ``"multi"``.

        Raises:
            ValueError: If the string names no known layout.
        """
        s_lower = s.lower()
        for layout in cls:
            if layout.value == s_lower:
                return layout
        raise ValueError(
            f"Unknown pose layout: {s}. "
            f"Valid layouts: {', '.join(layout.value for layout in cls)}"
        )


__all__ = [
    "KeypointIndex",
    "KEYPOINT_NAMES",
    "NUM_KEYPOINTS",
    "MULTI_POSE_SLOT_SIZE",
    "MULTI_POSE_SCORE_OFFSET",
    "SKELETON_CHAINS",
    "PoseLayout",
]
