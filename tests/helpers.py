"""Raw-output builders and a scripted backend for movepose tests."""

import numpy as np

from movepose.backends.base import ModelDescriptor
from movepose.errors import ModelUnavailableError
from movepose.types import MULTI_POSE_SCORE_OFFSET, MULTI_POSE_SLOT_SIZE, NUM_KEYPOINTS, PoseLayout


def keypoint_grid(score=0.9):
    """(17, 3) slots spread over the crop, all with *score*."""
    slots = np.zeros((NUM_KEYPOINTS, 3), dtype=np.float32)
    for i in range(NUM_KEYPOINTS):
        slots[i] = [0.1 + 0.05 * i, 0.3 + 0.02 * i, score]
    return slots


def single_pose_raw(scores=None, slots=None):
    """Single-pose output (1, 1, 17, 3)."""
    if slots is None:
        slots = keypoint_grid()
    slots = np.array(slots, dtype=np.float32)
    if scores is not None:
        slots[:, 2] = scores
    return slots[np.newaxis, np.newaxis, ...]


def multi_pose_raw(pose_scores, keypoint_score=0.9):
    """Multi-pose output (1, N, 56) with one aggregate score per slot."""
    raw = np.zeros((1, len(pose_scores), MULTI_POSE_SLOT_SIZE), dtype=np.float32)
    for i, pose_score in enumerate(pose_scores):
        raw[0, i, : NUM_KEYPOINTS * 3] = keypoint_grid(keypoint_score).reshape(-1)
        raw[0, i, MULTI_POSE_SCORE_OFFSET] = pose_score
    return raw


class FakeBackend:
    """Backend returning scripted raw outputs.

    Args:
        outputs: A raw array returned on every call, or a callable taking
            the input image and returning a raw array.
        layout: Declared output layout.
        input_size: Declared input size.
        unavailable: Raise ModelUnavailableError from initialize().
    """

    def __init__(self, outputs=None, layout=PoseLayout.SINGLE_POSE,
                 input_size=192, unavailable=False):
        self._outputs = outputs if outputs is not None else single_pose_raw()
        self._descriptor = ModelDescriptor(layout=layout, input_size=input_size, name="fake")
        self._unavailable = unavailable
        self.init_calls = 0
        self.cleanup_calls = 0
        self.inputs = []

    @property
    def descriptor(self):
        return self._descriptor

    def initialize(self, device="cpu"):
        self.init_calls += 1
        if self._unavailable:
            raise ModelUnavailableError("fake model missing")

    def infer(self, image):
        self.inputs.append(image.shape)
        if callable(self._outputs):
            return self._outputs(image)
        return self._outputs

    def cleanup(self):
        self.cleanup_calls += 1
