"""Decoding of raw MoveNet output into pose results.

Single-pose (Lightning/Thunder) output::

    (1, 1, 17, 3)   -> 17 x (y, x, score)

Multi-pose output::

    (1, N, 56)      -> N x [17 x (y, x, score), ymin, xmin, ymax, xmax, score]

Keypoint coordinates are relative to the crop fed to the network and are
mapped back to the full image through the crop's reference region.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from movepose.coords import map_keypoint, round_score, tight_box
from movepose.errors import MalformedOutputError
from movepose.output import FULL_FRAME, Keypoint, PoseResult, Region
from movepose.skeleton import build_annotations
from movepose.types import (
    KEYPOINT_NAMES,
    MULTI_POSE_SCORE_OFFSET,
    MULTI_POSE_SLOT_SIZE,
    NUM_KEYPOINTS,
    PoseLayout,
)

logger = logging.getLogger(__name__)


def _extract_keypoints(
    slots: np.ndarray,
    min_confidence: float,
    ref_box: Region,
    image_size: tuple[int, int],
) -> tuple[Keypoint, ...]:
    """Build keypoints from a (17, 3) array of (y, x, score) slots."""
    keypoints = []
    for idx in range(NUM_KEYPOINTS):
        kpt_y, kpt_x, score = slots[idx]
        rounded = round_score(score)
        # stored scores are rounded, so the rounded value must pass too
        if score > min_confidence and rounded > min_confidence:
            position_raw, position = map_keypoint(kpt_y, kpt_x, ref_box, image_size)
            keypoints.append(Keypoint(
                part=KEYPOINT_NAMES[idx],
                score=rounded,
                position_raw=position_raw,
                position=position,
            ))
    return tuple(keypoints)


def _make_pose(
    pose_id: int,
    score: float,
    keypoints: Sequence[Keypoint],
    min_confidence: float,
) -> PoseResult:
    box, box_raw = tight_box(keypoints)
    return PoseResult(
        id=pose_id,
        score=score,
        box=box,
        box_raw=box_raw,
        keypoints=tuple(keypoints),
        annotations=build_annotations(keypoints, min_confidence),
    )


def decode_single_pose(
    raw: np.ndarray,
    min_confidence: float,
    image_size: tuple[int, int],
    ref_box: Region = FULL_FRAME,
) -> List[PoseResult]:
    """Decode single-pose output into exactly one pose with ``id=0``.

    Keypoints at or below *min_confidence* are dropped. The pose score is
    the highest retained keypoint score, 0 when none is retained.

    Raises:
        MalformedOutputError: If *raw* is not ``(1, 1, 17, 3)``.
    """
    arr = np.asarray(raw, dtype=np.float64)
    if arr.shape != (1, 1, NUM_KEYPOINTS, 3):
        raise MalformedOutputError(
            f"Single-pose output must have shape (1, 1, {NUM_KEYPOINTS}, 3), "
            f"got {arr.shape}",
            shape=arr.shape,
        )

    keypoints = _extract_keypoints(arr[0, 0], min_confidence, ref_box, image_size)
    score = max((k.score for k in keypoints), default=0)
    return [_make_pose(0, score, keypoints, min_confidence)]


def decode_multi_pose(
    raw: np.ndarray,
    min_confidence: float,
    max_detected: int,
    image_size: tuple[int, int],
    ref_box: Region = FULL_FRAME,
) -> List[PoseResult]:
    """Decode multi-pose output, sorted by score and capped.

    A slot whose aggregate score (rounded to 2 decimals) does not exceed
    *min_confidence* is dropped entirely. Surviving poses keep their slot
    index as ``id`` and the aggregate score as ``score``.

    Raises:
        MalformedOutputError: If *raw* is not ``(1, N, 56)``.
    """
    arr = np.asarray(raw, dtype=np.float64)
    if arr.ndim != 3 or arr.shape[0] != 1 or arr.shape[2] != MULTI_POSE_SLOT_SIZE:
        raise MalformedOutputError(
            f"Multi-pose output must have shape (1, N, {MULTI_POSE_SLOT_SIZE}), "
            f"got {arr.shape}",
            shape=arr.shape,
        )

    poses = []
    for slot_id, slot in enumerate(arr[0]):
        total_score = round_score(slot[MULTI_POSE_SCORE_OFFSET])
        if total_score <= min_confidence:
            continue
        slots = slot[: NUM_KEYPOINTS * 3].reshape(NUM_KEYPOINTS, 3)
        keypoints = _extract_keypoints(slots, min_confidence, ref_box, image_size)
        poses.append(_make_pose(slot_id, total_score, keypoints, min_confidence))

    # sorted() is stable: equal scores keep slot order
    poses = sorted(poses, key=lambda p: p.score, reverse=True)
    if len(poses) > max_detected:
        logger.debug("Capping %d poses to max_detected=%d", len(poses), max_detected)
    return poses[:max_detected]


def decode(
    raw: np.ndarray,
    layout: PoseLayout,
    *,
    min_confidence: float,
    max_detected: int,
    image_size: tuple[int, int],
    ref_box: Region = FULL_FRAME,
) -> List[PoseResult]:
    """Decode raw output according to the model's declared layout.

    Args:
        raw: Raw network output.
        layout: Layout declared by the model descriptor.
        min_confidence: Keypoint and aggregate score threshold.
        max_detected: Cap on multi-pose results.
        image_size: Full input image ``(width, height)``.
        ref_box: Region the network input was cropped from.

    Returns:
        Decoded poses.
    """
    if layout is PoseLayout.SINGLE_POSE:
        return decode_single_pose(raw, min_confidence, image_size, ref_box)
    if layout is PoseLayout.MULTI_POSE:
        return decode_multi_pose(raw, min_confidence, max_detected, image_size, ref_box)
    raise ValueError(f"Unsupported pose layout: {layout}")


__all__ = ["decode", "decode_single_pose", "decode_multi_pose"]
