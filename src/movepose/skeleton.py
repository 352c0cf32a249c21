"""Skeleton annotation building."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from movepose.output import Keypoint, Segment
from movepose.types import SKELETON_CHAINS


def build_annotations(
    keypoints: Sequence[Keypoint],
    min_confidence: float,
    chains: Mapping[str, Sequence[str]] = SKELETON_CHAINS,
) -> Dict[str, List[Segment]]:
    """Build drawable segments for every skeleton chain.

    A segment joins two consecutive parts of a chain and is emitted only
    when both parts are present and both scores exceed *min_confidence*.
    Chains that resolve no segment still appear with an empty list.

    Args:
        keypoints: Keypoints of one pose.
        min_confidence: Score threshold for both endpoints.
        chains: Chain name -> ordered part names.

    Returns:
        Chain name -> list of ``(position_a, position_b)`` segments.
    """
    by_part = {}
    for kpt in keypoints:
        by_part.setdefault(kpt.part, kpt)

    annotations: Dict[str, List[Segment]] = {}
    for name, parts in chains.items():
        segments: List[Segment] = []
        for part_a, part_b in zip(parts, parts[1:]):
            a = by_part.get(part_a)
            b = by_part.get(part_b)
            if a is None or b is None:
                continue
            if a.score > min_confidence and b.score > min_confidence:
                segments.append((a.position, b.position))
        annotations[name] = segments
    return annotations


__all__ = ["build_annotations"]
