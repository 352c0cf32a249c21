"""Output types for pose decoding.

Keypoints and poses are frozen dataclasses: built once per decode call
and never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

Point = Tuple[int, int]
PointRaw = Tuple[float, float]
Box = Tuple[float, float, float, float]  # (x, y, width, height)
Region = Tuple[float, float, float, float]  # (y0, x0, y1, x1), normalized
Segment = Tuple[Point, Point]

FULL_FRAME: Region = (0.0, 0.0, 1.0, 1.0)


@dataclass(frozen=True)
class Keypoint:
    """A single detected body part.

    Attributes:
        part: Part name (e.g. ``"leftShoulder"``).
        score: Confidence rounded to 2 decimals.
        position_raw: ``(x, y)`` normalized to the full input image.
        position: ``(x, y)`` in pixels.
    """

    part: str
    score: float
    position_raw: PointRaw
    position: Point

    def to_dict(self) -> Dict[str, Any]:
        return {
            "part": self.part,
            "score": self.score,
            "positionRaw": list(self.position_raw),
            "position": list(self.position),
        }


@dataclass(frozen=True)
class PoseResult:
    """One detected pose.

    Attributes:
        id: 0 for single-pose models, slot index for multi-pose models.
        score: Max keypoint score (single) or network aggregate score (multi).
        box: Tight ``(x, y, w, h)`` pixel bound of the keypoints.
        box_raw: Same bound in normalized coordinates.
        keypoints: Keypoints that passed the confidence filter, slot order.
        annotations: Chain name -> drawable segments.
    """

    id: int
    score: float
    box: Box
    box_raw: Box
    keypoints: Tuple[Keypoint, ...] = ()
    annotations: Dict[str, List[Segment]] = field(default_factory=dict)

    def get(self, part: str) -> Optional[Keypoint]:
        """Return the keypoint for *part*, or None if it was filtered out."""
        for kpt in self.keypoints:
            if kpt.part == part:
                return kpt
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "score": self.score,
            "box": list(self.box),
            "boxRaw": list(self.box_raw),
            "keypoints": [k.to_dict() for k in self.keypoints],
            "annotations": {
                name: [[list(a), list(b)] for a, b in segments]
                for name, segments in self.annotations.items()
            },
        }


@dataclass
class FrameResult:
    """Result of processing one frame.

    Attributes:
        poses: Final pose list, tracked poses by score (ties in region order)
            or full-frame poses.
        full_frame: Whether full-frame inference ran this frame.
        cached_regions: Number of cached regions inferred this frame.
        timing: Per-step timings in milliseconds.
    """

    poses: List[PoseResult] = field(default_factory=list)
    full_frame: bool = False
    cached_regions: int = 0
    timing: Optional[Dict[str, float]] = None


__all__ = [
    "Point",
    "PointRaw",
    "Box",
    "Region",
    "Segment",
    "FULL_FRAME",
    "Keypoint",
    "PoseResult",
    "FrameResult",
]
