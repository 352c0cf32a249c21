"""Coordinate transforms between crop, normalized and pixel space.

Three spaces are involved:

- crop-relative: what the network returns, ``[0, 1]`` inside the crop
  it was fed,
- normalized: ``[0, 1]`` relative to the full input image,
- pixel: absolute integer coordinates in the full input image.

Reference regions use ``(y0, x0, y1, x1)`` in normalized space, the
same convention as the cached regions.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from movepose.output import Box, Keypoint, Point, PointRaw, Region


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf."""
    return int(math.floor(value + 0.5))


def round_score(score: float) -> float:
    """Round a confidence score to 2 decimals."""
    return round_half_up(100 * float(score)) / 100


def map_keypoint(
    kpt_y: float,
    kpt_x: float,
    ref_box: Region,
    image_size: tuple[int, int],
) -> tuple[PointRaw, Point]:
    """Map a crop-relative keypoint into normalized and pixel space.

    Out-of-crop keypoints are not clamped; callers may clip later.

    Args:
        kpt_y: Normalized y inside the crop.
        kpt_x: Normalized x inside the crop.
        ref_box: Crop region ``(y0, x0, y1, x1)`` in normalized space.
        image_size: Full input image ``(width, height)`` in pixels.

    Returns:
        Tuple of (position_raw, position), both ``(x, y)``.
    """
    y0, x0, y1, x1 = ref_box
    width, height = image_size
    raw_x = (x1 - x0) * float(kpt_x) + x0
    raw_y = (y1 - y0) * float(kpt_y) + y0
    position = (round_half_up(width * raw_x), round_half_up(height * raw_y))
    return (raw_x, raw_y), position


def tight_box(keypoints: Sequence[Keypoint]) -> tuple[Box, Box]:
    """Axis-aligned bound of the keypoints in pixel and normalized space.

    An empty keypoint set yields a zero-size box at the origin.

    Returns:
        Tuple of (box, box_raw), each ``(x, y, w, h)``.
    """
    if not keypoints:
        return (0, 0, 0, 0), (0.0, 0.0, 0.0, 0.0)

    xs = [k.position[0] for k in keypoints]
    ys = [k.position[1] for k in keypoints]
    box = (min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    xs_raw = [k.position_raw[0] for k in keypoints]
    ys_raw = [k.position_raw[1] for k in keypoints]
    box_raw = (
        min(xs_raw),
        min(ys_raw),
        max(xs_raw) - min(xs_raw),
        max(ys_raw) - min(ys_raw),
    )
    return box, box_raw


def enclose(
    points: Iterable[Point],
    padding: float,
    image_size: tuple[int, int],
) -> Region:
    """Enclose pixel points in a padded square region.

    The square is centered on the points' extent, its half side is the
    largest half-extent times *padding*, truncated to whole pixels.

    Args:
        points: ``(x, y)`` pixel positions, at least one.
        padding: Scale factor applied to the half side.
        image_size: Full input image ``(width, height)``.

    Returns:
        Normalized region ``(y0, x0, y1, x1)``.

    Raises:
        ValueError: If *points* is empty.
    """
    pts = list(points)
    if not pts:
        raise ValueError("enclose() requires at least one point")

    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    x_max, x_min = max(xs), min(xs)
    y_max, y_min = max(ys), min(ys)
    cx = (x_max + x_min) / 2
    cy = (y_max + y_min) / 2
    half = max(cx - x_min, cy - y_min, x_max - cx, y_max - cy) * padding

    bx = math.trunc(cx - half)
    by = math.trunc(cy - half)
    side = math.trunc(2 * half)

    width, height = image_size
    # Degenerate images map to a zero-size region at the origin
    w = width or 1
    h = height or 1
    x0 = bx / w
    y0 = by / h
    return (y0, x0, y0 + side / h, x0 + side / w)


__all__ = ["round_half_up", "round_score", "map_keypoint", "tight_box", "enclose"]
