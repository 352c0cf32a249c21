"""Image crop/resize operations used to build network inputs."""

from __future__ import annotations

import cv2
import numpy as np

from movepose.output import Region


def _empty_like(image: np.ndarray, size: int) -> np.ndarray:
    channels = image.shape[2:] if image.ndim == 3 else ()
    return np.zeros((size, size, *channels), dtype=image.dtype)


def crop_and_resize(image: np.ndarray, box: Region, size: int) -> np.ndarray:
    """Crop a normalized region and resize it to ``size x size``.

    Sampling is bilinear with corners aligned to the region edges, so
    ``(0, 0, 1, 1)`` reproduces the full frame. Samples falling outside
    the image are zero, which lets padded regions extend past the borders.

    Args:
        image: Frame (H, W, C) or (H, W).
        box: Region ``(y0, x0, y1, x1)`` in normalized coordinates.
        size: Output side length in pixels.

    Returns:
        Resized crop (size, size[, C]) with the input dtype.
    """
    h, w = image.shape[:2]
    if h == 0 or w == 0:
        return _empty_like(image, size)

    y0, x0, y1, x1 = box
    step = max(size - 1, 1)
    scale_x = (x1 - x0) * (w - 1) / step
    scale_y = (y1 - y0) * (h - 1) / step
    # Destination -> source mapping (used with WARP_INVERSE_MAP)
    matrix = np.array(
        [
            [scale_x, 0.0, x0 * (w - 1)],
            [0.0, scale_y, y0 * (h - 1)],
        ],
        dtype=np.float64,
    )
    return cv2.warpAffine(
        image,
        matrix,
        (size, size),
        flags=cv2.INTER_LINEAR | cv2.WARP_INVERSE_MAP,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=0,
    )


def resize_bilinear(image: np.ndarray, size: int) -> np.ndarray:
    """Resize the whole frame to ``size x size`` with bilinear sampling."""
    h, w = image.shape[:2]
    if h == 0 or w == 0:
        return _empty_like(image, size)
    return cv2.resize(image, (size, size), interpolation=cv2.INTER_LINEAR)


def image_size(image: np.ndarray) -> tuple[int, int]:
    """Return ``(width, height)`` of a frame."""
    h, w = image.shape[:2]
    return int(w), int(h)


__all__ = ["crop_and_resize", "resize_bilinear", "image_size"]
