"""Per-frame pose pipeline with region tracking.

One frame runs through up to three steps::

    cached regions ──> crop + infer + decode ─┐
                                              ├─> poses ──> cache update
    full frame ─────> resize + infer + decode ┘

Tracked regions are cheap crops around the poses of the previous frame.
The full-frame pass is the authoritative one: it runs when tracking has
not already filled ``max_detected`` and the staleness counter has passed
``skip_frames``, and its poses replace the tracked ones.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from movepose.backends.base import InferenceBackend, ModelDescriptor
from movepose.cache import DetectionCache
from movepose.config import CACHE_BOX_PADDING, MIN_CACHE_KEYPOINTS, PoseConfig
from movepose.coords import enclose
from movepose.decoder import decode
from movepose.errors import ModelUnavailableError
from movepose.image import crop_and_resize, image_size, resize_bilinear
from movepose.output import FULL_FRAME, FrameResult, PoseResult, Region
from movepose.steps import ProcessingStep, get_processing_steps, processing_step

logger = logging.getLogger(__name__)


def regions_from_poses(
    poses: Sequence[PoseResult],
    size: Tuple[int, int],
) -> List[Region]:
    """Build cached regions for poses with enough keypoints.

    Args:
        poses: Poses of the current frame.
        size: Full image ``(width, height)``.

    Returns:
        One padded region per qualifying pose, in pose order.
    """
    regions = []
    for pose in poses:
        if len(pose.keypoints) > MIN_CACHE_KEYPOINTS:
            positions = [k.position for k in pose.keypoints]
            regions.append(enclose(positions, CACHE_BOX_PADDING, size))
    return regions


class FrameProcessor:
    """Runs MoveNet on a stream of frames, reusing regions between frames.

    Each processor owns one DetectionCache, so frames must be fed in
    temporal order. Several processors may share a backend.

    Args:
        backend: Inference backend (default: OnnxMoveNetBackend).
        config: Default configuration; ``process()`` can override per frame.
        cache: Tracking state (default: a fresh DetectionCache).
        executor: Optional executor to infer cached regions concurrently.

    Example:
        >>> processor = FrameProcessor(config=PoseConfig(skip_frame=True))
        >>> with processor:
        ...     for frame in frames:
        ...         poses = processor.process_frame(frame)
    """

    def __init__(
        self,
        backend: Optional[InferenceBackend] = None,
        config: Optional[PoseConfig] = None,
        cache: Optional[DetectionCache] = None,
        executor: Optional[Executor] = None,
    ):
        self._config = config or PoseConfig()
        self._backend = backend
        self._cache = cache if cache is not None else DetectionCache()
        self._executor = executor
        self._descriptor: Optional[ModelDescriptor] = None
        self._initialized = False

        # Step timing tracking (populated by @processing_step during a frame)
        self._step_timings: Optional[Dict[str, float]] = None

    @property
    def cache(self) -> DetectionCache:
        return self._cache

    @property
    def config(self) -> PoseConfig:
        return self._config

    @property
    def descriptor(self) -> Optional[ModelDescriptor]:
        return self._descriptor

    @property
    def is_available(self) -> bool:
        return self._descriptor is not None

    @property
    def processing_steps(self) -> List[ProcessingStep]:
        return get_processing_steps(self)

    def initialize(self) -> None:
        """Load the backend once.

        An unavailable model is logged here and never retried; every frame
        afterwards yields an empty result.
        """
        if self._initialized:
            return

        if self._backend is None:
            from movepose.backends.onnx_movenet import OnnxMoveNetBackend
            self._backend = OnnxMoveNetBackend(self._config.model_path)

        try:
            self._backend.initialize(self._config.device)
            self._descriptor = self._backend.descriptor
            logger.info(
                "FrameProcessor ready (model=%s, layout=%s, input=%d)",
                self._descriptor.name,
                self._descriptor.layout.value,
                self._descriptor.input_size,
            )
        except ModelUnavailableError as e:
            logger.warning("Pose model unavailable, frames will yield no poses: %s", e)

        self._initialized = True

    def cleanup(self) -> None:
        if self._backend is not None:
            self._backend.cleanup()
        self._cache.reset()
        self._descriptor = None
        self._initialized = False
        logger.info("FrameProcessor cleaned up")

    def reset(self) -> None:
        """Drop tracking state; the next frame runs on the full frame."""
        self._cache.reset()

    def __enter__(self) -> "FrameProcessor":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    # ========== Processing Steps (decorated methods) ==========

    def _infer_region(
        self,
        image: np.ndarray,
        region: Region,
        config: PoseConfig,
        size: Tuple[int, int],
    ) -> List[PoseResult]:
        descriptor = self._descriptor
        crop = crop_and_resize(image, region, descriptor.input_size)
        raw = self._backend.infer(crop)
        return decode(
            raw,
            descriptor.layout,
            min_confidence=config.min_confidence,
            max_detected=config.max_detected,
            image_size=size,
            ref_box=region,
        )

    @processing_step("tracked_regions", "Infer and decode every cached region")
    def _infer_regions(
        self,
        image: np.ndarray,
        regions: Sequence[Region],
        config: PoseConfig,
        size: Tuple[int, int],
    ) -> List[PoseResult]:
        if not regions:
            return []

        if self._executor is not None and len(regions) > 1:
            futures = [
                self._executor.submit(self._infer_region, image, r, config, size)
                for r in regions
            ]
            # merge in region order regardless of completion order
            per_region = [f.result() for f in futures]
        else:
            per_region = [self._infer_region(image, r, config, size) for r in regions]

        poses: List[PoseResult] = []
        for region_poses in per_region:
            poses.extend(region_poses)

        # stable: equal scores keep region order
        poses = sorted(poses, key=lambda p: p.score, reverse=True)
        if len(poses) > config.max_detected:
            logger.debug("Capping %d tracked poses to max_detected=%d", len(poses), config.max_detected)
        return poses[: config.max_detected]

    @processing_step("full_frame", "Infer and decode the resized full frame")
    def _infer_full_frame(
        self,
        image: np.ndarray,
        config: PoseConfig,
        size: Tuple[int, int],
    ) -> List[PoseResult]:
        descriptor = self._descriptor
        resized = resize_bilinear(image, descriptor.input_size)
        raw = self._backend.infer(resized)
        return decode(
            raw,
            descriptor.layout,
            min_confidence=config.min_confidence,
            max_detected=config.max_detected,
            image_size=size,
            ref_box=FULL_FRAME,
        )

    @processing_step("cache_regions", "Derive cached regions from the poses")
    def _build_regions(
        self,
        poses: Sequence[PoseResult],
        size: Tuple[int, int],
    ) -> List[Region]:
        return regions_from_poses(poses, size)

    # ========== Main process method ==========

    def process(
        self,
        image: np.ndarray,
        config: Optional[PoseConfig] = None,
    ) -> FrameResult:
        """Detect poses in one frame and update the tracking state.

        The cache is only written after every step succeeded; if inference
        or decoding raises, the previous cache state is kept.

        Args:
            image: Frame (H, W, 3).
            config: Per-frame override of the processor's configuration.

        Returns:
            FrameResult with the poses, ordered tracked-first.

        Raises:
            MalformedOutputError: If the network output does not match the
                model's declared layout.
        """
        config = config or self._config
        if not self._initialized:
            self.initialize()
        if self._descriptor is None:
            return FrameResult()

        size = image_size(image)
        snapshot = self._cache.snapshot()
        regions = snapshot.regions if config.skip_frame else ()
        skipped = snapshot.skipped + 1

        self._step_timings = {}
        try:
            poses = self._infer_regions(image, regions, config, size)
            tracked = len(regions)

            full_frame = False
            if len(poses) != config.max_detected and skipped > config.skip_frames:
                poses = self._infer_full_frame(image, config, size)
                skipped = 0
                full_frame = True

            new_regions: List[Region] = []
            if config.skip_frame:
                new_regions = self._build_regions(poses, size)

            timing = self._step_timings
        finally:
            self._step_timings = None

        self._cache.commit(new_regions, skipped)

        if config.debug:
            logger.debug(
                "frame: tracked=%d full_frame=%s poses=%d cached=%d skipped=%d",
                tracked, full_frame, len(poses), len(new_regions), skipped,
            )

        return FrameResult(
            poses=poses,
            full_frame=full_frame,
            cached_regions=tracked,
            timing=timing,
        )

    def process_frame(
        self,
        image: np.ndarray,
        config: Optional[PoseConfig] = None,
    ) -> List[PoseResult]:
        """Detect poses in one frame; see :meth:`process`."""
        return self.process(image, config).poses


__all__ = ["FrameProcessor", "regions_from_poses"]
