"""Detection cache for region tracking between frames.

The cache carries two pieces of state from frame N into frame N+1:

- cached regions: padded boxes around the poses found in frame N,
  inferred as cheap crops instead of running on the full frame,
- the staleness counter: frames since the last full-frame pass.

The cache belongs to one tracking session. FrameProcessor reads a
snapshot at the start of a frame and commits the new state at the end,
so an abandoned frame leaves the previous state untouched.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from movepose.output import Region

# Guarantees a full-frame pass on the very first frame
NEVER_REFRESHED = sys.maxsize // 2


class CacheState(Enum):
    NO_CACHE = "no_cache"
    TRACKING = "tracking"
    STALE = "stale"


@dataclass(frozen=True)
class CacheSnapshot:
    regions: Tuple[Region, ...]
    skipped: int


class DetectionCache:
    """Cached regions plus staleness counter for one tracking session.

    Example:
        >>> cache = DetectionCache()
        >>> cache.state(skip_frames=5)
        <CacheState.NO_CACHE: 'no_cache'>
    """

    def __init__(self) -> None:
        self._regions: Tuple[Region, ...] = ()
        self._skipped = NEVER_REFRESHED

    @property
    def regions(self) -> Tuple[Region, ...]:
        return self._regions

    @property
    def skipped(self) -> int:
        return self._skipped

    @property
    def is_empty(self) -> bool:
        return not self._regions

    def state(self, skip_frames: int) -> CacheState:
        """Classify the cache against a refresh interval."""
        if self._skipped >= skip_frames:
            # the next frame's increment pushes it past the interval
            return CacheState.STALE
        if not self._regions:
            return CacheState.NO_CACHE
        return CacheState.TRACKING

    def snapshot(self) -> CacheSnapshot:
        return CacheSnapshot(regions=self._regions, skipped=self._skipped)

    def commit(self, regions: Iterable[Region], skipped: int) -> None:
        """Replace the whole cache state at once."""
        self._regions = tuple(tuple(float(v) for v in r) for r in regions)
        self._skipped = skipped

    def clear(self) -> None:
        """Drop cached regions; the staleness counter is kept."""
        self._regions = ()

    def reset(self) -> None:
        """Forget everything, as if no frame was ever processed."""
        self._regions = ()
        self._skipped = NEVER_REFRESHED

    def __len__(self) -> int:
        return len(self._regions)

    def __repr__(self) -> str:
        return f"DetectionCache(regions={len(self._regions)}, skipped={self._skipped})"


__all__ = ["DetectionCache", "CacheSnapshot", "CacheState", "NEVER_REFRESHED"]
