"""Tests for DetectionCache state."""

import dataclasses

import pytest

from movepose.cache import NEVER_REFRESHED, CacheSnapshot, CacheState, DetectionCache


class TestDetectionCache:
    def test_initial_state(self, cache):
        assert cache.is_empty
        assert len(cache) == 0
        assert cache.regions == ()
        assert cache.skipped == NEVER_REFRESHED

    def test_first_frame_is_stale(self, cache):
        assert cache.state(skip_frames=5) is CacheState.STALE

    def test_commit_replaces_state(self, cache):
        cache.commit([(0.1, 0.2, 0.5, 0.6)], 0)
        assert cache.regions == ((0.1, 0.2, 0.5, 0.6),)
        assert cache.skipped == 0
        assert not cache.is_empty

        cache.commit([], 3)
        assert cache.regions == ()
        assert cache.skipped == 3

    def test_commit_copies_regions(self, cache):
        regions = [[0.1, 0.2, 0.5, 0.6]]
        cache.commit(regions, 0)
        regions[0][0] = 0.9
        assert cache.regions[0][0] == 0.1

    def test_state_tracking(self, cache):
        cache.commit([(0.0, 0.0, 0.5, 0.5)], 1)
        assert cache.state(skip_frames=5) is CacheState.TRACKING

    def test_state_no_cache(self, cache):
        cache.commit([], 1)
        assert cache.state(skip_frames=5) is CacheState.NO_CACHE

    def test_state_stale(self, cache):
        cache.commit([(0.0, 0.0, 0.5, 0.5)], 5)
        assert cache.state(skip_frames=5) is CacheState.STALE

    def test_clear_keeps_counter(self, cache):
        cache.commit([(0.0, 0.0, 0.5, 0.5)], 2)
        cache.clear()
        assert cache.is_empty
        assert cache.skipped == 2

    def test_reset(self, cache):
        cache.commit([(0.0, 0.0, 0.5, 0.5)], 2)
        cache.reset()
        assert cache.is_empty
        assert cache.skipped == NEVER_REFRESHED

    def test_snapshot_is_frozen(self, cache):
        cache.commit([(0.0, 0.0, 0.5, 0.5)], 2)
        snapshot = cache.snapshot()
        assert snapshot == CacheSnapshot(regions=((0.0, 0.0, 0.5, 0.5),), skipped=2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.skipped = 0

        cache.commit([], 7)
        assert snapshot.skipped == 2
        assert len(snapshot.regions) == 1

    def test_repr(self, cache):
        cache.commit([(0.0, 0.0, 0.5, 0.5)], 2)
        assert repr(cache) == "DetectionCache(regions=1, skipped=2)"
