"""Shared test fixtures for movepose tests."""

import numpy as np
import pytest

from movepose.cache import DetectionCache
from movepose.config import PoseConfig


@pytest.fixture
def frame():
    """Blank 640x480 RGB frame."""
    return np.zeros((480, 640, 3), dtype=np.uint8)


@pytest.fixture
def cache():
    return DetectionCache()


@pytest.fixture
def tracking_config():
    return PoseConfig(min_confidence=0.2, max_detected=1, skip_frame=True, skip_frames=5)
