"""MoveNet pose decoding and region tracking."""

from movepose.backends.base import InferenceBackend, ModelDescriptor
from movepose.cache import CacheState, DetectionCache
from movepose.config import PoseConfig
from movepose.decoder import decode
from movepose.errors import MalformedOutputError, ModelUnavailableError, MovePoseError
from movepose.output import FrameResult, Keypoint, PoseResult
from movepose.processor import FrameProcessor
from movepose.types import KEYPOINT_NAMES, KeypointIndex, PoseLayout

__version__ = "0.1.0"

__all__ = [
    "FrameProcessor",
    "DetectionCache",
    "CacheState",
    "PoseConfig",
    "decode",
    "InferenceBackend",
    "ModelDescriptor",
    "Keypoint",
    "PoseResult",
    "FrameResult",
    "KeypointIndex",
    "KEYPOINT_NAMES",
    "PoseLayout",
    "MovePoseError",
    "ModelUnavailableError",
    "MalformedOutputError",
]
