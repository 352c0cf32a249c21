"""MoveNet ONNX backend.

Supported exports:
  - Lightning / Thunder: [1,H,W,3] -> [1,1,17,3]
  - MultiPose Lightning: [1,H,W,3] -> [1,6,56]

The layout and input size are read from the session once at load time.
Dynamic input sizes fall back to 256.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np

from movepose.backends.base import ModelDescriptor
from movepose.config import DEFAULT_INPUT_SIZE
from movepose.errors import MalformedOutputError, ModelUnavailableError
from movepose.paths import resolve_model_path
from movepose.types import MULTI_POSE_SLOT_SIZE, NUM_KEYPOINTS, PoseLayout

logger = logging.getLogger(__name__)

_ONNX_DTYPES = {
    "tensor(int32)": np.int32,
    "tensor(uint8)": np.uint8,
    "tensor(float)": np.float32,
}


def layout_from_shape(shape: Sequence[Any]) -> PoseLayout:
    """Determine the pose layout from a declared output shape.

    Raises:
        MalformedOutputError: If the shape matches neither layout.
    """
    dims = tuple(shape)
    if len(dims) == 4 and dims[-2] == NUM_KEYPOINTS and dims[-1] == 3:
        return PoseLayout.SINGLE_POSE
    if len(dims) == 3 and dims[-1] == MULTI_POSE_SLOT_SIZE:
        return PoseLayout.MULTI_POSE
    raise MalformedOutputError(
        f"Unrecognized MoveNet output shape: {dims}", shape=dims,
    )


def input_size_from_shape(shape: Sequence[Any]) -> int:
    """Read the square input size from an NHWC input shape."""
    dims = tuple(shape)
    size = dims[2] if len(dims) == 4 else None
    if not isinstance(size, int) or size <= 0:
        return DEFAULT_INPUT_SIZE
    return size


class OnnxMoveNetBackend:
    """MoveNet inference through ONNX Runtime.

    Args:
        model_path: ``.onnx`` file, absolute or relative to the models dir.
        models_dir: Override for the models directory.

    Example:
        >>> backend = OnnxMoveNetBackend("movenet/multipose.onnx")
        >>> backend.initialize("cpu")
        >>> raw = backend.infer(resized)       # (1, 6, 56)
        >>> backend.cleanup()
    """

    def __init__(
        self,
        model_path: str = "movenet/lightning.onnx",
        models_dir: Optional[Path] = None,
    ):
        self._model_path = model_path
        self._models_dir = models_dir
        self._session = None
        self._input_name: str = ""
        self._input_dtype = np.int32
        self._descriptor: Optional[ModelDescriptor] = None
        self._initialized = False

    @property
    def descriptor(self) -> ModelDescriptor:
        if self._descriptor is None:
            raise ModelUnavailableError("Backend not initialized. Call initialize() first.")
        return self._descriptor

    @property
    def is_available(self) -> bool:
        return self._initialized

    def initialize(self, device: str = "cpu") -> None:
        if self._initialized:
            logger.debug("MoveNet already loaded: %s", self._model_path)
            return

        try:
            import onnxruntime as ort
        except ImportError as e:
            raise ModelUnavailableError(
                "onnxruntime is required for OnnxMoveNetBackend. "
                "Install with: pip install onnxruntime"
            ) from e

        path = resolve_model_path(self._model_path, self._models_dir)
        if not path.exists():
            raise ModelUnavailableError(f"MoveNet ONNX model not found at {path}")

        providers = ["CUDAExecutionProvider", "CPUExecutionProvider"]
        if "cpu" in device.lower():
            providers = ["CPUExecutionProvider"]

        try:
            session = ort.InferenceSession(str(path), providers=providers)
        except Exception as e:
            raise ModelUnavailableError(f"Failed to load MoveNet model {path}: {e}") from e

        model_input = session.get_inputs()[0]
        model_output = session.get_outputs()[0]
        layout = layout_from_shape(model_output.shape)
        input_size = input_size_from_shape(model_input.shape)

        self._session = session
        self._input_name = model_input.name
        self._input_dtype = _ONNX_DTYPES.get(model_input.type, np.int32)
        self._descriptor = ModelDescriptor(
            layout=layout, input_size=input_size, name=path.stem,
        )
        self._initialized = True
        logger.info(
            "MoveNet loaded from %s (layout=%s, input=%d)",
            path, layout.value, input_size,
        )

    def infer(self, image: np.ndarray) -> np.ndarray:
        if not self._initialized or self._session is None:
            raise ModelUnavailableError("Backend not initialized. Call initialize() first.")

        tensor = image.astype(self._input_dtype)[np.newaxis, ...]
        return self._session.run(None, {self._input_name: tensor})[0]

    def cleanup(self) -> None:
        self._session = None
        self._descriptor = None
        self._initialized = False
        logger.info("MoveNet backend cleaned up")


__all__ = ["OnnxMoveNetBackend", "layout_from_shape", "input_size_from_shape"]
