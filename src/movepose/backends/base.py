"""Backend protocol definitions for pose inference."""

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from movepose.types import PoseLayout


@dataclass(frozen=True)
class ModelDescriptor:
    """Static facts about a loaded model, fixed at load time.

    Attributes:
        layout: Output layout (single or multi pose).
        input_size: Square input resolution in pixels.
        name: Model identifier for logs.
    """

    layout: PoseLayout
    input_size: int
    name: str = "movenet"


class InferenceBackend(Protocol):
    """Protocol for pose inference backends.

    Implementations run the network on an already cropped and resized
    ``(input_size, input_size, 3)`` image and return the raw output array.
    They hold no per-frame state.
    """

    @property
    def descriptor(self) -> ModelDescriptor:
        """Descriptor of the loaded model."""
        ...

    def initialize(self, device: str = "cpu") -> None:
        """Load the model. Raises ModelUnavailableError on failure."""
        ...

    def infer(self, image: np.ndarray) -> np.ndarray:
        """Run the network on one input image."""
        ...

    def cleanup(self) -> None:
        """Release resources and unload the model."""
        ...


__all__ = ["ModelDescriptor", "InferenceBackend"]
