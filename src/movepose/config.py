"""Configuration for the pose pipeline.

Example:
    >>> from movepose.config import PoseConfig
    >>>
    >>> config = PoseConfig(
    ...     min_confidence=0.2,
    ...     max_detected=6,
    ...     skip_frame=True,
    ...     skip_frames=10,
    ... )
    >>> config = PoseConfig.from_yaml("movenet.yaml")
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

# Poses need more keypoints than this to seed a cached region
MIN_CACHE_KEYPOINTS = 10
# Scale applied to the half side of a cached region
CACHE_BOX_PADDING = 1.5
# Input resolution used when the model declares a dynamic input size
DEFAULT_INPUT_SIZE = 256


@dataclass
class PoseConfig:
    """Pose detection settings.

    Attributes:
        min_confidence: Keypoints and multi-pose slots must score above this.
        max_detected: Maximum poses returned per frame (>= 1).
        skip_frame: Enable region tracking (cached regions between frames).
        skip_frames: Frames tracked on cached regions before a full-frame
            refresh is forced.
        model_path: Model file, absolute or relative to the models directory.
        device: Inference device (e.g. "cpu", "cuda:0").
        debug: Log per-frame cache decisions.
    """

    min_confidence: float = 0.3
    max_detected: int = 1
    skip_frame: bool = False
    skip_frames: int = 1
    model_path: str = "movenet/lightning.onnx"
    device: str = "cpu"
    debug: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError(
                f"min_confidence must be within [0, 1], got {self.min_confidence}"
            )
        if self.max_detected < 1:
            raise ValueError(f"max_detected must be >= 1, got {self.max_detected}")
        if self.skip_frames < 0:
            raise ValueError(f"skip_frames must be >= 0, got {self.skip_frames}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoseConfig":
        """Create a PoseConfig from a dictionary (e.g., loaded from YAML).

        Accepts either a flat mapping or one nested under a ``body`` key.
        Unknown keys are ignored.

        Args:
            data: Dictionary with configuration data.

        Returns:
            PoseConfig instance.
        """
        body = (data.get("body") or data) if data else {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in body.items() if k in known})

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "PoseConfig":
        """Load a PoseConfig from a YAML file.

        Raises:
            ImportError: If PyYAML is not installed.
            FileNotFoundError: If the file doesn't exist.
        """
        try:
            import yaml
        except ImportError:
            raise ImportError(
                "PyYAML is required for YAML config support. "
                "Install it with: pip install pyyaml"
            )

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


__all__ = [
    "PoseConfig",
    "MIN_CACHE_KEYPOINTS",
    "CACHE_BOX_PADDING",
    "DEFAULT_INPUT_SIZE",
]
