"""Model directory resolution.

Models live in ``~/.movepose/models`` by default. Override with
``MOVEPOSE_MODELS_DIR`` or ``MOVEPOSE_HOME``.
"""

import os
from pathlib import Path
from typing import Optional, Union


def get_home_dir() -> Path:
    """Return the movepose home directory, creating it if needed.

    Resolution order:
        1. ``MOVEPOSE_HOME`` environment variable.
        2. ``~/.movepose`` (default).
    """
    home = os.environ.get("MOVEPOSE_HOME")
    home_dir = Path(home) if home else Path.home() / ".movepose"
    home_dir.mkdir(parents=True, exist_ok=True)
    return home_dir


def get_models_dir() -> Path:
    """Return the models directory, creating it if it doesn't exist.

    Resolution order:
        1. ``MOVEPOSE_MODELS_DIR`` (absolute or relative to CWD).
        2. ``{home}/models`` where *home* is from :func:`get_home_dir`.
    """
    env_val = os.environ.get("MOVEPOSE_MODELS_DIR")
    if env_val:
        models_dir = Path(env_val)
        if not models_dir.is_absolute():
            models_dir = Path.cwd() / models_dir
    else:
        models_dir = get_home_dir() / "models"
    models_dir.mkdir(parents=True, exist_ok=True)
    return models_dir


def resolve_model_path(
    model_path: Union[str, Path],
    models_dir: Optional[Path] = None,
) -> Path:
    """Resolve a model path; relative paths are taken from the models dir."""
    path = Path(model_path).expanduser()
    if path.is_absolute():
        return path
    return (models_dir or get_models_dir()) / path


__all__ = ["get_home_dir", "get_models_dir", "resolve_model_path"]
