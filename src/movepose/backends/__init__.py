"""Inference backends."""

from movepose.backends.base import InferenceBackend, ModelDescriptor

__all__ = ["InferenceBackend", "ModelDescriptor"]
