"""Processing step registry and timing for the frame pipeline."""

import time
from dataclasses import dataclass
from functools import wraps
from typing import List, Optional


@dataclass(frozen=True)
class ProcessingStep:
    """Describes one step of the frame pipeline.

    Attributes:
        name: Short identifier, also the key in timing dicts.
        description: Human-readable description of what this step does.
        method_name: Name of the method implementing this step.
    """

    name: str
    description: str
    method_name: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"


def processing_step(name: str, description: str = ""):
    """Register a method as a timed processing step.

    When the instance has a ``_step_timings`` dict (not None), the elapsed
    time in milliseconds is accumulated under *name*, so a step called
    once per cached region reports the total for the frame.

    Example:
        class FrameProcessor:
            @processing_step("full_frame", "Infer on the resized frame")
            def _infer_full_frame(self, image, config):
                ...
    """

    def decorator(func):
        step_info = ProcessingStep(
            name=name,
            description=description or func.__doc__ or "",
            method_name=func.__name__,
        )

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            timings = getattr(self, "_step_timings", None)
            if timings is None:
                return func(self, *args, **kwargs)
            start = time.perf_counter_ns()
            try:
                return func(self, *args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter_ns() - start) / 1_000_000
                timings[name] = timings.get(name, 0.0) + elapsed_ms

        wrapper._step_info = step_info
        return wrapper

    return decorator


def get_processing_steps(cls_or_instance) -> List[ProcessingStep]:
    """Return the registered steps of a class or instance, by name."""
    cls = cls_or_instance if isinstance(cls_or_instance, type) else type(cls_or_instance)
    steps = []
    for attr_name in dir(cls):
        attr = getattr(cls, attr_name, None)
        if callable(attr) and hasattr(attr, "_step_info"):
            steps.append(attr._step_info)
    return sorted(steps, key=lambda s: s.name)


__all__ = ["ProcessingStep", "processing_step", "get_processing_steps"]
