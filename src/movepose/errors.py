"""Exceptions raised by movepose."""


class MovePoseError(Exception):
    """Base class for movepose errors."""


class ModelUnavailableError(MovePoseError):
    """The inference backend could not be loaded or is not initialized."""


class MalformedOutputError(MovePoseError, ValueError):
    """Raw network output does not match the declared pose layout.

    Indicates a model/version mismatch rather than a bad frame, so it is
    never converted into an empty result.
    """

    def __init__(self, message: str, shape: tuple = ()) -> None:
        super().__init__(message)
        self.shape = tuple(shape)


__all__ = ["MovePoseError", "ModelUnavailableError", "MalformedOutputError"]
