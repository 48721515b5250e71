"""Exceptions raised by the dsblog package."""

from __future__ import annotations


class DsblogError(Exception):
    """Base class for errors raised by dsblog."""


class FrontMatterError(DsblogError, ValueError):
    """A post has missing or invalid YAML front matter."""

    def __init__(self, message: str, path=None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class MissingColumnError(DsblogError, KeyError):
    """A column required by an operation is absent from the DataFrame."""

    def __init__(self, column: str, available=None):
        self.column = column
        self.available = list(available) if available is not None else []
        message = f"Column '{column}' not found"
        if self.available:
            message += f". Available columns: {', '.join(map(str, self.available))}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self.args[0]


class ModelNotTrainedError(DsblogError, RuntimeError):
    """Prediction was requested but no trained model is available."""
