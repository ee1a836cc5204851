"""Pipe error types."""

from __future__ import annotations


class PipeError(Exception):
    """Base class for every error raised by the pipe machinery itself.

    Exceptions raised inside user transformers or subscribers are never
    wrapped in a ``PipeError``; they reach the caller of ``send()`` as-is.
    """


class PipeIndexError(PipeError, IndexError):
    """Raised by ``Pipe.pop(index)`` when *index* falls outside the chain."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(
            f"pop index {index} out of range for a chain of {size} transformer(s)"
        )


class TransformerError(PipeError, TypeError):
    """Raised when a transformer factory or the receiver it builds is not callable."""


class SubscriberError(PipeError, TypeError):
    """Raised when ``connect()`` is given something that cannot be called."""
