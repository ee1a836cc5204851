"""Structural protocols for receivers and transformer factories."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Receiver(Protocol):
    """Anything that accepts a value (or several) and returns nothing.

    Subscribers, a pipe's ``send`` and the callables built by transformer
    factories all satisfy this protocol.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> None: ...


@runtime_checkable
class Transformer(Protocol):
    """A transformer factory: wraps the next receiver in the chain.

    The factory must not mutate *next*. It returns a new receiver that does
    its work and then calls *next* with (possibly modified) arguments, or
    skips the call entirely to drop the value.

    Example::

        def inc(next):
            def receive(n):
                next(n + 1)
            return receive
    """

    def __call__(self, next: Receiver) -> Receiver: ...
