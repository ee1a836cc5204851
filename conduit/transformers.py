"""Stock transformer factories.

Each helper returns a factory suitable for ``create_pipe()``, ``push()`` or
``extend()``::

    p = create_pipe(filtering(lambda n: n > 0), mapping(abs))
"""

from __future__ import annotations

from typing import Any, Callable

from .pipe import describe
from .protocol import Receiver, Transformer


def _named(factory: Transformer, label: str) -> Transformer:
    factory.__name__ = factory.__qualname__ = label
    return factory


def mapping(fn: Callable[..., Any]) -> Transformer:
    """Replace the arguments with the single value ``fn(*args, **kwargs)``."""

    def factory(next: Receiver) -> Receiver:
        def receive(*args: Any, **kwargs: Any) -> None:
            next(fn(*args, **kwargs))

        return receive

    return _named(factory, f"mapping({describe(fn)})")


def starmapping(fn: Callable[..., Any]) -> Transformer:
    """Like :func:`mapping`, but unpack the returned sequence into positional args."""

    def factory(next: Receiver) -> Receiver:
        def receive(*args: Any, **kwargs: Any) -> None:
            next(*fn(*args, **kwargs))

        return receive

    return _named(factory, f"starmapping({describe(fn)})")


def filtering(predicate: Callable[..., Any]) -> Transformer:
    """Forward only values for which ``predicate(*args, **kwargs)`` is truthy."""

    def factory(next: Receiver) -> Receiver:
        def receive(*args: Any, **kwargs: Any) -> None:
            if predicate(*args, **kwargs):
                next(*args, **kwargs)

        return receive

    return _named(factory, f"filtering({describe(predicate)})")


def tap(fn: Callable[..., Any]) -> Transformer:
    """Call ``fn`` with the arguments, then forward them unchanged."""

    def factory(next: Receiver) -> Receiver:
        def receive(*args: Any, **kwargs: Any) -> None:
            fn(*args, **kwargs)
            next(*args, **kwargs)

        return receive

    return _named(factory, f"tap({describe(fn)})")
