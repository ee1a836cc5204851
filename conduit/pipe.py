"""Pipe: a synchronous broker between producers of values and their consumers.

Consumers (any callable) connect to a pipe and receive whatever is sent
through it::

    p = create_pipe()
    p.connect(print)
    p.send("Hello, world!")
    # prints "Hello, world!"

``send`` is an ordinary callable with a stable identity, so one pipe can be
connected to another::

    p1 = create_pipe()
    p2 = create_pipe()
    p1.connect(p2.send)     # p1 now feeds p2

A pipe optionally carries a chain of transformer factories. A factory takes
the next receiver in the chain and returns a receiver that calls it with a
modified value::

    def inc(next):
        def receive(n):
            next(n + 1)
        return receive

    p = create_pipe(inc)
    p.connect(print)
    p.send(4)
    # prints "5"

Values pass through transformers in the order they were given. The chain
can be edited later with ``push`` / ``unshift`` / ``pop`` / ``shift`` /
``remove``; every edit rebuilds the composed chain.

``p.extend(t1, t2)`` is shorthand for::

    p1 = create_pipe(t1, t2)
    p.connect(p1.send)
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, List, Optional, Tuple

from .config import PipeConfig
from .errors import PipeIndexError, SubscriberError, TransformerError
from .protocol import Receiver, Transformer

logger = logging.getLogger(__name__)


def describe(fn: Any) -> str:
    """Short human-readable name for a callable, used in log records."""
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


class Subscription:
    """Handle returned by :meth:`Pipe.connect`.

    Calling the handle removes the one registration it stands for, even when
    the same subscriber was connected several times. Further calls do
    nothing.
    """

    __slots__ = ("subscriber", "_pipe", "_active")

    def __init__(self, pipe: "Pipe", subscriber: Receiver) -> None:
        self.subscriber = subscriber
        self._pipe = pipe
        self._active = True

    @property
    def active(self) -> bool:
        """*True* until the registration has been removed."""
        return self._active

    def __call__(self) -> None:
        if self._active:
            self._pipe._unregister(self)

    def __repr__(self) -> str:
        state = "active" if self._active else "closed"
        return f"Subscription({describe(self.subscriber)}, {state})"


class Pipe:
    """Routes values from ``send()`` through a transformer chain to subscribers.

    Args:
        *transformers: Transformer factories, applied in the order given.
        config: Per-pipe settings (a default :class:`PipeConfig` when *None*).

    Raises:
        TransformerError: A factory is not callable or does not return a
            callable receiver.
    """

    # Marker for structural checks, see :func:`is_pipe`.
    __pipe__ = True

    def __init__(
        self,
        *transformers: Transformer,
        config: Optional[PipeConfig] = None,
    ) -> None:
        self.config = config if config is not None else PipeConfig()
        self._lock = threading.RLock()
        self._transformers: List[Transformer] = []
        self._registrations: List[Subscription] = []
        self._dispatch: Receiver = self._broadcast
        # Stored once so that ``p.send is p.send`` holds for the pipe's lifetime.
        self.send: Receiver = self._send
        self._rebuild(list(transformers))

    def __repr__(self) -> str:
        label = f"name={self.config.name!r}, " if self.config.name else ""
        return (
            f"Pipe({label}transformers={len(self._transformers)}, "
            f"outputs={len(self._registrations)})"
        )

    # ------------------------------------------------------------------ #
    # Read-only views
    # ------------------------------------------------------------------ #

    @property
    def transformers(self) -> Tuple[Transformer, ...]:
        """Current transformer factories, outermost first."""
        return tuple(self._transformers)

    @property
    def outputs(self) -> Tuple[Receiver, ...]:
        """Currently connected subscribers, in delivery order."""
        return tuple(reg.subscriber for reg in self._registrations)

    # ------------------------------------------------------------------ #
    # Delivery
    # ------------------------------------------------------------------ #

    def _send(self, *args: Any, **kwargs: Any) -> None:
        if self.config.trace:
            logger.debug("%r: send args=%r kwargs=%r", self, args, kwargs)
        self._dispatch(*args, **kwargs)

    def _broadcast(self, *args: Any, **kwargs: Any) -> None:
        # Snapshot: subscribers connected mid-broadcast wait for the next
        # send, subscribers removed mid-broadcast are skipped.
        for registration in tuple(self._registrations):
            if registration._active:
                registration.subscriber(*args, **kwargs)

    # ------------------------------------------------------------------ #
    # Subscribers
    # ------------------------------------------------------------------ #

    def connect(self, subscriber: Receiver) -> Subscription:
        """Register *subscriber* and return a handle that unregisters it.

        Raises:
            SubscriberError: *subscriber* is not callable.
        """
        if not callable(subscriber):
            raise SubscriberError(f"subscriber {subscriber!r} is not callable")
        subscription = Subscription(self, subscriber)
        with self._lock:
            self._registrations.append(subscription)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%r: connected %s", self, describe(subscriber))
        return subscription

    def disconnect(self, subscriber: Receiver) -> int:
        """Remove every registration of *subscriber*.

        Subscribers are compared with ``==`` so bound methods of the same
        object match. Returns the number of registrations removed.
        """
        with self._lock:
            matched = [reg for reg in self._registrations if reg.subscriber == subscriber]
            for reg in matched:
                reg._active = False
            if matched:
                self._registrations = [reg for reg in self._registrations if reg._active]
        if matched and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%r: disconnected %s (%d registration(s))",
                self,
                describe(subscriber),
                len(matched),
            )
        return len(matched)

    def _unregister(self, subscription: Subscription) -> None:
        with self._lock:
            if not subscription._active:
                return
            subscription._active = False
            self._registrations.remove(subscription)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%r: unsubscribed %s", self, describe(subscription.subscriber))

    def extend(self, *transformers: Transformer) -> "Pipe":
        """Create a pipe with *transformers*, subscribe it to this one, return it.

        The child inherits this pipe's ``trace`` setting.
        """
        child = self.__class__(*transformers, config=PipeConfig(trace=self.config.trace))
        self.connect(child.send)
        return child

    # ------------------------------------------------------------------ #
    # Transformer chain
    # ------------------------------------------------------------------ #

    def push(self, *transformers: Transformer) -> None:
        """Append *transformers* to the end of the chain."""
        with self._lock:
            self._rebuild(self._transformers + list(transformers))

    def unshift(self, *transformers: Transformer) -> None:
        """Prepend *transformers*, keeping their relative order."""
        with self._lock:
            self._rebuild(list(transformers) + self._transformers)

    def pop(self, index: Optional[int] = None) -> Optional[Transformer]:
        """Remove and return a transformer.

        Without *index* the last transformer is removed; *None* is returned
        when the chain is empty. With *index* (negative values count from
        the end) that transformer is removed.

        Raises:
            PipeIndexError: *index* is outside the chain. The chain is left
                unchanged.
        """
        with self._lock:
            chain = list(self._transformers)
            if index is None:
                removed = chain.pop() if chain else None
            else:
                try:
                    removed = chain.pop(index)
                except IndexError:
                    raise PipeIndexError(index, len(chain)) from None
            self._rebuild(chain)
        return removed

    def shift(self) -> Optional[Transformer]:
        """Remove and return the first transformer, or *None* when empty."""
        with self._lock:
            chain = list(self._transformers)
            removed = chain.pop(0) if chain else None
            self._rebuild(chain)
        return removed

    def remove(self, transformer: Transformer) -> int:
        """Remove every occurrence of *transformer* (matched by identity).

        Returns the number of occurrences removed.
        """
        with self._lock:
            chain = [t for t in self._transformers if t is not transformer]
            removed = len(self._transformers) - len(chain)
            self._rebuild(chain)
        return removed

    def _rebuild(self, chain: List[Transformer]) -> None:
        """Fold *chain* around the broadcast and install it.

        Nothing is installed if a factory fails, so the pipe keeps its
        previous chain.
        """
        dispatch = _compose(chain, self._broadcast)
        self._transformers = chain
        self._dispatch = dispatch
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%r: rebuilt chain [%s]", self, ", ".join(describe(t) for t in chain)
            )


def _compose(chain: Iterable[Transformer], terminal: Receiver) -> Receiver:
    """Wrap *terminal* so the first factory in *chain* ends up outermost."""
    receiver = terminal
    for factory in reversed(list(chain)):
        if not callable(factory):
            raise TransformerError(f"transformer {factory!r} is not callable")
        receiver = factory(receiver)
        if not callable(receiver):
            raise TransformerError(
                f"transformer {describe(factory)} returned {receiver!r}, "
                "expected a callable receiver"
            )
    return receiver


def create_pipe(*transformers: Transformer, config: Optional[PipeConfig] = None) -> Pipe:
    """Create a :class:`Pipe` with the given transformer factories."""
    return Pipe(*transformers, config=config)


def is_pipe(obj: Any) -> bool:
    """*True* if *obj* carries the pipe marker."""
    return getattr(obj, "__pipe__", False) is True
