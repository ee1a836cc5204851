"""Shared transformer fixtures for conduit tests."""

from typing import Any, Callable

import pytest


def _add1(next: Callable[..., None]) -> Callable[..., None]:
    def receive(x: Any) -> None:
        next(x + 1)

    return receive


def _double(next: Callable[..., None]) -> Callable[..., None]:
    def receive(x: Any) -> None:
        next(x * 2)

    return receive


def _to_str(next: Callable[..., None]) -> Callable[..., None]:
    def receive(x: Any) -> None:
        next(f"number = {x}")

    return receive


@pytest.fixture
def add1():
    """Transformer: ``x -> x + 1``."""
    return _add1


@pytest.fixture
def double():
    """Transformer: ``x -> x * 2``."""
    return _double


@pytest.fixture
def to_str():
    """Transformer: ``x -> "number = x"``."""
    return _to_str
