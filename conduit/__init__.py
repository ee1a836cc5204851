"""In-process signal routing: pipes with composable transformer chains.

Public surface::

    from conduit import (
        create_pipe,
        is_pipe,
        Pipe,
        Subscription,
        PipeConfig,
        Receiver,
        Transformer,
        mapping,
        starmapping,
        filtering,
        tap,
        PipeError,
        PipeIndexError,
        TransformerError,
        SubscriberError,
    )
"""

from .config import PipeConfig
from .errors import PipeError, PipeIndexError, SubscriberError, TransformerError
from .pipe import Pipe, Subscription, create_pipe, is_pipe
from .protocol import Receiver, Transformer
from .transformers import filtering, mapping, starmapping, tap

__all__ = [
    # Construction
    "create_pipe",
    "is_pipe",
    "Pipe",
    "Subscription",
    "PipeConfig",
    # Protocols
    "Receiver",
    "Transformer",
    # Stock transformers
    "mapping",
    "starmapping",
    "filtering",
    "tap",
    # Errors
    "PipeError",
    "PipeIndexError",
    "TransformerError",
    "SubscriberError",
]
