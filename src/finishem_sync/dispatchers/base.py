"""Base dispatcher interface.

Dispatchers are the final stage — they hand accepted items to the task
service (or a local stand-in for it).  Delivery is best effort: a failed
item is reported through its outcome, never by raising.
"""

from __future__ import annotations

import abc
from collections.abc import Callable, Sequence
from typing import Any
import uuid


def new_key() -> str:
    """Default ID source: a random UUID4 string."""
    return str(uuid.uuid4())


class BaseDispatcher(abc.ABC):
    """Submit item strings to a destination, one independent submission each.

    Lifecycle (called by the engine in this order):
        1. __init__(config)  — receive the merged dispatcher config.
        2. connect()         — prepare credentials / destination.
        3. dispatch(items)   — submit, return one success flag per item.
        4. disconnect()      — tear down resources (called even on failure).
    """

    def __init__(
        self, config: Any, *, id_factory: Callable[[], str] | None = None
    ) -> None:
        self._config = config
        self._id_factory = id_factory or new_key

    @property
    def name(self) -> str:
        return self.__class__.__name__

    # -- lifecycle hooks -----------------------------------------------------

    def connect(self) -> None:
        """Default is a no-op."""

    @abc.abstractmethod
    def dispatch(self, items: Sequence[str]) -> list[bool]:
        """Submit every item in *items*.

        Returns one flag per item, in input order.  Per-item failures must
        be logged and reported as ``False``; they must not raise.
        """
        ...

    def disconnect(self) -> None:
        """Default is a no-op."""

    # -- context-manager support ---------------------------------------------

    def __enter__(self) -> BaseDispatcher:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.disconnect()
