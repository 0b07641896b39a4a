"""Base extractor interface.

An extractor turns raw document text into an ordered list of checklist
items.  The engine only ever talks to BaseExtractor — it never knows the
concrete type.
"""

from __future__ import annotations

import abc
from typing import Any

from finishem_sync.schemas.todo import TodoItem


class BaseExtractor(abc.ABC):
    """Scan document text and return the checklist items it contains.

    Lifecycle (called by the engine in this order):
        1. __init__(config)  — receive the merged step config.
        2. connect()         — acquire anything the scan needs.
        3. extract(content)  — return the items, in document order.
        4. disconnect()      — tear down resources (called even on failure).
    """

    def __init__(self, config: Any) -> None:
        self._config = config

    @property
    def name(self) -> str:
        """Human-readable name used in logs."""
        return self.__class__.__name__

    # -- lifecycle hooks -----------------------------------------------------

    def connect(self) -> None:
        """Default is a no-op; text scanning needs no session."""

    @abc.abstractmethod
    def extract(self, content: str) -> list[TodoItem]:
        """Return every item found in *content*, top to bottom.

        Implementations must be free of side effects and must return an
        empty list, not raise, when nothing matches.
        """
        ...

    def count(self, content: str) -> int:
        """Number of items in *content*; override when counting is cheaper."""
        return len(self.extract(content))

    def disconnect(self) -> None:
        """Default is a no-op."""

    # -- context-manager support ---------------------------------------------

    def __enter__(self) -> BaseExtractor:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.disconnect()
