"""Base selector interface.

A selector is the user-facing half of the accept step: it is shown the
extracted items and answers with the texts the user confirmed.  Any
presentation (terminal prompt, config list, GUI) can satisfy it.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from typing import Any

from finishem_sync.schemas.todo import TodoItem


class BaseSelector(abc.ABC):
    """Turn a list of candidate items into the list of accepted texts."""

    def __init__(self, config: Any) -> None:
        self._config = config

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abc.abstractmethod
    def select(self, candidates: Sequence[TodoItem]) -> list[str]:
        """Return the texts of the accepted candidates.

        Returning an empty list means nothing was accepted.
        """
        ...
