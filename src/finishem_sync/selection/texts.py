"""Fixed-texts selector — accepts the item texts listed in config.

Config example::

    strategy: "texts"
    inline_config:
      accepted:
        - "buy milk"
        - "call the plumber"

The CLI ``--accept`` flag feeds the same list.  Texts that are not in the
document are dropped later by the correlator, which reports them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from finishem_sync.registry import register_selector
from finishem_sync.schemas.todo import TodoItem
from finishem_sync.selection.base import BaseSelector


@register_selector("texts")
class FixedTextsSelector(BaseSelector):
    """Accept exactly the configured texts."""

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        self._accepted: list[str] = list(config.get("accepted", []))

    def select(self, candidates: Sequence[TodoItem]) -> list[str]:
        return list(self._accepted)
