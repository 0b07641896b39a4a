"""Accept-all selector — every extracted item is confirmed.

Matches the default of the interactive picker, where every box starts
ticked.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from finishem_sync.registry import register_selector
from finishem_sync.schemas.todo import TodoItem
from finishem_sync.selection.base import BaseSelector


@register_selector("all")
class AcceptAllSelector(BaseSelector):
    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config or {})

    def select(self, candidates: Sequence[TodoItem]) -> list[str]:
        return [c.text for c in candidates]
