"""Checklist extractor — finds unchecked ``- [ ] `` items in Markdown text.

A line qualifies when it starts with optional whitespace (any kind except
a line break), then the unchecked marker, then at least one character of
item text.  Checked lines (``- [x] ``) never match, so a document that
has been updated once is not picked up again on the next scan.

Matching uses ``re.finditer`` so every call gets its own fresh iterator;
no scan position is shared between calls.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from finishem_sync.extractors.base import BaseExtractor
from finishem_sync.registry import register_extractor
from finishem_sync.schemas.todo import TodoItem

logger = logging.getLogger(__name__)

UNCHECKED_TOKEN = "[ ] "
CHECKED_TOKEN = "[x] "
STRIKETHROUGH_TOKEN = "~~"

# Group 1 is the marker, group 2 the item text.  A line starts after "\n" or
# a lone "\r" (old Mac endings); neither the indent nor the text may cross
# a line terminator.
TODO_PATTERN = re.compile(
    r"(?:^|(?<=\r))[^\S\r\n]*(- \[ \] )([^\r\n]+)", re.MULTILINE
)


def extract_todos(content: str) -> list[TodoItem]:
    """Return one :class:`TodoItem` per unchecked checklist line."""
    return [
        TodoItem(text=match.group(2), match_length=len(match.group(0)))
        for match in TODO_PATTERN.finditer(content)
    ]


def count_todos(content: str) -> int:
    """Number of unchecked checklist lines in *content*."""
    return sum(1 for _ in TODO_PATTERN.finditer(content))


@register_extractor("checklist")
class ChecklistExtractor(BaseExtractor):
    """Extract unchecked Markdown checklist items."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config or {})

    def extract(self, content: str) -> list[TodoItem]:
        todos = extract_todos(content)
        logger.info("%s: found %d unchecked items", self.name, len(todos))
        return todos

    def count(self, content: str) -> int:
        return count_todos(content)
