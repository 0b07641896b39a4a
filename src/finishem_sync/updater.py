"""Document updater — marks accepted checklist items as done.

For every unchecked line that matches an accepted item, the first
``[ ] `` becomes ``[x] ~~`` so the item renders as checked and struck
through.  Every other line, checklist or not, is passed through verbatim.

The strikethrough is left open by default; notes already updated this way
rely on that exact output.  ``close_strikethrough=True`` appends the
closing ``~~`` for documents that want a balanced span.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Sequence

from finishem_sync.extractors.checklist import (
    CHECKED_TOKEN,
    STRIKETHROUGH_TOKEN,
    TODO_PATTERN,
    UNCHECKED_TOKEN,
)
from finishem_sync.schemas.todo import TodoItem

logger = logging.getLogger(__name__)


class MatchPolicy(str, enum.Enum):
    """How an accepted item is matched against a checklist line.

    ``SUBSTRING`` is the default: a line is updated when it contains the
    item text anywhere, so accepting "buy milk" also completes
    "buy milk and eggs".  Existing notes were completed this way and
    switching the default would change which lines a run touches.
    ``EXACT`` only updates lines whose item text equals the accepted text.
    """

    SUBSTRING = "substring"
    EXACT = "exact"


def _line_matches(match: re.Match[str], texts: Sequence[str], policy: MatchPolicy) -> bool:
    if policy is MatchPolicy.EXACT:
        return match.group(2) in texts
    segment = match.group(0)
    return any(text in segment for text in texts)


def update_todos(
    todos: Sequence[TodoItem],
    content: str,
    *,
    policy: MatchPolicy = MatchPolicy.SUBSTRING,
    close_strikethrough: bool = False,
) -> str:
    """Return *content* with every line matching one of *todos* checked off."""
    if not todos:
        return content

    policy = MatchPolicy(policy)
    texts = [t.text for t in todos]
    updated = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal updated
        segment = match.group(0)
        if not _line_matches(match, texts, policy):
            return segment
        updated += 1
        segment = segment.replace(UNCHECKED_TOKEN, CHECKED_TOKEN + STRIKETHROUGH_TOKEN, 1)
        if close_strikethrough:
            segment += STRIKETHROUGH_TOKEN
        return segment

    new_content = TODO_PATTERN.sub(_replace, content)
    logger.info(
        "Marked %d line(s) done for %d accepted item(s) (policy=%s)",
        updated,
        len(todos),
        policy.value,
    )
    return new_content
