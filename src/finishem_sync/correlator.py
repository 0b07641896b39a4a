"""Map the texts a user accepted back onto the extracted items."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from finishem_sync.schemas.todo import TodoItem

logger = logging.getLogger(__name__)


def correlate(
    candidates: Sequence[TodoItem], accepted_texts: Iterable[str]
) -> list[TodoItem]:
    """Return the candidates whose text is one of *accepted_texts*.

    Membership is exact string equality.  Candidate order is preserved and
    duplicates among the candidates are all kept.
    """
    accepted = set(accepted_texts)
    result = [c for c in candidates if c.text in accepted]

    unknown = accepted - {c.text for c in candidates}
    if unknown:
        logger.warning(
            "Accepted texts not among the extracted items, ignoring: %s",
            sorted(unknown),
        )
    logger.info("Correlated %d/%d items", len(result), len(candidates))
    return result
