"""Pydantic model for a single checklist item found in a document.

Items are value objects: two items with the same text compare equal, and
nothing downstream relies on object identity.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TodoItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    done: bool = False
    match_length: int | None = None
