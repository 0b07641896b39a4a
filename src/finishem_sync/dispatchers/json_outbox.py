"""JSON outbox dispatcher — writes items to a local JSON file instead of the API.

Each record has the same ``key``/``type``/``text`` fields the GraphQL
mutation would carry, so an outbox can be replayed later.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from finishem_sync.dispatchers.base import BaseDispatcher
from finishem_sync.registry import register_dispatcher

logger = logging.getLogger(__name__)


@register_dispatcher("json_outbox")
class JSONOutboxDispatcher(BaseDispatcher):
    """Persist items as JSON records on the local filesystem."""

    def __init__(
        self,
        config: dict[str, Any],
        *,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        super().__init__(config, id_factory=id_factory)
        self._output_path: Path | None = None

    def connect(self) -> None:
        self._output_path = Path(self._config["output_path"])
        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Outbox directory ready: %s", self._output_path.parent)

    def dispatch(self, items: Sequence[str]) -> list[bool]:
        if self._output_path is None:
            self.connect()

        item_type = self._config.get("item_type", "TODO")
        indent = self._config.get("indent", 2)

        df = pd.DataFrame(
            [{"key": self._id_factory(), "type": item_type, "text": t} for t in items],
            columns=["key", "type", "text"],
        )
        if self._config.get("append", False) and self._output_path.exists():
            existing = pd.read_json(self._output_path, orient="records", dtype=False)
            df = pd.concat([existing, df], ignore_index=True)

        df.to_json(self._output_path, orient="records", indent=indent)
        logger.info("Wrote %d items to %s", len(items), self._output_path)
        return [True] * len(items)
