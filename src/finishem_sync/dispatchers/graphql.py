"""Finish-Em GraphQL dispatcher — creates one TODO item per accepted line.

Every item is sent as its own ``CreateItem`` mutation.  All requests are
issued concurrently on one ``httpx.AsyncClient`` and awaited together; a
failed request (transport error or non-2xx status) is logged and counted
as ``False`` without affecting its siblings.  There is no retry.

Config example::

    destination: "finish_em_graphql"
    inline_config:
      url: "http://localhost:4000/graphql"
      timeout: 10
      item_type: "TODO"
      # Optional — name of an env var holding a bearer token:
      # auth_token_env: "FINISH_EM_TOKEN"
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable, Sequence
from typing import Any

import httpx

from finishem_sync.dispatchers.base import BaseDispatcher
from finishem_sync.registry import register_dispatcher

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:4000/graphql"

CREATE_ITEM_MUTATION = """
mutation CreateItem($key: String!, $type: String!, $text: String!) {
  createItem(input: { key: $key, type: $type, text: $text }) {
    key
    type
    text
    project {
      key
    }
  }
}
"""


@register_dispatcher("finish_em_graphql")
class GraphQLDispatcher(BaseDispatcher):
    """Send items to the Finish-Em GraphQL API, isolating per-item failures."""

    def __init__(
        self,
        config: dict[str, Any],
        *,
        id_factory: Callable[[], str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, id_factory=id_factory)
        self._url: str = config.get("url", DEFAULT_URL)
        self._timeout: float = config.get("timeout", 10)
        self._item_type: str = config.get("item_type", "TODO")
        self._transport = transport
        self._headers: dict[str, str] | None = None

    def connect(self) -> None:
        headers: dict[str, str] = dict(self._config.get("headers", {}))

        token_env = self._config.get("auth_token_env")
        if token_env:
            token = os.environ.get(token_env, "")
            if token:
                headers["Authorization"] = f"Bearer {token}"
            else:
                logger.warning(
                    "auth_token_env=%r is set in config but the env var is empty/unset",
                    token_env,
                )

        self._headers = headers
        logger.info("Dispatching to %s", self._url)

    def dispatch(self, items: Sequence[str]) -> list[bool]:
        if not items:
            logger.info("%s: nothing to send", self.name)
            return []
        return asyncio.run(self.adispatch(items))

    async def adispatch(self, items: Sequence[str]) -> list[bool]:
        """Coroutine form of :meth:`dispatch` for callers already in a loop."""
        if self._headers is None:
            self.connect()

        async with httpx.AsyncClient(
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            results = await asyncio.gather(
                *(self._submit(client, item) for item in items),
                return_exceptions=True,
            )

        outcomes: list[bool] = []
        for text, result in zip(items, results):
            if isinstance(result, BaseException):
                logger.warning("Failed to send %r to Finish-Em — %r", text, result)
                outcomes.append(False)
            else:
                outcomes.append(result)

        sent = sum(outcomes)
        logger.info(
            "%s: %d/%d items sent (%d failed)",
            self.name,
            sent,
            len(outcomes),
            len(outcomes) - sent,
        )
        return outcomes

    def build_payload(self, text: str) -> dict[str, Any]:
        """GraphQL request body for one item, with a fresh key."""
        return {
            "operationName": "CreateItem",
            "query": CREATE_ITEM_MUTATION,
            "variables": {
                "key": self._id_factory(),
                "type": self._item_type,
                "text": text,
            },
        }

    async def _submit(self, client: httpx.AsyncClient, text: str) -> bool:
        try:
            resp = await client.post(self._url, json=self.build_payload(text))
        except httpx.HTTPError as exc:
            logger.warning("Failed to send %r to Finish-Em — %s", text, exc)
            return False

        if not resp.is_success:
            logger.warning(
                "Failed to send %r to Finish-Em — HTTP %d: %s",
                text,
                resp.status_code,
                resp.text,
            )
            return False
        return True
