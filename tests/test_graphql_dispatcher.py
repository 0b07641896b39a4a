"""Tests for GraphQLDispatcher — all HTTP goes through httpx.MockTransport."""

from __future__ import annotations

import asyncio
import itertools
import json

import httpx
import pytest

from finishem_sync.dispatchers.graphql import (
    CREATE_ITEM_MUTATION,
    DEFAULT_URL,
    GraphQLDispatcher,
)


# ── Helpers ─────────────────────────────────────────────────────────


class _Recorder:
    """Transport handler that records requests and fails chosen texts."""

    def __init__(self, *, error_texts=(), status_texts=(), crash_texts=()) -> None:
        self.requests: list[httpx.Request] = []
        self._error_texts = set(error_texts)
        self._status_texts = set(status_texts)
        self._crash_texts = set(crash_texts)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        text = json.loads(request.content)["variables"]["text"]
        if text in self._error_texts:
            raise httpx.ConnectError("connection refused", request=request)
        if text in self._crash_texts:
            raise RuntimeError("handler blew up")
        if text in self._status_texts:
            return httpx.Response(500, text="internal error")
        return httpx.Response(200, json={"data": {"createItem": {"text": text}}})

    @property
    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


def _dispatcher(recorder: _Recorder, config: dict | None = None) -> GraphQLDispatcher:
    counter = itertools.count(1)
    return GraphQLDispatcher(
        config or {},
        id_factory=lambda: f"key-{next(counter)}",
        transport=httpx.MockTransport(recorder),
    )


# =====================================================================
# Payload
# =====================================================================


class TestPayload:
    def test_payload_shape(self):
        d = GraphQLDispatcher({}, id_factory=lambda: "fixed-key")
        payload = d.build_payload("buy milk")
        assert payload["query"] == CREATE_ITEM_MUTATION
        assert payload["operationName"] == "CreateItem"
        assert payload["variables"] == {
            "key": "fixed-key",
            "type": "TODO",
            "text": "buy milk",
        }

    def test_default_key_is_uuid(self):
        d = GraphQLDispatcher({})
        first = d.build_payload("x")["variables"]["key"]
        second = d.build_payload("x")["variables"]["key"]
        assert len(first) == 36
        assert first != second

    def test_item_type_configurable(self):
        d = GraphQLDispatcher({"item_type": "NOTE"})
        assert d.build_payload("x")["variables"]["type"] == "NOTE"

    def test_mutation_declares_variables(self):
        for name in ("$key", "$type", "$text", "createItem"):
            assert name in CREATE_ITEM_MUTATION


# =====================================================================
# Dispatch
# =====================================================================


class TestDispatch:
    def test_one_request_per_item_with_fresh_keys(self):
        rec = _Recorder()
        outcomes = _dispatcher(rec).dispatch(["a", "b", "c"])

        assert outcomes == [True, True, True]
        assert len(rec.requests) == 3
        assert all(str(r.url) == DEFAULT_URL for r in rec.requests)
        assert all(r.method == "POST" for r in rec.requests)
        keys = {b["variables"]["key"] for b in rec.bodies}
        assert len(keys) == 3
        assert sorted(b["variables"]["text"] for b in rec.bodies) == ["a", "b", "c"]

    def test_json_content_type(self):
        rec = _Recorder()
        _dispatcher(rec).dispatch(["a"])
        assert rec.requests[0].headers["content-type"] == "application/json"

    def test_custom_url(self):
        rec = _Recorder()
        _dispatcher(rec, {"url": "http://tasks.test/graphql"}).dispatch(["a"])
        assert str(rec.requests[0].url) == "http://tasks.test/graphql"

    def test_empty_items_sends_nothing(self):
        rec = _Recorder()
        assert _dispatcher(rec).dispatch([]) == []
        assert rec.requests == []


# =====================================================================
# Failure isolation
# =====================================================================


class TestFailureIsolation:
    def test_network_error_on_one_item_does_not_stop_others(self):
        rec = _Recorder(error_texts={"second"})
        outcomes = _dispatcher(rec).dispatch(["first", "second", "third"])

        assert outcomes == [True, False, True]
        sent = [b["variables"]["text"] for b in rec.bodies]
        assert sorted(sent) == ["first", "second", "third"]

    def test_non_success_status_is_a_failure(self, caplog):
        rec = _Recorder(status_texts={"bad"})
        with caplog.at_level("WARNING"):
            outcomes = _dispatcher(rec).dispatch(["good", "bad"])

        assert outcomes == [True, False]
        assert "HTTP 500" in caplog.text
        assert "internal error" in caplog.text

    def test_all_failing_still_returns(self):
        rec = _Recorder(error_texts={"x", "y"})
        assert _dispatcher(rec).dispatch(["x", "y"]) == [False, False]

    def test_network_error_is_logged(self, caplog):
        rec = _Recorder(error_texts={"x"})
        with caplog.at_level("WARNING"):
            _dispatcher(rec).dispatch(["x"])
        assert "connection refused" in caplog.text

    def test_unexpected_exception_is_isolated(self, caplog):
        rec = _Recorder(crash_texts={"second"})
        with caplog.at_level("WARNING"):
            outcomes = _dispatcher(rec).dispatch(["first", "second", "third"])

        assert outcomes == [True, False, True]
        assert len(rec.requests) == 3
        assert "handler blew up" in caplog.text


# =====================================================================
# Auth / lifecycle
# =====================================================================


class TestAuth:
    def test_bearer_token_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FINISH_EM_TOKEN", "s3cret")
        rec = _Recorder()
        with _dispatcher(rec, {"auth_token_env": "FINISH_EM_TOKEN"}) as d:
            d.dispatch(["a"])
        assert rec.requests[0].headers["authorization"] == "Bearer s3cret"

    def test_missing_token_env_warns(self, monkeypatch: pytest.MonkeyPatch, caplog):
        monkeypatch.delenv("FINISH_EM_TOKEN", raising=False)
        rec = _Recorder()
        with caplog.at_level("WARNING"):
            _dispatcher(rec, {"auth_token_env": "FINISH_EM_TOKEN"}).dispatch(["a"])
        assert "authorization" not in rec.requests[0].headers
        assert "FINISH_EM_TOKEN" in caplog.text

    def test_adispatch_inside_running_loop(self):
        rec = _Recorder()
        outcomes = asyncio.run(_dispatcher(rec).adispatch(["a", "b"]))
        assert outcomes == [True, True]


# =====================================================================
# Concurrency
# =====================================================================


class TestConcurrency:
    def test_all_requests_are_in_flight_together(self):
        """Each response waits until every request has arrived.

        Sequential sending would time out on the first request and report
        every item as failed.
        """
        texts = ["a", "b", "c", "d"]

        async def scenario() -> list[bool]:
            all_pending = asyncio.Event()
            pending = 0

            async def handler(request: httpx.Request) -> httpx.Response:
                nonlocal pending
                pending += 1
                if pending == len(texts):
                    all_pending.set()
                await asyncio.wait_for(all_pending.wait(), timeout=2)
                return httpx.Response(200, json={"data": {"createItem": {}}})

            d = GraphQLDispatcher({}, transport=httpx.MockTransport(handler))
            return await d.adispatch(texts)

        assert asyncio.run(scenario()) == [True, True, True, True]
