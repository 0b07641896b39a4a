"""Sync engine — the orchestrator.

Reads a validated config, resolves string keys to concrete classes via the
registry, and runs one sync cycle over a single document:

    read → extract → select → correlate → dispatch + update → write

Dispatch and update are independent side effects of the same accepted
set: a failed submission never stops the document from being updated.

The engine **never** imports a concrete extractor/selector/dispatcher class.
It relies entirely on the decorator-based registry for class resolution.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any
from urllib.parse import quote

import yaml
from pydantic import BaseModel

# Importing the subpackages triggers @register_* decorators in their __init__.py
import finishem_sync.extractors  # noqa: F401
import finishem_sync.selection  # noqa: F401
import finishem_sync.dispatchers  # noqa: F401

from finishem_sync.correlator import correlate
from finishem_sync.documents import LocalDocumentStore
from finishem_sync.extractors.base import BaseExtractor
from finishem_sync.models import SyncConfig
from finishem_sync.registry import get_dispatcher, get_extractor, get_selector
from finishem_sync.schemas.todo import TodoItem
from finishem_sync.updater import update_todos

logger = logging.getLogger(__name__)


class SyncResult(BaseModel):
    """Summary of one sync cycle."""

    found: int = 0
    accepted: int = 0
    dispatched: int = 0
    failed: int = 0
    updated: bool = False


def build_note_uri(vault: str, file_name: str) -> str:
    """Deep link that opens *file_name* in the given Obsidian vault."""
    return f"obsidian://open?vault={quote(vault)}&file={quote(file_name)}"


class SyncEngine:
    """Load a sync config and run extract → select → dispatch/update."""

    def __init__(self, config_path: str | Path) -> None:
        self._config_path = Path(config_path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        *,
        document: str | None = None,
        accepted: Sequence[str] | None = None,
        dry_run: bool = False,
    ) -> SyncResult:
        """Run one sync cycle.

        Parameters
        ----------
        document:
            Document handle; overrides ``sync.document`` from the config.
        accepted:
            Item texts to accept.  When given, the configured selection
            strategy is bypassed for the ``texts`` strategy.
        dry_run:
            Extract and select as usual but neither dispatch nor write.
        """
        config = self._load_config()
        logger.info("Sync %r started", config.sync.name)

        store = LocalDocumentStore(config.sync.vault_root, config.sync.vault_name)
        handle = document or config.sync.document
        content = self._read_document(store, handle)
        if content is None:
            return SyncResult()

        # ── Extract ───────────────────────────────────────────────
        todos = self._run_extract(config, content)
        if not todos:
            logger.info("No unchecked items in %s — nothing to do", handle)
            return SyncResult()

        # ── Select + correlate ────────────────────────────────────
        accepted_texts = self._run_select(config, todos, accepted)
        chosen = correlate(todos, accepted_texts)
        result = SyncResult(found=len(todos), accepted=len(chosen))
        if not chosen:
            logger.info("No items accepted — document left untouched")
            return result

        if dry_run:
            for todo in chosen:
                logger.info("[dry run] would send and complete: %r", todo.text)
            return result

        # ── Dispatch ──────────────────────────────────────────────
        suffix = self._link_suffix(config, store, handle)
        outcomes = self._run_dispatch(config, [f"{t.text}{suffix}" for t in chosen])
        result.dispatched = sum(outcomes)
        result.failed = len(outcomes) - result.dispatched

        # ── Update + write ────────────────────────────────────────
        new_content = update_todos(
            chosen,
            content,
            policy=config.sync.update.match_policy,
            close_strikethrough=config.sync.update.close_strikethrough,
        )
        if new_content != content:
            store.write(handle, new_content)
            result.updated = True

        logger.info(
            "Sync %r finished — %d found, %d accepted, %d sent, %d failed",
            config.sync.name,
            result.found,
            result.accepted,
            result.dispatched,
            result.failed,
        )
        return result

    def status(self, *, document: str | None = None) -> int | None:
        """Count unchecked items in the document, or ``None`` if it is missing."""
        config = self._load_config()
        store = LocalDocumentStore(config.sync.vault_root, config.sync.vault_name)
        handle = document or config.sync.document
        content = self._read_document(store, handle)
        if content is None:
            return None
        with self._make_extractor(config) as extractor:
            return extractor.count(content)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load_config(self) -> SyncConfig:
        raw = yaml.safe_load(self._config_path.read_text())
        config = SyncConfig.model_validate(raw)

        logging.basicConfig(
            level=config.settings.log_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        return config

    @staticmethod
    def _read_document(store: LocalDocumentStore, handle: str | None) -> str | None:
        if handle is None:
            logger.warning("No active file open — pass a document or set sync.document")
            return None
        content = store.read(handle)
        if content is None:
            logger.warning("No active file open — %s does not exist", handle)
        return content

    @staticmethod
    def _resolve_step_config(
        config_file: str | None,
        inline_config: dict[str, Any] | None,
    ) -> dict[str, Any]:
        """Merge config_file YAML with inline_config.  Inline wins."""
        merged: dict[str, Any] = {}
        if config_file is not None:
            merged.update(yaml.safe_load(Path(config_file).read_text()) or {})
        if inline_config is not None:
            merged.update(inline_config)
        return merged

    def _make_extractor(self, config: SyncConfig) -> BaseExtractor:
        ext_cfg = config.sync.extract
        step_config = self._resolve_step_config(ext_cfg.config_file, ext_cfg.inline_config)
        extractor_cls = get_extractor(ext_cfg.source)
        logger.debug("Registry resolved %r → %s", ext_cfg.source, extractor_cls.__name__)
        return extractor_cls(step_config)

    def _run_extract(self, config: SyncConfig, content: str) -> list[TodoItem]:
        with self._make_extractor(config) as extractor:
            return extractor.extract(content)

    def _run_select(
        self,
        config: SyncConfig,
        todos: list[TodoItem],
        accepted: Sequence[str] | None,
    ) -> list[str]:
        sel_cfg = config.sync.select
        if accepted is not None:
            strategy = "texts"
            step_config: dict[str, Any] = {"accepted": list(accepted)}
        else:
            strategy = sel_cfg.strategy
            step_config = self._resolve_step_config(
                sel_cfg.config_file, sel_cfg.inline_config
            )
        selector_cls = get_selector(strategy)
        logger.debug("Registry resolved %r → %s", strategy, selector_cls.__name__)

        selector = selector_cls(step_config)
        return selector.select(todos)

    def _run_dispatch(self, config: SyncConfig, items: list[str]) -> list[bool]:
        dsp_cfg = config.sync.dispatch
        step_config = self._resolve_step_config(dsp_cfg.config_file, dsp_cfg.inline_config)
        dispatcher_cls = get_dispatcher(dsp_cfg.destination)
        logger.debug(
            "Registry resolved %r → %s", dsp_cfg.destination, dispatcher_cls.__name__
        )

        try:
            with dispatcher_cls(step_config) as dispatcher:
                return dispatcher.dispatch(items)
        except Exception:
            logger.exception("Dispatcher %s failed", dispatcher_cls.__name__)
            return [False] * len(items)

    @staticmethod
    def _link_suffix(
        config: SyncConfig, store: LocalDocumentStore, handle: str
    ) -> str:
        link = config.sync.link
        if not link.enabled:
            return ""
        uri = build_note_uri(link.vault or store.vault_name, Path(handle).name)
        return " " + link.template.format(uri=uri)
