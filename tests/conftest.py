"""Shared fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from finishem_sync.schemas.todo import TodoItem


NOTE_TEXT = (
    "# Today\n"
    "\n"
    "- [ ] buy milk\n"
    "- [x] ~~water plants\n"
    "  - [ ] call the plumber\n"
    "Some prose that mentions buy milk.\n"
    "- [ ] buy milk and eggs\n"
)


@pytest.fixture()
def note_text() -> str:
    """A small note with three unchecked items, one checked item, and prose."""
    return NOTE_TEXT


@pytest.fixture()
def milk() -> TodoItem:
    return TodoItem(text="buy milk", match_length=len("- [ ] buy milk"))


@pytest.fixture()
def vault_dir(tmp_path: Path) -> Path:
    """A vault directory holding ``today.md`` with the sample note."""
    vault = tmp_path / "vault"
    vault.mkdir()
    (vault / "today.md").write_text(NOTE_TEXT, newline="")
    return vault


@pytest.fixture()
def make_config(tmp_path: Path, vault_dir: Path):
    """Factory writing a sync YAML that dispatches to a JSON outbox.

    Returns ``(config_path, outbox_path)``.
    """

    def _make(
        *,
        strategy: str = "all",
        document: str | None = "today.md",
        match_policy: str = "substring",
        link_enabled: bool = True,
        accepted: list[str] | None = None,
        link_vault: str | None = None,
    ) -> tuple[Path, Path]:
        outbox = tmp_path / "outbox" / "items.json"
        lines = [
            'version: "1.0"',
            "sync:",
            '  name: "test_sync"',
            f'  vault_root: "{vault_dir}"',
            '  vault_name: "vault"',
        ]
        if document is not None:
            lines.append(f'  document: "{document}"')
        lines += [
            "  select:",
            f'    strategy: "{strategy}"',
        ]
        if accepted is not None:
            lines.append("    inline_config:")
            lines.append("      accepted:")
            lines += [f'        - "{text}"' for text in accepted]
        lines += [
            "  dispatch:",
            '    destination: "json_outbox"',
            "    inline_config:",
            f'      output_path: "{outbox}"',
            "  update:",
            f'    match_policy: "{match_policy}"',
            "  link:",
            f"    enabled: {'true' if link_enabled else 'false'}",
        ]
        if link_vault is not None:
            lines.append(f'    vault: "{link_vault}"')
        lines += [
            "settings:",
            '  log_level: "WARNING"',
        ]
        config_path = tmp_path / "sync.yaml"
        config_path.write_text("\n".join(lines) + "\n")
        return config_path, outbox

    return _make
