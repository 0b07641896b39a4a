"""Pydantic models for sync configuration validation.

The YAML config is parsed into these models at startup.  Invalid configs
fail fast with clear error messages before any I/O happens.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator

from finishem_sync.updater import MatchPolicy

DEFAULT_LINK_TEMPLATE = '<a href="{uri}">notes link</a>'


class SyncSettings(BaseModel):
    log_level: str = "INFO"


class ExtractConfig(BaseModel):
    source: str = "checklist"
    config_file: str | None = None
    inline_config: dict[str, Any] | None = None


class SelectConfig(BaseModel):
    strategy: str = "prompt"
    config_file: str | None = None
    inline_config: dict[str, Any] | None = None


class DispatchConfig(BaseModel):
    destination: str = "finish_em_graphql"
    config_file: str | None = None
    inline_config: dict[str, Any] | None = None


class UpdateConfig(BaseModel):
    match_policy: MatchPolicy = MatchPolicy.SUBSTRING
    close_strikethrough: bool = False


class LinkConfig(BaseModel):
    """Back-link appended to every dispatched item."""

    enabled: bool = True
    template: str = DEFAULT_LINK_TEMPLATE
    # Vault name in the link; defaults to sync.vault_name, then the root dir name.
    vault: str | None = None

    @model_validator(mode="after")
    def _template_has_uri(self):
        if self.enabled and "{uri}" not in self.template:
            raise ValueError("Link template must contain the '{uri}' placeholder")
        return self


class SyncDefinition(BaseModel):
    name: str
    description: str = ""
    vault_root: str = "."
    vault_name: str | None = None
    document: str | None = None
    extract: ExtractConfig = ExtractConfig()
    select: SelectConfig = SelectConfig()
    dispatch: DispatchConfig = DispatchConfig()
    update: UpdateConfig = UpdateConfig()
    link: LinkConfig = LinkConfig()


class SyncConfig(BaseModel):
    """Root model — represents the entire sync YAML file."""

    version: str = "1.0"
    sync: SyncDefinition
    settings: SyncSettings = SyncSettings()
