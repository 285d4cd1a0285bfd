from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from fin_browser.config.model import GlobalConfig
from fin_browser.tables import ReceiptsTable, TableRegistry
from fin_browser.ui.config import AppConfig


def _make_ctx(**kwargs) -> AppConfig:
    return AppConfig(config_root=Path("config"), global_config=GlobalConfig(rows_per_page=5), **kwargs)


def test_app_config_carries_only_wired_services():
    assert [f.name for f in dataclasses.fields(AppConfig)] == ["config_root", "global_config", "tables", "registry"]


def test_app_config_validate_and_paging_defaults():
    registry = TableRegistry()
    registry.register(ReceiptsTable)
    ctx = _make_ctx(tables={"receipts": ReceiptsTable([])}, registry=registry)

    ctx.validate()
    assert ctx.rows_per_page == 5
    assert ctx.pagination_enabled is True


def test_app_config_validate_requires_registry_and_tables():
    with pytest.raises(RuntimeError):
        _make_ctx(tables={"receipts": ReceiptsTable([])}).validate()
    with pytest.raises(RuntimeError):
        _make_ctx(registry=TableRegistry()).validate()
