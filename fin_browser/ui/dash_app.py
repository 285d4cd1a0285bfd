from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import dash_bootstrap_components as dbc
import numpy as np
from dash import Dash

from .config import AppConfig
from fin_browser.config.loader import DEFAULT_CONFIG_ROOT, load_global_config
from fin_browser.config.model import GlobalConfig
from fin_browser.data.sources import load_table_records
from fin_browser.formatting import LocaleFormatter
from fin_browser.tables.base import BaseTable
from fin_browser.tables.registry import TableRegistry
from fin_browser.ui.callbacks.callbacks_table import register_table_callbacks
from fin_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def _build_table_registry() -> TableRegistry:
    from fin_browser.tables import ExpendituresTable, ReceiptsTable

    registry = TableRegistry()
    registry.register(ReceiptsTable)
    registry.register(ExpendituresTable)
    return registry


def build_tables(
    global_config: GlobalConfig,
    registry: TableRegistry,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, BaseTable]:
    """
    Load every registered table's records from its configured source and
    check that its schema fits them by building one engine.
    """
    formatter = LocaleFormatter(locale=global_config.locale, currency=global_config.currency)
    rng = rng if rng is not None else np.random.default_rng(global_config.seed)

    tables: Dict[str, BaseTable] = {}
    for table_cls in registry.all_classes():
        source = global_config.source_for(table_cls.id)
        records = load_table_records(source, table_cls.record_type, table_cls.generate, rng)
        table = registry.create(table_cls.id, records, formatter)
        table.create_engine(
            rows_per_page=global_config.rows_per_page,
            pagination_enabled=global_config.pagination_enabled,
        )
        tables[table.id] = table

    unknown = set(global_config.tables) - set(tables)
    if unknown:
        logger.warning("Config names tables that are not registered", extra={"table_ids": sorted(unknown)})
    return tables


def create_dash_app(config_root: Path | str = DEFAULT_CONFIG_ROOT) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Tables and their records
    registry = _build_table_registry()
    tables = build_tables(global_config, registry)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        tables=tables,
        registry=registry,
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    register_table_callbacks(app, ctx)

    logger.info("Dash app created", extra={"table_ids": list(tables), "locale": global_config.locale})
    return app
