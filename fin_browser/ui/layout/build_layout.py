from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc

from fin_browser.ui.layout.build_navbar import build_navbar
from fin_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from fin_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    navbar = build_navbar(ctx.global_config)

    panels = []
    for table in ctx.tables.values():
        engine = table.create_engine(rows_per_page=ctx.rows_per_page, pagination_enabled=ctx.pagination_enabled)
        panels.append(build_table_panel(table, engine, ctx.global_config.page_size_options))

    if not panels:
        panels = [dbc.Card(dbc.CardBody("No tables configured."), className="fin-table-card")]

    return dbc.Container(
        fluid=True,
        className="fin-root",
        children=[
            navbar,
            dbc.Row(dbc.Col(panels, md=12, className="mt-3"), className="gx-3"),
        ],
    )
