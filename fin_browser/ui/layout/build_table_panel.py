from __future__ import annotations

import functools
from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from fin_browser.core.table_engine import TableEngine
from fin_browser.tables.base import BaseTable
from fin_browser.ui.helpers import SERIAL_LABEL, build_table_rows, header_label, page_label, page_size_options, result_count
from fin_browser.ui.ids import IDs, sort_header_id, table_part_id
from fin_browser.ui.layout.build_filter_panel import build_filter_panel


def _header_row(table_id: str, engine: TableEngine) -> html.Tr:
    cells: List[html.Th] = [html.Th(SERIAL_LABEL, className="fin-serial")]
    for column in engine.columns:
        if column.sortable:
            cells.append(
                html.Th(
                    header_label(column, engine.sort),
                    id=sort_header_id(table_id, column.key),
                    n_clicks=0,
                    className=f"fin-sortable {column.class_name or ''}".strip(),
                    style={"cursor": "pointer"},
                )
            )
        else:
            cells.append(html.Th(column.label, className=column.class_name))
    return html.Tr(cells)


def _pagination_bar(table_id: str, engine: TableEngine, page_sizes: List[int]) -> html.Div:
    part = functools.partial(table_part_id, table_id)
    view = engine.view()
    enabled = engine.state.pagination.pagination_enabled

    return html.Div(
        id=part(IDs.Table.PAGINATION_CONTAINER),
        style={} if enabled else {"display": "none"},
        className="d-flex align-items-center justify-content-end gap-2 fin-pagination",
        children=[
            dcc.Dropdown(
                id=part(IDs.Table.PAGE_SIZE_SELECT),
                options=page_size_options(page_sizes),
                value=engine.state.pagination.rows_per_page,
                clearable=False,
                searchable=False,
                style={"width": "130px"},
            ),
            dbc.Button("Previous", id=part(IDs.Table.PREV_BTN), n_clicks=0, size="sm",
                       color="secondary", outline=True, disabled=not view.has_previous),
            html.Span(page_label(view), id=part(IDs.Table.PAGE_LABEL), className="small text-muted px-2"),
            dbc.Button("Next", id=part(IDs.Table.NEXT_BTN), n_clicks=0, size="sm",
                       color="secondary", outline=True, disabled=not view.has_next),
        ],
    )


def build_table_panel(table: BaseTable, engine: TableEngine, page_sizes: List[int]) -> dbc.Card:
    """
    One card per table: title and actions, filter rows, result count, the
    table itself and the pagination bar. The initial render is filled in here
    so the page is usable before the first callback fires.
    """
    table_id = table.id
    part = functools.partial(table_part_id, table_id)
    view = engine.view()

    header = dbc.CardHeader(
        html.Div(
            [
                html.H5(table.label, className="mb-0"),
                html.Div(
                    [
                        dbc.Button("Reset filters", id=part(IDs.Table.RESET_FILTERS_BTN), n_clicks=0,
                                   size="sm", color="link", className="me-2"),
                        dbc.Button("Download CSV", id=part(IDs.Table.DOWNLOAD_BTN), n_clicks=0,
                                   size="sm", color="primary"),
                        dcc.Download(id=part(IDs.Table.DOWNLOAD)),
                    ],
                    className="d-flex align-items-center",
                ),
            ],
            className="d-flex justify-content-between align-items-center",
        )
    )

    body = dbc.CardBody(
        [
            dcc.Store(id=part(IDs.Table.STATE), data=engine.state.to_dict(), storage_type="memory"),
            build_filter_panel(table_id, engine),
            html.Div(result_count(view), id=part(IDs.Table.RESULT_COUNT), className="small mb-2"),
            dbc.Table(
                [
                    html.Thead(_header_row(table_id, engine)),
                    html.Tbody(build_table_rows(view, engine.columns), id=part(IDs.Table.BODY)),
                ],
                bordered=False,
                hover=True,
                responsive=True,
                size="sm",
                className="fin-table mb-2",
            ),
            _pagination_bar(table_id, engine, page_sizes),
        ]
    )

    return dbc.Card([header, body], id=part(IDs.Table.CARD), className="mb-4 shadow-sm fin-table-card")
