from __future__ import annotations

from typing import Any, List

import dash_bootstrap_components as dbc
from dash import dcc, html

from fin_browser.core.schema import Filter, FilterKind
from fin_browser.core.table_engine import TableEngine
from fin_browser.ui.helpers import component_value, select_options
from fin_browser.ui.ids import filter_input_id


def _filter_control(table_id: str, flt: Filter, engine: TableEngine) -> Any:
    component_id = filter_input_id(table_id, flt.key)
    value = component_value(flt, engine.filter_values[flt.key])

    if flt.kind is FilterKind.SELECT:
        return dcc.Dropdown(
            id=component_id,
            options=select_options(engine.select_options(flt.key)),
            value=value,
            clearable=False,
            className="fin-filter-select",
        )

    if flt.kind is FilterKind.TEXT:
        return dbc.Input(id=component_id, type="text", placeholder=flt.placeholder, value=value, debounce=False)

    # number and date inputs
    return dbc.Input(
        id=component_id,
        type="number" if flt.kind is FilterKind.NUMBER else "date",
        placeholder=flt.placeholder,
        value=value or None,
    )


def _filter_cell(table_id: str, flt: Filter, engine: TableEngine) -> dbc.Col:
    return dbc.Col(
        [
            html.Label(flt.display_label, className="form-label small fw-medium mb-1"),
            _filter_control(table_id, flt, engine),
        ],
        xs=12,
        md=4,
        lg=2,
        className="mb-2",
    )


def build_filter_panel(table_id: str, engine: TableEngine) -> html.Div:
    """
    Two rows of filters: text and select filters first, then the range
    (Min/Max, From/To) filters.
    """
    regular: List[Filter] = [f for f in engine.filters if not f.is_range]
    ranges: List[Filter] = [f for f in engine.filters if f.is_range]

    rows = []
    if regular:
        rows.append(dbc.Row([_filter_cell(table_id, f, engine) for f in regular], className="g-3 pb-2"))
    if ranges:
        rows.append(dbc.Row([_filter_cell(table_id, f, engine) for f in ranges], className="g-3 pb-3"))

    return html.Div(rows, className="fin-filter-panel")
