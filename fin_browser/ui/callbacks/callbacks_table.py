from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

import dash
from dash import Input, Output, State, dcc, exceptions

from fin_browser.core.schema import ALL_SENTINEL, FilterKind
from fin_browser.core.table_engine import TableEngine
from fin_browser.data.sources import records_to_frame
from fin_browser.tables.base import BaseTable
from fin_browser.ui.callbacks.callbacks_utils import engine_from_store
from fin_browser.ui.helpers import (
    build_table_rows,
    component_value,
    header_label,
    page_label,
    raw_filter_value,
    result_count,
    select_options,
)
from fin_browser.ui.ids import IDs, filter_input_id, sort_header_id, table_part_id

if TYPE_CHECKING:
    from fin_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

# event kinds produced by a table's controls
EVENT_FILTER = "filter"
EVENT_SORT = "sort"
EVENT_PREV = "prev"
EVENT_NEXT = "next"
EVENT_PAGE_SIZE = "page_size"
EVENT_RESET = "reset"

Event = Tuple[str, Optional[str]]


def table_event_map(table_id: str, engine: TableEngine) -> Dict[str, Event]:
    """Component id -> (event kind, filter or column key) for one table."""
    events: Dict[str, Event] = {}
    for flt in engine.filters:
        events[filter_input_id(table_id, flt.key)] = (EVENT_FILTER, flt.key)
    for column in engine.columns:
        if column.sortable:
            events[sort_header_id(table_id, column.key)] = (EVENT_SORT, column.key)
    events[table_part_id(table_id, IDs.Table.PREV_BTN)] = (EVENT_PREV, None)
    events[table_part_id(table_id, IDs.Table.NEXT_BTN)] = (EVENT_NEXT, None)
    events[table_part_id(table_id, IDs.Table.PAGE_SIZE_SELECT)] = (EVENT_PAGE_SIZE, None)
    events[table_part_id(table_id, IDs.Table.RESET_FILTERS_BTN)] = (EVENT_RESET, None)
    return events


def apply_table_event(engine: TableEngine, event: Optional[Event], value: Any = None) -> None:
    """
    Apply one UI event to the engine. value is the triggering component's
    value (filter input or page-size select); clicks carry none.
    """
    if event is None:
        return

    kind, key = event
    if kind == EVENT_FILTER:
        engine.update_filter(key, raw_filter_value(value))
    elif kind == EVENT_SORT:
        engine.request_sort(key)
    elif kind == EVENT_PREV:
        engine.previous_page()
    elif kind == EVENT_NEXT:
        engine.next_page()
    elif kind == EVENT_PAGE_SIZE:
        if value:
            engine.set_rows_per_page(int(value))
    elif kind == EVENT_RESET:
        engine.reset_filters()
    else:
        raise ValueError(f"Unknown table event '{kind}'")


def filter_component_updates(engine: TableEngine, incoming: Sequence[Any]) -> List[Any]:
    """
    New values for the filter inputs, in filter order. Inputs already showing
    the engine's value are left alone so typing is not interrupted.
    """
    values = engine.filter_values
    updates: List[Any] = []
    for flt, current in zip(engine.filters, incoming):
        wanted = values[flt.key]
        shown = raw_filter_value(current)
        if flt.kind is FilterKind.SELECT:
            shown = "" if shown == ALL_SENTINEL else shown
            wanted = "" if wanted == ALL_SENTINEL else wanted
        if shown == wanted:
            updates.append(dash.no_update)
        else:
            updates.append(component_value(flt, values[flt.key]))
    return updates


def _register_for_table(app: dash.Dash, ctx: AppConfig, table: BaseTable) -> None:
    table_id = table.id
    def part(name: str) -> str:
        return table_part_id(table_id, name)

    template = table.create_engine(rows_per_page=ctx.rows_per_page, pagination_enabled=ctx.pagination_enabled)
    filters = list(template.filters)
    select_filters = [f for f in filters if f.kind is FilterKind.SELECT]
    sortable = [c for c in template.columns if c.sortable]
    events = table_event_map(table_id, template)
    page_size_id = part(IDs.Table.PAGE_SIZE_SELECT)

    def engine_for(data: object) -> TableEngine:
        return engine_from_store(table, data, ctx.rows_per_page, ctx.pagination_enabled)

    # ---------------------------------------------------------
    # 1. Controls -> table state
    # ---------------------------------------------------------
    @app.callback(
        output=[
            Output(part(IDs.Table.STATE), "data"),
            [Output(filter_input_id(table_id, f.key), "value") for f in filters],
            [Output(filter_input_id(table_id, f.key), "options") for f in select_filters],
        ],
        inputs=[
            [Input(filter_input_id(table_id, f.key), "value") for f in filters],
            [Input(sort_header_id(table_id, c.key), "n_clicks") for c in sortable],
            Input(part(IDs.Table.PREV_BTN), "n_clicks"),
            Input(part(IDs.Table.NEXT_BTN), "n_clicks"),
            Input(page_size_id, "value"),
            Input(part(IDs.Table.RESET_FILTERS_BTN), "n_clicks"),
        ],
        state=[State(part(IDs.Table.STATE), "data")],
        prevent_initial_call=True,
    )
    def update_table_state(filter_inputs, _sort_clicks, _prev, _next, page_size, _reset, state_data):
        engine = engine_for(state_data)
        triggered = dash.ctx.triggered_id
        event = events.get(triggered)
        if event is None:
            raise exceptions.PreventUpdate

        kind, key = event
        if kind == EVENT_FILTER:
            value = filter_inputs[[f.key for f in filters].index(key)]
        elif kind == EVENT_PAGE_SIZE:
            value = page_size
        else:
            value = None

        try:
            apply_table_event(engine, event, value)
        except (KeyError, ValueError):
            logger.exception("Rejected table event", extra={"table_id": table_id, "event": kind})
            raise exceptions.PreventUpdate

        logger.debug(
            "table_event",
            extra={"table_id": table_id, "event": kind, "key": key, "page": engine.current_page},
        )

        options = [select_options(engine.select_options(f.key)) for f in select_filters]
        return engine.state.to_dict(), filter_component_updates(engine, filter_inputs), options

    # ---------------------------------------------------------
    # 2. Table state -> rendered page
    # ---------------------------------------------------------
    @app.callback(
        output=[
            Output(part(IDs.Table.BODY), "children"),
            Output(part(IDs.Table.RESULT_COUNT), "children"),
            Output(part(IDs.Table.PAGE_LABEL), "children"),
            Output(part(IDs.Table.PREV_BTN), "disabled"),
            Output(part(IDs.Table.NEXT_BTN), "disabled"),
            Output(part(IDs.Table.PAGINATION_CONTAINER), "style"),
            [Output(sort_header_id(table_id, c.key), "children") for c in sortable],
        ],
        inputs=[Input(part(IDs.Table.STATE), "data")],
    )
    def render_table(state_data):
        engine = engine_for(state_data)
        view = engine.view()
        headers = [header_label(c, engine.sort) for c in sortable]
        pagination_style = {} if engine.state.pagination.pagination_enabled else {"display": "none"}
        return (
            build_table_rows(view, engine.columns),
            result_count(view),
            page_label(view),
            not view.has_previous,
            not view.has_next,
            pagination_style,
            headers,
        )

    # ---------------------------------------------------------
    # 3. Matched rows -> CSV download
    # ---------------------------------------------------------
    @app.callback(
        Output(part(IDs.Table.DOWNLOAD), "data"),
        Input(part(IDs.Table.DOWNLOAD_BTN), "n_clicks"),
        State(part(IDs.Table.STATE), "data"),
        prevent_initial_call=True,
    )
    def download_table(n_clicks, state_data):
        if not n_clicks:
            raise exceptions.PreventUpdate

        engine = engine_for(state_data)
        view = engine.view()
        frame = records_to_frame(view.matched, engine.columns)
        logger.info("CSV export", extra={"table_id": table_id, "n_rows": len(frame)})
        return dcc.send_data_frame(frame.to_csv, f"{table_id}.csv", index=False)


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    for table in ctx.tables.values():
        _register_for_table(app, ctx, table)
