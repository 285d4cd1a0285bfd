from __future__ import annotations

import datetime as dt

import dash
import pytest

from fin_browser.data.records import Expenditure
from fin_browser.data.taxonomy import CATEGORIES, SUB_CATEGORIES
from fin_browser.tables import ExpendituresTable
from fin_browser.ui.callbacks.callbacks_table import (
    EVENT_FILTER,
    EVENT_NEXT,
    EVENT_PAGE_SIZE,
    EVENT_RESET,
    EVENT_SORT,
    apply_table_event,
    filter_component_updates,
    table_event_map,
)
from fin_browser.ui.callbacks.callbacks_utils import engine_from_store, try_parse_table_state
from fin_browser.ui.ids import IDs, filter_input_id, sort_header_id, table_part_id


def _make_engine(rows_per_page=1):
    cat = CATEGORIES[0]
    records = [
        Expenditure(dt.date(2024, 1, d), f"PO-{1000 + d}", cat, SUB_CATEGORIES[cat][0], "Physics", 10.0 * d)
        for d in range(1, 4)
    ]
    return ExpendituresTable(records).create_engine(rows_per_page=rows_per_page)


def test_event_map_covers_controls():
    engine = _make_engine()
    events = table_event_map("expenditures", engine)

    assert events[filter_input_id("expenditures", "category")] == (EVENT_FILTER, "category")
    assert events[sort_header_id("expenditures", "expenditure")] == (EVENT_SORT, "expenditure")
    assert events[table_part_id("expenditures", IDs.Table.NEXT_BTN)] == (EVENT_NEXT, None)
    assert sort_header_id("expenditures", "attachment") not in events


def test_filter_event_converts_number_input():
    engine = _make_engine()
    apply_table_event(engine, (EVENT_FILTER, "expenditureMin"), 20.0)
    assert engine.filter_values["expenditureMin"] == "20"
    assert len(engine.view().matched) == 2


def test_cleared_input_becomes_empty_filter():
    engine = _make_engine()
    apply_table_event(engine, (EVENT_FILTER, "paymentOrder"), "1001")
    apply_table_event(engine, (EVENT_FILTER, "paymentOrder"), None)
    assert engine.filter_values["paymentOrder"] == ""


def test_page_sort_and_reset_events():
    engine = _make_engine()
    apply_table_event(engine, (EVENT_NEXT, None))
    assert engine.current_page == 2

    apply_table_event(engine, (EVENT_SORT, "expenditure"))
    assert engine.sort.key == "expenditure"

    apply_table_event(engine, (EVENT_PAGE_SIZE, None), 25)
    assert engine.state.pagination.rows_per_page == 25
    assert engine.current_page == 1

    apply_table_event(engine, (EVENT_FILTER, "department"), "Physics")
    apply_table_event(engine, (EVENT_RESET, None))
    assert set(engine.filter_values.values()) == {""}


def test_no_event_is_a_no_op():
    engine = _make_engine()
    before = engine.state.to_dict()
    apply_table_event(engine, None)
    assert engine.state.to_dict() == before


def test_unknown_event_kind_raises():
    with pytest.raises(ValueError):
        apply_table_event(_make_engine(), ("bogus", None))


def test_filter_updates_only_touch_changed_inputs():
    engine = _make_engine()
    keys = [f.key for f in engine.filters]
    sub = SUB_CATEGORIES[CATEGORIES[0]][0]
    apply_table_event(engine, (EVENT_FILTER, "subCategory"), sub)

    incoming = ["" if k != "subCategory" else sub for k in keys]
    incoming[keys.index("category")] = CATEGORIES[0]
    apply_table_event(engine, (EVENT_FILTER, "category"), CATEGORIES[0])

    updates = dict(zip(keys, filter_component_updates(engine, incoming)))
    assert updates["subCategory"] == "all"
    assert updates["category"] is dash.no_update
    assert updates["paymentOrder"] is dash.no_update


def test_try_parse_table_state():
    engine = _make_engine()
    assert try_parse_table_state(engine.state.to_dict()) == engine.state
    assert try_parse_table_state(None) is None
    assert try_parse_table_state({}) is None
    assert try_parse_table_state({"sort": {"direction": "sideways"}}) is None


@pytest.mark.parametrize(
    "raw",
    [{"filter_values": ["x"]}, {"sort": "amount"}, {"pagination": "page-2"}],
)
def test_malformed_store_falls_back_to_initial_state(raw):
    assert try_parse_table_state(raw) is None

    engine = engine_from_store(ExpendituresTable([]), raw, rows_per_page=10, pagination_enabled=True)
    assert engine.current_page == 1
    assert set(engine.filter_values.values()) == {""}
    assert engine.sort.key == "date"
