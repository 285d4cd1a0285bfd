from __future__ import annotations

import pytest

from fin_browser.core.predicates import at_least
from fin_browser.core.schema import Column, Filter, FilterKind, SortDirection
from fin_browser.core.table_engine import TableEngine
from fin_browser.core.table_state import PaginationState, TableState
from fin_browser.validation.errors import ValidationError

SUBS = {"A": ["a1", "a2"], "B": ["b1"]}


def _make_rows():
    return [
        {"id": 1, "amount": 100, "category": "A", "sub": "a1"},
        {"id": 2, "amount": 50, "category": "B", "sub": "b1"},
        {"id": 3, "amount": 75, "category": "A", "sub": "a2"},
    ]


def _make_engine(rows=None, **kwargs) -> TableEngine:
    columns = [
        Column("id", "ID", sortable=True),
        Column("amount", "Amount", sortable=True),
        Column("category", "Category", sortable=True),
        Column("sub", "Sub"),
    ]
    filters = [
        Filter("category", FilterKind.SELECT, options=["A", "B"]),
        Filter("sub", FilterKind.SELECT, options=["a1", "a2", "b1"]),
        Filter("amountMin", FilterKind.NUMBER, predicate=at_least("amount")),
    ]

    def sub_options(values):
        cat = values.get("category")
        if not cat or cat == "all":
            return [s for subs in SUBS.values() for s in subs]
        return SUBS.get(cat, [])

    return TableEngine(
        _make_rows() if rows is None else rows,
        columns,
        filters,
        dependencies={"sub": ["category"]},
        option_providers={"sub": sub_options},
        **kwargs,
    )


def test_initial_state_has_one_empty_value_per_filter():
    engine = _make_engine()
    assert engine.filter_values == {"category": "", "sub": "", "amountMin": ""}
    assert engine.current_page == 1
    assert engine.sort.key is None


def test_min_filter_sort_and_page_scenario():
    engine = _make_engine(rows_per_page=1)

    engine.update_filter("amountMin", "60")
    assert [r["amount"] for r in engine.view().matched] == [100, 75]

    engine.request_sort("amount")
    assert engine.sort.direction is SortDirection.ASC
    assert [r["amount"] for r in engine.view().matched] == [75, 100]

    engine.change_page(2)
    view = engine.view()
    assert [r["amount"] for r in view.rows] == [100]
    assert view.total_pages == 2
    assert view.offset == 1


def test_changing_source_clears_dependent_and_resets_page():
    state = TableState(
        filter_values={"sub": "a1"},
        pagination=PaginationState(current_page=3, rows_per_page=1),
    )
    engine = _make_engine(state=state)
    assert engine.current_page == 3

    engine.update_filter("category", "A")

    assert engine.filter_values["sub"] == ""
    assert engine.current_page == 1


def test_setting_dependent_does_not_clear_source():
    engine = _make_engine()
    engine.update_filter("category", "A")
    engine.update_filter("sub", "a2")
    assert engine.filter_values == {"category": "A", "sub": "a2", "amountMin": ""}
    assert [r["id"] for r in engine.view().matched] == [3]


def test_unchanged_filter_value_keeps_page():
    engine = _make_engine(rows_per_page=1)
    engine.update_filter("amountMin", "10")
    engine.change_page(3)
    engine.update_filter("amountMin", "10")
    assert engine.current_page == 3


def test_update_unknown_filter_raises():
    engine = _make_engine()
    with pytest.raises(KeyError):
        engine.update_filter("nope", "x")


def test_request_sort_toggles_direction_and_twice_is_identity():
    engine = _make_engine()
    engine.request_sort("amount")
    before = engine.view().matched

    engine.request_sort("amount")
    assert engine.sort.direction is SortDirection.DESC
    assert [r["amount"] for r in engine.view().matched] == [100, 75, 50]

    engine.request_sort("amount")
    assert engine.sort.direction is SortDirection.ASC
    assert engine.view().matched == before


def test_new_sort_key_starts_ascending():
    engine = _make_engine()
    engine.request_sort("amount")
    engine.request_sort("amount")
    engine.request_sort("id")
    assert engine.sort.key == "id"
    assert engine.sort.direction is SortDirection.ASC


def test_sorting_unsortable_or_unknown_column_raises():
    engine = _make_engine()
    with pytest.raises(KeyError):
        engine.request_sort("sub")
    with pytest.raises(KeyError):
        engine.request_sort("missing")


def test_sort_does_not_reset_page():
    engine = _make_engine(rows_per_page=1)
    engine.change_page(2)
    engine.request_sort("amount")
    assert engine.current_page == 2


def test_change_page_is_clamped():
    engine = _make_engine(rows_per_page=2)
    assert engine.change_page(0) == 1
    assert engine.change_page(99) == 2


def test_next_and_previous_stop_at_bounds():
    engine = _make_engine(rows_per_page=2)
    assert engine.previous_page() == 1
    assert engine.next_page() == 2
    assert engine.next_page() == 2
    assert engine.previous_page() == 1


def test_empty_result_has_single_empty_page():
    engine = _make_engine()
    engine.update_filter("amountMin", "1000")
    view = engine.view()
    assert view.rows == []
    assert view.is_empty
    assert view.total_pages == 1
    assert view.page == 1
    assert not view.has_next and not view.has_previous


def test_empty_data_set():
    engine = _make_engine(rows=[])
    view = engine.view()
    assert view.total_count == 0
    assert view.total_pages == 1


def test_set_rows_per_page_resets_page():
    engine = _make_engine(rows_per_page=1)
    engine.change_page(3)
    engine.set_rows_per_page(2)
    assert engine.current_page == 1
    assert engine.total_pages() == 2
    with pytest.raises(ValueError):
        engine.set_rows_per_page(0)


def test_pagination_disabled_shows_all_rows():
    engine = _make_engine(rows_per_page=1, pagination_enabled=False)
    view = engine.view()
    assert len(view.rows) == 3
    assert view.total_pages == 1


def test_reset_filters():
    engine = _make_engine(rows_per_page=1)
    engine.update_filter("category", "A")
    engine.change_page(2)
    engine.reset_filters()
    assert set(engine.filter_values.values()) == {""}
    assert engine.current_page == 1


def test_view_is_pure_and_data_untouched():
    rows = _make_rows()
    engine = _make_engine(rows=rows)
    engine.request_sort("amount")
    first = engine.view()
    second = engine.view()
    assert first == second
    assert [r["id"] for r in engine.data] == [1, 2, 3]
    assert rows == _make_rows()


def test_select_options_follow_source_value():
    engine = _make_engine()
    assert engine.select_options("sub") == ["a1", "a2", "b1"]
    engine.update_filter("category", "B")
    assert engine.select_options("sub") == ["b1"]
    assert engine.select_options("category") == ["A", "B"]
    assert set(engine.all_select_options()) == {"category", "sub"}


def test_default_sort_is_applied():
    engine = TableEngine(
        _make_rows(),
        [Column("amount", "Amount", sortable=True)],
        default_sort="amount",
    )
    assert [r["amount"] for r in engine.view().rows] == [50, 75, 100]


def test_invalid_schema_is_rejected():
    with pytest.raises(ValidationError) as exc:
        TableEngine(
            _make_rows(),
            [Column("nope", "Nope")],
            [Filter("amountMin", FilterKind.NUMBER)],
        )
    codes = {issue.code for issue in exc.value.issues}
    assert codes == {"COLUMN_KEY", "FILTER_PREDICATE"}


def test_state_roundtrip_restores_engine():
    engine = _make_engine(rows_per_page=1)
    engine.update_filter("amountMin", "60")
    engine.request_sort("amount")
    engine.change_page(2)

    restored = _make_engine(rows_per_page=1, state=TableState.from_dict(engine.state.to_dict()))
    assert restored.view() == engine.view()


def test_rows_per_page_must_be_positive():
    with pytest.raises(ValueError):
        _make_engine(rows_per_page=0)


def _make_chain_engine(dependencies) -> TableEngine:
    rows = [{"a": "1", "b": "2", "c": "3", "x": "4"}]
    filters = [Filter(k, FilterKind.TEXT) for k in ("a", "b", "c")] + [Filter("x", FilterKind.SELECT)]
    return TableEngine(rows, [Column("a", "A")], filters, dependencies=dependencies)


def test_dependent_clearing_is_transitive():
    engine = _make_chain_engine({"b": ["a"], "c": ["b"]})
    engine.update_filter("b", "2")
    engine.update_filter("c", "3")
    engine.update_filter("x", "4")

    engine.update_filter("a", "1")

    assert engine.filter_values == {"a": "1", "b": "", "c": "", "x": "4"}


def test_dependency_cycles_and_self_references_terminate():
    engine = _make_chain_engine({"a": ["a", "c"], "b": ["a"], "c": ["b"]})
    engine.update_filter("b", "2")
    engine.update_filter("c", "3")

    engine.update_filter("a", "1")

    # a keeps its new value even though it sits on the cycle
    assert engine.filter_values["a"] == "1"
    assert engine.filter_values["b"] == ""
    assert engine.filter_values["c"] == ""


def test_select_without_options_or_provider_offers_nothing():
    engine = _make_chain_engine({})
    assert engine.select_options("x") == []
    assert engine.all_select_options() == {"x": []}
