from __future__ import annotations

import pytest

from fin_browser.core.schema import SortDirection
from fin_browser.core.table_state import PaginationState, SortState, TableState


def test_table_state_to_from_dict_roundtrip():
    st = TableState(
        filter_values={"category": "A", "amountMin": "60"},
        sort=SortState(key="amount", direction=SortDirection.DESC),
        pagination=PaginationState(current_page=3, rows_per_page=25, pagination_enabled=False),
    )

    raw = st.to_dict()
    rebuilt = TableState.from_dict(raw)

    assert raw["sort"]["direction"] == "desc"
    assert rebuilt == st


def test_initial_state():
    st = TableState.initial(["a", "b"], default_sort="date", rows_per_page=5)
    assert st.filter_values == {"a": "", "b": ""}
    assert st.sort == SortState(key="date", direction=SortDirection.ASC)
    assert st.pagination.rows_per_page == 5


def test_from_dict_clamps_and_stringifies():
    st = TableState.from_dict(
        {
            "filter_values": {"amountMin": 60, "x": None},
            "pagination": {"current_page": 0, "rows_per_page": -4},
        }
    )
    assert st.filter_values == {"amountMin": "60", "x": ""}
    assert st.pagination.current_page == 1
    assert st.pagination.rows_per_page == 1
    assert st.sort.key is None


@pytest.mark.parametrize(
    "raw",
    [
        ["not", "a", "dict"],
        {"filter_values": ["x"]},
        {"sort": "amount"},
        {"pagination": 3},
        {"pagination": {"current_page": [2]}},
    ],
)
def test_from_dict_rejects_malformed_sections(raw):
    with pytest.raises(TypeError):
        TableState.from_dict(raw)
