from __future__ import annotations

from typing import Any, List, Optional, Sequence

from dash import html

from fin_browser.core.schema import ALL_SENTINEL, Column, Filter, FilterKind, SortDirection
from fin_browser.core.table_engine import TableView
from fin_browser.core.table_state import SortState

NO_DATA_TEXT = "No data found"
SERIAL_LABEL = "S.No"


def select_options(options: Sequence[str]) -> List[dict]:
    """Dropdown options for a select filter; "All" always comes first."""
    return [{"label": "All", "value": ALL_SENTINEL}] + [{"label": o, "value": o} for o in options]


def page_size_options(sizes: Sequence[int]) -> List[dict]:
    return [{"label": f"{n} / page", "value": n} for n in sizes]


def component_value(flt: Filter, raw: str) -> Any:
    """Filter-map value -> what the input component displays."""
    if flt.kind is FilterKind.SELECT:
        return raw or ALL_SENTINEL
    return raw


def raw_filter_value(value: Any) -> str:
    """
    Input component value -> filter-map value. Number inputs hand back
    numbers and cleared inputs hand back None.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def sort_indicator(column: Column, sort: SortState) -> str:
    if not column.sortable or sort.key != column.key:
        return ""
    return " ↑" if sort.direction is SortDirection.ASC else " ↓"


def header_label(column: Column, sort: SortState) -> str:
    return f"{column.label}{sort_indicator(column, sort)}"


def _cell_class(column: Column) -> Optional[str]:
    return column.class_name or None


def build_table_rows(view: TableView, columns: Sequence[Column]) -> List[html.Tr]:
    """
    Body rows for the current page: a serial-number cell followed by one
    cell per column. An empty result yields a single "No data found" row.
    """
    if view.is_empty:
        return [
            html.Tr(
                html.Td(
                    NO_DATA_TEXT,
                    colSpan=len(columns) + 1,
                    className="text-center text-muted py-4 fin-no-data",
                )
            )
        ]

    rows: List[html.Tr] = []
    for i, record in enumerate(view.rows):
        cells = [html.Td(str(view.offset + i + 1))]
        for column in columns:
            cells.append(html.Td(column.render(record), className=_cell_class(column)))
        rows.append(html.Tr(cells))
    return rows


def result_count(view: TableView) -> list:
    return [html.B(str(view.matched_count)), " result(s) found"]


def page_label(view: TableView) -> str:
    return f"Page {view.page} of {view.total_pages}"
