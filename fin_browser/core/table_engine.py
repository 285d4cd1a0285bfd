from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from fin_browser.core import pipeline
from fin_browser.core.schema import (
    Column,
    Filter,
    FilterKind,
    OptionsProvider,
    SortDirection,
    column_by_key,
    filters_by_key,
)
from fin_browser.core.table_state import PaginationState, SortState, TableState
from fin_browser.validation.table_validation import validate_table_schema

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TableView(Generic[T]):
    """
    One derived snapshot of a table.

    - rows: records on the current page
    - matched: every record passing the filters, in sorted order
    - page / total_pages: the page shown (already clamped) and the page count
    - offset: index of rows[0] within matched, for serial numbers
    """
    rows: List[T]
    matched: List[T]
    total_count: int
    page: int
    total_pages: int
    offset: int

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @property
    def is_empty(self) -> bool:
        return not self.matched

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


class TableEngine(Generic[T]):
    """
    Filtered, sorted, paginated view over an in-memory list of records.

    The engine is generic over the record type: it only reads the fields named
    by its column and filter schemas. It owns the mutable table state (filter
    values, sort, pagination); the raw records are never modified.

    Design Notes:
    - dependencies maps a filter key to the keys it depends on; when any of
      those changes, the dependent value is cleared (transitively)
    - option_providers compute select options from the current filter values,
      overriding the static options of that filter
    - the schema is validated at construction so that a column or filter that
      cannot be read from the records fails immediately
    """

    def __init__(
        self,
        data: Sequence[T],
        columns: Sequence[Column[T]],
        filters: Sequence[Filter[T]] = (),
        *,
        default_sort: Optional[str] = None,
        dependencies: Optional[Mapping[str, Sequence[str]]] = None,
        option_providers: Optional[Mapping[str, OptionsProvider]] = None,
        rows_per_page: int = 10,
        pagination_enabled: bool = True,
        record_type: Optional[type] = None,
        state: Optional[TableState] = None,
    ) -> None:
        if rows_per_page < 1:
            raise ValueError("rows_per_page must be >= 1")

        self._data: tuple[T, ...] = tuple(data)
        self.columns: List[Column[T]] = list(columns)
        self.filters: List[Filter[T]] = list(filters)
        self.dependencies: Dict[str, List[str]] = {k: list(v) for k, v in (dependencies or {}).items()}
        self.option_providers: Dict[str, OptionsProvider] = dict(option_providers or {})

        validate_table_schema(
            self.columns,
            self.filters,
            record_type=record_type,
            sample=self._data[0] if self._data else None,
            default_sort=default_sort,
            dependencies=self.dependencies,
            option_providers=self.option_providers,
        )

        self._filters_by_key = filters_by_key(self.filters)
        self._dependents: Dict[str, List[str]] = {}
        for dependent, sources in self.dependencies.items():
            for source in sources:
                self._dependents.setdefault(source, []).append(dependent)

        if state is None:
            state = TableState.initial(
                self._filters_by_key.keys(),
                default_sort=default_sort,
                rows_per_page=rows_per_page,
                pagination_enabled=pagination_enabled,
            )
        self._state = self._reconcile(state)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    def _reconcile(self, state: TableState) -> TableState:
        # exactly one entry per declared filter key
        values = {k: state.filter_values.get(k, "") for k in self._filters_by_key}
        sort_key = state.sort.key
        if sort_key is not None and column_by_key(self.columns, sort_key) is None:
            sort_key = None
        return TableState(
            filter_values=values,
            sort=SortState(key=sort_key, direction=state.sort.direction),
            pagination=PaginationState(
                current_page=max(1, state.pagination.current_page),
                rows_per_page=max(1, state.pagination.rows_per_page),
                pagination_enabled=state.pagination.pagination_enabled,
            ),
        )

    @property
    def data(self) -> tuple[T, ...]:
        return self._data

    @property
    def state(self) -> TableState:
        return self._state

    @property
    def filter_values(self) -> Dict[str, str]:
        return dict(self._state.filter_values)

    @property
    def sort(self) -> SortState:
        return self._state.sort

    @property
    def current_page(self) -> int:
        return self._state.pagination.current_page

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def update_filter(self, key: str, value: Optional[str]) -> None:
        if key not in self._filters_by_key:
            raise KeyError(f"Filter '{key}' not found")

        value = "" if value is None else str(value)
        values = self._state.filter_values
        if values[key] == value:
            return

        values[key] = value
        cleared = self._clear_dependents(key)
        self._state.pagination.current_page = 1

        logger.debug(
            "filter_updated",
            extra={"filter_key": key, "filter_value": value, "cleared": cleared},
        )

    def _clear_dependents(self, key: str) -> List[str]:
        cleared: List[str] = []
        queue = deque(self._dependents.get(key, []))
        while queue:
            dependent = queue.popleft()
            if dependent == key or dependent in cleared:
                continue
            cleared.append(dependent)
            self._state.filter_values[dependent] = ""
            queue.extend(self._dependents.get(dependent, []))
        return cleared

    def reset_filters(self) -> None:
        self._state.filter_values = {k: "" for k in self._filters_by_key}
        self._state.pagination.current_page = 1

    def request_sort(self, key: str) -> None:
        column = column_by_key(self.columns, key)
        if column is None or not column.sortable:
            raise KeyError(f"Column '{key}' is not sortable")

        sort = self._state.sort
        if sort.key == key:
            sort.direction = sort.direction.flipped()
        else:
            sort.key = key
            sort.direction = SortDirection.ASC

        logger.debug("sort_requested", extra={"sort_key": key, "direction": sort.direction.value})

    def total_pages(self) -> int:
        matched = pipeline.apply_filters(self._data, self.filters, self._state.filter_values)
        p = self._state.pagination
        return pipeline.total_pages(len(matched), p.rows_per_page, p.pagination_enabled)

    def change_page(self, page: int) -> int:
        self._state.pagination.current_page = pipeline.clamp_page(page, self.total_pages())
        return self._state.pagination.current_page

    def next_page(self) -> int:
        pages = self.total_pages()
        current = pipeline.clamp_page(self.current_page, pages)
        if current < pages:
            current += 1
        self._state.pagination.current_page = current
        return current

    def previous_page(self) -> int:
        current = pipeline.clamp_page(self.current_page, self.total_pages())
        if current > 1:
            current -= 1
        self._state.pagination.current_page = current
        return current

    def set_rows_per_page(self, rows_per_page: int) -> None:
        if int(rows_per_page) < 1:
            raise ValueError("rows_per_page must be >= 1")
        self._state.pagination.rows_per_page = int(rows_per_page)
        self._state.pagination.current_page = 1

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------
    def view(self) -> TableView[T]:
        state = self._state
        matched = pipeline.apply_filters(self._data, self.filters, state.filter_values)
        matched = pipeline.sort_rows(matched, state.sort.key, state.sort.direction)

        p = state.pagination
        pages = pipeline.total_pages(len(matched), p.rows_per_page, p.pagination_enabled)
        page = pipeline.clamp_page(p.current_page, pages)
        rows = pipeline.paginate(matched, page, p.rows_per_page, p.pagination_enabled)
        offset = (page - 1) * p.rows_per_page if p.pagination_enabled else 0

        return TableView(
            rows=rows,
            matched=matched,
            total_count=len(self._data),
            page=page,
            total_pages=pages,
            offset=offset,
        )

    def select_options(self, key: str) -> List[str]:
        """Options offered by a select filter, given the current filter values."""
        flt = self._filters_by_key.get(key)
        if flt is None:
            raise KeyError(f"Filter '{key}' not found")

        provider = self.option_providers.get(key)
        if provider is not None:
            return list(provider(dict(self._state.filter_values)))
        return list(flt.options or [])

    def all_select_options(self) -> Dict[str, List[str]]:
        return {f.key: self.select_options(f.key) for f in self.filters if f.kind is FilterKind.SELECT}

    def render_cells(self, row: T) -> List[Any]:
        return [col.render(row) for col in self.columns]
