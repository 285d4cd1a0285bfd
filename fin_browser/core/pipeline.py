"""
Pure derivation stages of the table engine: filter -> sort -> paginate.

Each stage takes plain sequences and returns new lists; nothing here mutates
its inputs or keeps state, so re-running the pipeline on the same inputs
always yields the same view.
"""
from __future__ import annotations

import functools
import math
import unicodedata
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, TypeVar

from fin_browser.core.predicates import is_numeric, is_temporal, parse_date, parse_number, to_instant
from fin_browser.core.schema import Filter, FilterKind, SortDirection, get_field, is_unconstrained

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Filter stage
# -----------------------------------------------------------------------------
def matches(row: Any, flt: Filter, raw: Optional[str]) -> bool:
    """Evaluate one filter descriptor against one record."""
    if is_unconstrained(flt, raw):
        return True

    if flt.predicate is not None:
        return bool(flt.predicate(row, raw))

    value = get_field(row, flt.key)

    if flt.kind is FilterKind.TEXT:
        text = "" if value is None else str(value)
        return raw.casefold() in text.casefold()

    if flt.kind is FilterKind.NUMBER:
        bound = parse_number(raw)
        if bound is None:
            return True
        return is_numeric(value) and value >= bound

    if flt.kind is FilterKind.DATE:
        bound = parse_date(raw)
        if bound is None:
            return True
        instant = to_instant(value)
        return instant is not None and instant >= bound

    if flt.kind is FilterKind.SELECT:
        return value == raw or (value is not None and str(value) == raw)

    return True


def apply_filters(rows: Sequence[T], filters: Sequence[Filter], values: Mapping[str, str]) -> List[T]:
    """Keep the records satisfying every filter (logical AND)."""
    active = [f for f in filters if not is_unconstrained(f, values.get(f.key))]
    if not active:
        return list(rows)
    return [row for row in rows if all(matches(row, f, values[f.key]) for f in active)]


# -----------------------------------------------------------------------------
# Sort stage
# -----------------------------------------------------------------------------
def _collation_key(text: str) -> tuple[str, str]:
    # Locale-independent: accent/case-insensitive primary ordering, exact text as tie-break.
    folded = unicodedata.normalize("NFKD", text)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch)).casefold()
    return folded, text


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison used for column sorting (ascending order)."""
    if is_temporal(a) and is_temporal(b):
        ta, tb = to_instant(a), to_instant(b)
        return (ta > tb) - (ta < tb)

    if is_numeric(a) and is_numeric(b):
        diff = a - b
        return (diff > 0) - (diff < 0)

    ka = _collation_key("" if a is None else str(a))
    kb = _collation_key("" if b is None else str(b))
    return (ka > kb) - (ka < kb)


def sort_rows(rows: Sequence[T], key: Optional[str], direction: SortDirection = SortDirection.ASC) -> List[T]:
    """
    Stable sort by one field. Descending reverses the ascending comparator,
    so records comparing equal keep their incoming relative order either way.
    """
    if not key:
        return list(rows)
    cmp = functools.cmp_to_key(lambda ra, rb: compare_values(get_field(ra, key), get_field(rb, key)))
    return sorted(rows, key=cmp, reverse=SortDirection(direction) is SortDirection.DESC)


# -----------------------------------------------------------------------------
# Pagination stage
# -----------------------------------------------------------------------------
def total_pages(count: int, rows_per_page: int, enabled: bool = True) -> int:
    """Number of pages; an empty result still has one (empty) page."""
    if not enabled or count <= 0:
        return 1
    return max(1, math.ceil(count / rows_per_page))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, int(page)), max(1, pages))


def paginate(rows: Sequence[T], page: int, rows_per_page: int, enabled: bool = True) -> List[T]:
    if not enabled:
        return list(rows)
    start = (page - 1) * rows_per_page
    return list(rows[start:start + rows_per_page])
