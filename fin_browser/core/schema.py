from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

Formatter = Callable[[Any, Any], Any]
Predicate = Callable[[Any, str], bool]
OptionsProvider = Callable[[Mapping[str, str]], Sequence[str]]

ALL_SENTINEL = "all"
RANGE_SUFFIXES = ("Min", "Max", "From", "To")


class FilterKind(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class Column(Generic[T]):
    """
    How one record field is displayed.

    Fields:

    - key: field name on the record type
    - label: header text
    - sortable: whether clicking the header sorts by this field
    - format: optional (value, row) -> renderable; defaults to str(value)
    - class_name: optional CSS hint applied to header and cells
    """
    key: str
    label: str
    sortable: bool = False
    format: Optional[Formatter] = None
    class_name: Optional[str] = None

    def render(self, row: T) -> Any:
        value = get_field(row, self.key)
        if self.format is not None:
            return self.format(value, row)
        return "" if value is None else str(value)


@dataclass(frozen=True)
class Filter(Generic[T]):
    """
    How one query constraint is presented and evaluated.

    ``key`` need not be a record field: synthetic keys (``amountMin``,
    ``dateFrom``...) must then supply ``predicate``.
    """
    key: str
    kind: FilterKind
    label: Optional[str] = None
    options: List[str] = field(default_factory=list)
    placeholder: Optional[str] = None
    predicate: Optional[Predicate] = None

    @property
    def display_label(self) -> str:
        return self.label or self.key

    @property
    def is_range(self) -> bool:
        return is_range_key(self.key)


def is_range_key(key: str) -> bool:
    """Range filters are grouped separately in the filter panel."""
    return key.endswith(RANGE_SUFFIXES)


def is_unconstrained(flt: Filter, raw: Optional[str]) -> bool:
    if raw is None or raw == "":
        return True
    return flt.kind is FilterKind.SELECT and raw == ALL_SENTINEL


def get_field(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def record_field_names(record_type: Optional[type], sample: Optional[Any] = None) -> Optional[set[str]]:
    """
    Field names declared by a record type (dataclass) or, failing that,
    present on a sample record. None when nothing can be inferred.
    """
    if record_type is not None and dataclasses.is_dataclass(record_type):
        return {f.name for f in dataclasses.fields(record_type)}
    if sample is None:
        return None
    if isinstance(sample, Mapping):
        return set(map(str, sample.keys()))
    if dataclasses.is_dataclass(sample):
        return {f.name for f in dataclasses.fields(sample)}
    return set(getattr(sample, "__dict__", {}).keys()) or None


def column_by_key(columns: Sequence[Column], key: str) -> Optional[Column]:
    return next((c for c in columns if c.key == key), None)


def filters_by_key(filters: Sequence[Filter]) -> Dict[str, Filter]:
    return {f.key: f for f in filters}
