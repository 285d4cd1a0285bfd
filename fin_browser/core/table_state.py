from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, Optional

from fin_browser.core.schema import SortDirection


@dataclass
class SortState:
    key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC


@dataclass
class PaginationState:
    current_page: int = 1
    rows_per_page: int = 10
    pagination_enabled: bool = True


@dataclass
class TableState:
    """
    Everything the user can change about one table.

    Fields:

    - filter_values: filter key -> raw input ("" means no constraint)
    - sort: current sort key and direction
    - pagination: current page, page size and whether paging is on

    Serialised with to_dict/from_dict into the table's dcc.Store.
    """

    filter_values: Dict[str, str] = field(default_factory=dict)
    sort: SortState = field(default_factory=SortState)
    pagination: PaginationState = field(default_factory=PaginationState)

    @classmethod
    def initial(
        cls,
        filter_keys: Iterable[str],
        default_sort: Optional[str] = None,
        rows_per_page: int = 10,
        pagination_enabled: bool = True,
    ) -> TableState:
        return cls(
            filter_values={k: "" for k in filter_keys},
            sort=SortState(key=default_sort, direction=SortDirection.ASC),
            pagination=PaginationState(
                current_page=1,
                rows_per_page=rows_per_page,
                pagination_enabled=pagination_enabled,
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["sort"]["direction"] = self.sort.direction.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableState:
        """
        Rebuild a state from its to_dict() form.

        Raises:
            TypeError: if the payload or one of its sections is not a mapping
            ValueError: if a direction or page number cannot be read
        """
        if not isinstance(data, dict):
            raise TypeError(f"table state must be a dict, got {type(data).__name__}")
        filter_values = _section(data, "filter_values")
        sort = _section(data, "sort")
        pagination = _section(data, "pagination")

        sort_key = sort.get("key")
        return cls(
            filter_values={str(k): "" if v is None else str(v) for k, v in filter_values.items()},
            sort=SortState(
                key=None if sort_key is None else str(sort_key),
                direction=SortDirection(sort.get("direction", "asc")),
            ),
            pagination=PaginationState(
                current_page=max(1, int(pagination.get("current_page", 1))),
                rows_per_page=max(1, int(pagination.get("rows_per_page", 10))),
                pagination_enabled=bool(pagination.get("pagination_enabled", True)),
            ),
        )


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise TypeError(f"table state '{name}' must be a dict, got {type(section).__name__}")
    return section
