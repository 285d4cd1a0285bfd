from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Type

from fin_browser.formatting import LocaleFormatter
from fin_browser.tables.base import BaseTable


class TableRegistry:
    """
    Registry for table classes so the app can build table cards dynamically

    Purpose:
    - Decouples the Dash layer from hardcoded table implementations by exposing {@link create(table_id, records)}
    - Lets layout and callbacks iterate over whatever tables are registered instead of hardcoded lists

    Design Notes:
    - Stores the subclasses of {@link BaseTable}, not instances, so each table is built with its own records
    - Enforces invariants:
        * only {@link BaseTable} subclasses can be registered
        * each table 'id' is unique across the registry
    """

    def __init__(self):
        self._tables: Dict[str, Type[BaseTable]] = {}

    def register(self, table_cls: Type[BaseTable]) -> None:
        """
        Register a {@link BaseTable} with the registry

        :param table_cls: the subclass of {@link BaseTable}

        Raises:
            TypeError: if table_cls is not a subclass of {@link BaseTable}
            ValueError: if a table with same 'id' already exists
        """
        if not isinstance(table_cls, type) or not issubclass(table_cls, BaseTable):
            raise TypeError(f"Table '{getattr(table_cls, 'id', table_cls)}' must be a subclass of BaseTable")

        if table_cls.id in self._tables:
            raise ValueError(f"Table '{table_cls.id}' already registered")

        self._tables[table_cls.id] = table_cls

    def get(self, table_id: str) -> Type[BaseTable]:
        try:
            return self._tables[table_id]
        except KeyError:
            raise KeyError(f"Table '{table_id}' not found")

    def create(
        self,
        table_id: str,
        records: Sequence[Any],
        formatter: Optional[LocaleFormatter] = None,
    ) -> BaseTable:
        """
        Instantiate a table for the given table_id over the given records

        Raises:
            KeyError: if no table with the given id exists in the registry
        """
        return self.get(table_id)(records, formatter)

    def all_classes(self) -> List[Type[BaseTable]]:
        return list(self._tables.values())
