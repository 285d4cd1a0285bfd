from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from dash import html

from fin_browser.core.schema import Column, Filter, OptionsProvider
from fin_browser.core.table_engine import TableEngine
from fin_browser.core.table_state import TableState
from fin_browser.formatting import LocaleFormatter


class BaseTable(ABC):
    """
    Abstract base class for all tables shown in the browser.

    Defines the contract that every table must follow
    - expose an 'id' - used internally and in component ids
    - expose a 'label' - the card title
    - declare its 'record_type' and optional 'default_sort' column
    - implement 'columns' / 'filters' - the declarative schemas fed to the engine
    - implement 'generate' - random demo records for the table
    """

    id: str = None
    label: str = None
    record_type: type = None
    default_sort: Optional[str] = None

    def __init__(self, records: Sequence[Any], formatter: Optional[LocaleFormatter] = None):
        self.records = list(records)
        self.formatter = formatter or LocaleFormatter()

    @abstractmethod
    def columns(self) -> List[Column]:
        """
        Column schema: which record fields are shown and how
        :return: a list of {@link Column}, in display order
        """
        raise NotImplementedError()

    @abstractmethod
    def filters(self) -> List[Filter]:
        """
        Filter schema: which constraints the user can set
        :return: a list of {@link Filter}, in display order
        """
        raise NotImplementedError()

    @classmethod
    @abstractmethod
    def generate(cls, count: int, rng: np.random.Generator) -> List[Any]:
        raise NotImplementedError()

    def dependencies(self) -> Dict[str, List[str]]:
        """Filter key -> filter keys whose change clears it."""
        return {}

    def option_providers(self) -> Dict[str, OptionsProvider]:
        """Filter key -> options computed from the current filter values."""
        return {}

    # ------------------------------------------------------------------
    # Common helpers for all tables
    # ------------------------------------------------------------------
    def create_engine(
        self,
        state: Optional[TableState] = None,
        rows_per_page: int = 10,
        pagination_enabled: bool = True,
    ) -> TableEngine:
        """
        Build an engine over this table's records, optionally restoring a
        previously serialised state.
        """
        return TableEngine(
            self.records,
            self.columns(),
            self.filters(),
            default_sort=self.default_sort,
            dependencies=self.dependencies(),
            option_providers=self.option_providers(),
            rows_per_page=rows_per_page,
            pagination_enabled=pagination_enabled,
            record_type=self.record_type,
            state=state,
        )

    @staticmethod
    def attachment_link(url: Optional[str], _row: Any = None) -> Any:
        if not url:
            return "-"
        return html.A("View", href=url, target="_blank", rel="noopener noreferrer", className="fin-attachment-link")
