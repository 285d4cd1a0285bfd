from __future__ import annotations

import logging
from typing import Optional

from fin_browser.core.table_engine import TableEngine
from fin_browser.core.table_state import TableState
from fin_browser.tables.base import BaseTable

logger = logging.getLogger(__name__)


def try_parse_table_state(data: object) -> Optional[TableState]:
    if not isinstance(data, dict) or not data:
        return None
    try:
        return TableState.from_dict(data)
    except (KeyError, TypeError, ValueError):
        logger.exception("Invalid table-state: %r", data)
        return None


def engine_from_store(table: BaseTable, data: object, rows_per_page: int, pagination_enabled: bool) -> TableEngine:
    """Rebuild a table's engine from its dcc.Store payload; bad payloads start fresh."""
    return table.create_engine(
        state=try_parse_table_state(data),
        rows_per_page=rows_per_page,
        pagination_enabled=pagination_enabled,
    )
