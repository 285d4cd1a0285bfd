"""
Core domain layer: column/filter schemas, the pure filter -> sort -> paginate
pipeline, table state and the table engine
"""

from .schema import Column, Filter, FilterKind, SortDirection
from .table_state import TableState
from .table_engine import TableEngine, TableView

__all__ = ["Column", "Filter", "FilterKind", "SortDirection", "TableState", "TableEngine", "TableView"]
