from .base import BaseTable
from .receipts import ReceiptsTable
from .expenditures import ExpendituresTable
from .registry import TableRegistry

__all__ = ["BaseTable", "ReceiptsTable", "ExpendituresTable", "TableRegistry"]
