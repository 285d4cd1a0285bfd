from __future__ import annotations

from typing import List

import numpy as np

from fin_browser.core.predicates import at_least, at_most, on_or_after, on_or_before
from fin_browser.core.schema import Column, Filter, FilterKind
from fin_browser.data.generators import generate_receipts
from fin_browser.data.records import Receipt
from fin_browser.data.taxonomy import CATEGORIES
from fin_browser.tables.base import BaseTable


class ReceiptsTable(BaseTable):
    """
    Sanctioned receipts: one row per sanction order.
    """

    id = "receipts"
    label = "Receipts"
    record_type = Receipt
    default_sort = "date"

    def columns(self) -> List[Column]:
        return [
            Column("date", "Date", sortable=True, format=self.formatter.date),
            Column("sanctionOrder", "Sanction Order", sortable=True),
            Column("category", "Category", sortable=True),
            Column("amount", "Amount", sortable=True, format=self.formatter.money, class_name="text-end"),
            Column("attachment", "Attachment", format=self.attachment_link),
        ]

    def filters(self) -> List[Filter]:
        symbol = self.formatter.currency_symbol
        return [
            Filter("sanctionOrder", FilterKind.TEXT, label="Sanction Order", placeholder="Search Sanction Order"),
            Filter("category", FilterKind.SELECT, label="Category", options=list(CATEGORIES)),
            Filter("amountMin", FilterKind.NUMBER, label="Min Amount", placeholder=f"Min {symbol}",
                   predicate=at_least("amount")),
            Filter("amountMax", FilterKind.NUMBER, label="Max Amount", placeholder=f"Max {symbol}",
                   predicate=at_most("amount")),
            Filter("dateFrom", FilterKind.DATE, label="From Date", predicate=on_or_after("date")),
            Filter("dateTo", FilterKind.DATE, label="To Date", predicate=on_or_before("date")),
        ]

    @classmethod
    def generate(cls, count: int, rng: np.random.Generator) -> List[Receipt]:
        return generate_receipts(count, rng)
