from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, List

import numpy as np

from fin_browser.core.predicates import at_least, at_most, on_or_after, on_or_before
from fin_browser.core.schema import Column, Filter, FilterKind, OptionsProvider
from fin_browser.data.generators import generate_expenditures
from fin_browser.data.records import Expenditure
from fin_browser.data.taxonomy import CATEGORIES, DEPARTMENTS, all_sub_categories, sub_categories_for
from fin_browser.tables.base import BaseTable


def _sub_category_options(values: Mapping[str, str]) -> List[str]:
    return sub_categories_for(values.get("category"))


class ExpendituresTable(BaseTable):
    """
    Expenditures booked against an object head, broken down by sub-category
    and department. The sub-category filter offers only the sub-categories of
    the selected category and is cleared whenever the category changes.
    """

    id = "expenditures"
    label = "Expenditures"
    record_type = Expenditure
    default_sort = "date"

    def columns(self) -> List[Column]:
        return [
            Column("date", "Date", sortable=True, format=self.formatter.date),
            Column("paymentOrder", "Payment Order", sortable=True),
            Column("category", "Category", sortable=True),
            Column("subCategory", "Sub-category", sortable=True),
            Column("department", "Department", sortable=True),
            Column("expenditure", "Expenditure", sortable=True, format=self.formatter.money, class_name="text-end"),
            Column("attachment", "Attachment", format=self.attachment_link),
        ]

    def filters(self) -> List[Filter]:
        symbol = self.formatter.currency_symbol
        return [
            Filter("paymentOrder", FilterKind.TEXT, label="Payment Order", placeholder="Search Payment Order"),
            Filter("category", FilterKind.SELECT, label="Category", options=list(CATEGORIES)),
            Filter("subCategory", FilterKind.SELECT, label="Sub-category", options=all_sub_categories()),
            Filter("department", FilterKind.SELECT, label="Department", options=list(DEPARTMENTS)),
            Filter("expenditureMin", FilterKind.NUMBER, label="Min Expenditure", placeholder=f"Min {symbol}",
                   predicate=at_least("expenditure")),
            Filter("expenditureMax", FilterKind.NUMBER, label="Max Expenditure", placeholder=f"Max {symbol}",
                   predicate=at_most("expenditure")),
            Filter("dateFrom", FilterKind.DATE, label="From Date", predicate=on_or_after("date")),
            Filter("dateTo", FilterKind.DATE, label="To Date", predicate=on_or_before("date")),
        ]

    def dependencies(self) -> Dict[str, List[str]]:
        return {"subCategory": ["category"]}

    def option_providers(self) -> Dict[str, OptionsProvider]:
        return {"subCategory": _sub_category_options}

    @classmethod
    def generate(cls, count: int, rng: np.random.Generator) -> List[Expenditure]:
        return generate_expenditures(count, rng)
