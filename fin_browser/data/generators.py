"""
Random demo records for the receipts and expenditures tables.

All randomness goes through a numpy Generator so a seeded generator
reproduces the same dataset.
"""
from __future__ import annotations

import datetime as dt
from typing import List, Optional

import numpy as np

from fin_browser.data.records import Expenditure, Receipt
from fin_browser.data.taxonomy import CATEGORIES, DEPARTMENTS, SUB_CATEGORIES

DEMO_YEAR = 2024
ATTACHMENT_URL = "https://example.com/file.pdf"
MAX_RECEIPT_AMOUNT = 100_000
MAX_EXPENDITURE_AMOUNT = 50_000


def _random_date(rng: np.random.Generator) -> dt.date:
    # day 1..28 so every month is valid
    return dt.date(DEMO_YEAR, int(rng.integers(1, 13)), int(rng.integers(1, 29)))


def _order_number(rng: np.random.Generator, prefix: str) -> str:
    number = int(rng.integers(1000, 10000))
    return str(number) if rng.random() > 0.5 else f"{prefix}-{number}"


def _amount(rng: np.random.Generator, upper: float) -> float:
    return round(float(rng.uniform(0, upper)), 2)


def _attachment(rng: np.random.Generator) -> Optional[str]:
    return ATTACHMENT_URL if rng.random() > 0.5 else None


def _choice(rng: np.random.Generator, values: List[str]) -> str:
    return values[int(rng.integers(0, len(values)))]


def generate_receipts(count: int, rng: Optional[np.random.Generator] = None) -> List[Receipt]:
    rng = rng if rng is not None else np.random.default_rng()
    return [
        Receipt(
            date=_random_date(rng),
            sanctionOrder=_order_number(rng, "SO"),
            category=_choice(rng, CATEGORIES),
            amount=_amount(rng, MAX_RECEIPT_AMOUNT),
            attachment=_attachment(rng),
        )
        for _ in range(count)
    ]


def generate_expenditures(count: int, rng: Optional[np.random.Generator] = None) -> List[Expenditure]:
    rng = rng if rng is not None else np.random.default_rng()
    records: List[Expenditure] = []
    for _ in range(count):
        category = _choice(rng, CATEGORIES)
        records.append(
            Expenditure(
                date=_random_date(rng),
                paymentOrder=_order_number(rng, "PO"),
                category=category,
                subCategory=_choice(rng, SUB_CATEGORIES[category]),
                department=_choice(rng, DEPARTMENTS),
                expenditure=_amount(rng, MAX_EXPENDITURE_AMOUNT),
                attachment=_attachment(rng),
            )
        )
    return records
