from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pandas as pd


@dataclass(frozen=True)
class Receipt:
    date: dt.date
    sanctionOrder: str
    category: str
    amount: float
    attachment: Optional[str] = None

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> Receipt:
        return cls(
            date=_as_date(raw["date"]),
            sanctionOrder=str(raw["sanctionOrder"]),
            category=str(raw["category"]),
            amount=float(raw["amount"]),
            attachment=_optional_str(raw.get("attachment")),
        )


@dataclass(frozen=True)
class Expenditure:
    date: dt.date
    paymentOrder: str
    category: str
    subCategory: str
    department: str
    expenditure: float
    attachment: Optional[str] = None

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> Expenditure:
        return cls(
            date=_as_date(raw["date"]),
            paymentOrder=str(raw["paymentOrder"]),
            category=str(raw["category"]),
            subCategory=str(raw["subCategory"]),
            department=str(raw["department"]),
            expenditure=float(raw["expenditure"]),
            attachment=_optional_str(raw.get("attachment")),
        )


def _as_date(value: Any) -> dt.date:
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    ts = pd.to_datetime(str(value), errors="raise")
    return ts.date()


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value).strip()
    return text or None
