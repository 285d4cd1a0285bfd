from __future__ import annotations

import datetime as dt
import logging
import math
import numbers
from typing import Any, Optional

import numpy as np
import pandas as pd

from fin_browser.core.schema import Predicate, get_field

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Soft parsing of raw filter input
# -----------------------------------------------------------------------------
def parse_number(raw: str) -> Optional[float]:
    """Parse numeric filter input; None when it is not a finite number."""
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric filter input %r", raw)
        return None
    if math.isnan(value) or math.isinf(value):
        logger.debug("Ignoring non-finite filter input %r", raw)
        return None
    return value


def parse_date(raw: str) -> Optional[pd.Timestamp]:
    """Parse date filter input; None when it is not a valid date."""
    text = str(raw).strip()
    if not text:
        return None
    ts = pd.to_datetime(text, errors="coerce")
    if pd.isna(ts):
        logger.debug("Ignoring unparsable date filter input %r", raw)
        return None
    return ts


def is_temporal(value: Any) -> bool:
    if isinstance(value, np.datetime64):
        return not np.isnat(value)
    return isinstance(value, (dt.date, pd.Timestamp))


def is_numeric(value: Any) -> bool:
    """Real numbers, numpy scalars included; booleans are not numbers here."""
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def to_instant(value: Any) -> Optional[pd.Timestamp]:
    """Record field -> comparable timestamp (date, datetime and numpy datetime64 accepted)."""
    if value is None:
        return None
    if is_temporal(value):
        return pd.Timestamp(value)
    return parse_date(value)


# -----------------------------------------------------------------------------
# Range predicates for synthetic Min/Max/From/To filters
# -----------------------------------------------------------------------------
def at_least(field: str) -> Predicate:
    def predicate(row: Any, raw: str) -> bool:
        bound = parse_number(raw)
        if bound is None:
            return True
        value = get_field(row, field)
        return is_numeric(value) and value >= bound

    return predicate


def at_most(field: str) -> Predicate:
    def predicate(row: Any, raw: str) -> bool:
        bound = parse_number(raw)
        if bound is None:
            return True
        value = get_field(row, field)
        return is_numeric(value) and value <= bound

    return predicate


def on_or_after(field: str) -> Predicate:
    def predicate(row: Any, raw: str) -> bool:
        bound = parse_date(raw)
        if bound is None:
            return True
        value = to_instant(get_field(row, field))
        return value is not None and value >= bound

    return predicate


def on_or_before(field: str) -> Predicate:
    def predicate(row: Any, raw: str) -> bool:
        bound = parse_date(raw)
        if bound is None:
            return True
        value = to_instant(get_field(row, field))
        return value is not None and value <= bound

    return predicate
