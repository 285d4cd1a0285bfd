"""
Locale-aware currency and date formatting using Babel.

"""
from __future__ import annotations

import copy
import datetime as dt
from dataclasses import dataclass
from typing import Any, Optional

import pandas as pd
from babel import Locale, UnknownLocaleError, dates, numbers


DEFAULT_LOCALE = "en_IN"
DATE_PATTERN = "dd MMM yyyy"

CURRENCY_MAP: dict[str, str] = {
    "IN": "INR",
    "US": "USD",
    "GB": "GBP",
    "DE": "EUR",
    "FR": "EUR",
    "IT": "EUR",
    "ES": "EUR",
    "NL": "EUR",
    "JP": "JPY",
    "CA": "CAD",
    "AU": "AUD",
    "BR": "BRL",
    "CN": "CNY",
    "HU": "HUF",
    "ZA": "ZAR",
}


def parse_locale(locale: str) -> Locale:
    """
    Parse a locale identifier such as 'en_IN' or 'en-IN'.

    Raises:
        ValueError: if Babel does not know the locale.
    """
    try:
        return Locale.parse(locale.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise ValueError(f"Unknown locale {locale!r}") from e


def get_currency_from_locale(locale: str) -> str:
    """
    Retrieve the default currency code based on the locale's territory.

    Args:
        locale (str): Locale string, e.g. 'en_IN'.

    Returns:
        str: Currency code such as 'INR'. Defaults to 'INR' if the territory is unknown.
    """
    parts = locale.replace("-", "_").split("_")
    if len(parts) < 2:
        return "INR"
    return CURRENCY_MAP.get(parts[-1].upper(), "INR")


def format_currency(value: Any, locale: str = DEFAULT_LOCALE, currency: Optional[str] = None) -> str:
    """
    Format a number as currency: the locale's digit grouping, two decimals and
    the locale's negative-sign convention.

    Args:
        value: The amount. None or a non-number renders as an empty string.
        locale (str): Locale string, e.g. 'en_IN'.
        currency (str, optional): ISO code; inferred from the locale when omitted.

    Returns:
        str: The formatted amount, e.g. '₹1,00,000.00' for en_IN.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return ""
    locale_obj = parse_locale(locale)
    code = currency or get_currency_from_locale(locale)

    # The locale's own pattern, pinned to exactly two fraction digits
    pattern = copy.copy(locale_obj.currency_formats["standard"])
    pattern.frac_prec = (2, 2)
    return pattern.apply(value, locale_obj, currency=code, currency_digits=False)


def format_date(value: Any, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format a date as day, abbreviated month and year, e.g. '05 Mar 2024'.

    Args:
        value: date, datetime or pandas Timestamp. None renders as an empty string.
        locale (str): Locale string, e.g. 'en_IN'.
    """
    if value is None:
        return ""
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, dt.datetime):
        value = value.date()
    return dates.format_date(value, format=DATE_PATTERN, locale=parse_locale(locale))


@dataclass(frozen=True)
class LocaleFormatter:
    """Column formatters bound to one locale/currency pair."""
    locale: str = DEFAULT_LOCALE
    currency: Optional[str] = None

    def money(self, value: Any, _row: Any = None) -> str:
        return format_currency(value, self.locale, self.currency)

    def date(self, value: Any, _row: Any = None) -> str:
        return format_date(value, self.locale)

    @property
    def currency_symbol(self) -> str:
        code = self.currency or get_currency_from_locale(self.locale)
        return numbers.get_currency_symbol(code, locale=parse_locale(self.locale))
