from __future__ import annotations

import datetime as dt

import pandas as pd
import pytest

from fin_browser.formatting import (
    LocaleFormatter,
    format_currency,
    format_date,
    get_currency_from_locale,
    parse_locale,
)


def test_indian_grouping_and_two_decimals():
    assert format_currency(100000, "en_IN") == "₹1,00,000.00"
    assert format_currency(1234.5, "en_IN") == "₹1,234.50"


def test_us_locale_currency():
    assert format_currency(1234.5, "en_US") == "$1,234.50"


def test_non_numbers_render_empty():
    assert format_currency(None) == ""
    assert format_currency("12") == ""
    assert format_currency(True) == ""


def test_format_date():
    assert format_date(dt.date(2024, 3, 5), "en_IN") == "05 Mar 2024"
    assert format_date(pd.Timestamp("2024-12-31 10:00"), "en_IN") == "31 Dec 2024"
    assert format_date(None) == ""


def test_currency_from_locale():
    assert get_currency_from_locale("en_IN") == "INR"
    assert get_currency_from_locale("en-GB") == "GBP"
    assert get_currency_from_locale("en") == "INR"


def test_unknown_locale_raises():
    with pytest.raises(ValueError):
        parse_locale("xx_NOPE")


def test_locale_formatter():
    fmt = LocaleFormatter()
    assert fmt.money(250) == "₹250.00"
    assert fmt.date(dt.date(2024, 1, 2)) == "02 Jan 2024"
    assert fmt.currency_symbol == "₹"
