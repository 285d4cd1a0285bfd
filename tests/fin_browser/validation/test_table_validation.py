from __future__ import annotations

import pytest

from fin_browser.core.schema import Column, Filter, FilterKind
from fin_browser.data.records import Receipt
from fin_browser.validation.errors import ValidationError
from fin_browser.validation.table_validation import validate_table_schema


def _codes(exc_info) -> set:
    return {issue.code for issue in exc_info.value.issues}


def test_valid_schema_passes():
    validate_table_schema(
        [Column("amount", "Amount", sortable=True)],
        [Filter("category", FilterKind.SELECT), Filter("amountMin", FilterKind.NUMBER, predicate=lambda r, v: True)],
        record_type=Receipt,
        default_sort="amount",
    )


def test_duplicate_filter_keys():
    with pytest.raises(ValidationError) as exc:
        validate_table_schema([], [Filter("category", FilterKind.SELECT)] * 2, record_type=Receipt)
    assert _codes(exc) == {"FILTER_KEY_DUPLICATE"}


def test_unknown_dependency_and_provider_keys():
    with pytest.raises(ValidationError) as exc:
        validate_table_schema(
            [],
            [Filter("category", FilterKind.SELECT)],
            record_type=Receipt,
            dependencies={"subCategory": ["category"]},
            option_providers={"nope": lambda values: []},
        )
    assert _codes(exc) == {"DEPENDENCY_KEY", "OPTIONS_KEY"}


def test_default_sort_must_be_a_column():
    with pytest.raises(ValidationError) as exc:
        validate_table_schema([Column("amount", "Amount")], [], record_type=Receipt, default_sort="date")
    assert _codes(exc) == {"DEFAULT_SORT"}


def test_field_checks_skipped_without_type_or_sample():
    validate_table_schema([Column("anything", "Anything")], [Filter("whatever", FilterKind.TEXT)])
