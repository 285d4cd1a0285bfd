from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Sequence

from fin_browser.core.schema import Column, Filter, record_field_names
from fin_browser.validation.errors import ValidationIssue, ValidationError



def validate_table_schema(
    columns: Sequence[Column],
    filters: Sequence[Filter],
    *,
    record_type: Optional[type] = None,
    sample: Optional[Any] = None,
    default_sort: Optional[str] = None,
    dependencies: Optional[Mapping[str, Sequence[str]]] = None,
    option_providers: Optional[Mapping[str, Any]] = None,
) -> None:
    issues: list[ValidationIssue] = []
    fields = record_field_names(record_type, sample)

    # column keys must be record fields
    if fields is not None:
        for col in columns:
            if col.key not in fields:
                issues.append(ValidationIssue("COLUMN_KEY", f"column key '{col.key}' is not a record field."))

    # filter keys unique; synthetic keys need a predicate
    seen: set[str] = set()
    for flt in filters:
        if flt.key in seen:
            issues.append(ValidationIssue("FILTER_KEY_DUPLICATE", f"filter key '{flt.key}' declared twice."))
        seen.add(flt.key)
        if fields is not None and flt.key not in fields and flt.predicate is None:
            issues.append(
                ValidationIssue(
                    "FILTER_PREDICATE",
                    f"filter '{flt.key}' is not a record field and has no predicate.",
                )
            )

    for dependent, sources in (dependencies or {}).items():
        for key in [dependent, *sources]:
            if key not in seen:
                issues.append(ValidationIssue("DEPENDENCY_KEY", f"dependency refers to unknown filter '{key}'."))

    for key in (option_providers or {}):
        if key not in seen:
            issues.append(ValidationIssue("OPTIONS_KEY", f"options provider for unknown filter '{key}'."))

    if default_sort is not None and not any(c.key == default_sort for c in columns):
        issues.append(ValidationIssue("DEFAULT_SORT", f"default sort '{default_sort}' is not a column."))

    if issues:
        raise ValidationError(issues)
