from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

import numpy as np
import pandas as pd

from fin_browser.config.model import TableSourceConfig
from fin_browser.core.exceptions import DataSourceError
from fin_browser.core.schema import Column

logger = logging.getLogger(__name__)

Generator = Callable[[int, np.random.Generator], List[Any]]


def records_from_frame(df: pd.DataFrame, record_type: type) -> List[Any]:
    """
    Build records from a DataFrame, one per row, via record_type.from_mapping.
    Missing values arrive as None.
    """
    frame = df.astype(object).where(pd.notna(df), None)
    records = []
    for idx, raw in enumerate(frame.to_dict("records")):
        try:
            records.append(record_type.from_mapping(raw))
        except (KeyError, TypeError, ValueError) as e:
            raise DataSourceError(f"Row {idx} cannot be read as {record_type.__name__}: {e}") from e
    return records


def load_records_csv(path: Path, record_type: type) -> List[Any]:
    path = Path(path)
    if not path.is_file():
        raise DataSourceError(f"File not found at {path}")

    logger.info("Loading records from CSV", extra={"path": str(path), "record_type": record_type.__name__})
    try:
        df = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataSourceError(f"Failed to read {path.name}: {e}") from e

    expected = {f.name for f in dataclasses.fields(record_type) if f.default is dataclasses.MISSING}
    missing = expected - set(df.columns)
    if missing:
        raise DataSourceError(f"{path.name} is missing columns: {sorted(missing)}")

    return records_from_frame(df, record_type)


def _as_dict(row: Any) -> dict:
    if isinstance(row, Mapping):
        return dict(row)
    if dataclasses.is_dataclass(row):
        return dataclasses.asdict(row)
    return dict(vars(row))


def records_to_frame(records: Sequence[Any], columns: Optional[Sequence[Column]] = None) -> pd.DataFrame:
    """
    Records -> DataFrame of raw (unformatted) values. With columns, keeps only
    those fields, in column order, headed by the column labels.
    """
    df = pd.DataFrame([_as_dict(r) for r in records])
    if columns is None:
        return df
    keys = [c.key for c in columns]
    df = df.reindex(columns=keys)
    return df.rename(columns={c.key: c.label for c in columns})


def load_table_records(
    source: TableSourceConfig,
    record_type: type,
    generator: Generator,
    rng: Optional[np.random.Generator] = None,
) -> List[Any]:
    """Materialise the records for one table from its configured source."""
    if source.source == "random":
        rng = rng if rng is not None else np.random.default_rng()
        records = generator(source.count, rng)
    elif source.source == "csv":
        if source.path is None:
            raise DataSourceError("CSV source configured without a path")
        records = load_records_csv(source.path, record_type)
    else:
        raise DataSourceError(f"Unknown data source '{source.source}'")

    logger.info(
        "Table records loaded",
        extra={"source": source.source, "record_type": record_type.__name__, "n_records": len(records)},
    )
    return records
