from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from fin_browser.core.exceptions import ConfigError
from fin_browser.formatting import DEFAULT_LOCALE, parse_locale

SOURCE_KINDS = ("random", "csv")
DEFAULT_RECORD_COUNT = 15


@dataclass
class TableSourceConfig:
    """
    Parsed config entry for one table's data source.
    """
    table_id: str
    source: str = "random"
    count: int = DEFAULT_RECORD_COUNT
    path: Optional[Path] = None
    source_path: Optional[Path] = None

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], root: Path, source_path: Optional[Path] = None) -> TableSourceConfig:
        if "id" not in raw:
            raise ConfigError(f"Table config {source_path} has no 'id'")

        path_raw = raw.get("path")
        path = Path(path_raw) if path_raw else None
        if path is not None and not path.is_absolute():
            path = (root / path).resolve()

        cfg = cls(
            table_id=str(raw["id"]),
            source=str(raw.get("source", "random")).lower(),
            count=int(raw.get("count", DEFAULT_RECORD_COUNT)),
            path=path,
            source_path=source_path,
        )
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.source not in SOURCE_KINDS:
            raise ConfigError(f"Table '{self.table_id}': unknown source '{self.source}'")
        if self.source == "random" and self.count < 0:
            raise ConfigError(f"Table '{self.table_id}': count must be >= 0")
        if self.source == "csv" and self.path is None:
            raise ConfigError(f"Table '{self.table_id}': csv source needs a 'path'")


@dataclass
class GlobalConfig:
    ui_title: str = "Finance Tables"
    subtitle: str = "Receipts and expenditures"
    locale: str = DEFAULT_LOCALE
    currency: Optional[str] = None
    rows_per_page: int = 10
    rows_per_page_options: List[int] = field(default_factory=lambda: [5, 10, 25, 50])
    pagination_enabled: bool = True
    seed: Optional[int] = None
    tables: Dict[str, TableSourceConfig] = field(default_factory=dict)

    def validate(self) -> None:
        try:
            parse_locale(self.locale)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if self.rows_per_page < 1:
            raise ConfigError("rows_per_page must be >= 1")
        if not self.rows_per_page_options or any(n < 1 for n in self.rows_per_page_options):
            raise ConfigError("rows_per_page_options must be positive integers")

    def source_for(self, table_id: str) -> TableSourceConfig:
        """Configured source for a table, or the random default."""
        return self.tables.get(table_id) or TableSourceConfig(table_id=table_id)

    @property
    def page_size_options(self) -> List[int]:
        return sorted({*self.rows_per_page_options, self.rows_per_page})
