from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from fin_browser.config.model import GlobalConfig
from fin_browser.tables.base import BaseTable
from fin_browser.tables.registry import TableRegistry


@dataclass
class AppConfig:
    config_root: Path
    global_config: GlobalConfig
    tables: Dict[str, BaseTable] = field(default_factory=dict)
    registry: Optional[TableRegistry] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
        if not self.tables:
            raise RuntimeError("AppConfig.tables must contain at least one table.")

    @property
    def rows_per_page(self) -> int:
        return self.global_config.rows_per_page

    @property
    def pagination_enabled(self) -> bool:
        return self.global_config.pagination_enabled
