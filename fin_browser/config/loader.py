from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

from fin_browser.config.model import GlobalConfig, TableSourceConfig
from fin_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_ROOT = Path("config")


def config_root_from_env() -> Path:
    return Path(os.getenv("FIN_BROWSER_CONFIG_ROOT", str(DEFAULT_CONFIG_ROOT)))


def _read_json(path: Path) -> dict:
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path.name}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path.name} must contain a JSON object")
    return raw


def load_table_sources(root: Path) -> Dict[str, TableSourceConfig]:
    """
    Load per-table source configs from root/tables/*.json.
    """
    tables_dir = root / "tables"
    sources: Dict[str, TableSourceConfig] = {}

    if not tables_dir.is_dir():
        logger.warning(f"Tables directory not found at: {tables_dir}")
        return sources

    logger.info(f"Scanning for table configurations in: {tables_dir}")
    for config_file in sorted(tables_dir.glob("*.json")):
        # Ignore macOS 'Apple Double' files (._*)
        if config_file.name.startswith("._"):
            continue

        logger.info(f"Loading table config: {config_file.name}")
        cfg = TableSourceConfig.from_raw(_read_json(config_file), root=root, source_path=config_file)
        if cfg.table_id in sources:
            raise ConfigError(f"Duplicate table id '{cfg.table_id}' in {config_file.name}")
        sources[cfg.table_id] = cfg

    return sources


def load_global_config(root: Path | str = DEFAULT_CONFIG_ROOT) -> GlobalConfig:
    """
    Load configuration from a directory using the multi-file layout:

        root/
          global.json
          tables/
            receipts.json
            expenditures.json

    A missing global.json falls back to defaults; invalid values raise ConfigError.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        logger.warning(f"global.json not found at {global_path}; using defaults")
        raw_global = {}
    else:
        raw_global = _read_json(global_path)

    defaults = GlobalConfig()
    try:
        config = GlobalConfig(
            ui_title=raw_global.get("ui_title", defaults.ui_title),
            subtitle=raw_global.get("subtitle", defaults.subtitle),
            locale=os.getenv("FIN_BROWSER_LOCALE", raw_global.get("locale", defaults.locale)),
            currency=raw_global.get("currency", defaults.currency),
            rows_per_page=int(raw_global.get("rows_per_page", defaults.rows_per_page)),
            rows_per_page_options=[int(n) for n in raw_global.get("rows_per_page_options", defaults.rows_per_page_options)],
            pagination_enabled=bool(raw_global.get("pagination_enabled", defaults.pagination_enabled)),
            seed=raw_global.get("seed", defaults.seed),
            tables=load_table_sources(root),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {global_path.name}: {e}") from e

    config.validate()

    logger.info(
        "Global config loaded",
        extra={
            "config_root": str(root),
            "locale": config.locale,
            "table_ids": sorted(config.tables.keys()),
        },
    )
    return config
