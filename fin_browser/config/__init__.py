"""
Config package for fin_browser.

Responsible for:
- config models (GlobalConfig, TableSourceConfig)
- config I/O helpers (load_global_config / load_table_sources)
"""

from .model import GlobalConfig, TableSourceConfig
from .loader import load_global_config, load_table_sources
