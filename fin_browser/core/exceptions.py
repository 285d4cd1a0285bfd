class FinBrowserError(Exception):
    """Base exception for all fin_browser errors"""
    pass

class ConfigError(FinBrowserError):
    """Invalid or inconsistent global.json or table source config"""
    pass

class DataSourceError(FinBrowserError):
    """
    A data source could not produce records for a table
    missing CSV file, unparsable columns, unknown source kind, etc
    """
    pass
