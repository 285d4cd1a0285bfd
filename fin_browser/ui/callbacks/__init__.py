from .callbacks_table import register_table_callbacks

__all__ = ["register_table_callbacks"]
