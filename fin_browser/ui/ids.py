from __future__ import annotations

__all__ = ["IDs", "table_part_id", "filter_input_id", "sort_header_id"]


class IDs:
    class Control:
        NAVBAR_SUBTITLE = "navbar-subtitle"

    class Table:
        # per-table component suffixes, see table_part_id()
        STATE = "state"
        CARD = "card"
        BODY = "body"
        RESULT_COUNT = "result-count"
        PAGE_LABEL = "page-label"
        PREV_BTN = "prev-btn"
        NEXT_BTN = "next-btn"
        PAGE_SIZE_SELECT = "page-size-select"
        PAGINATION_CONTAINER = "pagination-container"
        RESET_FILTERS_BTN = "reset-filters-btn"
        DOWNLOAD = "download"
        DOWNLOAD_BTN = "download-btn"

    class Pattern:
        FILTER = "filter"
        SORT = "sort"


def table_part_id(table_id: str, part: str) -> str:
    return f"{table_id}-{part}"


def filter_input_id(table_id: str, filter_key: str) -> str:
    return f"{table_id}-{IDs.Pattern.FILTER}-{filter_key}"


def sort_header_id(table_id: str, column_key: str) -> str:
    return f"{table_id}-{IDs.Pattern.SORT}-{column_key}"
