"""Client-side table engine: pagination, sorting, selection, record operations."""

from .operations import RecordOperations
from .pagination import PageView, TablePagination, paginate
from .preferences import JsonFilePreferenceStore, MemoryPreferenceStore
from .selection import SelectionState, SelectionView, selection_view
from .sort import SortDirection, SortState, sort_records

__all__ = [
    "JsonFilePreferenceStore",
    "MemoryPreferenceStore",
    "PageView",
    "paginate",
    "RecordOperations",
    "selection_view",
    "SelectionState",
    "SelectionView",
    "sort_records",
    "SortDirection",
    "SortState",
    "TablePagination",
]
