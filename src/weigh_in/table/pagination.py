"""Table pagination.

``paginate`` is a pure function of (records, page size, page); the
``TablePagination`` wrapper adds the interaction state and remembers the
chosen page size through a ``PreferenceStore``.
"""

import math
from dataclasses import dataclass, field
from typing import Sequence

from .preferences import PreferenceStore

SHOW_ALL = -1
ROWS_PER_PAGE_OPTIONS = (10, 25, 50, 100, SHOW_ALL)
DEFAULT_ROWS_PER_PAGE = 10
ROWS_PER_PAGE_KEY = "table_rows_per_page"


@dataclass
class PageView:
    """The visible window of a table."""

    current_page: int
    rows_per_page: int
    effective_rows_per_page: int
    total_records: int
    total_pages: int
    index_of_first_row: int
    index_of_last_row: int
    current_rows: list = field(default_factory=list)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


def paginate(
    records: Sequence | None,
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE,
    current_page: int = 1,
) -> PageView:
    """Compute the visible slice of ``records``.

    Args:
        records: Full record sequence; None is treated as empty
        rows_per_page: One of ROWS_PER_PAGE_OPTIONS; SHOW_ALL puts every
            record on a single page
        current_page: 1-indexed page; out-of-range pages fall back to 1

    Returns:
        PageView describing the window
    """
    records = list(records or [])
    total_records = len(records)
    effective = total_records if rows_per_page == SHOW_ALL else rows_per_page
    total_pages = math.ceil(total_records / effective) if effective > 0 else 0

    if current_page > total_pages or current_page < 1:
        current_page = 1

    first = (current_page - 1) * effective
    last = min(first + effective, total_records)

    return PageView(
        current_page=current_page,
        rows_per_page=rows_per_page,
        effective_rows_per_page=effective,
        total_records=total_records,
        total_pages=total_pages,
        index_of_first_row=first,
        index_of_last_row=last,
        current_rows=records[first:last],
    )


def parse_rows_per_page(value: str | None) -> int | None:
    """Parse a stored page size, returning None unless it is a valid option."""
    if value is None:
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed in ROWS_PER_PAGE_OPTIONS else None


class TablePagination:
    """Page and page-size state for one table."""

    def __init__(self, preferences: PreferenceStore):
        self.preferences = preferences
        self.current_page = 1
        saved = parse_rows_per_page(preferences.get(ROWS_PER_PAGE_KEY))
        self.rows_per_page = saved if saved is not None else DEFAULT_ROWS_PER_PAGE

    def change_page(self, page: int) -> None:
        self.current_page = page

    def change_rows_per_page(self, rows_per_page: int) -> None:
        """Switch page size, go back to page 1 and remember the choice.

        Raises:
            ValueError: If ``rows_per_page`` is not one of the options
        """
        if rows_per_page not in ROWS_PER_PAGE_OPTIONS:
            raise ValueError(
                f"Rows per page must be one of {', '.join(map(str, ROWS_PER_PAGE_OPTIONS))}"
            )
        self.rows_per_page = rows_per_page
        self.current_page = 1
        self.preferences.set(ROWS_PER_PAGE_KEY, str(rows_per_page))

    def view(self, records: Sequence | None) -> PageView:
        """Compute the current window, syncing back a page reset."""
        page = paginate(records, self.rows_per_page, self.current_page)
        self.current_page = page.current_page
        return page
