"""Table sorting."""

import locale
from dataclasses import dataclass, replace
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Sequence

from ..models.weight_entry import DATE_KEY
from ..utils.dates import date_timestamp
from ..utils.numbers import is_number


class SortDirection(str, Enum):
    """Sort order."""

    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction; an empty field means unsorted."""

    field: str = DATE_KEY
    direction: SortDirection = SortDirection.DESC

    def click(self, field: str) -> "SortState":
        """Header click: same column flips direction, a new column sorts ascending."""
        if field == self.field:
            return replace(self, direction=self.direction.toggled())
        return SortState(field=field, direction=SortDirection.ASC)


def _value(record, field: str):
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def compare_strings(a: str, b: str) -> int:
    """Collate two strings, ignoring case first.

    Strings equal apart from case put the lowercase form first, as
    ``"apple" < "Apple" < "banana"``. ``locale.strcoll`` applies on top of
    that when the process has set LC_COLLATE.
    """
    primary = locale.strcoll(a.casefold(), b.casefold())
    if primary:
        return primary
    return locale.strcoll(a.swapcase(), b.swapcase())


def compare_values(a, b) -> float:
    """Compare two cell values; mixed or unknown types compare equal."""
    if is_number(a) and is_number(b):
        return a - b
    if isinstance(a, str) and isinstance(b, str):
        return compare_strings(a, b)
    return 0


def sort_records(
    records: Sequence | None,
    field: str,
    direction: SortDirection = SortDirection.ASC,
    parse_date: Callable[[str], float] = date_timestamp,
) -> list:
    """Return a sorted copy of ``records``.

    The sort is stable, so rows with equal keys keep their input order.

    Args:
        records: Dict records (or objects) to sort; never mutated
        field: Column to sort by; empty string keeps the input order
        direction: Ascending or descending
        parse_date: Converts the ``Date`` column to a comparable number,
            since ``MM-DD-YY`` strings do not sort lexically across years
    """
    records = list(records or [])
    if not field:
        return records

    sign = 1 if SortDirection(direction) is SortDirection.ASC else -1

    def compare(a, b) -> float:
        if field == DATE_KEY:
            return sign * (parse_date(_value(a, field)) - parse_date(_value(b, field)))
        return sign * compare_values(_value(a, field), _value(b, field))

    return sorted(records, key=cmp_to_key(compare))


def apply_sort(records: Sequence | None, state: SortState, **kwargs) -> list:
    """Sort records according to a ``SortState``."""
    return sort_records(records, state.field, state.direction, **kwargs)
