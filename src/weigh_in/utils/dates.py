"""Date parsing and formatting helpers.

Entries travel as ``MM-DD-YY`` strings, which do not sort lexically across
years, so anything ordering by date goes through ``date_timestamp``.
"""

from datetime import date, datetime, time, timezone

# Tried in order; two-digit years come first since that is the wire format
DATE_FORMATS = [
    "%m-%d-%y",
    "%m/%d/%y",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%Y-%m-%d",
    "%Y/%m/%d",
]


def parse_date(value: str | None) -> date | None:
    """Parse a date string into a ``date``.

    Accepts the wire format (``MM-DD-YY``), US slashed dates, ISO dates and
    ISO datetimes. Anything after a comma (scale exports append the time of
    day as ``"11/20/2023, 7:05:40 AM"``) is ignored.

    Returns:
        The parsed date, or None if the value is empty or unparseable
    """
    if not value:
        return None
    part = value.split(",")[0].strip()
    if not part:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(part, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(part).date()
    except ValueError:
        return None


def format_date_mmddyy(value: date) -> str:
    """Format a date as ``MM-DD-YY``."""
    return value.strftime("%m-%d-%y")


def date_timestamp(value: str | None) -> float:
    """Convert a date string to a sortable UTC timestamp.

    Unparseable values map to 0 so they sort before every real date.
    """
    parsed = parse_date(value)
    if parsed is None:
        return 0.0
    return datetime.combine(parsed, time(), tzinfo=timezone.utc).timestamp()
