"""Weight entry service."""

import logging
from datetime import date
from pathlib import Path

from ..db.repositories import WeightEntryRepository
from ..models.weight_entry import DATE_KEY, METRIC_FIELDS, WeightEntry, WeightStats
from ..utils.dates import format_date_mmddyy, parse_date
from ..utils.numbers import is_number
from .importer import entries_to_csv, read_entries

logger = logging.getLogger(__name__)


class EntryValidationError(Exception):
    """Raised when an entry payload fails validation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def validate_entry_payload(data: dict) -> list[str]:
    """Check a display-keyed entry payload.

    Returns:
        A list of human-readable problems, empty when the payload is valid
    """
    errors = []
    raw_date = data.get(DATE_KEY)
    if raw_date is not None and (not isinstance(raw_date, str) or parse_date(raw_date) is None):
        errors.append("Invalid date format. Use MM-DD-YY or MM/DD/YYYY")

    for key in METRIC_FIELDS:
        if key in data and not is_number(data[key]):
            errors.append(f"{key} must be a valid number")

    return errors


def _payload_values(data: dict) -> dict:
    """Keep known keys and convert ``Date`` to a ``date``."""
    values = {key: data[key] for key in METRIC_FIELDS if key in data}
    if data.get(DATE_KEY) is not None:
        values[DATE_KEY] = parse_date(data[DATE_KEY])
    return values


class EntryService:
    """CRUD, import and export for weight entries."""

    def __init__(self, db_path: Path | None = None):
        self.repo = WeightEntryRepository(db_path)

    async def list_entries(self) -> list[WeightEntry]:
        return await self.repo.list_all()

    async def get_entry(self, entry_id: str) -> WeightEntry | None:
        return await self.repo.get(entry_id)

    async def list_range(self, start: str, end: str) -> list[WeightEntry]:
        """List entries between two date strings (inclusive)."""
        start_date = parse_date(start)
        end_date = parse_date(end)
        if start_date is None or end_date is None:
            raise EntryValidationError(["Start date and end date must be valid dates"])
        return await self.repo.list_range(start_date, end_date)

    async def list_ids(self) -> list[dict]:
        rows = await self.repo.list_ids()
        return [
            {"id": entry_id, DATE_KEY: format_date_mmddyy(entry_date)} for entry_id, entry_date in rows
        ]

    async def create_entry(self, data: dict) -> WeightEntry:
        """Create an entry from a display-keyed payload.

        A payload without a date is recorded for today.
        """
        errors = validate_entry_payload(data)
        if errors:
            raise EntryValidationError(errors)

        values = _payload_values(data)
        entry = WeightEntry(date=values.pop(DATE_KEY, None) or date.today())
        entry.apply(values)
        await self.repo.create(entry)
        logger.info("Created entry %s for %s", entry.id, entry.date)
        return await self.repo.get(entry.id)

    async def update_entry(self, entry_id: str, data: dict) -> WeightEntry | None:
        """Apply a full or partial payload. Returns None if the entry is missing."""
        errors = validate_entry_payload(data)
        if errors:
            raise EntryValidationError(errors)

        entry = await self.repo.get(entry_id)
        if entry is None:
            return None
        entry.apply(_payload_values(data))
        await self.repo.update(entry)
        return await self.repo.get(entry_id)

    async def delete_entry(self, entry_id: str) -> bool:
        deleted = await self.repo.delete(entry_id)
        if deleted:
            logger.info("Deleted entry %s", entry_id)
        return deleted

    async def clear_entries(self) -> int:
        count = await self.repo.clear()
        logger.info("Cleared %d entries", count)
        return count

    async def get_stats(self) -> WeightStats:
        """Count plus oldest and latest entries."""
        entries = await self.repo.list_all()
        if not entries:
            return WeightStats(count=0)
        oldest, latest = entries[0], entries[-1]
        return WeightStats(
            count=len(entries),
            latest=latest,
            oldest=oldest,
            weight_change=round(latest.weight - oldest.weight, 2),
        )

    async def import_csv(self, text: str) -> list[WeightEntry]:
        """Parse a CSV upload and upsert one entry per day.

        Raises:
            ImportFormatError: If the header matches neither known layout
        """
        saved = []
        for entry in read_entries(text):
            await self.repo.upsert_by_date(entry)
            saved.append(entry)
        logger.info("Imported %d entries", len(saved))
        return saved

    async def export_csv(self) -> str | None:
        """Export every entry as CSV, or None when there is nothing to export."""
        entries = await self.repo.list_all()
        if not entries:
            return None
        return entries_to_csv(entries)
