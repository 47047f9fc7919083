"""Data access layer for weigh-in."""

import json
import secrets
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..models.user_settings import UserSettings
from ..models.weight_entry import METRIC_FIELDS, WeightEntry
from .engine import get_db_path

_METRIC_COLUMNS = list(METRIC_FIELDS.values())


def new_object_id() -> str:
    """Generate a 24-character hex identifier."""
    return secrets.token_hex(12)


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class WeightEntryRepository:
    """Repository for weight entries."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, entry: WeightEntry) -> str:
        """Insert a new entry and return its generated id."""
        entry_id = new_object_id()
        columns = ", ".join(["id", "date", *_METRIC_COLUMNS])
        placeholders = ", ".join("?" for _ in range(len(_METRIC_COLUMNS) + 2))
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                f"INSERT INTO weight_entries ({columns}) VALUES ({placeholders})",
                (entry_id, entry.date.isoformat(), *self._metric_values(entry)),
            )
            await db.commit()
        entry.id = entry_id
        return entry_id

    async def get(self, entry_id: str) -> WeightEntry | None:
        """Get an entry by id."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM weight_entries WHERE id = ?", (entry_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def get_by_date(self, entry_date: date) -> WeightEntry | None:
        """Get the entry recorded on a given day."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM weight_entries WHERE date = ? LIMIT 1",
                (entry_date.isoformat(),),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def list_all(self) -> list[WeightEntry]:
        """List all entries, oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM weight_entries ORDER BY date ASC, created_at ASC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def list_range(self, start: date, end: date) -> list[WeightEntry]:
        """List entries between two dates (inclusive), oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM weight_entries
                WHERE date >= ? AND date <= ?
                ORDER BY date ASC
                """,
                (start.isoformat(), end.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def list_ids(self) -> list[tuple[str, date]]:
        """List (id, date) pairs, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT id, date FROM weight_entries ORDER BY date DESC"
            )
            rows = await cursor.fetchall()
            return [(row[0], date.fromisoformat(row[1])) for row in rows]

    async def update(self, entry: WeightEntry) -> None:
        """Overwrite an existing entry."""
        if entry.id is None:
            raise ValueError("Entry must have an ID to update")

        assignments = ", ".join(f"{col} = ?" for col in ["date", *_METRIC_COLUMNS])
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                f"""
                UPDATE weight_entries SET {assignments},
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (entry.date.isoformat(), *self._metric_values(entry), entry.id),
            )
            await db.commit()

    async def upsert_by_date(self, entry: WeightEntry) -> str:
        """Overwrite the entry for ``entry.date`` or create one."""
        existing = await self.get_by_date(entry.date)
        if existing is None:
            return await self.create(entry)
        entry.id = existing.id
        await self.update(entry)
        return existing.id

    async def delete(self, entry_id: str) -> bool:
        """Delete an entry. Returns False if nothing was deleted."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM weight_entries WHERE id = ?", (entry_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    async def clear(self) -> int:
        """Delete every entry and return how many were removed."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM weight_entries")
            await db.commit()
            return cursor.rowcount

    def _metric_values(self, entry: WeightEntry) -> list[float]:
        return [getattr(entry, col) or 0 for col in _METRIC_COLUMNS]

    def _row_to_entry(self, row: aiosqlite.Row) -> WeightEntry:
        """Convert a database row to a WeightEntry."""
        return WeightEntry(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            **{col: row[col] if row[col] is not None else 0 for col in _METRIC_COLUMNS},
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class UserSettingsRepository:
    """Repository for per-user settings documents."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, user_id: str) -> UserSettings | None:
        """Get the settings document for a user."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_settings WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_settings(row)

    async def create(self, settings: UserSettings) -> UserSettings:
        """Insert a new settings document."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "INSERT INTO user_settings (user_id, document) VALUES (?, ?)",
                (settings.user_id, self._dump(settings)),
            )
            await db.commit()
        return await self.get(settings.user_id)

    async def replace(self, settings: UserSettings) -> UserSettings:
        """Replace the whole settings document in a single write."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO user_settings (user_id, document) VALUES (?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    document = excluded.document,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (settings.user_id, self._dump(settings)),
            )
            await db.commit()
        return await self.get(settings.user_id)

    def _dump(self, settings: UserSettings) -> str:
        data = settings.to_dict()
        # Timestamps live in their own columns
        data.pop("createdAt")
        data.pop("updatedAt")
        return json.dumps(data)

    def _row_to_settings(self, row: aiosqlite.Row) -> UserSettings:
        """Convert a database row to UserSettings."""
        data = json.loads(row["document"])
        data["userId"] = row["user_id"]
        return UserSettings.from_dict(
            data,
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )
