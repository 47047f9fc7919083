"""Settings store and reconciliation.

Clients send partial settings payloads. A key that is absent leaves the
stored value alone; a key that is present (even as ``null``) is applied.
Payload values of the wrong shape are ignored rather than rejected.
"""

import logging
from pathlib import Path

import aiosqlite

from ..db.repositories import UserSettingsRepository
from ..models.user_settings import DEFAULT_USER_ID, UserSettings
from ..models.weight_entry import DATE_KEY
from ..utils.numbers import is_number

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    """Raised when the settings store cannot be read or written."""


def ensure_date_first(metrics: list[str]) -> list[str]:
    """Return ``metrics`` with ``Date`` as the first and only Date column."""
    return [DATE_KEY, *(m for m in metrics if m != DATE_KEY)]


def is_valid_goal_weight(value: object) -> bool:
    """A goal weight is either cleared (None) or a positive number."""
    return value is None or (is_number(value) and value > 0)


def merge_settings(settings: UserSettings, updates: dict) -> UserSettings:
    """Apply a partial payload to a settings document in place.

    Args:
        settings: The current, fully populated document
        updates: camelCase payload; any subset of ``tableMetrics``,
            ``chartMetrics``, ``defaultVisibleMetrics``, ``goalWeight``
            and ``darkMode``

    Returns:
        The same ``settings`` object, for chaining
    """
    table_metrics = updates.get("tableMetrics")
    if isinstance(table_metrics, list):
        settings.table_metrics = ensure_date_first(table_metrics)

    chart_metrics = updates.get("chartMetrics")
    if isinstance(chart_metrics, list):
        settings.chart_metrics = list(chart_metrics)

    visible_metrics = updates.get("defaultVisibleMetrics")
    if isinstance(visible_metrics, list):
        settings.default_visible_metrics = list(visible_metrics)

    if "goalWeight" in updates:
        goal_weight = updates["goalWeight"]
        if is_valid_goal_weight(goal_weight):
            settings.goal_weight = goal_weight
        else:
            logger.debug("Ignoring invalid goalWeight %r", goal_weight)

    if isinstance(updates.get("darkMode"), bool):
        settings.dark_mode = updates["darkMode"]

    return settings


class SettingsService:
    """Reads, updates and resets user settings documents."""

    def __init__(self, db_path: Path | None = None):
        self.repo = UserSettingsRepository(db_path)

    async def get_user_settings(self, user_id: str = DEFAULT_USER_ID) -> UserSettings:
        """Get a user's settings, creating the default document on first read."""
        try:
            settings = await self.repo.get(user_id)
            if settings is None:
                logger.info("Creating default settings for user %s", user_id)
                settings = await self.repo.create(UserSettings(user_id=user_id))
            return settings
        except aiosqlite.Error as e:
            raise SettingsError(f"Failed to load settings: {e}") from e

    async def update_user_settings(
        self, user_id: str = DEFAULT_USER_ID, updates: dict | None = None
    ) -> UserSettings:
        """Merge a partial payload into the stored document and persist it."""
        settings = await self.get_user_settings(user_id)
        merge_settings(settings, updates or {})
        try:
            return await self.repo.replace(settings)
        except aiosqlite.Error as e:
            raise SettingsError(f"Failed to save settings: {e}") from e

    async def reset_user_settings(self, user_id: str = DEFAULT_USER_ID) -> UserSettings:
        """Restore metric settings and goal weight; dark mode is kept."""
        settings = await self.get_user_settings(user_id)
        settings.reset_metrics()
        try:
            return await self.repo.replace(settings)
        except aiosqlite.Error as e:
            raise SettingsError(f"Failed to reset settings: {e}") from e
