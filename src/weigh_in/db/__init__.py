"""Database layer for weigh-in."""

from .engine import get_data_dir, get_db_path, init_db
from .repositories import UserSettingsRepository, WeightEntryRepository

__all__ = [
    "get_data_dir",
    "get_db_path",
    "init_db",
    "UserSettingsRepository",
    "WeightEntryRepository",
]
