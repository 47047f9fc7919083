"""Business logic services for weigh-in."""

from .entries import EntryService, EntryValidationError
from .importer import ImportFormatError
from .settings import SettingsError, SettingsService, merge_settings

__all__ = [
    "EntryService",
    "EntryValidationError",
    "ImportFormatError",
    "merge_settings",
    "SettingsError",
    "SettingsService",
]
