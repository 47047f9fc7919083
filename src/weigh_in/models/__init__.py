"""Data models for weigh-in."""

from .user_settings import DEFAULT_USER_ID, UserSettings
from .weight_entry import (
    AVAILABLE_METRICS,
    DATE_KEY,
    METRIC_FIELDS,
    WeightEntry,
    WeightStats,
    is_valid_object_id,
)

__all__ = [
    "AVAILABLE_METRICS",
    "DATE_KEY",
    "DEFAULT_USER_ID",
    "is_valid_object_id",
    "METRIC_FIELDS",
    "UserSettings",
    "WeightEntry",
    "WeightStats",
]
