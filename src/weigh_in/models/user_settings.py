"""User settings data model and defaults."""

from dataclasses import dataclass, field
from datetime import datetime

from .weight_entry import DATE_KEY

DEFAULT_USER_ID = "default"
DEFAULT_DISPLAY_NAME = "Default User"

DEFAULT_TABLE_METRICS = [
    DATE_KEY,
    "Weight",
    "BMI",
    "Body Fat %",
    "V-Fat",
    "S-Fat",
    "Water %",
    "BMR",
]

DEFAULT_CHART_METRICS = [
    "Weight",
    "BMI",
    "Body Fat %",
    "V-Fat",
    "S-Fat",
    "Water %",
    "BMR",
]

DEFAULT_VISIBLE_METRICS = ["Weight"]
DEFAULT_GOAL_WEIGHT = None
DEFAULT_DARK_MODE = False


@dataclass
class UserSettings:
    """Display preferences and goal weight for one user.

    Stored as a single document; ``to_dict`` is both the storage body and
    the API representation.
    """

    user_id: str = DEFAULT_USER_ID
    display_name: str = DEFAULT_DISPLAY_NAME
    table_metrics: list[str] = field(default_factory=lambda: list(DEFAULT_TABLE_METRICS))
    chart_metrics: list[str] = field(default_factory=lambda: list(DEFAULT_CHART_METRICS))
    default_visible_metrics: list[str] = field(
        default_factory=lambda: list(DEFAULT_VISIBLE_METRICS)
    )
    goal_weight: float | None = DEFAULT_GOAL_WEIGHT
    dark_mode: bool = DEFAULT_DARK_MODE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def reset_metrics(self) -> None:
        """Restore metric lists and goal weight to the defaults.

        ``dark_mode`` is a display preference, not a metric setting, so it
        survives a reset.
        """
        self.table_metrics = list(DEFAULT_TABLE_METRICS)
        self.chart_metrics = list(DEFAULT_CHART_METRICS)
        self.default_visible_metrics = list(DEFAULT_VISIBLE_METRICS)
        self.goal_weight = DEFAULT_GOAL_WEIGHT

    def to_dict(self) -> dict:
        """Convert to the camelCase document form."""
        return {
            "userId": self.user_id,
            "displayName": self.display_name,
            "tableMetrics": list(self.table_metrics),
            "chartMetrics": list(self.chart_metrics),
            "defaultVisibleMetrics": list(self.default_visible_metrics),
            "goalWeight": self.goal_weight,
            "darkMode": self.dark_mode,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "UserSettings":
        """Create from a stored document, filling gaps with the defaults."""

        def _list(key: str, default: list[str]) -> list[str]:
            value = data.get(key)
            return list(value) if isinstance(value, list) else list(default)

        dark_mode = data.get("darkMode")
        return cls(
            user_id=data.get("userId") or DEFAULT_USER_ID,
            display_name=data.get("displayName") or DEFAULT_DISPLAY_NAME,
            table_metrics=_list("tableMetrics", DEFAULT_TABLE_METRICS),
            chart_metrics=_list("chartMetrics", DEFAULT_CHART_METRICS),
            default_visible_metrics=_list("defaultVisibleMetrics", DEFAULT_VISIBLE_METRICS),
            goal_weight=data.get("goalWeight", DEFAULT_GOAL_WEIGHT),
            dark_mode=dark_mode if isinstance(dark_mode, bool) else DEFAULT_DARK_MODE,
            created_at=created_at,
            updated_at=updated_at,
        )
