"""Weight entry data model."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime

from ..utils.dates import format_date_mmddyy

# Persisted entries carry the store's native 24-hex-char object id
OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_object_id(value: object) -> bool:
    """Check whether a value looks like a persisted entry identifier."""
    return isinstance(value, str) and bool(OBJECT_ID_PATTERN.match(value))


# Display (wire) key -> attribute name, in table column order
METRIC_FIELDS: dict[str, str] = {
    "Weight": "weight",
    "BMI": "bmi",
    "Body Fat %": "body_fat_percentage",
    "V-Fat": "visceral_fat",
    "S-Fat": "subcutaneous_fat",
    "Age": "metabolic_age",
    "HR": "heart_rate",
    "Water %": "water_percentage",
    "Bone Mass %": "bone_mass_percentage",
    "Protein %": "protein_percentage",
    "Fat Free Weight": "fat_free_weight",
    "Bone Mass LB": "bone_mass_lb",
    "BMR": "bmr",
    "Muscle Mass": "muscle_mass",
}

DATE_KEY = "Date"

# Every column a table or chart can show
AVAILABLE_METRICS: list[str] = [DATE_KEY, *METRIC_FIELDS]


@dataclass
class WeightEntry:
    """A single measurement session from a smart scale or manual entry.

    Metrics default to 0 the way the scale export leaves blanks.
    """

    date: date
    weight: float = 0
    bmi: float = 0
    body_fat_percentage: float = 0
    visceral_fat: float = 0
    subcutaneous_fat: float = 0
    metabolic_age: float = 0
    heart_rate: float = 0
    water_percentage: float = 0
    bone_mass_percentage: float = 0
    protein_percentage: float = 0
    fat_free_weight: float = 0
    bone_mass_lb: float = 0
    bmr: float = 0
    muscle_mass: float = 0
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def metrics(self) -> dict[str, float]:
        """Metric values keyed by display name."""
        return {key: getattr(self, attr) for key, attr in METRIC_FIELDS.items()}

    def completeness(self) -> int:
        """Number of metrics carrying a non-zero value."""
        return sum(1 for value in self.metrics.values() if value)

    def to_record(self) -> dict:
        """Convert to the display record served by the API."""
        record: dict = {"id": self.id, DATE_KEY: format_date_mmddyy(self.date)}
        record.update(self.metrics)
        return record

    def apply(self, values: dict) -> None:
        """Overwrite fields from a display-keyed mapping.

        Unknown keys are skipped; ``Date`` must already be a ``date``.
        """
        for key, value in values.items():
            if key == DATE_KEY:
                self.date = value
            elif key in METRIC_FIELDS:
                setattr(self, METRIC_FIELDS[key], value)

    @classmethod
    def from_metrics(
        cls,
        entry_date: date,
        metrics: dict,
        id: str | None = None,
    ) -> "WeightEntry":
        """Create from a display-keyed metrics mapping."""
        entry = cls(date=entry_date, id=id)
        entry.apply({k: v for k, v in metrics.items() if k != DATE_KEY and v is not None})
        return entry


@dataclass
class WeightStats:
    """Summary of the stored entries."""

    count: int
    latest: WeightEntry | None = None
    oldest: WeightEntry | None = None
    weight_change: float | None = field(default=None)

    def to_dict(self) -> dict:
        if self.count == 0:
            return {"count": 0, "message": "No data available"}
        return {
            "count": self.count,
            "latest": self.latest.to_record() if self.latest else None,
            "oldest": self.oldest.to_record() if self.oldest else None,
            "weightChange": self.weight_change,
        }
