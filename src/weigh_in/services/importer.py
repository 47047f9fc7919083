"""CSV import and export for weight entries.

Two import layouts are understood:

- the raw smart-scale export, with a ``Time`` column and unit-suffixed
  values (``"185.2 lb"``, ``"18.5%"``, ``"--"`` for missing readings);
- the processed layout this app exports, with a ``Date`` column and one
  numeric column per metric.
"""

import csv
import io

from ..models.weight_entry import DATE_KEY, METRIC_FIELDS, WeightEntry
from ..utils.dates import format_date_mmddyy, parse_date
from ..utils.numbers import calculate_percentage, extract_number

TEMPLATE_HEADERS = [DATE_KEY, *METRIC_FIELDS]

# Raw export header aliases seen across scale firmware versions
RAW_HEADER_ALIASES = {
    "Muscle": "Muscle Mass",
    "Skeletal Muscle": "Muscle Mass",
    "Skeletal Muscles": "Muscle Mass",
    "Bone": "Bone Mass",
    "Water": "Body Water",
}

# Raw export column -> display key
RAW_METRIC_COLUMNS = {
    "Weight": "Weight",
    "BMI": "BMI",
    "Body Fat": "Body Fat %",
    "Visceral Fat": "V-Fat",
    "Subcutaneous Fat": "S-Fat",
    "Metabolic Age": "Age",
    "Heart Rate": "HR",
    "Body Water": "Water %",
    "Protein": "Protein %",
    "Fat-Free Body Weight": "Fat Free Weight",
    "BMR": "BMR",
    "Muscle Mass": "Muscle Mass",
}

# Older exports of this app spelled the protein column this way
PROCESSED_HEADER_ALIASES = {
    "Protien %": "Protein %",
}


class ImportFormatError(Exception):
    """Raised when a CSV file matches neither known layout."""


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into header-keyed rows with stripped values."""
    if not text or not text.strip():
        return []
    reader = csv.DictReader(io.StringIO(text.strip()), skipinitialspace=True)
    if reader.fieldnames:
        reader.fieldnames = [name.strip() for name in reader.fieldnames]
    rows = []
    for row in reader:
        rows.append(
            {
                key: (value or "").strip()
                for key, value in row.items()
                if key is not None
            }
        )
    return rows


def detect_format(text: str) -> str:
    """Return ``"raw"`` or ``"processed"`` based on the header line."""
    header = text.strip().splitlines()[0] if text and text.strip() else ""
    if "Time" in header and "Body Fat" in header:
        return "raw"
    if "Date" in header and "BMI" in header:
        return "processed"
    raise ImportFormatError("Unknown CSV format.")


def convert_raw_rows(rows: list[dict[str, str]]) -> list[WeightEntry]:
    """Convert raw scale rows, keeping the first reading per day."""
    entries: dict[str, WeightEntry] = {}
    for row in rows:
        row = {RAW_HEADER_ALIASES.get(key, key): value for key, value in row.items()}
        entry_date = parse_date(row.get("Time"))
        if entry_date is None:
            continue
        weight = row.get("Weight", "")
        if not weight or weight == "--":
            continue

        key = format_date_mmddyy(entry_date)
        if key in entries:
            continue

        metrics = {
            display: extract_number(row.get(column))
            for column, display in RAW_METRIC_COLUMNS.items()
        }
        bone_mass = extract_number(row.get("Bone Mass"))
        metrics["Bone Mass LB"] = bone_mass
        metrics["Bone Mass %"] = calculate_percentage(bone_mass, metrics["Weight"])
        entries[key] = WeightEntry.from_metrics(entry_date, metrics)

    return list(entries.values())


def convert_processed_rows(rows: list[dict[str, str]]) -> list[WeightEntry]:
    """Convert rows in the processed layout, dropping incomplete ones."""
    entries = []
    for row in rows:
        row = {PROCESSED_HEADER_ALIASES.get(key, key): value for key, value in row.items()}
        entry_date = parse_date(row.get(DATE_KEY))
        if entry_date is None:
            continue
        weight = row.get("Weight", "")
        if not weight or weight == "--":
            continue

        metrics = {key: extract_number(row.get(key)) for key in METRIC_FIELDS}
        entries.append(WeightEntry.from_metrics(entry_date, metrics))
    return entries


def deduplicate_by_date(entries: list[WeightEntry]) -> list[WeightEntry]:
    """Keep one entry per day, preferring the one with more metrics filled in."""
    by_date: dict = {}
    for entry in entries:
        current = by_date.get(entry.date)
        if current is None or entry.completeness() > current.completeness():
            by_date[entry.date] = entry
    return list(by_date.values())


def read_entries(text: str) -> list[WeightEntry]:
    """Parse an uploaded CSV into de-duplicated entries (not yet saved)."""
    layout = detect_format(text)
    rows = parse_csv(text)
    if layout == "raw":
        entries = convert_raw_rows(rows)
    else:
        entries = convert_processed_rows(rows)
    return deduplicate_by_date(entries)


def entries_to_csv(entries: list[WeightEntry]) -> str:
    """Serialize entries in the processed layout."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TEMPLATE_HEADERS)
    for entry in entries:
        record = entry.to_record()
        writer.writerow([record[key] for key in TEMPLATE_HEADERS])
    return buffer.getvalue()


def template_csv() -> str:
    """Header-only CSV for manual data entry."""
    return ",".join(TEMPLATE_HEADERS) + "\n"
