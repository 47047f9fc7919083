"""Database engine setup and initialization."""

import os
from pathlib import Path

import aiosqlite

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"

DATA_DIR_ENV = "WEIGH_IN_DATA_DIR"
DB_FILENAME = "weigh_in.db"


def get_data_dir(data_dir: Path | None = None) -> Path:
    """Get the data directory, honouring the WEIGH_IN_DATA_DIR override."""
    if data_dir is None:
        override = os.environ.get(DATA_DIR_ENV)
        data_dir = Path(override) if override else DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    return get_data_dir(data_dir) / DB_FILENAME


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    cursor = await db.execute("PRAGMA table_info(weight_entries)")
    columns = await cursor.fetchall()
    entry_columns = {col[1] for col in columns}

    # Protein % was added after the first scale imports
    if "protein_percentage" not in entry_columns:
        await db.execute(
            "ALTER TABLE weight_entries ADD COLUMN protein_percentage REAL DEFAULT 0"
        )

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # One row per measurement session; id is a 24-char hex object id
        await db.execute("""
            CREATE TABLE IF NOT EXISTS weight_entries (
                id TEXT PRIMARY KEY,
                date TEXT NOT NULL,
                weight REAL DEFAULT 0,
                bmi REAL DEFAULT 0,
                body_fat_percentage REAL DEFAULT 0,
                visceral_fat REAL DEFAULT 0,
                subcutaneous_fat REAL DEFAULT 0,
                metabolic_age REAL DEFAULT 0,
                heart_rate REAL DEFAULT 0,
                water_percentage REAL DEFAULT 0,
                bone_mass_percentage REAL DEFAULT 0,
                protein_percentage REAL DEFAULT 0,
                fat_free_weight REAL DEFAULT 0,
                bone_mass_lb REAL DEFAULT 0,
                bmr REAL DEFAULT 0,
                muscle_mass REAL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Settings are stored as a JSON document per user
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_settings (
                user_id TEXT PRIMARY KEY,
                document TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_weight_entries_date
            ON weight_entries(date)
        """)

        await db.commit()

        # Run migrations for existing databases
        await _run_migrations(db)
