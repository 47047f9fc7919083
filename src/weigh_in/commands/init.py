"""Initialize command."""

import click

from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Create the local database.

    The database lives in the data directory (override with
    WEIGH_IN_DATA_DIR). Running init again is safe.
    """
    db_path = get_db_path()
    echo_info(f"Initializing database at {db_path}")
    await init_db(db_path)
    echo_success("Database ready. Start the API with 'weigh-in serve'.")
