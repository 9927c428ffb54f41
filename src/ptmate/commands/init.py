"""Initialize project command."""

import click

from ..config import get_settings
from ..db import init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the ptmate data directory and database.

    Creates the data directory (PTMATE_DATA_DIR) and the
    SQLite schema. Safe to run again on an existing database.
    """
    settings = get_settings()

    echo_info(f"Initializing ptmate in {settings.data_dir}")

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)

    await init_db(settings.db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("ptmate is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Add a client:")
    click.echo('     ptmate clients add "Jane" "Doe" --package 10')
    click.echo()
    click.echo("  2. Schedule a session:")
    click.echo('     ptmate sessions add 1 "2026-01-05 09:00"')
    click.echo()
    click.echo("  3. Start the API server:")
    click.echo("     ptmate serve")
