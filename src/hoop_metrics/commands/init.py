"""Initialize database command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db, seed_catalog
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the hoop-metrics database.

    Creates the data directory, the SQLite schema and the built-in catalog
    of workouts, fitness plans and achievements. Safe to run again.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing hoop-metrics in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    counts = await seed_catalog(db_path)
    echo_success(
        f"Catalog seeded ({counts['workouts']} workouts, "
        f"{counts['fitness_plans']} plans, {counts['achievements']} achievements added)"
    )

    click.echo()
    click.echo("hoop-metrics is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create a user:")
    click.echo("     hoop-metrics users create you@example.com --first-name Jordan")
    click.echo()
    click.echo("  2. Start the API server:")
    click.echo("     hoop-metrics serve")
    click.echo()
