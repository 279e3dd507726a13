"""CLI entry point for hoop-metrics."""

import click

from . import __version__
from .config import get_settings
from .commands import init, plans, serve, users
from .log import setup_logger


@click.group()
@click.version_option(version=__version__, prog_name="hoop-metrics")
def main():
    """hoop-metrics: basketball training tracker backend.

    Example usage:

        # Create the database and seed the catalog
        hoop-metrics init

        # Add a user and start the API
        hoop-metrics users create you@example.com
        hoop-metrics serve

        # Check plan progress
        hoop-metrics plans list
        hoop-metrics plans progress USER_ID PLAN_ID
    """
    settings = get_settings()
    setup_logger(settings)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(users)
main.add_command(plans)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
