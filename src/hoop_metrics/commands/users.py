"""User management commands."""

import click

from ..db import UserProfileRepository, UserRepository, get_db_path
from ..models.user import User
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, format_table


@click.group()
@click.pass_context
def users(ctx):
    """Manage users.

    The API identifies callers by the user ID sent in the X-User-Id header.
    """
    ensure_initialized(ctx)


@users.command()
@click.argument("email")
@click.option("--first-name", default=None, help="First name")
@click.option("--last-name", default=None, help="Last name")
@click.pass_context
@async_command
async def create(ctx, email: str, first_name: str | None, last_name: str | None):
    """Create a user and their training profile."""
    repo = UserRepository(get_db_path())

    if await repo.get_by_email(email):
        echo_error(f"A user with email {email} already exists")
        ctx.exit(1)

    user = await repo.upsert(User(id=None, email=email, first_name=first_name, last_name=last_name))
    echo_success(f"Created user {user.display_name}")
    click.echo(f"  ID: {user.id}")


@users.command(name="list")
@async_command
async def list_users():
    """List all users with their points."""
    db_path = get_db_path()
    all_users = await UserRepository(db_path).list_all()

    if not all_users:
        echo_info("No users found. Create one with 'hoop-metrics users create'")
        return

    profiles = UserProfileRepository(db_path)
    headers = ["ID", "Name", "Email", "Workouts", "Points"]
    rows = []
    for user in all_users:
        profile = await profiles.get_by_user(user.id)
        rows.append([
            user.id,
            user.display_name,
            user.email or "",
            str(profile.total_workouts if profile else 0),
            str(profile.total_points if profile else 0),
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_users)} user(s)")
