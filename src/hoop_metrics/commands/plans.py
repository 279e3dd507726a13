"""Fitness plan commands."""

import click

from ..db import get_db_path
from ..errors import NotFoundError
from ..services import PlanService
from .base import async_command, echo_error, echo_info, ensure_initialized, format_table, truncate


@click.group()
@click.pass_context
def plans(ctx):
    """Browse fitness plans and enrollment progress."""
    ensure_initialized(ctx)


@plans.command(name="list")
@async_command
async def list_plans():
    """List the fitness plan catalog."""
    service = PlanService(get_db_path())
    all_plans = await service.list_plans(limit=100)

    if not all_plans:
        echo_info("No plans found. Run 'hoop-metrics init' to seed the catalog")
        return

    headers = ["ID", "Name", "Type", "Difficulty", "Weeks", "Per week"]
    rows = [
        [
            plan.id,
            truncate(plan.name),
            plan.plan_type.value,
            plan.difficulty.value,
            str(plan.duration or ""),
            str(plan.workouts_per_week or ""),
        ]
        for plan in all_plans
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_plans)} plan(s)")


@plans.command()
@click.argument("user_id")
@click.argument("plan_id")
@click.pass_context
@async_command
async def progress(ctx, user_id: str, plan_id: str):
    """Show a user's progress through a plan."""
    service = PlanService(get_db_path())
    try:
        view = await service.get_progress(user_id, plan_id)
    except NotFoundError as e:
        echo_error(e.message)
        ctx.exit(1)

    stats = view["progress_stats"]
    click.echo()
    click.echo("=" * 60)
    click.echo(f"Plan: {view['plan']['name']}")
    click.echo("=" * 60)
    click.echo(f"Status:    {stats['status']}")
    click.echo(f"Week:      {stats['current_week']}")
    click.echo(
        f"Completed: {stats['completed_workouts']}/{stats['total_workouts']} "
        f"({stats['completion_percentage']}%)"
    )
    click.echo()

    done = len(view["completed_sessions"])
    headers = ["Week", "Day", "Workout", "Done"]
    rows = [
        [str(pw["week"]), str(pw["day"]), truncate(pw["workout"]["name"]), "x" if i < done else ""]
        for i, pw in enumerate(view["plan_structure"])
    ]
    click.echo(format_table(headers, rows))
