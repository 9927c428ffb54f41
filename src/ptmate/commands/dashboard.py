"""Dashboard command."""

from datetime import datetime

import click

from ..config import get_settings
from ..db import ClientRepository, SessionRepository
from ..services.dashboard import build_dashboard
from .base import async_command, echo_info, ensure_initialized


@click.command()
@click.option("--limit", default=5, type=click.IntRange(min=0), help="Upcoming sessions to show (default: 5)")
@click.pass_context
@async_command
async def dashboard(ctx, limit: int):
    """Show today's sessions, upcoming sessions and this week's counts."""
    ensure_initialized(ctx)

    sessions = await SessionRepository().find()
    names = {c.id: c.full_name for c in await ClientRepository().list_all()}
    board = build_dashboard(
        sessions,
        datetime.now(),
        week_start=get_settings().week_start,
        upcoming_limit=limit,
    )

    click.echo()
    click.echo(click.style("Today", bold=True))
    if board.today:
        for s in board.today:
            click.echo(
                f"  {s.scheduled_at.strftime('%H:%M')}  "
                f"{names.get(s.client_id, s.client_id)}  ({s.get_status_display()})"
            )
    else:
        echo_info("No sessions today.")

    click.echo()
    click.echo(click.style("Upcoming", bold=True))
    if board.upcoming:
        for s in board.upcoming:
            click.echo(
                f"  {s.scheduled_at.strftime('%a %Y-%m-%d %H:%M')}  "
                f"{names.get(s.client_id, s.client_id)}"
            )
    else:
        echo_info("Nothing scheduled.")

    week = board.weekly_stats
    click.echo()
    click.echo(click.style(f"Week of {week.week_start.strftime('%Y-%m-%d')}", bold=True))
    click.echo(
        f"  Completed: {week.completed}  No-show: {week.no_show}  "
        f"Cancelled: {week.cancelled}  Scheduled: {week.scheduled}"
    )
    click.echo()
    click.echo(f"{len(names)} client(s), {len(sessions)} session(s) in total")
