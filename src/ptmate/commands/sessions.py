"""Session scheduling commands."""

import click

from ..db import ClientRepository, SessionRepository
from ..exceptions import ValidationError
from ..models.session import Session, SessionStatus
from ..utils.dates import parse_datetime
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, format_table

STATUS_COLORS = {
    SessionStatus.SCHEDULED: "blue",
    SessionStatus.COMPLETED: "green",
    SessionStatus.NO_SHOW: "red",
    SessionStatus.CANCELLED: "yellow",
}


@click.group()
@click.pass_context
def sessions(ctx):
    """Schedule sessions and record their outcome."""
    ensure_initialized(ctx)


@sessions.command(name="list")
@click.option("--client", "client_id", type=int, default=None, help="Only this client's sessions")
@click.option(
    "--status",
    type=click.Choice([s.value for s in SessionStatus]),
    default=None,
    help="Only sessions with this status",
)
@async_command
async def list_sessions(client_id: int | None, status: str | None):
    """List sessions, earliest first."""
    found = await SessionRepository().find(
        client_id=client_id,
        status=SessionStatus(status) if status else None,
    )

    if not found:
        echo_info("No sessions found.")
        return

    names = {c.id: c.full_name for c in await ClientRepository().list_all()}

    headers = ["ID", "Client", "When", "Minutes", "Status"]
    rows = [
        [
            str(s.id),
            names.get(s.client_id, str(s.client_id)),
            s.scheduled_at.strftime("%Y-%m-%d %H:%M"),
            str(s.duration_minutes),
            s.get_status_display(),
        ]
        for s in found
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(found)} session(s)")


@sessions.command()
@click.argument("client_id", type=int)
@click.argument("when")
@click.option("--minutes", "-m", default=60, type=int, help="Duration in minutes (default: 60)")
@click.option("--notes", default="", help="Session notes")
@click.pass_context
@async_command
async def add(ctx, client_id: int, when: str, minutes: int, notes: str):
    """Schedule a session. WHEN is an ISO date and time, e.g. "2026-01-05 09:00"."""
    client = await ClientRepository().get(client_id)
    if not client:
        echo_error(f"Client {client_id} not found.")
        ctx.exit(1)

    try:
        session = Session(
            client_id=client_id,
            scheduled_at=parse_datetime(when),
            duration_minutes=minutes,
            notes=notes,
        )
    except (ValidationError, ValueError) as e:
        echo_error(str(e))
        ctx.exit(1)

    session_id = await SessionRepository().create(session)
    echo_success(
        f"Scheduled session {session_id} for {client.full_name} "
        f"at {session.scheduled_at.strftime('%Y-%m-%d %H:%M')}"
    )


@sessions.command()
@click.argument("session_id", type=int)
@click.argument("new_status", type=click.Choice([s.value for s in SessionStatus]))
@click.pass_context
@async_command
async def status(ctx, session_id: int, new_status: str):
    """Set a session's status (scheduled, completed, no_show, cancelled)."""
    status_value = SessionStatus(new_status)
    if not await SessionRepository().update_status(session_id, status_value):
        echo_error(f"Session {session_id} not found.")
        ctx.exit(1)

    label = click.style(status_value.value, fg=STATUS_COLORS[status_value])
    echo_success(f"Session {session_id} marked {label}")
