"""Client management commands."""

from datetime import datetime

import click

from ..config import get_settings
from ..db import ClientRepository, SessionRepository, TrainerRepository
from ..exceptions import ValidationError
from ..models.client import Client
from ..services.client_stats import calculate_client_stats
from ..services.photo_storage import PhotoStorage
from ..utils.dates import format_date
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, format_table


@click.group()
@click.pass_context
def clients(ctx):
    """Manage clients and their session packages."""
    ensure_initialized(ctx)


@clients.command(name="list")
@click.option("--trainer", "trainer_id", default=None, type=int, help="Only this trainer's clients")
@async_command
async def list_clients(trainer_id):
    """List clients with remaining package sessions."""
    all_clients = await ClientRepository().list_all(trainer_id=trainer_id)

    if not all_clients:
        echo_info("No clients yet. Add one with 'ptmate clients add'")
        return

    sessions_by_client = await SessionRepository().list_by_client(trainer_id=trainer_id)

    headers = ["ID", "Name", "Package", "Done", "No-show", "Remaining"]
    rows = []
    for client in all_clients:
        stats = calculate_client_stats(
            client.total_package_size, sessions_by_client.get(client.id, [])
        )
        rows.append([
            str(client.id),
            client.full_name,
            str(client.total_package_size),
            str(stats.completed),
            str(stats.no_show),
            str(stats.remaining),
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_clients)} client(s)")


@clients.command()
@click.argument("first_name")
@click.argument("last_name")
@click.option("--package", "-n", "package_size", default=0, type=int, help="Sessions purchased")
@click.option("--phone", default="", help="Phone number")
@click.option("--email", default="", help="Email address")
@click.option("--start", "start_date", default=None, help="Package start date (YYYY-MM-DD)")
@click.option("--notes", default="", help="Free-text notes")
@click.option("--trainer", "trainer_id", default=None, type=int, help="Owning trainer ID")
@click.pass_context
@async_command
async def add(ctx, first_name, last_name, package_size, phone, email, start_date, notes, trainer_id):
    """Add a new client.

    Only clients with a trainer are visible through the API.
    """
    if trainer_id is not None and await TrainerRepository().get(trainer_id) is None:
        echo_error(f"Trainer {trainer_id} not found.")
        ctx.exit(1)

    try:
        client = Client(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            email=email,
            total_package_size=package_size,
            package_start_date=(
                datetime.strptime(start_date, "%Y-%m-%d").date() if start_date else None
            ),
            notes=notes,
            trainer_id=trainer_id,
        )
    except (ValidationError, ValueError) as e:
        echo_error(str(e))
        ctx.exit(1)

    client_id = await ClientRepository().create(client)
    echo_success(f"Added client {client.full_name} (ID: {client_id})")


@clients.command()
@click.argument("client_id", type=int)
@click.pass_context
@async_command
async def show(ctx, client_id: int):
    """Show a client's package progress."""
    client = await ClientRepository().get(client_id)
    if not client:
        echo_error(f"Client {client_id} not found.")
        ctx.exit(1)

    sessions = await SessionRepository().find(client_id=client_id)
    stats = calculate_client_stats(client.total_package_size, sessions)

    click.echo()
    click.echo(click.style(client.full_name, bold=True))
    click.echo("=" * 50)
    if client.phone:
        click.echo(f"Phone: {client.phone}")
    if client.email:
        click.echo(f"Email: {client.email}")
    click.echo(f"Package start: {format_date(client.package_start_date)}")
    click.echo()
    click.echo(
        f"Package: {stats.completed}/{client.total_package_size} sessions used "
        f"({stats.progress_percentage:.0f}%)"
    )
    remaining = str(stats.remaining)
    if stats.remaining < 0:
        remaining = click.style(remaining, fg="red")
    click.echo(f"Remaining: {remaining}")
    click.echo(
        f"Scheduled: {stats.scheduled}  No-show: {stats.no_show}  "
        f"Cancelled: {stats.cancelled}"
    )

    if client.notes:
        click.echo()
        click.echo(f"Notes: {client.notes}")


@clients.command()
@click.argument("client_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, client_id: int, yes: bool):
    """Delete a client and all their records."""
    repo = ClientRepository()
    client = await repo.get(client_id)
    if not client:
        echo_error(f"Client {client_id} not found.")
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Delete {client.full_name} with all sessions, measurements and photos?"
    ):
        echo_info("Cancelled.")
        return

    await repo.delete(client_id)
    PhotoStorage(get_settings().upload_dir).delete_client(client_id)
    echo_success(f"Deleted client {client.full_name}")
