"""Trainer account commands."""

import click

from ..auth import MIN_PASSWORD_LENGTH, hash_password
from ..db import ClientRepository, TrainerRepository
from ..exceptions import ConflictError, ValidationError
from ..models.trainer import Trainer
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, format_table


@click.group()
@click.pass_context
def trainers(ctx):
    """Manage trainer accounts for the web API."""
    ensure_initialized(ctx)


@trainers.command()
@click.argument("email")
@click.argument("first_name")
@click.argument("last_name")
@click.password_option(help="Login password")
@click.pass_context
@async_command
async def add(ctx, email, first_name, last_name, password):
    """Create a trainer account."""
    if len(password) < MIN_PASSWORD_LENGTH:
        echo_error(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        ctx.exit(1)

    try:
        trainer = Trainer(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password),
        )
        trainer_id = await TrainerRepository().create(trainer)
    except (ValidationError, ConflictError) as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Added trainer {trainer.full_name} (ID: {trainer_id})")


@trainers.command(name="list")
@async_command
async def list_trainers():
    """List trainer accounts with their client counts."""
    all_trainers = await TrainerRepository().list_all()

    if not all_trainers:
        echo_info("No trainers yet. Add one with 'ptmate trainers add'")
        return

    clients = ClientRepository()
    rows = []
    for trainer in all_trainers:
        rows.append([
            str(trainer.id),
            trainer.full_name,
            trainer.email,
            str(await clients.count(trainer_id=trainer.id)),
        ])

    click.echo()
    click.echo(format_table(["ID", "Name", "Email", "Clients"], rows))
