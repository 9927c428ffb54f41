"""Body measurement commands."""

from datetime import datetime

import click

from ..db import ClientRepository, MeasurementRepository
from ..exceptions import ValidationError
from ..models.measurement import MEASUREMENT_FIELDS, Measurement
from ..utils.dates import parse_datetime
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, format_table


def _label(name: str) -> str:
    """Column label for a measurement field, e.g. ``right_arm_cm`` -> ``Right arm``."""
    return name.rsplit("_", 1)[0].replace("_", " ").capitalize()


@click.group()
@click.pass_context
def measure(ctx):
    """Record and review body measurements."""
    ensure_initialized(ctx)


def _measurement_options(f):
    """Add one ``--<part>`` option per measurement field (``--weight``, ``--right-arm``, ...)."""
    for name in reversed(MEASUREMENT_FIELDS):
        part, unit = name.rsplit("_", 1)
        f = click.option(
            "--" + part.replace("_", "-"),
            name,
            type=float,
            default=None,
            help=f"{_label(name)} ({unit})",
        )(f)
    return f


@measure.command()
@click.argument("client_id", type=int)
@_measurement_options
@click.option("--at", "measured_at", default=None, help="When measured (default: now)")
@click.option("--notes", default="", help="Notes")
@click.pass_context
@async_command
async def add(ctx, client_id: int, measured_at: str | None, notes: str, **values):
    """Record a measurement snapshot. Every value is optional."""
    if not await ClientRepository().get(client_id):
        echo_error(f"Client {client_id} not found.")
        ctx.exit(1)

    if all(v is None for v in values.values()):
        echo_error("Provide at least one measurement, e.g. --weight 72.5")
        ctx.exit(1)

    try:
        measurement = Measurement(
            client_id=client_id,
            measured_at=parse_datetime(measured_at) if measured_at else datetime.now(),
            notes=notes,
            **values,
        )
    except (ValidationError, ValueError) as e:
        echo_error(str(e))
        ctx.exit(1)

    measurement_id = await MeasurementRepository().create(measurement)
    echo_success(f"Recorded measurement {measurement_id} ({len(measurement.values())} values)")


@measure.command(name="list")
@click.argument("client_id", type=int)
@async_command
async def list_measurements(client_id: int):
    """Show a client's measurements, newest first, with change since the oldest."""
    measurements = await MeasurementRepository().list_for_client(client_id)
    if not measurements:
        echo_info("No measurements recorded.")
        return

    recorded = [
        name for name in MEASUREMENT_FIELDS
        if any(getattr(m, name) is not None for m in measurements)
    ]
    headers = ["ID", "Date", *(_label(name) for name in recorded)]
    rows = [
        [
            str(m.id),
            m.measured_at.strftime("%Y-%m-%d"),
            *("" if getattr(m, name) is None else f"{getattr(m, name):g}" for name in recorded),
        ]
        for m in measurements
    ]

    click.echo()
    click.echo(format_table(headers, rows))

    if len(measurements) > 1:
        changes = measurements[0].changes_since(measurements[-1])
        if changes:
            click.echo()
            click.echo(click.style("Change since first measurement:", bold=True))
            for name, delta in changes.items():
                click.echo(f"  {_label(name)}: {delta:+g}")
