"""Fitness assessment commands."""

import click
import questionary
from questionary import Style

from ..db import AssessmentRepository, ClientRepository
from ..exceptions import ConflictError
from ..models.assessment import (
    PARQ_FIELDS,
    PARQ_QUESTIONS,
    RATING_FIELDS,
    Assessment,
    AssessmentCategory,
    Rating,
)
from ..services.assessment_scoring import PostureBand, score_assessment
from .base import async_command, echo_error, echo_info, echo_success, echo_warning, ensure_initialized

custom_style = Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("answer", "fg:green bold"),
    ("pointer", "fg:cyan bold"),
    ("highlighted", "fg:cyan bold"),
])

CATEGORY_TITLES = {
    AssessmentCategory.POSTURE: "Static posture",
    AssessmentCategory.PUSH_UP: "Push-up test",
    AssessmentCategory.SQUAT: "Overhead squat",
    AssessmentCategory.BALANCE: "Single-leg balance",
    AssessmentCategory.SHOULDER: "Shoulder mobility",
}

BAND_COLORS = {
    PostureBand.POOR: "red",
    PostureBand.AVERAGE: "yellow",
    PostureBand.GOOD: "green",
}

RATING_CHOICES = [
    questionary.Choice("Good", Rating.GOOD),
    questionary.Choice("Average", Rating.AVERAGE),
    questionary.Choice("Poor", Rating.POOR),
]


def _field_label(name: str) -> str:
    """Question label from a rating field, e.g. ``squat_knees_in`` -> ``Knees in``."""
    label = name.split("_", 1)[1].replace("_", " ")
    if label == "lphc":
        return "Lumbo-pelvic-hip complex"
    return label.capitalize()


async def ask_questionnaire(client_id: int) -> Assessment | None:
    """Walk the trainer through PARQ and every rating.

    Returns None if the questionnaire was aborted (Ctrl+C).
    """
    answers: dict = {"client_id": client_id}

    click.echo(click.style("\nPARQ screening", bold=True))
    for name in PARQ_FIELDS:
        answer = await questionary.confirm(
            PARQ_QUESTIONS[name], default=False, style=custom_style
        ).ask_async()
        if answer is None:
            return None
        answers[name] = answer

    for category, names in RATING_FIELDS.items():
        click.echo(click.style(f"\n{CATEGORY_TITLES[category]}", bold=True))
        for name in names:
            rating = await questionary.select(
                _field_label(name),
                choices=RATING_CHOICES,
                default=RATING_CHOICES[1],
                style=custom_style,
            ).ask_async()
            if rating is None:
                return None
            answers[name] = rating

    answers["notes"] = await questionary.text("Notes:", style=custom_style).ask_async() or ""
    return Assessment.from_dict(answers)


def echo_score(assessment: Assessment) -> None:
    """Print the posture score and PARQ flag."""
    score = score_assessment(assessment)
    band = click.style(score.posture_band.value, fg=BAND_COLORS[score.posture_band], bold=True)
    click.echo(f"Posture score: {score.posture_score}/15 ({band})")
    if score.requires_attention:
        echo_warning(
            "PARQ: at least one 'yes' answer. "
            "Get medical clearance before physical testing."
        )
    else:
        echo_success("PARQ: no risk answers.")


@click.group()
@click.pass_context
def assess(ctx):
    """Run and review fitness assessments."""
    ensure_initialized(ctx)


@assess.command()
@click.argument("client_id", type=int)
@click.option("--replace", is_flag=True, help="Replace an existing assessment")
@click.pass_context
@async_command
async def record(ctx, client_id: int, replace: bool):
    """Record a client's assessment interactively."""
    client = await ClientRepository().get(client_id)
    if not client:
        echo_error(f"Client {client_id} not found.")
        ctx.exit(1)

    repo = AssessmentRepository()
    existing = await repo.get_by_client(client_id)
    if existing and not replace:
        echo_error(f"{client.full_name} already has an assessment. Use --replace to overwrite it.")
        ctx.exit(1)

    echo_info(f"Assessment for {client.full_name}")
    assessment = await ask_questionnaire(client_id)
    if assessment is None:
        echo_info("Assessment cancelled.")
        return

    click.echo()
    echo_score(assessment)

    if existing:
        assessment.id = existing.id
        await repo.update(assessment)
    else:
        try:
            await repo.create(assessment)
        except ConflictError as e:
            echo_error(str(e))
            ctx.exit(1)
    echo_success("Assessment saved")


@assess.command()
@click.argument("client_id", type=int)
@click.pass_context
@async_command
async def show(ctx, client_id: int):
    """Show a client's assessment and score."""
    assessment = await AssessmentRepository().get_by_client(client_id)
    if not assessment:
        echo_error(f"No assessment for client {client_id}.")
        ctx.exit(1)

    click.echo()
    echo_score(assessment)

    yes_answers = [name for name in PARQ_FIELDS if getattr(assessment, name)]
    for name in yes_answers:
        click.echo(f"  - {PARQ_QUESTIONS[name]}")

    for category in AssessmentCategory:
        click.echo()
        click.echo(click.style(CATEGORY_TITLES[category], bold=True))
        for name, rating in assessment.ratings(category).items():
            click.echo(f"  {_field_label(name)}: {rating.name.lower()}")

    if assessment.notes:
        click.echo()
        click.echo(f"Notes: {assessment.notes}")
