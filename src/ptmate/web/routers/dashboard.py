"""Dashboard routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request

from ...models.trainer import Trainer
from ...services.dashboard import build_dashboard
from ...utils.dates import to_local_naive
from ..dependencies import (
    clients_by_id,
    current_trainer,
    get_settings,
    session_payload,
    session_repo,
)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

UPCOMING_LIMIT = 5


@router.get("")
async def get_dashboard(
    request: Request,
    now: datetime | None = None,
    trainer: Trainer = Depends(current_trainer),
):
    """Today's sessions, upcoming sessions, this week's counts and totals.

    ``now`` may be passed to view the dashboard as of another moment.
    """
    reference = to_local_naive(now) if now else datetime.now()
    sessions = await session_repo(request).find(trainer_id=trainer.id)
    clients = await clients_by_id(request, trainer)

    dashboard = build_dashboard(
        sessions,
        reference,
        week_start=get_settings(request).week_start,
        upcoming_limit=UPCOMING_LIMIT,
    )

    return {
        "today_sessions": [session_payload(s, clients) for s in dashboard.today],
        "upcoming_sessions": [session_payload(s, clients) for s in dashboard.upcoming],
        "weekly_stats": dashboard.weekly_stats.to_dict(),
        "total_clients": len(clients),
        "total_sessions": len(sessions),
    }


@router.get("/calendar")
async def get_calendar(
    request: Request,
    start: datetime | None = Query(None, alias="from"),
    end: datetime | None = Query(None, alias="to"),
    trainer: Trainer = Depends(current_trainer),
):
    """Sessions in a date range for the calendar view."""
    sessions = await session_repo(request).find(
        start=to_local_naive(start) if start else None,
        end=to_local_naive(end) if end else None,
        trainer_id=trainer.id,
    )
    clients = await clients_by_id(request, trainer)
    return {"sessions": [session_payload(s, clients) for s in sessions]}
