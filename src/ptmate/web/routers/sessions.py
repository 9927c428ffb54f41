"""Training session routes, scoped to the authenticated trainer's clients."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request

from ...exceptions import NotFoundError
from ...models.session import Session, SessionStatus
from ...models.trainer import Trainer
from ...utils.dates import to_local_naive
from ..dependencies import (
    clients_by_id,
    current_trainer,
    require_client,
    session_payload,
    session_repo,
)
from ..schemas import SessionCreate, SessionUpdate, StatusUpdate

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


async def _require_session(request: Request, session_id: int, trainer: Trainer) -> Session:
    session = await session_repo(request).get(session_id)
    if session is None:
        raise NotFoundError("Session", session_id)
    try:
        await require_client(request, session.client_id, trainer)
    except NotFoundError:
        raise NotFoundError("Session", session_id) from None
    return session


async def _payload(request: Request, session_id: int, trainer: Trainer) -> dict:
    session = await session_repo(request).get(session_id)
    return session_payload(session, await clients_by_id(request, trainer))


@router.get("")
async def list_sessions(
    request: Request,
    client_id: int | None = None,
    status: str | None = None,
    start: datetime | None = Query(None, alias="from"),
    end: datetime | None = Query(None, alias="to"),
    trainer: Trainer = Depends(current_trainer),
):
    """List sessions, earliest first, filtered by client, status and date range."""
    sessions = await session_repo(request).find(
        client_id=client_id,
        status=SessionStatus.parse(status) if status else None,
        start=to_local_naive(start) if start else None,
        end=to_local_naive(end) if end else None,
        trainer_id=trainer.id,
    )
    clients = await clients_by_id(request, trainer)
    return [session_payload(session, clients) for session in sessions]


@router.post("", status_code=201)
async def create_session(
    request: Request, body: SessionCreate, trainer: Trainer = Depends(current_trainer)
):
    """Schedule a session for one of the trainer's clients."""
    client = await require_client(request, body.client_id, trainer)

    session = Session(
        client_id=body.client_id,
        scheduled_at=to_local_naive(body.scheduled_at),
        duration_minutes=body.duration_minutes,
        notes=body.notes,
    )
    await session_repo(request).create(session)
    return session_payload(session, {client.id: client})


@router.get("/{session_id}")
async def get_session(
    request: Request, session_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Get a session by ID."""
    await _require_session(request, session_id, trainer)
    return await _payload(request, session_id, trainer)


@router.put("/{session_id}")
async def update_session(
    request: Request,
    session_id: int,
    body: SessionUpdate,
    trainer: Trainer = Depends(current_trainer),
):
    """Update the provided session fields."""
    session = await _require_session(request, session_id, trainer)

    if body.scheduled_at is not None:
        session.scheduled_at = to_local_naive(body.scheduled_at)
    if body.duration_minutes is not None:
        session.duration_minutes = body.duration_minutes
    if body.status is not None:
        session.status = SessionStatus.parse(body.status)
    if body.notes is not None:
        session.notes = body.notes

    await session_repo(request).update(session)
    return await _payload(request, session_id, trainer)


@router.patch("/{session_id}/status")
async def update_session_status(
    request: Request,
    session_id: int,
    body: StatusUpdate,
    trainer: Trainer = Depends(current_trainer),
):
    """Change only the session status. Any status may follow any other."""
    status = SessionStatus.parse(body.status)
    await _require_session(request, session_id, trainer)
    await session_repo(request).update_status(session_id, status)
    return await _payload(request, session_id, trainer)


@router.delete("/{session_id}")
async def delete_session(
    request: Request, session_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Delete a session."""
    await _require_session(request, session_id, trainer)
    await session_repo(request).delete(session_id)
    return {"message": "Session deleted successfully"}
