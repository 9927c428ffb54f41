"""Shared helpers for routers."""

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings
from ..db.repositories import (
    AssessmentRepository,
    ClientRepository,
    MeasurementRepository,
    PhotoRepository,
    SessionRepository,
    TrainerRepository,
)
from ..exceptions import NotFoundError
from ..models.client import Client
from ..models.session import Session
from ..models.trainer import Trainer
from ..services.photo_storage import PhotoStorage

# Security scheme for OpenAPI docs; missing headers are handled below
bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Get settings from app state."""
    return request.app.state.settings


def trainer_repo(request: Request) -> TrainerRepository:
    return TrainerRepository(get_settings(request).db_path)


def client_repo(request: Request) -> ClientRepository:
    return ClientRepository(get_settings(request).db_path)


def session_repo(request: Request) -> SessionRepository:
    return SessionRepository(get_settings(request).db_path)


def measurement_repo(request: Request) -> MeasurementRepository:
    return MeasurementRepository(get_settings(request).db_path)


def assessment_repo(request: Request) -> AssessmentRepository:
    return AssessmentRepository(get_settings(request).db_path)


def photo_repo(request: Request) -> PhotoRepository:
    return PhotoRepository(get_settings(request).db_path)


def photo_storage(request: Request) -> PhotoStorage:
    return PhotoStorage(get_settings(request).upload_dir)


async def current_trainer(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Trainer:
    """Resolve the ``Authorization: Bearer`` token to a trainer, or 401."""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    trainer = await trainer_repo(request).get_by_token(credentials.credentials)
    if trainer is None:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return trainer


async def require_client(request: Request, client_id: int, trainer: Trainer) -> Client:
    """Load one of the trainer's clients or raise NotFoundError.

    Another trainer's client is reported as missing.
    """
    client = await client_repo(request).get(client_id)
    if client is None or client.trainer_id != trainer.id:
        raise NotFoundError("Client", client_id)
    return client


async def clients_by_id(request: Request, trainer: Trainer) -> dict[int, Client]:
    """The trainer's clients keyed by ID."""
    return {c.id: c for c in await client_repo(request).list_all(trainer_id=trainer.id)}


def session_payload(session: Session, clients: dict[int, Client]) -> dict:
    """Session dict with a short summary of the client it is with."""
    data = session.to_dict()
    client = clients.get(session.client_id)
    data["client"] = (
        {
            "id": client.id,
            "first_name": client.first_name,
            "last_name": client.last_name,
        }
        if client
        else None
    )
    return data
