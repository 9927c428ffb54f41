"""Client routes, scoped to the authenticated trainer."""

from fastapi import APIRouter, Depends, Request

from ...exceptions import NotFoundError
from ...models.client import Client
from ...models.trainer import Trainer
from ...services.client_stats import client_summary
from ..dependencies import (
    client_repo,
    current_trainer,
    photo_storage,
    require_client,
    session_repo,
)
from ..schemas import ClientCreate, ClientUpdate

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.get("")
async def list_clients(request: Request, trainer: Trainer = Depends(current_trainer)):
    """List the trainer's clients with their session counters."""
    clients = await client_repo(request).list_all(trainer_id=trainer.id)
    sessions_by_client = await session_repo(request).list_by_client(trainer_id=trainer.id)
    return [
        client_summary(client, sessions_by_client.get(client.id, []))
        for client in clients
    ]


@router.post("", status_code=201)
async def create_client(
    request: Request, body: ClientCreate, trainer: Trainer = Depends(current_trainer)
):
    """Create a client for the trainer."""
    client = Client.from_dict({**body.model_dump(), "trainer_id": trainer.id})
    await client_repo(request).create(client)
    return client_summary(client, [])


@router.get("/{client_id}")
async def get_client(
    request: Request, client_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Get a client with their session counters."""
    client = await require_client(request, client_id, trainer)
    sessions = await session_repo(request).find(client_id=client_id)
    return client_summary(client, sessions)


@router.put("/{client_id}")
async def update_client(
    request: Request,
    client_id: int,
    body: ClientUpdate,
    trainer: Trainer = Depends(current_trainer),
):
    """Update the provided client fields."""
    client = await require_client(request, client_id, trainer)
    client.apply_changes(body.model_dump(exclude_unset=True))

    repo = client_repo(request)
    await repo.update(client)

    updated = await repo.get(client_id)
    sessions = await session_repo(request).find(client_id=client_id)
    return client_summary(updated, sessions)


@router.delete("/{client_id}")
async def delete_client(
    request: Request, client_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Delete a client with their sessions, measurements, assessment and photos."""
    await require_client(request, client_id, trainer)
    if not await client_repo(request).delete(client_id):
        raise NotFoundError("Client", client_id)
    photo_storage(request).delete_client(client_id)
    return {"message": "Client deleted successfully"}
