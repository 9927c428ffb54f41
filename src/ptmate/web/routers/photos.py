"""Progress photo routes."""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from ...exceptions import NotFoundError
from ...models.photo import MAX_PHOTOS_PER_GROUP, PhotoGroup
from ...models.trainer import Trainer
from ..dependencies import current_trainer, photo_repo, photo_storage, require_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["photos"])


@router.get("/clients/{client_id}/photos")
async def list_photo_groups(
    request: Request, client_id: int, trainer: Trainer = Depends(current_trainer)
):
    """List a client's photo groups, newest first."""
    await require_client(request, client_id, trainer)
    groups = await photo_repo(request).list_for_client(client_id)
    return [group.to_dict() for group in groups]


@router.post("/clients/{client_id}/photos", status_code=201)
async def upload_photos(
    request: Request,
    client_id: int,
    photos: list[UploadFile] = File(default=[]),
    notes: str = Form(""),
    trainer: Trainer = Depends(current_trainer),
):
    """Upload a batch of one to five photos as a group."""
    await require_client(request, client_id, trainer)

    if not photos:
        return JSONResponse(status_code=400, content={"detail": "No photos provided"})
    if len(photos) > MAX_PHOTOS_PER_GROUP:
        return JSONResponse(
            status_code=400,
            content={"detail": f"Maximum {MAX_PHOTOS_PER_GROUP} photos allowed per upload"},
        )

    storage = photo_storage(request)
    group = PhotoGroup(client_id=client_id, notes=notes)
    try:
        for upload in photos:
            content = await upload.read()
            group.photos.append(
                storage.save(
                    client_id,
                    upload.filename or "photo",
                    content,
                    upload.content_type or "",
                )
            )
        await photo_repo(request).create_group(group)
    except Exception:
        # Files written before the failure have no record pointing at them
        logger.exception("Photo upload for client %s failed", client_id)
        storage.delete(group.photos)
        raise

    logger.info("Stored %d photos for client %s", len(group.photos), client_id)
    return group.to_dict()


@router.delete("/photo-groups/{group_id}")
async def delete_photo_group(
    request: Request, group_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Delete a photo group and its stored files."""
    repo = photo_repo(request)
    group = await repo.get_group(group_id)
    if group is None:
        raise NotFoundError("Photo group", group_id)
    try:
        await require_client(request, group.client_id, trainer)
    except NotFoundError:
        raise NotFoundError("Photo group", group_id) from None

    await repo.delete_group(group_id)
    photo_storage(request).delete(group.photos)
    return {"message": "Photo group deleted successfully"}
