"""Trainer registration and login."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ...auth import hash_password, verify_password
from ...models.trainer import Trainer
from ..dependencies import current_trainer, trainer_repo
from ..schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201)
async def register(request: Request, body: RegisterRequest):
    """Create a trainer account and return a bearer token."""
    trainer = Trainer(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        password_hash=hash_password(body.password),
    )

    repo = trainer_repo(request)
    await repo.create(trainer)
    token = await repo.issue_token(trainer.id)
    return {"token": token, "trainer": trainer.to_dict()}


@router.post("/login")
async def login(request: Request, body: LoginRequest):
    """Exchange email and password for a bearer token."""
    repo = trainer_repo(request)
    trainer = await repo.get_by_email(body.email)
    if trainer is None or not verify_password(body.password, trainer.password_hash):
        logger.info("Failed login for %s", body.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = await repo.issue_token(trainer.id)
    return {"token": token, "trainer": trainer.to_dict()}


@router.get("/me")
async def me(trainer: Trainer = Depends(current_trainer)):
    """The authenticated trainer."""
    return trainer.to_dict()
