"""Fitness assessment routes (one assessment per client)."""

from fastapi import APIRouter, Depends, Request

from ...exceptions import NotFoundError
from ...models.assessment import Assessment
from ...models.trainer import Trainer
from ...services.assessment_scoring import score_assessment
from ..dependencies import assessment_repo, current_trainer, require_client
from ..schemas import AssessmentInput

router = APIRouter(prefix="/api/clients/{client_id}/assessment", tags=["assessments"])


def _with_score(assessment: Assessment) -> dict:
    return {**assessment.to_dict(), **score_assessment(assessment).to_dict()}


@router.get("")
async def get_assessment(
    request: Request, client_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Get the client's assessment with its posture score and PARQ flag."""
    await require_client(request, client_id, trainer)
    assessment = await assessment_repo(request).get_by_client(client_id)
    if assessment is None:
        raise NotFoundError("Assessment for client", client_id)
    return _with_score(assessment)


@router.post("", status_code=201)
async def create_assessment(
    request: Request,
    client_id: int,
    body: AssessmentInput,
    trainer: Trainer = Depends(current_trainer),
):
    """Record the client's assessment. A client can only have one."""
    await require_client(request, client_id, trainer)

    assessment = Assessment.from_dict({**body.model_dump(), "client_id": client_id})
    score_assessment(assessment)

    repo = assessment_repo(request)
    await repo.create(assessment)
    return _with_score(await repo.get_by_client(client_id))


@router.put("")
async def update_assessment(
    request: Request,
    client_id: int,
    body: AssessmentInput,
    trainer: Trainer = Depends(current_trainer),
):
    """Replace the client's assessment answers."""
    await require_client(request, client_id, trainer)
    repo = assessment_repo(request)
    existing = await repo.get_by_client(client_id)
    if existing is None:
        raise NotFoundError("Assessment for client", client_id)

    assessment = Assessment.from_dict(
        {**body.model_dump(), "client_id": client_id},
        id=existing.id,
        created_at=existing.created_at,
    )
    score_assessment(assessment)

    await repo.update(assessment)
    return _with_score(await repo.get_by_client(client_id))


@router.delete("")
async def delete_assessment(
    request: Request, client_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Delete the client's assessment."""
    await require_client(request, client_id, trainer)
    if not await assessment_repo(request).delete_by_client(client_id):
        raise NotFoundError("Assessment for client", client_id)
    return {"message": "Assessment deleted successfully"}
