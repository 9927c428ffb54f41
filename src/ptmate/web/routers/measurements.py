"""Body measurement routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, Request

from ...exceptions import NotFoundError
from ...models.measurement import Measurement
from ...models.trainer import Trainer
from ...utils.dates import to_local_naive
from ..dependencies import current_trainer, measurement_repo, require_client
from ..schemas import MeasurementCreate

router = APIRouter(prefix="/api", tags=["measurements"])


async def _require_measurement(
    request: Request, measurement_id: int, trainer: Trainer
) -> Measurement:
    measurement = await measurement_repo(request).get(measurement_id)
    if measurement is None:
        raise NotFoundError("Measurement", measurement_id)
    try:
        await require_client(request, measurement.client_id, trainer)
    except NotFoundError:
        raise NotFoundError("Measurement", measurement_id) from None
    return measurement


@router.get("/clients/{client_id}/measurements")
async def list_measurements(
    request: Request, client_id: int, trainer: Trainer = Depends(current_trainer)
):
    """List a client's measurements, newest first.

    Each entry after the oldest carries ``changes`` relative to the
    previous snapshot.
    """
    await require_client(request, client_id, trainer)
    measurements = await measurement_repo(request).list_for_client(client_id)

    results = []
    for index, measurement in enumerate(measurements):
        data = measurement.to_dict()
        if index + 1 < len(measurements):
            data["changes"] = measurement.changes_since(measurements[index + 1])
        else:
            data["changes"] = {}
        results.append(data)
    return results


@router.post("/clients/{client_id}/measurements", status_code=201)
async def create_measurement(
    request: Request,
    client_id: int,
    body: MeasurementCreate,
    trainer: Trainer = Depends(current_trainer),
):
    """Record a measurement snapshot (defaults to now)."""
    await require_client(request, client_id, trainer)

    data = body.model_dump()
    data["client_id"] = client_id
    data["measured_at"] = (
        to_local_naive(body.measured_at) if body.measured_at else datetime.now()
    )
    measurement = Measurement.from_dict(data)

    await measurement_repo(request).create(measurement)
    return measurement.to_dict()


@router.get("/measurements/{measurement_id}")
async def get_measurement(
    request: Request, measurement_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Get a measurement by ID."""
    measurement = await _require_measurement(request, measurement_id, trainer)
    return measurement.to_dict()


@router.delete("/measurements/{measurement_id}")
async def delete_measurement(
    request: Request, measurement_id: int, trainer: Trainer = Depends(current_trainer)
):
    """Delete a measurement."""
    await _require_measurement(request, measurement_id, trainer)
    await measurement_repo(request).delete(measurement_id)
    return {"message": "Measurement deleted successfully"}
