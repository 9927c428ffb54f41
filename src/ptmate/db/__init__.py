"""Database layer for ptmate."""

from .engine import get_db_path, init_db
from .repositories import (
    AssessmentRepository,
    ClientRepository,
    MeasurementRepository,
    PhotoRepository,
    SessionRepository,
    TrainerRepository,
)

__all__ = [
    "AssessmentRepository",
    "ClientRepository",
    "get_db_path",
    "init_db",
    "MeasurementRepository",
    "PhotoRepository",
    "SessionRepository",
    "TrainerRepository",
]
