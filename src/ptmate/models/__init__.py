"""Data models for ptmate."""

from .assessment import Assessment, AssessmentCategory, Rating
from .client import Client
from .measurement import Measurement
from .photo import Photo, PhotoGroup
from .session import Session, SessionStatus
from .trainer import Trainer

__all__ = [
    "Assessment",
    "AssessmentCategory",
    "Client",
    "Measurement",
    "Photo",
    "PhotoGroup",
    "Rating",
    "Session",
    "SessionStatus",
    "Trainer",
]
