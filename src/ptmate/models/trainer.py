"""Trainer account model."""

from dataclasses import dataclass
from datetime import datetime

from ..exceptions import ValidationError


@dataclass
class Trainer:
    """A personal trainer who owns a set of clients."""

    email: str
    first_name: str
    last_name: str
    password_hash: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        self.email = (self.email or "").strip().lower()
        if "@" not in self.email:
            raise ValidationError("email", "must be a valid email address")
        if not self.first_name or not self.first_name.strip():
            raise ValidationError("first_name", "is required")
        if not self.last_name or not self.last_name.strip():
            raise ValidationError("last_name", "is required")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses (never includes the password hash)."""
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
