"""Progress photo models."""

from dataclasses import dataclass, field
from datetime import datetime

from ..exceptions import ValidationError

MAX_PHOTOS_PER_GROUP = 5


@dataclass
class Photo:
    """A single stored progress photo."""

    url: str
    file_name: str
    file_size: int = 0
    content_type: str = ""
    id: int | None = None
    group_id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "group_id": self.group_id,
            "url": self.url,
            "file_name": self.file_name,
            "file_size": self.file_size,
            "content_type": self.content_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class PhotoGroup:
    """Photos uploaded together in one batch (at most five)."""

    client_id: int
    photos: list[Photo] = field(default_factory=list)
    notes: str = ""
    id: int | None = None
    created_at: datetime | None = None

    def validate(self) -> None:
        """Check the batch size before anything is stored."""
        if not self.photos:
            raise ValidationError("photos", "no photos provided")
        if len(self.photos) > MAX_PHOTOS_PER_GROUP:
            raise ValidationError(
                "photos", f"maximum {MAX_PHOTOS_PER_GROUP} photos allowed per upload"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "client_id": self.client_id,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "photos": [photo.to_dict() for photo in self.photos],
        }
