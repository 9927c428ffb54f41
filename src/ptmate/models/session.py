"""Training session model."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from ..exceptions import ValidationError

DEFAULT_DURATION_MINUTES = 60


class SessionStatus(str, Enum):
    """Session status.

    A plain tag: any status may be changed to any other.
    """

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: "str | SessionStatus") -> "SessionStatus":
        """Convert a raw status string, rejecting unknown values."""
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValidationError(
                "status", f"invalid value {value!r}; valid values: {valid}"
            ) from None


@dataclass
class Session:
    """A scheduled training session for one client."""

    client_id: int
    scheduled_at: datetime
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    status: SessionStatus = SessionStatus.SCHEDULED
    notes: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        self.status = SessionStatus.parse(self.status)
        if self.duration_minutes <= 0:
            raise ValidationError("duration_minutes", "must be positive")

    @property
    def ends_at(self) -> datetime:
        return self.scheduled_at + timedelta(minutes=self.duration_minutes)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "client_id": self.client_id,
            "scheduled_at": self.scheduled_at.isoformat(),
            "duration_minutes": self.duration_minutes,
            "ends_at": self.ends_at.isoformat(),
            "status": self.status.value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Session":
        """Create from dictionary."""
        scheduled_at = data["scheduled_at"]
        if isinstance(scheduled_at, str):
            scheduled_at = datetime.fromisoformat(scheduled_at)

        return cls(
            id=id,
            client_id=data["client_id"],
            scheduled_at=scheduled_at,
            duration_minutes=data.get("duration_minutes", DEFAULT_DURATION_MINUTES),
            status=data.get("status", SessionStatus.SCHEDULED),
            notes=data.get("notes") or "",
            created_at=created_at,
            updated_at=updated_at,
        )

    def get_status_display(self) -> str:
        """Get a human-readable status string."""
        status_map = {
            SessionStatus.SCHEDULED: "Scheduled",
            SessionStatus.COMPLETED: "Completed",
            SessionStatus.NO_SHOW: "No-show",
            SessionStatus.CANCELLED: "Cancelled",
        }
        return status_map.get(self.status, self.status.value)
