"""Client data model."""

from dataclasses import dataclass
from datetime import date, datetime

from ..exceptions import ValidationError


@dataclass
class Client:
    """A personal-training client and their purchased package."""

    first_name: str
    last_name: str
    phone: str = ""
    email: str = ""
    total_package_size: int = 0  # Sessions purchased
    package_start_date: date | None = None
    notes: str = ""
    trainer_id: int | None = None  # Owning trainer; None for unassigned clients
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if not self.first_name or not self.first_name.strip():
            raise ValidationError("first_name", "is required")
        if not self.last_name or not self.last_name.strip():
            raise ValidationError("last_name", "is required")
        if self.total_package_size < 0:
            raise ValidationError("total_package_size", "must not be negative")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "trainer_id": self.trainer_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "email": self.email,
            "total_package_size": self.total_package_size,
            "package_start_date": (
                self.package_start_date.isoformat() if self.package_start_date else None
            ),
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
    ) -> "Client":
        """Create from dictionary."""
        package_start_date = data.get("package_start_date")
        if isinstance(package_start_date, str):
            package_start_date = date.fromisoformat(package_start_date[:10])

        return cls(
            id=id,
            first_name=data["first_name"],
            last_name=data["last_name"],
            phone=data.get("phone") or "",
            email=data.get("email") or "",
            total_package_size=int(data.get("total_package_size") or 0),
            package_start_date=package_start_date,
            notes=data.get("notes") or "",
            trainer_id=data.get("trainer_id"),
            created_at=created_at,
            updated_at=updated_at,
        )

    def apply_changes(self, changes: dict) -> None:
        """Apply a partial update; keys absent from ``changes`` are left alone."""
        for key in (
            "first_name",
            "last_name",
            "phone",
            "email",
            "total_package_size",
            "package_start_date",
            "notes",
        ):
            if key in changes and changes[key] is not None:
                setattr(self, key, changes[key])
        self.__post_init__()
