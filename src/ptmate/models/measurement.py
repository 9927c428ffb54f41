"""Body measurement model."""

from dataclasses import dataclass
from datetime import datetime

from ..exceptions import ValidationError

# Optional numeric fields, in display order
MEASUREMENT_FIELDS = (
    "weight_kg",
    "neck_cm",
    "shoulder_cm",
    "chest_cm",
    "waist_cm",
    "hip_cm",
    "right_arm_cm",
    "left_arm_cm",
    "right_leg_cm",
    "left_leg_cm",
)


@dataclass
class Measurement:
    """A timestamped snapshot of body measurements.

    Every numeric field is independently optional, so a trainer can
    record only the weight one week and a full tape-measure session
    the next.
    """

    client_id: int
    measured_at: datetime
    weight_kg: float | None = None
    neck_cm: float | None = None
    shoulder_cm: float | None = None
    chest_cm: float | None = None
    waist_cm: float | None = None
    hip_cm: float | None = None
    right_arm_cm: float | None = None
    left_arm_cm: float | None = None
    right_leg_cm: float | None = None
    left_leg_cm: float | None = None
    notes: str = ""
    id: int | None = None
    created_at: datetime | None = None

    def __post_init__(self):
        for name in MEASUREMENT_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            try:
                setattr(self, name, float(value))
            except (TypeError, ValueError):
                raise ValidationError(name, f"not a number: {value!r}") from None

    def values(self) -> dict[str, float]:
        """Fields that were actually recorded in this snapshot."""
        return {
            name: getattr(self, name)
            for name in MEASUREMENT_FIELDS
            if getattr(self, name) is not None
        }

    def changes_since(self, earlier: "Measurement") -> dict[str, float]:
        """Per-field difference from an earlier snapshot.

        Only fields recorded in both snapshots are included.
        """
        previous = earlier.values()
        return {
            name: round(value - previous[name], 2)
            for name, value in self.values().items()
            if name in previous
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and API responses."""
        data = {
            "id": self.id,
            "client_id": self.client_id,
            "measured_at": self.measured_at.isoformat(),
        }
        for name in MEASUREMENT_FIELDS:
            data[name] = getattr(self, name)
        data["notes"] = self.notes
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
    ) -> "Measurement":
        """Create from dictionary."""
        measured_at = data.get("measured_at") or datetime.now()
        if isinstance(measured_at, str):
            measured_at = datetime.fromisoformat(measured_at)

        return cls(
            id=id,
            client_id=data["client_id"],
            measured_at=measured_at,
            notes=data.get("notes") or "",
            created_at=created_at,
            **{name: data.get(name) for name in MEASUREMENT_FIELDS},
        )