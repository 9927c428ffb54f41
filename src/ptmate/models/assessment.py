"""Fitness assessment model: PARQ screening plus posture and movement ratings."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum

from ..exceptions import ValidationError


class Rating(IntEnum):
    """Three-point rating used by every posture and movement check."""

    POOR = 1
    AVERAGE = 2
    GOOD = 3

    @classmethod
    def parse(cls, field: str, value) -> "Rating":
        """Convert a raw value to a Rating, naming ``field`` on failure."""
        message = f"rating must be 1, 2 or 3, got {value!r}"
        if isinstance(value, bool):
            raise ValidationError(field, message)
        try:
            number = int(value)
            # int() truncates, so 2.5 would otherwise pass as 2
            if not isinstance(value, str) and number != value:
                raise ValueError(message)
            return cls(number)
        except (TypeError, ValueError):
            raise ValidationError(field, message) from None


class AssessmentCategory(str, Enum):
    """Groups of rating fields on the assessment form."""

    POSTURE = "posture"
    PUSH_UP = "push_up"
    SQUAT = "squat"
    BALANCE = "balance"
    SHOULDER = "shoulder"


PARQ_FIELDS = (
    "parq_heart_problem",
    "parq_chest_pain",
    "parq_dizziness",
    "parq_chronic_condition",
    "parq_medication",
    "parq_bone_joint",
    "parq_supervision",
)

POSTURE_FIELDS = (
    "posture_head_neck",
    "posture_shoulders",
    "posture_lphc",  # Lumbo-pelvic-hip complex
    "posture_knee",
    "posture_foot",
)

RATING_FIELDS: dict[AssessmentCategory, tuple[str, ...]] = {
    AssessmentCategory.POSTURE: POSTURE_FIELDS,
    AssessmentCategory.PUSH_UP: (
        "pushup_form",
        "pushup_scapular",
        "pushup_lordosis",
        "pushup_head_pos",
    ),
    AssessmentCategory.SQUAT: (
        "squat_feet_out",
        "squat_knees_in",
        "squat_lower_back",
        "squat_arms_forward",
        "squat_lean_forward",
    ),
    AssessmentCategory.BALANCE: (
        "balance_correct",
        "balance_knee_in",
        "balance_hip_rise",
    ),
    AssessmentCategory.SHOULDER: (
        "shoulder_retraction",
        "shoulder_protraction",
        "shoulder_elevation",
        "shoulder_depression",
    ),
}

ALL_RATING_FIELDS = tuple(
    name for names in RATING_FIELDS.values() for name in names
)

# Questionnaire wording, used by the CLI questionnaire
PARQ_QUESTIONS = {
    "parq_heart_problem": "Has a doctor ever said you have a heart condition?",
    "parq_chest_pain": "Do you feel pain in your chest during physical activity?",
    "parq_dizziness": "Do you lose balance because of dizziness or ever lose consciousness?",
    "parq_chronic_condition": "Do you have a chronic medical condition other than heart disease?",
    "parq_medication": "Are you currently taking prescribed medication for a chronic condition?",
    "parq_bone_joint": "Do you have a bone or joint problem made worse by physical activity?",
    "parq_supervision": "Has a doctor said you should only do medically supervised activity?",
}


@dataclass
class Assessment:
    """A client's fitness assessment.

    Ratings use :class:`Rating` (1 = poor, 2 = average, 3 = good).
    Raw integers are converted on construction, so an out-of-range
    rating never makes it into an Assessment instance.
    """

    client_id: int

    # PARQ screening (True = "yes")
    parq_heart_problem: bool = False
    parq_chest_pain: bool = False
    parq_dizziness: bool = False
    parq_chronic_condition: bool = False
    parq_medication: bool = False
    parq_bone_joint: bool = False
    parq_supervision: bool = False

    # Static posture
    posture_head_neck: Rating = Rating.AVERAGE
    posture_shoulders: Rating = Rating.AVERAGE
    posture_lphc: Rating = Rating.AVERAGE
    posture_knee: Rating = Rating.AVERAGE
    posture_foot: Rating = Rating.AVERAGE

    # Push-up
    pushup_form: Rating = Rating.AVERAGE
    pushup_scapular: Rating = Rating.AVERAGE
    pushup_lordosis: Rating = Rating.AVERAGE
    pushup_head_pos: Rating = Rating.AVERAGE

    # Overhead squat
    squat_feet_out: Rating = Rating.AVERAGE
    squat_knees_in: Rating = Rating.AVERAGE
    squat_lower_back: Rating = Rating.AVERAGE
    squat_arms_forward: Rating = Rating.AVERAGE
    squat_lean_forward: Rating = Rating.AVERAGE

    # Single-leg balance
    balance_correct: Rating = Rating.AVERAGE
    balance_knee_in: Rating = Rating.AVERAGE
    balance_hip_rise: Rating = Rating.AVERAGE

    # Shoulder mobility
    shoulder_retraction: Rating = Rating.AVERAGE
    shoulder_protraction: Rating = Rating.AVERAGE
    shoulder_elevation: Rating = Rating.AVERAGE
    shoulder_depression: Rating = Rating.AVERAGE

    notes: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        for name in ALL_RATING_FIELDS:
            setattr(self, name, Rating.parse(name, getattr(self, name)))
        for name in PARQ_FIELDS:
            setattr(self, name, bool(getattr(self, name)))

    @property
    def parq_answers(self) -> list[bool]:
        return [getattr(self, name) for name in PARQ_FIELDS]

    def ratings(self, category: AssessmentCategory) -> dict[str, Rating]:
        """Ratings recorded for one category, keyed by field name."""
        return {name: getattr(self, name) for name in RATING_FIELDS[category]}

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and API responses."""
        data: dict = {"id": self.id, "client_id": self.client_id}
        for name in PARQ_FIELDS:
            data[name] = getattr(self, name)
        for name in ALL_RATING_FIELDS:
            data[name] = int(getattr(self, name))
        data["notes"] = self.notes
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Assessment":
        """Create from dictionary. Missing ratings default to average."""
        kwargs = {
            name: data.get(name, False) for name in PARQ_FIELDS
        }
        kwargs.update(
            {name: data.get(name, Rating.AVERAGE) for name in ALL_RATING_FIELDS}
        )
        return cls(
            id=id,
            client_id=data["client_id"],
            notes=data.get("notes") or "",
            created_at=created_at,
            updated_at=updated_at,
            **kwargs,
        )
