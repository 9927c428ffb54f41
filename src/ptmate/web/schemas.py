"""Request bodies accepted by the JSON API."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from ..auth import MIN_PASSWORD_LENGTH


class RegisterRequest(BaseModel):
    """New trainer account"""
    email: str
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    first_name: str
    last_name: str


class LoginRequest(BaseModel):
    """Trainer credentials"""
    email: str
    password: str


class ClientCreate(BaseModel):
    """New client"""
    first_name: str
    last_name: str
    phone: str = ""
    email: str = ""
    total_package_size: int = Field(0, ge=0, description="Sessions purchased")
    package_start_date: date | None = None
    notes: str = ""


class ClientUpdate(BaseModel):
    """Partial client update; omitted fields are unchanged"""
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    total_package_size: int | None = Field(None, ge=0)
    package_start_date: date | None = None
    notes: str | None = None


class SessionCreate(BaseModel):
    """New training session (always starts as scheduled)"""
    client_id: int
    scheduled_at: datetime
    duration_minutes: int = Field(60, gt=0)
    notes: str = ""


class SessionUpdate(BaseModel):
    """Partial session update"""
    scheduled_at: datetime | None = None
    duration_minutes: int | None = Field(None, gt=0)
    status: str | None = None
    notes: str | None = None


class StatusUpdate(BaseModel):
    """Status-only session update"""
    status: str


class MeasurementCreate(BaseModel):
    """Body measurement snapshot; every value is optional"""
    measured_at: datetime | None = None
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


class AssessmentInput(BaseModel):
    """Assessment questionnaire.

    Ratings are plain integers here; the range check (1-3) happens when
    the Assessment model is built so the error names the field.
    """
    parq_heart_problem: bool = False
    parq_chest_pain: bool = False
    parq_dizziness: bool = False
    parq_chronic_condition: bool = False
    parq_medication: bool = False
    parq_bone_joint: bool = False
    parq_supervision: bool = False

    posture_head_neck: int = 2
    posture_shoulders: int = 2
    posture_lphc: int = 2
    posture_knee: int = 2
    posture_foot: int = 2

    pushup_form: int = 2
    pushup_scapular: int = 2
    pushup_lordosis: int = 2
    pushup_head_pos: int = 2

    squat_feet_out: int = 2
    squat_knees_in: int = 2
    squat_lower_back: int = 2
    squat_arms_forward: int = 2
    squat_lean_forward: int = 2

    balance_correct: int = 2
    balance_knee_in: int = 2
    balance_hip_rise: int = 2

    shoulder_retraction: int = 2
    shoulder_protraction: int = 2
    shoulder_elevation: int = 2
    shoulder_depression: int = 2

    notes: str = ""
