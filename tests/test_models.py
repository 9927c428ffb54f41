"""Tests for data models."""

from datetime import date, datetime

import pytest

from ptmate.exceptions import ValidationError
from ptmate.models.assessment import (
    ALL_RATING_FIELDS,
    RATING_FIELDS,
    Assessment,
    AssessmentCategory,
    Rating,
)
from ptmate.models.client import Client
from ptmate.models.measurement import Measurement
from ptmate.models.photo import Photo, PhotoGroup
from ptmate.models.session import Session, SessionStatus
from ptmate.models.trainer import Trainer


class TestClient:
    """Tests for Client model."""

    def test_client_to_dict(self, sample_client):
        sample_client.package_start_date = date(2026, 1, 5)
        data = sample_client.to_dict()

        assert data["first_name"] == "Jane"
        assert data["total_package_size"] == 10
        assert data["package_start_date"] == "2026-01-05"

    def test_client_from_dict(self):
        client = Client.from_dict(
            {
                "first_name": "John",
                "last_name": "Smith",
                "total_package_size": "12",
                "package_start_date": "2026-02-01",
                "phone": None,
            }
        )

        assert client.total_package_size == 12
        assert client.package_start_date == date(2026, 2, 1)
        assert client.phone == ""
        assert client.full_name == "John Smith"

    def test_name_required(self):
        with pytest.raises(ValidationError) as exc_info:
            Client(first_name=" ", last_name="Doe")

        assert exc_info.value.field == "first_name"

    def test_negative_package_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Client(first_name="A", last_name="B", total_package_size=-1)

        assert exc_info.value.field == "total_package_size"

    def test_apply_changes(self, sample_client):
        sample_client.apply_changes({"total_package_size": 20, "email": None})

        assert sample_client.total_package_size == 20
        assert sample_client.email == "jane@example.com"


class TestSession:
    """Tests for Session model."""

    def test_defaults(self):
        session = Session(client_id=1, scheduled_at=datetime(2026, 3, 2, 9))

        assert session.status == SessionStatus.SCHEDULED
        assert session.duration_minutes == 60
        assert session.ends_at == datetime(2026, 3, 2, 10)

    def test_status_from_string(self):
        session = Session(client_id=1, scheduled_at=datetime(2026, 3, 2), status="no_show")

        assert session.status == SessionStatus.NO_SHOW

    def test_invalid_status(self):
        with pytest.raises(ValidationError) as exc_info:
            SessionStatus.parse("done")

        assert exc_info.value.field == "status"
        assert "no_show" in str(exc_info.value)

    def test_any_status_transition_allowed(self):
        session = Session(client_id=1, scheduled_at=datetime(2026, 3, 2))
        for status in [
            SessionStatus.CANCELLED,
            SessionStatus.COMPLETED,
            SessionStatus.SCHEDULED,
            SessionStatus.NO_SHOW,
            SessionStatus.COMPLETED,
        ]:
            session.status = status
            assert session.status == status

    def test_round_trip(self):
        session = Session(
            client_id=3,
            scheduled_at=datetime(2026, 3, 2, 18, 15),
            duration_minutes=45,
            status=SessionStatus.COMPLETED,
            notes="Leg day",
        )

        restored = Session.from_dict(session.to_dict())

        assert restored.scheduled_at == session.scheduled_at
        assert restored.status == SessionStatus.COMPLETED
        assert restored.duration_minutes == 45

    def test_from_dict_rejects_explicit_zero_duration(self):
        with pytest.raises(ValidationError) as exc_info:
            Session.from_dict(
                {"client_id": 1, "scheduled_at": "2026-03-02T09:00:00", "duration_minutes": 0}
            )

        assert exc_info.value.field == "duration_minutes"

    def test_from_dict_default_duration(self):
        session = Session.from_dict({"client_id": 1, "scheduled_at": "2026-03-02T09:00:00"})

        assert session.duration_minutes == 60

    def test_non_positive_duration(self):
        with pytest.raises(ValidationError):
            Session(client_id=1, scheduled_at=datetime(2026, 3, 2), duration_minutes=0)


class TestMeasurement:
    """Tests for Measurement model."""

    def test_partial_snapshot(self):
        measurement = Measurement(client_id=1, measured_at=datetime(2026, 3, 1), weight_kg=80)

        assert measurement.values() == {"weight_kg": 80.0}
        assert measurement.to_dict()["waist_cm"] is None

    def test_changes_since(self):
        before = Measurement(
            client_id=1, measured_at=datetime(2026, 1, 1), weight_kg=82.5, waist_cm=90
        )
        after = Measurement(
            client_id=1, measured_at=datetime(2026, 3, 1), weight_kg=80.1, chest_cm=100
        )

        assert after.changes_since(before) == {"weight_kg": -2.4}

    def test_non_numeric_value(self):
        with pytest.raises(ValidationError) as exc_info:
            Measurement(client_id=1, measured_at=datetime(2026, 3, 1), hip_cm="wide")

        assert exc_info.value.field == "hip_cm"

    def test_from_dict_defaults_to_now(self):
        measurement = Measurement.from_dict({"client_id": 1, "neck_cm": 38})

        assert measurement.neck_cm == 38.0
        assert (datetime.now() - measurement.measured_at).total_seconds() < 60


class TestAssessment:
    """Tests for Assessment model."""

    def test_field_groups(self):
        sizes = {category: len(names) for category, names in RATING_FIELDS.items()}

        assert sizes == {
            AssessmentCategory.POSTURE: 5,
            AssessmentCategory.PUSH_UP: 4,
            AssessmentCategory.SQUAT: 5,
            AssessmentCategory.BALANCE: 3,
            AssessmentCategory.SHOULDER: 4,
        }
        assert len(ALL_RATING_FIELDS) == 21

    def test_ratings_converted_to_enum(self):
        assessment = Assessment.from_dict({"client_id": 1, "posture_knee": 3, "balance_correct": "1"})

        assert assessment.posture_knee is Rating.GOOD
        assert assessment.balance_correct is Rating.POOR
        assert assessment.pushup_form is Rating.AVERAGE

    @pytest.mark.parametrize("field", ["posture_foot", "pushup_lordosis", "shoulder_depression"])
    def test_out_of_range_names_field(self, field):
        with pytest.raises(ValidationError) as exc_info:
            Assessment.from_dict({"client_id": 1, field: 0})

        assert exc_info.value.field == field

    @pytest.mark.parametrize("value", [2.5, 1.01, 3.7])
    def test_fractional_rating_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            Assessment(client_id=1, pushup_form=value)

        assert exc_info.value.field == "pushup_form"

    def test_integral_float_accepted(self):
        assert Assessment(client_id=1, pushup_form=3.0).pushup_form is Rating.GOOD

    def test_to_dict_uses_plain_ints(self):
        data = Assessment(client_id=1, parq_chest_pain=True).to_dict()

        assert data["posture_head_neck"] == 2
        assert type(data["posture_head_neck"]) is int
        assert data["parq_chest_pain"] is True


class TestPhotoGroup:
    """Tests for PhotoGroup model."""

    def _photos(self, count: int) -> list[Photo]:
        return [Photo(url=f"/uploads/1/p{i}.jpg", file_name=f"p{i}.jpg") for i in range(count)]

    def test_five_photos_allowed(self):
        PhotoGroup(client_id=1, photos=self._photos(5)).validate()

    def test_six_photos_rejected(self):
        with pytest.raises(ValidationError):
            PhotoGroup(client_id=1, photos=self._photos(6)).validate()

    def test_empty_group_rejected(self):
        with pytest.raises(ValidationError):
            PhotoGroup(client_id=1).validate()


class TestTrainer:
    """Tests for Trainer model."""

    def test_email_normalized(self):
        trainer = Trainer(email="  Coach@Example.COM ", first_name="Alex", last_name="Smith")

        assert trainer.email == "coach@example.com"
        assert trainer.full_name == "Alex Smith"

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            Trainer(email="coach", first_name="Alex", last_name="Smith")

        assert exc_info.value.field == "email"

    def test_to_dict_hides_password_hash(self):
        trainer = Trainer(
            email="coach@example.com", first_name="Alex", last_name="Smith", password_hash="x$y"
        )

        assert "password_hash" not in trainer.to_dict()

    def test_client_carries_trainer(self):
        client = Client.from_dict({"first_name": "Jane", "last_name": "Doe", "trainer_id": 3})

        assert client.trainer_id == 3
        assert client.to_dict()["trainer_id"] == 3
