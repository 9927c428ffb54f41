"""Tests for the SQLite repositories."""

import asyncio
import importlib
from datetime import datetime, timedelta

import pytest

from ptmate.db import (
    AssessmentRepository,
    ClientRepository,
    MeasurementRepository,
    PhotoRepository,
    SessionRepository,
    TrainerRepository,
)
from ptmate.exceptions import ConflictError, ValidationError
from ptmate.models.assessment import Assessment, Rating
from ptmate.models.client import Client
from ptmate.models.measurement import Measurement
from ptmate.models.photo import Photo, PhotoGroup
from ptmate.models.session import Session, SessionStatus
from ptmate.models.trainer import Trainer

repositories_module = importlib.import_module("ptmate.db.repositories")


def _add_client(db_path, client) -> int:
    return asyncio.run(ClientRepository(db_path).create(client))


class TestClientRepository:
    """Tests for ClientRepository."""

    def test_create_and_get(self, temp_db_path, sample_client):
        client_id = _add_client(temp_db_path, sample_client)

        loaded = asyncio.run(ClientRepository(temp_db_path).get(client_id))

        assert loaded.id == client_id
        assert loaded.full_name == "Jane Doe"
        assert loaded.total_package_size == 10
        assert loaded.created_at is not None

    def test_timestamps_are_local_time(self, temp_db_path, sample_client):
        client_id = _add_client(temp_db_path, sample_client)

        loaded = asyncio.run(ClientRepository(temp_db_path).get(client_id))

        # Same timebase as scheduled_at, not SQLite's UTC clock
        assert abs((loaded.created_at - datetime.now()).total_seconds()) < 60
        assert loaded.updated_at == loaded.created_at

    def test_get_missing(self, temp_db_path):
        assert asyncio.run(ClientRepository(temp_db_path).get(999)) is None

    def test_update(self, temp_db_path, sample_client):
        repo = ClientRepository(temp_db_path)
        _add_client(temp_db_path, sample_client)

        sample_client.apply_changes({"total_package_size": 20, "notes": "Knee injury"})
        asyncio.run(repo.update(sample_client))
        loaded = asyncio.run(repo.get(sample_client.id))

        assert loaded.total_package_size == 20
        assert loaded.notes == "Knee injury"

    def test_update_requires_id(self, temp_db_path, sample_client):
        with pytest.raises(ValueError):
            asyncio.run(ClientRepository(temp_db_path).update(sample_client))

    def test_list_all_sorted_by_name(self, temp_db_path, sample_client):
        _add_client(temp_db_path, sample_client)
        _add_client(temp_db_path, Client(first_name="Adam", last_name="Brown"))

        clients = asyncio.run(ClientRepository(temp_db_path).list_all())

        assert [c.last_name for c in clients] == ["Brown", "Doe"]
        assert asyncio.run(ClientRepository(temp_db_path).count()) == 2

    def test_delete_removes_related_records(self, temp_db_path, sample_client):
        client_id = _add_client(temp_db_path, sample_client)

        async def populate():
            await SessionRepository(temp_db_path).create(
                Session(client_id=client_id, scheduled_at=datetime(2026, 3, 2, 9))
            )
            await MeasurementRepository(temp_db_path).create(
                Measurement(client_id=client_id, measured_at=datetime(2026, 3, 1), weight_kg=70)
            )
            await AssessmentRepository(temp_db_path).create(Assessment(client_id=client_id))
            await PhotoRepository(temp_db_path).create_group(
                PhotoGroup(
                    client_id=client_id,
                    photos=[Photo(url="/uploads/1/a.jpg", file_name="a.jpg")],
                )
            )

        asyncio.run(populate())

        assert asyncio.run(ClientRepository(temp_db_path).delete(client_id)) is True
        assert asyncio.run(SessionRepository(temp_db_path).find(client_id=client_id)) == []
        assert asyncio.run(MeasurementRepository(temp_db_path).list_for_client(client_id)) == []
        assert asyncio.run(AssessmentRepository(temp_db_path).get_by_client(client_id)) is None
        assert asyncio.run(PhotoRepository(temp_db_path).list_for_client(client_id)) == []

    def test_delete_missing(self, temp_db_path):
        assert asyncio.run(ClientRepository(temp_db_path).delete(42)) is False


class TestSessionRepository:
    """Tests for SessionRepository."""

    @pytest.fixture
    def seeded(self, temp_db_path):
        """Two clients' sessions across a week."""
        repo = SessionRepository(temp_db_path)
        sessions = [
            Session(client_id=1, scheduled_at=datetime(2026, 3, 3, 9), status=SessionStatus.COMPLETED),
            Session(client_id=1, scheduled_at=datetime(2026, 3, 1, 9), status=SessionStatus.NO_SHOW),
            Session(client_id=2, scheduled_at=datetime(2026, 3, 5, 18)),
            Session(client_id=1, scheduled_at=datetime(2026, 3, 7, 10)),
        ]

        async def create_all():
            for session in sessions:
                await repo.create(session)

        asyncio.run(create_all())
        return repo

    def test_find_orders_by_time(self, seeded):
        found = asyncio.run(seeded.find())

        assert [s.scheduled_at.day for s in found] == [1, 3, 5, 7]

    def test_find_by_client_and_status(self, seeded):
        found = asyncio.run(seeded.find(client_id=1, status=SessionStatus.SCHEDULED))

        assert len(found) == 1
        assert found[0].scheduled_at == datetime(2026, 3, 7, 10)

    def test_find_range_is_inclusive(self, seeded):
        found = asyncio.run(
            seeded.find(start=datetime(2026, 3, 3, 9), end=datetime(2026, 3, 5, 18))
        )

        assert [s.scheduled_at.day for s in found] == [3, 5]

    def test_update_status(self, seeded):
        session = asyncio.run(seeded.find(client_id=2))[0]

        assert asyncio.run(seeded.update_status(session.id, SessionStatus.CANCELLED)) is True
        assert asyncio.run(seeded.get(session.id)).status == SessionStatus.CANCELLED

    def test_update_status_missing(self, seeded):
        assert asyncio.run(seeded.update_status(999, SessionStatus.COMPLETED)) is False

    def test_update(self, seeded):
        session = asyncio.run(seeded.find(client_id=2))[0]
        session.duration_minutes = 45
        session.notes = "Moved to evening"

        asyncio.run(seeded.update(session))
        loaded = asyncio.run(seeded.get(session.id))

        assert loaded.duration_minutes == 45
        assert loaded.notes == "Moved to evening"

    def test_list_by_client(self, seeded):
        grouped = asyncio.run(seeded.list_by_client())

        assert len(grouped[1]) == 3
        assert len(grouped[2]) == 1

    def test_delete(self, seeded):
        session = asyncio.run(seeded.find(client_id=2))[0]

        assert asyncio.run(seeded.delete(session.id)) is True
        assert asyncio.run(seeded.get(session.id)) is None


class TestMeasurementRepository:
    """Tests for MeasurementRepository."""

    def test_newest_first_and_partial_values(self, temp_db_path):
        repo = MeasurementRepository(temp_db_path)

        async def create_all():
            await repo.create(Measurement(client_id=1, measured_at=datetime(2026, 1, 1), weight_kg=82))
            await repo.create(
                Measurement(client_id=1, measured_at=datetime(2026, 2, 1), weight_kg=80, waist_cm=88.5)
            )

        asyncio.run(create_all())
        found = asyncio.run(repo.list_for_client(1))

        assert [m.measured_at.month for m in found] == [2, 1]
        assert found[0].waist_cm == 88.5
        assert found[1].waist_cm is None


class TestAssessmentRepository:
    """Tests for AssessmentRepository."""

    def test_round_trip(self, temp_db_path):
        repo = AssessmentRepository(temp_db_path)
        assessment = Assessment(client_id=1, parq_medication=True, posture_knee=1, squat_knees_in=3)

        asyncio.run(repo.create(assessment))
        loaded = asyncio.run(repo.get_by_client(1))

        assert loaded.id == assessment.id
        assert loaded.parq_medication is True
        assert loaded.posture_knee is Rating.POOR
        assert loaded.squat_knees_in is Rating.GOOD
        assert loaded.balance_correct is Rating.AVERAGE

    def test_second_assessment_conflicts(self, temp_db_path):
        repo = AssessmentRepository(temp_db_path)
        asyncio.run(repo.create(Assessment(client_id=1)))

        with pytest.raises(ConflictError):
            asyncio.run(repo.create(Assessment(client_id=1)))

    def test_update_and_delete(self, temp_db_path):
        repo = AssessmentRepository(temp_db_path)
        assessment = Assessment(client_id=1)
        asyncio.run(repo.create(assessment))

        assessment.posture_foot = Rating.GOOD
        assessment.notes = "Flat feet improving"
        asyncio.run(repo.update(assessment))

        loaded = asyncio.run(repo.get_by_client(1))
        assert loaded.posture_foot is Rating.GOOD
        assert loaded.notes == "Flat feet improving"

        assert asyncio.run(repo.delete_by_client(1)) is True
        assert asyncio.run(repo.get_by_client(1)) is None


class TestPhotoRepository:
    """Tests for PhotoRepository."""

    def _group(self, count: int, client_id: int = 1) -> PhotoGroup:
        return PhotoGroup(
            client_id=client_id,
            notes="Week 4",
            photos=[
                Photo(url=f"/uploads/{client_id}/p{i}.jpg", file_name=f"p{i}.jpg", file_size=100)
                for i in range(count)
            ],
        )

    def test_create_and_list(self, temp_db_path):
        repo = PhotoRepository(temp_db_path)
        group_id = asyncio.run(repo.create_group(self._group(3)))

        groups = asyncio.run(repo.list_for_client(1))

        assert [g.id for g in groups] == [group_id]
        assert [p.file_name for p in groups[0].photos] == ["p0.jpg", "p1.jpg", "p2.jpg"]
        assert all(p.group_id == group_id for p in groups[0].photos)

    def test_oversized_group_not_stored(self, temp_db_path):
        repo = PhotoRepository(temp_db_path)

        with pytest.raises(ValidationError):
            asyncio.run(repo.create_group(self._group(6)))

        assert asyncio.run(repo.list_for_client(1)) == []

    def test_delete_group(self, temp_db_path):
        repo = PhotoRepository(temp_db_path)
        group_id = asyncio.run(repo.create_group(self._group(2)))

        assert asyncio.run(repo.delete_group(group_id)) is True
        assert asyncio.run(repo.get_group(group_id)) is None


def _add_trainer(db_path, email: str) -> int:
    trainer = Trainer(email=email, first_name="Alex", last_name="Smith", password_hash="x$y")
    return asyncio.run(TrainerRepository(db_path).create(trainer))


class TestTrainerRepository:
    """Tests for TrainerRepository."""

    def test_create_and_get_by_email(self, temp_db_path):
        trainer_id = _add_trainer(temp_db_path, "coach@example.com")

        loaded = asyncio.run(TrainerRepository(temp_db_path).get_by_email("Coach@Example.com"))

        assert loaded.id == trainer_id
        assert loaded.password_hash == "x$y"
        assert abs((loaded.created_at - datetime.now()).total_seconds()) < 60

    def test_duplicate_email_conflicts(self, temp_db_path):
        _add_trainer(temp_db_path, "coach@example.com")

        with pytest.raises(ConflictError):
            _add_trainer(temp_db_path, "COACH@example.com")

    def test_token_resolves_to_trainer(self, temp_db_path):
        repo = TrainerRepository(temp_db_path)
        trainer_id = _add_trainer(temp_db_path, "coach@example.com")

        token = asyncio.run(repo.issue_token(trainer_id))

        assert asyncio.run(repo.get_by_token(token)).id == trainer_id
        assert asyncio.run(repo.get_by_token(token + "x")) is None

    def test_expired_token_rejected(self, temp_db_path, monkeypatch):
        repo = TrainerRepository(temp_db_path)
        token = asyncio.run(repo.issue_token(_add_trainer(temp_db_path, "coach@example.com")))

        later = datetime.now() + timedelta(days=8)
        monkeypatch.setattr(repositories_module, "_now", lambda: later)

        assert asyncio.run(repo.get_by_token(token)) is None


class TestTrainerScoping:
    """Client and session queries limited to one trainer."""

    @pytest.fixture
    def two_trainers(self, temp_db_path):
        first = _add_trainer(temp_db_path, "first@example.com")
        second = _add_trainer(temp_db_path, "second@example.com")
        jane = _add_client(temp_db_path, Client(first_name="Jane", last_name="Doe", trainer_id=first))
        sam = _add_client(temp_db_path, Client(first_name="Sam", last_name="Lee", trainer_id=second))

        sessions = SessionRepository(temp_db_path)
        for client_id, day in ((jane, 2), (jane, 3), (sam, 4)):
            asyncio.run(
                sessions.create(Session(client_id=client_id, scheduled_at=datetime(2026, 3, day, 9)))
            )
        return temp_db_path, first, second, jane, sam

    def test_list_and_count_clients(self, two_trainers):
        db_path, first, second, jane, sam = two_trainers
        repo = ClientRepository(db_path)

        assert [c.id for c in asyncio.run(repo.list_all(trainer_id=first))] == [jane]
        assert asyncio.run(repo.count(trainer_id=second)) == 1
        assert asyncio.run(repo.count()) == 2

    def test_find_sessions(self, two_trainers):
        db_path, first, second, jane, sam = two_trainers
        repo = SessionRepository(db_path)

        assert [s.client_id for s in asyncio.run(repo.find(trainer_id=first))] == [jane, jane]
        assert [s.client_id for s in asyncio.run(repo.find(trainer_id=second))] == [sam]
        assert asyncio.run(repo.find(client_id=jane, trainer_id=second)) == []

    def test_list_by_client(self, two_trainers):
        db_path, first, second, jane, sam = two_trainers

        grouped = asyncio.run(SessionRepository(db_path).list_by_client(trainer_id=second))

        assert list(grouped) == [sam]
