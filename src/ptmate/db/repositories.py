"""Data access layer for ptmate."""

import json
import logging
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..auth import TOKEN_TTL, generate_token, hash_token
from ..exceptions import ConflictError
from ..models.assessment import ALL_RATING_FIELDS, PARQ_FIELDS, Assessment
from ..models.client import Client
from ..models.measurement import MEASUREMENT_FIELDS, Measurement
from ..models.photo import Photo, PhotoGroup
from ..models.session import Session, SessionStatus
from ..models.trainer import Trainer
from .engine import get_db_path

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO timestamp."""
    if not value:
        return None
    return datetime.fromisoformat(value)


def _now() -> datetime:
    """Local naive time, the same timebase as scheduled_at and measured_at."""
    return datetime.now()


class TrainerRepository:
    """Repository for trainer accounts and their bearer tokens."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, trainer: Trainer) -> int:
        """Create a trainer account.

        Raises:
            ConflictError: if the email is already registered
        """
        now = _now()
        async with aiosqlite.connect(self.db_path) as db:
            try:
                cursor = await db.execute(
                    """
                    INSERT INTO trainers
                    (email, password_hash, first_name, last_name, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        trainer.email,
                        trainer.password_hash,
                        trainer.first_name,
                        trainer.last_name,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise ConflictError(f"Email {trainer.email} is already registered") from e
            await db.commit()
            trainer.id = cursor.lastrowid
            trainer.created_at = trainer.updated_at = now
            logger.info("Registered trainer %s (%s)", trainer.id, trainer.email)
            return cursor.lastrowid

    async def get(self, trainer_id: int) -> Trainer | None:
        """Get a trainer by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM trainers WHERE id = ?", (trainer_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_trainer(row)

    async def get_by_email(self, email: str) -> Trainer | None:
        """Get a trainer by email (case-insensitive)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM trainers WHERE email = ?", (email.strip().lower(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_trainer(row)

    async def list_all(self) -> list[Trainer]:
        """List all trainers."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM trainers ORDER BY email")
            rows = await cursor.fetchall()
            return [self._row_to_trainer(row) for row in rows]

    async def issue_token(self, trainer_id: int) -> str:
        """Create a bearer token for a trainer.

        Returns:
            The plaintext token; only its hash is stored
        """
        token = generate_token()
        now = _now()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO auth_tokens (token_hash, trainer_id, created_at, expires_at)
                VALUES (?, ?, ?, ?)
                """,
                (hash_token(token), trainer_id, now.isoformat(), (now + TOKEN_TTL).isoformat()),
            )
            await db.commit()
        return token

    async def get_by_token(self, token: str) -> Trainer | None:
        """Resolve an unexpired bearer token to its trainer."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT t.* FROM trainers t
                JOIN auth_tokens a ON a.trainer_id = t.id
                WHERE a.token_hash = ? AND a.expires_at > ?
                """,
                (hash_token(token), _now().isoformat()),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_trainer(row)

    def _row_to_trainer(self, row: aiosqlite.Row) -> Trainer:
        """Convert a database row to a Trainer."""
        return Trainer(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class ClientRepository:
    """Repository for clients."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, client: Client) -> int:
        """Create a new client."""
        now = _now()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO clients
                (first_name, last_name, phone, email, total_package_size,
                 package_start_date, notes, trainer_id, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    client.first_name,
                    client.last_name,
                    client.phone,
                    client.email,
                    client.total_package_size,
                    client.package_start_date.isoformat() if client.package_start_date else None,
                    client.notes,
                    client.trainer_id,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            await db.commit()
            client.id = cursor.lastrowid
            client.created_at = client.updated_at = now
            logger.info("Created client %s (%s)", client.id, client.full_name)
            return cursor.lastrowid

    async def get(self, client_id: int) -> Client | None:
        """Get a client by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM clients WHERE id = ?", (client_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_client(row)

    async def list_all(self, trainer_id: int | None = None) -> list[Client]:
        """List clients alphabetically, optionally only one trainer's."""
        query = "SELECT * FROM clients"
        params: list = []
        if trainer_id is not None:
            query += " WHERE trainer_id = ?"
            params.append(trainer_id)
        query += " ORDER BY last_name, first_name"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_client(row) for row in rows]

    async def count(self, trainer_id: int | None = None) -> int:
        """Number of clients, optionally only one trainer's."""
        async with aiosqlite.connect(self.db_path) as db:
            if trainer_id is None:
                cursor = await db.execute("SELECT COUNT(*) FROM clients")
            else:
                cursor = await db.execute(
                    "SELECT COUNT(*) FROM clients WHERE trainer_id = ?", (trainer_id,)
                )
            row = await cursor.fetchone()
            return row[0]

    async def update(self, client: Client) -> None:
        """Update an existing client."""
        if client.id is None:
            raise ValueError("Client must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE clients SET
                    first_name = ?, last_name = ?, phone = ?, email = ?,
                    total_package_size = ?, package_start_date = ?, notes = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    client.first_name,
                    client.last_name,
                    client.phone,
                    client.email,
                    client.total_package_size,
                    client.package_start_date.isoformat() if client.package_start_date else None,
                    client.notes,
                    _now().isoformat(),
                    client.id,
                ),
            )
            await db.commit()

    async def delete(self, client_id: int) -> bool:
        """Delete a client and everything recorded for them.

        Returns:
            True if a client was deleted, False if none matched
        """
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                DELETE FROM photos WHERE group_id IN
                (SELECT id FROM photo_groups WHERE client_id = ?)
                """,
                (client_id,),
            )
            for table in ("photo_groups", "assessments", "measurements", "sessions"):
                await db.execute(
                    f"DELETE FROM {table} WHERE client_id = ?", (client_id,)
                )
            cursor = await db.execute("DELETE FROM clients WHERE id = ?", (client_id,))
            await db.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted client %s and related records", client_id)
        return deleted

    def _row_to_client(self, row: aiosqlite.Row) -> Client:
        """Convert a database row to a Client."""
        return Client(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            phone=row["phone"] or "",
            email=row["email"] or "",
            total_package_size=row["total_package_size"],
            package_start_date=(
                date.fromisoformat(row["package_start_date"])
                if row["package_start_date"]
                else None
            ),
            notes=row["notes"] or "",
            trainer_id=row["trainer_id"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class SessionRepository:
    """Repository for training sessions."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, session: Session) -> int:
        """Create a new session."""
        now = _now()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO sessions
                (client_id, scheduled_at, duration_minutes, status, notes,
                 created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session.client_id,
                    session.scheduled_at.isoformat(),
                    session.duration_minutes,
                    session.status.value,
                    session.notes,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            await db.commit()
            session.id = cursor.lastrowid
            session.created_at = session.updated_at = now
            return cursor.lastrowid

    async def get(self, session_id: int) -> Session | None:
        """Get a session by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM sessions WHERE id = ?", (session_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_session(row)

    async def find(
        self,
        client_id: int | None = None,
        status: SessionStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        trainer_id: int | None = None,
    ) -> list[Session]:
        """List sessions, earliest first, with optional filters.

        ``start`` and ``end`` are both inclusive. ``trainer_id`` keeps
        only sessions of that trainer's clients.
        """
        conditions = []
        params: list = []
        if client_id is not None:
            conditions.append("s.client_id = ?")
            params.append(client_id)
        if status is not None:
            conditions.append("s.status = ?")
            params.append(status.value)
        if start is not None:
            conditions.append("s.scheduled_at >= ?")
            params.append(start.isoformat())
        if end is not None:
            conditions.append("s.scheduled_at <= ?")
            params.append(end.isoformat())
        if trainer_id is not None:
            conditions.append("c.trainer_id = ?")
            params.append(trainer_id)

        query = "SELECT s.* FROM sessions s"
        if trainer_id is not None:
            query += " JOIN clients c ON c.id = s.client_id"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY s.scheduled_at ASC"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def list_by_client(self, trainer_id: int | None = None) -> dict[int, list[Session]]:
        """All sessions grouped by client ID."""
        grouped: dict[int, list[Session]] = {}
        for session in await self.find(trainer_id=trainer_id):
            grouped.setdefault(session.client_id, []).append(session)
        return grouped

    async def update(self, session: Session) -> None:
        """Update an existing session."""
        if session.id is None:
            raise ValueError("Session must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE sessions SET
                    scheduled_at = ?, duration_minutes = ?, status = ?, notes = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    session.scheduled_at.isoformat(),
                    session.duration_minutes,
                    session.status.value,
                    session.notes,
                    _now().isoformat(),
                    session.id,
                ),
            )
            await db.commit()

    async def update_status(self, session_id: int, status: SessionStatus) -> bool:
        """Set only the status of a session."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE sessions SET status = ?, updated_at = ?
                WHERE id = ?
                """,
                (status.value, _now().isoformat(), session_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    async def delete(self, session_id: int) -> bool:
        """Delete a session."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_session(self, row: aiosqlite.Row) -> Session:
        """Convert a database row to a Session."""
        return Session(
            id=row["id"],
            client_id=row["client_id"],
            scheduled_at=datetime.fromisoformat(row["scheduled_at"]),
            duration_minutes=row["duration_minutes"],
            status=SessionStatus(row["status"]),
            notes=row["notes"] or "",
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class MeasurementRepository:
    """Repository for body measurements."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, measurement: Measurement) -> int:
        """Store a measurement snapshot."""
        now = _now()
        columns = ["client_id", "measured_at", *MEASUREMENT_FIELDS, "notes", "created_at"]
        values = [
            measurement.client_id,
            measurement.measured_at.isoformat(),
            *(getattr(measurement, name) for name in MEASUREMENT_FIELDS),
            measurement.notes,
            now.isoformat(),
        ]
        placeholders = ", ".join("?" for _ in columns)

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"INSERT INTO measurements ({', '.join(columns)}) VALUES ({placeholders})",
                values,
            )
            await db.commit()
            measurement.id = cursor.lastrowid
            measurement.created_at = now
            return cursor.lastrowid

    async def get(self, measurement_id: int) -> Measurement | None:
        """Get a measurement by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM measurements WHERE id = ?", (measurement_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_measurement(row)

    async def list_for_client(self, client_id: int) -> list[Measurement]:
        """List a client's measurements, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM measurements WHERE client_id = ?
                ORDER BY measured_at DESC
                """,
                (client_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_measurement(row) for row in rows]

    async def delete(self, measurement_id: int) -> bool:
        """Delete a measurement."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM measurements WHERE id = ?", (measurement_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_measurement(self, row: aiosqlite.Row) -> Measurement:
        """Convert a database row to a Measurement."""
        return Measurement(
            id=row["id"],
            client_id=row["client_id"],
            measured_at=datetime.fromisoformat(row["measured_at"]),
            notes=row["notes"] or "",
            created_at=_parse_timestamp(row["created_at"]),
            **{name: row[name] for name in MEASUREMENT_FIELDS},
        )


class AssessmentRepository:
    """Repository for fitness assessments (one per client)."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, assessment: Assessment) -> int:
        """Create the client's assessment.

        Raises:
            ConflictError: if the client already has one
        """
        now = _now()
        async with aiosqlite.connect(self.db_path) as db:
            try:
                cursor = await db.execute(
                    """
                    INSERT INTO assessments
                    (client_id, answers, notes, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        assessment.client_id,
                        json.dumps(self._answers(assessment)),
                        assessment.notes,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise ConflictError(
                    f"Assessment already exists for client {assessment.client_id}"
                ) from e
            await db.commit()
            assessment.id = cursor.lastrowid
            assessment.created_at = assessment.updated_at = now
            return cursor.lastrowid

    async def get_by_client(self, client_id: int) -> Assessment | None:
        """Get a client's assessment."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM assessments WHERE client_id = ?", (client_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_assessment(row)

    async def update(self, assessment: Assessment) -> None:
        """Replace the answers of an existing assessment."""
        if assessment.id is None:
            raise ValueError("Assessment must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE assessments SET
                    answers = ?, notes = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    json.dumps(self._answers(assessment)),
                    assessment.notes,
                    _now().isoformat(),
                    assessment.id,
                ),
            )
            await db.commit()

    async def delete_by_client(self, client_id: int) -> bool:
        """Delete a client's assessment."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM assessments WHERE client_id = ?", (client_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    @staticmethod
    def _answers(assessment: Assessment) -> dict:
        """PARQ answers and ratings as a JSON-serializable dict."""
        answers = {name: getattr(assessment, name) for name in PARQ_FIELDS}
        answers.update({name: int(getattr(assessment, name)) for name in ALL_RATING_FIELDS})
        return answers

    def _row_to_assessment(self, row: aiosqlite.Row) -> Assessment:
        """Convert a database row to an Assessment."""
        data = json.loads(row["answers"])
        data["client_id"] = row["client_id"]
        data["notes"] = row["notes"] or ""
        return Assessment.from_dict(
            data,
            id=row["id"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class PhotoRepository:
    """Repository for progress photo groups."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create_group(self, group: PhotoGroup) -> int:
        """Store a photo group and its photos in one transaction."""
        group.validate()

        now = _now()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO photo_groups (client_id, notes, created_at) VALUES (?, ?, ?)",
                (group.client_id, group.notes, now.isoformat()),
            )
            group.id = cursor.lastrowid
            group.created_at = now
            for photo in group.photos:
                photo_cursor = await db.execute(
                    """
                    INSERT INTO photos
                    (group_id, url, file_name, file_size, content_type, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        group.id,
                        photo.url,
                        photo.file_name,
                        photo.file_size,
                        photo.content_type,
                        now.isoformat(),
                    ),
                )
                photo.id = photo_cursor.lastrowid
                photo.group_id = group.id
                photo.created_at = now
            await db.commit()
            return group.id

    async def get_group(self, group_id: int) -> PhotoGroup | None:
        """Get a photo group with its photos."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM photo_groups WHERE id = ?", (group_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            photos = await self._photos_for(db, [group_id])
            return self._row_to_group(row, photos.get(group_id, []))

    async def list_for_client(self, client_id: int) -> list[PhotoGroup]:
        """List a client's photo groups, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM photo_groups WHERE client_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (client_id,),
            )
            rows = await cursor.fetchall()
            photos = await self._photos_for(db, [row["id"] for row in rows])
            return [self._row_to_group(row, photos.get(row["id"], [])) for row in rows]

    async def delete_group(self, group_id: int) -> bool:
        """Delete a photo group and its photo records."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM photos WHERE group_id = ?", (group_id,))
            cursor = await db.execute(
                "DELETE FROM photo_groups WHERE id = ?", (group_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    async def _photos_for(
        self, db: aiosqlite.Connection, group_ids: list[int]
    ) -> dict[int, list[Photo]]:
        """Load photos for several groups, keyed by group ID."""
        if not group_ids:
            return {}
        placeholders = ", ".join("?" for _ in group_ids)
        cursor = await db.execute(
            f"SELECT * FROM photos WHERE group_id IN ({placeholders}) ORDER BY id",
            group_ids,
        )
        grouped: dict[int, list[Photo]] = {}
        for row in await cursor.fetchall():
            grouped.setdefault(row["group_id"], []).append(
                Photo(
                    id=row["id"],
                    group_id=row["group_id"],
                    url=row["url"],
                    file_name=row["file_name"],
                    file_size=row["file_size"],
                    content_type=row["content_type"] or "",
                    created_at=_parse_timestamp(row["created_at"]),
                )
            )
        return grouped

    def _row_to_group(self, row: aiosqlite.Row, photos: list[Photo]) -> PhotoGroup:
        """Convert a database row to a PhotoGroup."""
        return PhotoGroup(
            id=row["id"],
            client_id=row["client_id"],
            notes=row["notes"] or "",
            created_at=_parse_timestamp(row["created_at"]),
            photos=photos,
        )
