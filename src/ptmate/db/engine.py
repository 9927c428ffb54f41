"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "ptmate.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS trainers (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL
            )
        """)

        # Only the SHA-256 hash of each bearer token is stored
        await db.execute("""
            CREATE TABLE IF NOT EXISTS auth_tokens (
                token_hash TEXT PRIMARY KEY,
                trainer_id INTEGER NOT NULL,
                created_at TIMESTAMP NOT NULL,
                expires_at TIMESTAMP NOT NULL,
                FOREIGN KEY (trainer_id) REFERENCES trainers(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS clients (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                phone TEXT DEFAULT '',
                email TEXT DEFAULT '',
                total_package_size INTEGER NOT NULL DEFAULT 0,
                package_start_date TEXT,
                notes TEXT DEFAULT '',
                trainer_id INTEGER,
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL,
                FOREIGN KEY (trainer_id) REFERENCES trainers(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                client_id INTEGER NOT NULL,
                scheduled_at TIMESTAMP NOT NULL,
                duration_minutes INTEGER NOT NULL DEFAULT 60,
                status TEXT NOT NULL DEFAULT 'scheduled',
                notes TEXT DEFAULT '',
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL,
                FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS measurements (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                client_id INTEGER NOT NULL,
                measured_at TIMESTAMP NOT NULL,
                weight_kg REAL,
                neck_cm REAL,
                shoulder_cm REAL,
                chest_cm REAL,
                waist_cm REAL,
                hip_cm REAL,
                right_arm_cm REAL,
                left_arm_cm REAL,
                right_leg_cm REAL,
                left_leg_cm REAL,
                notes TEXT DEFAULT '',
                created_at TIMESTAMP NOT NULL,
                FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE CASCADE
            )
        """)

        # One assessment per client; ratings stored as a JSON object
        await db.execute("""
            CREATE TABLE IF NOT EXISTS assessments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                client_id INTEGER NOT NULL UNIQUE,
                answers TEXT NOT NULL,
                notes TEXT DEFAULT '',
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL,
                FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS photo_groups (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                client_id INTEGER NOT NULL,
                notes TEXT DEFAULT '',
                created_at TIMESTAMP NOT NULL,
                FOREIGN KEY (client_id) REFERENCES clients(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS photos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                group_id INTEGER NOT NULL,
                url TEXT NOT NULL,
                file_name TEXT NOT NULL,
                file_size INTEGER DEFAULT 0,
                content_type TEXT DEFAULT '',
                created_at TIMESTAMP NOT NULL,
                FOREIGN KEY (group_id) REFERENCES photo_groups(id) ON DELETE CASCADE
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_clients_trainer
            ON clients(trainer_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_sessions_client
            ON sessions(client_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_sessions_scheduled_at
            ON sessions(scheduled_at)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_measurements_client
            ON measurements(client_id, measured_at)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_photo_groups_client
            ON photo_groups(client_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_photos_group
            ON photos(group_id)
        """)

        await db.commit()

    logger.debug("Database schema ready at %s", db_path)
