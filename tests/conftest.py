"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from ptmate.config import Settings
from ptmate.db.engine import init_db
from ptmate.models.client import Client
from ptmate.models.session import Session, SessionStatus


@pytest.fixture
def temp_db_path():
    """Create a temporary, initialized database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        asyncio.run(init_db(db_path))
        yield db_path


@pytest.fixture
def temp_settings(tmp_path, monkeypatch):
    """Settings pointing at a temporary data directory, also exported to the environment."""
    monkeypatch.setenv("PTMATE_DATA_DIR", str(tmp_path))
    return Settings(data_dir=tmp_path)


@pytest.fixture
def sample_client():
    """Create a sample client for testing."""
    return Client(
        first_name="Jane",
        last_name="Doe",
        phone="555-0100",
        email="jane@example.com",
        total_package_size=10,
    )


@pytest.fixture
def make_session():
    """Factory for sessions with sensible defaults."""

    def _make(
        scheduled_at: datetime,
        status: SessionStatus = SessionStatus.SCHEDULED,
        client_id: int = 1,
    ) -> Session:
        return Session(client_id=client_id, scheduled_at=scheduled_at, status=status)

    return _make
