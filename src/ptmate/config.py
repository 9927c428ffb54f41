"""Runtime configuration read from the environment."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .utils.dates import Weekday

logger = logging.getLogger(__name__)

# Default data directory (database and uploaded photos)
DATA_DIR = Path(__file__).parent.parent.parent / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Application settings.

    Every value has a default so the app runs without any environment set.
    """

    data_dir: Path = DATA_DIR
    week_start: Weekday = Weekday.SUNDAY
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "ptmate.db"

    @property
    def upload_dir(self) -> Path:
        return self.data_dir / "uploads"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from ``PTMATE_*`` environment variables.

        Invalid values are logged and replaced by the default.
        """
        env = os.environ if environ is None else environ
        settings = cls()

        data_dir = env.get("PTMATE_DATA_DIR", "").strip()
        if data_dir:
            settings.data_dir = Path(data_dir).expanduser()

        week_start = env.get("PTMATE_WEEK_START", "").strip()
        if week_start:
            try:
                settings.week_start = Weekday.parse(week_start)
            except ValueError:
                logger.warning(
                    "Invalid PTMATE_WEEK_START=%r; using default %s.",
                    week_start,
                    settings.week_start.name.lower(),
                )

        origins = env.get("PTMATE_CORS_ORIGINS", "").strip()
        if origins:
            settings.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]

        log_level = env.get("PTMATE_LOG_LEVEL", "").strip().upper()
        if log_level:
            if log_level in LOG_LEVELS:
                settings.log_level = log_level
            else:
                logger.warning(
                    "Invalid PTMATE_LOG_LEVEL=%r; using default %s.",
                    log_level,
                    settings.log_level,
                )

        return settings


def get_settings() -> Settings:
    """Current settings from the process environment."""
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger for the server process."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
