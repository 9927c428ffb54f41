"""Dashboard projection: today's sessions, upcoming sessions and weekly counts.

Recomputed from the full session list on each call. Data volumes are a
single studio's roster, so there is no caching or incremental update.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from ..models.session import Session, SessionStatus
from ..utils.dates import Weekday, start_of_day, start_of_week


@dataclass
class WeeklyStats:
    """Session counts by status for one calendar week."""

    week_start: datetime
    completed: int = 0
    no_show: int = 0
    cancelled: int = 0
    scheduled: int = 0

    @property
    def week_end(self) -> datetime:
        return self.week_start + timedelta(days=7)

    def to_dict(self) -> dict:
        return {
            "week_start": self.week_start.isoformat(),
            "completed": self.completed,
            "no_show": self.no_show,
            "cancelled": self.cancelled,
            "scheduled": self.scheduled,
        }


@dataclass
class Dashboard:
    """Derived dashboard views."""

    today: list[Session] = field(default_factory=list)
    upcoming: list[Session] = field(default_factory=list)
    weekly_stats: WeeklyStats | None = None


def build_dashboard(
    sessions: Iterable[Session],
    now: datetime,
    week_start: Weekday = Weekday.SUNDAY,
    upcoming_limit: int | None = None,
) -> Dashboard:
    """Bucket sessions relative to ``now``.

    Args:
        sessions: All sessions to consider
        now: Reference instant
        week_start: First day of the calendar week
        upcoming_limit: Keep at most this many upcoming sessions

    Returns:
        Dashboard with ``today`` (``[midnight, midnight + 24h)``),
        ``upcoming`` (scheduled sessions from tomorrow on, earliest
        first) and ``weekly_stats`` for the week containing ``now``.
    """
    if upcoming_limit is not None and upcoming_limit < 0:
        raise ValueError(f"upcoming_limit must not be negative, got {upcoming_limit}")

    today_start = start_of_day(now)
    tomorrow_start = today_start + timedelta(hours=24)
    weekly = WeeklyStats(week_start=start_of_week(now, week_start))

    today: list[Session] = []
    upcoming: list[Session] = []

    for session in sessions:
        scheduled_at = session.scheduled_at

        if today_start <= scheduled_at < tomorrow_start:
            today.append(session)
        elif scheduled_at >= tomorrow_start and session.status == SessionStatus.SCHEDULED:
            upcoming.append(session)

        if weekly.week_start <= scheduled_at < weekly.week_end:
            if session.status == SessionStatus.COMPLETED:
                weekly.completed += 1
            elif session.status == SessionStatus.NO_SHOW:
                weekly.no_show += 1
            elif session.status == SessionStatus.CANCELLED:
                weekly.cancelled += 1
            else:
                weekly.scheduled += 1

    today.sort(key=lambda s: s.scheduled_at)
    upcoming.sort(key=lambda s: s.scheduled_at)
    if upcoming_limit is not None:
        upcoming = upcoming[:upcoming_limit]

    return Dashboard(today=today, upcoming=upcoming, weekly_stats=weekly)
