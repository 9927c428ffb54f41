"""Per-client session counters derived from session history.

Counters are recomputed from the session list on every call and never
stored, so they cannot drift from the sessions they describe.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from ..models.client import Client
from ..models.session import Session, SessionStatus


@dataclass(frozen=True)
class ClientStats:
    """Session counts for one client's package."""

    total_package_size: int
    scheduled: int = 0
    completed: int = 0
    no_show: int = 0
    cancelled: int = 0

    @property
    def remaining(self) -> int:
        """Sessions left in the package.

        Only completed sessions consume credit. The value goes negative
        when more sessions were completed than purchased.
        """
        return self.total_package_size - self.completed

    @property
    def total_sessions(self) -> int:
        return self.scheduled + self.completed + self.no_show + self.cancelled

    @property
    def progress_percentage(self) -> float:
        """Completed sessions as a percentage of the package (0 for an empty package)."""
        if self.total_package_size == 0:
            return 0.0
        return self.completed / self.total_package_size * 100

    def count(self, status: SessionStatus) -> int:
        return {
            SessionStatus.SCHEDULED: self.scheduled,
            SessionStatus.COMPLETED: self.completed,
            SessionStatus.NO_SHOW: self.no_show,
            SessionStatus.CANCELLED: self.cancelled,
        }[status]

    def to_dict(self) -> dict:
        return {
            "remaining_sessions": self.remaining,
            "completed_sessions": self.completed,
            "no_show_sessions": self.no_show,
            "cancelled_sessions": self.cancelled,
            "scheduled_sessions": self.scheduled,
            "progress_percentage": round(self.progress_percentage, 1),
        }


def calculate_client_stats(
    total_package_size: int, sessions: Iterable[Session]
) -> ClientStats:
    """Count a client's sessions by status in a single pass."""
    counts = Counter(session.status for session in sessions)
    return ClientStats(
        total_package_size=total_package_size,
        scheduled=counts[SessionStatus.SCHEDULED],
        completed=counts[SessionStatus.COMPLETED],
        no_show=counts[SessionStatus.NO_SHOW],
        cancelled=counts[SessionStatus.CANCELLED],
    )


def client_summary(client: Client, sessions: Iterable[Session]) -> dict:
    """Client record merged with its derived session counters."""
    stats = calculate_client_stats(client.total_package_size, sessions)
    return {**client.to_dict(), **stats.to_dict()}
