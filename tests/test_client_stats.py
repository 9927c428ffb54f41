"""Tests for per-client session counters."""

from datetime import datetime, timedelta

import pytest

from ptmate.models.session import Session, SessionStatus
from ptmate.services.client_stats import calculate_client_stats, client_summary


def _sessions(*statuses: SessionStatus) -> list[Session]:
    start = datetime(2026, 3, 2, 9, 0)
    return [
        Session(client_id=1, scheduled_at=start + timedelta(days=i), status=status)
        for i, status in enumerate(statuses)
    ]


class TestCalculateClientStats:
    """Tests for calculate_client_stats."""

    def test_counts_by_status(self):
        """Package of 10 with two completed sessions leaves 8."""
        sessions = _sessions(
            SessionStatus.COMPLETED,
            SessionStatus.COMPLETED,
            SessionStatus.NO_SHOW,
            SessionStatus.SCHEDULED,
        )
        stats = calculate_client_stats(10, sessions)

        assert stats.completed == 2
        assert stats.no_show == 1
        assert stats.scheduled == 1
        assert stats.cancelled == 0
        assert stats.remaining == 8

    def test_empty_session_list(self):
        """No sessions: all zero and the full package remains."""
        stats = calculate_client_stats(12, [])

        assert stats.scheduled == stats.completed == stats.no_show == stats.cancelled == 0
        assert stats.remaining == 12
        assert stats.total_sessions == 0

    def test_only_completed_sessions_consume_credit(self):
        """Scheduled, cancelled and no-show sessions leave the balance alone."""
        sessions = _sessions(
            SessionStatus.NO_SHOW,
            SessionStatus.CANCELLED,
            SessionStatus.SCHEDULED,
            SessionStatus.NO_SHOW,
        )
        stats = calculate_client_stats(5, sessions)

        assert stats.remaining == 5

    def test_remaining_goes_negative(self):
        """Completing more sessions than purchased is not clamped."""
        sessions = _sessions(*[SessionStatus.COMPLETED] * 4)
        stats = calculate_client_stats(3, sessions)

        assert stats.remaining == -1

    @pytest.mark.parametrize(
        "statuses",
        [
            [],
            [SessionStatus.SCHEDULED],
            [SessionStatus.CANCELLED, SessionStatus.CANCELLED, SessionStatus.COMPLETED],
            list(SessionStatus) * 3,
        ],
    )
    def test_counts_sum_to_session_count(self, statuses):
        """Every session lands in exactly one counter."""
        sessions = _sessions(*statuses)
        stats = calculate_client_stats(10, sessions)

        assert stats.total_sessions == len(sessions)
        assert sum(stats.count(status) for status in SessionStatus) == len(sessions)

    def test_accepts_a_generator(self):
        """Sessions are consumed in a single pass."""
        sessions = _sessions(SessionStatus.COMPLETED, SessionStatus.SCHEDULED)
        stats = calculate_client_stats(4, (s for s in sessions))

        assert stats.completed == 1
        assert stats.scheduled == 1


class TestProgressPercentage:
    """Tests for ClientStats.progress_percentage."""

    def test_zero_package_is_zero_percent(self):
        """An empty package does not divide by zero."""
        stats = calculate_client_stats(0, _sessions(SessionStatus.COMPLETED))

        assert stats.progress_percentage == 0.0
        assert stats.remaining == -1

    def test_percentage_of_package_used(self):
        stats = calculate_client_stats(
            8, _sessions(SessionStatus.COMPLETED, SessionStatus.COMPLETED)
        )

        assert stats.progress_percentage == 25.0


class TestClientSummary:
    """Tests for client_summary."""

    def test_merges_client_and_counters(self, sample_client):
        sample_client.id = 7
        sessions = _sessions(SessionStatus.COMPLETED, SessionStatus.CANCELLED)

        summary = client_summary(sample_client, sessions)

        assert summary["id"] == 7
        assert summary["first_name"] == "Jane"
        assert summary["remaining_sessions"] == 9
        assert summary["completed_sessions"] == 1
        assert summary["cancelled_sessions"] == 1
        assert summary["no_show_sessions"] == 0
        assert summary["scheduled_sessions"] == 0
