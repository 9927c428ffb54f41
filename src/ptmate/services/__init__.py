"""Domain services for ptmate."""

from .assessment_scoring import (
    AssessmentScore,
    PostureBand,
    posture_band,
    requires_attention,
    score_assessment,
    score_posture,
)
from .client_stats import ClientStats, calculate_client_stats, client_summary
from .dashboard import Dashboard, WeeklyStats, build_dashboard

__all__ = [
    "AssessmentScore",
    "ClientStats",
    "Dashboard",
    "PostureBand",
    "WeeklyStats",
    "build_dashboard",
    "calculate_client_stats",
    "client_summary",
    "posture_band",
    "requires_attention",
    "score_assessment",
    "score_posture",
]
