"""Assessment scoring: posture total, qualitative band and PARQ flag.

Only the posture category is scored. Push-up, squat, balance and
shoulder ratings are validated and stored but have no aggregate.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from ..models.assessment import (
    ALL_RATING_FIELDS,
    POSTURE_FIELDS,
    Assessment,
    Rating,
)

logger = logging.getLogger(__name__)

POSTURE_MIN = len(POSTURE_FIELDS) * Rating.POOR
POSTURE_MAX = len(POSTURE_FIELDS) * Rating.GOOD


class PostureBand(str, Enum):
    """Qualitative band for a posture score."""

    POOR = "poor"  # 5-6
    AVERAGE = "average"  # 7-12
    GOOD = "good"  # 13-15


@dataclass(frozen=True)
class AssessmentScore:
    """Scoring result for one assessment."""

    posture_score: int
    posture_band: PostureBand
    requires_attention: bool

    def to_dict(self) -> dict:
        return {
            "posture_score": self.posture_score,
            "posture_band": self.posture_band.value,
            "requires_attention": self.requires_attention,
        }


def validate_ratings(ratings: Mapping[str, object]) -> dict[str, Rating]:
    """Convert every rating to :class:`Rating`.

    Raises:
        ValidationError: naming the first field outside {1, 2, 3}
    """
    return {name: Rating.parse(name, value) for name, value in ratings.items()}


def score_posture(head_neck, shoulders, lphc, knee, foot) -> int:
    """Sum the five posture ratings (5-15)."""
    values = (head_neck, shoulders, lphc, knee, foot)
    ratings = validate_ratings(dict(zip(POSTURE_FIELDS, values)))
    return sum(int(r) for r in ratings.values())


def posture_band(score: int) -> PostureBand:
    """Map a posture score to its band."""
    if score <= 6:
        return PostureBand.POOR
    if score <= 12:
        return PostureBand.AVERAGE
    return PostureBand.GOOD


def requires_attention(parq_answers: Iterable[bool]) -> bool:
    """True if any PARQ answer is "yes".

    A flagged client should be cleared by a doctor before physical testing.
    """
    return any(parq_answers)


def score_assessment(assessment: Assessment) -> AssessmentScore:
    """Validate all ratings, then score posture and check the PARQ answers."""
    validate_ratings({name: getattr(assessment, name) for name in ALL_RATING_FIELDS})

    score = score_posture(*(getattr(assessment, name) for name in POSTURE_FIELDS))
    attention = requires_attention(assessment.parq_answers)
    if attention:
        logger.info(
            "Assessment for client %s has PARQ risk answers", assessment.client_id
        )

    return AssessmentScore(
        posture_score=score,
        posture_band=posture_band(score),
        requires_attention=attention,
    )
