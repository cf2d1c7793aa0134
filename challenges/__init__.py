"""Weekly challenge tracker."""

from .catalog import CHALLENGE_TEMPLATES, CHALLENGE_TEMPLATES_BY_ID
from .service import (
    claim_reward,
    install_weekly_challenges,
    record_metric,
    record_metrics,
    record_progress,
)
from .types import ChallengeReward, ChallengeTemplate, WeeklyChallenge, WeeklyChallengeSet

__all__ = [
    "CHALLENGE_TEMPLATES",
    "CHALLENGE_TEMPLATES_BY_ID",
    "ChallengeReward",
    "ChallengeTemplate",
    "WeeklyChallenge",
    "WeeklyChallengeSet",
    "claim_reward",
    "install_weekly_challenges",
    "record_metric",
    "record_metrics",
    "record_progress",
]
