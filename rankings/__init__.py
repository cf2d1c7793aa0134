"""Ranking engine: regional leaderboards, player rank and rivals."""

from .service import (
    effective_average,
    eligible_regions,
    latest_snapshot,
    rating_points,
    record_rival_result,
    snapshot,
    unlocked_regions,
)
from .types import (
    REGIONS,
    HeadToHead,
    PlayerRanking,
    RankedBowler,
    RankingsSnapshot,
    RankingState,
    Rival,
)

__all__ = [
    "REGIONS",
    "HeadToHead",
    "PlayerRanking",
    "RankedBowler",
    "RankingState",
    "RankingsSnapshot",
    "Rival",
    "effective_average",
    "eligible_regions",
    "latest_snapshot",
    "rating_points",
    "record_rival_result",
    "snapshot",
    "unlocked_regions",
]
