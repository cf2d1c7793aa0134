from __future__ import annotations

"""Folding finished games into a career.

A game result touches three sub-states: the profile's rolling average, the
week's challenge metrics, and (for head-to-head games) a rival record. This
module computes all three without mutating anything.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from career.types import Profile
from challenges.service import record_metrics
from challenges.types import (
    METRIC_GAMES,
    METRIC_GAMES_OVER_THRESHOLD,
    METRIC_LEAGUE_WINS,
    METRIC_SPARES,
    METRIC_STRIKE_STREAK,
    METRIC_STRIKES,
    METRIC_TOURNAMENT_TOP3,
    WeeklyChallengeSet,
)
from config import GameConstants
from economy.types import Cost
from errors import INVALID_GAME_RESULT, CareerError
from rankings.service import record_rival_result
from rankings.types import RankingState

from .types import PERFECT_GAME, GameResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RecordedGame:
    profile: Profile
    challenges: WeeklyChallengeSet
    rankings: RankingState


def game_cost(constants: GameConstants) -> Cost:
    return Cost(money=int(constants.GAME_LANE_FEE), energy=int(constants.GAME_ENERGY_COST))


def validate_result(result: GameResult) -> None:
    if not 0 <= int(result.score) <= PERFECT_GAME:
        raise CareerError(INVALID_GAME_RESULT, "score must be within [0, 300]", {"score": int(result.score)})
    for name in ("strikes", "spares", "max_strike_streak"):
        if int(getattr(result, name)) < 0:
            raise CareerError(INVALID_GAME_RESULT, f"{name} must be >= 0", {name: int(getattr(result, name))})
    if result.won is not None and not result.opponent_id:
        raise CareerError(INVALID_GAME_RESULT, "won requires opponent_id")


def challenge_metrics(result: GameResult, constants: GameConstants) -> Dict[str, int]:
    out: Dict[str, int] = {
        METRIC_GAMES: 1,
        METRIC_STRIKES: int(result.strikes),
        METRIC_SPARES: int(result.spares),
    }
    if int(result.score) > int(constants.HIGH_GAME_THRESHOLD):
        out[METRIC_GAMES_OVER_THRESHOLD] = 1
    if int(result.max_strike_streak) >= int(constants.STRIKE_STREAK_TARGET):
        out[METRIC_STRIKE_STREAK] = 1
    if result.league_win:
        out[METRIC_LEAGUE_WINS] = 1
    if result.tournament_top3:
        out[METRIC_TOURNAMENT_TOP3] = 1
    return out


def updated_average(profile: Profile, score: int, constants: GameConstants) -> Tuple[Tuple[int, ...], int]:
    """Rolling average over the last RECENT_SCORES_WINDOW scores."""
    window = max(1, int(constants.RECENT_SCORES_WINDOW))
    recent = (tuple(profile.recent_game_scores) + (int(score),))[-window:]
    return recent, int(round(sum(recent) / len(recent)))


def record_game_result(
    profile: Profile,
    challenges: WeeklyChallengeSet,
    rankings: RankingState,
    result: GameResult,
    constants: GameConstants,
) -> RecordedGame:
    validate_result(result)

    new_rankings = rankings
    if result.opponent_id and result.won is not None:
        new_rankings = record_rival_result(rankings, result.opponent_id, bool(result.won))

    recent, average = updated_average(profile, int(result.score), constants)
    new_profile = dataclasses.replace(
        profile,
        recent_game_scores=recent,
        bowling_average=average,
        total_games_played=int(profile.total_games_played) + 1,
    )
    new_challenges = record_metrics(challenges, challenge_metrics(result, constants))

    logger.info(
        "game recorded score=%d avg=%d games=%d",
        int(result.score),
        average,
        new_profile.total_games_played,
    )
    return RecordedGame(profile=new_profile, challenges=new_challenges, rankings=new_rankings)
