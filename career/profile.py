from __future__ import annotations

"""Career creation and status transitions of the profile."""

import dataclasses
import logging
from typing import Dict, Mapping, Tuple

from challenges.service import install_weekly_challenges
from config import GameConstants
from economy.guard import apply_cost
from economy.types import Cost
from errors import INVALID_PROFILE, NOT_ELIGIBLE, CareerError
from rankings.service import snapshot
from rankings.types import RankingState
from rng import rng_for

from .state import CareerState
from .types import BOWLING_STYLES, HANDEDNESS, REPUTATION, NewProfileData, Profile

logger = logging.getLogger(__name__)


# Starter stat ranges: stat -> (low, spread). Value = low + randrange(spread).
STARTER_STAT_RANGES: Mapping[str, Tuple[int, int]] = {
    "throwPower": (35, 10),
    "accuracy": (30, 10),
    "hookControl": (25, 10),
    "revRate": (30, 10),
    "speedControl": (35, 10),
    "consistency": (30, 10),
    "spareShooting": (35, 10),
    "mentalToughness": (40, 10),
    "laneReading": (25, 10),
    "equipmentKnowledge": (20, 5),
    "stamina": (50, 10),
    "charisma": (30, 15),
}


def generate_starter_stats(base_seed: int, constants: GameConstants) -> Dict[str, int]:
    rng = rng_for(base_seed, "starter-stats")
    stats: Dict[str, int] = {}
    for name, (low, spread) in STARTER_STAT_RANGES.items():
        value = int(low) + rng.randrange(int(spread))
        stats[name] = max(int(constants.STAT_MIN), min(int(constants.STAT_MAX), value))
    stats[REPUTATION] = int(constants.STARTING_REPUTATION)
    return stats


def validate_new_profile(data: NewProfileData) -> None:
    if not str(data.first_name or "").strip() or not str(data.last_name or "").strip():
        raise CareerError(INVALID_PROFILE, "first and last name are required")
    if data.handedness not in HANDEDNESS:
        raise CareerError(INVALID_PROFILE, "unknown handedness", {"handedness": data.handedness, "allowed": list(HANDEDNESS)})
    if data.bowling_style not in BOWLING_STYLES:
        raise CareerError(
            INVALID_PROFILE,
            "unknown bowling style",
            {"bowling_style": data.bowling_style, "allowed": list(BOWLING_STYLES)},
        )


def new_career_state(data: NewProfileData, base_seed: int, constants: GameConstants) -> CareerState:
    """Fresh career at season 1, week 1 with week-1 challenges and rankings."""
    validate_new_profile(data)
    profile = Profile(
        first_name=str(data.first_name).strip(),
        last_name=str(data.last_name).strip(),
        handedness=data.handedness,
        bowling_style=data.bowling_style,
        is_professional=False,
        money=int(constants.STARTING_MONEY),
        energy=int(constants.STARTING_ENERGY),
        stats=generate_starter_stats(base_seed, constants),
        current_season=1,
        current_week=1,
        alley_environment=dict(data.alley_environment or {}),
    )
    challenges = install_weekly_challenges(profile, rng_for(base_seed, "challenges", 1, 1), constants)
    rankings, _ = snapshot(RankingState(), profile, (), base_seed, constants)
    logger.info("new career %s seed=%d", profile.name, int(base_seed))
    return CareerState(
        profile=profile,
        challenges=challenges,
        rankings=rankings,
        base_seed=int(base_seed),
    )


def pro_application_cost(constants: GameConstants) -> Cost:
    return Cost(money=int(constants.PRO_APPLICATION_COST), energy=int(constants.PRO_APPLICATION_ENERGY))


def go_professional(profile: Profile, constants: GameConstants) -> Profile:
    """Turn pro: needs the game count and average, then pays the application fee."""
    if profile.is_professional:
        raise CareerError(NOT_ELIGIBLE, "already professional")
    games = int(profile.total_games_played)
    if games < int(constants.PRO_GAMES_REQUIRED):
        raise CareerError(
            NOT_ELIGIBLE,
            "not enough games played",
            {"games": games, "required": int(constants.PRO_GAMES_REQUIRED)},
        )
    avg = int(profile.bowling_average or 0)
    if avg < int(constants.PRO_AVERAGE_THRESHOLD):
        raise CareerError(
            NOT_ELIGIBLE,
            "bowling average below the pro threshold",
            {"average": avg, "required": int(constants.PRO_AVERAGE_THRESHOLD)},
        )
    paid = apply_cost(pro_application_cost(constants), profile, reason="pro-application")
    logger.info("%s turned professional (avg=%d games=%d)", profile.name, avg, games)
    return dataclasses.replace(paid, is_professional=True)
