from __future__ import annotations

"""Challenge tracker.

Policy: a new set replaces the old one every week. Unclaimed challenges from
the previous week lapse; nothing carries over, not even completed-but-
unclaimed rewards.
"""

import dataclasses
import logging
import random
from typing import List, Mapping, Tuple

from career.types import Profile
from config import GameConstants
from economy.guard import grant
from errors import (
    ALREADY_CLAIMED,
    INVALID_PROGRESS,
    NOT_COMPLETE,
    UNKNOWN_CHALLENGE,
    CareerError,
)
from rng import weighted_choice

from .catalog import CHALLENGE_TEMPLATES
from .types import ChallengeTemplate, WeeklyChallenge, WeeklyChallengeSet

logger = logging.getLogger(__name__)


def _challenge_from_template(t: ChallengeTemplate, season: int, week: int) -> WeeklyChallenge:
    return WeeklyChallenge(
        id=f"{t.id}-s{int(season)}w{int(week)}",
        metric=t.metric,
        name=t.name,
        description=t.description,
        target=int(t.target),
        reward=t.reward,
        progress=0,
        claimed=False,
    )


def install_weekly_challenges(
    profile: Profile,
    rng: random.Random,
    constants: GameConstants,
    *,
    templates: Tuple[ChallengeTemplate, ...] = CHALLENGE_TEMPLATES,
) -> WeeklyChallengeSet:
    """Draw this week's challenge set for the profile's current week.

    Draws are weighted and without replacement by metric, so no two
    challenges in the set share an objective type.
    """
    pool: List[ChallengeTemplate] = list(templates)
    picked: List[ChallengeTemplate] = []
    want = int(constants.CHALLENGES_PER_WEEK)
    while pool and len(picked) < want:
        t = weighted_choice(rng, pool, [float(x.weight) for x in pool])
        picked.append(t)
        pool = [x for x in pool if x.metric != t.metric]

    season = int(profile.current_season)
    week = int(profile.current_week)
    out = WeeklyChallengeSet(
        season=season,
        week=week,
        challenges=tuple(_challenge_from_template(t, season, week) for t in picked),
    )
    logger.debug("challenges installed s%dw%d: %s", season, week, [c.id for c in out.challenges])
    return out


def _replace_challenge(challenges: WeeklyChallengeSet, updated: WeeklyChallenge) -> WeeklyChallengeSet:
    items = tuple(updated if c.id == updated.id else c for c in challenges.challenges)
    return dataclasses.replace(challenges, challenges=items)


def _require(challenges: WeeklyChallengeSet, challenge_id: str) -> WeeklyChallenge:
    c = challenges.get(str(challenge_id))
    if c is None:
        raise CareerError(UNKNOWN_CHALLENGE, "no challenge with that id this week", {"challenge_id": challenge_id})
    return c


def record_progress(challenges: WeeklyChallengeSet, challenge_id: str, delta: int) -> WeeklyChallengeSet:
    """Add ``delta`` to one challenge, capped at its target."""
    if int(delta) < 0:
        raise CareerError(INVALID_PROGRESS, "progress delta must be >= 0", {"delta": int(delta)})
    c = _require(challenges, challenge_id)
    progress = min(int(c.target), int(c.progress) + int(delta))
    if progress == int(c.progress):
        return challenges
    return _replace_challenge(challenges, dataclasses.replace(c, progress=progress))


def record_metric(challenges: WeeklyChallengeSet, metric: str, amount: int = 1) -> WeeklyChallengeSet:
    """Add ``amount`` to every unclaimed challenge tracking ``metric``."""
    if int(amount) < 0:
        raise CareerError(INVALID_PROGRESS, "progress amount must be >= 0", {"metric": metric, "amount": int(amount)})
    out = challenges
    for c in challenges.challenges:
        if c.metric == metric and not c.claimed:
            out = record_progress(out, c.id, int(amount))
    return out


def record_metrics(challenges: WeeklyChallengeSet, amounts: Mapping[str, int]) -> WeeklyChallengeSet:
    out = challenges
    for metric, amount in amounts.items():
        if int(amount):
            out = record_metric(out, metric, int(amount))
    return out


def claim_reward(
    challenges: WeeklyChallengeSet,
    challenge_id: str,
    profile: Profile,
    constants: GameConstants,
) -> Tuple[WeeklyChallengeSet, Profile]:
    """Pay out a completed challenge exactly once.

    ALREADY_CLAIMED is checked before NOT_COMPLETE: a claimed challenge is
    always complete, and a second claim must report the claim.
    """
    c = _require(challenges, challenge_id)
    if c.claimed:
        raise CareerError(ALREADY_CLAIMED, "reward already claimed", {"challenge_id": c.id})
    if not c.is_complete:
        raise CareerError(
            NOT_COMPLETE,
            "challenge not complete",
            {"challenge_id": c.id, "progress": int(c.progress), "target": int(c.target)},
        )

    r = c.reward
    new_profile = grant(
        profile,
        constants,
        money=int(r.cash),
        energy=int(r.energy),
        reputation=int(r.reputation),
        cosmetic_tokens=int(r.cosmetic_token),
    )
    logger.info("challenge claimed id=%s reward=%s", c.id, r.to_dict())
    return _replace_challenge(challenges, dataclasses.replace(c, claimed=True)), new_profile
