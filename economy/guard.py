from __future__ import annotations

"""Economy guard: the single gate for spending and crediting resources.

Every spending path (recovery actions, event choices, games, the pro
application) calls :func:`apply_cost`; every payout (challenge rewards, event
outcomes) calls :func:`grant`. Both are pure: they return a new Profile and
never mutate the one passed in.
"""

import dataclasses
import logging
from typing import Any, Mapping, Optional, Union

from career.types import REPUTATION, Profile
from config import GameConstants
from errors import INSUFFICIENT_RESOURCES, INVALID_COST, CareerError

from .types import Cost

logger = logging.getLogger(__name__)

CostLike = Union[Cost, Mapping[str, Any], None]


def _clamp_int(x: int, lo: int, hi: int) -> int:
    if x < lo:
        return int(lo)
    if x > hi:
        return int(hi)
    return int(x)


def as_cost(cost: CostLike) -> Cost:
    if isinstance(cost, Cost):
        return cost
    return Cost.from_mapping(cost)


def can_afford(cost: CostLike, profile: Profile) -> bool:
    """True iff the profile holds at least ``cost`` money and energy."""
    c = as_cost(cost)
    return int(profile.money) >= int(c.money) and int(profile.energy) >= int(c.energy)


def apply_cost(cost: CostLike, profile: Profile, *, reason: str = "") -> Profile:
    """Deduct ``cost`` from ``profile`` or raise INSUFFICIENT_RESOURCES.

    Both fields are deducted together; a failed call returns nothing and
    leaves the caller's profile as it was.
    """
    c = as_cost(cost)
    if c.money < 0 or c.energy < 0:
        raise CareerError(INVALID_COST, "cost components must be >= 0", {"cost": c.to_dict()})
    if not can_afford(c, profile):
        raise CareerError(
            INSUFFICIENT_RESOURCES,
            "not enough money or energy",
            {
                "cost": c.to_dict(),
                "money": int(profile.money),
                "energy": int(profile.energy),
                "reason": reason or None,
            },
        )
    if c.is_free:
        return profile
    logger.debug("apply_cost reason=%s money=-%d energy=-%d", reason, c.money, c.energy)
    return dataclasses.replace(
        profile,
        money=int(profile.money) - int(c.money),
        energy=int(profile.energy) - int(c.energy),
    )


def grant(
    profile: Profile,
    constants: GameConstants,
    *,
    money: int = 0,
    energy: int = 0,
    reputation: int = 0,
    cosmetic_tokens: int = 0,
) -> Profile:
    """Credit resources with clamping.

    - energy is clamped to [0, MAX_ENERGY]
    - reputation is clamped to [0, REPUTATION_MAX]
    - money never drops below 0 (costs belong in apply_cost, not here)
    """
    if not (money or energy or reputation or cosmetic_tokens):
        return profile

    stats = dict(profile.stats)
    if reputation:
        stats[REPUTATION] = _clamp_int(
            int(stats.get(REPUTATION, 0)) + int(reputation), 0, int(constants.REPUTATION_MAX)
        )
    return dataclasses.replace(
        profile,
        money=max(0, int(profile.money) + int(money)),
        energy=_clamp_int(int(profile.energy) + int(energy), 0, int(constants.MAX_ENERGY)),
        stats=stats,
        cosmetic_tokens=max(0, int(profile.cosmetic_tokens) + int(cosmetic_tokens)),
    )


def affordability(cost: CostLike, profile: Profile) -> Optional[str]:
    """Short reason string when ``cost`` is unaffordable, else None (UI hint)."""
    c = as_cost(cost)
    if profile.money < c.money:
        return "money"
    if profile.energy < c.energy:
        return "energy"
    return None
