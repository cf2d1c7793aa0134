from __future__ import annotations

"""Quick training.

A drill is a spending path: its energy goes through the economy guard before
the stat moves. Gains shrink as the stat climbs, so drills matter most early
in a career.
"""

import dataclasses
import logging
from typing import Mapping, Tuple

from career.types import Profile
from config import GameConstants
from economy.guard import apply_cost
from economy.types import Cost
from errors import NOT_APPLICABLE, UNKNOWN_TRAINING, CareerError

from .catalog import QUICK_TRAINING_BY_STAT
from .types import TrainingOption, TrainingSession

logger = logging.getLogger(__name__)


def training_gain(value: int, constants: GameConstants) -> int:
    ceiling = int(constants.TRAINING_GAIN_CEILING)
    return max(1, (ceiling - int(value)) // int(constants.TRAINING_GAIN_DIVISOR))


def train(
    profile: Profile,
    stat: str,
    constants: GameConstants,
    *,
    options: Mapping[str, TrainingOption] = QUICK_TRAINING_BY_STAT,
) -> Tuple[Profile, TrainingSession]:
    """Run one drill on ``stat``.

    Errors (checked in this order, nothing is charged on failure):
    - UNKNOWN_TRAINING: no drill for that stat
    - NOT_APPLICABLE: the stat is already at STAT_MAX
    - INSUFFICIENT_RESOURCES: not enough energy
    """
    option = options.get(str(stat))
    if option is None:
        raise CareerError(UNKNOWN_TRAINING, "no training drill for that stat", {"stat": stat})

    before = profile.stat(option.stat)
    if before >= int(constants.STAT_MAX):
        raise CareerError(NOT_APPLICABLE, "stat is already maxed", {"stat": option.stat, "value": before})

    paid = apply_cost(Cost(energy=int(option.energy_cost)), profile, reason=f"training:{option.stat}")
    after = min(int(constants.STAT_MAX), before + training_gain(before, constants))
    stats = dict(paid.stats)
    stats[option.stat] = after

    session = TrainingSession(stat=option.stat, before=before, after=after, energy_cost=int(option.energy_cost))
    logger.debug("training %s %d -> %d", option.stat, before, after)
    return dataclasses.replace(paid, stats=stats), session
