from __future__ import annotations

"""End-of-week injury / slump roll.

Only the career clock calls this. The roll looks at the energy the player
finished the week with: well-rested players never get hurt, exhausted ones
roll against a probability that grows linearly as energy approaches zero.
"""

import logging
import random
from typing import Optional, Sequence, Tuple

from config import GameConstants
from rng import weighted_choice

from .catalog import POSSIBLE_EFFECTS
from .types import EFFECT_INJURY, HEALTH_EFFECT_TYPES, ActiveEffect, EffectTemplate

logger = logging.getLogger(__name__)


def health_risk_probability(energy: int, constants: GameConstants) -> float:
    threshold = int(constants.LOW_ENERGY_THRESHOLD)
    e = int(energy)
    if threshold <= 0 or e >= threshold:
        return 0.0
    shortfall = float(threshold - max(0, e)) / float(threshold)
    p = float(constants.INJURY_RISK_BASE) + float(constants.INJURY_RISK_SCALE) * shortfall
    return max(0.0, min(float(constants.INJURY_RISK_CAP), p))


def _template_weight(t: EffectTemplate, constants: GameConstants) -> float:
    kind = float(constants.INJURY_WEIGHT) if t.type == EFFECT_INJURY else float(constants.SLUMP_WEIGHT)
    return float(t.weight) * kind


def roll_health_effect(
    effects: Sequence[ActiveEffect],
    energy: int,
    rng: random.Random,
    constants: GameConstants,
    *,
    season: int,
    week: int,
    seq: int,
    templates: Tuple[EffectTemplate, ...] = POSSIBLE_EFFECTS,
) -> Optional[ActiveEffect]:
    """Maybe create a new injury or slump.

    Returns None when energy is fine, when the health-effect cap is reached,
    or when the roll misses. ``seq`` makes the generated id unique per career.
    """
    active_health = sum(1 for e in effects if e.type in HEALTH_EFFECT_TYPES)
    if active_health >= int(constants.MAX_HEALTH_EFFECTS):
        return None

    p = health_risk_probability(energy, constants)
    if p <= 0.0:
        return None

    roll = rng.random()
    logger.debug("health roll energy=%d p=%.3f roll=%.3f", int(energy), p, roll)
    if roll >= p or not templates:
        return None

    template = weighted_choice(rng, list(templates), [_template_weight(t, constants) for t in templates])
    weeks = rng.randint(int(constants.EFFECT_WEEKS_MIN), int(constants.EFFECT_WEEKS_MAX))
    return ActiveEffect(
        id=f"{template.type}-s{int(season)}w{int(week)}-{int(seq)}",
        type=template.type,
        name=template.name,
        description=template.description,
        weeks_remaining=int(weeks),
        stat_deltas=dict(template.stat_deltas),
    )
