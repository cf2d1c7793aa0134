from __future__ import annotations

"""Effect ledger operations.

The ledger is a plain tuple of :class:`ActiveEffect` in insertion order. All
functions are pure and return a new tuple, so the engine can swap state only
after every step of a command has succeeded.
"""

import dataclasses
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from career.types import SKILL_STATS, Profile
from config import GameConstants
from economy.guard import apply_cost
from economy.types import Cost
from errors import (
    INVALID_EFFECT,
    NOT_APPLICABLE,
    UNKNOWN_ACTION,
    UNKNOWN_EFFECT,
    CareerError,
)

from .catalog import RECOVERY_ACTIONS, RECOVERY_ACTIONS_BY_ID
from .types import EVENT_EFFECT_TYPES, ActiveEffect, RecoveryAction

logger = logging.getLogger(__name__)

Ledger = Tuple[ActiveEffect, ...]


def add_effect(effects: Sequence[ActiveEffect], effect: ActiveEffect) -> Ledger:
    """Insert ``effect``; an existing entry with the same id is replaced.

    The replacement is appended, so it takes the newest insertion position.
    """
    if int(effect.weeks_remaining) < 1:
        raise CareerError(
            INVALID_EFFECT,
            "effect must last at least one week",
            {"effect_id": effect.id, "weeks_remaining": int(effect.weeks_remaining)},
        )
    kept = [e for e in effects if e.id != effect.id]
    kept.append(effect)
    return tuple(kept)


def tick(effects: Sequence[ActiveEffect]) -> Tuple[Ledger, Ledger]:
    """Age every effect by one week.

    Returns:
        (remaining, expired). Never raises.
    """
    remaining: List[ActiveEffect] = []
    expired: List[ActiveEffect] = []
    for e in effects:
        left = int(e.weeks_remaining) - 1
        if left <= 0:
            expired.append(e)
        else:
            remaining.append(dataclasses.replace(e, weeks_remaining=left))
    return tuple(remaining), tuple(expired)


def find_effect(effects: Sequence[ActiveEffect], effect_id: str) -> Optional[ActiveEffect]:
    for e in effects:
        if e.id == effect_id:
            return e
    return None


def apply_recovery_action(
    effects: Sequence[ActiveEffect],
    profile: Profile,
    action_id: str,
    effect_id: str,
    *,
    actions: Mapping[str, RecoveryAction] = RECOVERY_ACTIONS_BY_ID,
) -> Tuple[Ledger, Profile]:
    """Spend a recovery action on one effect.

    Failure order: UNKNOWN_ACTION, UNKNOWN_EFFECT, NOT_APPLICABLE, then
    INSUFFICIENT_RESOURCES from the economy guard.
    """
    action = actions.get(str(action_id))
    if action is None:
        raise CareerError(UNKNOWN_ACTION, "unknown recovery action", {"action_id": action_id})

    target = find_effect(effects, str(effect_id))
    if target is None:
        raise CareerError(UNKNOWN_EFFECT, "no active effect with that id", {"effect_id": effect_id})

    if target.type not in action.applicable_to:
        raise CareerError(
            NOT_APPLICABLE,
            f"{action.name} does not treat {target.type}",
            {"action_id": action.id, "effect_id": target.id, "effect_type": target.type},
        )

    cost = Cost(money=int(action.money_cost), energy=int(action.energy_cost))
    new_profile = apply_cost(cost, profile, reason=f"recovery:{action.id}")

    left = int(target.weeks_remaining) - int(action.weeks_reduction)
    out: List[ActiveEffect] = []
    for e in effects:
        if e.id != target.id:
            out.append(e)
        elif left > 0:
            out.append(dataclasses.replace(e, weeks_remaining=left))

    logger.info(
        "recovery action=%s effect=%s weeks_left=%d removed=%s",
        action.id,
        target.id,
        max(0, left),
        left <= 0,
    )
    return tuple(out), new_profile


def applicable_actions(
    effect: ActiveEffect,
    actions: Iterable[RecoveryAction] = RECOVERY_ACTIONS,
) -> Tuple[RecoveryAction, ...]:
    return tuple(a for a in actions if effect.type in a.applicable_to)


def get_active_effects(
    effects: Sequence[ActiveEffect],
    types: Optional[Iterable[str]] = None,
) -> Ledger:
    if types is None:
        return tuple(effects)
    wanted = frozenset(types)
    return tuple(e for e in effects if e.type in wanted)


def get_active_event_effects(effects: Sequence[ActiveEffect]) -> Ledger:
    return get_active_effects(effects, EVENT_EFFECT_TYPES)


def total_stat_modifier(effects: Sequence[ActiveEffect], stat: str) -> int:
    """Sum of every active effect's signed contribution to ``stat``."""
    total = 0
    for e in effects:
        total += int(e.stat_deltas.get(stat, 0))
    return int(total)


def effective_stats(
    profile: Profile,
    effects: Sequence[ActiveEffect],
    constants: GameConstants,
) -> Dict[str, int]:
    """Profile stats with modifiers applied.

    Skill stats are clamped to [STAT_MIN, STAT_MAX]; reputation passes through.
    """
    out: Dict[str, int] = {}
    for name, base in profile.stats.items():
        value = int(base) + total_stat_modifier(effects, name)
        if name in SKILL_STATS:
            value = max(int(constants.STAT_MIN), min(int(constants.STAT_MAX), value))
        out[name] = value
    return out
