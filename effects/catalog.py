from __future__ import annotations

"""Injury/slump templates + recovery actions.

Data-driven on purpose: the settlement roll picks a template from
``POSSIBLE_EFFECTS`` and the ledger looks up ``RECOVERY_ACTIONS`` by id.

All keys in ``stat_deltas`` must be profile stat names (see career.types).
The catalog is validated at import time so a bad edit fails on startup
rather than mid-season.
"""

from typing import Dict, Mapping, Tuple

from career.types import ALL_STATS

from .types import (
    EFFECT_INJURY,
    EFFECT_SLUMP,
    EFFECT_TYPES,
    HEALTH_EFFECT_TYPES,
    EffectTemplate,
    RecoveryAction,
)


POSSIBLE_EFFECTS: Tuple[EffectTemplate, ...] = (
    EffectTemplate(EFFECT_INJURY, "Sore Wrist", "Minor wrist strain from overuse", {"accuracy": -3, "hookControl": -2}),
    EffectTemplate(EFFECT_INJURY, "Back Strain", "Lower back tightness affecting form", {"throwPower": -3, "consistency": -2}),
    EffectTemplate(EFFECT_INJURY, "Finger Irritation", "Blistering on bowling fingers", {"revRate": -3, "hookControl": -2}),
    EffectTemplate(EFFECT_SLUMP, "Mental Block", "Struggling with confidence", {"mentalToughness": -4, "consistency": -3}),
    EffectTemplate(EFFECT_SLUMP, "Timing Issues", "Approach timing feels off", {"accuracy": -3, "speedControl": -2}),
    EffectTemplate(EFFECT_SLUMP, "Lane Reading Struggles", "Difficulty reading oil patterns", {"laneReading": -4, "equipmentKnowledge": -2}),
)


RECOVERY_ACTIONS: Tuple[RecoveryAction, ...] = (
    RecoveryAction(
        id="rest-week",
        name="Rest Week",
        description="Take it easy and recover naturally",
        money_cost=0,
        energy_cost=30,
        weeks_reduction=1,
        applicable_to=frozenset({EFFECT_INJURY, EFFECT_SLUMP}),
    ),
    RecoveryAction(
        id="physical-therapy",
        name="Physical Therapy",
        description="Professional treatment for injuries",
        money_cost=300,
        energy_cost=10,
        weeks_reduction=2,
        applicable_to=frozenset({EFFECT_INJURY}),
    ),
    RecoveryAction(
        id="mental-reset",
        name="Mental Reset",
        description="Work with a sports psychologist",
        money_cost=250,
        energy_cost=15,
        weeks_reduction=2,
        applicable_to=frozenset({EFFECT_SLUMP}),
    ),
)


def index_actions(actions: Tuple[RecoveryAction, ...]) -> Dict[str, RecoveryAction]:
    return {a.id: a for a in actions}


RECOVERY_ACTIONS_BY_ID: Mapping[str, RecoveryAction] = index_actions(RECOVERY_ACTIONS)


def validate_catalog(
    effects: Tuple[EffectTemplate, ...] = POSSIBLE_EFFECTS,
    actions: Tuple[RecoveryAction, ...] = RECOVERY_ACTIONS,
) -> None:
    """Referential integrity checks (raises ValueError)."""
    for t in effects:
        if t.type not in HEALTH_EFFECT_TYPES:
            raise ValueError(f"effect template {t.name!r}: type must be injury or slump")
        for stat in t.stat_deltas:
            if stat not in ALL_STATS:
                raise ValueError(f"effect template {t.name!r}: unknown stat {stat!r}")
        if t.weight < 0:
            raise ValueError(f"effect template {t.name!r}: weight must be >= 0")

    seen = set()
    for a in actions:
        if a.id in seen:
            raise ValueError(f"duplicate recovery action id {a.id!r}")
        seen.add(a.id)
        if a.money_cost < 0 or a.energy_cost < 0:
            raise ValueError(f"recovery action {a.id!r}: costs must be >= 0")
        if a.weeks_reduction < 1:
            raise ValueError(f"recovery action {a.id!r}: weeks_reduction must be >= 1")
        if not a.applicable_to:
            raise ValueError(f"recovery action {a.id!r}: applicable_to is empty")
        for t in a.applicable_to:
            if t not in EFFECT_TYPES:
                raise ValueError(f"recovery action {a.id!r}: unknown effect type {t!r}")


validate_catalog()
