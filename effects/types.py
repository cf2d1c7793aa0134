from __future__ import annotations

"""Public data types for the effect ledger."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Literal, Mapping, Optional, Tuple


EffectType = Literal["injury", "slump", "event-buff", "event-penalty"]

EFFECT_INJURY = "injury"
EFFECT_SLUMP = "slump"
EFFECT_EVENT_BUFF = "event-buff"
EFFECT_EVENT_PENALTY = "event-penalty"

EFFECT_TYPES: Tuple[str, ...] = (EFFECT_INJURY, EFFECT_SLUMP, EFFECT_EVENT_BUFF, EFFECT_EVENT_PENALTY)
HEALTH_EFFECT_TYPES: FrozenSet[str] = frozenset({EFFECT_INJURY, EFFECT_SLUMP})
EVENT_EFFECT_TYPES: FrozenSet[str] = frozenset({EFFECT_EVENT_BUFF, EFFECT_EVENT_PENALTY})


@dataclass(frozen=True, slots=True)
class ActiveEffect:
    """A time-limited stat modifier.

    ``stat_deltas`` holds signed contributions (negative = penalty). An effect
    with ``weeks_remaining < 1`` is never stored in a ledger.
    """

    id: str
    type: str
    name: str
    description: str
    weeks_remaining: int
    stat_deltas: Mapping[str, int] = field(default_factory=dict)
    source_event_id: Optional[str] = None

    @property
    def stat_penalties(self) -> Dict[str, int]:
        return {k: int(v) for k, v in self.stat_deltas.items() if int(v) < 0}

    @property
    def stat_bonus(self) -> Dict[str, int]:
        return {k: int(v) for k, v in self.stat_deltas.items() if int(v) > 0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "weeks_remaining": int(self.weeks_remaining),
            "stat_deltas": {str(k): int(v) for k, v in self.stat_deltas.items()},
            "source_event_id": self.source_event_id,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ActiveEffect":
        return cls(
            id=str(d["id"]),
            type=str(d["type"]),
            name=str(d.get("name") or ""),
            description=str(d.get("description") or ""),
            weeks_remaining=int(d["weeks_remaining"]),
            stat_deltas={str(k): int(v) for k, v in dict(d.get("stat_deltas") or {}).items()},
            source_event_id=d.get("source_event_id"),
        )


@dataclass(frozen=True, slots=True)
class EffectTemplate:
    """Catalog entry used by the settlement risk roll."""

    type: str
    name: str
    description: str
    stat_deltas: Mapping[str, int]
    weight: float = 1.0


@dataclass(frozen=True, slots=True)
class RecoveryAction:
    id: str
    name: str
    description: str
    money_cost: int
    energy_cost: int
    weeks_reduction: int
    applicable_to: FrozenSet[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "money_cost": int(self.money_cost),
            "energy_cost": int(self.energy_cost),
            "weeks_reduction": int(self.weeks_reduction),
            "applicable_to": sorted(self.applicable_to),
        }
