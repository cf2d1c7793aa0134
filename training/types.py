from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class TrainingOption:
    """A quick drill: pay energy, raise one skill stat."""

    stat: str
    label: str
    energy_cost: int

    def to_dict(self) -> Dict[str, Any]:
        return {"stat": self.stat, "label": self.label, "energy_cost": int(self.energy_cost)}


@dataclass(frozen=True, slots=True)
class TrainingSession:
    """Outcome of one completed drill."""

    stat: str
    before: int
    after: int
    energy_cost: int

    @property
    def gain(self) -> int:
        return int(self.after) - int(self.before)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stat": self.stat,
            "before": int(self.before),
            "after": int(self.after),
            "gain": self.gain,
            "energy_cost": int(self.energy_cost),
        }
