from __future__ import annotations

"""Quick training drills offered on the home screen.

Validated at import time like the other catalogs.
"""

from typing import Dict, Tuple

from career.types import SKILL_STATS

from .types import TrainingOption


QUICK_TRAINING: Tuple[TrainingOption, ...] = (
    TrainingOption(stat="accuracy", label="Accuracy", energy_cost=15),
    TrainingOption(stat="consistency", label="Consistency", energy_cost=15),
    TrainingOption(stat="throwPower", label="Power", energy_cost=20),
)

QUICK_TRAINING_BY_STAT: Dict[str, TrainingOption] = {o.stat: o for o in QUICK_TRAINING}


def validate_catalog(options: Tuple[TrainingOption, ...] = QUICK_TRAINING) -> None:
    seen = set()
    for o in options:
        if o.stat in seen:
            raise ValueError(f"duplicate training stat {o.stat!r}")
        seen.add(o.stat)
        if o.stat not in SKILL_STATS:
            raise ValueError(f"training option {o.label!r}: {o.stat!r} is not a skill stat")
        if o.energy_cost <= 0:
            raise ValueError(f"training option {o.label!r}: energy_cost must be > 0")


validate_catalog()
