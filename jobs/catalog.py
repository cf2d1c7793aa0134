from __future__ import annotations

"""Part-time jobs the player can hold between games."""

from typing import Dict, Tuple

from career.types import ALL_STATS

from .types import Job


JOBS: Tuple[Job, ...] = (
    Job(id="dog-sitting", title="Dog Sitting", weekly_pay=330, energy_cost=13, contract_weeks=4),
    Job(id="retail", title="Retail Associate", weekly_pay=450, energy_cost=20, contract_weeks=8),
    Job(
        id="bowling-alley",
        title="Bowling Alley Staff",
        weekly_pay=400,
        energy_cost=15,
        contract_weeks=12,
        requirements={"consistency": 40},
    ),
    Job(
        id="pro-shop",
        title="Pro Shop Assistant",
        weekly_pay=550,
        energy_cost=18,
        contract_weeks=16,
        requirements={"reputation": 20, "charisma": 35},
    ),
    Job(
        id="coaching",
        title="Youth Bowling Coach",
        weekly_pay=700,
        energy_cost=22,
        contract_weeks=20,
        requirements={"reputation": 40, "charisma": 45, "consistency": 55},
    ),
)

JOBS_BY_ID: Dict[str, Job] = {j.id: j for j in JOBS}


def validate_catalog(jobs: Tuple[Job, ...] = JOBS) -> None:
    seen = set()
    for j in jobs:
        if j.id in seen:
            raise ValueError(f"duplicate job id {j.id!r}")
        seen.add(j.id)
        if j.weekly_pay < 0 or j.energy_cost < 0:
            raise ValueError(f"job {j.id!r}: pay and energy cost must be >= 0")
        if j.contract_weeks < 1:
            raise ValueError(f"job {j.id!r}: contract_weeks must be >= 1")
        for stat in j.requirements:
            if stat not in ALL_STATS:
                raise ValueError(f"job {j.id!r}: unknown requirement stat {stat!r}")


validate_catalog()
