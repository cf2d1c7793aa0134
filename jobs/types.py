from __future__ import annotations

"""Job catalog entries and the contract a player holds."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True, slots=True)
class Job:
    """Catalog entry. ``requirements`` maps profile stat names to minimums."""

    id: str
    title: str
    weekly_pay: int
    energy_cost: int
    contract_weeks: int
    requirements: Mapping[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "weekly_pay": int(self.weekly_pay),
            "energy_cost": int(self.energy_cost),
            "contract_weeks": int(self.contract_weeks),
            "requirements": {str(k): int(v) for k, v in self.requirements.items()},
        }


@dataclass(frozen=True, slots=True)
class JobContract:
    """A held job. Pay and energy are settled at every week start.

    A contract with ``weeks_remaining < 1`` is never stored; the settlement
    that pays its last week drops it.
    """

    job_id: str
    title: str
    weekly_pay: int
    energy_cost: int
    weeks_remaining: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job_id,
            "title": self.title,
            "weekly_pay": int(self.weekly_pay),
            "energy_cost": int(self.energy_cost),
            "weeks_remaining": int(self.weeks_remaining),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "JobContract":
        return cls(
            job_id=str(d["job_id"]),
            title=str(d.get("title") or ""),
            weekly_pay=int(d.get("weekly_pay", 0)),
            energy_cost=int(d.get("energy_cost", 0)),
            weeks_remaining=int(d["weeks_remaining"]),
        )


@dataclass(frozen=True, slots=True)
class JobSettlement:
    """What one week start did to the held contract."""

    pay: int = 0
    energy_cost: int = 0
    finished_job_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pay": int(self.pay),
            "energy_cost": int(self.energy_cost),
            "finished_job_id": self.finished_job_id or None,
        }
