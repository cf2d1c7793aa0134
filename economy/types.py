from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True, slots=True)
class Cost:
    """Resource price of an action. Missing components are zero."""

    money: int = 0
    energy: int = 0

    @property
    def is_free(self) -> bool:
        return self.money == 0 and self.energy == 0

    def to_dict(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        if self.money:
            out["money"] = int(self.money)
        if self.energy:
            out["energy"] = int(self.energy)
        return out

    @classmethod
    def from_mapping(cls, d: Optional[Mapping[str, Any]]) -> "Cost":
        if not d:
            return cls()
        return cls(money=int(d.get("money") or 0), energy=int(d.get("energy") or 0))


FREE = Cost()
