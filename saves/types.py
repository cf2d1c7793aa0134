from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from career.state import CareerState


@dataclass(frozen=True, slots=True)
class SaveSlot:
    """One entry of the fixed slot array.

    ``corrupted`` is set when a stored payload exists but failed to decode;
    such a slot is not empty, cannot be loaded, and can be deleted.
    """

    slot_id: int
    is_empty: bool = True
    state: Optional[CareerState] = None
    last_saved: Optional[str] = None
    corrupted: bool = False

    def summary(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "slot_id": int(self.slot_id),
            "is_empty": bool(self.is_empty),
            "last_saved": self.last_saved,
            "corrupted": bool(self.corrupted),
            "player_name": None,
            "season": None,
            "week": None,
            "is_professional": None,
            "bowling_average": None,
        }
        if self.state is not None:
            p = self.state.profile
            out.update(
                {
                    "player_name": p.name,
                    "season": int(p.current_season),
                    "week": int(p.current_week),
                    "is_professional": bool(p.is_professional),
                    "bowling_average": p.bowling_average,
                }
            )
        return out
