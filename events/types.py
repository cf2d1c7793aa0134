from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

from economy.types import Cost


EventCategory = Literal["performance", "money", "equipment", "bowling", "social"]
EVENT_CATEGORIES: Tuple[str, ...] = ("performance", "money", "equipment", "bowling", "social")


@dataclass(frozen=True, slots=True)
class StatChange:
    """Time-limited stat change granted by an event choice.

    ``amount`` is a magnitude (> 0); whether it helps or hurts is decided by
    the outcome slot it sits in (``stat_bonus`` or ``stat_penalty``).
    """

    stat: str
    amount: int
    weeks: int

    def to_dict(self) -> Dict[str, Any]:
        return {"stat": self.stat, "amount": int(self.amount), "weeks": int(self.weeks)}

    @classmethod
    def from_mapping(cls, d: Optional[Mapping[str, Any]]) -> Optional["StatChange"]:
        if not d:
            return None
        return cls(stat=str(d["stat"]), amount=int(d["amount"]), weeks=int(d["weeks"]))


@dataclass(frozen=True, slots=True)
class EventOutcome:
    money: int = 0
    energy: int = 0
    reputation: int = 0
    stat_bonus: Optional[StatChange] = None
    stat_penalty: Optional[StatChange] = None

    @property
    def is_empty(self) -> bool:
        return not (self.money or self.energy or self.reputation or self.stat_bonus or self.stat_penalty)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for k in ("money", "energy", "reputation"):
            v = int(getattr(self, k))
            if v:
                out[k] = v
        if self.stat_bonus is not None:
            out["stat_bonus"] = self.stat_bonus.to_dict()
        if self.stat_penalty is not None:
            out["stat_penalty"] = self.stat_penalty.to_dict()
        return out

    @classmethod
    def from_mapping(cls, d: Optional[Mapping[str, Any]]) -> "EventOutcome":
        d = d or {}
        return cls(
            money=int(d.get("money") or 0),
            energy=int(d.get("energy") or 0),
            reputation=int(d.get("reputation") or 0),
            stat_bonus=StatChange.from_mapping(d.get("stat_bonus")),
            stat_penalty=StatChange.from_mapping(d.get("stat_penalty")),
        )


@dataclass(frozen=True, slots=True)
class EventChoice:
    id: str
    label: str
    cost: Cost = field(default_factory=Cost)
    outcome: EventOutcome = field(default_factory=EventOutcome)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "cost": self.cost.to_dict(),
            "outcome": self.outcome.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "EventChoice":
        return cls(
            id=str(d["id"]),
            label=str(d.get("label") or ""),
            cost=Cost.from_mapping(d.get("cost")),
            outcome=EventOutcome.from_mapping(d.get("outcome")),
        )


@dataclass(frozen=True, slots=True)
class EventTemplate:
    id: str
    category: str
    title: str
    description: str
    weight: float
    is_major: bool
    choices: Tuple[EventChoice, ...]
    requires_pro: bool = False


@dataclass(frozen=True, slots=True)
class WeeklyEvent:
    """An instance of a template raised in a specific week.

    Lifecycle: pending (``resolved=False``) -> resolved. ``choice_made`` is
    None when the event was dismissed.
    """

    id: str
    template_id: str
    category: str
    title: str
    description: str
    is_major_event: bool
    choices: Tuple[EventChoice, ...]
    season: int
    week: int
    resolved: bool = False
    choice_made: Optional[str] = None

    def get_choice(self, choice_id: str) -> Optional[EventChoice]:
        for c in self.choices:
            if c.id == choice_id:
                return c
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "template_id": self.template_id,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "is_major_event": bool(self.is_major_event),
            "choices": [c.to_dict() for c in self.choices],
            "season": int(self.season),
            "week": int(self.week),
            "resolved": bool(self.resolved),
            "choice_made": self.choice_made,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "WeeklyEvent":
        return cls(
            id=str(d["id"]),
            template_id=str(d.get("template_id") or d["id"]),
            category=str(d["category"]),
            title=str(d.get("title") or ""),
            description=str(d.get("description") or ""),
            is_major_event=bool(d.get("is_major_event", False)),
            choices=tuple(EventChoice.from_dict(c) for c in d.get("choices") or ()),
            season=int(d.get("season", 1)),
            week=int(d.get("week", 1)),
            resolved=bool(d.get("resolved", False)),
            choice_made=d.get("choice_made"),
        )
