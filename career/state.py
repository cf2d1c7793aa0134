from __future__ import annotations

"""Whole engine sub-state for one save slot."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from challenges.types import WeeklyChallengeSet
from effects.types import ActiveEffect
from events.types import WeeklyEvent
from jobs.types import JobContract
from rankings.types import RankingState

from .types import Profile


@dataclass(frozen=True, slots=True)
class CareerState:
    """Immutable career snapshot.

    ``pending_event`` is either None or an unresolved event; resolved events
    move to ``event_history``. ``effect_seq`` numbers generated injuries and
    slumps so their ids never collide within a career. ``job`` is the held
    job contract, if any.
    """

    profile: Profile
    active_effects: Tuple[ActiveEffect, ...] = ()
    challenges: WeeklyChallengeSet = field(default_factory=lambda: WeeklyChallengeSet(season=1, week=1))
    pending_event: Optional[WeeklyEvent] = None
    event_history: Tuple[WeeklyEvent, ...] = ()
    rankings: RankingState = field(default_factory=RankingState)
    base_seed: int = 0
    effect_seq: int = 0
    job: Optional[JobContract] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "active_effects": [e.to_dict() for e in self.active_effects],
            "challenges": self.challenges.to_dict(),
            "pending_event": None if self.pending_event is None else self.pending_event.to_dict(),
            "event_history": [e.to_dict() for e in self.event_history],
            "rankings": self.rankings.to_dict(),
            "base_seed": int(self.base_seed),
            "effect_seq": int(self.effect_seq),
            "job": None if self.job is None else self.job.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "CareerState":
        pending = d.get("pending_event")
        job = d.get("job")
        return cls(
            profile=Profile.from_dict(d["profile"]),
            active_effects=tuple(ActiveEffect.from_dict(e) for e in d.get("active_effects") or ()),
            challenges=WeeklyChallengeSet.from_dict(d.get("challenges") or {}),
            pending_event=None if not pending else WeeklyEvent.from_dict(pending),
            event_history=tuple(WeeklyEvent.from_dict(e) for e in d.get("event_history") or ()),
            rankings=RankingState.from_dict(d.get("rankings")),
            base_seed=int(d.get("base_seed", 0)),
            effect_seq=int(d.get("effect_seq", 0)),
            job=None if not job else JobContract.from_dict(job),
        )
