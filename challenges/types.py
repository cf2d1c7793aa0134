from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


# Objective types. At most one challenge per metric is installed in a week.
METRIC_GAMES = "games"
METRIC_GAMES_OVER_THRESHOLD = "games_over_180"
METRIC_SPARES = "spares"
METRIC_STRIKES = "strikes"
METRIC_STRIKE_STREAK = "strike_streak"
METRIC_TRAININGS = "trainings"
METRIC_LEAGUE_WINS = "league_wins"
METRIC_TOURNAMENT_TOP3 = "tournament_top3"

METRICS: Tuple[str, ...] = (
    METRIC_GAMES,
    METRIC_GAMES_OVER_THRESHOLD,
    METRIC_SPARES,
    METRIC_STRIKES,
    METRIC_STRIKE_STREAK,
    METRIC_TRAININGS,
    METRIC_LEAGUE_WINS,
    METRIC_TOURNAMENT_TOP3,
)


@dataclass(frozen=True, slots=True)
class ChallengeReward:
    cash: int = 0
    reputation: int = 0
    energy: int = 0
    cosmetic_token: int = 0

    def to_dict(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for k in ("cash", "reputation", "energy", "cosmetic_token"):
            v = int(getattr(self, k))
            if v:
                out[k] = v
        return out

    @classmethod
    def from_mapping(cls, d: Optional[Mapping[str, Any]]) -> "ChallengeReward":
        d = d or {}
        return cls(
            cash=int(d.get("cash") or 0),
            reputation=int(d.get("reputation") or 0),
            energy=int(d.get("energy") or 0),
            cosmetic_token=int(d.get("cosmetic_token") or 0),
        )


@dataclass(frozen=True, slots=True)
class ChallengeTemplate:
    id: str
    metric: str
    name: str
    description: str
    target: int
    reward: ChallengeReward
    weight: float = 1.0


@dataclass(frozen=True, slots=True)
class WeeklyChallenge:
    """One objective of the current week.

    Invariant: ``claimed`` implies ``progress >= target``.
    """

    id: str
    metric: str
    name: str
    description: str
    target: int
    reward: ChallengeReward = field(default_factory=ChallengeReward)
    progress: int = 0
    claimed: bool = False

    @property
    def is_complete(self) -> bool:
        return int(self.progress) >= int(self.target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "metric": self.metric,
            "name": self.name,
            "description": self.description,
            "target": int(self.target),
            "reward": self.reward.to_dict(),
            "progress": int(self.progress),
            "claimed": bool(self.claimed),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "WeeklyChallenge":
        return cls(
            id=str(d["id"]),
            metric=str(d.get("metric") or ""),
            name=str(d.get("name") or ""),
            description=str(d.get("description") or ""),
            target=int(d["target"]),
            reward=ChallengeReward.from_mapping(d.get("reward")),
            progress=int(d.get("progress", 0)),
            claimed=bool(d.get("claimed", False)),
        )


@dataclass(frozen=True, slots=True)
class WeeklyChallengeSet:
    """Challenges installed for (season, week)."""

    season: int
    week: int
    challenges: Tuple[WeeklyChallenge, ...] = ()

    def get(self, challenge_id: str) -> Optional[WeeklyChallenge]:
        for c in self.challenges:
            if c.id == challenge_id:
                return c
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "season": int(self.season),
            "week": int(self.week),
            "challenges": [c.to_dict() for c in self.challenges],
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "WeeklyChallengeSet":
        return cls(
            season=int(d.get("season", 1)),
            week=int(d.get("week", 1)),
            challenges=tuple(WeeklyChallenge.from_dict(c) for c in d.get("challenges") or ()),
        )
