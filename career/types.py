from __future__ import annotations

"""Profile data types.

This module has no imports from the subsystem packages so every subsystem
(economy, effects, challenges, events, rankings) can depend on it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Tuple


Handedness = Literal["right", "left"]
BowlingStyle = Literal["stroker", "tweener", "cranker", "two-handed"]

HANDEDNESS: Tuple[str, ...] = ("right", "left")
BOWLING_STYLES: Tuple[str, ...] = ("stroker", "tweener", "cranker", "two-handed")

# Skill stats the score simulator consumes. ``reputation`` lives in the same
# mapping but is not a skill: it is not clamped to STAT_MIN and does not feed
# the effective average.
SKILL_STATS: Tuple[str, ...] = (
    "throwPower",
    "accuracy",
    "hookControl",
    "revRate",
    "speedControl",
    "consistency",
    "spareShooting",
    "mentalToughness",
    "laneReading",
    "equipmentKnowledge",
    "stamina",
    "charisma",
)
REPUTATION = "reputation"
ALL_STATS: Tuple[str, ...] = SKILL_STATS + (REPUTATION,)


@dataclass(frozen=True, slots=True)
class Profile:
    """Persistent career state of the player.

    Resources are integers: ``money >= 0`` and ``0 <= energy <= MAX_ENERGY``.
    ``bowling_average`` is None until the first game has been recorded.
    ``alley_environment`` is cosmetic only.
    """

    first_name: str
    last_name: str
    handedness: str
    bowling_style: str
    is_professional: bool = False

    money: int = 0
    energy: int = 0
    stats: Mapping[str, int] = field(default_factory=dict)

    bowling_average: Optional[int] = None
    recent_game_scores: Tuple[int, ...] = ()
    total_games_played: int = 0

    current_season: int = 1
    current_week: int = 1

    cosmetic_tokens: int = 0
    alley_environment: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def reputation(self) -> int:
        return int(self.stats.get(REPUTATION, 0))

    def stat(self, name: str) -> int:
        return int(self.stats.get(name, 0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "handedness": self.handedness,
            "bowling_style": self.bowling_style,
            "is_professional": bool(self.is_professional),
            "money": int(self.money),
            "energy": int(self.energy),
            "stats": {str(k): int(v) for k, v in self.stats.items()},
            "bowling_average": None if self.bowling_average is None else int(self.bowling_average),
            "recent_game_scores": [int(s) for s in self.recent_game_scores],
            "total_games_played": int(self.total_games_played),
            "current_season": int(self.current_season),
            "current_week": int(self.current_week),
            "cosmetic_tokens": int(self.cosmetic_tokens),
            "alley_environment": dict(self.alley_environment or {}),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Profile":
        avg = d.get("bowling_average")
        return cls(
            first_name=str(d.get("first_name") or ""),
            last_name=str(d.get("last_name") or ""),
            handedness=str(d.get("handedness") or "right"),
            bowling_style=str(d.get("bowling_style") or "tweener"),
            is_professional=bool(d.get("is_professional", False)),
            money=int(d.get("money", 0)),
            energy=int(d.get("energy", 0)),
            stats={str(k): int(v) for k, v in dict(d.get("stats") or {}).items()},
            bowling_average=None if avg is None else int(avg),
            recent_game_scores=tuple(int(s) for s in d.get("recent_game_scores") or ()),
            total_games_played=int(d.get("total_games_played", 0)),
            current_season=int(d.get("current_season", 1)),
            current_week=int(d.get("current_week", 1)),
            cosmetic_tokens=int(d.get("cosmetic_tokens", 0)),
            alley_environment=dict(d.get("alley_environment") or {}),
        )


@dataclass(frozen=True, slots=True)
class NewProfileData:
    """Caller-supplied identity for a new career."""

    first_name: str
    last_name: str
    bowling_style: str = "tweener"
    handedness: str = "right"
    alley_environment: Mapping[str, Any] = field(default_factory=dict)
