from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Tuple


Region = Literal["local", "regional", "state", "national", "pro-tour"]
REGIONS: Tuple[str, ...] = ("local", "regional", "state", "national", "pro-tour")

LastResult = Literal["win", "loss", "none"]


@dataclass(frozen=True, slots=True)
class RankedBowler:
    id: str
    name: str
    rank: int
    previous_rank: int
    average: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rank": int(self.rank),
            "previous_rank": int(self.previous_rank),
            "average": int(self.average),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "RankedBowler":
        rank = int(d["rank"])
        return cls(
            id=str(d["id"]),
            name=str(d.get("name") or ""),
            rank=rank,
            previous_rank=int(d.get("previous_rank", rank)),
            average=int(d["average"]),
        )


@dataclass(frozen=True, slots=True)
class PlayerRanking:
    region: str
    rank: int
    previous_rank: int
    rating_points: int

    @property
    def movement(self) -> int:
        """Positive when the player climbed since the prior snapshot."""
        return int(self.previous_rank) - int(self.rank)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": self.region,
            "rank": int(self.rank),
            "previous_rank": int(self.previous_rank),
            "rating_points": int(self.rating_points),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "PlayerRanking":
        rank = int(d["rank"])
        return cls(
            region=str(d["region"]),
            rank=rank,
            previous_rank=int(d.get("previous_rank", rank)),
            rating_points=int(d.get("rating_points", 0)),
        )


@dataclass(frozen=True, slots=True)
class HeadToHead:
    wins: int = 0
    losses: int = 0
    last_result: str = "none"

    def to_dict(self) -> Dict[str, Any]:
        return {"wins": int(self.wins), "losses": int(self.losses), "last_result": self.last_result}

    @classmethod
    def from_mapping(cls, d: Optional[Mapping[str, Any]]) -> "HeadToHead":
        d = d or {}
        return cls(
            wins=int(d.get("wins", 0)),
            losses=int(d.get("losses", 0)),
            last_result=str(d.get("last_result") or "none"),
        )


@dataclass(frozen=True, slots=True)
class Rival:
    id: str
    name: str
    archetype: str
    region: str
    rank: int
    average: int
    head_to_head: HeadToHead = field(default_factory=HeadToHead)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "archetype": self.archetype,
            "region": self.region,
            "rank": int(self.rank),
            "average": int(self.average),
            "head_to_head": self.head_to_head.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Rival":
        return cls(
            id=str(d["id"]),
            name=str(d.get("name") or ""),
            archetype=str(d.get("archetype") or ""),
            region=str(d.get("region") or "local"),
            rank=int(d.get("rank", 1)),
            average=int(d.get("average", 0)),
            head_to_head=HeadToHead.from_mapping(d.get("head_to_head")),
        )


@dataclass(frozen=True, slots=True)
class RankingsSnapshot:
    """What the rankings screen shows for one week."""

    player_rankings: Tuple[PlayerRanking, ...]
    top_bowlers: Mapping[str, Tuple[RankedBowler, ...]]
    rivals: Tuple[Rival, ...]
    season: int
    week: int

    def ranking_for(self, region: str) -> Optional[PlayerRanking]:
        for r in self.player_rankings:
            if r.region == region:
                return r
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_rankings": [r.to_dict() for r in self.player_rankings],
            "top_bowlers": {k: [b.to_dict() for b in v] for k, v in self.top_bowlers.items()},
            "rivals": [r.to_dict() for r in self.rivals],
            "season": int(self.season),
            "week": int(self.week),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "RankingsSnapshot":
        return cls(
            player_rankings=tuple(PlayerRanking.from_dict(r) for r in d.get("player_rankings") or ()),
            top_bowlers={
                str(k): tuple(RankedBowler.from_dict(b) for b in v)
                for k, v in dict(d.get("top_bowlers") or {}).items()
            },
            rivals=tuple(Rival.from_dict(r) for r in d.get("rivals") or ()),
            season=int(d.get("season", 1)),
            week=int(d.get("week", 1)),
        )


@dataclass(frozen=True, slots=True)
class RankingState:
    """Persisted ranking sub-state of a career.

    ``leaderboards`` holds the synthetic field per unlocked region, ordered
    by rank as of the last snapshot. ``as_of`` is the (season, week) the
    leaderboards were last drifted to.
    """

    leaderboards: Mapping[str, Tuple[RankedBowler, ...]] = field(default_factory=dict)
    unlocked_regions: Tuple[str, ...] = ()
    rivals: Tuple[Rival, ...] = ()
    last_snapshot: Optional[RankingsSnapshot] = None
    as_of: Optional[Tuple[int, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leaderboards": {k: [b.to_dict() for b in v] for k, v in self.leaderboards.items()},
            "unlocked_regions": list(self.unlocked_regions),
            "rivals": [r.to_dict() for r in self.rivals],
            "last_snapshot": None if self.last_snapshot is None else self.last_snapshot.to_dict(),
            "as_of": None if self.as_of is None else [int(self.as_of[0]), int(self.as_of[1])],
        }

    @classmethod
    def from_dict(cls, d: Optional[Mapping[str, Any]]) -> "RankingState":
        d = d or {}
        snap = d.get("last_snapshot")
        as_of = d.get("as_of")
        return cls(
            leaderboards={
                str(k): tuple(RankedBowler.from_dict(b) for b in v)
                for k, v in dict(d.get("leaderboards") or {}).items()
            },
            unlocked_regions=tuple(str(r) for r in d.get("unlocked_regions") or ()),
            rivals=tuple(Rival.from_dict(r) for r in d.get("rivals") or ()),
            last_snapshot=None if not snap else RankingsSnapshot.from_dict(snap),
            as_of=None if not as_of else (int(as_of[0]), int(as_of[1])),
        )
