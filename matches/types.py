from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple


PERFECT_GAME = 300


@dataclass(frozen=True, slots=True)
class GameResult:
    """One finished game as reported by a score simulator (or the UI).

    ``opponent_id``/``won`` are set only for head-to-head games against a
    rival; the ranking engine folds them into the rival record.
    """

    score: int
    strikes: int = 0
    spares: int = 0
    max_strike_streak: int = 0
    opponent_id: Optional[str] = None
    opponent_score: Optional[int] = None
    won: Optional[bool] = None
    league_win: bool = False
    tournament_top3: bool = False
    frames: Tuple[Tuple[int, ...], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": int(self.score),
            "strikes": int(self.strikes),
            "spares": int(self.spares),
            "max_strike_streak": int(self.max_strike_streak),
            "opponent_id": self.opponent_id,
            "opponent_score": self.opponent_score,
            "won": self.won,
            "league_win": bool(self.league_win),
            "tournament_top3": bool(self.tournament_top3),
            "frames": [list(f) for f in self.frames],
        }


class ScoreSimulator(Protocol):
    """Pluggable throw model. Implementations must draw only from ``rng``."""

    def simulate_game(self, stats: Mapping[str, int], energy: int, rng: random.Random) -> GameResult:
        ...
