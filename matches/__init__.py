"""Match collaborator: score simulator interface and game-result folding."""

from .service import RecordedGame, challenge_metrics, game_cost, record_game_result, validate_result
from .simulator import ReferenceSimulator, opponent_score, score_frames
from .types import GameResult, ScoreSimulator

__all__ = [
    "GameResult",
    "RecordedGame",
    "ReferenceSimulator",
    "ScoreSimulator",
    "challenge_metrics",
    "game_cost",
    "opponent_score",
    "record_game_result",
    "score_frames",
    "validate_result",
]
