from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class RecoveryActionRequest(BaseModel):
    action_id: str
    effect_id: str


class ClaimChallengeRequest(BaseModel):
    challenge_id: str


class ChallengeProgressRequest(BaseModel):
    challenge_id: str
    delta: int = 1


class ResolveEventRequest(BaseModel):
    choice_id: str


class PlayGameRequest(BaseModel):
    opponent_id: Optional[str] = None


class GameResultRequest(BaseModel):
    score: int
    strikes: int = 0
    spares: int = 0
    max_strike_streak: int = 0
    opponent_id: Optional[str] = None
    opponent_score: Optional[int] = None
    won: Optional[bool] = None
    league_win: bool = False
    tournament_top3: bool = False


class RivalResultRequest(BaseModel):
    rival_id: str
    won: bool


class TrainRequest(BaseModel):
    stat: str


class TakeJobRequest(BaseModel):
    job_id: str
