from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CareerError(Exception):
    """Structured, recoverable failure of an engine command.

    The server layer maps these to HTTP 4xx while keeping a stable
    machine-readable code for client/UI. A command that raises has not
    mutated any state.
    """

    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"

    def to_payload(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


@dataclass
class SaveCorruptedError(CareerError):
    """Persisted state violates an engine invariant (not a user mistake)."""

    code: str = "CORRUPTED_STATE"
    message: str = "save data is corrupted"


# Error codes (stable API surface)
INSUFFICIENT_RESOURCES = "INSUFFICIENT_RESOURCES"
INVALID_COST = "INVALID_COST"
UNKNOWN_ACTION = "UNKNOWN_ACTION"
UNKNOWN_EFFECT = "UNKNOWN_EFFECT"
UNKNOWN_CHOICE = "UNKNOWN_CHOICE"
UNKNOWN_CHALLENGE = "UNKNOWN_CHALLENGE"
UNKNOWN_RIVAL = "UNKNOWN_RIVAL"
UNKNOWN_JOB = "UNKNOWN_JOB"
UNKNOWN_TRAINING = "UNKNOWN_TRAINING"
NOT_APPLICABLE = "NOT_APPLICABLE"
NO_PENDING_EVENT = "NO_PENDING_EVENT"
NOT_COMPLETE = "NOT_COMPLETE"
ALREADY_CLAIMED = "ALREADY_CLAIMED"
INVALID_EFFECT = "INVALID_EFFECT"
INVALID_PROGRESS = "INVALID_PROGRESS"
INVALID_SLOT = "INVALID_SLOT"
NO_ACTIVE_GAME = "NO_ACTIVE_GAME"
NOT_ELIGIBLE = "NOT_ELIGIBLE"
INVALID_GAME_RESULT = "INVALID_GAME_RESULT"
INVALID_PROFILE = "INVALID_PROFILE"
CORRUPTED_STATE = "CORRUPTED_STATE"

# Codes that describe a conflict with the current state rather than a bad id.
CONFLICT_CODES = frozenset(
    {
        INSUFFICIENT_RESOURCES,
        NOT_APPLICABLE,
        NO_PENDING_EVENT,
        NOT_COMPLETE,
        ALREADY_CLAIMED,
        NO_ACTIVE_GAME,
        NOT_ELIGIBLE,
    }
)

NOT_FOUND_CODES = frozenset(
    {
        UNKNOWN_ACTION,
        UNKNOWN_EFFECT,
        UNKNOWN_CHOICE,
        UNKNOWN_CHALLENGE,
        UNKNOWN_RIVAL,
        UNKNOWN_JOB,
        UNKNOWN_TRAINING,
    }
)
