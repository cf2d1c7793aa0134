from __future__ import annotations

"""Tuning constants for the career engine.

Every component receives a ``GameConstants`` instance explicitly; nothing in
the services reads module globals for tunables. Tests (and difficulty
settings) build overridden copies via :func:`load_constants`.

Notes
-----
Values mirror the mobile build's balance sheet:
- energy resets to MAX_ENERGY at every week start (a held job then takes its share)
- a season is 52 weeks
- ~65% of weeks raise a random event, 15% of those are major
"""

import dataclasses
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple


# Where the SQLite save store lives when the HTTP app boots.
SAVE_DB_ENV_VAR = "STRIKE_FORCE_SAVE_DB"
DEFAULT_SAVE_DB_PATH = "strike_force_saves.sqlite3"

# JSON object of constant overrides, e.g. '{"EVENT_RATE": 0.0}'.
CONSTANTS_ENV_VAR = "STRIKE_FORCE_CONSTANTS"


@dataclass(frozen=True, slots=True)
class GameConstants:
    # ---------------------------------------------------------------------
    # Resources
    # ---------------------------------------------------------------------
    MAX_ENERGY: int = 100
    STARTING_MONEY: int = 500
    STARTING_ENERGY: int = 100

    # ---------------------------------------------------------------------
    # Stats
    # ---------------------------------------------------------------------
    STAT_MIN: int = 20
    STAT_MAX: int = 99
    REPUTATION_MAX: int = 100
    STARTING_REPUTATION: int = 5

    # ---------------------------------------------------------------------
    # Calendar
    # ---------------------------------------------------------------------
    SEASON_LENGTH: int = 52
    SAVE_SLOT_IDS: Tuple[int, ...] = (1, 2, 3)

    # ---------------------------------------------------------------------
    # Weekly events
    # ---------------------------------------------------------------------
    EVENT_RATE: float = 0.65
    MAJOR_EVENT_RATE: float = 0.15
    EVENT_HISTORY_LIMIT: int = 20

    # ---------------------------------------------------------------------
    # Injury / slump risk (end-of-week settlement)
    # ---------------------------------------------------------------------
    # p = min(CAP, BASE + SCALE * (threshold - energy) / threshold) when energy < threshold
    LOW_ENERGY_THRESHOLD: int = 25
    INJURY_RISK_BASE: float = 0.15
    INJURY_RISK_SCALE: float = 0.35
    INJURY_RISK_CAP: float = 0.60
    # Relative weight of injury templates vs slump templates once a roll hits.
    INJURY_WEIGHT: float = 1.0
    SLUMP_WEIGHT: float = 1.0
    EFFECT_WEEKS_MIN: int = 1
    EFFECT_WEEKS_MAX: int = 3
    # No new health effect is rolled while this many injuries/slumps are active.
    MAX_HEALTH_EFFECTS: int = 2

    # ---------------------------------------------------------------------
    # Weekly challenges
    # ---------------------------------------------------------------------
    CHALLENGES_PER_WEEK: int = 3
    HIGH_GAME_THRESHOLD: int = 180
    STRIKE_STREAK_TARGET: int = 3

    # ---------------------------------------------------------------------
    # Games / pro status
    # ---------------------------------------------------------------------
    GAME_ENERGY_COST: int = 10
    GAME_LANE_FEE: int = 15
    RECENT_SCORES_WINDOW: int = 30
    PRO_AVERAGE_THRESHOLD: int = 200
    PRO_GAMES_REQUIRED: int = 20
    PRO_APPLICATION_COST: int = 5000
    PRO_APPLICATION_ENERGY: int = 20

    # ---------------------------------------------------------------------
    # Jobs / quick training
    # ---------------------------------------------------------------------
    JOB_APPLICATION_ENERGY: int = 5
    # gain = max(1, (TRAINING_GAIN_CEILING - stat) // TRAINING_GAIN_DIVISOR)
    TRAINING_GAIN_CEILING: int = 100
    TRAINING_GAIN_DIVISOR: int = 20

    # ---------------------------------------------------------------------
    # Rankings
    # ---------------------------------------------------------------------
    LEADERBOARD_SIZE: int = 40
    TOP_BOWLERS_SHOWN: int = 10
    RIVAL_COUNT: int = 3
    # Weekly drift of synthetic leaderboard averages (+/- pins).
    LEADERBOARD_DRIFT: int = 3
    # Each point of active stat modifiers moves the effective average this much.
    EFFECT_AVERAGE_WEIGHT: float = 0.5
    RATING_AVG_WEIGHT: float = 10.0
    RATING_REP_WEIGHT: float = 5.0

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


DEFAULT_CONSTANTS = GameConstants()

_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(GameConstants))


def load_constants(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    base: GameConstants = DEFAULT_CONSTANTS,
) -> GameConstants:
    """Return ``base`` with ``overrides`` applied.

    Unknown keys raise ``ValueError`` so typos in tuning files fail loudly.
    """
    if not overrides:
        return base
    unknown = sorted(str(k) for k in overrides if str(k) not in _FIELD_NAMES)
    if unknown:
        raise ValueError(f"Unknown game constant(s): {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key == "SAVE_SLOT_IDS":
            values[key] = tuple(int(x) for x in value)
        else:
            default = getattr(base, key)
            values[key] = type(default)(value)
    constants = dataclasses.replace(base, **values)
    _validate(constants)
    return constants


def constants_from_env(environ: Optional[Mapping[str, str]] = None) -> GameConstants:
    env = os.environ if environ is None else environ
    raw = (env.get(CONSTANTS_ENV_VAR) or "").strip()
    if not raw:
        return DEFAULT_CONSTANTS
    try:
        overrides = json.loads(raw)
    except ValueError as exc:
        raise ValueError(f"{CONSTANTS_ENV_VAR} must be a JSON object: {exc}") from exc
    if not isinstance(overrides, dict):
        raise ValueError(f"{CONSTANTS_ENV_VAR} must be a JSON object")
    return load_constants(overrides)


def save_db_path_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return (env.get(SAVE_DB_ENV_VAR) or "").strip() or DEFAULT_SAVE_DB_PATH


def _validate(c: GameConstants) -> None:
    if c.MAX_ENERGY <= 0:
        raise ValueError("MAX_ENERGY must be > 0")
    if not 0 <= c.STARTING_ENERGY <= c.MAX_ENERGY:
        raise ValueError("STARTING_ENERGY must be within [0, MAX_ENERGY]")
    if c.SEASON_LENGTH < 1:
        raise ValueError("SEASON_LENGTH must be >= 1")
    if c.TRAINING_GAIN_DIVISOR < 1:
        raise ValueError("TRAINING_GAIN_DIVISOR must be >= 1")
    if c.EFFECT_WEEKS_MIN < 1 or c.EFFECT_WEEKS_MAX < c.EFFECT_WEEKS_MIN:
        raise ValueError("EFFECT_WEEKS_MIN/MAX must satisfy 1 <= min <= max")
    if not c.SAVE_SLOT_IDS or len(set(c.SAVE_SLOT_IDS)) != len(c.SAVE_SLOT_IDS):
        raise ValueError("SAVE_SLOT_IDS must be non-empty and unique")
    for name in ("EVENT_RATE", "MAJOR_EVENT_RATE", "INJURY_RISK_BASE", "INJURY_RISK_CAP"):
        v = getattr(c, name)
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"{name} must be within [0, 1]")
