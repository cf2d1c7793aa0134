from __future__ import annotations

"""Tuning parameters for the ranking engine.

Notes
-----
- Region thresholds are OR-ed: crossing either the reputation or the
  bowling-average bar unlocks the region. ``pro-tour`` also requires the
  professional flag.
- Unlocks are a high-water mark. Falling below a threshold later never
  removes a region.
- Synthetic field averages follow the opponent tiers of the mobile build.
"""

from typing import Mapping, Optional, Tuple

from .types import REGIONS


# ---------------------------------------------------------------------------
# Region unlock thresholds: region -> (min reputation, min bowling average)
# ``None`` means always unlocked.
# ---------------------------------------------------------------------------
REGION_THRESHOLDS: Mapping[str, Optional[Tuple[int, int]]] = {
    "local": None,
    "regional": (15, 150),
    "state": (30, 170),
    "national": (50, 190),
    "pro-tour": (70, 210),
}

PRO_ONLY_REGIONS = frozenset({"pro-tour"})

# ---------------------------------------------------------------------------
# Synthetic leaderboard averages: region -> (min, max)
# ---------------------------------------------------------------------------
REGION_AVERAGE_RANGES: Mapping[str, Tuple[int, int]] = {
    "local": (120, 170),
    "regional": (150, 190),
    "state": (170, 210),
    "national": (190, 230),
    "pro-tour": (205, 245),
}

# ---------------------------------------------------------------------------
# Average estimate before any game has been recorded
# estimate = ESTIMATE_BASE + ESTIMATE_PER_STAT_POINT * mean(skill stats)
# ---------------------------------------------------------------------------
ESTIMATE_BASE: float = 80.0
ESTIMATE_PER_STAT_POINT: float = 1.5

# Rivals are picked among the local bowlers closest to the player's average.
RIVAL_CANDIDATE_WINDOW: int = 8

RIVAL_ARCHETYPES: Tuple[str, ...] = (
    "Power Cranker",
    "Stroker Specialist",
    "Veteran Grinder",
    "Young Phenom",
    "Spare Machine",
    "Lane Reader",
)


def _check() -> None:
    for region in REGIONS:
        if region not in REGION_THRESHOLDS:
            raise ValueError(f"missing threshold for region {region!r}")
        lo, hi = REGION_AVERAGE_RANGES[region]
        if lo > hi:
            raise ValueError(f"bad average range for region {region!r}")
    for region in list(REGION_THRESHOLDS) + list(REGION_AVERAGE_RANGES) + list(PRO_ONLY_REGIONS):
        if region not in REGIONS:
            raise ValueError(f"unknown region {region!r}")


_check()
