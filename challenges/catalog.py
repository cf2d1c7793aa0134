from __future__ import annotations

"""Weekly challenge templates.

``metric`` is the objective type fed by game results and training. Two
templates may share a metric (e.g. two different game-count goals) but the
installer never puts both in the same week.
"""

from typing import Mapping, Tuple

from .types import (
    METRIC_GAMES,
    METRIC_GAMES_OVER_THRESHOLD,
    METRIC_LEAGUE_WINS,
    METRIC_SPARES,
    METRIC_STRIKE_STREAK,
    METRIC_STRIKES,
    METRIC_TOURNAMENT_TOP3,
    METRIC_TRAININGS,
    METRICS,
    ChallengeReward,
    ChallengeTemplate,
)


CHALLENGE_TEMPLATES: Tuple[ChallengeTemplate, ...] = (
    ChallengeTemplate(
        id="games-180",
        metric=METRIC_GAMES_OVER_THRESHOLD,
        name="High Roller",
        description="Bowl 3 games over 180",
        target=3,
        reward=ChallengeReward(cash=500),
    ),
    ChallengeTemplate(
        id="spares-5",
        metric=METRIC_SPARES,
        name="Spare Specialist",
        description="Convert 5 spares",
        target=5,
        reward=ChallengeReward(reputation=3),
    ),
    ChallengeTemplate(
        id="trainings-2",
        metric=METRIC_TRAININGS,
        name="Dedicated Student",
        description="Complete 2 training sessions",
        target=2,
        reward=ChallengeReward(energy=15),
    ),
    ChallengeTemplate(
        id="strikes-10",
        metric=METRIC_STRIKES,
        name="Strike Machine",
        description="Roll 10 strikes",
        target=10,
        reward=ChallengeReward(cash=300),
    ),
    ChallengeTemplate(
        id="league-win",
        metric=METRIC_LEAGUE_WINS,
        name="League Champion",
        description="Win a league night",
        target=1,
        reward=ChallengeReward(cash=200, reputation=5),
    ),
    ChallengeTemplate(
        id="tournament-top3",
        metric=METRIC_TOURNAMENT_TOP3,
        name="Podium Finish",
        description="Finish top 3 in a tournament",
        target=1,
        reward=ChallengeReward(cash=750),
    ),
    ChallengeTemplate(
        id="games-4",
        metric=METRIC_GAMES,
        name="Lane Regular",
        description="Bowl 4 games this week",
        target=4,
        reward=ChallengeReward(cash=200, reputation=2),
    ),
    ChallengeTemplate(
        id="perfect-frame",
        metric=METRIC_STRIKE_STREAK,
        name="Turkey Hunter",
        description="Roll 3 strikes in a row",
        target=1,
        reward=ChallengeReward(cosmetic_token=1),
    ),
)

CHALLENGE_TEMPLATES_BY_ID: Mapping[str, ChallengeTemplate] = {t.id: t for t in CHALLENGE_TEMPLATES}


def validate_catalog(templates: Tuple[ChallengeTemplate, ...] = CHALLENGE_TEMPLATES) -> None:
    seen = set()
    for t in templates:
        if t.id in seen:
            raise ValueError(f"duplicate challenge template id {t.id!r}")
        seen.add(t.id)
        if t.metric not in METRICS:
            raise ValueError(f"challenge template {t.id!r}: unknown metric {t.metric!r}")
        if int(t.target) <= 0:
            raise ValueError(f"challenge template {t.id!r}: target must be > 0")
        r = t.reward
        if min(r.cash, r.reputation, r.energy, r.cosmetic_token) < 0:
            raise ValueError(f"challenge template {t.id!r}: reward components must be >= 0")


validate_catalog()
