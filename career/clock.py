from __future__ import annotations

"""Career clock: the only place the calendar moves.

Settlement order for one week advance (fixed; later steps read what earlier
steps produced):

1. effect ledger tick
2. injury / slump roll against the energy the player ended the week with
3. week increment (season rollover), energy reset to MAX_ENERGY, then the
   held job's pay, energy drain and contract countdown
4. weekly challenge install (previous set lapses)
5. weekly event roll
6. rankings snapshot

Every random step draws from ``rng_for(base_seed, purpose, season, week)``.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from challenges.service import install_weekly_challenges
from config import GameConstants
from economy.guard import grant
from effects.ledger import add_effect, tick
from effects.risk import roll_health_effect
from effects.types import ActiveEffect
from events.service import maybe_generate_event
from events.types import WeeklyEvent
from jobs.service import settle_job_week
from jobs.types import JobSettlement
from rankings.service import snapshot
from rankings.types import RankingsSnapshot
from rng import rng_for

from .state import CareerState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WeekReport:
    """What changed during one settlement pass."""

    from_season: int
    from_week: int
    season: int
    week: int
    season_rolled_over: bool
    expired_effects: Tuple[ActiveEffect, ...]
    new_effects: Tuple[ActiveEffect, ...]
    energy_refilled: int
    job: JobSettlement
    new_event: Optional[WeeklyEvent]
    rankings: RankingsSnapshot

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from_season": int(self.from_season),
            "from_week": int(self.from_week),
            "season": int(self.season),
            "week": int(self.week),
            "season_rolled_over": bool(self.season_rolled_over),
            "expired_effects": [e.to_dict() for e in self.expired_effects],
            "new_effects": [e.to_dict() for e in self.new_effects],
            "energy_refilled": int(self.energy_refilled),
            "job": self.job.to_dict(),
            "new_event": None if self.new_event is None else self.new_event.to_dict(),
            "rankings": self.rankings.to_dict(),
        }


def next_week(season: int, week: int, constants: GameConstants) -> Tuple[int, int]:
    if int(week) + 1 > int(constants.SEASON_LENGTH):
        return int(season) + 1, 1
    return int(season), int(week) + 1


def advance_week(state: CareerState, constants: GameConstants) -> Tuple[CareerState, WeekReport]:
    profile = state.profile
    seed = int(state.base_seed)
    season, week = int(profile.current_season), int(profile.current_week)

    # 1) decay
    effects, expired = tick(state.active_effects)

    # 2) health roll on the post-decay ledger and end-of-week energy
    seq = int(state.effect_seq)
    new_effects: Tuple[ActiveEffect, ...] = ()
    hit = roll_health_effect(
        effects,
        int(profile.energy),
        rng_for(seed, "health", season, week),
        constants,
        season=season,
        week=week,
        seq=seq + 1,
    )
    if hit is not None:
        effects = add_effect(effects, hit)
        new_effects = (hit,)
        seq += 1
        logger.info("health effect %s (%s) for %d week(s)", hit.name, hit.type, hit.weeks_remaining)

    # 3) calendar, energy reset to max, then the held job's pay and drain
    new_season, new_week = next_week(season, week, constants)
    before = int(profile.energy)
    profile = dataclasses.replace(profile, current_season=new_season, current_week=new_week)
    profile = grant(profile, constants, energy=int(constants.MAX_ENERGY) - before)
    refilled = int(profile.energy) - before
    job, profile, job_week = settle_job_week(state.job, profile, constants)

    # 4) challenges
    challenges = install_weekly_challenges(profile, rng_for(seed, "challenges", new_season, new_week), constants)

    # 5) event
    pending = state.pending_event
    raised = maybe_generate_event(pending, profile, rng_for(seed, "event", new_season, new_week), constants)
    if raised is not None:
        pending = raised

    # 6) rankings
    rankings, snap = snapshot(state.rankings, profile, effects, seed, constants)

    new_state = dataclasses.replace(
        state,
        profile=profile,
        active_effects=effects,
        challenges=challenges,
        pending_event=pending,
        rankings=rankings,
        effect_seq=seq,
        job=job,
    )
    report = WeekReport(
        from_season=season,
        from_week=week,
        season=new_season,
        week=new_week,
        season_rolled_over=new_season != season,
        expired_effects=expired,
        new_effects=new_effects,
        energy_refilled=refilled,
        job=job_week,
        new_event=raised,
        rankings=snap,
    )
    logger.info(
        "week settled s%dw%d -> s%dw%d expired=%d new_effects=%d event=%s",
        season,
        week,
        new_season,
        new_week,
        len(expired),
        len(new_effects),
        None if raised is None else raised.id,
    )
    return new_state, report
