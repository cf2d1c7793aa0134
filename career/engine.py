from __future__ import annotations

"""CareerEngine: the query/command surface for one loaded career.

The engine owns a single immutable :class:`CareerState`. Every command builds
the complete next state first and swaps it in with one assignment, so a
command that raises leaves the engine exactly as it was.

No module-level engine exists; callers (the save registry, the HTTP layer,
tests) hold the instance they were given.
"""

import dataclasses
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from challenges.service import claim_reward, record_metric, record_progress
from challenges.types import METRIC_TRAININGS, WeeklyChallenge, WeeklyChallengeSet
from config import DEFAULT_CONSTANTS, GameConstants
from economy.guard import affordability, apply_cost
from economy.types import Cost
from effects.ledger import (
    applicable_actions,
    apply_recovery_action,
    effective_stats,
    find_effect,
    get_active_effects,
    get_active_event_effects,
    total_stat_modifier,
)
from effects.types import ActiveEffect
from errors import UNKNOWN_EFFECT, UNKNOWN_RIVAL, CareerError
from events.service import append_history, dismiss_event, resolve_event
from events.types import WeeklyEvent
from jobs.catalog import JOBS
from jobs.service import missing_requirements, quit_job, take_job
from jobs.types import JobContract
from matches.service import game_cost, record_game_result
from matches.simulator import ReferenceSimulator, opponent_score
from matches.types import GameResult, ScoreSimulator
from rankings.service import latest_snapshot, record_rival_result
from rankings.types import RankingsSnapshot, Rival
from rng import rng_for
from training.catalog import QUICK_TRAINING
from training.service import train, training_gain
from training.types import TrainingSession

from .clock import WeekReport, advance_week
from .profile import go_professional
from .state import CareerState
from .types import Profile

logger = logging.getLogger(__name__)

Entitlements = Callable[[], bool]


def _no_entitlements() -> bool:
    return False


class CareerEngine:
    def __init__(
        self,
        state: CareerState,
        constants: GameConstants = DEFAULT_CONSTANTS,
        *,
        entitlements: Optional[Entitlements] = None,
        simulator: Optional[ScoreSimulator] = None,
    ) -> None:
        self._state = state
        self._constants = constants
        self._entitlements = entitlements or _no_entitlements
        self._simulator: ScoreSimulator = simulator or ReferenceSimulator()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> CareerState:
        return self._state

    @property
    def constants(self) -> GameConstants:
        return self._constants

    @property
    def profile(self) -> Profile:
        return self._state.profile

    @property
    def has_remove_ads(self) -> bool:
        """Read-only monetization entitlement (no gameplay effect)."""
        return bool(self._entitlements())

    def get_active_effects(self) -> Tuple[ActiveEffect, ...]:
        return get_active_effects(self._state.active_effects)

    def get_active_event_effects(self) -> Tuple[ActiveEffect, ...]:
        return get_active_event_effects(self._state.active_effects)

    def get_weekly_challenges(self) -> Tuple[WeeklyChallenge, ...]:
        return tuple(self._state.challenges.challenges)

    def get_pending_event(self) -> Optional[WeeklyEvent]:
        return self._state.pending_event

    def get_event_history(self) -> Tuple[WeeklyEvent, ...]:
        return tuple(self._state.event_history)

    def get_rankings_snapshot(self) -> RankingsSnapshot:
        s = self._state
        return latest_snapshot(s.rankings, s.profile, s.active_effects, s.base_seed, self._constants)

    def total_stat_modifier(self, stat: str) -> int:
        return total_stat_modifier(self._state.active_effects, stat)

    def effective_stats(self) -> Dict[str, int]:
        return effective_stats(self._state.profile, self._state.active_effects, self._constants)

    def recovery_options(self, effect_id: str) -> List[Dict[str, Any]]:
        """Recovery actions that treat ``effect_id`` with an affordability hint."""
        effect = find_effect(self._state.active_effects, str(effect_id))
        if effect is None:
            raise CareerError(UNKNOWN_EFFECT, "no active effect with that id", {"effect_id": effect_id})
        out: List[Dict[str, Any]] = []
        for action in applicable_actions(effect):
            cost = Cost(money=action.money_cost, energy=action.energy_cost)
            missing = affordability(cost, self._state.profile)
            out.append({"action": action.to_dict(), "affordable": missing is None, "missing": missing})
        return out

    @property
    def current_job(self) -> Optional[JobContract]:
        return self._state.job

    def job_options(self) -> List[Dict[str, Any]]:
        profile = self._state.profile
        return [{"job": job.to_dict(), "missing": missing_requirements(job, profile)} for job in JOBS]

    def training_options(self) -> List[Dict[str, Any]]:
        profile = self._state.profile
        out: List[Dict[str, Any]] = []
        for option in QUICK_TRAINING:
            value = profile.stat(option.stat)
            out.append(
                {
                    "option": option.to_dict(),
                    "value": value,
                    "gain": min(training_gain(value, self._constants), max(0, self._constants.STAT_MAX - value)),
                    "affordable": affordability(Cost(energy=option.energy_cost), profile) is None,
                }
            )
        return out

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _commit(self, **changes: Any) -> None:
        self._state = dataclasses.replace(self._state, **changes)

    def apply_recovery_action(self, action_id: str, effect_id: str) -> Profile:
        effects, profile = apply_recovery_action(
            self._state.active_effects, self._state.profile, action_id, effect_id
        )
        self._commit(active_effects=effects, profile=profile)
        return profile

    def claim_challenge_reward(self, challenge_id: str) -> Profile:
        challenges, profile = claim_reward(self._state.challenges, challenge_id, self._state.profile, self._constants)
        self._commit(challenges=challenges, profile=profile)
        return profile

    def record_challenge_progress(self, challenge_id: str, delta: int) -> WeeklyChallenge:
        challenges: WeeklyChallengeSet = record_progress(self._state.challenges, challenge_id, int(delta))
        self._commit(challenges=challenges)
        return next(c for c in challenges.challenges if c.id == str(challenge_id))

    def resolve_event(self, choice_id: str) -> WeeklyEvent:
        s = self._state
        res = resolve_event(s.pending_event, choice_id, s.profile, s.active_effects, self._constants)
        self._commit(
            profile=res.profile,
            active_effects=res.effects,
            pending_event=None,
            event_history=append_history(s.event_history, res.event, self._constants),
        )
        return res.event

    def dismiss_event(self) -> WeeklyEvent:
        s = self._state
        closed = dismiss_event(s.pending_event)
        self._commit(pending_event=None, event_history=append_history(s.event_history, closed, self._constants))
        return closed

    def advance_week(self) -> WeekReport:
        new_state, report = advance_week(self._state, self._constants)
        self._state = new_state
        return report

    def record_game_result(self, result: GameResult) -> Profile:
        s = self._state
        recorded = record_game_result(s.profile, s.challenges, s.rankings, result, self._constants)
        self._commit(profile=recorded.profile, challenges=recorded.challenges, rankings=recorded.rankings)
        return recorded.profile

    def play_game(self, simulator: Optional[ScoreSimulator] = None, *, opponent_id: Optional[str] = None) -> GameResult:
        """Pay the lane fee and energy, simulate one game, and record it.

        With ``opponent_id`` the game is a head-to-head against that rival and
        the result is folded into the rival record.
        """
        s = self._state
        rival: Optional[Rival] = None
        if opponent_id is not None:
            rival = next((r for r in s.rankings.rivals if r.id == str(opponent_id)), None)
            if rival is None:
                raise CareerError(UNKNOWN_RIVAL, "no rival with that id", {"rival_id": opponent_id})

        profile = apply_cost(game_cost(self._constants), s.profile, reason="game")
        rng = rng_for(s.base_seed, "game", profile.current_season, profile.current_week, profile.total_games_played)
        stats = effective_stats(profile, s.active_effects, self._constants)
        result = (simulator or self._simulator).simulate_game(stats, int(profile.energy), rng)
        if rival is not None:
            opp = opponent_score(rival.average, rng)
            result = dataclasses.replace(
                result,
                opponent_id=rival.id,
                opponent_score=opp,
                won=int(result.score) > opp,
            )

        recorded = record_game_result(profile, s.challenges, s.rankings, result, self._constants)
        self._commit(profile=recorded.profile, challenges=recorded.challenges, rankings=recorded.rankings)
        return result

    def record_rival_result(self, rival_id: str, won: bool) -> Rival:
        rankings = record_rival_result(self._state.rankings, rival_id, bool(won))
        self._commit(rankings=rankings)
        return next(r for r in rankings.rivals if r.id == str(rival_id))

    def go_professional(self) -> Profile:
        profile = go_professional(self._state.profile, self._constants)
        self._commit(profile=profile)
        return profile

    def train(self, stat: str) -> TrainingSession:
        """Run one quick drill; counts toward training challenges."""
        profile, session = train(self._state.profile, stat, self._constants)
        challenges = record_metric(self._state.challenges, METRIC_TRAININGS, 1)
        self._commit(profile=profile, challenges=challenges)
        return session

    def take_job(self, job_id: str) -> JobContract:
        contract, profile = take_job(self._state.job, job_id, self._state.profile, self._constants)
        self._commit(job=contract, profile=profile)
        return contract

    def quit_job(self) -> JobContract:
        left = quit_job(self._state.job)
        self._commit(job=None)
        return left
