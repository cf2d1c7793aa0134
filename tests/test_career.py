from __future__ import annotations

import dataclasses

import pytest

from career.clock import advance_week, next_week
from career.engine import CareerEngine
from career.profile import generate_starter_stats, go_professional, new_career_state
from career.state import CareerState
from career.types import SKILL_STATS, NewProfileData
from challenges.types import METRIC_TRAININGS, WeeklyChallenge, WeeklyChallengeSet
from config import load_constants
from errors import (
    INSUFFICIENT_RESOURCES,
    INVALID_PROFILE,
    NO_PENDING_EVENT,
    NOT_APPLICABLE,
    NOT_ELIGIBLE,
    UNKNOWN_EFFECT,
    UNKNOWN_RIVAL,
    UNKNOWN_TRAINING,
    CareerError,
)
from jobs.types import JobContract, JobSettlement
from matches.types import GameResult


QUIET = load_constants({"EVENT_RATE": 0.0})


@pytest.fixture
def state(new_profile_data) -> CareerState:
    return new_career_state(new_profile_data, 2024, QUIET)


def test_new_career_starts_at_week_one(state, constants):
    p = state.profile
    assert (p.current_season, p.current_week) == (1, 1)
    assert (p.money, p.energy) == (constants.STARTING_MONEY, constants.STARTING_ENERGY)
    assert p.bowling_average is None and not p.is_professional
    assert set(SKILL_STATS) <= set(p.stats)
    assert len(state.challenges.challenges) == constants.CHALLENGES_PER_WEEK
    assert state.rankings.unlocked_regions == ("local",)
    assert len(state.rankings.rivals) == constants.RIVAL_COUNT
    assert state.pending_event is None


def test_starter_stats_are_seeded(constants):
    stats = generate_starter_stats(1, constants)
    assert stats == generate_starter_stats(1, constants)
    assert stats["reputation"] == constants.STARTING_REPUTATION
    assert all(constants.STAT_MIN <= stats[name] <= constants.STAT_MAX for name in SKILL_STATS)


def test_new_profile_validation(constants):
    with pytest.raises(CareerError) as exc:
        new_career_state(NewProfileData(first_name=" ", last_name="X"), 1, constants)
    assert exc.value.code == INVALID_PROFILE
    with pytest.raises(CareerError):
        new_career_state(NewProfileData(first_name="A", last_name="B", bowling_style="backup"), 1, constants)


def test_next_week_rolls_the_season(constants):
    assert next_week(1, 5, constants) == (1, 6)
    assert next_week(3, constants.SEASON_LENGTH, constants) == (4, 1)


def test_advance_week_resets_energy_and_installs_challenges(state):
    drained = dataclasses.replace(state, profile=dataclasses.replace(state.profile, energy=0))
    new_state, report = advance_week(drained, QUIET)
    assert (new_state.profile.current_season, new_state.profile.current_week) == (1, 2)
    assert new_state.profile.energy == QUIET.MAX_ENERGY
    assert report.energy_refilled == QUIET.MAX_ENERGY
    assert report.job == JobSettlement()
    assert (new_state.challenges.season, new_state.challenges.week) == (1, 2)
    assert all(c.id.endswith("-s1w2") for c in new_state.challenges.challenges)
    assert report.rankings.week == 2


def test_week_start_pays_the_job_and_counts_it_down(state):
    contract = JobContract(job_id="dog-sitting", title="Dog Sitting", weekly_pay=330, energy_cost=13, weeks_remaining=2)
    broke = dataclasses.replace(state.profile, money=0, energy=0)
    s, report = advance_week(dataclasses.replace(state, profile=broke, job=contract), QUIET)
    assert s.profile.money == 330
    assert s.profile.energy == QUIET.MAX_ENERGY - 13
    assert s.job.weeks_remaining == 1
    assert report.job == JobSettlement(pay=330, energy_cost=13)

    s, report = advance_week(s, QUIET)
    assert s.profile.money == 660
    assert s.job is None
    assert report.job.finished_job_id == "dog-sitting"

    s, report = advance_week(s, QUIET)
    assert s.profile.money == 660
    assert s.profile.energy == QUIET.MAX_ENERGY


def test_season_rollover(state):
    last = dataclasses.replace(state, profile=dataclasses.replace(state.profile, current_week=QUIET.SEASON_LENGTH))
    new_state, report = advance_week(last, QUIET)
    assert (new_state.profile.current_season, new_state.profile.current_week) == (2, 1)
    assert report.season_rolled_over


def test_advance_week_is_deterministic(new_profile_data):
    c = load_constants({"EVENT_RATE": 1.0})
    start = new_career_state(new_profile_data, 77, c)
    a, b = start, start
    for _ in range(6):
        a, _ = advance_week(a, c)
        b, _ = advance_week(b, c)
    assert a == b


def test_one_week_slump_expires_at_settlement(state, make_effect):
    slump = make_effect("slump-1", "slump", weeks=1, consistency=-3)
    new_state, report = advance_week(dataclasses.replace(state, active_effects=(slump,)), QUIET)
    assert new_state.active_effects == ()
    assert [e.id for e in report.expired_effects] == ["slump-1"]


def test_health_roll_uses_end_of_week_energy_and_is_not_ticked_that_week(state):
    c = load_constants({"EVENT_RATE": 0.0, "INJURY_RISK_BASE": 1.0, "INJURY_RISK_CAP": 1.0})
    drained = dataclasses.replace(state, profile=dataclasses.replace(state.profile, energy=0))
    new_state, report = advance_week(drained, c)
    assert len(report.new_effects) == 1
    hit = report.new_effects[0]
    assert hit.id.endswith("-s1w1-1")
    assert new_state.active_effects == (hit,)
    assert new_state.effect_seq == 1
    assert c.EFFECT_WEEKS_MIN <= hit.weeks_remaining <= c.EFFECT_WEEKS_MAX


def test_rested_player_never_gets_hurt(state):
    c = load_constants({"EVENT_RATE": 0.0, "INJURY_RISK_BASE": 1.0, "INJURY_RISK_CAP": 1.0})
    s = state
    for _ in range(5):
        s, report = advance_week(s, c)
        assert report.new_effects == ()


def test_pending_event_is_not_replaced(state, make_event):
    c = load_constants({"EVENT_RATE": 1.0})
    pending = make_event(event_id="held-s1w1")
    new_state, report = advance_week(dataclasses.replace(state, pending_event=pending), c)
    assert new_state.pending_event == pending
    assert report.new_event is None


def test_engine_resolve_moves_event_to_history(state, make_event, expensive_choice):
    poor = dataclasses.replace(state.profile, money=100, energy=50)
    before = dataclasses.replace(state, profile=poor, pending_event=make_event(expensive_choice))
    engine = CareerEngine(before, QUIET)

    with pytest.raises(CareerError) as exc:
        engine.resolve_event("buy")
    assert exc.value.code == INSUFFICIENT_RESOURCES
    assert engine.state is before

    closed = engine.dismiss_event()
    assert engine.get_pending_event() is None
    assert engine.get_event_history()[-1] == closed
    with pytest.raises(CareerError) as exc:
        engine.dismiss_event()
    assert exc.value.code == NO_PENDING_EVENT


def test_engine_recovery_flow(state, make_effect):
    injury = make_effect("inj", "injury", weeks=3, accuracy=-3)
    engine = CareerEngine(dataclasses.replace(state, active_effects=(injury,)), QUIET)
    options = {o["action"]["id"]: o for o in engine.recovery_options("inj")}
    assert set(options) == {"rest-week", "physical-therapy"}
    assert options["physical-therapy"]["affordable"]

    engine.apply_recovery_action("physical-therapy", "inj")
    assert engine.get_active_effects()[0].weeks_remaining == 1
    assert engine.profile.money == QUIET.STARTING_MONEY - 300

    with pytest.raises(CareerError) as exc:
        engine.recovery_options("missing")
    assert exc.value.code == UNKNOWN_EFFECT


def test_engine_claims_challenge_once(state):
    engine = CareerEngine(state, QUIET)
    target = engine.get_weekly_challenges()[0]
    updated = engine.record_challenge_progress(target.id, target.target)
    assert updated.is_complete
    money = engine.profile.money
    engine.claim_challenge_reward(target.id)
    assert engine.profile.money == money + target.reward.cash
    with pytest.raises(CareerError):
        engine.claim_challenge_reward(target.id)


def test_play_game_charges_and_records(state):
    engine = CareerEngine(state, QUIET)
    result = engine.play_game()
    p = engine.profile
    assert p.money == QUIET.STARTING_MONEY - QUIET.GAME_LANE_FEE
    assert p.energy == QUIET.STARTING_ENERGY - QUIET.GAME_ENERGY_COST
    assert p.total_games_played == 1
    assert p.bowling_average == result.score


def test_play_game_without_energy_changes_nothing(state):
    tired = dataclasses.replace(state, profile=dataclasses.replace(state.profile, energy=QUIET.GAME_ENERGY_COST - 1))
    engine = CareerEngine(tired, QUIET)
    with pytest.raises(CareerError) as exc:
        engine.play_game()
    assert exc.value.code == INSUFFICIENT_RESOURCES
    assert engine.state is tired


def test_play_game_against_rival(state):
    engine = CareerEngine(state, QUIET)
    rival = state.rankings.rivals[0]
    result = engine.play_game(opponent_id=rival.id)
    assert result.opponent_id == rival.id
    assert result.won == (result.score > result.opponent_score)
    h2h = next(r for r in engine.state.rankings.rivals if r.id == rival.id).head_to_head
    assert h2h.wins + h2h.losses == 1

    with pytest.raises(CareerError) as exc:
        engine.play_game(opponent_id="ghost")
    assert exc.value.code == UNKNOWN_RIVAL


def test_external_game_result_and_rival_result(state):
    engine = CareerEngine(state, QUIET)
    engine.record_game_result(GameResult(score=210))
    assert engine.profile.bowling_average == 210
    rival = engine.record_rival_result(state.rankings.rivals[1].id, False)
    assert rival.head_to_head.losses == 1


def test_go_professional(make_profile, constants):
    with pytest.raises(CareerError) as exc:
        go_professional(make_profile(total_games_played=5, bowling_average=230), constants)
    assert exc.value.code == NOT_ELIGIBLE

    with pytest.raises(CareerError) as exc:
        go_professional(make_profile(total_games_played=20, bowling_average=180), constants)
    assert exc.value.code == NOT_ELIGIBLE

    ready = make_profile(total_games_played=20, bowling_average=210, money=6000, energy=100)
    pro = go_professional(ready, constants)
    assert pro.is_professional
    assert pro.money == 6000 - constants.PRO_APPLICATION_COST

    with pytest.raises(CareerError) as exc:
        go_professional(pro, constants)
    assert exc.value.code == NOT_ELIGIBLE

    broke = make_profile(total_games_played=20, bowling_average=210, money=0)
    with pytest.raises(CareerError) as exc:
        go_professional(broke, constants)
    assert exc.value.code == INSUFFICIENT_RESOURCES


def test_training_raises_the_stat_and_counts_for_challenges(state):
    drills = WeeklyChallengeSet(
        season=1,
        week=1,
        challenges=(WeeklyChallenge(id="t-s1w1", metric=METRIC_TRAININGS, name="", description="", target=2),),
    )
    profile = dataclasses.replace(state.profile, stats={**state.profile.stats, "accuracy": 40})
    engine = CareerEngine(dataclasses.replace(state, profile=profile, challenges=drills), QUIET)

    session = engine.train("accuracy")
    assert (session.before, session.after, session.gain) == (40, 43, 3)
    assert engine.profile.stat("accuracy") == 43
    assert engine.profile.energy == QUIET.STARTING_ENERGY - 15
    assert engine.get_weekly_challenges()[0].progress == 1

    engine.train("throwPower")
    assert engine.get_weekly_challenges()[0].is_complete
    assert engine.profile.energy == QUIET.STARTING_ENERGY - 35


def test_failed_training_changes_nothing(state):
    tired = dataclasses.replace(state, profile=dataclasses.replace(state.profile, energy=10))
    engine = CareerEngine(tired, QUIET)
    for stat, code in (("accuracy", INSUFFICIENT_RESOURCES), ("hookControl", UNKNOWN_TRAINING)):
        with pytest.raises(CareerError) as exc:
            engine.train(stat)
        assert exc.value.code == code
    assert engine.state is tired


def test_engine_job_lifecycle(state):
    engine = CareerEngine(state, QUIET)
    assert engine.current_job is None
    by_id = {o["job"]["id"]: o for o in engine.job_options()}
    assert by_id["dog-sitting"]["missing"] == {}

    contract = engine.take_job("dog-sitting")
    assert engine.current_job == contract
    assert engine.profile.energy == QUIET.STARTING_ENERGY - QUIET.JOB_APPLICATION_ENERGY

    with pytest.raises(CareerError) as exc:
        engine.take_job("retail")
    assert exc.value.code == NOT_APPLICABLE

    assert engine.quit_job() == contract
    assert engine.current_job is None
    with pytest.raises(CareerError) as exc:
        engine.quit_job()
    assert exc.value.code == NOT_APPLICABLE


def test_entitlement_is_read_through(state):
    assert CareerEngine(state).has_remove_ads is False
    assert CareerEngine(state, entitlements=lambda: True).has_remove_ads is True


def test_effective_stats_include_event_buffs(state, make_effect):
    buff = make_effect("buff", "event-buff", weeks=2, accuracy=5)
    engine = CareerEngine(dataclasses.replace(state, active_effects=(buff,)), QUIET)
    assert engine.total_stat_modifier("accuracy") == 5
    assert engine.effective_stats()["accuracy"] == min(QUIET.STAT_MAX, state.profile.stat("accuracy") + 5)
    assert [e.id for e in engine.get_active_event_effects()] == ["buff"]
