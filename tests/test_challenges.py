from __future__ import annotations

import pytest

from challenges.catalog import CHALLENGE_TEMPLATES
from challenges.service import claim_reward, install_weekly_challenges, record_metric, record_progress
from challenges.types import ChallengeReward, WeeklyChallenge, WeeklyChallengeSet
from errors import ALREADY_CLAIMED, INVALID_PROGRESS, NOT_COMPLETE, UNKNOWN_CHALLENGE, CareerError
from rng import rng_for


def _set(*challenges: WeeklyChallenge) -> WeeklyChallengeSet:
    return WeeklyChallengeSet(season=1, week=1, challenges=tuple(challenges))


def _challenge(cid: str = "c1", metric: str = "games", target: int = 3, progress: int = 0, cash: int = 50) -> WeeklyChallenge:
    return WeeklyChallenge(
        id=cid,
        metric=metric,
        name=cid,
        description="",
        target=target,
        reward=ChallengeReward(cash=cash),
        progress=progress,
    )


def test_claim_pays_exactly_once(make_profile, constants):
    challenges = _set(_challenge(progress=3))
    challenges, profile = claim_reward(challenges, "c1", make_profile(money=0), constants)
    assert profile.money == 50
    assert challenges.get("c1").claimed

    with pytest.raises(CareerError) as exc:
        claim_reward(challenges, "c1", profile, constants)
    assert exc.value.code == ALREADY_CLAIMED
    assert profile.money == 50


def test_claim_incomplete_and_unknown(make_profile, constants):
    challenges = _set(_challenge(progress=2))
    with pytest.raises(CareerError) as exc:
        claim_reward(challenges, "c1", make_profile(), constants)
    assert exc.value.code == NOT_COMPLETE
    assert exc.value.details == {"challenge_id": "c1", "progress": 2, "target": 3}

    with pytest.raises(CareerError) as exc:
        claim_reward(challenges, "nope", make_profile(), constants)
    assert exc.value.code == UNKNOWN_CHALLENGE


def test_claim_reward_grants_every_component(make_profile, constants):
    c = WeeklyChallenge(
        id="c1",
        metric="games",
        name="",
        description="",
        target=1,
        reward=ChallengeReward(cash=10, reputation=2, energy=5, cosmetic_token=1),
        progress=1,
    )
    _, p = claim_reward(_set(c), "c1", make_profile(money=0, energy=50, reputation=5), constants)
    assert (p.money, p.energy, p.reputation, p.cosmetic_tokens) == (10, 55, 7, 1)


def test_progress_is_capped_at_target():
    challenges = record_progress(_set(_challenge(target=3)), "c1", 10)
    assert challenges.get("c1").progress == 3


def test_negative_progress_is_rejected():
    with pytest.raises(CareerError) as exc:
        record_progress(_set(_challenge()), "c1", -1)
    assert exc.value.code == INVALID_PROGRESS


def test_record_metric_skips_claimed_challenges():
    claimed = WeeklyChallenge(id="done", metric="games", name="", description="", target=1, progress=1, claimed=True)
    challenges = record_metric(_set(claimed, _challenge("open", metric="games")), "games", 1)
    assert challenges.get("done").progress == 1
    assert challenges.get("open").progress == 1


def test_install_draws_distinct_metrics_deterministically(make_profile, constants):
    p = make_profile(current_season=2, current_week=7)
    a = install_weekly_challenges(p, rng_for(99, "challenges", 2, 7), constants)
    b = install_weekly_challenges(p, rng_for(99, "challenges", 2, 7), constants)
    assert a == b
    assert (a.season, a.week) == (2, 7)
    assert len(a.challenges) == constants.CHALLENGES_PER_WEEK
    assert len({c.metric for c in a.challenges}) == len(a.challenges)
    assert all(c.id.endswith("-s2w7") and c.progress == 0 and not c.claimed for c in a.challenges)


def test_catalog_templates_have_positive_targets():
    assert all(t.target > 0 for t in CHALLENGE_TEMPLATES)
