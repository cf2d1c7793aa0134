from __future__ import annotations

import pytest

from errors import UNKNOWN_RIVAL, CareerError
from rankings.service import (
    _place_player,
    eligible_regions,
    generate_leaderboard,
    record_rival_result,
    snapshot,
    unlocked_regions,
)
from rankings.types import RankingState


def test_leaderboard_is_deterministic_and_sorted(constants):
    a = generate_leaderboard(42, "local", constants)
    assert a == generate_leaderboard(42, "local", constants)
    assert len(a) == constants.LEADERBOARD_SIZE
    averages = [b.average for b in a]
    assert averages == sorted(averages, reverse=True)
    assert [b.rank for b in a] == list(range(1, len(a) + 1))


def test_higher_effective_average_never_ranks_worse(constants):
    board = generate_leaderboard(7, "regional", constants)
    ranks = [_place_player(board, avg)[0] for avg in range(100, 260, 3)]
    assert ranks == sorted(ranks, reverse=True)
    assert ranks[0] == len(board) + 1
    assert ranks[-1] == 1


def test_player_sits_above_equal_averages(constants):
    board = generate_leaderboard(7, "local", constants)
    tied = board[4]
    rank, ranked = _place_player(board, float(tied.average))
    assert rank == 1 + sum(1 for b in board if b.average > tied.average)
    assert sorted([b.rank for b in ranked] + [rank]) == list(range(1, len(board) + 2))


def test_regions_unlock_by_reputation_or_average(make_profile):
    assert eligible_regions(make_profile(reputation=0)) == ("local",)
    assert eligible_regions(make_profile(reputation=30)) == ("local", "regional", "state")
    assert eligible_regions(make_profile(reputation=0, bowling_average=175)) == ("local", "regional", "state")


def test_pro_tour_requires_professional_status(make_profile):
    amateur = make_profile(reputation=100, bowling_average=250)
    assert "pro-tour" not in eligible_regions(amateur)
    assert "pro-tour" in eligible_regions(make_profile(reputation=100, is_professional=True))


def test_unlocks_are_a_high_water_mark(make_profile):
    previous = unlocked_regions((), make_profile(reputation=50))
    assert previous == ("local", "regional", "state", "national")
    assert unlocked_regions(previous, make_profile(reputation=0)) == previous


def test_snapshot_drifts_once_per_week(make_profile, constants):
    p = make_profile(reputation=20)
    state, snap = snapshot(RankingState(), p, (), 11, constants)
    assert [r.region for r in snap.player_rankings] == ["local", "regional"]
    assert len(state.rivals) == constants.RIVAL_COUNT
    assert all(len(v) <= constants.TOP_BOWLERS_SHOWN for v in snap.top_bowlers.values())

    again, _ = snapshot(state, p, (), 11, constants)
    assert again.leaderboards == state.leaderboards

    later, later_snap = snapshot(state, make_profile(reputation=20, current_week=2), (), 11, constants)
    assert later.as_of == (1, 2)
    assert later_snap.ranking_for("local").previous_rank == snap.ranking_for("local").rank


def test_penalty_effects_never_improve_rank(make_profile, make_effect, constants):
    p = make_profile(reputation=5)
    _, clean = snapshot(RankingState(), p, (), 3, constants)
    _, hurt = snapshot(RankingState(), p, (make_effect(weeks=2, accuracy=-20, consistency=-20),), 3, constants)
    assert hurt.ranking_for("local").rank >= clean.ranking_for("local").rank


def test_rival_results_accumulate(make_profile, constants):
    state, _ = snapshot(RankingState(), make_profile(), (), 5, constants)
    rival_id = state.rivals[0].id
    state = record_rival_result(state, rival_id, True)
    state = record_rival_result(state, rival_id, False)
    state = record_rival_result(state, rival_id, True)
    h2h = next(r for r in state.rivals if r.id == rival_id).head_to_head
    assert (h2h.wins, h2h.losses, h2h.last_result) == (2, 1, "win")
    snap_rival = next(r for r in state.last_snapshot.rivals if r.id == rival_id)
    assert snap_rival.head_to_head == h2h


def test_unknown_rival(make_profile, constants):
    state, _ = snapshot(RankingState(), make_profile(), (), 5, constants)
    with pytest.raises(CareerError) as exc:
        record_rival_result(state, "nobody", True)
    assert exc.value.code == UNKNOWN_RIVAL
