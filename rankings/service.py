from __future__ import annotations

"""Ranking engine.

Each unlocked region has a persisted synthetic leaderboard seeded from the
career's base seed. Once per week the field drifts a few pins; the player is
then slotted in by effective average. Ordering is average descending, then
bowler id, and the player sits above any bowler with an equal average, so
a higher effective rating can never produce a worse rank.
"""

import dataclasses
import logging
from typing import Dict, List, Mapping, Sequence, Tuple

from career.types import SKILL_STATS, Profile
from config import GameConstants
from effects.ledger import total_stat_modifier
from effects.types import ActiveEffect
from errors import UNKNOWN_RIVAL, CareerError
from rng import rng_for

from . import config as rcfg
from .names import random_name
from .types import (
    REGIONS,
    HeadToHead,
    PlayerRanking,
    RankedBowler,
    RankingsSnapshot,
    RankingState,
    Rival,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Player rating
# ---------------------------------------------------------------------------


def estimate_average(profile: Profile) -> float:
    """Stat-derived average used before the first recorded game."""
    values = [profile.stat(s) for s in SKILL_STATS if s in profile.stats]
    if not values:
        return float(rcfg.ESTIMATE_BASE)
    return float(rcfg.ESTIMATE_BASE) + float(rcfg.ESTIMATE_PER_STAT_POINT) * (sum(values) / len(values))


def base_average(profile: Profile) -> float:
    if profile.bowling_average is not None:
        return float(profile.bowling_average)
    return estimate_average(profile)


def effective_average(profile: Profile, effects: Sequence[ActiveEffect], constants: GameConstants) -> float:
    modifier = sum(total_stat_modifier(effects, s) for s in SKILL_STATS)
    return base_average(profile) + float(constants.EFFECT_AVERAGE_WEIGHT) * float(modifier)


def rating_points(eff_average: float, reputation: int, constants: GameConstants) -> int:
    return int(round(float(eff_average) * float(constants.RATING_AVG_WEIGHT) + int(reputation) * float(constants.RATING_REP_WEIGHT)))


# ---------------------------------------------------------------------------
# Region membership
# ---------------------------------------------------------------------------


def eligible_regions(profile: Profile) -> Tuple[str, ...]:
    """Regions the profile qualifies for right now (ignores prior unlocks)."""
    avg = int(profile.bowling_average or 0)
    rep = int(profile.reputation)
    out: List[str] = []
    for region in REGIONS:
        if region in rcfg.PRO_ONLY_REGIONS and not profile.is_professional:
            continue
        threshold = rcfg.REGION_THRESHOLDS.get(region)
        if threshold is None or rep >= int(threshold[0]) or avg >= int(threshold[1]):
            out.append(region)
    return tuple(out)


def unlocked_regions(previous: Sequence[str], profile: Profile) -> Tuple[str, ...]:
    """High-water mark of prior unlocks and current eligibility, in ladder order."""
    have = set(previous) | set(eligible_regions(profile))
    return tuple(r for r in REGIONS if r in have)


# ---------------------------------------------------------------------------
# Synthetic field
# ---------------------------------------------------------------------------


def _sort_field(board: Sequence[RankedBowler]) -> List[RankedBowler]:
    return sorted(board, key=lambda b: (-int(b.average), b.id))


def generate_leaderboard(base_seed: int, region: str, constants: GameConstants) -> Tuple[RankedBowler, ...]:
    rng = rng_for(base_seed, "leaderboard", region)
    lo, hi = rcfg.REGION_AVERAGE_RANGES[region]
    bowlers: List[RankedBowler] = []
    for i in range(int(constants.LEADERBOARD_SIZE)):
        bowlers.append(
            RankedBowler(
                id=f"{region}-{i + 1:03d}",
                name=random_name(rng),
                rank=0,
                previous_rank=0,
                average=rng.randint(int(lo), int(hi)),
            )
        )
    ordered = _sort_field(bowlers)
    return tuple(dataclasses.replace(b, rank=i + 1, previous_rank=i + 1) for i, b in enumerate(ordered))


def drift_leaderboard(
    board: Sequence[RankedBowler],
    base_seed: int,
    region: str,
    season: int,
    week: int,
    constants: GameConstants,
) -> Tuple[RankedBowler, ...]:
    rng = rng_for(base_seed, "leaderboard-drift", region, season, week)
    lo, hi = rcfg.REGION_AVERAGE_RANGES[region]
    drift = int(constants.LEADERBOARD_DRIFT)
    out: List[RankedBowler] = []
    for b in board:
        avg = int(b.average) + rng.randint(-drift, drift)
        out.append(dataclasses.replace(b, average=max(int(lo), min(int(hi), avg))))
    return tuple(out)


def _place_player(
    board: Sequence[RankedBowler],
    eff_average: float,
    *,
    fresh: bool = False,
) -> Tuple[int, Tuple[RankedBowler, ...]]:
    """Rank the player and re-rank the field around the player's slot."""
    ordered = _sort_field(board)
    player_rank = 1 + sum(1 for b in ordered if float(b.average) > float(eff_average))
    ranked: List[RankedBowler] = []
    for i, b in enumerate(ordered):
        rank = i + 1 if float(b.average) > float(eff_average) else i + 2
        ranked.append(dataclasses.replace(b, rank=rank, previous_rank=rank if fresh else int(b.rank)))
    return player_rank, tuple(ranked)


# ---------------------------------------------------------------------------
# Rivals
# ---------------------------------------------------------------------------


def pick_rivals(
    base_seed: int,
    board: Sequence[RankedBowler],
    player_average: float,
    constants: GameConstants,
) -> Tuple[Rival, ...]:
    rng = rng_for(base_seed, "rivals")
    candidates = sorted(board, key=lambda b: (abs(float(b.average) - float(player_average)), b.id))
    candidates = candidates[: max(int(constants.RIVAL_COUNT), int(rcfg.RIVAL_CANDIDATE_WINDOW))]
    count = min(int(constants.RIVAL_COUNT), len(candidates))
    chosen = sorted(rng.sample(candidates, count), key=lambda b: b.id)
    return tuple(
        Rival(
            id=b.id,
            name=b.name,
            archetype=rng.choice(rcfg.RIVAL_ARCHETYPES),
            region="local",
            rank=int(b.rank),
            average=int(b.average),
        )
        for b in chosen
    )


def _refresh_rivals(rivals: Sequence[Rival], boards: Mapping[str, Sequence[RankedBowler]]) -> Tuple[Rival, ...]:
    out: List[Rival] = []
    for r in rivals:
        current = next((b for b in boards.get(r.region, ()) if b.id == r.id), None)
        if current is None:
            out.append(r)
        else:
            out.append(dataclasses.replace(r, rank=int(current.rank), average=int(current.average)))
    return tuple(out)


def record_rival_result(state: RankingState, rival_id: str, won: bool) -> RankingState:
    """Fold one externally reported head-to-head result into the rival record."""
    target = next((r for r in state.rivals if r.id == str(rival_id)), None)
    if target is None:
        raise CareerError(UNKNOWN_RIVAL, "no rival with that id", {"rival_id": rival_id})

    h = target.head_to_head
    h2h = HeadToHead(
        wins=int(h.wins) + (1 if won else 0),
        losses=int(h.losses) + (0 if won else 1),
        last_result="win" if won else "loss",
    )
    updated = dataclasses.replace(target, head_to_head=h2h)
    rivals = tuple(updated if r.id == target.id else r for r in state.rivals)

    snap = state.last_snapshot
    if snap is not None:
        snap = dataclasses.replace(
            snap,
            rivals=tuple(
                dataclasses.replace(r, head_to_head=h2h) if r.id == target.id else r for r in snap.rivals
            ),
        )
    logger.info("rival result rival=%s won=%s record=%d-%d", target.id, bool(won), h2h.wins, h2h.losses)
    return dataclasses.replace(state, rivals=rivals, last_snapshot=snap)


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


def snapshot(
    state: RankingState,
    profile: Profile,
    effects: Sequence[ActiveEffect],
    base_seed: int,
    constants: GameConstants,
) -> Tuple[RankingState, RankingsSnapshot]:
    """Recompute player ranks for every unlocked region.

    The field drifts at most once per (season, week); calling this twice in
    the same week only re-slots the player. Never raises.
    """
    season = int(profile.current_season)
    week = int(profile.current_week)
    regions = unlocked_regions(state.unlocked_regions, profile)
    new_week = state.as_of is not None and tuple(state.as_of) != (season, week)

    eff = effective_average(profile, effects, constants)
    points = rating_points(eff, profile.reputation, constants)
    prior = state.last_snapshot

    boards: Dict[str, Tuple[RankedBowler, ...]] = {}
    rankings: List[PlayerRanking] = []
    top: Dict[str, Tuple[RankedBowler, ...]] = {}
    for region in regions:
        board = state.leaderboards.get(region)
        fresh = board is None
        if board is None:
            board = generate_leaderboard(base_seed, region, constants)
        elif new_week:
            board = drift_leaderboard(board, base_seed, region, season, week, constants)

        rank, ranked = _place_player(board, eff, fresh=fresh)
        boards[region] = ranked

        prev = prior.ranking_for(region) if prior is not None else None
        rankings.append(
            PlayerRanking(
                region=region,
                rank=rank,
                previous_rank=int(prev.rank) if prev is not None else rank,
                rating_points=points,
            )
        )
        top[region] = ranked[: int(constants.TOP_BOWLERS_SHOWN)]

    rivals = state.rivals
    if not rivals and "local" in boards:
        rivals = pick_rivals(base_seed, boards["local"], base_average(profile), constants)
    rivals = _refresh_rivals(rivals, boards)

    snap = RankingsSnapshot(
        player_rankings=tuple(rankings),
        top_bowlers=top,
        rivals=rivals,
        season=season,
        week=week,
    )
    new_state = RankingState(
        leaderboards=boards,
        unlocked_regions=regions,
        rivals=rivals,
        last_snapshot=snap,
        as_of=(season, week),
    )
    newly = [r for r in regions if r not in state.unlocked_regions]
    if newly and state.unlocked_regions:
        logger.info("regions unlocked: %s", newly)
    logger.debug("rankings s%dw%d eff_avg=%.1f ranks=%s", season, week, eff, {r.region: r.rank for r in rankings})
    return new_state, snap


def latest_snapshot(
    state: RankingState,
    profile: Profile,
    effects: Sequence[ActiveEffect],
    base_seed: int,
    constants: GameConstants,
) -> RankingsSnapshot:
    """The stored snapshot, or a freshly computed one when none exists yet."""
    if state.last_snapshot is not None:
        return state.last_snapshot
    _, snap = snapshot(state, profile, effects, base_seed, constants)
    return snap

