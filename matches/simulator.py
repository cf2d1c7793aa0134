from __future__ import annotations

"""Reference score simulator.

A deliberately simple frame-by-frame model. The engine only depends on the
``ScoreSimulator`` protocol, so a tuned model can replace this one without
touching career logic.

Model
-----
skill  = weighted mix of accuracy / hook / consistency / rev / lane reading
strike = min(MAX_STRIKE, BASE_STRIKE + skill * CARRY * energy_mod * clutch)
spare  = SPARE_BASE * spare_mod * accuracy_mod * energy_mod * (1 - 0.05 * (pins_left - 1))
"""

import random
from typing import List, Mapping

from .types import GameResult

BASE_STRIKE_CHANCE: float = 0.08
MAX_STRIKE_CHANCE: float = 0.55
CARRY_FACTOR: float = 0.45
POCKET_HIT_CHANCE: float = 0.65
GUTTER_CHANCE: float = 0.02
SPARE_BASE_CHANCE: float = 0.75

# Stand-in for the equipment term of the mobile build (no ball inventory here).
EQUIPMENT_BASELINE: float = 0.075

LOW_ENERGY: int = 20
LOW_ENERGY_MOD: float = 0.85
MED_ENERGY: int = 50
MED_ENERGY_MOD: float = 0.95


def _s(stats: Mapping[str, int], name: str) -> float:
    return float(stats.get(name, 0))


def skill_factor(stats: Mapping[str, int]) -> float:
    return (
        _s(stats, "accuracy") * 0.25
        + _s(stats, "hookControl") * 0.20
        + _s(stats, "consistency") * 0.20
        + _s(stats, "revRate") * 0.10
        + _s(stats, "laneReading") * 0.15
    ) / 100.0 + EQUIPMENT_BASELINE


def energy_mod(energy: int) -> float:
    if energy < LOW_ENERGY:
        return LOW_ENERGY_MOD
    if energy < MED_ENERGY:
        return MED_ENERGY_MOD
    return 1.0


def score_frames(frames: List[List[int]]) -> int:
    """Standard ten-pin scoring for complete frames."""
    rolls = [p for f in frames for p in f]
    total = 0
    i = 0
    for _ in range(10):
        if i >= len(rolls):
            break
        if rolls[i] == 10:
            total += 10 + sum(rolls[i + 1 : i + 3])
            i += 1
        elif i + 1 < len(rolls) and rolls[i] + rolls[i + 1] == 10:
            total += 10 + sum(rolls[i + 2 : i + 3])
            i += 2
        else:
            total += sum(rolls[i : i + 2])
            i += 2
    return int(total)


class ReferenceSimulator:
    """Frame-by-frame simulator driven by effective stats and energy."""

    def simulate_game(self, stats: Mapping[str, int], energy: int, rng: random.Random) -> GameResult:
        skill = skill_factor(stats)
        emod = energy_mod(int(energy))
        spare_mod = (_s(stats, "spareShooting") / 100.0) * 0.5 + 0.5
        acc_mod = (_s(stats, "accuracy") / 100.0) * 0.3 + 0.7
        clutch = 1.0 + (_s(stats, "mentalToughness") / 100.0) * 0.12

        strikes = 0
        spares = 0
        streak = 0
        best_streak = 0

        def first_ball(frame_no: int) -> int:
            mod = clutch if frame_no >= 9 else 1.0
            p = min(MAX_STRIKE_CHANCE, BASE_STRIKE_CHANCE + skill * CARRY_FACTOR * emod * mod)
            if rng.random() < p:
                return 10
            if rng.random() < GUTTER_CHANCE * (1.0 - min(skill, 1.0)):
                return 0
            if rng.random() < POCKET_HIT_CHANCE * skill * emod:
                return rng.randint(7, 9)
            return rng.randint(4, 8)

        def second_ball(left: int) -> int:
            p = SPARE_BASE_CHANCE * spare_mod * acc_mod * emod * (1.0 - (left - 1) * 0.05)
            if rng.random() < p:
                return left
            return rng.randint(0, left - 1)

        def note(pins: int, fresh_rack: bool, left_before: int) -> None:
            nonlocal strikes, spares, streak, best_streak
            if fresh_rack and pins == 10:
                strikes += 1
                streak += 1
                best_streak = max(best_streak, streak)
                return
            streak = 0
            if not fresh_rack and pins == left_before:
                spares += 1

        frames: List[List[int]] = []
        for frame_no in range(1, 10):
            a = first_ball(frame_no)
            note(a, True, 10)
            if a == 10:
                frames.append([10])
                continue
            b = second_ball(10 - a)
            note(b, False, 10 - a)
            frames.append([a, b])

        tenth: List[int] = []
        a = first_ball(10)
        note(a, True, 10)
        tenth.append(a)
        if a == 10:
            b = first_ball(10)
            note(b, True, 10)
            tenth.append(b)
            if b == 10:
                c = first_ball(10)
                note(c, True, 10)
            else:
                c = second_ball(10 - b)
                note(c, False, 10 - b)
            tenth.append(c)
        else:
            b = second_ball(10 - a)
            note(b, False, 10 - a)
            tenth.append(b)
            if a + b == 10:
                c = first_ball(10)
                note(c, True, 10)
                tenth.append(c)
        frames.append(tenth)

        return GameResult(
            score=score_frames(frames),
            strikes=strikes,
            spares=spares,
            max_strike_streak=best_streak,
            frames=tuple(tuple(f) for f in frames),
        )


def opponent_score(average: int, rng: random.Random, spread: float = 20.0) -> int:
    """Rival game score drawn around the rival's average."""
    return max(0, min(300, int(round(rng.gauss(float(average), spread)))))

