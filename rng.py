from __future__ import annotations

"""Deterministic RNG helpers (python hash() is never used).

Every random decision in the engine draws from a ``random.Random`` seeded by
``(base_seed, purpose, season, week, ...)``. A save therefore replays the same
week identically, and tests can pin outcomes by choosing the seed.
"""

import hashlib
import random
from typing import Any


def stable_seed(*parts: Any) -> int:
    """Deterministic seed from arbitrary parts (stable across runs)."""
    h = hashlib.sha256("|".join([str(p) for p in parts]).encode("utf-8")).hexdigest()
    return int(h[:16], 16)


def rng_for(base_seed: int, *parts: Any) -> random.Random:
    return random.Random(stable_seed(int(base_seed), *parts))


def weighted_choice(rng: random.Random, items: list, weights: list) -> Any:
    """Pick one item proportionally to ``weights`` (all weights must be >= 0)."""
    if not items:
        raise ValueError("weighted_choice requires at least one item")
    total = float(sum(max(0.0, float(w)) for w in weights))
    if total <= 0:
        return items[0]
    r = rng.random() * total
    acc = 0.0
    for item, w in zip(items, weights):
        acc += max(0.0, float(w))
        if r < acc:
            return item
    return items[-1]
