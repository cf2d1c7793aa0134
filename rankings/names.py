from __future__ import annotations

import random
from typing import Tuple

FIRST_NAMES: Tuple[str, ...] = (
    "Mike", "Dave", "Tom", "Chris", "Steve", "Bob", "Jim", "Dan", "Joe", "Pete",
    "Ryan", "Matt", "Kevin", "Brian", "Jason", "Eric", "Mark", "Tony", "Jeff", "Scott",
    "Sam", "Nick", "Alex", "Tyler", "Jake", "Adam", "Chad", "Derek", "Kyle", "Sean",
    "Lisa", "Sarah", "Emily", "Amy", "Katie", "Jen", "Ashley", "Kelly", "Nicole", "Rachel",
)

LAST_NAMES: Tuple[str, ...] = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Davis", "Wilson", "Taylor", "Anderson", "Thomas",
    "Jackson", "White", "Harris", "Martin", "Garcia", "Martinez", "Robinson", "Clark", "Rodriguez", "Lewis",
    "Lee", "Walker", "Hall", "Allen", "Young", "King", "Wright", "Hill", "Scott", "Green",
    "Baker", "Adams", "Nelson", "Carter", "Mitchell", "Perez", "Roberts", "Turner", "Phillips", "Campbell",
)


def random_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
