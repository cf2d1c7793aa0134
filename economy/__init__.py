"""Economy guard package.

Public API
----------
- can_afford(cost, profile)
- apply_cost(cost, profile)
- grant(profile, constants, ...)
"""

from .guard import affordability, apply_cost, as_cost, can_afford, grant
from .types import FREE, Cost

__all__ = [
    "Cost",
    "FREE",
    "affordability",
    "apply_cost",
    "as_cost",
    "can_afford",
    "grant",
]
