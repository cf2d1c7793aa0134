from __future__ import annotations

"""Weekly event resolver.

State machine per career: no event -> pending -> resolved. Only the career
clock creates events; the player leaves the pending state through
:func:`resolve_event` or :func:`dismiss_event`.
"""

import dataclasses
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from career.types import Profile
from config import GameConstants
from economy.guard import apply_cost, grant
from effects.ledger import add_effect
from effects.types import EFFECT_EVENT_BUFF, EFFECT_EVENT_PENALTY, ActiveEffect
from errors import NO_PENDING_EVENT, UNKNOWN_CHOICE, CareerError
from rng import weighted_choice

from .catalog import CATEGORY_WEIGHTS, WEEKLY_EVENT_TEMPLATES
from .types import EventChoice, EventTemplate, StatChange, WeeklyEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EventResolution:
    profile: Profile
    effects: Tuple[ActiveEffect, ...]
    event: WeeklyEvent
    new_effects: Tuple[ActiveEffect, ...] = ()


def is_pending(event: Optional[WeeklyEvent]) -> bool:
    return event is not None and not event.resolved


def _instantiate(t: EventTemplate, season: int, week: int) -> WeeklyEvent:
    return WeeklyEvent(
        id=f"{t.id}-s{int(season)}w{int(week)}",
        template_id=t.id,
        category=t.category,
        title=t.title,
        description=t.description,
        is_major_event=bool(t.is_major),
        choices=tuple(t.choices),
        season=int(season),
        week=int(week),
    )


def maybe_generate_event(
    pending: Optional[WeeklyEvent],
    profile: Profile,
    rng: random.Random,
    constants: GameConstants,
    *,
    templates: Sequence[EventTemplate] = WEEKLY_EVENT_TEMPLATES,
) -> Optional[WeeklyEvent]:
    """Roll for this week's event.

    Returns None when an event is still pending or the roll misses. The
    major/minor pool is rolled first; an empty pool falls back to the other.
    """
    if is_pending(pending):
        return None

    roll = rng.random()
    if roll >= float(constants.EVENT_RATE):
        logger.debug("no event this week roll=%.3f rate=%.3f", roll, constants.EVENT_RATE)
        return None

    want_major = rng.random() < float(constants.MAJOR_EVENT_RATE)
    eligible = [t for t in templates if profile.is_professional or not t.requires_pro]
    pool = [t for t in eligible if bool(t.is_major) == want_major]
    if not pool:
        pool = [t for t in eligible if bool(t.is_major) != want_major]
    if not pool:
        return None

    weights = [float(t.weight) * float(CATEGORY_WEIGHTS.get(t.category, 1.0)) for t in pool]
    t = weighted_choice(rng, pool, weights)
    event = _instantiate(t, profile.current_season, profile.current_week)
    logger.info("event raised id=%s major=%s", event.id, event.is_major_event)
    return event


def _effect_from_change(
    event: WeeklyEvent,
    choice: EventChoice,
    change: StatChange,
    effect_type: str,
) -> ActiveEffect:
    sign = 1 if effect_type == EFFECT_EVENT_BUFF else -1
    suffix = "buff" if effect_type == EFFECT_EVENT_BUFF else "penalty"
    return ActiveEffect(
        id=f"{event.id}-{choice.id}-{suffix}",
        type=effect_type,
        name=event.title,
        description=choice.label,
        weeks_remaining=int(change.weeks),
        stat_deltas={change.stat: sign * int(change.amount)},
        source_event_id=event.id,
    )


def resolve_event(
    pending: Optional[WeeklyEvent],
    choice_id: str,
    profile: Profile,
    effects: Sequence[ActiveEffect],
    constants: GameConstants,
) -> EventResolution:
    """Apply the chosen response: cost, then outcome, then mark resolved.

    Raises NO_PENDING_EVENT, UNKNOWN_CHOICE, or INSUFFICIENT_RESOURCES; on any
    failure the caller's profile and ledger are untouched.
    """
    if pending is None or pending.resolved:
        raise CareerError(NO_PENDING_EVENT, "no pending event")

    choice = pending.get_choice(str(choice_id))
    if choice is None:
        raise CareerError(
            UNKNOWN_CHOICE,
            "choice is not offered by the pending event",
            {"event_id": pending.id, "choice_id": choice_id, "choices": [c.id for c in pending.choices]},
        )

    new_profile = apply_cost(choice.cost, profile, reason=f"event:{pending.id}")

    o = choice.outcome
    new_profile = grant(
        new_profile,
        constants,
        money=int(o.money),
        energy=int(o.energy),
        reputation=int(o.reputation),
    )

    ledger = tuple(effects)
    created: List[ActiveEffect] = []
    if o.stat_bonus is not None:
        created.append(_effect_from_change(pending, choice, o.stat_bonus, EFFECT_EVENT_BUFF))
    if o.stat_penalty is not None:
        created.append(_effect_from_change(pending, choice, o.stat_penalty, EFFECT_EVENT_PENALTY))
    for e in created:
        ledger = add_effect(ledger, e)

    resolved = dataclasses.replace(pending, resolved=True, choice_made=choice.id)
    logger.info("event resolved id=%s choice=%s", pending.id, choice.id)
    return EventResolution(profile=new_profile, effects=ledger, event=resolved, new_effects=tuple(created))


def dismiss_event(pending: Optional[WeeklyEvent]) -> WeeklyEvent:
    """Close the pending event with no cost and no outcome."""
    if pending is None or pending.resolved:
        raise CareerError(NO_PENDING_EVENT, "no pending event")
    logger.info("event dismissed id=%s", pending.id)
    return dataclasses.replace(pending, resolved=True, choice_made=None)


def append_history(
    history: Sequence[WeeklyEvent],
    event: WeeklyEvent,
    constants: GameConstants,
) -> Tuple[WeeklyEvent, ...]:
    limit = max(0, int(constants.EVENT_HISTORY_LIMIT))
    out = tuple(history) + (event,)
    if limit and len(out) > limit:
        out = out[-limit:]
    return out
