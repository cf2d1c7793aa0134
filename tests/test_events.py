from __future__ import annotations

import random

import pytest

from config import load_constants
from economy.types import Cost
from errors import INSUFFICIENT_RESOURCES, NO_PENDING_EVENT, UNKNOWN_CHOICE, CareerError
from events.catalog import WEEKLY_EVENT_TEMPLATES
from events.service import append_history, dismiss_event, is_pending, maybe_generate_event, resolve_event
from events.types import EventChoice, EventOutcome, StatChange


def test_unaffordable_choice_fails_and_event_stays_pending(make_profile, make_event, expensive_choice, constants):
    event = make_event(expensive_choice)
    profile = make_profile(money=100, energy=50)
    with pytest.raises(CareerError) as exc:
        resolve_event(event, "buy", profile, (), constants)
    assert exc.value.code == INSUFFICIENT_RESOURCES
    assert is_pending(event)
    assert profile.money == 100


def test_resolve_applies_cost_outcome_and_effects(make_profile, make_event, constants):
    choice = EventChoice(
        id="train",
        label="Train",
        cost=Cost(money=30, energy=10),
        outcome=EventOutcome(
            money=5,
            reputation=2,
            stat_bonus=StatChange("accuracy", 5, 3),
            stat_penalty=StatChange("stamina", 2, 1),
        ),
    )
    event = make_event(choice)
    res = resolve_event(event, "train", make_profile(money=100, energy=50, reputation=5), (), constants)

    assert (res.profile.money, res.profile.energy, res.profile.reputation) == (75, 40, 7)
    assert res.event.resolved and res.event.choice_made == "train"
    by_type = {e.type: e for e in res.effects}
    assert by_type["event-buff"].stat_deltas == {"accuracy": 5}
    assert by_type["event-buff"].weeks_remaining == 3
    assert by_type["event-penalty"].stat_deltas == {"stamina": -2}
    assert all(e.source_event_id == event.id for e in res.new_effects)


def test_resolve_without_pending_or_with_bad_choice(make_profile, make_event, constants):
    with pytest.raises(CareerError) as exc:
        resolve_event(None, "ok", make_profile(), (), constants)
    assert exc.value.code == NO_PENDING_EVENT

    with pytest.raises(CareerError) as exc:
        resolve_event(make_event(), "nope", make_profile(), (), constants)
    assert exc.value.code == UNKNOWN_CHOICE

    closed = dismiss_event(make_event())
    with pytest.raises(CareerError) as exc:
        resolve_event(closed, "ok", make_profile(), (), constants)
    assert exc.value.code == NO_PENDING_EVENT


def test_dismiss_is_legal_even_when_every_choice_is_unaffordable(make_event, expensive_choice):
    closed = dismiss_event(make_event(expensive_choice))
    assert closed.resolved and closed.choice_made is None
    with pytest.raises(CareerError):
        dismiss_event(closed)


def test_no_new_event_while_one_is_pending(make_profile, make_event):
    c = load_constants({"EVENT_RATE": 1.0})
    assert maybe_generate_event(make_event(), make_profile(), random.Random(1), c) is None


def test_event_rate_bounds(make_profile):
    never = load_constants({"EVENT_RATE": 0.0})
    always = load_constants({"EVENT_RATE": 1.0})
    p = make_profile(current_season=1, current_week=4)
    assert maybe_generate_event(None, p, random.Random(3), never) is None
    event = maybe_generate_event(None, p, random.Random(3), always)
    assert event is not None and is_pending(event)
    assert event.id == f"{event.template_id}-s1w4"


def test_pro_only_templates_need_professional_status(make_profile):
    c = load_constants({"EVENT_RATE": 1.0})
    pro_only = tuple(t for t in WEEKLY_EVENT_TEMPLATES if t.requires_pro)
    assert pro_only
    assert maybe_generate_event(None, make_profile(), random.Random(5), c, templates=pro_only) is None
    event = maybe_generate_event(None, make_profile(is_professional=True), random.Random(5), c, templates=pro_only)
    assert event is not None


def test_history_is_bounded(make_event):
    c = load_constants({"EVENT_HISTORY_LIMIT": 2})
    history = ()
    for i in range(4):
        history = append_history(history, make_event(event_id=f"e{i}"), c)
    assert [e.id for e in history] == ["e2", "e3"]


def test_catalog_has_no_negative_money_outcomes():
    for t in WEEKLY_EVENT_TEMPLATES:
        for choice in t.choices:
            assert choice.outcome.money >= 0
            assert choice.cost.money >= 0 and choice.cost.energy >= 0
