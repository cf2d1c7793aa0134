from __future__ import annotations

from typing import Any, Dict

import pytest

from career.types import REPUTATION, SKILL_STATS, NewProfileData, Profile
from config import DEFAULT_CONSTANTS, GameConstants
from economy.types import Cost
from effects.types import ActiveEffect
from events.types import EventChoice, EventOutcome, WeeklyEvent
from saves.registry import SaveRegistry
from saves.repo import MemorySaveStore


def _stats(skill: int = 50, reputation: int = 5) -> Dict[str, int]:
    out = {name: int(skill) for name in SKILL_STATS}
    out[REPUTATION] = int(reputation)
    return out


@pytest.fixture
def constants() -> GameConstants:
    return DEFAULT_CONSTANTS


@pytest.fixture
def make_profile():
    def _make(**overrides: Any) -> Profile:
        skill = overrides.pop("skill", 50)
        reputation = overrides.pop("reputation", 5)
        fields: Dict[str, Any] = {
            "first_name": "Jamie",
            "last_name": "Pinsetter",
            "handedness": "right",
            "bowling_style": "tweener",
            "money": 500,
            "energy": 100,
            "stats": _stats(skill, reputation),
        }
        fields.update(overrides)
        return Profile(**fields)

    return _make


@pytest.fixture
def make_effect():
    def _make(effect_id: str = "injury-1", effect_type: str = "injury", weeks: int = 2, **deltas: int) -> ActiveEffect:
        return ActiveEffect(
            id=effect_id,
            type=effect_type,
            name=effect_id,
            description="",
            weeks_remaining=weeks,
            stat_deltas=dict(deltas or {"accuracy": -3}),
        )

    return _make


@pytest.fixture
def make_event():
    def _make(*choices: EventChoice, event_id: str = "test-event-s1w1") -> WeeklyEvent:
        if not choices:
            choices = (EventChoice(id="ok", label="OK"),)
        return WeeklyEvent(
            id=event_id,
            template_id="test-event",
            category="money",
            title="Test Event",
            description="",
            is_major_event=False,
            choices=tuple(choices),
            season=1,
            week=1,
        )

    return _make


@pytest.fixture
def expensive_choice() -> EventChoice:
    return EventChoice(id="buy", label="Buy", cost=Cost(money=150), outcome=EventOutcome(reputation=1))


@pytest.fixture
def new_profile_data() -> NewProfileData:
    return NewProfileData(first_name="Jamie", last_name="Pinsetter", bowling_style="cranker", handedness="left")


@pytest.fixture
def registry() -> SaveRegistry:
    return SaveRegistry(
        MemorySaveStore(),
        clock=lambda: "2025-01-01T00:00:00Z",
        seed_factory=lambda: 12345,
    )
