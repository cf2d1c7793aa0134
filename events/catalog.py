from __future__ import annotations

"""Weekly event templates.

Notes
-----
- ``weight`` is relative within the minor or major pool.
- Money losses are declared as a choice ``cost`` so they pass through the
  economy guard; an outcome never carries negative money.
- Penalty amounts are magnitudes: ``stat_penalty(amount=3)`` means -3.
"""

from typing import Mapping, Tuple

from career.types import SKILL_STATS
from economy.types import Cost

from .types import EVENT_CATEGORIES, EventChoice, EventOutcome, EventTemplate, StatChange


# Per-category multiplier applied on top of template weights.
CATEGORY_WEIGHTS: Mapping[str, float] = {
    "performance": 1.0,
    "money": 1.0,
    "equipment": 1.0,
    "bowling": 1.0,
    "social": 0.8,
}


def _choice(choice_id: str, label: str, *, cost: Cost = Cost(), **outcome) -> EventChoice:
    return EventChoice(id=choice_id, label=label, cost=cost, outcome=EventOutcome(**outcome))


WEEKLY_EVENT_TEMPLATES: Tuple[EventTemplate, ...] = (
    # ---------------------------------------------------------------------
    # Performance
    # ---------------------------------------------------------------------
    EventTemplate(
        id="hot-streak",
        category="performance",
        title="Hot Streak!",
        description="You're in the zone! Your practice sessions have been exceptional lately.",
        weight=15,
        is_major=False,
        choices=(
            _choice("capitalize", "Capitalize (+5 Accuracy for 3 weeks)", stat_bonus=StatChange("accuracy", 5, 3)),
            _choice("rest", "Take it easy (recover 20 energy)", energy=20),
        ),
    ),
    EventTemplate(
        id="slump",
        category="performance",
        title="Rough Patch",
        description="Nothing is clicking. Your throws feel off and confidence is shaken.",
        weight=12,
        is_major=False,
        choices=(
            _choice("push-through", "Push through (-3 Consistency, 2 weeks)", stat_penalty=StatChange("consistency", 3, 2)),
            _choice(
                "take-break",
                "Take a mental break (-15 energy, clear head)",
                cost=Cost(energy=15),
                stat_bonus=StatChange("mentalToughness", 3, 2),
            ),
        ),
    ),
    EventTemplate(
        id="clutch-confidence",
        category="performance",
        title="Clutch Moment",
        description="A tough spare in practice gives you a confidence boost!",
        weight=10,
        is_major=False,
        choices=(
            _choice("embrace", "Embrace the feeling (+4 Mental Toughness, 2 weeks)", stat_bonus=StatChange("mentalToughness", 4, 2)),
        ),
    ),
    EventTemplate(
        id="spare-focus",
        category="performance",
        title="Spare Practice Breakthrough",
        description="Your spare shooting practice has paid off!",
        weight=10,
        is_major=False,
        choices=(
            _choice(
                "continue",
                "Keep practicing (+5 Spare Shooting, 3 weeks)",
                cost=Cost(energy=10),
                stat_bonus=StatChange("spareShooting", 5, 3),
            ),
            _choice("skip", "Save energy for competition"),
        ),
    ),
    # ---------------------------------------------------------------------
    # Money
    # ---------------------------------------------------------------------
    EventTemplate(
        id="side-gig",
        category="money",
        title="Side Gig Offer",
        description="A local bowling alley wants you to help coach beginners for extra cash.",
        weight=12,
        is_major=False,
        choices=(
            _choice("accept", "Accept (+$150, -20 energy)", cost=Cost(energy=20), money=150, reputation=2),
            _choice("decline", "Decline (focus on your game)"),
        ),
    ),
    EventTemplate(
        id="pay-raise",
        category="money",
        title="Job Performance Review",
        description="Your employer notices your dedication. A raise might be on the table.",
        weight=8,
        is_major=True,
        choices=(
            _choice("negotiate", "Negotiate hard (+$100)", money=100),
            _choice("grateful", "Accept graciously (+$50 bonus, +reputation)", money=50, reputation=3),
        ),
    ),
    EventTemplate(
        id="unexpected-bill",
        category="money",
        title="Unexpected Expense",
        description="Car trouble! You need to pay for repairs.",
        weight=10,
        is_major=False,
        choices=(
            _choice("pay-full", "Pay in full (-$200)", cost=Cost(money=200)),
            _choice("defer", "Defer repairs (-5 Stamina, 2 weeks)", stat_penalty=StatChange("stamina", 5, 2)),
        ),
    ),
    # ---------------------------------------------------------------------
    # Equipment
    # ---------------------------------------------------------------------
    EventTemplate(
        id="pro-shop-discount",
        category="equipment",
        title="Pro Shop Sale!",
        description="The local pro shop is having a flash sale on equipment.",
        weight=10,
        is_major=False,
        choices=(
            _choice("browse", "Check it out (+$50 store credit)", money=50),
            _choice("pass", "Not interested"),
        ),
    ),
    EventTemplate(
        id="ball-maintenance",
        category="equipment",
        title="Ball Maintenance Needed",
        description="Your ball needs resurfacing to maintain performance.",
        weight=8,
        is_major=False,
        choices=(
            _choice(
                "resurface",
                "Get it resurfaced (-$75, +3 Hook Control, 4 weeks)",
                cost=Cost(money=75),
                stat_bonus=StatChange("hookControl", 3, 4),
            ),
            _choice("delay", "Bowl as-is (-2 Hook Control, 2 weeks)", stat_penalty=StatChange("hookControl", 2, 2)),
        ),
    ),
    # ---------------------------------------------------------------------
    # Bowling
    # ---------------------------------------------------------------------
    EventTemplate(
        id="lane-surprise",
        category="bowling",
        title="Lane Condition Change",
        description="The lanes at your regular alley have been freshly oiled!",
        weight=10,
        is_major=False,
        choices=(
            _choice(
                "adapt",
                "Practice adapting (+4 Lane Reading, 2 weeks)",
                cost=Cost(energy=15),
                stat_bonus=StatChange("laneReading", 4, 2),
            ),
            _choice("wait", "Wait for normal conditions"),
        ),
    ),
    EventTemplate(
        id="clinic-invite",
        category="bowling",
        title="Local Clinic Invitation",
        description="A pro bowler is hosting a clinic nearby!",
        weight=6,
        is_major=True,
        choices=(
            _choice(
                "attend",
                "Attend (-$100, -25 energy, major stat boost)",
                cost=Cost(money=100, energy=25),
                stat_bonus=StatChange("accuracy", 6, 4),
                reputation=5,
            ),
            _choice("skip", "Can't make it"),
        ),
    ),
    EventTemplate(
        id="rivalry-challenge",
        category="bowling",
        title="Rival Challenge!",
        description="A local bowler has called you out for a head-to-head match!",
        weight=8,
        is_major=True,
        choices=(
            _choice("accept-challenge", "Accept the challenge (+5 reputation)", cost=Cost(energy=20), reputation=5),
            _choice("ignore", "Ignore them (-2 reputation)", reputation=-2),
        ),
    ),
    EventTemplate(
        id="sponsor-inquiry",
        category="bowling",
        title="Sponsor Inquiry",
        description="A ball manufacturer wants you to appear in a regional promo.",
        weight=5,
        is_major=True,
        requires_pro=True,
        choices=(
            _choice("sign", "Shoot the promo (+$400, +3 reputation)", cost=Cost(energy=20), money=400, reputation=3),
            _choice("decline", "Stay focused on the tour"),
        ),
    ),
    # ---------------------------------------------------------------------
    # Social
    # ---------------------------------------------------------------------
    EventTemplate(
        id="team-dinner",
        category="social",
        title="League Team Dinner",
        description="Your league teammates are heading out after league night.",
        weight=8,
        is_major=False,
        choices=(
            _choice("join", "Join them (-10 energy, +2 reputation)", cost=Cost(energy=10), reputation=2),
            _choice("head-home", "Head home and rest (+10 energy)", energy=10),
        ),
    ),
    EventTemplate(
        id="fan-meetup",
        category="social",
        title="Regulars Want Tips",
        description="A few regulars at your alley ask you for some pointers.",
        weight=6,
        is_major=False,
        choices=(
            _choice(
                "coach",
                "Give a mini lesson (+4 Charisma, 2 weeks)",
                cost=Cost(energy=10),
                stat_bonus=StatChange("charisma", 4, 2),
            ),
            _choice("slip-out", "Politely slip out"),
        ),
    ),
)

WEEKLY_EVENT_TEMPLATES_BY_ID: Mapping[str, EventTemplate] = {t.id: t for t in WEEKLY_EVENT_TEMPLATES}


def validate_catalog(templates: Tuple[EventTemplate, ...] = WEEKLY_EVENT_TEMPLATES) -> None:
    """Referential integrity checks (raises ValueError)."""
    seen = set()
    for t in templates:
        if t.id in seen:
            raise ValueError(f"duplicate event template id {t.id!r}")
        seen.add(t.id)
        if t.category not in EVENT_CATEGORIES:
            raise ValueError(f"event {t.id!r}: unknown category {t.category!r}")
        if float(t.weight) < 0:
            raise ValueError(f"event {t.id!r}: weight must be >= 0")
        if not t.choices:
            raise ValueError(f"event {t.id!r}: needs at least one choice")
        choice_ids = set()
        for c in t.choices:
            if c.id in choice_ids:
                raise ValueError(f"event {t.id!r}: duplicate choice id {c.id!r}")
            choice_ids.add(c.id)
            if c.cost.money < 0 or c.cost.energy < 0:
                raise ValueError(f"event {t.id!r}/{c.id!r}: cost components must be >= 0")
            if c.outcome.money < 0:
                raise ValueError(f"event {t.id!r}/{c.id!r}: money losses must be declared as a cost")
            for change in (c.outcome.stat_bonus, c.outcome.stat_penalty):
                if change is None:
                    continue
                if change.stat not in SKILL_STATS:
                    raise ValueError(f"event {t.id!r}/{c.id!r}: {change.stat!r} is not a skill stat")
                if int(change.amount) <= 0 or int(change.weeks) < 1:
                    raise ValueError(f"event {t.id!r}/{c.id!r}: stat change needs amount > 0 and weeks >= 1")


validate_catalog()
