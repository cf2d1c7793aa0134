"""Weekly event resolver."""

from .catalog import CATEGORY_WEIGHTS, WEEKLY_EVENT_TEMPLATES, WEEKLY_EVENT_TEMPLATES_BY_ID
from .service import (
    EventResolution,
    append_history,
    dismiss_event,
    is_pending,
    maybe_generate_event,
    resolve_event,
)
from .types import EVENT_CATEGORIES, EventChoice, EventOutcome, EventTemplate, StatChange, WeeklyEvent

__all__ = [
    "CATEGORY_WEIGHTS",
    "EVENT_CATEGORIES",
    "EventChoice",
    "EventOutcome",
    "EventResolution",
    "EventTemplate",
    "StatChange",
    "WEEKLY_EVENT_TEMPLATES",
    "WEEKLY_EVENT_TEMPLATES_BY_ID",
    "WeeklyEvent",
    "append_history",
    "dismiss_event",
    "is_pending",
    "maybe_generate_event",
    "resolve_event",
]
