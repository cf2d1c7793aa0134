"""Effect ledger package.

Public API
----------
- add_effect(effects, effect)
- tick(effects) -> (remaining, expired)
- apply_recovery_action(effects, profile, action_id, effect_id)
- total_stat_modifier(effects, stat)
- roll_health_effect(...)  (career clock only)
"""

from .catalog import POSSIBLE_EFFECTS, RECOVERY_ACTIONS, RECOVERY_ACTIONS_BY_ID
from .ledger import (
    add_effect,
    applicable_actions,
    apply_recovery_action,
    effective_stats,
    find_effect,
    get_active_effects,
    get_active_event_effects,
    tick,
    total_stat_modifier,
)
from .risk import health_risk_probability, roll_health_effect
from .types import (
    EFFECT_EVENT_BUFF,
    EFFECT_EVENT_PENALTY,
    EFFECT_INJURY,
    EFFECT_SLUMP,
    EFFECT_TYPES,
    ActiveEffect,
    RecoveryAction,
)

__all__ = [
    "ActiveEffect",
    "RecoveryAction",
    "EFFECT_TYPES",
    "EFFECT_INJURY",
    "EFFECT_SLUMP",
    "EFFECT_EVENT_BUFF",
    "EFFECT_EVENT_PENALTY",
    "POSSIBLE_EFFECTS",
    "RECOVERY_ACTIONS",
    "RECOVERY_ACTIONS_BY_ID",
    "add_effect",
    "applicable_actions",
    "apply_recovery_action",
    "effective_stats",
    "find_effect",
    "get_active_effects",
    "get_active_event_effects",
    "health_risk_probability",
    "roll_health_effect",
    "tick",
    "total_stat_modifier",
]
