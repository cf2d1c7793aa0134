from __future__ import annotations

"""Versioned JSON save format.

Document layout (``save_format_version`` 1)::

    {
      "save_format_version": 1,
      "slot_id": 2,
      "last_saved": "2025-01-01T12:00:00Z",
      "state_sha256": "<sha256 of the canonical state JSON>",
      "state": { ...CareerState.to_dict()... }
    }

Decoding checks the version, the slot id, the checksum and every engine
invariant. Any failure raises ``SaveCorruptedError``: a bad save is an
internal consistency problem, never a user mistake.
"""

import hashlib
import json
from typing import Any, Dict, List, Mapping, Optional, Tuple

from career.state import CareerState
from career.types import BOWLING_STYLES, HANDEDNESS, SKILL_STATS
from config import GameConstants
from effects.types import EFFECT_TYPES
from errors import SaveCorruptedError
from rankings.types import REGIONS

SAVE_FORMAT_VERSION = 1


def _json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), sort_keys=True)


def _sha256_json(payload: Mapping[str, Any]) -> str:
    return hashlib.sha256(_json_dumps(payload).encode("utf-8")).hexdigest()


def encode_slot(slot_id: int, state: CareerState, last_saved: str) -> str:
    body = state.to_dict()
    return _json_dumps(
        {
            "save_format_version": SAVE_FORMAT_VERSION,
            "slot_id": int(slot_id),
            "last_saved": str(last_saved),
            "state_sha256": _sha256_json(body),
            "state": body,
        }
    )


def state_violations(state: CareerState, constants: GameConstants) -> List[str]:
    """Every invariant the loaded state breaks (empty list when consistent)."""
    issues: List[str] = []
    p = state.profile

    if p.money < 0:
        issues.append("profile.money < 0")
    if not 0 <= p.energy <= constants.MAX_ENERGY:
        issues.append("profile.energy outside [0, MAX_ENERGY]")
    if p.current_season < 1 or p.current_week < 1:
        issues.append("profile season/week must be positive")
    if p.current_week > constants.SEASON_LENGTH:
        issues.append("profile.current_week exceeds SEASON_LENGTH")
    if p.handedness not in HANDEDNESS:
        issues.append(f"unknown handedness {p.handedness!r}")
    if p.bowling_style not in BOWLING_STYLES:
        issues.append(f"unknown bowling style {p.bowling_style!r}")
    if not 0 <= p.reputation <= constants.REPUTATION_MAX:
        issues.append("reputation outside [0, REPUTATION_MAX]")
    for name in SKILL_STATS:
        if name in p.stats and not constants.STAT_MIN <= p.stat(name) <= constants.STAT_MAX:
            issues.append(f"stat {name} outside [STAT_MIN, STAT_MAX]")
    if p.cosmetic_tokens < 0 or p.total_games_played < 0:
        issues.append("negative counters on profile")

    seen = set()
    for e in state.active_effects:
        if e.weeks_remaining < 1:
            issues.append(f"effect {e.id!r} has weeks_remaining < 1")
        if e.type not in EFFECT_TYPES:
            issues.append(f"effect {e.id!r} has unknown type {e.type!r}")
        if e.id in seen:
            issues.append(f"duplicate effect id {e.id!r}")
        seen.add(e.id)

    for c in state.challenges.challenges:
        if c.target <= 0:
            issues.append(f"challenge {c.id!r} has target <= 0")
        if c.progress < 0 or c.progress > c.target:
            issues.append(f"challenge {c.id!r} progress outside [0, target]")
        if c.claimed and c.progress < c.target:
            issues.append(f"challenge {c.id!r} claimed but incomplete")

    if state.pending_event is not None and state.pending_event.resolved:
        issues.append("pending_event is already resolved")

    for region in state.rankings.unlocked_regions:
        if region not in REGIONS:
            issues.append(f"unknown region {region!r}")
    for r in state.rankings.rivals:
        h = r.head_to_head
        if h.wins < 0 or h.losses < 0 or h.last_result not in ("win", "loss", "none"):
            issues.append(f"rival {r.id!r} has an invalid head-to-head record")

    job = state.job
    if job is not None:
        if job.weeks_remaining < 1:
            issues.append(f"job {job.job_id!r} has weeks_remaining < 1")
        if job.weekly_pay < 0 or job.energy_cost < 0:
            issues.append(f"job {job.job_id!r} has negative pay or energy cost")

    if state.effect_seq < 0:
        issues.append("effect_seq < 0")
    return issues


def decode_slot(
    raw: str,
    constants: GameConstants,
    *,
    expected_slot_id: Optional[int] = None,
) -> Tuple[CareerState, Optional[str]]:
    """Parse and validate a stored document.

    Returns:
        (state, last_saved)
    """
    try:
        doc = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise SaveCorruptedError(details={"reason": f"invalid JSON: {exc}"}) from exc
    if not isinstance(doc, dict):
        raise SaveCorruptedError(details={"reason": "save document must be a JSON object"})

    version = doc.get("save_format_version")
    if version != SAVE_FORMAT_VERSION:
        raise SaveCorruptedError(details={"reason": f"unsupported save_format_version: {version}"})
    if expected_slot_id is not None and doc.get("slot_id") != int(expected_slot_id):
        raise SaveCorruptedError(
            details={"reason": "slot id mismatch", "expected": int(expected_slot_id), "found": doc.get("slot_id")}
        )

    body = doc.get("state")
    if not isinstance(body, dict):
        raise SaveCorruptedError(details={"reason": "state is missing"})
    checksum = doc.get("state_sha256")
    if checksum is not None and checksum != _sha256_json(body):
        raise SaveCorruptedError(details={"reason": "state checksum mismatch"})

    try:
        state = CareerState.from_dict(body)
    except (KeyError, TypeError, ValueError, IndexError) as exc:
        raise SaveCorruptedError(details={"reason": f"malformed state: {exc}"}) from exc

    issues = state_violations(state, constants)
    if issues:
        raise SaveCorruptedError(details={"reason": "invariant violation", "issues": issues})

    last_saved = doc.get("last_saved")
    return state, None if last_saved is None else str(last_saved)


def peek_header(raw: str) -> Dict[str, Any]:
    """Header fields without validating the state (empty dict if unreadable)."""
    try:
        doc = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    if not isinstance(doc, dict):
        return {}
    return {k: doc.get(k) for k in ("save_format_version", "slot_id", "last_saved")}
