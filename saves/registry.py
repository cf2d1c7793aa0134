from __future__ import annotations

"""Save registry: the fixed slot array and the single active career.

Exactly one slot can be active at a time. Persistence is explicit: nothing
is written until :meth:`SaveRegistry.save_current_game` (or a new game,
which is written immediately so the slot shows up as taken).
"""

import logging
import random
from datetime import datetime, timezone
from threading import RLock
from typing import Callable, List, Optional

from career.engine import CareerEngine, Entitlements
from career.profile import new_career_state
from career.state import CareerState
from career.types import NewProfileData
from config import DEFAULT_CONSTANTS, GameConstants
from errors import INVALID_SLOT, NO_ACTIVE_GAME, CareerError, SaveCorruptedError
from matches.types import ScoreSimulator

from .codec import SAVE_FORMAT_VERSION, decode_slot, encode_slot, peek_header
from .repo import SaveStore
from .types import SaveSlot

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _random_seed() -> int:
    return random.SystemRandom().getrandbits(62)


class SaveRegistry:
    def __init__(
        self,
        store: SaveStore,
        constants: GameConstants = DEFAULT_CONSTANTS,
        *,
        clock: Callable[[], str] = _utc_now_iso,
        seed_factory: Callable[[], int] = _random_seed,
        entitlements: Optional[Entitlements] = None,
        simulator: Optional[ScoreSimulator] = None,
    ) -> None:
        self._store = store
        self._constants = constants
        self._clock = clock
        self._seed_factory = seed_factory
        self._entitlements = entitlements
        self._simulator = simulator
        self._lock = RLock()
        self._active_slot_id: Optional[int] = None
        self._active_engine: Optional[CareerEngine] = None

    @property
    def lock(self) -> RLock:
        return self._lock

    @property
    def constants(self) -> GameConstants:
        return self._constants

    @property
    def active_engine(self) -> Optional[CareerEngine]:
        return self._active_engine

    @property
    def active_slot_id(self) -> Optional[int]:
        return self._active_slot_id

    def require_active(self) -> CareerEngine:
        if self._active_engine is None:
            raise CareerError(NO_ACTIVE_GAME, "no game is loaded")
        return self._active_engine

    def _validate_slot_id(self, slot_id: int) -> int:
        try:
            sid = int(slot_id)
        except (TypeError, ValueError):
            raise CareerError(INVALID_SLOT, "slot id must be an integer", {"slot_id": slot_id}) from None
        if sid not in self._constants.SAVE_SLOT_IDS:
            raise CareerError(
                INVALID_SLOT,
                "slot id out of range",
                {"slot_id": sid, "allowed": list(self._constants.SAVE_SLOT_IDS)},
            )
        return sid

    def _engine_for(self, state: CareerState) -> CareerEngine:
        return CareerEngine(
            state,
            self._constants,
            entitlements=self._entitlements,
            simulator=self._simulator,
        )

    def _activate(self, slot_id: int, engine: CareerEngine) -> None:
        self._active_slot_id = slot_id
        self._active_engine = engine

    # ------------------------------------------------------------------
    # Slot lifecycle
    # ------------------------------------------------------------------

    def list_slots(self) -> List[SaveSlot]:
        """All slots in id order. Never raises for a bad payload; flags it instead."""
        with self._lock:
            rows = self._store.load_all()
            out: List[SaveSlot] = []
            for sid in self._constants.SAVE_SLOT_IDS:
                row = rows.get(int(sid))
                if row is None:
                    out.append(SaveSlot(slot_id=int(sid)))
                    continue
                try:
                    state, last_saved = decode_slot(row.payload_json, self._constants, expected_slot_id=int(sid))
                except SaveCorruptedError as exc:
                    logger.warning("slot %d is corrupted: %s", sid, exc.details)
                    out.append(
                        SaveSlot(
                            slot_id=int(sid),
                            is_empty=False,
                            last_saved=peek_header(row.payload_json).get("last_saved") or row.saved_at,
                            corrupted=True,
                        )
                    )
                    continue
                out.append(SaveSlot(slot_id=int(sid), is_empty=False, state=state, last_saved=last_saved))
            return out

    def start_new_game(self, slot_id: int, data: NewProfileData) -> CareerEngine:
        """Create a career in ``slot_id`` (overwriting it) and make it active."""
        with self._lock:
            sid = self._validate_slot_id(slot_id)
            state = new_career_state(data, int(self._seed_factory()), self._constants)
            saved_at = self._clock()
            self._store.write_slot(
                sid,
                encode_slot(sid, state, saved_at),
                save_format_version=SAVE_FORMAT_VERSION,
                saved_at=saved_at,
            )
            engine = self._engine_for(state)
            self._activate(sid, engine)
            logger.info("new game in slot %d for %s", sid, state.profile.name)
            return engine

    def load_game(self, slot_id: int) -> CareerEngine:
        with self._lock:
            sid = self._validate_slot_id(slot_id)
            row = self._store.read_slot(sid)
            if row is None:
                raise CareerError(INVALID_SLOT, "slot is empty", {"slot_id": sid})
            try:
                state, _ = decode_slot(row.payload_json, self._constants, expected_slot_id=sid)
            except SaveCorruptedError:
                logger.warning("rejected corrupted save in slot %d", sid)
                raise
            engine = self._engine_for(state)
            self._activate(sid, engine)
            logger.info("loaded slot %d (s%dw%d)", sid, state.profile.current_season, state.profile.current_week)
            return engine

    def save_current_game(self) -> SaveSlot:
        with self._lock:
            engine = self.require_active()
            sid = self._active_slot_id
            if sid is None:
                raise CareerError(NO_ACTIVE_GAME, "no game is loaded")
            state = engine.state
            saved_at = self._clock()
            self._store.write_slot(
                sid,
                encode_slot(sid, state, saved_at),
                save_format_version=SAVE_FORMAT_VERSION,
                saved_at=saved_at,
            )
            logger.info("saved slot %d", sid)
            return SaveSlot(slot_id=sid, is_empty=False, state=state, last_saved=saved_at)

    def delete_game(self, slot_id: int) -> None:
        """Clear a slot. Deleting the active slot also exits to the menu."""
        with self._lock:
            sid = self._validate_slot_id(slot_id)
            if not self._store.clear_slot(sid):
                raise CareerError(INVALID_SLOT, "slot is empty", {"slot_id": sid})
            if self._active_slot_id == sid:
                self._active_slot_id = None
                self._active_engine = None
            logger.info("deleted slot %d", sid)

    def exit_to_menu(self, *, save: bool = False) -> None:
        """Unload the active career. Unsaved progress is dropped unless ``save``."""
        with self._lock:
            if save and self._active_engine is not None:
                self.save_current_game()
            self._active_slot_id = None
            self._active_engine = None
