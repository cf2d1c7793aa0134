from __future__ import annotations

"""Durable key-value storage of save documents, keyed by slot id.

Stores are deliberately dumb: they keep opaque JSON strings. Encoding,
decoding and validation live in ``saves.codec``.
"""

import contextlib
import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredSlot:
    slot_id: int
    payload_json: str
    save_format_version: int
    saved_at: str


class SaveStore(Protocol):
    def load_all(self) -> Dict[int, StoredSlot]:
        ...

    def read_slot(self, slot_id: int) -> Optional[StoredSlot]:
        ...

    def write_slot(self, slot_id: int, payload_json: str, *, save_format_version: int, saved_at: str) -> None:
        ...

    def clear_slot(self, slot_id: int) -> bool:
        ...


class MemorySaveStore:
    """In-process store (tests, throwaway sessions)."""

    def __init__(self) -> None:
        self._rows: Dict[int, StoredSlot] = {}

    def load_all(self) -> Dict[int, StoredSlot]:
        return dict(self._rows)

    def read_slot(self, slot_id: int) -> Optional[StoredSlot]:
        return self._rows.get(int(slot_id))

    def write_slot(self, slot_id: int, payload_json: str, *, save_format_version: int, saved_at: str) -> None:
        self._rows[int(slot_id)] = StoredSlot(int(slot_id), str(payload_json), int(save_format_version), str(saved_at))

    def clear_slot(self, slot_id: int) -> bool:
        return self._rows.pop(int(slot_id), None) is not None


class SqliteSaveStore:
    """SQLite-backed store, one row per slot in ``save_slots``."""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = str(db_path)
        # Opened on the startup thread (or a test thread), used from the event loop.
        # The registry lock serializes access.
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode = WAL;")
        self._savepoint_seq = 0
        self.init_db()

    def close(self) -> None:
        try:
            self._conn.close()
        except sqlite3.Error:
            logger.warning("failed to close save db %s", self.db_path, exc_info=True)

    def __enter__(self) -> "SqliteSaveStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextlib.contextmanager
    def transaction(self):
        """
        Atomic transaction helper.

        Supports nesting via SAVEPOINT:
        - outermost: BEGIN ... COMMIT/ROLLBACK
        - nested: SAVEPOINT ... RELEASE (or ROLLBACK TO + RELEASE on error)
        """
        cur = self._conn.cursor()
        nested = bool(self._conn.in_transaction)
        sp_name = None
        try:
            if nested:
                self._savepoint_seq += 1
                sp_name = f"sp_{self._savepoint_seq}"
                cur.execute(f"SAVEPOINT {sp_name};")
            else:
                self._conn.execute("BEGIN;")

            yield cur

            if nested and sp_name:
                cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.commit()
        except Exception:
            if nested and sp_name:
                try:
                    cur.execute(f"ROLLBACK TO SAVEPOINT {sp_name};")
                finally:
                    cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.rollback()
            raise
        finally:
            cur.close()

    def init_db(self) -> None:
        with self.transaction() as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS save_slots (
                    slot_id INTEGER PRIMARY KEY,
                    payload_json TEXT NOT NULL,
                    save_format_version INTEGER NOT NULL,
                    saved_at TEXT NOT NULL
                );
                """
            )

    @staticmethod
    def _row_to_slot(row: sqlite3.Row) -> StoredSlot:
        return StoredSlot(
            slot_id=int(row["slot_id"]),
            payload_json=str(row["payload_json"]),
            save_format_version=int(row["save_format_version"]),
            saved_at=str(row["saved_at"]),
        )

    def load_all(self) -> Dict[int, StoredSlot]:
        rows = self._conn.execute(
            "SELECT slot_id, payload_json, save_format_version, saved_at FROM save_slots ORDER BY slot_id;"
        ).fetchall()
        return {int(r["slot_id"]): self._row_to_slot(r) for r in rows}

    def read_slot(self, slot_id: int) -> Optional[StoredSlot]:
        row = self._conn.execute(
            "SELECT slot_id, payload_json, save_format_version, saved_at FROM save_slots WHERE slot_id=?;",
            (int(slot_id),),
        ).fetchone()
        return None if row is None else self._row_to_slot(row)

    def write_slot(self, slot_id: int, payload_json: str, *, save_format_version: int, saved_at: str) -> None:
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO save_slots(slot_id, payload_json, save_format_version, saved_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(slot_id) DO UPDATE SET
                    payload_json=excluded.payload_json,
                    save_format_version=excluded.save_format_version,
                    saved_at=excluded.saved_at;
                """,
                (int(slot_id), str(payload_json), int(save_format_version), str(saved_at)),
            )

    def clear_slot(self, slot_id: int) -> bool:
        with self.transaction() as cur:
            cur.execute("DELETE FROM save_slots WHERE slot_id=?;", (int(slot_id),))
            return cur.rowcount > 0
