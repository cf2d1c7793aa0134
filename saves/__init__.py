"""Save slots: versioned codec, stores and the registry."""

from .codec import SAVE_FORMAT_VERSION, decode_slot, encode_slot, state_violations
from .registry import SaveRegistry
from .repo import MemorySaveStore, SaveStore, SqliteSaveStore, StoredSlot
from .types import SaveSlot

__all__ = [
    "SAVE_FORMAT_VERSION",
    "MemorySaveStore",
    "SaveRegistry",
    "SaveSlot",
    "SaveStore",
    "SqliteSaveStore",
    "StoredSlot",
    "decode_slot",
    "encode_slot",
    "state_violations",
]
