from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel


class GameNewRequest(BaseModel):
    slot_id: int
    first_name: str
    last_name: str
    bowling_style: str = "tweener"
    handedness: str = "right"
    alley_environment: Optional[Dict[str, Any]] = None


class GameLoadRequest(BaseModel):
    slot_id: int


class GameDeleteRequest(BaseModel):
    slot_id: int


class GameExitRequest(BaseModel):
    save: bool = False
