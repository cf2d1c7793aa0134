from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from career.types import NewProfileData
from saves.registry import SaveRegistry
from app.api.deps import get_registry
from app.schemas.game_save import GameDeleteRequest, GameExitRequest, GameLoadRequest, GameNewRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def _active_summary(registry: SaveRegistry) -> dict:
    engine = registry.active_engine
    return {
        "active_slot_id": registry.active_slot_id,
        "profile": None if engine is None else engine.profile.to_dict(),
    }


@router.get("/api/game/slots")
async def api_game_slots(registry: SaveRegistry = Depends(get_registry)):
    """Every save slot in id order, including empty and corrupted ones."""
    return {"slots": [slot.summary() for slot in registry.list_slots()]}


@router.get("/api/game/active")
async def api_game_active(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        return _active_summary(registry)


@router.post("/api/game/new")
async def api_game_new(req: GameNewRequest, registry: SaveRegistry = Depends(get_registry)):
    data = NewProfileData(
        first_name=req.first_name,
        last_name=req.last_name,
        bowling_style=req.bowling_style,
        handedness=req.handedness,
        alley_environment=dict(req.alley_environment or {}),
    )
    with registry.lock:
        registry.start_new_game(req.slot_id, data)
        return _active_summary(registry)


@router.post("/api/game/load")
async def api_game_load(req: GameLoadRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        registry.load_game(req.slot_id)
        return _active_summary(registry)


@router.post("/api/game/save")
async def api_game_save(registry: SaveRegistry = Depends(get_registry)):
    return registry.save_current_game().summary()


@router.post("/api/game/delete")
async def api_game_delete(req: GameDeleteRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        registry.delete_game(req.slot_id)
        return {"deleted": int(req.slot_id), "active_slot_id": registry.active_slot_id}


@router.post("/api/game/exit")
async def api_game_exit(req: GameExitRequest, registry: SaveRegistry = Depends(get_registry)):
    registry.exit_to_menu(save=bool(req.save))
    return {"active_slot_id": None}
