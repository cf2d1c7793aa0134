from __future__ import annotations

from fastapi import HTTPException, Request

from saves.registry import SaveRegistry


def get_registry(request: Request) -> SaveRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="Save registry is not initialized.")
    return registry
