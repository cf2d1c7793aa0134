from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from matches.types import GameResult
from saves.registry import SaveRegistry
from app.api.deps import get_registry
from app.schemas.career import (
    ChallengeProgressRequest,
    ClaimChallengeRequest,
    GameResultRequest,
    PlayGameRequest,
    RecoveryActionRequest,
    ResolveEventRequest,
    RivalResultRequest,
    TakeJobRequest,
    TrainRequest,
)

router = APIRouter()
logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------


@router.get("/api/career/profile")
async def api_career_profile(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        return {"profile": engine.profile.to_dict(), "has_remove_ads": engine.has_remove_ads}


@router.get("/api/career/effective-stats")
async def api_career_effective_stats(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        stats = engine.effective_stats()
        return {
            "stats": stats,
            "modifiers": {name: engine.total_stat_modifier(name) for name in stats},
        }


@router.get("/api/career/effects")
async def api_career_effects(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        return {
            "effects": [e.to_dict() for e in engine.get_active_effects()],
            "event_effects": [e.to_dict() for e in engine.get_active_event_effects()],
        }


@router.get("/api/career/effects/{effect_id}/recovery")
async def api_career_recovery_options(effect_id: str, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        return {"effect_id": effect_id, "options": registry.require_active().recovery_options(effect_id)}


@router.get("/api/career/challenges")
async def api_career_challenges(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        return registry.require_active().state.challenges.to_dict()


@router.get("/api/career/event")
async def api_career_event(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        event = registry.require_active().get_pending_event()
        return {"pending_event": None if event is None else event.to_dict()}


@router.get("/api/career/events/history")
async def api_career_event_history(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        return {"events": [e.to_dict() for e in registry.require_active().get_event_history()]}


@router.get("/api/career/rankings")
async def api_career_rankings(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        return registry.require_active().get_rankings_snapshot().to_dict()


@router.get("/api/career/training")
async def api_career_training_options(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        return {"options": registry.require_active().training_options()}


@router.get("/api/career/jobs")
async def api_career_jobs(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        job = engine.current_job
        return {"current_job": None if job is None else job.to_dict(), "jobs": engine.job_options()}


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------


@router.post("/api/career/recovery")
async def api_career_apply_recovery(req: RecoveryActionRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        profile = engine.apply_recovery_action(req.action_id, req.effect_id)
        return {"profile": profile.to_dict(), "effects": [e.to_dict() for e in engine.get_active_effects()]}


@router.post("/api/career/challenges/claim")
async def api_career_claim_challenge(req: ClaimChallengeRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        profile = engine.claim_challenge_reward(req.challenge_id)
        return {"profile": profile.to_dict(), "challenges": engine.state.challenges.to_dict()}


@router.post("/api/career/challenges/progress")
async def api_career_challenge_progress(req: ChallengeProgressRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        challenge = registry.require_active().record_challenge_progress(req.challenge_id, req.delta)
        return {"challenge": challenge.to_dict()}


@router.post("/api/career/event/resolve")
async def api_career_resolve_event(req: ResolveEventRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        event = engine.resolve_event(req.choice_id)
        return {
            "event": event.to_dict(),
            "profile": engine.profile.to_dict(),
            "effects": [e.to_dict() for e in engine.get_active_effects()],
        }


@router.post("/api/career/event/dismiss")
async def api_career_dismiss_event(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        return {"event": registry.require_active().dismiss_event().to_dict()}


@router.post("/api/career/advance-week")
async def api_career_advance_week(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        report = engine.advance_week()
        return {"report": report.to_dict(), "profile": engine.profile.to_dict()}


@router.post("/api/career/play-game")
async def api_career_play_game(req: PlayGameRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        result = engine.play_game(opponent_id=req.opponent_id)
        return {"result": result.to_dict(), "profile": engine.profile.to_dict()}


@router.post("/api/career/game-result")
async def api_career_game_result(req: GameResultRequest, registry: SaveRegistry = Depends(get_registry)):
    result = GameResult(
        score=req.score,
        strikes=req.strikes,
        spares=req.spares,
        max_strike_streak=req.max_strike_streak,
        opponent_id=req.opponent_id,
        opponent_score=req.opponent_score,
        won=req.won,
        league_win=req.league_win,
        tournament_top3=req.tournament_top3,
    )
    with registry.lock:
        profile = registry.require_active().record_game_result(result)
        return {"profile": profile.to_dict()}


@router.post("/api/career/rival-result")
async def api_career_rival_result(req: RivalResultRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        rival = registry.require_active().record_rival_result(req.rival_id, req.won)
        return {"rival": rival.to_dict()}


@router.post("/api/career/go-pro")
async def api_career_go_pro(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        profile = registry.require_active().go_professional()
        logger.info("%s turned professional", profile.name)
        return {"profile": profile.to_dict()}


@router.post("/api/career/train")
async def api_career_train(req: TrainRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        session = engine.train(req.stat)
        return {
            "session": session.to_dict(),
            "profile": engine.profile.to_dict(),
            "challenges": engine.state.challenges.to_dict(),
        }


@router.post("/api/career/jobs/take")
async def api_career_take_job(req: TakeJobRequest, registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        engine = registry.require_active()
        contract = engine.take_job(req.job_id)
        return {"job": contract.to_dict(), "profile": engine.profile.to_dict()}


@router.post("/api/career/jobs/quit")
async def api_career_quit_job(registry: SaveRegistry = Depends(get_registry)):
    with registry.lock:
        return {"job": registry.require_active().quit_job().to_dict()}
