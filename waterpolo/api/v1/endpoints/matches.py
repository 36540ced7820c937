"""Endpoints de Partidos e da sessão de edição"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from waterpolo.core.database import get_db
from waterpolo.core.cache import cache, recent_matches_key
from waterpolo.schemas.match import (
    CallupCopy,
    GoalkeeperShotCreate,
    MatchDetailsUpdate,
    MatchSummary,
    PenaltyScoresUpdate,
    PenaltyShooterCreate,
    PenaltyShooterUpdate,
    PlayerRef,
    QuarterScoreUpdate,
    RivalPenaltyCreate,
    RivalPenaltyUpdate,
    SaveResponse,
    SessionCreate,
    SessionResponse,
    SprintWinnerUpdate,
    StatUpdate,
    Substitution,
)
from waterpolo.services.match_service import MatchService
from waterpolo.services.session_registry import MatchSessionRegistry, registry

router = APIRouter()


def get_match_service(db: AsyncSession = Depends(get_db)) -> MatchService:
    return MatchService(db)


def get_registry() -> MatchSessionRegistry:
    return registry


def session_response(session_id: str, registry: MatchSessionRegistry) -> dict:
    return {"session_id": session_id, **registry.get(session_id).to_dict()}


@router.get("/", response_model=List[MatchSummary])
async def get_recent_matches(
    club_id: int = Query(..., ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: MatchService = Depends(get_match_service)
):
    """Últimos partidos do clube"""
    cache_key = recent_matches_key(club_id, limit)
    cached_result = await cache.get(cache_key)
    if cached_result:
        return cached_result

    matches = await service.recent_matches(club_id, limit)
    result = [MatchSummary.model_validate(match).model_dump(mode="json") for match in matches]
    await cache.set(cache_key, result)
    return result


@router.delete("/{match_id}", status_code=204)
async def delete_match(
    match_id: int,
    service: MatchService = Depends(get_match_service)
):
    """Remove um partido e todas as suas estatísticas"""
    await service.delete_match(match_id)
    await cache.invalidate_matches()


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def open_session(
    payload: SessionCreate,
    service: MatchService = Depends(get_match_service),
    registry: MatchSessionRegistry = Depends(get_registry)
):
    """Inicia um partido novo ou carrega um partido salvo para edição"""
    if payload.match_id is not None:
        session = await service.load_session(payload.match_id)
    elif payload.club_id is not None:
        session = await service.start_session(payload.club_id)
    else:
        raise HTTPException(status_code=400, detail="Informe club_id ou match_id")

    session_id = registry.open(session, session.club_id)
    return session_response(session_id, registry)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    return session_response(session_id, registry)


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    """Descarta a sessão sem salvar"""
    registry.close(session_id)


@router.patch("/sessions/{session_id}/details", response_model=SessionResponse)
async def update_details(
    session_id: str,
    payload: MatchDetailsUpdate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).update_details(**payload.model_dump(exclude_unset=True))
    return session_response(session_id, registry)


@router.put("/sessions/{session_id}/stats", response_model=SessionResponse)
async def update_stat(
    session_id: str,
    payload: StatUpdate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    """Edita um contador; derivados e placar são recalculados"""
    registry.get(session_id).update_stat(payload.player_id, payload.field, payload.value)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/roster", response_model=SessionResponse)
async def add_player(
    session_id: str,
    payload: PlayerRef,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).add_player(payload.player_id)
    return session_response(session_id, registry)


@router.delete("/sessions/{session_id}/roster/{player_id}", response_model=SessionResponse)
async def remove_player(
    session_id: str,
    player_id: int,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).remove_player(player_id)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/roster/substitute", response_model=SessionResponse)
async def substitute_player(
    session_id: str,
    payload: Substitution,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).substitute(payload.out_player_id, payload.in_player_id)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/roster/copy", response_model=SessionResponse)
async def copy_callup(
    session_id: str,
    payload: CallupCopy,
    service: MatchService = Depends(get_match_service),
    registry: MatchSessionRegistry = Depends(get_registry)
):
    """Copia a convocatória de um partido anterior"""
    await service.copy_callup(registry.get(session_id), payload.match_id)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/quarters/{quarter}/close", response_model=SessionResponse)
async def close_quarter(
    session_id: str,
    quarter: int,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).close_quarter(quarter)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/quarters/{quarter}/open", response_model=SessionResponse)
async def open_quarter(
    session_id: str,
    quarter: int,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).open_quarter(quarter)
    return session_response(session_id, registry)


@router.put("/sessions/{session_id}/quarters/{quarter}", response_model=SessionResponse)
async def set_quarter_score(
    session_id: str,
    quarter: int,
    payload: QuarterScoreUpdate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).set_quarter_score(quarter, payload.home, payload.away)
    return session_response(session_id, registry)


@router.put("/sessions/{session_id}/sprints/{quarter}", response_model=SessionResponse)
async def set_sprint_winner(
    session_id: str,
    quarter: int,
    payload: SprintWinnerUpdate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).set_sprint_winner(quarter, payload.player_id)
    return session_response(session_id, registry)


@router.put("/sessions/{session_id}/penalties/score", response_model=SessionResponse)
async def set_penalty_scores(
    session_id: str,
    payload: PenaltyScoresUpdate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).set_penalty_scores(payload.home, payload.away)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/penalties/shooters", response_model=SessionResponse)
async def add_penalty_shooter(
    session_id: str,
    payload: PenaltyShooterCreate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).add_penalty_shooter(payload.player_id, payload.scored)
    return session_response(session_id, registry)


@router.put("/sessions/{session_id}/penalties/shooters/{index}", response_model=SessionResponse)
async def update_penalty_shooter(
    session_id: str,
    index: int,
    payload: PenaltyShooterUpdate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).set_penalty_shooter_result(index, payload.scored)
    return session_response(session_id, registry)


@router.delete("/sessions/{session_id}/penalties/shooters/{index}", response_model=SessionResponse)
async def remove_penalty_shooter(
    session_id: str,
    index: int,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).remove_penalty_shooter(index)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/penalties/rival", response_model=SessionResponse)
async def add_rival_penalty(
    session_id: str,
    payload: RivalPenaltyCreate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).add_rival_penalty(payload.result, payload.goalkeeper_id)
    return session_response(session_id, registry)


@router.put("/sessions/{session_id}/penalties/rival/{attempt_id}", response_model=SessionResponse)
async def update_rival_penalty(
    session_id: str,
    attempt_id: int,
    payload: RivalPenaltyUpdate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    session = registry.get(session_id)
    values = payload.model_dump(exclude_unset=True)
    if "result" in values and values["result"] is not None:
        session.set_rival_penalty_result(attempt_id, values["result"])
    if "goalkeeper_id" in values:
        session.assign_rival_penalty_goalkeeper(attempt_id, values["goalkeeper_id"])
    return session_response(session_id, registry)


@router.delete("/sessions/{session_id}/penalties/rival/{attempt_id}", response_model=SessionResponse)
async def remove_rival_penalty(
    session_id: str,
    attempt_id: int,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).remove_rival_penalty(attempt_id)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/goalkeeper-shots", response_model=SessionResponse)
async def add_goalkeeper_shot(
    session_id: str,
    payload: GoalkeeperShotCreate,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).add_goalkeeper_shot(
        payload.goalkeeper_id, payload.result, payload.x, payload.y
    )
    return session_response(session_id, registry)


@router.delete("/sessions/{session_id}/goalkeeper-shots/{goalkeeper_id}/last", response_model=SessionResponse)
async def undo_goalkeeper_shot(
    session_id: str,
    goalkeeper_id: int,
    registry: MatchSessionRegistry = Depends(get_registry)
):
    registry.get(session_id).undo_goalkeeper_shot(goalkeeper_id)
    return session_response(session_id, registry)


@router.post("/sessions/{session_id}/save", response_model=SaveResponse)
async def save_session(
    session_id: str,
    service: MatchService = Depends(get_match_service),
    registry: MatchSessionRegistry = Depends(get_registry)
):
    """Valida e grava o partido; a sessão continua aberta para novas edições"""
    entry = registry.entry(session_id)
    match_id = await service.save(entry.session, entry.club_id)
    await cache.invalidate_matches(entry.club_id)
    score = entry.session.score
    return {"match_id": match_id, "home_score": score.home, "away_score": score.away}
