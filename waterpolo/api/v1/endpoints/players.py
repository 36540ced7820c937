"""Endpoints de Jogadores"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from waterpolo.core.config import settings
from waterpolo.core.database import get_db
from waterpolo.core.cache import cache, players_key
from waterpolo.schemas.player import PlayerResponse
from waterpolo.repositories.player_repository import PlayerRepository

router = APIRouter()


@router.get("/", response_model=List[PlayerResponse])
async def get_players(
    club_id: int = Query(..., ge=1),
    db: AsyncSession = Depends(get_db)
):
    """Elenco do clube ordenado por número"""
    cache_key = players_key(club_id)
    cached_result = await cache.get(cache_key)
    if cached_result:
        return cached_result

    players = await PlayerRepository(db).get_by_club(club_id)

    result = [PlayerResponse.model_validate(player).model_dump() for player in players]
    await cache.set(cache_key, result, ttl=settings.CACHE_TTL)
    return result
