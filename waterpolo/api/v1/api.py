"""Router principal da API v1"""
from fastapi import APIRouter
from waterpolo.api.v1.endpoints import players, matches, data_integrity

api_router = APIRouter()

api_router.include_router(players.router, prefix="/players", tags=["players"])
api_router.include_router(matches.router, prefix="/matches", tags=["matches"])
api_router.include_router(data_integrity.router, prefix="/data-integrity", tags=["data-integrity"])
