"""Endpoint de verificação de integridade de dados"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from waterpolo.core.database import get_db
from waterpolo.core.data_integrity import DataIntegrityChecker

router = APIRouter()


@router.get("/check")
async def check_data_integrity(
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db)
):
    """Verifica derivados, parciais e pênaltis dos partidos gravados"""
    checker = DataIntegrityChecker(db)
    result = await checker.check_data_consistency(limit=limit)
    return result
