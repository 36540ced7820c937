"""Repository de Player (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import Iterable, List
from waterpolo.models.player import Player


class PlayerRepository:
    """Repository async para leitura do elenco"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_club(self, club_id: int, extra_ids: Iterable[int] = ()) -> List[Player]:
        """Elenco do clube ordenado por número (mais jogadores avulsos, se pedidos)"""
        condition = Player.club_id == club_id
        extra_ids = list(extra_ids)
        if extra_ids:
            condition = or_(condition, Player.id.in_(extra_ids))
        result = await self.db.execute(
            select(Player).filter(condition).order_by(Player.number)
        )
        return list(result.scalars().all())
