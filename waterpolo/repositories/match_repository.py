"""Repository de Match (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, insert, update
from typing import List, Optional
from waterpolo.models.match import Match
from waterpolo.models.match_stats import MatchStats
from waterpolo.models.penalty_shootout import PenaltyShootoutPlayer
from waterpolo.models.goalkeeper_shot import GoalkeeperShot


class MatchRepository:
    """Repository async para o partido e suas tabelas dependentes

    Cada escrita faz commit imediatamente; uma falha no meio de um save deixa
    as etapas anteriores gravadas.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_match(self, match_id: int) -> Optional[dict]:
        """Obtém partido por ID"""
        result = await self.db.execute(select(Match).filter(Match.id == match_id))
        match = result.scalar_one_or_none()
        return match.to_dict() if match else None

    async def get_recent(self, club_id: int, limit: int = 10) -> List[dict]:
        """Últimos partidos do clube"""
        result = await self.db.execute(
            select(Match)
            .filter(Match.club_id == club_id)
            .order_by(Match.match_date.desc(), Match.id.desc())
            .limit(limit)
        )
        return [m.to_dict() for m in result.scalars().all()]

    async def get_stats(self, match_id: int) -> List[dict]:
        result = await self.db.execute(
            select(MatchStats).filter(MatchStats.match_id == match_id).order_by(MatchStats.id)
        )
        return [s.to_dict() for s in result.scalars().all()]

    async def get_callup_ids(self, match_id: int) -> List[int]:
        """Jogadores com estatísticas gravadas no partido"""
        result = await self.db.execute(
            select(MatchStats.player_id).filter(MatchStats.match_id == match_id).order_by(MatchStats.id)
        )
        return list(result.scalars().all())

    async def get_penalties(self, match_id: int) -> List[dict]:
        result = await self.db.execute(
            select(PenaltyShootoutPlayer)
            .filter(PenaltyShootoutPlayer.match_id == match_id)
            .order_by(PenaltyShootoutPlayer.shot_order)
        )
        return [p.to_dict() for p in result.scalars().all()]

    async def get_goalkeeper_shots(self, match_id: int) -> List[dict]:
        result = await self.db.execute(
            select(GoalkeeperShot)
            .filter(GoalkeeperShot.match_id == match_id)
            .order_by(GoalkeeperShot.goalkeeper_player_id, GoalkeeperShot.shot_index)
        )
        return [s.to_dict() for s in result.scalars().all()]

    async def create_match(self, club_id: int, values: dict) -> int:
        """Cria partido e retorna o ID"""
        match = Match(club_id=club_id, **values)
        self.db.add(match)
        await self.db.commit()
        await self.db.refresh(match)
        return match.id

    async def update_match(self, match_id: int, values: dict) -> None:
        """Atualiza partido"""
        await self.db.execute(update(Match).where(Match.id == match_id).values(**values))
        await self.db.commit()

    async def _replace(self, model, match_id: int, rows: List[dict]) -> None:
        await self.db.execute(delete(model).where(model.match_id == match_id))
        await self.db.commit()
        if rows:
            await self.db.execute(insert(model), rows)
            await self.db.commit()

    async def replace_stats(self, match_id: int, rows: List[dict]) -> None:
        await self._replace(MatchStats, match_id, rows)

    async def replace_penalties(self, match_id: int, rows: List[dict]) -> None:
        await self._replace(PenaltyShootoutPlayer, match_id, rows)

    async def replace_goalkeeper_shots(self, match_id: int, rows: List[dict]) -> None:
        await self._replace(GoalkeeperShot, match_id, rows)

    async def delete_match(self, match_id: int) -> bool:
        """Deleta partido e dependentes"""
        for model in (MatchStats, PenaltyShootoutPlayer, GoalkeeperShot):
            await self.db.execute(delete(model).where(model.match_id == match_id))
        result = await self.db.execute(delete(Match).where(Match.id == match_id))
        await self.db.commit()
        return result.rowcount > 0
