"""Service de Partido (Async): carga e salvamento das sessões de edição"""
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from waterpolo.core.config import settings
from waterpolo.core.exceptions import MatchNotFoundError, MatchSaveError
from waterpolo.repositories.match_repository import MatchRepository
from waterpolo.repositories.player_repository import PlayerRepository
from waterpolo.services.match_edit_loader import MatchEditLoader
from waterpolo.services.match_session import MatchEditSession
from waterpolo.services.roster_manager import RosterPlayer, initial_callup

logger = logging.getLogger(__name__)


def to_roster_player(player) -> RosterPlayer:
    """Converte o modelo Player no jogador imutável do motor"""
    return RosterPlayer(
        id=player.id,
        number=player.number,
        name=player.name,
        is_goalkeeper=bool(player.is_goalkeeper),
        photo_url=player.photo_url,
    )


class MatchService:
    """Service async para o fluxo de novo/editar partido"""

    def __init__(self, db: Optional[AsyncSession] = None,
                 repository: Optional[MatchRepository] = None,
                 player_repository: Optional[PlayerRepository] = None):
        self.db = db
        self.repository = repository or MatchRepository(db)
        self.player_repository = player_repository or PlayerRepository(db)

    async def get_players(self, club_id: int, extra_ids=()) -> List[RosterPlayer]:
        players = await self.player_repository.get_by_club(club_id, extra_ids)
        return [to_roster_player(p) for p in players]

    async def start_session(self, club_id: int) -> MatchEditSession:
        """Novo partido com a convocatória padrão"""
        players = await self.get_players(club_id)
        callup = initial_callup(players)
        session = MatchEditSession(players, records={pid: {} for pid in callup}, club_id=club_id)
        logger.info(f"Novo partido iniciado para o clube {club_id} com {len(callup)} convocados")
        return session

    async def load_session(self, match_id: int) -> MatchEditSession:
        """Retoma a edição de um partido salvo"""
        match_row = await self.repository.get_match(match_id)
        if not match_row:
            raise MatchNotFoundError(f"Partido {match_id} não encontrado")

        stats_rows = await self.repository.get_stats(match_id)
        penalty_rows = await self.repository.get_penalties(match_id)
        shot_rows = await self.repository.get_goalkeeper_shots(match_id)

        # jogadores que já saíram do clube continuam editáveis no partido
        players = await self.get_players(
            match_row["club_id"], extra_ids=[row["player_id"] for row in stats_rows]
        )
        return MatchEditLoader(players).load(match_row, stats_rows, penalty_rows, shot_rows)

    async def copy_callup(self, session: MatchEditSession, match_id: int) -> List[int]:
        """Copia a convocatória de outro partido (registros zerados)"""
        if not await self.repository.get_match(match_id):
            raise MatchNotFoundError(f"Partido {match_id} não encontrado")
        player_ids = await self.repository.get_callup_ids(match_id)
        return session.load_callup(player_ids)

    async def recent_matches(self, club_id: int, limit: Optional[int] = None) -> List[dict]:
        return await self.repository.get_recent(club_id, limit or settings.RECENT_MATCHES_LIMIT)

    async def delete_match(self, match_id: int) -> None:
        if not await self.repository.delete_match(match_id):
            raise MatchNotFoundError(f"Partido {match_id} não encontrado")
        logger.info(f"Partido {match_id} removido")

    async def save(self, session: MatchEditSession, club_id: int) -> int:
        """Valida e grava o partido; retorna o ID

        A validação acontece antes de qualquer escrita. Depois disso as etapas são
        sequenciais e sem rollback: qualquer falha vira um MatchSaveError.
        """
        payload = session.build_save_payload()
        is_new = session.is_new
        match_id = session.match_id
        try:
            if is_new:
                match_id = await self.repository.create_match(club_id, payload.match_values)
                # uma nova tentativa depois de falha atualiza este mesmo partido
                session.match_id = match_id
            else:
                await self.repository.update_match(match_id, payload.match_values)

            await self.repository.replace_stats(
                match_id, [{**row, "match_id": match_id} for row in payload.stats_rows]
            )

            if payload.has_shootout:
                await self.repository.replace_penalties(
                    match_id, [attempt.to_row(match_id) for attempt in payload.penalties]
                )
            elif not is_new:
                await self.repository.replace_penalties(match_id, [])

            shot_rows = [shot.to_row(match_id) for shot in payload.shots]
            if shot_rows:
                await self.repository.replace_goalkeeper_shots(match_id, shot_rows)
            elif not is_new:
                logger.warning(
                    f"Partido {match_id}: lista de arremessos vazia, arremessos gravados mantidos"
                )
        except Exception as e:
            logger.error(f"Erro ao salvar partido {match_id}: {e}")
            raise MatchSaveError() from e

        logger.info(
            f"Partido {match_id} salvo: {payload.match_values['home_score']}-"
            f"{payload.match_values['away_score']} contra {payload.match_values['opponent']}"
        )
        return match_id
