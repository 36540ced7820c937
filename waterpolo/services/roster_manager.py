"""Convocatória do partido: entradas, saídas e substituições"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from waterpolo.core.config import settings
from waterpolo.core.exceptions import (
    PlayerAlreadyActiveError,
    PlayerHasStatsError,
    PlayerNotActiveError,
    RoleMismatchError,
    RosterFullError,
    UnknownPlayerError,
)
from waterpolo.services.stat_store import StatRecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterPlayer:
    """Jogador do elenco do clube (dado mestre, imutável durante o partido)"""
    id: int
    number: int
    name: str
    is_goalkeeper: bool = False
    photo_url: Optional[str] = None


def initial_callup(players: Iterable[RosterPlayer], size: Optional[int] = None,
                   max_field_players: Optional[int] = None) -> List[int]:
    """Convocatória padrão: os primeiros por número, respeitando o limite de jogadores de campo"""
    size = settings.DEFAULT_CALLUP_SIZE if size is None else size
    max_field_players = settings.MAX_FIELD_PLAYERS if max_field_players is None else max_field_players
    selected: List[int] = []
    field_count = 0
    for player in sorted(players, key=lambda p: p.number):
        if len(selected) >= size:
            break
        if not player.is_goalkeeper:
            if field_count >= max_field_players:
                continue
            field_count += 1
        selected.append(player.id)
    return selected


class RosterManager:
    """Controla quem está convocado; cada convocado tem exatamente um registro no store"""

    def __init__(self, players: Iterable[RosterPlayer], store: StatRecordStore,
                 max_field_players: Optional[int] = None):
        self.players: Dict[int, RosterPlayer] = {p.id: p for p in players}
        self.store = store
        self.max_field_players = (
            settings.MAX_FIELD_PLAYERS if max_field_players is None else max_field_players
        )
        self.active_ids: List[int] = [pid for pid in store.player_ids() if pid in self.players]
        self._removal_listeners: List[Callable[[int], None]] = []

    def on_removal(self, listener: Callable[[int], None]) -> None:
        """Chamado com o id do jogador que deixou a convocatória"""
        self._removal_listeners.append(listener)

    def player(self, player_id: int) -> RosterPlayer:
        try:
            return self.players[player_id]
        except KeyError:
            raise UnknownPlayerError(f"Jogador {player_id} não pertence ao elenco")

    def is_goalkeeper(self, player_id: int) -> bool:
        player = self.players.get(player_id)
        return bool(player and player.is_goalkeeper)

    def is_active(self, player_id: int) -> bool:
        return player_id in self.active_ids

    def field_player_ids(self) -> List[int]:
        return [pid for pid in self.active_ids if not self.is_goalkeeper(pid)]

    def goalkeeper_ids(self) -> List[int]:
        return [pid for pid in self.active_ids if self.is_goalkeeper(pid)]

    def has_stats(self, player_id: int) -> bool:
        """Verifica se o jogador convocado já tem algum contador diferente de zero"""
        return self.store.has_stats(player_id)

    def available_players(self, is_goalkeeper: bool) -> List[RosterPlayer]:
        """Jogadores do elenco ainda não convocados, da mesma função"""
        return sorted(
            (p for p in self.players.values()
             if p.is_goalkeeper == is_goalkeeper and p.id not in self.active_ids),
            key=lambda p: p.number,
        )

    def _require_active(self, player_id: int) -> RosterPlayer:
        player = self.player(player_id)
        if not self.is_active(player_id):
            raise PlayerNotActiveError(f"{player.name} não está convocado")
        return player

    def _require_no_stats(self, player: RosterPlayer) -> None:
        if self.has_stats(player.id):
            raise PlayerHasStatsError(
                f"{player.name} já tem estatísticas registradas e não pode sair da convocatória"
            )

    def add_player(self, player_id: int) -> RosterPlayer:
        """Convoca um jogador com registro zerado"""
        player = self.player(player_id)
        if self.is_active(player_id):
            raise PlayerAlreadyActiveError(f"{player.name} já está convocado")
        if not player.is_goalkeeper and len(self.field_player_ids()) >= self.max_field_players:
            logger.info(f"Convocatória cheia, {player.name} rejeitado")
            raise RosterFullError(
                f"Não é possível convocar mais de {self.max_field_players} jogadores de campo"
            )
        self.active_ids.append(player_id)
        self.store.create(player_id)
        return player

    def remove_player(self, player_id: int) -> None:
        """Tira o jogador da convocatória descartando o registro (zerado)"""
        player = self._require_active(player_id)
        self._require_no_stats(player)
        self.active_ids.remove(player_id)
        self.store.discard(player_id)
        for listener in self._removal_listeners:
            listener(player_id)

    def substitute(self, out_id: int, in_id: int) -> RosterPlayer:
        """Troca um convocado sem estatísticas por outro jogador, que recebe registro zerado"""
        outgoing = self._require_active(out_id)
        incoming = self.player(in_id)
        if self.is_active(in_id):
            raise PlayerAlreadyActiveError(f"{incoming.name} já está convocado")
        if outgoing.is_goalkeeper != incoming.is_goalkeeper:
            raise RoleMismatchError("A substituição deve ser entre jogadores da mesma função")
        self._require_no_stats(outgoing)

        position = self.active_ids.index(out_id)
        self.active_ids[position] = in_id
        self.store.discard(out_id)
        self.store.create(in_id)
        for listener in self._removal_listeners:
            listener(out_id)
        logger.info(f"Substituição: {outgoing.name} -> {incoming.name}")
        return incoming

    def load_callup(self, player_ids: Iterable[int]) -> List[int]:
        """Substitui a convocatória inteira (ex.: copiada de outro partido)"""
        for player_id in self.active_ids:
            self._require_no_stats(self.players[player_id])

        selected: List[int] = []
        field_count = 0
        for player_id in player_ids:
            player = self.players.get(player_id)
            if player is None or player_id in selected:
                continue
            if not player.is_goalkeeper:
                if field_count >= self.max_field_players:
                    logger.warning(f"Convocatória copiada excede o limite, {player.name} ignorado")
                    continue
                field_count += 1
            selected.append(player_id)

        removed = [pid for pid in self.active_ids if pid not in selected]
        self.active_ids = selected
        self.store.replace({pid: {} for pid in selected})
        for player_id in removed:
            for listener in self._removal_listeners:
                listener(player_id)
        return list(selected)
