"""Armazenamento dos registros de estatística do partido em edição"""
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from waterpolo.core.exceptions import PlayerNotActiveError
from waterpolo.services.stat_derivation import StatRecord, apply_edit, derive, recompute
from waterpolo.services.stat_fields import STAT_FIELDS, empty_stats, safe_number


StoreListener = Callable[["StatRecordStore"], None]


class StatRecordStore:
    """Um registro de contadores por jogador convocado

    Todo registro guardado está com os campos derivados em dia. Os ouvintes
    inscritos com `subscribe` são chamados depois de cada mutação concluída.
    """

    def __init__(self, records: Optional[Mapping[int, Mapping[str, int]]] = None):
        self._records: Dict[int, StatRecord] = {}
        self._listeners: List[StoreListener] = []
        for player_id, record in (records or {}).items():
            self._records[player_id] = self._normalize(record)

    @staticmethod
    def _normalize(record: Mapping[str, int]) -> StatRecord:
        base = empty_stats()
        for name in STAT_FIELDS:
            if name in record:
                base[name] = safe_number(record[name])
        return derive(base)

    def subscribe(self, listener: StoreListener) -> None:
        """Registra um ouvinte de mutações"""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)

    def __contains__(self, player_id: int) -> bool:
        return player_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Tuple[int, StatRecord]]:
        for player_id, record in self._records.items():
            yield player_id, dict(record)

    def player_ids(self) -> List[int]:
        return list(self._records)

    def get(self, player_id: int) -> StatRecord:
        """Retorna uma cópia do registro do jogador"""
        try:
            return dict(self._records[player_id])
        except KeyError:
            raise PlayerNotActiveError(f"Jogador {player_id} não está convocado")

    def set(self, player_id: int, field: str, value) -> StatRecord:
        """Grava um contador e recalcula os derivados dependentes"""
        current = self.get(player_id)
        updated = recompute(apply_edit(current, field, value), changed=field)
        self._records[player_id] = updated
        self._notify()
        return dict(updated)

    def increment(self, player_id: int, field: str, amount: int = 1) -> StatRecord:
        """Soma `amount` ao contador (nunca abaixo de zero)"""
        current = self.get(player_id)
        return self.set(player_id, field, safe_number(current.get(field)) + amount)

    def create(self, player_id: int) -> StatRecord:
        """Cria um registro zerado para o jogador"""
        self._records[player_id] = derive(empty_stats())
        self._notify()
        return self.get(player_id)

    def discard(self, player_id: int) -> None:
        """Remove o registro do jogador"""
        if self._records.pop(player_id, None) is not None:
            self._notify()

    def replace(self, records: Mapping[int, Mapping[str, int]]) -> None:
        """Substitui todos os registros de uma vez"""
        self._records = {pid: self._normalize(record) for pid, record in records.items()}
        self._notify()

    def has_stats(self, player_id: int) -> bool:
        """Verifica se algum contador do jogador é diferente de zero"""
        record = self._records.get(player_id)
        if not record:
            return False
        return any(value > 0 for value in record.values())

    def snapshot(self) -> Dict[int, StatRecord]:
        """Cópia de todos os registros"""
        return {player_id: dict(record) for player_id, record in self._records.items()}
