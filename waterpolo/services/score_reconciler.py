"""Placar derivado e repartição por parciais"""
import logging
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Optional

from waterpolo.core.exceptions import (
    MatchEngineError,
    QuarterClosedError,
    QuarterNotActiveError,
    QuarterScoreMismatchError,
)
from waterpolo.services.stat_fields import KEEPER_GOAL_FIELD, RIVAL_SCORE_FIELDS, safe_number
from waterpolo.services.stat_store import StatRecordStore

logger = logging.getLogger(__name__)

QUARTERS = (1, 2, 3, 4)


@dataclass(frozen=True)
class Scoreline:
    """Placar (gols próprios, gols do rival)"""
    home: int
    away: int

    @property
    def is_tied(self) -> bool:
        return self.home == self.away

    @property
    def requires_shootout(self) -> bool:
        """Empate diferente de 0-0 precisa de disputa de pênaltis"""
        return self.is_tied and self.home != 0


@dataclass
class QuarterScore:
    home: int = 0
    away: int = 0
    closed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def compute_score(store: StatRecordStore, is_goalkeeper: Callable[[int], bool]) -> Scoreline:
    """Calcula o placar a partir de todos os registros"""
    home = 0
    away = 0
    for player_id, record in store:
        if is_goalkeeper(player_id):
            home += safe_number(record.get(KEEPER_GOAL_FIELD))
            away += sum(safe_number(record.get(name)) for name in RIVAL_SCORE_FIELDS)
        else:
            home += safe_number(record.get("goles_totales"))
    return Scoreline(home=home, away=away)


def _check_quarter(quarter: int) -> None:
    if quarter not in QUARTERS:
        raise MatchEngineError(f"Parcial inválido: {quarter}")


class ScoreReconciler:
    """Mantém o placar e joga a diferença no primeiro parcial aberto"""

    def __init__(self, is_goalkeeper: Callable[[int], bool],
                 quarters: Optional[Dict[int, QuarterScore]] = None):
        self.is_goalkeeper = is_goalkeeper
        self.quarters: Dict[int, QuarterScore] = {q: QuarterScore() for q in QUARTERS}
        for q, score in (quarters or {}).items():
            _check_quarter(q)
            self.quarters[q] = QuarterScore(score.home, score.away, score.closed)
        self.score = Scoreline(0, 0)

    def active_quarter(self) -> Optional[int]:
        """Primeiro parcial não fechado"""
        for q in QUARTERS:
            if not self.quarters[q].closed:
                return q
        return None

    def others_total(self, quarter: int) -> Scoreline:
        """Soma de todos os parciais exceto `quarter`"""
        home = sum(self.quarters[q].home for q in QUARTERS if q != quarter)
        away = sum(self.quarters[q].away for q in QUARTERS if q != quarter)
        return Scoreline(home, away)

    def reconcile(self, store: StatRecordStore) -> Scoreline:
        """Recalcula o placar e atualiza o parcial ativo"""
        self.score = compute_score(store, self.is_goalkeeper)
        self._apportion()
        return self.score

    def _apportion(self) -> None:
        # o parcial ativo fica com tudo o que os outros não explicam
        active = self.active_quarter()
        if active is None:
            return
        others = self.others_total(active)
        current = self.quarters[active]
        current.home = self.score.home - others.home
        current.away = self.score.away - others.away

    def close_quarter(self, quarter: int) -> None:
        _check_quarter(quarter)
        self.quarters[quarter].closed = True
        self._apportion()
        logger.debug(f"Parcial {quarter} fechado")

    def open_quarter(self, quarter: int) -> None:
        _check_quarter(quarter)
        self.quarters[quarter].closed = False
        self._apportion()
        logger.debug(f"Parcial {quarter} reaberto")

    def set_quarter_score(self, quarter: int, home, away) -> QuarterScore:
        """Correção manual do parcial ativo; o parcial é fechado com esses valores

        O restante do placar passa para o próximo parcial aberto. Se não houver
        nenhum, os valores precisam fechar exatamente com o placar.
        """
        _check_quarter(quarter)
        current = self.quarters[quarter]
        if current.closed:
            raise QuarterClosedError(f"O parcial {quarter} está fechado")
        active = self.active_quarter()
        if quarter != active:
            raise QuarterNotActiveError(f"Só o parcial ativo ({active}) pode ser corrigido")

        home = safe_number(home)
        away = safe_number(away)
        if not any(not self.quarters[q].closed for q in QUARTERS if q > quarter):
            others = self.others_total(quarter)
            expected = Scoreline(self.score.home - others.home, self.score.away - others.away)
            if (home, away) != (expected.home, expected.away):
                raise QuarterScoreMismatchError(
                    f"O parcial {quarter} precisa terminar {expected.home}-{expected.away}"
                )

        current.home = home
        current.away = away
        current.closed = True
        self._apportion()
        logger.debug(f"Parcial {quarter} corrigido para {home}-{away}")
        return current

    def quarter_list(self) -> List[dict]:
        return [{"quarter": q, **self.quarters[q].to_dict()} for q in QUARTERS]
