"""Disputa de pênaltis: lançadores próprios e tentativas do rival"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from waterpolo.core.exceptions import PenaltyError


class PenaltyResult(str, Enum):
    SCORED = "scored"
    SAVED = "saved"
    MISSED = "missed"


def _result(value) -> PenaltyResult:
    try:
        return PenaltyResult(value)
    except ValueError:
        raise PenaltyError(f"Resultado de pênalti inválido: {value}")


@dataclass
class PenaltyShooter:
    player_id: int
    scored: bool


@dataclass
class RivalPenalty:
    id: int
    result: PenaltyResult


@dataclass(frozen=True)
class PenaltyAttempt:
    """Linha de `penalty_shootout_players`"""
    player_id: Optional[int]
    shot_order: int
    scored: bool
    result_type: PenaltyResult
    goalkeeper_id: Optional[int] = None

    def to_row(self, match_id: int) -> dict:
        return {
            "match_id": match_id,
            "player_id": self.player_id,
            "shot_order": self.shot_order,
            "scored": self.scored,
            "result_type": self.result_type.value,
            "goalkeeper_id": self.goalkeeper_id,
        }


@dataclass
class PenaltyShootoutBuilder:
    """Monta a lista ordenada de tentativas a partir das duas listas da tela"""

    shooters: List[PenaltyShooter] = field(default_factory=list)
    rival_attempts: List[RivalPenalty] = field(default_factory=list)
    # id interno da tentativa rival -> goleiro que defendeu
    rival_goalkeepers: Dict[int, int] = field(default_factory=dict)
    _next_rival_id: int = field(default=1, repr=False)

    def add_shooter(self, player_id: int, scored: bool) -> PenaltyShooter:
        if any(s.player_id == player_id for s in self.shooters):
            raise PenaltyError(f"O jogador {player_id} já está na lista de lançadores")
        shooter = PenaltyShooter(player_id=player_id, scored=bool(scored))
        self.shooters.append(shooter)
        return shooter

    def set_shooter_result(self, index: int, scored: bool) -> PenaltyShooter:
        shooter = self._shooter_at(index)
        shooter.scored = bool(scored)
        return shooter

    def remove_shooter(self, index: int) -> None:
        self._shooter_at(index)
        del self.shooters[index]

    def remove_shooter_player(self, player_id: int) -> None:
        self.shooters = [s for s in self.shooters if s.player_id != player_id]

    def _shooter_at(self, index: int) -> PenaltyShooter:
        if index < 0 or index >= len(self.shooters):
            raise PenaltyError(f"Lançador inexistente na posição {index}")
        return self.shooters[index]

    def add_rival_attempt(self, result, goalkeeper_id: Optional[int] = None) -> RivalPenalty:
        attempt = RivalPenalty(id=self._next_rival_id, result=_result(result))
        self._next_rival_id += 1
        self.rival_attempts.append(attempt)
        if goalkeeper_id is not None:
            self.rival_goalkeepers[attempt.id] = goalkeeper_id
        return attempt

    def set_rival_result(self, attempt_id: int, result) -> RivalPenalty:
        attempt = self._rival(attempt_id)
        attempt.result = _result(result)
        return attempt

    def assign_goalkeeper(self, attempt_id: int, goalkeeper_id: Optional[int]) -> None:
        self._rival(attempt_id)
        if goalkeeper_id is None:
            self.rival_goalkeepers.pop(attempt_id, None)
        else:
            self.rival_goalkeepers[attempt_id] = goalkeeper_id

    def remove_rival_attempt(self, attempt_id: int) -> None:
        attempt = self._rival(attempt_id)
        self.rival_attempts.remove(attempt)
        self.rival_goalkeepers.pop(attempt_id, None)

    def forget_goalkeeper(self, goalkeeper_id: int) -> None:
        """Remove as atribuições de um goleiro que saiu da convocatória"""
        self.rival_goalkeepers = {
            aid: gk for aid, gk in self.rival_goalkeepers.items() if gk != goalkeeper_id
        }

    def _rival(self, attempt_id: int) -> RivalPenalty:
        for attempt in self.rival_attempts:
            if attempt.id == attempt_id:
                return attempt
        raise PenaltyError(f"Tentativa rival {attempt_id} não encontrada")

    @property
    def own_score(self) -> int:
        return sum(1 for s in self.shooters if s.scored)

    @property
    def rival_score(self) -> int:
        return sum(1 for a in self.rival_attempts if a.result is PenaltyResult.SCORED)

    def build(self) -> List[PenaltyAttempt]:
        """Lista plana: lançadores próprios primeiro, depois o rival"""
        attempts = [
            PenaltyAttempt(
                player_id=shooter.player_id,
                shot_order=index + 1,
                scored=shooter.scored,
                result_type=PenaltyResult.SCORED if shooter.scored else PenaltyResult.MISSED,
            )
            for index, shooter in enumerate(self.shooters)
        ]
        offset = len(attempts)
        for index, attempt in enumerate(self.rival_attempts):
            goalkeeper_id = None
            if attempt.result is PenaltyResult.SAVED:
                goalkeeper_id = self.rival_goalkeepers.get(attempt.id)
            attempts.append(PenaltyAttempt(
                player_id=None,
                shot_order=offset + index + 1,
                scored=attempt.result is PenaltyResult.SCORED,
                result_type=attempt.result,
                goalkeeper_id=goalkeeper_id,
            ))
        return attempts

    def saves_by_goalkeeper(self) -> Dict[int, int]:
        """Pênaltis rivais defendidos por goleiro"""
        saves: Dict[int, int] = {}
        for attempt in self.rival_attempts:
            if attempt.result is not PenaltyResult.SAVED:
                continue
            goalkeeper_id = self.rival_goalkeepers.get(attempt.id)
            if goalkeeper_id is None:
                continue
            saves[goalkeeper_id] = saves.get(goalkeeper_id, 0) + 1
        return saves

    def to_dict(self) -> dict:
        return {
            "shooters": [{"player_id": s.player_id, "scored": s.scored} for s in self.shooters],
            "rival_attempts": [
                {
                    "id": a.id,
                    "result": a.result.value,
                    "goalkeeper_id": self.rival_goalkeepers.get(a.id),
                }
                for a in self.rival_attempts
            ],
            "own_score": self.own_score,
            "rival_score": self.rival_score,
        }
