"""Mapa de arremessos sofridos por goleiro (coordenadas no gol)"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, List, Optional

from waterpolo.core.exceptions import MatchEngineError


class ShotResult(str, Enum):
    GOAL = "goal"
    SAVE = "save"
    OUT = "out"


def clamp01(value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if value != value:
        return 0.0
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class GoalkeeperShotDraft:
    goalkeeper_player_id: int
    shot_index: int
    result: ShotResult
    x: float
    y: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["result"] = self.result.value
        return data

    def to_row(self, match_id: int) -> dict:
        return {"match_id": match_id, **self.to_dict()}


class GoalkeeperShotLog:
    """Lista ordenada de arremessos de todos os goleiros do partido"""

    def __init__(self, shots: Optional[List[GoalkeeperShotDraft]] = None):
        self._shots: List[GoalkeeperShotDraft] = list(shots or [])

    def __len__(self) -> int:
        return len(self._shots)

    def next_index(self, goalkeeper_id: int) -> int:
        return max((s.shot_index for s in self._shots if s.goalkeeper_player_id == goalkeeper_id),
                   default=0) + 1

    def add_shot(self, goalkeeper_id: int, result, x, y) -> GoalkeeperShotDraft:
        try:
            result = ShotResult(result)
        except ValueError:
            raise MatchEngineError(f"Resultado de arremesso inválido: {result}")
        shot = GoalkeeperShotDraft(
            goalkeeper_player_id=goalkeeper_id,
            shot_index=self.next_index(goalkeeper_id),
            result=result,
            x=clamp01(x),
            y=clamp01(y),
        )
        self._shots.append(shot)
        return shot

    def remove_last(self, goalkeeper_id: int) -> bool:
        """Desfaz o último arremesso do goleiro"""
        for index in range(len(self._shots) - 1, -1, -1):
            if self._shots[index].goalkeeper_player_id == goalkeeper_id:
                del self._shots[index]
                return True
        return False

    def clear(self, goalkeeper_id: int) -> int:
        before = len(self._shots)
        self._shots = [s for s in self._shots if s.goalkeeper_player_id != goalkeeper_id]
        return before - len(self._shots)

    def shots_for(self, goalkeeper_id: int) -> List[GoalkeeperShotDraft]:
        return [s for s in self._shots if s.goalkeeper_player_id == goalkeeper_id]

    def all_shots(self) -> List[GoalkeeperShotDraft]:
        return list(self._shots)

    def summary(self) -> Dict[int, Dict[str, int]]:
        """Contagem por resultado para cada goleiro"""
        result: Dict[int, Dict[str, int]] = {}
        for shot in self._shots:
            counts = result.setdefault(shot.goalkeeper_player_id, {r.value: 0 for r in ShotResult})
            counts[shot.result.value] += 1
        return result
