"""Schemas de Match e da sessão de edição"""
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional
from datetime import date


class SessionCreate(BaseModel):
    """Abre uma sessão: partido novo (club_id) ou edição (match_id)"""
    club_id: Optional[int] = None
    match_id: Optional[int] = None


class MatchDetailsUpdate(BaseModel):
    """Atualização parcial dos dados informativos"""
    match_date: Optional[date] = None
    opponent: Optional[str] = None
    location: Optional[str] = None
    is_home: Optional[bool] = None
    season: Optional[str] = None
    jornada: Optional[int] = None
    notes: Optional[str] = None
    competition_id: Optional[int] = None


class StatUpdate(BaseModel):
    """Valor é convertido para inteiro não negativo pelo motor"""
    player_id: int
    field: str
    value: Any = 0


class PlayerRef(BaseModel):
    player_id: int


class Substitution(BaseModel):
    out_player_id: int
    in_player_id: int


class CallupCopy(BaseModel):
    match_id: int


class QuarterScoreUpdate(BaseModel):
    home: Any = 0
    away: Any = 0


class SprintWinnerUpdate(BaseModel):
    player_id: Optional[int] = None


class PenaltyScoresUpdate(BaseModel):
    home: Optional[int] = None
    away: Optional[int] = None


class PenaltyShooterCreate(BaseModel):
    player_id: int
    scored: bool = False


class PenaltyShooterUpdate(BaseModel):
    scored: bool


class RivalPenaltyCreate(BaseModel):
    result: str
    goalkeeper_id: Optional[int] = None


class RivalPenaltyUpdate(BaseModel):
    result: Optional[str] = None
    goalkeeper_id: Optional[int] = None


class GoalkeeperShotCreate(BaseModel):
    goalkeeper_id: int
    result: str
    x: Any = 0
    y: Any = 0


class SessionResponse(BaseModel):
    """Estado completo da sessão de edição"""
    session_id: str
    match_id: Optional[int] = None
    details: Dict[str, Any]
    score: Dict[str, Any]
    active_quarter: Optional[int] = None
    quarters: List[Dict[str, Any]]
    sprint_winners: Dict[str, Optional[int]]
    roster: Dict[str, List[int]]
    stats: Dict[str, Dict[str, int]]
    penalties: Dict[str, Any]
    goalkeeper_shots: List[Dict[str, Any]]


class SaveResponse(BaseModel):
    match_id: int
    home_score: int
    away_score: int


class MatchSummary(BaseModel):
    """Linha da lista de partidos recentes"""
    id: int
    match_date: date
    opponent: str
    location: Optional[str] = None
    is_home: bool = True
    season: Optional[str] = None
    jornada: Optional[int] = None
    home_score: int = 0
    away_score: int = 0
    penalty_home_score: Optional[int] = None
    penalty_away_score: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
