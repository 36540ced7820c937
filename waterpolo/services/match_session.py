"""Sessão de edição de um partido (novo ou existente)"""
import logging
from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Dict, Iterable, List, Optional

from waterpolo.core.exceptions import (
    MatchEngineError,
    MatchValidationError,
    PlayerNotActiveError,
    RoleMismatchError,
)
from waterpolo.services.goalkeeper_shots import GoalkeeperShotDraft, GoalkeeperShotLog
from waterpolo.services.penalty_shootout import PenaltyAttempt, PenaltyShootoutBuilder
from waterpolo.services.roster_manager import RosterManager, RosterPlayer
from waterpolo.services.score_reconciler import (
    QUARTERS,
    QuarterScore,
    ScoreReconciler,
    Scoreline,
    compute_score,
)
from waterpolo.services.stat_derivation import StatRecord, derive
from waterpolo.services.stat_fields import PENALTY_SAVE_FIELD, safe_number
from waterpolo.services.stat_store import StatRecordStore

logger = logging.getLogger(__name__)

# colunas NOT NULL do partido
REQUIRED_DETAILS = ("match_date", "is_home")


def current_season(today: Optional[date] = None) -> str:
    """Temporada no formato 2024-2025 (vira em setembro)"""
    today = today or date.today()
    if today.month >= 9:
        return f"{today.year}-{today.year + 1}"
    return f"{today.year - 1}-{today.year}"


@dataclass
class MatchDetails:
    """Dados informativos do partido"""
    match_date: date = field(default_factory=date.today)
    opponent: str = ""
    location: Optional[str] = None
    is_home: bool = True
    season: Optional[str] = field(default_factory=current_season)
    jornada: Optional[int] = 1
    notes: Optional[str] = None
    competition_id: Optional[int] = None

    def update(self, **values) -> None:
        for key, value in values.items():
            if not hasattr(self, key):
                raise MatchEngineError(f"Campo do partido desconhecido: {key}", field=key)
            if value is None and key in REQUIRED_DETAILS:
                raise MatchEngineError(f"O campo {key} é obrigatório", field=key)
        for key, value in values.items():
            setattr(self, key, value)


@dataclass
class MatchSavePayload:
    """Tudo o que é gravado ao salvar; `match_id` é preenchido pelo serviço"""
    match_values: dict
    stats_rows: List[dict]
    penalties: List[PenaltyAttempt]
    shots: List[GoalkeeperShotDraft]
    has_shootout: bool


class MatchEditSession:
    """Estado em memória de um partido enquanto é editado

    Todas as mutações passam pelas operações nomeadas desta classe. O placar e o
    parcial ativo são recalculados depois de cada mutação do store.
    """

    def __init__(
        self,
        players: Iterable[RosterPlayer],
        records: Optional[Dict[int, Dict[str, int]]] = None,
        match_id: Optional[int] = None,
        details: Optional[MatchDetails] = None,
        quarters: Optional[Dict[int, QuarterScore]] = None,
        penalties: Optional[PenaltyShootoutBuilder] = None,
        shots: Optional[GoalkeeperShotLog] = None,
        sprint_winners: Optional[Dict[int, Optional[int]]] = None,
        penalty_home_score: Optional[int] = None,
        penalty_away_score: Optional[int] = None,
        club_id: Optional[int] = None,
    ):
        players = list(players)
        known = {p.id for p in players}
        records = dict(records or {})
        for player_id in [pid for pid in records if pid not in known]:
            logger.warning(f"Registro do jogador {player_id} ignorado: fora do elenco")
            del records[player_id]

        self.match_id = match_id
        self.club_id = club_id
        self.details = details or MatchDetails()
        self.store = StatRecordStore(records)
        self.roster = RosterManager(players, self.store)
        self.reconciler = ScoreReconciler(self.roster.is_goalkeeper, quarters)
        self.reconciler.score = compute_score(self.store, self.roster.is_goalkeeper)
        self.penalties = penalties or PenaltyShootoutBuilder()
        self.shots = shots or GoalkeeperShotLog()
        self.sprint_winners: Dict[int, Optional[int]] = {q: None for q in QUARTERS}
        self.sprint_winners.update(sprint_winners or {})
        self.penalty_home_score = penalty_home_score
        self.penalty_away_score = penalty_away_score

        self.store.subscribe(self._on_store_change)
        self.roster.on_removal(self._on_player_removed)

    def _on_store_change(self, store: StatRecordStore) -> None:
        self.reconciler.reconcile(store)

    def _on_player_removed(self, player_id: int) -> None:
        self.shots.clear(player_id)
        self.penalties.remove_shooter_player(player_id)
        self.penalties.forget_goalkeeper(player_id)
        for quarter, winner in self.sprint_winners.items():
            if winner == player_id:
                self.sprint_winners[quarter] = None

    @property
    def is_new(self) -> bool:
        return self.match_id is None

    @property
    def score(self) -> Scoreline:
        return self.reconciler.score

    # Estatísticas e convocatória

    def update_details(self, **values) -> MatchDetails:
        self.details.update(**values)
        return self.details

    def update_stat(self, player_id: int, field_name: str, value) -> StatRecord:
        return self.store.set(player_id, field_name, value)

    def add_player(self, player_id: int) -> RosterPlayer:
        return self.roster.add_player(player_id)

    def remove_player(self, player_id: int) -> None:
        self.roster.remove_player(player_id)

    def substitute(self, out_id: int, in_id: int) -> RosterPlayer:
        return self.roster.substitute(out_id, in_id)

    def has_stats(self, player_id: int) -> bool:
        return self.roster.has_stats(player_id)

    def load_callup(self, player_ids: Iterable[int]) -> List[int]:
        return self.roster.load_callup(player_ids)

    # Parciais

    def close_quarter(self, quarter: int) -> None:
        self.reconciler.close_quarter(quarter)

    def open_quarter(self, quarter: int) -> None:
        self.reconciler.open_quarter(quarter)

    def set_quarter_score(self, quarter: int, home, away) -> QuarterScore:
        return self.reconciler.set_quarter_score(quarter, home, away)

    def set_sprint_winner(self, quarter: int, player_id: Optional[int]) -> None:
        if quarter not in QUARTERS:
            raise MatchEngineError(f"Parcial inválido: {quarter}")
        if player_id is not None:
            self._require_active(player_id)
        self.sprint_winners[quarter] = player_id

    # Pênaltis e goleiros

    def _require_active(self, player_id: int) -> RosterPlayer:
        player = self.roster.player(player_id)
        if not self.roster.is_active(player_id):
            raise PlayerNotActiveError(f"{player.name} não está convocado")
        return player

    def _require_goalkeeper(self, player_id: int) -> RosterPlayer:
        player = self._require_active(player_id)
        if not player.is_goalkeeper:
            raise RoleMismatchError(f"{player.name} não é goleiro")
        return player

    def set_penalty_scores(self, home, away) -> None:
        self.penalty_home_score = None if home is None else safe_number(home)
        self.penalty_away_score = None if away is None else safe_number(away)

    def add_penalty_shooter(self, player_id: int, scored: bool):
        player = self._require_active(player_id)
        if player.is_goalkeeper:
            raise RoleMismatchError("Apenas jogadores de campo entram na lista de lançadores")
        return self.penalties.add_shooter(player_id, scored)

    def set_penalty_shooter_result(self, index: int, scored: bool):
        return self.penalties.set_shooter_result(index, scored)

    def remove_penalty_shooter(self, index: int) -> None:
        self.penalties.remove_shooter(index)

    def add_rival_penalty(self, result, goalkeeper_id: Optional[int] = None):
        if goalkeeper_id is not None:
            self._require_goalkeeper(goalkeeper_id)
        return self.penalties.add_rival_attempt(result, goalkeeper_id)

    def set_rival_penalty_result(self, attempt_id: int, result):
        return self.penalties.set_rival_result(attempt_id, result)

    def assign_rival_penalty_goalkeeper(self, attempt_id: int, goalkeeper_id: Optional[int]) -> None:
        if goalkeeper_id is not None:
            self._require_goalkeeper(goalkeeper_id)
        self.penalties.assign_goalkeeper(attempt_id, goalkeeper_id)

    def remove_rival_penalty(self, attempt_id: int) -> None:
        self.penalties.remove_rival_attempt(attempt_id)

    def add_goalkeeper_shot(self, goalkeeper_id: int, result, x, y) -> GoalkeeperShotDraft:
        self._require_goalkeeper(goalkeeper_id)
        return self.shots.add_shot(goalkeeper_id, result, x, y)

    def undo_goalkeeper_shot(self, goalkeeper_id: int) -> bool:
        self._require_goalkeeper(goalkeeper_id)
        return self.shots.remove_last(goalkeeper_id)

    # Salvamento

    def validate(self) -> Scoreline:
        """Valida o partido antes de qualquer escrita; retorna o placar"""
        if not (self.details.opponent or "").strip():
            raise MatchValidationError("Por favor, informe o nome do rival", field="opponent")

        score = self.score
        if score.requires_shootout:
            if self.penalty_home_score is None or self.penalty_away_score is None:
                raise MatchValidationError(
                    "O partido está empatado. É preciso registrar o resultado dos pênaltis.",
                    field="penalties",
                )
            if self.penalty_home_score == self.penalty_away_score:
                raise MatchValidationError(
                    "A disputa de pênaltis não pode terminar empatada.",
                    field="penalties",
                )
            if not self.penalties.shooters:
                raise MatchValidationError(
                    "Nenhum lançador de pênaltis da equipe foi selecionado.",
                    field="penalties",
                )
        return score

    def _quarter_values(self) -> dict:
        values = {}
        for q in QUARTERS:
            quarter = self.reconciler.quarters[q]
            keep = quarter.closed or quarter.home != 0 or quarter.away != 0
            values[f"q{q}_score"] = quarter.home if keep else None
            values[f"q{q}_score_rival"] = quarter.away if keep else None
            values[f"sprint{q}_winner"] = self.sprint_winners.get(q)
        return values

    def _records_for_persistence(self, has_shootout: bool) -> Dict[int, StatRecord]:
        records = self.store.snapshot()
        if not has_shootout:
            return records
        for goalkeeper_id, saves in self.penalties.saves_by_goalkeeper().items():
            record = records.get(goalkeeper_id)
            if record is None:
                continue
            record[PENALTY_SAVE_FIELD] = safe_number(record.get(PENALTY_SAVE_FIELD)) + saves
            records[goalkeeper_id] = derive(record)
        return records

    def build_save_payload(self) -> MatchSavePayload:
        score = self.validate()
        has_shootout = score.requires_shootout
        details = self.details

        match_values = {
            "match_date": details.match_date,
            "opponent": details.opponent.strip(),
            "location": details.location or None,
            "is_home": details.is_home,
            "season": details.season or None,
            "jornada": details.jornada or None,
            "notes": details.notes or None,
            "competition_id": details.competition_id,
            "home_score": score.home,
            "away_score": score.away,
            "max_players_on_field": len(self.roster.field_player_ids()),
            "penalty_home_score": self.penalty_home_score if has_shootout else None,
            "penalty_away_score": self.penalty_away_score if has_shootout else None,
        }
        match_values.update(self._quarter_values())

        records = self._records_for_persistence(has_shootout)
        stats_rows = [
            {"player_id": player_id, **records[player_id]}
            for player_id in self.roster.active_ids
        ]
        return MatchSavePayload(
            match_values=match_values,
            stats_rows=stats_rows,
            penalties=self.penalties.build() if has_shootout else [],
            shots=self.shots.all_shots(),
            has_shootout=has_shootout,
        )

    def to_dict(self) -> dict:
        """Visão completa da sessão para a API"""
        score = self.score
        details = asdict(self.details)
        return {
            "match_id": self.match_id,
            "details": details,
            "score": {
                "home": score.home,
                "away": score.away,
                "requires_shootout": score.requires_shootout,
            },
            "active_quarter": self.reconciler.active_quarter(),
            "quarters": self.reconciler.quarter_list(),
            "sprint_winners": {str(q): pid for q, pid in self.sprint_winners.items()},
            "roster": {
                "field_players": self.roster.field_player_ids(),
                "goalkeepers": self.roster.goalkeeper_ids(),
            },
            "stats": {str(pid): record for pid, record in self.store},
            "penalties": {
                **self.penalties.to_dict(),
                "home_score": self.penalty_home_score,
                "away_score": self.penalty_away_score,
            },
            "goalkeeper_shots": [shot.to_dict() for shot in self.shots.all_shots()],
        }
