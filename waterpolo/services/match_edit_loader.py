"""Reconstrói a sessão de edição a partir de um partido salvo"""
import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from waterpolo.services.goalkeeper_shots import GoalkeeperShotDraft, GoalkeeperShotLog, ShotResult, clamp01
from waterpolo.services.match_session import MatchDetails, MatchEditSession, current_season
from waterpolo.services.penalty_shootout import PenaltyResult, PenaltyShootoutBuilder
from waterpolo.services.roster_manager import RosterPlayer
from waterpolo.services.score_reconciler import QUARTERS, QuarterScore
from waterpolo.services.stat_derivation import derive
from waterpolo.services.stat_fields import PENALTY_SAVE_FIELD, STAT_FIELDS, empty_stats, safe_number

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


def merge_stats_row(row: Row) -> Dict[str, int]:
    """Mescla a linha salva sobre o template zerado (campos ausentes valem 0)"""
    record = empty_stats()
    missing = []
    for name in STAT_FIELDS:
        if name in row:
            record[name] = safe_number(row[name])
        else:
            missing.append(name)
    if missing:
        logger.debug(f"Jogador {row.get('player_id')}: {len(missing)} campos ausentes preenchidos com 0")
    return record


def quarter_is_closed(match_row: Row, quarter: int) -> bool:
    """Parcial fechado = placar próprio e rival presentes na linha salva"""
    return (match_row.get(f"q{quarter}_score") is not None
            and match_row.get(f"q{quarter}_score_rival") is not None)


class MatchEditLoader:
    """Converte as linhas persistidas em uma `MatchEditSession`"""

    def __init__(self, players: Iterable[RosterPlayer]):
        self.players = list(players)

    def load_details(self, match_row: Row) -> MatchDetails:
        return MatchDetails(
            match_date=match_row["match_date"],
            opponent=match_row.get("opponent") or "",
            location=match_row.get("location"),
            is_home=bool(match_row.get("is_home", True)),
            season=match_row.get("season") or current_season(),
            jornada=match_row.get("jornada") or 1,
            notes=match_row.get("notes"),
            competition_id=match_row.get("competition_id"),
        )

    def load_quarters(self, match_row: Row) -> Dict[int, QuarterScore]:
        return {
            q: QuarterScore(
                home=safe_number(match_row.get(f"q{q}_score")),
                away=safe_number(match_row.get(f"q{q}_score_rival")),
                closed=quarter_is_closed(match_row, q),
            )
            for q in QUARTERS
        }

    def load_penalties(self, penalty_rows: Iterable[Row]) -> PenaltyShootoutBuilder:
        """Separa lançadores próprios (player_id) das tentativas rivais (player_id nulo)"""
        builder = PenaltyShootoutBuilder()
        for row in sorted(penalty_rows, key=lambda r: safe_number(r.get("shot_order"))):
            scored = bool(row.get("scored"))
            if row.get("player_id") is not None:
                builder.add_shooter(row["player_id"], scored)
                continue
            result = row.get("result_type")
            if result is None:
                result = PenaltyResult.SCORED if scored else PenaltyResult.MISSED
            goalkeeper_id = row.get("goalkeeper_id") if result == PenaltyResult.SAVED else None
            builder.add_rival_attempt(result, goalkeeper_id)
        return builder

    def load_shots(self, shot_rows: Iterable[Row]) -> GoalkeeperShotLog:
        shots = [
            GoalkeeperShotDraft(
                goalkeeper_player_id=row["goalkeeper_player_id"],
                shot_index=safe_number(row.get("shot_index")),
                result=ShotResult(row.get("result")),
                x=clamp01(row.get("x")),
                y=clamp01(row.get("y")),
            )
            for row in shot_rows
        ]
        shots.sort(key=lambda s: (s.goalkeeper_player_id, s.shot_index))
        return GoalkeeperShotLog(shots)

    def load(
        self,
        match_row: Row,
        stats_rows: Iterable[Row],
        penalty_rows: Iterable[Row] = (),
        shot_rows: Iterable[Row] = (),
    ) -> MatchEditSession:
        records: Dict[int, Dict[str, int]] = {}
        for row in stats_rows:
            records[row["player_id"]] = merge_stats_row(row)

        penalties = self.load_penalties(penalty_rows)

        # as defesas de pênalti rival foram somadas ao goleiro no último save
        if match_row.get("penalty_home_score") is not None:
            for goalkeeper_id, saves in penalties.saves_by_goalkeeper().items():
                record = records.get(goalkeeper_id)
                if record is None:
                    continue
                record[PENALTY_SAVE_FIELD] = safe_number(record[PENALTY_SAVE_FIELD] - saves)

        records = {pid: derive(record) for pid, record in records.items()}

        sprint_winners: Dict[int, Optional[int]] = {
            q: match_row.get(f"sprint{q}_winner") for q in QUARTERS
        }
        session = MatchEditSession(
            self.players,
            records=records,
            match_id=match_row["id"],
            club_id=match_row.get("club_id"),
            details=self.load_details(match_row),
            quarters=self.load_quarters(match_row),
            penalties=penalties,
            shots=self.load_shots(shot_rows),
            sprint_winners=sprint_winners,
            penalty_home_score=match_row.get("penalty_home_score"),
            penalty_away_score=match_row.get("penalty_away_score"),
        )
        logger.info(f"Partido {match_row['id']} carregado com {len(records)} jogadores")
        return session
