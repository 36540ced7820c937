"""Sistema de validação e integridade de dados"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, Dict, Any, List
from datetime import datetime
import logging
from waterpolo.models.match import Match
from waterpolo.models.match_stats import MatchStats
from waterpolo.models.penalty_shootout import PenaltyShootoutPlayer
from waterpolo.models.player import Player
from waterpolo.services.stat_derivation import derive
from waterpolo.services.stat_fields import (
    DERIVED_FIELDS,
    KEEPER_GOAL_FIELD,
    RIVAL_SCORE_FIELDS,
    STAT_FIELDS,
)

logger = logging.getLogger(__name__)


class DataIntegrityChecker:
    """Classe para verificar a consistência dos partidos gravados"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def validate_stats(self, stats: dict) -> tuple[bool, Optional[str]]:
        """Valida contadores e campos derivados de uma linha de match_stats"""
        for name in STAT_FIELDS:
            value = stats.get(name)
            if value is not None and value < 0:
                return False, f"Campo {name} negativo"

        expected = derive({name: stats.get(name) for name in STAT_FIELDS})
        for name in DERIVED_FIELDS:
            if (stats.get(name) or 0) != expected[name]:
                return False, f"{name} = {stats.get(name)}, esperado {expected[name]}"

        return True, None

    def validate_match(self, match: dict, penalty_count: int = 0) -> tuple[bool, Optional[str]]:
        """Valida placar, parciais e disputa de pênaltis de um partido"""
        if not match.get("opponent") or len(match["opponent"].strip()) == 0:
            return False, "Nome do rival é obrigatório"

        home = match.get("home_score") or 0
        away = match.get("away_score") or 0
        if home < 0 or away < 0:
            return False, "Placar não pode ser negativo"

        quarters_home = sum(match.get(f"q{q}_score") or 0 for q in range(1, 5))
        quarters_away = sum(match.get(f"q{q}_score_rival") or 0 for q in range(1, 5))
        if (quarters_home, quarters_away) != (home, away):
            return False, (
                f"Soma dos parciais {quarters_home}-{quarters_away} "
                f"diferente do placar {home}-{away}"
            )

        penalty_home = match.get("penalty_home_score")
        penalty_away = match.get("penalty_away_score")
        if home == away and home != 0:
            if penalty_home is None or penalty_away is None:
                return False, "Empate sem resultado de pênaltis"
            if penalty_home == penalty_away:
                return False, "Disputa de pênaltis empatada"
            if penalty_count == 0:
                return False, "Empate sem lançadores de pênaltis"
        elif penalty_home is not None or penalty_away is not None:
            return False, "Pênaltis registrados em partido sem empate"

        return True, None

    def validate_match_totals(self, match: dict, stats_rows: List[dict]) -> tuple[bool, Optional[str]]:
        """Confere o placar gravado contra as estatísticas (linhas com `is_goalkeeper`)"""
        home = 0
        away = 0
        for row in stats_rows:
            if row.get("is_goalkeeper"):
                home += row.get(KEEPER_GOAL_FIELD) or 0
                away += sum(row.get(name) or 0 for name in RIVAL_SCORE_FIELDS)
            else:
                home += row.get("goles_totales") or 0
        if (home, away) != (match.get("home_score") or 0, match.get("away_score") or 0):
            return False, (
                f"Placar das estatísticas {home}-{away} diferente do gravado "
                f"{match.get('home_score')}-{match.get('away_score')}"
            )
        return True, None

    async def check_data_consistency(self, limit: int = 100) -> Dict[str, Any]:
        """Verifica consistência geral dos partidos no banco"""
        issues = []

        result = await self.db.execute(select(Match).order_by(Match.id.desc()).limit(limit))
        matches = [m.to_dict() for m in result.scalars().all()]

        for match in matches:
            stats_result = await self.db.execute(
                select(MatchStats, Player.is_goalkeeper)
                .join(Player, MatchStats.player_id == Player.id)
                .filter(MatchStats.match_id == match["id"])
            )
            stats_rows = [
                {**stats.to_dict(), "is_goalkeeper": bool(is_goalkeeper)}
                for stats, is_goalkeeper in stats_result.all()
            ]
            penalty_result = await self.db.execute(
                select(PenaltyShootoutPlayer.id).filter(
                    PenaltyShootoutPlayer.match_id == match["id"],
                    PenaltyShootoutPlayer.player_id.isnot(None),
                )
            )
            penalty_count = len(penalty_result.scalars().all())

            valid, error = self.validate_match(match, penalty_count)
            if not valid:
                issues.append(f"Partido {match['id']}: {error}")

            valid, error = self.validate_match_totals(match, stats_rows)
            if not valid:
                issues.append(f"Partido {match['id']}: {error}")

            for stats in stats_rows:
                valid, error = self.validate_stats(stats)
                if not valid:
                    issues.append(f"Partido {match['id']}, jogador {stats['player_id']}: {error}")

        if issues:
            logger.warning(f"Integridade: {len(issues)} problemas encontrados")

        return {
            "timestamp": datetime.utcnow().isoformat(),
            "matches_checked": len(matches),
            "issues_found": len(issues),
            "issues": issues,
            "status": "ok" if len(issues) == 0 else "issues_found"
        }
