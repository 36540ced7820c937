"""Testes do registro de sessões e das validações de integridade"""
from datetime import datetime, timedelta

import pytest

from waterpolo.core.data_integrity import DataIntegrityChecker
from waterpolo.core.exceptions import SessionNotFoundError
from waterpolo.services.match_session import MatchEditSession
from waterpolo.services.session_registry import MatchSessionRegistry
from waterpolo.services.stat_derivation import derive
from waterpolo.services.stat_fields import empty_stats


class TestMatchSessionRegistry:

    def test_open_and_get(self, players):
        registry = MatchSessionRegistry(ttl_minutes=10)
        session = MatchEditSession(players)
        session_id = registry.open(session, club_id=1)
        assert registry.get(session_id) is session
        assert registry.entry(session_id).club_id == 1

    def test_sessions_are_independent(self, players):
        registry = MatchSessionRegistry(ttl_minutes=10)
        first = registry.open(MatchEditSession(players, records={101: {}}), 1)
        second = registry.open(MatchEditSession(players, records={101: {}}), 1)
        registry.get(first).update_stat(101, "goles_boya_jugada", 2)
        assert registry.get(second).score.home == 0

    def test_expired_session(self, players):
        registry = MatchSessionRegistry(ttl_minutes=10)
        session_id = registry.open(MatchEditSession(players), 1)
        registry.entry(session_id).last_used = datetime.utcnow() - timedelta(minutes=11)
        with pytest.raises(SessionNotFoundError):
            registry.get(session_id)
        assert len(registry) == 0

    def test_close_and_purge(self, players):
        registry = MatchSessionRegistry(ttl_minutes=10)
        kept = registry.open(MatchEditSession(players), 1)
        stale = registry.open(MatchEditSession(players), 1)
        registry.entry(stale).last_used = datetime.utcnow() - timedelta(hours=1)
        assert registry.purge_expired() == 1
        registry.close(kept)
        registry.close(kept)
        assert len(registry) == 0


class TestIntegrityValidations:

    def setup_method(self):
        self.checker = DataIntegrityChecker(db=None)

    def match(self, **overrides):
        row = {"id": 1, "opponent": "CN Rival", "home_score": 2, "away_score": 1,
               "q1_score": 2, "q1_score_rival": 1,
               "penalty_home_score": None, "penalty_away_score": None}
        row.update(overrides)
        return row

    def test_valid_match(self):
        assert self.checker.validate_match(self.match()) == (True, None)

    def test_quarter_sum_mismatch(self):
        valid, error = self.checker.validate_match(self.match(q1_score=1))
        assert not valid
        assert "parciais" in error

    def test_tie_requires_shootout(self):
        row = self.match(away_score=2, q1_score_rival=2)
        assert not self.checker.validate_match(row)[0]
        row.update(penalty_home_score=3, penalty_away_score=1)
        assert not self.checker.validate_match(row, penalty_count=0)[0]
        assert self.checker.validate_match(row, penalty_count=3) == (True, None)

    def test_penalties_without_tie(self):
        row = self.match(penalty_home_score=3, penalty_away_score=1)
        assert not self.checker.validate_match(row)[0]

    def test_stats_row(self):
        record = empty_stats()
        record.update(goles_lanzamiento=2, tiros_fuera=2)
        assert self.checker.validate_stats(derive(record)) == (True, None)
        stale = derive(record)
        stale["tiros_eficiencia"] = 0
        assert not self.checker.validate_stats(stale)[0]

    def test_totals_by_role(self):
        rows = [
            {"is_goalkeeper": False, "goles_totales": 2},
            {"is_goalkeeper": True, "portero_gol": 0, "portero_goles_penalti": 1,
             "portero_goles_boya": 4, "goles_totales": 3},
        ]
        assert self.checker.validate_match_totals(self.match(), rows) == (True, None)
