"""Testes do MatchService com repositories em memória"""
import asyncio
from datetime import date

import pytest

from waterpolo.core.exceptions import MatchNotFoundError, MatchSaveError, MatchValidationError
from waterpolo.services.match_service import MatchService


@pytest.fixture
def service(match_repository, player_repository):
    return MatchService(repository=match_repository, player_repository=player_repository)


def run(coro):
    return asyncio.run(coro)


def new_session(service, opponent="CN Rival"):
    session = run(service.start_session(1))
    session.update_details(opponent=opponent, match_date=date(2024, 10, 5))
    return session


class TestMatchService:

    def test_start_session_uses_default_callup(self, service):
        session = run(service.start_session(1))
        assert len(session.roster.active_ids) == 14
        assert session.club_id == 1
        assert session.is_new

    def test_save_new_match(self, service, match_repository):
        session = new_session(service)
        session.update_stat(101, "goles_boya_jugada", 2)
        session.update_stat(201, "portero_goles_penalti", 1)
        session.add_goalkeeper_shot(201, "goal", 0.2, 0.3)

        match_id = run(service.save(session, 1))

        assert session.match_id == match_id
        assert match_repository.calls == [
            "create_match", "replace_stats", "replace_goalkeeper_shots",
        ]
        match = match_repository.matches[match_id]
        assert (match["home_score"], match["away_score"]) == (2, 1)
        assert len(match_repository.stats[match_id]) == 14
        assert all(row["match_id"] == match_id for row in match_repository.stats[match_id])
        assert match_repository.shots[match_id][0]["shot_index"] == 1

    def test_validation_happens_before_any_write(self, service, match_repository):
        session = new_session(service, opponent="")
        with pytest.raises(MatchValidationError):
            run(service.save(session, 1))
        assert match_repository.calls == []

    def test_failure_is_generic_save_error(self, service, match_repository):
        session = new_session(service)
        match_repository.fail_on = "replace_stats"
        with pytest.raises(MatchSaveError):
            run(service.save(session, 1))
        # sem rollback: o partido criado continua gravado
        assert match_repository.calls == ["create_match", "replace_stats"]
        assert len(match_repository.matches) == 1
        assert session.match_id == 1

    def test_retry_after_failure_updates_same_match(self, service, match_repository):
        session = new_session(service)
        match_repository.fail_on = "replace_stats"
        with pytest.raises(MatchSaveError):
            run(service.save(session, 1))

        match_repository.fail_on = None
        match_repository.calls.clear()
        assert run(service.save(session, 1)) == 1
        assert match_repository.calls[0] == "update_match"
        assert list(match_repository.matches) == [1]
        assert match_repository.stats[1]

    def test_update_keeps_shots_when_list_is_empty(self, service, match_repository):
        session = new_session(service)
        session.add_goalkeeper_shot(201, "save", 0.5, 0.5)
        match_id = run(service.save(session, 1))

        loaded = run(service.load_session(match_id))
        loaded.shots.clear(201)
        match_repository.calls.clear()
        run(service.save(loaded, 1))

        assert match_repository.calls == ["update_match", "replace_stats", "replace_penalties"]
        assert len(match_repository.shots[match_id]) == 1

    def test_round_trip_with_shootout(self, service, match_repository):
        session = new_session(service)
        session.update_stat(101, "goles_boya_jugada", 2)
        session.update_stat(201, "portero_goles_penalti", 2)
        session.update_stat(201, "portero_paradas_penalti_parado", 1)
        session.set_penalty_scores(3, 2)
        session.add_penalty_shooter(103, True)
        session.add_rival_penalty("saved", goalkeeper_id=201)
        session.close_quarter(1)
        match_id = run(service.save(session, 1))

        stored = next(r for r in match_repository.stats[match_id] if r["player_id"] == 201)
        assert stored["portero_paradas_penalti_parado"] == 2

        loaded = run(service.load_session(match_id))
        assert loaded.store.get(201)["portero_paradas_penalti_parado"] == 1
        assert loaded.reconciler.quarters[1].closed
        assert (loaded.score.home, loaded.score.away) == (2, 2)
        assert [s.player_id for s in loaded.penalties.shooters] == [103]

        run(service.save(loaded, 1))
        stored = next(r for r in match_repository.stats[match_id] if r["player_id"] == 201)
        assert stored["portero_paradas_penalti_parado"] == 2

    def test_update_without_tie_clears_penalties(self, service, match_repository):
        session = new_session(service)
        session.update_stat(101, "goles_boya_jugada", 1)
        session.update_stat(201, "portero_goles_penalti", 1)
        session.set_penalty_scores(2, 1)
        session.add_penalty_shooter(103, True)
        match_id = run(service.save(session, 1))
        assert match_repository.penalties[match_id]

        loaded = run(service.load_session(match_id))
        loaded.update_stat(102, "goles_contraataque", 1)
        run(service.save(loaded, 1))
        assert match_repository.penalties[match_id] == []
        assert match_repository.matches[match_id]["penalty_home_score"] is None

    def test_load_missing_match(self, service):
        with pytest.raises(MatchNotFoundError):
            run(service.load_session(404))

    def test_copy_callup(self, service):
        first = new_session(service)
        first.remove_player(112)
        match_id = run(service.save(first, 1))

        second = run(service.start_session(1))
        selected = run(service.copy_callup(second, match_id))
        assert 112 not in selected
        assert second.roster.active_ids == selected

    def test_recent_and_delete(self, service, match_repository):
        match_id = run(service.save(new_session(service), 1))
        recent = run(service.recent_matches(1))
        assert [m["id"] for m in recent] == [match_id]

        run(service.delete_match(match_id))
        assert match_repository.matches == {}
        with pytest.raises(MatchNotFoundError):
            run(service.delete_match(match_id))
