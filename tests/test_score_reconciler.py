"""Testes do placar e dos parciais"""
import pytest

from waterpolo.core.exceptions import (
    MatchEngineError,
    QuarterClosedError,
    QuarterNotActiveError,
    QuarterScoreMismatchError,
)
from waterpolo.services.score_reconciler import (
    QuarterScore,
    ScoreReconciler,
    Scoreline,
    compute_score,
)
from waterpolo.services.stat_store import StatRecordStore

GOALKEEPERS = {201, 202}


def is_goalkeeper(player_id):
    return player_id in GOALKEEPERS


def make_store():
    return StatRecordStore({101: {}, 102: {}, 201: {}, 202: {}})


def wire(store, quarters=None):
    reconciler = ScoreReconciler(is_goalkeeper, quarters)
    store.subscribe(reconciler.reconcile)
    return reconciler


def quarter_sums(reconciler):
    home = sum(q.home for q in reconciler.quarters.values())
    away = sum(q.away for q in reconciler.quarters.values())
    return home, away


class TestComputeScore:

    def test_home_from_field_players_and_goalkeeper_goal(self):
        store = make_store()
        store.set(101, "goles_boya_jugada", 2)
        store.set(102, "goles_contraataque", 1)
        store.set(201, "portero_gol", 1)
        assert compute_score(store, is_goalkeeper) == Scoreline(4, 0)

    def test_away_from_goalkeeper_concede_fields(self):
        store = make_store()
        store.set(201, "portero_goles_penalti", 2)
        store.set(202, "portero_goles_contraataque", 1)
        store.set(202, "portero_gol_palo", 1)
        assert compute_score(store, is_goalkeeper).away == 4

    def test_legacy_boya_not_counted_for_rival(self):
        store = make_store()
        store.set(201, "portero_goles_boya", 3)
        assert compute_score(store, is_goalkeeper).away == 0

    def test_goalkeeper_shooting_goals_not_counted(self):
        store = make_store()
        store.set(201, "goles_boya_jugada", 1)
        assert compute_score(store, is_goalkeeper).home == 0

    def test_field_player_concede_not_counted(self):
        store = make_store()
        store.set(101, "portero_goles_penalti", 1)
        assert compute_score(store, is_goalkeeper).away == 0

    @pytest.mark.parametrize("home,away,required", [
        (0, 0, False), (4, 4, True), (3, 2, False),
    ])
    def test_requires_shootout(self, home, away, required):
        assert Scoreline(home, away).requires_shootout is required


class TestScoreReconciler:

    def test_delta_goes_to_first_open_quarter(self):
        store = make_store()
        reconciler = wire(store)
        store.set(101, "goles_boya_jugada", 2)
        store.set(201, "portero_goles_penalti", 1)
        assert reconciler.active_quarter() == 1
        assert reconciler.quarters[1].home == 2
        assert reconciler.quarters[1].away == 1

    def test_scenario_c_closed_quarter_frozen(self):
        store = make_store()
        reconciler = wire(store, {1: QuarterScore(3, 2, closed=True)})
        store.set(101, "goles_boya_jugada", 5)
        store.set(201, "portero_goles_lanzamiento", 3)
        assert reconciler.score == Scoreline(5, 3)
        assert reconciler.quarters[1] == QuarterScore(3, 2, closed=True)
        assert reconciler.quarters[2].home == 2
        assert reconciler.quarters[2].away == 1
        assert reconciler.active_quarter() == 2

    def test_quarter_sum_matches_score_while_a_quarter_is_open(self):
        store = make_store()
        reconciler = wire(store)
        store.set(101, "goles_hombre_mas", 2)
        reconciler.close_quarter(1)
        store.set(102, "goles_lanzamiento", 1)
        store.set(201, "portero_goles_dir_mas_5m", 2)
        reconciler.close_quarter(2)
        store.set(101, "goles_hombre_mas", 1)
        assert quarter_sums(reconciler) == (reconciler.score.home, reconciler.score.away)
        assert reconciler.quarters[3].home == -1

    def test_all_closed_is_noop(self):
        store = make_store()
        quarters = {q: QuarterScore(1, 0, closed=True) for q in (1, 2, 3, 4)}
        reconciler = wire(store, quarters)
        store.set(101, "goles_boya_jugada", 7)
        assert reconciler.active_quarter() is None
        assert reconciler.score.home == 7
        assert all(q.home == 1 for q in reconciler.quarters.values())

    def test_reopen_quarter(self):
        store = make_store()
        reconciler = wire(store)
        reconciler.close_quarter(1)
        reconciler.open_quarter(1)
        store.set(101, "goles_boya_jugada", 1)
        assert reconciler.quarters[1].home == 1

    def test_reopen_keeps_later_quarter_goals(self):
        store = make_store()
        reconciler = wire(store)
        store.set(101, "goles_boya_jugada", 3)
        reconciler.close_quarter(1)
        store.set(101, "goles_boya_jugada", 5)
        assert reconciler.quarters[2].home == 2
        reconciler.open_quarter(1)
        store.set(101, "goles_boya_jugada", 6)
        assert [reconciler.quarters[q].home for q in (1, 2, 3, 4)] == [4, 2, 0, 0]
        assert quarter_sums(reconciler) == (6, 0)

    def test_reopen_with_later_closed_quarter(self):
        store = make_store()
        reconciler = wire(store)
        store.set(101, "goles_boya_jugada", 2)
        reconciler.close_quarter(1)
        store.set(101, "goles_boya_jugada", 3)
        reconciler.close_quarter(2)
        reconciler.open_quarter(1)
        store.set(102, "goles_lanzamiento", 2)
        assert reconciler.quarters[2] == QuarterScore(1, 0, closed=True)
        assert quarter_sums(reconciler) == (5, 0)

    def test_reopen_after_all_closed_resyncs(self):
        store = make_store()
        quarters = {q: QuarterScore(1, 0, closed=True) for q in (1, 2, 3, 4)}
        reconciler = wire(store, quarters)
        store.set(101, "goles_boya_jugada", 7)
        reconciler.open_quarter(4)
        assert reconciler.quarters[4].home == 4
        assert quarter_sums(reconciler) == (7, 0)

    def test_manual_score_closes_active_quarter(self):
        store = make_store()
        reconciler = wire(store)
        store.set(101, "goles_boya_jugada", 5)
        store.set(201, "portero_goles_penalti", 2)
        reconciler.set_quarter_score(1, "3", 1)
        assert reconciler.quarters[1] == QuarterScore(3, 1, closed=True)
        assert reconciler.quarters[2] == QuarterScore(2, 1)
        assert reconciler.active_quarter() == 2
        with pytest.raises(QuarterClosedError):
            reconciler.set_quarter_score(1, 1, 1)

    def test_manual_score_rejected_off_active_quarter(self):
        store = make_store()
        reconciler = wire(store)
        with pytest.raises(QuarterNotActiveError):
            reconciler.set_quarter_score(3, 4, 0)
        store.set(101, "goles_boya_jugada", 3)
        assert quarter_sums(reconciler) == (3, 0)

    def test_last_open_quarter_must_match_score(self):
        store = make_store()
        quarters = {q: QuarterScore(1, 0, closed=True) for q in (1, 2, 3)}
        reconciler = wire(store, quarters)
        store.set(101, "goles_boya_jugada", 5)
        with pytest.raises(QuarterScoreMismatchError):
            reconciler.set_quarter_score(4, 3, 0)
        reconciler.set_quarter_score(4, 2, 0)
        assert reconciler.active_quarter() is None
        assert quarter_sums(reconciler) == (5, 0)

    def test_invalid_quarter(self):
        reconciler = ScoreReconciler(is_goalkeeper)
        with pytest.raises(MatchEngineError):
            reconciler.close_quarter(5)

    def test_quarter_list(self):
        reconciler = ScoreReconciler(is_goalkeeper)
        listed = reconciler.quarter_list()
        assert [q["quarter"] for q in listed] == [1, 2, 3, 4]
        assert listed[0] == {"quarter": 1, "home": 0, "away": 0, "closed": False}
