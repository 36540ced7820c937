"""Testes dos repositories em SQLite em memória"""
import asyncio
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from waterpolo.core.data_integrity import DataIntegrityChecker
from waterpolo.core.database import Base
from waterpolo.models import Club, Player
from waterpolo.repositories.match_repository import MatchRepository
from waterpolo.repositories.player_repository import PlayerRepository
from waterpolo.services.match_service import MatchService


def run_with_db(test):
    """Executa `test(db)` em um banco novo com um clube e seu elenco"""
    async def runner():
        engine = create_async_engine(
            "sqlite+aiosqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        try:
            async with factory() as db:
                db.add(Club(id=1, name="Club Natació"))
                db.add(Club(id=2, name="Outro Clube"))
                for n in range(1, 5):
                    db.add(Player(id=100 + n, club_id=1, number=n, name=f"Jogador {n}"))
                db.add(Player(id=201, club_id=1, number=13, name="Goleiro", is_goalkeeper=True))
                db.add(Player(id=301, club_id=2, number=1, name="Ex-jogador"))
                await db.commit()
                return await test(db)
        finally:
            await engine.dispose()
    return asyncio.run(runner())


def match_values(**overrides):
    values = {
        "match_date": date(2024, 10, 5),
        "opponent": "CN Rival",
        "is_home": True,
        "season": "2024-2025",
        "home_score": 0,
        "away_score": 0,
    }
    values.update(overrides)
    return values


class TestPlayerRepository:

    def test_roster_ordered_by_number(self):
        async def test(db):
            players = await PlayerRepository(db).get_by_club(1)
            return [p.number for p in players]
        assert run_with_db(test) == [1, 2, 3, 4, 13]

    def test_extra_ids(self):
        async def test(db):
            players = await PlayerRepository(db).get_by_club(1, extra_ids=[301])
            return [p.id for p in players]
        assert 301 in run_with_db(test)


class TestMatchRepository:

    def test_create_and_replace(self):
        async def test(db):
            repo = MatchRepository(db)
            match_id = await repo.create_match(1, match_values())
            await repo.replace_stats(match_id, [
                {"match_id": match_id, "player_id": 101, "goles_boya_jugada": 2, "goles_totales": 2},
                {"match_id": match_id, "player_id": 102},
            ])
            await repo.replace_stats(match_id, [
                {"match_id": match_id, "player_id": 103, "tiros_fuera": 1},
            ])
            stats = await repo.get_stats(match_id)
            callup = await repo.get_callup_ids(match_id)
            match = await repo.get_match(match_id)
            return match, stats, callup
        match, stats, callup = run_with_db(test)
        assert match["opponent"] == "CN Rival"
        assert match["q1_score"] is None
        assert callup == [103]
        assert stats[0]["tiros_fuera"] == 1
        assert stats[0]["goles_totales"] == 0

    def test_update_and_delete(self):
        async def test(db):
            repo = MatchRepository(db)
            match_id = await repo.create_match(1, match_values())
            await repo.update_match(match_id, {"home_score": 7, "q1_score": 7, "q1_score_rival": 0})
            await repo.replace_goalkeeper_shots(match_id, [{
                "match_id": match_id, "goalkeeper_player_id": 201, "shot_index": 1,
                "result": "save", "x": 0.5, "y": 0.5,
            }])
            updated = await repo.get_match(match_id)
            shots = await repo.get_goalkeeper_shots(match_id)
            deleted = await repo.delete_match(match_id)
            missing = await repo.delete_match(match_id)
            return updated, shots, deleted, missing, await repo.get_goalkeeper_shots(match_id)
        updated, shots, deleted, missing, shots_after = run_with_db(test)
        assert updated["home_score"] == 7
        assert shots[0]["result"] == "save"
        assert deleted and not missing
        assert shots_after == []

    def test_recent_matches(self):
        async def test(db):
            repo = MatchRepository(db)
            await repo.create_match(1, match_values(match_date=date(2024, 9, 1), opponent="A"))
            await repo.create_match(1, match_values(match_date=date(2024, 10, 1), opponent="B"))
            await repo.create_match(2, match_values(opponent="C"))
            return await repo.get_recent(1, limit=10)
        assert [m["opponent"] for m in run_with_db(test)] == ["B", "A"]


class TestServiceWithDatabase:

    def test_save_load_and_integrity(self):
        async def test(db):
            service = MatchService(db)
            session = await service.start_session(1)
            session.update_details(opponent="CN Rival", match_date=date(2024, 10, 5))
            session.update_stat(101, "goles_boya_jugada", 2)
            session.update_stat(201, "portero_goles_penalti", 1)
            session.add_goalkeeper_shot(201, "goal", 0.1, 0.2)
            match_id = await service.save(session, 1)

            loaded = await service.load_session(match_id)
            report = await DataIntegrityChecker(db).check_data_consistency()
            return loaded, report
        loaded, report = run_with_db(test)
        assert (loaded.score.home, loaded.score.away) == (2, 1)
        assert loaded.roster.active_ids == [101, 102, 103, 104, 201]
        assert len(loaded.shots) == 1
        assert report["status"] == "ok", report["issues"]
        assert report["matches_checked"] == 1

    def test_integrity_detects_stale_derived_field(self):
        async def test(db):
            repo = MatchRepository(db)
            match_id = await repo.create_match(1, match_values(home_score=1, q1_score=1, q1_score_rival=0))
            await repo.replace_stats(match_id, [
                {"match_id": match_id, "player_id": 101, "goles_boya_jugada": 1, "goles_totales": 3},
            ])
            return await DataIntegrityChecker(db).check_data_consistency()
        report = run_with_db(test)
        assert report["status"] == "issues_found"
        assert any("goles_totales" in issue for issue in report["issues"])
