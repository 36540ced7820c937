"""Fixtures compartilhadas dos testes"""
import copy
import pytest

from waterpolo.services.roster_manager import RosterPlayer


def make_players():
    """Elenco de teste: 13 jogadores de campo (números 1..13) e 3 goleiros"""
    players = [RosterPlayer(id=100 + n, number=n, name=f"Jogador {n}") for n in range(1, 14)]
    players += [
        RosterPlayer(id=201, number=14, name="Goleiro A", is_goalkeeper=True),
        RosterPlayer(id=202, number=15, name="Goleiro B", is_goalkeeper=True),
        RosterPlayer(id=203, number=16, name="Goleiro C", is_goalkeeper=True),
    ]
    return players


@pytest.fixture
def players():
    return make_players()


class FakeMatchRepository:
    """Repository em memória com a mesma interface do MatchRepository"""

    def __init__(self):
        self.matches = {}
        self.stats = {}
        self.penalties = {}
        self.shots = {}
        self.calls = []
        self.fail_on = None
        self._next_id = 1

    def _step(self, name):
        self.calls.append(name)
        if self.fail_on == name:
            raise RuntimeError(f"falha simulada em {name}")

    async def get_match(self, match_id):
        match = self.matches.get(match_id)
        return copy.deepcopy(match) if match else None

    async def get_recent(self, club_id, limit=10):
        rows = [m for m in self.matches.values() if m["club_id"] == club_id]
        rows.sort(key=lambda m: (m["match_date"], m["id"]), reverse=True)
        return copy.deepcopy(rows[:limit])

    async def get_stats(self, match_id):
        return copy.deepcopy(self.stats.get(match_id, []))

    async def get_callup_ids(self, match_id):
        return [row["player_id"] for row in self.stats.get(match_id, [])]

    async def get_penalties(self, match_id):
        return copy.deepcopy(self.penalties.get(match_id, []))

    async def get_goalkeeper_shots(self, match_id):
        return copy.deepcopy(self.shots.get(match_id, []))

    async def create_match(self, club_id, values):
        self._step("create_match")
        match_id = self._next_id
        self._next_id += 1
        self.matches[match_id] = {"id": match_id, "club_id": club_id, **values}
        return match_id

    async def update_match(self, match_id, values):
        self._step("update_match")
        self.matches[match_id].update(values)

    async def replace_stats(self, match_id, rows):
        self._step("replace_stats")
        self.stats[match_id] = copy.deepcopy(rows)

    async def replace_penalties(self, match_id, rows):
        self._step("replace_penalties")
        self.penalties[match_id] = copy.deepcopy(rows)

    async def replace_goalkeeper_shots(self, match_id, rows):
        self._step("replace_goalkeeper_shots")
        self.shots[match_id] = copy.deepcopy(rows)

    async def delete_match(self, match_id):
        if match_id not in self.matches:
            return False
        for table in (self.matches, self.stats, self.penalties, self.shots):
            table.pop(match_id, None)
        return True


class FakePlayer:
    """Imita o modelo Player"""

    def __init__(self, player: RosterPlayer, club_id: int = 1):
        self.id = player.id
        self.club_id = club_id
        self.number = player.number
        self.name = player.name
        self.is_goalkeeper = player.is_goalkeeper
        self.photo_url = player.photo_url


class FakePlayerRepository:

    def __init__(self, players, club_id=1):
        self.players = [FakePlayer(p, club_id) for p in players]

    async def get_by_club(self, club_id, extra_ids=()):
        extra_ids = set(extra_ids)
        selected = [p for p in self.players if p.club_id == club_id or p.id in extra_ids]
        return sorted(selected, key=lambda p: p.number)


@pytest.fixture
def match_repository():
    return FakeMatchRepository()


@pytest.fixture
def player_repository(players):
    return FakePlayerRepository(players)
