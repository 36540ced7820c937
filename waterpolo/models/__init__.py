"""Models - modelos SQLAlchemy"""
from waterpolo.models.club import Club
from waterpolo.models.player import Player
from waterpolo.models.match import Match
from waterpolo.models.match_stats import MatchStats
from waterpolo.models.penalty_shootout import PenaltyShootoutPlayer
from waterpolo.models.goalkeeper_shot import GoalkeeperShot

__all__ = [
    "Club",
    "Player",
    "Match",
    "MatchStats",
    "PenaltyShootoutPlayer",
    "GoalkeeperShot",
]
