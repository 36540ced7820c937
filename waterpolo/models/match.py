"""Modelo Match"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Boolean, Date
from sqlalchemy.orm import relationship
from waterpolo.models.base import BaseModel


class Match(BaseModel):
    """Modelo de Partido"""
    __tablename__ = "matches"

    club_id = Column(Integer, ForeignKey("clubs.id"), nullable=False, index=True)
    competition_id = Column(Integer, nullable=True, index=True)

    match_date = Column(Date, nullable=False, index=True)
    opponent = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    is_home = Column(Boolean, default=True, nullable=False)
    season = Column(String(20), nullable=True, index=True)
    jornada = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    max_players_on_field = Column(Integer, nullable=True)

    # Placar (sempre derivado das estatísticas)
    home_score = Column(Integer, default=0)
    away_score = Column(Integer, default=0)

    # Parciais (nulo = parcial aberto)
    q1_score = Column(Integer, nullable=True)
    q1_score_rival = Column(Integer, nullable=True)
    q2_score = Column(Integer, nullable=True)
    q2_score_rival = Column(Integer, nullable=True)
    q3_score = Column(Integer, nullable=True)
    q3_score_rival = Column(Integer, nullable=True)
    q4_score = Column(Integer, nullable=True)
    q4_score_rival = Column(Integer, nullable=True)

    # Sprint ganho em cada parcial
    sprint1_winner = Column(Integer, ForeignKey("players.id"), nullable=True)
    sprint2_winner = Column(Integer, ForeignKey("players.id"), nullable=True)
    sprint3_winner = Column(Integer, ForeignKey("players.id"), nullable=True)
    sprint4_winner = Column(Integer, ForeignKey("players.id"), nullable=True)

    # Pênaltis (só em empate)
    penalty_home_score = Column(Integer, nullable=True)
    penalty_away_score = Column(Integer, nullable=True)

    # Relationships
    club = relationship("Club", backref="matches")

    def __repr__(self):
        return (
            f"<Match(id={self.id}, opponent='{self.opponent}', "
            f"score={self.home_score}-{self.away_score})>"
        )
