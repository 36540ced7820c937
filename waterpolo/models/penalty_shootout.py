"""Modelo PenaltyShootoutPlayer"""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from waterpolo.models.base import BaseModel


class PenaltyShootoutPlayer(BaseModel):
    """Tentativa da disputa de pênaltis (player_id nulo = rival)"""
    __tablename__ = "penalty_shootout_players"

    match_id = Column(Integer, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=True)
    shot_order = Column(Integer, nullable=False)
    scored = Column(Boolean, default=False, nullable=False)
    result_type = Column(String(10), nullable=True)  # scored, saved, missed
    goalkeeper_id = Column(Integer, ForeignKey("players.id"), nullable=True)

    def __repr__(self):
        return (
            f"<PenaltyShootoutPlayer(match_id={self.match_id}, order={self.shot_order}, "
            f"result='{self.result_type}')>"
        )
