"""Modelo GoalkeeperShot"""
from sqlalchemy import Column, Integer, String, Float, ForeignKey, UniqueConstraint
from waterpolo.models.base import BaseModel


class GoalkeeperShot(BaseModel):
    """Arremesso sofrido pelo goleiro com posição no gol (x, y em [0, 1])"""
    __tablename__ = "goalkeeper_shots"

    match_id = Column(Integer, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True)
    goalkeeper_player_id = Column(Integer, ForeignKey("players.id"), nullable=False, index=True)
    shot_index = Column(Integer, nullable=False)
    result = Column(String(10), nullable=False)  # goal, save, out
    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)

    __table_args__ = (
        UniqueConstraint('match_id', 'goalkeeper_player_id', 'shot_index', name='uq_goalkeeper_shot'),
    )

    def __repr__(self):
        return f"<GoalkeeperShot(match_id={self.match_id}, gk={self.goalkeeper_player_id}, result='{self.result}')>"
