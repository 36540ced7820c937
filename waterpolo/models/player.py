"""Modelo Player"""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from waterpolo.models.base import BaseModel


class Player(BaseModel):
    """Modelo de Jogador (elenco do clube)"""
    __tablename__ = "players"

    club_id = Column(Integer, ForeignKey("clubs.id"), nullable=False, index=True)
    number = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    is_goalkeeper = Column(Boolean, default=False, nullable=False)
    photo_url = Column(String(500), nullable=True)

    # Relationships
    club = relationship("Club", backref="players")

    def __repr__(self):
        return f"<Player(number={self.number}, name='{self.name}', goalkeeper={self.is_goalkeeper})>"
