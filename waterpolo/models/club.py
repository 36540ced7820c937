"""Modelo Club"""
from sqlalchemy import Column, String
from waterpolo.models.base import BaseModel


class Club(BaseModel):
    """Modelo de Clube"""
    __tablename__ = "clubs"

    name = Column(String(255), nullable=False)
    short_name = Column(String(50), nullable=True)
    logo_url = Column(String(500), nullable=True)

    def __repr__(self):
        return f"<Club(id={self.id}, name='{self.name}')>"
