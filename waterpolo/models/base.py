"""Modelo base para todos os models"""
from sqlalchemy import Column, Integer, DateTime, func
from waterpolo.core.database import Base


class BaseModel(Base):
    """Classe base abstrata para todos os modelos"""
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def to_dict(self, exclude=("created_at", "updated_at")) -> dict:
        """Colunas da linha como dict (o motor de partidos trabalha só com dicts)"""
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
            if column.name not in exclude
        }
