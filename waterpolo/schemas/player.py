"""Schemas de Player"""
from pydantic import BaseModel, ConfigDict
from typing import Optional


class PlayerResponse(BaseModel):
    """Schema de resposta de Player"""
    id: int
    number: int
    name: str
    is_goalkeeper: bool = False
    photo_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
