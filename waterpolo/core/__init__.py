"""Core modules - configurações principais"""
from waterpolo.core.config import settings
from waterpolo.core.database import get_db, Base, AsyncSessionLocal
from waterpolo.core.cache import cache, CacheManager
from waterpolo.core.logging_config import setup_logging

__all__ = [
    "settings",
    "get_db",
    "Base",
    "AsyncSessionLocal",
    "cache",
    "CacheManager",
    "setup_logging",
]
