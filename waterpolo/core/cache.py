"""Sistema de cache Redis async para as leituras de elenco e partidos"""
import json
from typing import Optional, Any
import logging
from redis.asyncio import Redis, ConnectionPool
from waterpolo.core.config import settings

logger = logging.getLogger(__name__)


def players_key(club_id: int) -> str:
    return f"players:club:{club_id}"


def recent_matches_key(club_id: int, limit: int) -> str:
    return f"matches:recent:{club_id}:{limit}"


class CacheManager:
    """Gerenciador de cache Redis async

    Sem Redis disponível todas as operações viram no-op; a API continua
    respondendo direto do banco.
    """

    def __init__(self):
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[Redis] = None

    async def _get_client(self) -> Optional[Redis]:
        """Obtém cliente Redis (lazy initialization)"""
        if self._client:
            return self._client

        try:
            self._pool = ConnectionPool(
                host=settings.REDIS_HOST,
                port=settings.REDIS_PORT,
                db=settings.REDIS_DB,
                password=settings.REDIS_PASSWORD,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_keepalive=True,
                health_check_interval=30,
                max_connections=20,
            )
            client = Redis(connection_pool=self._pool)
            await client.ping()
            self._client = client
            logger.info("Redis conectado com sucesso")
            return self._client
        except Exception as e:
            logger.warning(f"Redis indisponível, seguindo sem cache: {e}")
            if self._pool:
                await self._pool.disconnect()
            self._pool = None
            return None

    async def get(self, key: str) -> Optional[Any]:
        """Obtém valor do cache"""
        client = await self._get_client()
        if not client:
            return None

        try:
            value = await client.get(key)
            return json.loads(value) if value else None
        except Exception as e:
            logger.warning(f"Erro ao ler cache {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Define valor no cache com TTL"""
        client = await self._get_client()
        if not client:
            return False

        try:
            ttl = ttl or settings.CACHE_TTL
            serialized = json.dumps(value, default=str)
            return await client.setex(key, ttl, serialized)
        except Exception as e:
            logger.warning(f"Erro ao escrever cache {key}: {e}")
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Remove todas as chaves que correspondem ao padrão"""
        client = await self._get_client()
        if not client:
            return 0

        try:
            keys = [key async for key in client.scan_iter(match=pattern)]
            return await client.delete(*keys) if keys else 0
        except Exception as e:
            logger.warning(f"Erro ao deletar padrão {pattern}: {e}")
            return 0

    async def invalidate_matches(self, club_id: Optional[int] = None) -> int:
        """Descarta as listas de partidos recentes (de um clube ou de todos)"""
        pattern = f"matches:recent:{club_id}:*" if club_id is not None else "matches:recent:*"
        return await self.delete_pattern(pattern)

    async def close(self):
        """Fecha conexões Redis"""
        if self._client:
            await self._client.close()
        if self._pool:
            await self._pool.disconnect()


# Instância global do cache
cache = CacheManager()
