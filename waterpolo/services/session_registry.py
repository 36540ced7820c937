"""Registro em memória das sessões de edição abertas"""
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Optional

from waterpolo.core.config import settings
from waterpolo.core.exceptions import SessionNotFoundError
from waterpolo.services.match_session import MatchEditSession

logger = logging.getLogger(__name__)


@dataclass
class SessionEntry:
    session: MatchEditSession
    club_id: int
    last_used: datetime = field(default_factory=datetime.utcnow)


class MatchSessionRegistry:
    """Cada sessão é uma cópia privada do partido até o save"""

    def __init__(self, ttl_minutes: Optional[int] = None):
        self.ttl = timedelta(minutes=ttl_minutes or settings.SESSION_TTL_MINUTES)
        self._entries: Dict[str, SessionEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def open(self, session: MatchEditSession, club_id: int) -> str:
        self.purge_expired()
        session_id = uuid.uuid4().hex
        self._entries[session_id] = SessionEntry(session=session, club_id=club_id)
        logger.info(f"Sessão {session_id} aberta (partido {session.match_id or 'novo'})")
        return session_id

    def entry(self, session_id: str) -> SessionEntry:
        entry = self._entries.get(session_id)
        if entry is None or datetime.utcnow() - entry.last_used > self.ttl:
            self._entries.pop(session_id, None)
            raise SessionNotFoundError(f"Sessão {session_id} não encontrada ou expirada")
        entry.last_used = datetime.utcnow()
        return entry

    def get(self, session_id: str) -> MatchEditSession:
        return self.entry(session_id).session

    def close(self, session_id: str) -> None:
        if self._entries.pop(session_id, None) is not None:
            logger.info(f"Sessão {session_id} encerrada")

    def purge_expired(self) -> int:
        now = datetime.utcnow()
        expired = [sid for sid, e in self._entries.items() if now - e.last_used > self.ttl]
        for session_id in expired:
            del self._entries[session_id]
        if expired:
            logger.info(f"{len(expired)} sessões expiradas removidas")
        return len(expired)


registry = MatchSessionRegistry()
