"""
Session Store - Performance Scoring Core
simscore/services/session_store.py

Storage for in-progress AssessmentSession state. The tracker only ever
calls get/put/delete/session_ids, so the backing store can change without
touching scoring logic.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import redis
import structlog

from simscore.models.session import AssessmentSession
from simscore.services.redis_cache import RedisCache

logger = structlog.get_logger(__name__)


class SessionStore(ABC):
    """Key-value store of active sessions keyed by session_id."""

    @abstractmethod
    def get(self, session_id: str) -> Optional[AssessmentSession]:
        ...

    @abstractmethod
    def put(self, session: AssessmentSession) -> None:
        ...

    @abstractmethod
    def delete(self, session_id: str) -> None:
        ...

    @abstractmethod
    def session_ids(self) -> List[str]:
        ...

    def exists(self, session_id: str) -> bool:
        return self.get(session_id) is not None


class InMemorySessionStore(SessionStore):
    """Process-local store. Sessions are lost on restart."""

    def __init__(self):
        self._sessions: Dict[str, AssessmentSession] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Optional[AssessmentSession]:
        with self._lock:
            session = self._sessions.get(session_id)
        # callers mutate what they get; hand out a copy
        return session.model_copy(deep=True) if session is not None else None

    def put(self, session: AssessmentSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session.model_copy(deep=True)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def session_ids(self) -> List[str]:
        with self._lock:
            return list(self._sessions)


class RedisSessionStore(SessionStore):
    """
    Redis-backed store. Each session is one JSON document under
    ``{prefix}{session_id}`` with a sliding TTL refreshed on every put.
    """

    def __init__(self, cache: RedisCache, ttl_seconds: int, key_prefix: str = "simscore:session:"):
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix

    def _key(self, session_id: str) -> str:
        return f"{self.key_prefix}{session_id}"

    def get(self, session_id: str) -> Optional[AssessmentSession]:
        try:
            return self.cache.get(self._key(session_id), AssessmentSession)
        except redis.RedisError as e:
            logger.error("session_store_read_failed", session_id=session_id, error=str(e))
            raise

    def put(self, session: AssessmentSession) -> None:
        try:
            self.cache.set(self._key(session.session_id), session, self.ttl_seconds)
        except redis.RedisError as e:
            logger.error("session_store_write_failed", session_id=session.session_id, error=str(e))
            raise

    def delete(self, session_id: str) -> None:
        self.cache.delete(self._key(session_id))

    def session_ids(self) -> List[str]:
        prefix_len = len(self.key_prefix)
        return [key[prefix_len:] for key in self.cache.keys(f"{self.key_prefix}*")]
