"""
Score Repository - Performance Scoring Core
simscore/repositories/score_repository.py

Finished PerformanceScores, addressable by session and by user. Feeds the
score_breakdown and benchmark_performance projections.
"""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from simscore.models.scores import PerformanceScore


class ScoreRepository(ABC):
    """Storage for finished performance scores."""

    @abstractmethod
    def save(self, score: PerformanceScore) -> None:
        ...

    @abstractmethod
    def get_by_session(self, session_id: str) -> Optional[PerformanceScore]:
        ...

    @abstractmethod
    def list_for_user(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[PerformanceScore]:
        """
        Retrieve a user's scores, newest first.

        Args:
            user_id: Trainee identifier
            since: Only scores stamped at or after this time
            limit: Maximum number of scores returned

        Returns:
            List of PerformanceScore, possibly empty
        """


class InMemoryScoreRepository(ScoreRepository):
    """Process-local repository. Re-scoring a session replaces its score."""

    def __init__(self):
        self._by_session: Dict[str, PerformanceScore] = {}
        self._lock = threading.Lock()

    def save(self, score: PerformanceScore) -> None:
        with self._lock:
            self._by_session[score.metadata.session_id] = score

    def get_by_session(self, session_id: str) -> Optional[PerformanceScore]:
        with self._lock:
            return self._by_session.get(session_id)

    def list_for_user(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[PerformanceScore]:
        with self._lock:
            scores = [s for s in self._by_session.values() if s.metadata.user_id == user_id]
        if since is not None:
            scores = [s for s in scores if s.metadata.timestamp >= since]
        scores.sort(key=lambda s: s.metadata.timestamp, reverse=True)
        return scores[:limit] if limit is not None else scores
