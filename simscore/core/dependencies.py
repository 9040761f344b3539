"""
Dependencies - Performance Scoring Core
simscore/core/dependencies.py

Composition root. Each factory builds one shared, explicitly wired service
from Settings; callers that need different wiring construct the classes
directly.
"""

from functools import lru_cache

from simscore.config import get_settings
from simscore.core.logging_config import configure_logging
from simscore.repositories.benchmark_repository import BenchmarkRepository
from simscore.repositories.score_repository import InMemoryScoreRepository, ScoreRepository
from simscore.scoring.performance_scorer import PerformanceScorer
from simscore.scoring.progressive import ProgressiveScoreCalculator
from simscore.scoring.weights import dimension_weights_from
from simscore.services.realtime_tracker import RealTimeAssessmentTracker
from simscore.services.redis_cache import RedisCache
from simscore.services.session_store import InMemorySessionStore, RedisSessionStore, SessionStore


@lru_cache()
def get_benchmark_repository() -> BenchmarkRepository:
    """Get cached BenchmarkRepository instance."""
    return BenchmarkRepository()


@lru_cache()
def get_score_repository() -> ScoreRepository:
    """Get cached ScoreRepository instance."""
    return InMemoryScoreRepository()


@lru_cache()
def get_session_store() -> SessionStore:
    """Session store selected by SESSION_STORE."""
    settings = get_settings()
    if settings.SESSION_STORE == "redis":
        return RedisSessionStore(
            RedisCache(settings.REDIS_URL),
            ttl_seconds=settings.SESSION_TTL_SECONDS,
            key_prefix=settings.SESSION_KEY_PREFIX,
        )
    return InMemorySessionStore()


@lru_cache()
def get_performance_scorer() -> PerformanceScorer:
    settings = get_settings()
    return PerformanceScorer(
        benchmarks=get_benchmark_repository(),
        scores=get_score_repository(),
        dimension_weights=dimension_weights_from(settings.dimension_weights),
        recent_scores_limit=settings.RECENT_SCORES_LIMIT,
    )


@lru_cache()
def get_realtime_tracker() -> RealTimeAssessmentTracker:
    settings = get_settings()
    return RealTimeAssessmentTracker(
        store=get_session_store(),
        calculator=ProgressiveScoreCalculator(dimension_weights_from(settings.dimension_weights)),
        default_expected_duration=settings.DEFAULT_EXPECTED_DURATION_MINUTES,
    )


def init_services() -> None:
    """Configure logging and build the shared services once at process start."""
    configure_logging(get_settings())
    get_performance_scorer()
    get_realtime_tracker()
