# tests/conftest.py

"""
Pytest Fixtures - Shared services, clocks and scoring contexts

All services are built directly (no lru_cache factories) so every test gets
fresh in-memory state and a controllable clock.
"""

from datetime import datetime, timedelta, timezone

import pytest

from simscore.models.context import ContextFactors, ResolutionData, ScenarioData, ScoringContext
from simscore.repositories.benchmark_repository import BenchmarkRepository
from simscore.repositories.score_repository import InMemoryScoreRepository
from simscore.scoring.dimension_engine import DimensionScoringEngine
from simscore.scoring.performance_scorer import PerformanceScorer
from simscore.services.realtime_tracker import RealTimeAssessmentTracker
from simscore.services.session_store import InMemorySessionStore


T0 = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock; call advance() to move time forward."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float = 0, seconds: float = 0) -> datetime:
        self.now = self.now + timedelta(minutes=minutes, seconds=seconds)
        return self.now


def make_context(
    session_id: str = "session-001",
    user_id: str = "user-001",
    actions=None,
    interactions=None,
    scenario=None,
    resolution=None,
    factors=None,
) -> ScoringContext:
    """Build a ScoringContext with neutral defaults for anything not given."""
    return ScoringContext(
        session_id=session_id,
        scenario_id="scenario-001",
        user_id=user_id,
        scenario_data=ScenarioData(**(scenario or {})),
        actions=actions or [],
        interactions=interactions or [],
        resolution_data=ResolutionData(**(resolution or {"resolved": False})),
        context_factors=ContextFactors(**(factors or {})),
    )


# =============================================================================
# CLOCK + SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine():
    return DimensionScoringEngine()


@pytest.fixture
def benchmarks():
    return BenchmarkRepository()


@pytest.fixture
def score_repository():
    return InMemoryScoreRepository()


@pytest.fixture
def scorer(benchmarks, score_repository, clock):
    return PerformanceScorer(benchmarks=benchmarks, scores=score_repository, clock=clock)


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def tracker(session_store, clock):
    return RealTimeAssessmentTracker(store=session_store, clock=clock)


@pytest.fixture
def active_session(tracker):
    """A started session with a 30 minute expected duration."""
    tracker.start_assessment("rt-001", "user-001", "scenario-001", expected_duration=30)
    return "rt-001"


# =============================================================================
# SAMPLE CONTEXTS
# =============================================================================

@pytest.fixture
def empty_context():
    """No events, unknown-free defaults, unresolved ticket."""
    return make_context()


@pytest.fixture
def resolved_advanced_context():
    """Resolved advanced scenario with two diagnostic actions and no low-quality work."""
    return make_context(
        actions=[
            {"type": "diagnosis", "quality": 80},
            {"type": "research", "quality": 75},
        ],
        scenario={"complexity": "advanced", "estimated_time": 30},
        resolution={"resolved": True, "solution_complexity": "advanced", "time_to_resolution": 25},
    )
