"""
Core Package - Performance Scoring Core
simscore/core/__init__.py

Core infrastructure: dependencies, exceptions, logging.
"""

from simscore.core.exceptions import (
    ComputationFailureError,
    ConcurrentUpdateError,
    InvalidContextError,
    ScoresNotFoundError,
    ScoringException,
    SessionAlreadyActiveError,
    SessionNotFoundError,
)

__all__ = [
    "ComputationFailureError",
    "ConcurrentUpdateError",
    "InvalidContextError",
    "ScoresNotFoundError",
    "ScoringException",
    "SessionAlreadyActiveError",
    "SessionNotFoundError",
]
