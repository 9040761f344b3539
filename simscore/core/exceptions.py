"""
Custom Exceptions - Performance Scoring Core
simscore/core/exceptions.py

Exception classes raised by the scoring pipeline and the real-time tracker.
"""

from typing import Any, List, Optional


class ScoringException(Exception):
    """Base exception for scoring operations."""

    pass


class SessionNotFoundError(ScoringException):
    """No active real-time assessment (or stored score) for the session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"No active assessment found for session {session_id}")


class SessionAlreadyActiveError(ScoringException):
    """A real-time assessment was started twice for the same session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Assessment already active for session {session_id}")


class ConcurrentUpdateError(ScoringException):
    """A second writer tried to update a session while an update was running."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            f"Session {session_id} is already being updated; events must be delivered sequentially"
        )


class InvalidContextError(ScoringException):
    """Required scenario/resolution fields are missing or invalid."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class ComputationFailureError(ScoringException):
    """Unexpected failure while aggregating scores."""

    def __init__(self, operation: str, session_id: Optional[str] = None):
        self.operation = operation
        self.session_id = session_id
        target = f" for session {session_id}" if session_id else ""
        super().__init__(f"Failed to {operation}{target}")


class ScoresNotFoundError(ScoringException):
    """No finished performance scores are stored for the user."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"No performance scores found for user {user_id}")
