"""
Real-Time Assessment Tracker - Performance Scoring Core
simscore/services/realtime_tracker.py

Maintains one AssessmentSession per active session and rescores it on every
incoming action or interaction.

Lifecycle per session: NotStarted -> Active (start_assessment) -> Ended
(end_assessment). Ended sessions are deleted from the store, so any later
call raises SessionNotFoundError.

Updates to one session are single-writer: a second update arriving while
one is in flight is rejected with ConcurrentUpdateError, never queued.
Different sessions share no mutable state.
"""

import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Type, TypeVar, Union

import structlog
from pydantic import BaseModel, ValidationError

from simscore.core.exceptions import (
    ConcurrentUpdateError,
    InvalidContextError,
    SessionAlreadyActiveError,
    SessionNotFoundError,
)
from simscore.models.context import ScenarioData
from simscore.models.enumerations import (
    Dimension,
    FeedbackPriority,
    FeedbackType,
    IndicatorType,
    Trend,
)
from simscore.models.events import ActionEvent, InteractionEvent
from simscore.models.session import (
    AssessmentResult,
    AssessmentSession,
    AssessmentSummary,
    AssessmentUpdate,
    KeyMoment,
    LiveFeedbackEvent,
    PerformanceIndicator,
    ProgressiveScore,
    ScoreSnapshot,
)
from simscore.scoring.progressive import ProgressiveScoreCalculator, baseline_score
from simscore.services.session_store import SessionStore

logger = structlog.get_logger(__name__)

E = TypeVar("E", bound=BaseModel)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


MILESTONES = [
    (25, "Good progress! You've completed the initial assessment phase.", FeedbackPriority.LOW, 4000),
    (50, "Halfway there! Continue with solution implementation.", FeedbackPriority.LOW, 4000),
    (75, "Almost complete! Don't forget verification and follow-up.", FeedbackPriority.MEDIUM, 5000),
]

TREND_DELTA = 3
FINAL_RECOMMENDATION_THRESHOLD = 75


class RealTimeAssessmentTracker:
    """Live scoring of in-progress sessions."""

    def __init__(
        self,
        store: SessionStore,
        calculator: Optional[ProgressiveScoreCalculator] = None,
        default_expected_duration: float = 30.0,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.calculator = calculator or ProgressiveScoreCalculator()
        self.default_expected_duration = default_expected_duration
        self.clock = clock
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_assessment(
        self,
        session_id: str,
        user_id: str,
        scenario_id: str,
        scenario: Union[ScenarioData, Mapping[str, Any], None] = None,
        expected_duration: Optional[float] = None,
    ) -> ProgressiveScore:
        """
        Create the session and return its baseline score.

        Args:
            session_id: Session identifier, must not already be active
            user_id: Trainee identifier
            scenario_id: Scenario identifier
            scenario: Scenario metadata (category, estimated_time, ...)
            expected_duration: Minutes; falls back to scenario.estimated_time,
                then to the configured default

        Raises:
            SessionAlreadyActiveError: the session is already being assessed
            InvalidContextError: non-positive duration or invalid scenario data
        """
        scenario_data = self._coerce(ScenarioData, scenario or {}, session_id)
        if expected_duration is not None:
            duration = expected_duration
        elif scenario_data.estimated_time is not None:
            duration = scenario_data.estimated_time
        else:
            duration = self.default_expected_duration
        if duration <= 0:
            raise InvalidContextError(f"expected_duration must be positive, got {duration}")

        with self._exclusive(session_id):
            if self.store.exists(session_id):
                logger.warning("assessment_already_active", session_id=session_id)
                raise SessionAlreadyActiveError(session_id)

            now = self.clock()
            self.store.put(
                AssessmentSession(
                    session_id=session_id,
                    user_id=user_id,
                    scenario_id=scenario_id,
                    scenario=scenario_data,
                    expected_duration=duration,
                    start_time=now,
                    current_time=now,
                )
            )

        logger.info(
            "assessment_started",
            session_id=session_id,
            user_id=user_id,
            scenario_id=scenario_id,
            expected_duration=duration,
        )
        return baseline_score()

    def end_assessment(self, session_id: str) -> AssessmentResult:
        """
        Compute the final progressive score, summarize, and discard the session.

        Raises:
            SessionNotFoundError: no active assessment for the session
        """
        with self._exclusive(session_id, discard=True):
            session = self._require(session_id)
            final_score = self.calculator.calculate(session)
            summary = AssessmentSummary(
                session_id=session_id,
                duration=session.elapsed_minutes,
                total_actions=len(session.actions),
                total_interactions=len(session.interactions),
                final_score=final_score,
                performance_trends=self._trends(session, final_score),
                key_moments=list(session.key_moments),
                recommendations_for_improvement=self._final_recommendations(final_score),
            )
            self.store.delete(session_id)

        logger.info(
            "assessment_ended",
            session_id=session_id,
            user_id=session.user_id,
            overall=final_score.overall,
            confidence=final_score.confidence,
            duration_minutes=round(summary.duration, 2),
        )
        return AssessmentResult(final_score=final_score, summary=summary)

    def get_active_assessments(self) -> List[str]:
        return self.store.session_ids()

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update_with_action(
        self, session_id: str, action: Union[ActionEvent, Mapping[str, Any]]
    ) -> AssessmentUpdate:
        event = self._coerce(ActionEvent, action, session_id)
        return self._apply(session_id, event, self._action_feedback)

    def update_with_interaction(
        self, session_id: str, interaction: Union[InteractionEvent, Mapping[str, Any]]
    ) -> AssessmentUpdate:
        event = self._coerce(InteractionEvent, interaction, session_id)
        return self._apply(session_id, event, self._interaction_feedback)

    def _apply(self, session_id: str, event, feedback_for) -> AssessmentUpdate:
        with self._exclusive(session_id):
            session = self._require(session_id)
            now = self.clock()
            stamped = event.model_copy(update={"timestamp": now})
            if isinstance(stamped, ActionEvent):
                session.actions.append(stamped)
            else:
                session.interactions.append(stamped)
            session.current_time = max(now, session.current_time)

            score = self.calculator.calculate(session)
            indicators = self.calculator.indicators(session, score)

            feedback = feedback_for(stamped)
            feedback += self._milestones(session.last_completeness, score.completeness)
            feedback += self._critical_warnings(indicators)

            self._record_key_moments(session, stamped, feedback, now)
            if session.first_snapshot is None:
                session.first_snapshot = ScoreSnapshot(timestamp=now, score=score)
            session.last_completeness = score.completeness
            self.store.put(session)

        logger.debug(
            "assessment_updated",
            session_id=session_id,
            event_type=event.type,
            overall=score.overall,
            completeness=score.completeness,
            feedback_count=len(feedback),
        )
        return AssessmentUpdate(score=score, indicators=indicators, feedback=feedback)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_current_score(self, session_id: str) -> ProgressiveScore:
        """Score at the session's last event time. Repeated calls return the same value."""
        return self.calculator.calculate(self._require(session_id))

    def get_performance_indicators(self, session_id: str) -> List[PerformanceIndicator]:
        session = self._require(session_id)
        return self.calculator.indicators(session, self.calculator.calculate(session))

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    @staticmethod
    def _action_feedback(action: ActionEvent) -> List[LiveFeedbackEvent]:
        feedback = []
        if action.type == "research" and action.quality is not None:
            if action.quality >= 85:
                feedback.append(LiveFeedbackEvent(
                    type=FeedbackType.ACHIEVEMENT,
                    message="Excellent research quality!",
                    category="technical",
                    priority=FeedbackPriority.LOW,
                    display_duration=3000,
                ))
            elif action.quality < 60:
                feedback.append(LiveFeedbackEvent(
                    type=FeedbackType.WARNING,
                    message="Consider using additional knowledge base resources",
                    category="technical",
                    priority=FeedbackPriority.MEDIUM,
                    display_duration=5000,
                    action_required=True,
                ))

        if action.type == "customer_communication":
            if action.clarity is not None and action.clarity >= 90:
                feedback.append(LiveFeedbackEvent(
                    type=FeedbackType.ACHIEVEMENT,
                    message="Clear and professional communication!",
                    category="communication",
                    priority=FeedbackPriority.LOW,
                    display_duration=3000,
                ))
            elif action.response_time is not None and action.response_time > 300:
                feedback.append(LiveFeedbackEvent(
                    type=FeedbackType.WARNING,
                    message="Try to respond more quickly to maintain customer engagement",
                    category="communication",
                    priority=FeedbackPriority.MEDIUM,
                    display_duration=4000,
                    action_required=True,
                ))
        return feedback

    @staticmethod
    def _interaction_feedback(interaction: InteractionEvent) -> List[LiveFeedbackEvent]:
        feedback = []
        if interaction.empathy is not None and interaction.empathy >= 90:
            feedback.append(LiveFeedbackEvent(
                type=FeedbackType.ACHIEVEMENT,
                message="Excellent empathy demonstrated!",
                category=Dimension.CUSTOMER_SERVICE.value,
                priority=FeedbackPriority.LOW,
                display_duration=3000,
            ))
        if interaction.satisfaction is not None:
            if interaction.satisfaction >= 95:
                feedback.append(LiveFeedbackEvent(
                    type=FeedbackType.ACHIEVEMENT,
                    message="Outstanding customer satisfaction!",
                    category=Dimension.CUSTOMER_SERVICE.value,
                    priority=FeedbackPriority.LOW,
                    display_duration=4000,
                ))
            elif interaction.satisfaction < 60:
                feedback.append(LiveFeedbackEvent(
                    type=FeedbackType.WARNING,
                    message="Customer seems dissatisfied. Consider adjusting your approach.",
                    category=Dimension.CUSTOMER_SERVICE.value,
                    priority=FeedbackPriority.HIGH,
                    display_duration=6000,
                    action_required=True,
                ))
        return feedback

    @staticmethod
    def _milestones(previous: int, current: int) -> List[LiveFeedbackEvent]:
        """One event per threshold crossed since the previous update."""
        return [
            LiveFeedbackEvent(
                type=FeedbackType.MILESTONE,
                message=message,
                category="progress",
                priority=priority,
                display_duration=duration,
            )
            for threshold, message, priority, duration in MILESTONES
            if previous < threshold <= current
        ]

    @staticmethod
    def _critical_warnings(indicators: List[PerformanceIndicator]) -> List[LiveFeedbackEvent]:
        return [
            LiveFeedbackEvent(
                type=FeedbackType.WARNING,
                message=f"Critical: {indicator.message}",
                category=indicator.category,
                priority=FeedbackPriority.CRITICAL,
                display_duration=8000,
                action_required=True,
            )
            for indicator in indicators
            if indicator.type == IndicatorType.CRITICAL
        ]

    # ------------------------------------------------------------------
    # Summary helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _record_key_moments(
        session: AssessmentSession, event, feedback: List[LiveFeedbackEvent], now: datetime
    ) -> None:
        if isinstance(event, ActionEvent):
            if event.type == "root_cause_analysis" or event.root_cause_analysis is True:
                session.key_moments.append(KeyMoment(
                    timestamp=now,
                    type="breakthrough",
                    description="Identified root cause effectively",
                    impact="positive",
                ))
            if event.procedural_violation is True:
                session.key_moments.append(KeyMoment(
                    timestamp=now,
                    type="procedural_violation",
                    description="Procedural violation recorded",
                    impact="negative",
                ))

        for item in feedback:
            if item.type == FeedbackType.ACHIEVEMENT:
                session.key_moments.append(KeyMoment(
                    timestamp=now, type="achievement", description=item.message, impact="positive"
                ))
            elif item.type == FeedbackType.WARNING and item.priority != FeedbackPriority.CRITICAL:
                session.key_moments.append(KeyMoment(
                    timestamp=now, type="warning", description=item.message, impact="negative"
                ))

    @staticmethod
    def _trends(session: AssessmentSession, final_score: ProgressiveScore) -> Dict[Dimension, Trend]:
        first = session.first_snapshot.score if session.first_snapshot else final_score
        trends = {}
        for dim in Dimension:
            delta = final_score.dimensions[dim] - first.dimensions[dim]
            if delta >= TREND_DELTA:
                trends[dim] = Trend.IMPROVING
            elif delta <= -TREND_DELTA:
                trends[dim] = Trend.DECLINING
            else:
                trends[dim] = Trend.STABLE
        return trends

    @staticmethod
    def _final_recommendations(score: ProgressiveScore) -> List[str]:
        recommendations = [
            f"Focus on improving {dim.value} through targeted practice and training"
            for dim in Dimension
            if score.dimensions[dim] < FINAL_RECOMMENDATION_THRESHOLD
        ]
        return recommendations or [
            "Excellent performance! Continue maintaining high standards across all dimensions."
        ]

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _require(self, session_id: str) -> AssessmentSession:
        session = self.store.get(session_id)
        if session is None:
            logger.warning("assessment_not_found", session_id=session_id)
            raise SessionNotFoundError(session_id)
        return session

    @contextmanager
    def _exclusive(self, session_id: str, discard: bool = False) -> Iterator[None]:
        """
        Hold the session's writer lock for the duration of the block.

        The lock is dropped afterwards when the session has ended
        (``discard``) or turned out not to exist.
        """
        with self._locks_guard:
            lock = self._locks.setdefault(session_id, threading.Lock())
            acquired = lock.acquire(blocking=False)
        if not acquired:
            logger.warning("concurrent_update_rejected", session_id=session_id)
            raise ConcurrentUpdateError(session_id)
        try:
            yield
        except SessionNotFoundError:
            discard = True
            raise
        finally:
            with self._locks_guard:
                if discard and self._locks.get(session_id) is lock:
                    del self._locks[session_id]
                lock.release()

    @staticmethod
    def _coerce(model: Type[E], value, session_id: str) -> E:
        if isinstance(value, model):
            return value
        try:
            return model.model_validate(value)
        except ValidationError as e:
            logger.warning(
                "invalid_event_payload",
                session_id=session_id,
                model=model.__name__,
                error_count=e.error_count(),
            )
            raise InvalidContextError(f"Invalid {model.__name__}", errors=e.errors()) from e
