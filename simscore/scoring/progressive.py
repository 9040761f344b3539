"""
Progressive Score Calculator
simscore/scoring/progressive.py

Scores a partial event log while the session is still running.

Formulas:
    completeness = 0.7 × (expected action types seen / 6) × 100
                 + 0.3 × min(100, elapsed_min / expected_min × 100)
    overall      = Σ(dimension × W_d) × (0.7 + 0.3 × completeness / 100)
    confidence   = min(100, 20 + min(30, 3 × actions) + min(20, 4 × interactions)
                            + 0.3 × completeness + min(20, 2 × elapsed_min))

Dimension blends (applied only when the evidence exists):
    technical        0.3 × 70 + 0.7 × mean(quality)        research/diagnosis/solution/testing
    communication    0.3 × 70 + 0.7 × mean(clarity)        all interactions
    procedural       max(50, 80 − 10 × violations)         never increases
    customer_service 0.4 × 70 + 0.6 × mean(satisfaction)   all interactions
    problem_solving  0.4 × 65 + 0.6 × mean(effectiveness)  analysis/hypothesis/testing/creative_solution
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Mapping, Optional

from simscore.models.enumerations import Dimension, IndicatorType
from simscore.models.session import AssessmentSession, PerformanceIndicator, ProgressiveScore
from simscore.scoring.utils import clamp, mean_or_default, round_half_up
from simscore.scoring.weights import DIMENSION_WEIGHTS

logger = logging.getLogger(__name__)


EXPECTED_ACTION_TYPES = [
    "initial_assessment",
    "research",
    "diagnosis",
    "solution",
    "customer_communication",
    "verification",
]

BASELINE_DIMENSIONS: Dict[Dimension, int] = {
    Dimension.TECHNICAL: 70,
    Dimension.COMMUNICATION: 70,
    Dimension.PROCEDURAL: 80,
    Dimension.CUSTOMER_SERVICE: 70,
    Dimension.PROBLEM_SOLVING: 65,
}

def baseline_score() -> ProgressiveScore:
    """Fresh baseline score for a session with no events yet."""
    return ProgressiveScore(
        overall=70,
        dimensions=dict(BASELINE_DIMENSIONS),
        confidence=20,
        completeness=0,
    )

TECHNICAL_ACTIONS = {"research", "diagnosis", "solution", "testing"}
PROBLEM_SOLVING_ACTIONS = {"analysis", "hypothesis", "testing", "creative_solution"}

# (excellent, good, acceptable, concern)
THRESHOLDS: Dict[Dimension, tuple] = {
    Dimension.TECHNICAL: (90, 75, 60, 45),
    Dimension.COMMUNICATION: (90, 75, 60, 45),
    Dimension.PROCEDURAL: (95, 85, 70, 55),
    Dimension.CUSTOMER_SERVICE: (90, 80, 65, 50),
    Dimension.PROBLEM_SOLVING: (85, 70, 55, 40),
}

RECOMMENDATIONS: Dict[Dimension, str] = {
    Dimension.TECHNICAL: "Focus on systematic troubleshooting and utilize knowledge base resources more effectively",
    Dimension.COMMUNICATION: "Improve clarity in explanations and demonstrate more empathy in customer interactions",
    Dimension.PROCEDURAL: "Follow established procedures more carefully and ensure proper documentation",
    Dimension.CUSTOMER_SERVICE: "Focus on active listening and maintaining professional, helpful responses",
    Dimension.PROBLEM_SOLVING: "Use more systematic problem-solving approaches and consider alternative solutions",
}

URGENT_RECOMMENDATIONS: Dict[Dimension, str] = {
    Dimension.TECHNICAL: "URGENT: Verify your technical approach and seek additional resources if needed",
    Dimension.COMMUNICATION: "URGENT: Improve communication immediately - customer satisfaction is at risk",
    Dimension.PROCEDURAL: "URGENT: Review procedures - compliance violations detected",
    Dimension.CUSTOMER_SERVICE: "URGENT: Focus on customer needs - satisfaction is critically low",
    Dimension.PROBLEM_SOLVING: "URGENT: Reassess your problem-solving approach - current method is ineffective",
}

TIME_OVERRUN_RATIO = 1.2


class ProgressiveScoreCalculator:
    """Compute progressive scores and indicators from an in-progress session."""

    def __init__(self, dimension_weights: Optional[Mapping[Dimension, Decimal]] = None):
        self.weights = dict(dimension_weights or DIMENSION_WEIGHTS)

    def calculate(self, session: AssessmentSession) -> ProgressiveScore:
        """
        Score the session at its ``current_time``.

        Returns the fixed baseline until the first event arrives.
        """
        if not session.actions and not session.interactions:
            return baseline_score()

        completeness = self.completeness(session)
        dimensions = self.dimension_scores(session)
        overall = self.overall(dimensions, completeness)
        confidence = self.confidence(session, completeness)

        score = ProgressiveScore(
            overall=clamp(round_half_up(overall), 0, 100),
            dimensions={dim: clamp(round_half_up(v), 0, 100) for dim, v in dimensions.items()},
            confidence=clamp(round_half_up(confidence), 0, 100),
            completeness=clamp(round_half_up(completeness), 0, 100),
        )
        logger.debug(
            "progressive_score_calculated",
            extra={
                "session_id": session.session_id,
                "overall": score.overall,
                "confidence": score.confidence,
                "completeness": score.completeness,
            },
        )
        return score

    def completeness(self, session: AssessmentSession) -> float:
        seen = {a.type for a in session.actions}
        done = sum(1 for t in EXPECTED_ACTION_TYPES if t in seen)
        action_completeness = done / len(EXPECTED_ACTION_TYPES) * 100
        time_completeness = min(100.0, session.elapsed_minutes / session.expected_duration * 100)
        return action_completeness * 0.7 + time_completeness * 0.3

    def dimension_scores(self, session: AssessmentSession) -> Dict[Dimension, float]:
        scores: Dict[Dimension, float] = {d: float(v) for d, v in BASELINE_DIMENSIONS.items()}

        technical = [a for a in session.actions if a.type in TECHNICAL_ACTIONS]
        if technical:
            avg = mean_or_default((a.quality for a in technical), 70)
            scores[Dimension.TECHNICAL] = scores[Dimension.TECHNICAL] * 0.3 + avg * 0.7

        if session.interactions:
            clarity = mean_or_default((i.clarity for i in session.interactions), 70)
            scores[Dimension.COMMUNICATION] = scores[Dimension.COMMUNICATION] * 0.3 + clarity * 0.7

            satisfaction = mean_or_default((i.satisfaction for i in session.interactions), 70)
            scores[Dimension.CUSTOMER_SERVICE] = (
                scores[Dimension.CUSTOMER_SERVICE] * 0.4 + satisfaction * 0.6
            )

        # compliance is assumed until violated
        violations = sum(1 for a in session.actions if a.procedural_violation is True)
        scores[Dimension.PROCEDURAL] = max(50.0, scores[Dimension.PROCEDURAL] - violations * 10)

        problem_solving = [a for a in session.actions if a.type in PROBLEM_SOLVING_ACTIONS]
        if problem_solving:
            avg = mean_or_default((a.effectiveness for a in problem_solving), 65)
            scores[Dimension.PROBLEM_SOLVING] = scores[Dimension.PROBLEM_SOLVING] * 0.4 + avg * 0.6

        return scores

    def overall(self, dimensions: Mapping[Dimension, float], completeness: float) -> float:
        weighted_sum = sum(
            Decimal(str(score)) * self.weights[dim] for dim, score in dimensions.items()
        )
        dampening = Decimal("0.7") + Decimal("0.3") * Decimal(str(min(1.0, completeness / 100)))
        return float(weighted_sum * dampening)

    @staticmethod
    def confidence(session: AssessmentSession, completeness: float) -> float:
        confidence = 20.0
        confidence += min(30, len(session.actions) * 3)
        confidence += min(20, len(session.interactions) * 4)
        confidence += completeness * 0.3
        confidence += min(20.0, session.elapsed_minutes * 2)
        return min(100.0, confidence)

    def indicators(
        self, session: AssessmentSession, score: ProgressiveScore
    ) -> List[PerformanceIndicator]:
        now = session.current_time
        indicators = [
            self._classify(dimension, score.dimensions[dimension], now)
            for dimension in Dimension
        ]

        elapsed = session.elapsed_minutes
        expected = session.expected_duration
        if elapsed > expected * TIME_OVERRUN_RATIO:
            indicators.append(
                PerformanceIndicator(
                    type=IndicatorType.CONCERN,
                    category="time_management",
                    message="Session is running over expected time",
                    score=max(0.0, 100 - (elapsed - expected) / expected * 100),
                    timestamp=now,
                    actionable=True,
                    recommendation="Focus on key resolution steps to complete efficiently",
                )
            )
        return indicators

    @staticmethod
    def _classify(dimension: Dimension, value: int, now: datetime) -> PerformanceIndicator:
        excellent, good, acceptable, concern = THRESHOLDS[dimension]
        name = dimension.value
        recommendation = None

        if value >= excellent:
            kind, message = IndicatorType.POSITIVE, f"Excellent {name} performance"
        elif value >= good:
            kind, message = IndicatorType.POSITIVE, f"Good {name} performance"
        elif value >= acceptable:
            kind, message = IndicatorType.NEUTRAL, f"Acceptable {name} performance"
        elif value >= concern:
            kind, message = IndicatorType.CONCERN, f"{name} performance needs attention"
            recommendation = RECOMMENDATIONS[dimension]
        else:
            kind, message = IndicatorType.CRITICAL, f"Critical {name} performance issue"
            recommendation = URGENT_RECOMMENDATIONS[dimension]

        return PerformanceIndicator(
            type=kind,
            category=name,
            message=message,
            score=value,
            timestamp=now,
            actionable=recommendation is not None,
            recommendation=recommendation,
        )
