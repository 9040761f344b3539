# simscore/scoring/performance_scorer.py
"""
Performance Scorer
-------------------
Final assessment of a finished session.

Pipeline:
    1. benchmark   = BenchmarkRepository.get_benchmarks(scenario category)
    2. sub-scores  = DimensionScoringEngine, all five dimensions
    3. weighted_d  = round_half_up(Σ sub_i × w_i / Σ w_i)
    4. weighted_d  = clamp(round_half_up(weighted_d × factor), 0, 100)
                     factor from ContextAdjustmentCalculator, in [0.90, 1.15]
    5. overall     = round_half_up(Σ weighted_d × W_d)
    6. alignment   = BenchmarkRepository.assess_alignment(overall, weighted, benchmark)
    7. the finished PerformanceScore is saved to the ScoreRepository

Default dimension weights (sum = 1.0):
    technical 0.25, communication 0.25, procedural 0.20,
    customer_service 0.20, problem_solving 0.10
"""
import structlog
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from simscore.core.exceptions import (
    ComputationFailureError,
    InvalidContextError,
    ScoresNotFoundError,
    ScoringException,
    SessionNotFoundError,
)
from simscore.models.context import ScoringContext
from simscore.models.enumerations import Dimension
from simscore.models.reports import AveragePerformance, BenchmarkReport, ScoreBreakdownReport
from simscore.models.scores import (
    DIMENSION_SCORE_MODELS,
    DimensionScores,
    PerformanceScore,
    ScoreMetadata,
    SubScores,
)
from simscore.repositories.benchmark_repository import BenchmarkRepository
from simscore.repositories.score_repository import ScoreRepository
from simscore.scoring.context_adjustment import ContextAdjustmentCalculator
from simscore.scoring.dimension_engine import DimensionScoringEngine
from simscore.scoring.presentation import ScorePresentation
from simscore.scoring.utils import clamp, mean, round_half_up, to_decimal, weighted_mean
from simscore.scoring.weights import DIMENSION_WEIGHTS, SUB_DIMENSION_WEIGHTS

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


IMPROVEMENT_RECOMMENDATIONS: Dict[Dimension, str] = {
    Dimension.TECHNICAL: "Focus on improving technical accuracy through additional knowledge base research and systematic troubleshooting approaches",
    Dimension.COMMUNICATION: "Enhance communication effectiveness by using clearer language and demonstrating more empathy in customer interactions",
    Dimension.PROCEDURAL: "Improve procedural compliance by carefully following established protocols and documentation requirements",
    Dimension.CUSTOMER_SERVICE: "Strengthen customer service skills through active listening and professional follow-up practices",
    Dimension.PROBLEM_SOLVING: "Develop problem-solving approach by using more systematic diagnostic methods and creative solution exploration",
}

IMPROVEMENT_THRESHOLD = 75


class PerformanceScorer:
    """Orchestrates final scoring and the read-only projections built on it."""

    def __init__(
        self,
        benchmarks: BenchmarkRepository,
        scores: ScoreRepository,
        engine: Optional[DimensionScoringEngine] = None,
        adjustment: Optional[ContextAdjustmentCalculator] = None,
        dimension_weights: Optional[Mapping[Dimension, Decimal]] = None,
        recent_scores_limit: int = 10,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.benchmarks = benchmarks
        self.scores = scores
        self.engine = engine or DimensionScoringEngine()
        self.adjustment = adjustment or ContextAdjustmentCalculator()
        self.dimension_weights = dict(dimension_weights or DIMENSION_WEIGHTS)
        self.recent_scores_limit = recent_scores_limit
        self.clock = clock
        self.presentation = ScorePresentation(self.dimension_weights, self.adjustment)

        total = sum(self.dimension_weights.values())
        if abs(total - Decimal("1")) > Decimal("0.001"):
            raise ValueError(f"Dimension weights must sum to 1.0, got {total}")

    # ------------------------------------------------------------------
    # Final scoring
    # ------------------------------------------------------------------

    def score(self, context: Union[ScoringContext, Mapping[str, Any]]) -> PerformanceScore:
        """
        Score a finished session.

        Args:
            context: ScoringContext, or a mapping that validates into one

        Returns:
            Immutable PerformanceScore, also saved to the score repository

        Raises:
            InvalidContextError: required scenario/resolution fields missing or invalid
            ComputationFailureError: any unexpected failure during aggregation
        """
        ctx = self._validate_context(context)
        log = logger.bind(session_id=ctx.session_id, user_id=ctx.user_id, scenario_id=ctx.scenario_id)

        try:
            benchmark = self.benchmarks.get_benchmarks(ctx.scenario_data.category)
            sub_scores = self._dimension_sub_scores(ctx)

            adjustment = self.adjustment.calculate(ctx.context_factors)
            weighted: Dict[Dimension, int] = {}
            for dim, scores in sub_scores.items():
                raw = self._weighted(dim, scores)
                weighted[dim] = self.adjustment.apply(raw, adjustment.factor)

            overall = self._overall(weighted)
            alignment = self.benchmarks.assess_alignment(overall, weighted, benchmark)

            performance = PerformanceScore(
                overall=overall,
                dimensions=DimensionScores(**{
                    dim.value: DIMENSION_SCORE_MODELS[dim](**scores.sub_scores(), weighted=weighted[dim])
                    for dim, scores in sub_scores.items()
                }),
                metadata=ScoreMetadata(
                    session_id=ctx.session_id,
                    scenario_id=ctx.scenario_id,
                    user_id=ctx.user_id,
                    timestamp=self.clock(),
                    context_factors=ctx.context_factors,
                    adjustment_factor=float(adjustment.factor),
                    industry_alignment=alignment,
                ),
            )
            self.scores.save(performance)
        except ScoringException:
            raise
        except Exception as e:
            log.error("performance_scoring_failed", error=str(e), exc_info=True)
            raise ComputationFailureError("calculate performance score", ctx.session_id) from e

        log.info(
            "performance_scored",
            overall=overall,
            benchmark_category=benchmark.category,
            adjustment_factor=float(adjustment.factor),
            industry_readiness=alignment.industry_readiness.value,
            **{f"{dim.value}_weighted": value for dim, value in weighted.items()},
        )
        return performance

    @staticmethod
    def _validate_context(context) -> ScoringContext:
        if isinstance(context, ScoringContext):
            return context
        try:
            return ScoringContext.model_validate(context)
        except ValidationError as e:
            logger.warning(
                "invalid_scoring_context",
                session_id=(context or {}).get("session_id") if isinstance(context, Mapping) else None,
                error_count=e.error_count(),
            )
            raise InvalidContextError("Invalid scoring context", errors=e.errors()) from e

    def _dimension_sub_scores(self, ctx: ScoringContext) -> Dict[Dimension, SubScores]:
        resolution = ctx.resolution_data
        scenario = ctx.scenario_data
        return {
            Dimension.TECHNICAL: self.engine.technical(ctx.actions, resolution, scenario),
            Dimension.COMMUNICATION: self.engine.communication(ctx.interactions, resolution),
            Dimension.PROCEDURAL: self.engine.procedural(ctx.actions, scenario, resolution),
            Dimension.CUSTOMER_SERVICE: self.engine.customer_service(ctx.interactions, resolution),
            Dimension.PROBLEM_SOLVING: self.engine.problem_solving(ctx.actions, resolution, scenario),
        }

    @staticmethod
    def _weighted(dimension: Dimension, scores: SubScores) -> int:
        weights = SUB_DIMENSION_WEIGHTS[dimension]
        values = scores.sub_scores()
        names = list(weights)
        return clamp(
            round_half_up(
                weighted_mean(
                    [to_decimal(values[name]) for name in names],
                    [weights[name] for name in names],
                )
            ),
            0,
            100,
        )

    def _overall(self, weighted: Mapping[Dimension, int]) -> int:
        total = sum(Decimal(weighted[dim]) * w for dim, w in self.dimension_weights.items())
        return clamp(round_half_up(total), 0, 100)

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def score_breakdown(self, session_id: str) -> ScoreBreakdownReport:
        """
        Human-facing explanation of a stored score.

        Raises:
            SessionNotFoundError: no finished score is stored for the session
        """
        score = self.scores.get_by_session(session_id)
        if score is None:
            logger.warning("score_breakdown_not_found", session_id=session_id)
            raise SessionNotFoundError(session_id)

        try:
            report = ScoreBreakdownReport(
                score=score,
                breakdown=self.presentation.generate_breakdown(score),
                recommendations=self.improvement_recommendations(score),
                industry_context=self.benchmarks.get_industry_context(score.overall),
                explanations=self.presentation.generate_explanations(score),
                generated_at=self.clock(),
            )
        except Exception as e:
            logger.error("score_breakdown_failed", session_id=session_id, error=str(e), exc_info=True)
            raise ComputationFailureError("get score breakdown", session_id) from e

        logger.info("score_breakdown_generated", session_id=session_id, overall=score.overall)
        return report

    @staticmethod
    def improvement_recommendations(score: PerformanceScore) -> List[str]:
        weighted = score.dimensions.weighted_by_dimension()
        return [
            IMPROVEMENT_RECOMMENDATIONS[dim]
            for dim in Dimension
            if weighted[dim] < IMPROVEMENT_THRESHOLD
        ]

    def benchmark_performance(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> BenchmarkReport:
        """
        Compare a user's recent average against the comprehensive benchmark.

        Args:
            user_id: Trainee identifier
            since: Only include scores stamped at or after this time
            limit: Maximum number of recent scores (defaults to RECENT_SCORES_LIMIT)

        Raises:
            InvalidContextError: ``since`` is a naive datetime
            ScoresNotFoundError: the user has no stored scores in the window
        """
        if since is not None and since.utcoffset() is None:
            logger.warning("benchmark_naive_since", user_id=user_id, since=since.isoformat())
            raise InvalidContextError("since must be a timezone-aware datetime")

        recent = self.scores.list_for_user(user_id, since=since, limit=limit or self.recent_scores_limit)
        if not recent:
            logger.warning("benchmark_no_scores", user_id=user_id)
            raise ScoresNotFoundError(user_id)

        average = AveragePerformance(
            overall=round_half_up(mean([s.overall for s in recent])),
            dimensions={
                dim: round_half_up(mean([s.dimensions.get(dim).weighted for s in recent]))
                for dim in Dimension
            },
            sample_count=len(recent),
        )
        benchmark = self.benchmarks.get_comprehensive_benchmarks()

        report = BenchmarkReport(
            user_id=user_id,
            since=since,
            average_performance=average,
            industry_rankings=self.benchmarks.calculate_percentile_rankings(
                average.overall, average.dimensions, benchmark
            ),
            insights=self.benchmarks.generate_comparison_insights(
                average.overall, average.dimensions, benchmark
            ),
            recommendations=self._benchmark_recommendations(average, benchmark),
            generated_at=self.clock(),
        )
        logger.info(
            "performance_benchmarked",
            user_id=user_id,
            sample_count=average.sample_count,
            overall=average.overall,
            overall_percentile=report.industry_rankings.overall,
        )
        return report

    @staticmethod
    def _benchmark_recommendations(average: AveragePerformance, benchmark) -> List[str]:
        recommendations = []
        if average.overall < benchmark.industry.average:
            recommendations.append("Focus on overall performance improvement to meet industry standards")
        for dim, value in average.dimensions.items():
            bench = benchmark.dimensions.get(dim)
            if bench is not None and value < bench.average:
                recommendations.append(
                    f"Improve {dim.value} performance to reach industry average of {bench.average:g}"
                )
        return recommendations

    # ------------------------------------------------------------------
    # Methodology
    # ------------------------------------------------------------------

    def methodology(self) -> Dict[str, Any]:
        """Weights and calculation steps, for transparency screens."""
        descriptions = {
            Dimension.TECHNICAL: "Technical accuracy, efficiency, knowledge application, and innovation",
            Dimension.COMMUNICATION: "Communication clarity, empathy, responsiveness, and documentation quality",
            Dimension.PROCEDURAL: "Process compliance, security adherence, escalation procedures, and documentation",
            Dimension.CUSTOMER_SERVICE: "Customer satisfaction, relationship building, professionalism, and follow-up",
            Dimension.PROBLEM_SOLVING: "Problem-solving approach, creativity, thoroughness, and adaptability",
        }
        return {
            "overview": {
                "purpose": "Comprehensive multi-dimensional performance assessment for IT support professionals",
                "approach": "Industry-aligned scoring methodology with contextual adjustments",
            },
            "dimensions": {
                dim.value: {
                    "weight": float(self.dimension_weights[dim]),
                    "description": descriptions[dim],
                    "sub_dimensions": {k: float(v) for k, v in SUB_DIMENSION_WEIGHTS[dim].items()},
                    "components": self.engine.methodology()[dim.value]["components"],
                }
                for dim in Dimension
            },
            "contextual_adjustments": {
                "description": "Scores are adjusted based on scenario complexity and situational factors",
                "factors": [
                    "Scenario difficulty level",
                    "Time constraints and pressure",
                    "Customer complexity and behavior",
                    "Technical problem complexity",
                    "Available resources and tools",
                ],
                "adjustment_range": [0.90, 1.15],
            },
            "transparency": {
                "score_range": "0-100 for all dimensions and overall score",
                "calculation": "Weighted average of dimension scores with contextual adjustments",
            },
        }
