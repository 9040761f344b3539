"""
Benchmark Repository - Performance Scoring Core
simscore/repositories/benchmark_repository.py

Reference score distributions per scenario category, and the comparisons
made against them: alignment status, percentile rank, insights and
role-level industry context.

Profiles are seeded at construction and never mutated afterwards, so one
repository instance can be shared freely across threads.
"""

from typing import Dict, Iterable, List, Mapping, Optional

import structlog

from simscore.models.benchmark import (
    AlignmentDetail,
    AlignmentResult,
    BenchmarkProfile,
    CertificationAlignment,
    DimensionBenchmark,
    IndustryContext,
    IndustryStats,
    MarketContext,
    PercentileRanking,
    RoleStandard,
)
from simscore.models.enumerations import AlignmentStatus, Dimension, IndustryReadiness
from simscore.scoring.utils import normal_cdf, round_half_up

logger = structlog.get_logger(__name__)


GENERAL_CATEGORY = "general"
COMPREHENSIVE_CATEGORY = "comprehensive"


def _profile(category, average, top, sd, sample_size, dimensions) -> BenchmarkProfile:
    return BenchmarkProfile(
        category=category,
        industry=IndustryStats(
            average=average,
            top_percentile=top,
            standard_deviation=sd,
            sample_size=sample_size,
        ),
        dimensions={
            dim: DimensionBenchmark(average=avg, top_percentile=top_pct)
            for dim, (avg, top_pct) in dimensions.items()
        },
    )


def default_profiles() -> List[BenchmarkProfile]:
    """Seed data shipped with the core."""
    return [
        _profile(GENERAL_CATEGORY, 74, 92, 12, 2500, {
            Dimension.TECHNICAL: (72, 90),
            Dimension.COMMUNICATION: (76, 93),
            Dimension.PROCEDURAL: (78, 95),
            Dimension.CUSTOMER_SERVICE: (75, 92),
            Dimension.PROBLEM_SOLVING: (70, 88),
        }),
        _profile("technical_support", 76, 94, 11, 1800, {
            Dimension.TECHNICAL: (78, 95),
            Dimension.COMMUNICATION: (74, 91),
            Dimension.PROCEDURAL: (80, 97),
            Dimension.CUSTOMER_SERVICE: (73, 90),
            Dimension.PROBLEM_SOLVING: (75, 92),
        }),
        _profile(COMPREHENSIVE_CATEGORY, 75, 93, 11.5, 4300, {
            Dimension.TECHNICAL: (75, 92),
            Dimension.COMMUNICATION: (75, 92),
            Dimension.PROCEDURAL: (79, 96),
            Dimension.CUSTOMER_SERVICE: (74, 91),
            Dimension.PROBLEM_SOLVING: (72, 90),
        }),
    ]


class BenchmarkRepository:
    """Read-only store of benchmark profiles keyed by category."""

    def __init__(self, profiles: Optional[Iterable[BenchmarkProfile]] = None):
        seeded = list(profiles) if profiles is not None else default_profiles()
        self._profiles: Dict[str, BenchmarkProfile] = {p.category: p for p in seeded}
        if GENERAL_CATEGORY not in self._profiles:
            raise ValueError("Benchmark profiles must include the 'general' category")

    @property
    def categories(self) -> List[str]:
        return sorted(self._profiles)

    def get_benchmarks(self, category: Optional[str] = GENERAL_CATEGORY) -> BenchmarkProfile:
        """
        Get the profile for a scenario category.

        Args:
            category: Scenario category, e.g. 'technical_support'

        Returns:
            The exact match, or the 'general' profile for unknown categories
        """
        profile = self._profiles.get(category or GENERAL_CATEGORY)
        if profile is None:
            logger.info("benchmark_category_fallback", requested=category, used=GENERAL_CATEGORY)
            return self._profiles[GENERAL_CATEGORY]
        return profile

    def get_comprehensive_benchmarks(self) -> BenchmarkProfile:
        return self._profiles.get(COMPREHENSIVE_CATEGORY) or self._profiles[GENERAL_CATEGORY]

    # ------------------------------------------------------------------
    # Alignment
    # ------------------------------------------------------------------

    def assess_alignment(
        self,
        overall: float,
        dimension_scores: Mapping[Dimension, float],
        benchmark: BenchmarkProfile,
    ) -> AlignmentResult:
        """
        Classify each dimension and the overall score against the profile averages.

        Args:
            overall: Overall score (0-100)
            dimension_scores: Weighted score per dimension; missing dimensions count as 0
            benchmark: Profile to compare against

        Returns:
            AlignmentResult with per-dimension details, readiness and recommendations
        """
        dimensions = {
            dim: self._alignment_detail(dimension_scores.get(dim, 0), bench.average)
            for dim, bench in benchmark.dimensions.items()
        }
        meets_standards = overall >= benchmark.industry.average * 0.9
        readiness = self._industry_readiness(overall, benchmark)

        result = AlignmentResult(
            category=benchmark.category,
            overall=self._alignment_detail(overall, benchmark.industry.average),
            dimensions=dimensions,
            meets_professional_standards=meets_standards,
            industry_readiness=readiness,
            recommendations=self._alignment_recommendations(meets_standards, dimensions, readiness),
        )
        logger.debug(
            "alignment_assessed",
            category=benchmark.category,
            overall=overall,
            readiness=readiness.value,
            meets_professional_standards=meets_standards,
        )
        return result

    @staticmethod
    def _alignment_detail(score: float, industry_average: float) -> AlignmentDetail:
        ratio = score / industry_average
        if ratio >= 1.2:
            status = AlignmentStatus.EXCEEDS
        elif ratio >= 1.0:
            status = AlignmentStatus.MEETS
        elif ratio >= 0.8:
            status = AlignmentStatus.APPROACHING
        else:
            status = AlignmentStatus.BELOW
        return AlignmentDetail(
            score=score,
            industry_average=industry_average,
            alignment_ratio=ratio,
            alignment_score=min(100.0, ratio * 100),
            status=status,
        )

    @staticmethod
    def _industry_readiness(overall: float, benchmark: BenchmarkProfile) -> IndustryReadiness:
        if overall >= benchmark.industry.top_percentile * 0.9:
            return IndustryReadiness.ADVANCED
        if overall >= benchmark.industry.average * 0.9:
            return IndustryReadiness.READY
        return IndustryReadiness.DEVELOPING

    @staticmethod
    def _alignment_recommendations(
        meets_standards: bool,
        dimensions: Mapping[Dimension, AlignmentDetail],
        readiness: IndustryReadiness,
    ) -> List[str]:
        recommendations = []
        if not meets_standards:
            recommendations.append(
                "Focus on achieving industry-standard performance levels for better career opportunities"
            )
        for dim, detail in dimensions.items():
            if detail.status == AlignmentStatus.BELOW:
                recommendations.append(
                    f"Prioritize {dim.value} skill development to meet industry expectations"
                )
        if readiness == IndustryReadiness.DEVELOPING:
            recommendations.append(
                "Consider additional training or certification programs to accelerate professional development"
            )
        elif readiness == IndustryReadiness.ADVANCED:
            recommendations.append(
                "Excellent industry alignment - consider pursuing senior roles or specializations"
            )
        return recommendations

    # ------------------------------------------------------------------
    # Percentiles
    # ------------------------------------------------------------------

    def calculate_percentile_rankings(
        self,
        overall: float,
        dimension_scores: Mapping[Dimension, float],
        benchmark: BenchmarkProfile,
    ) -> PercentileRanking:
        """
        Percentile of each score under a normal model of the profile.

        Formula: percentile = round(100 × Φ((score − mean) / sd)), clamped to [1, 99]
        Dimensions use their own mean and the profile's standard deviation.
        """
        sd = benchmark.industry.standard_deviation
        return PercentileRanking(
            overall=self.percentile(overall, benchmark.industry.average, sd),
            dimensions={
                dim: self.percentile(dimension_scores.get(dim, 0), bench.average, sd)
                for dim, bench in benchmark.dimensions.items()
            },
        )

    @staticmethod
    def percentile(score: float, mean: float, standard_deviation: float) -> int:
        z = (score - mean) / standard_deviation
        return max(1, min(99, round_half_up(normal_cdf(z) * 100)))

    # ------------------------------------------------------------------
    # Insights and industry context
    # ------------------------------------------------------------------

    def generate_comparison_insights(
        self,
        overall: float,
        dimension_scores: Mapping[Dimension, float],
        benchmark: BenchmarkProfile,
    ) -> List[str]:
        industry = benchmark.industry
        if overall >= industry.top_percentile:
            insights = ["Exceptional performance - among top performers in the industry"]
        elif overall >= industry.average * 1.1:
            insights = ["Above-average performance with strong professional competency"]
        elif overall >= industry.average * 0.9:
            insights = ["Performance aligns well with industry standards"]
        else:
            insights = ["Performance below industry average - focus needed on core competencies"]

        for dim, bench in benchmark.dimensions.items():
            score = dimension_scores.get(dim, 0)
            if score >= bench.top_percentile:
                insights.append(f"Exceptional {dim.value} skills - top tier performance")
            elif score < bench.average * 0.8:
                insights.append(f"{dim.value} skills need development to meet industry standards")
        return insights

    def get_industry_context(self, overall: float) -> IndustryContext:
        """Role-level standards, salary/career outlook and certifications for a score."""
        benchmark = self.get_comprehensive_benchmarks()
        avg = benchmark.industry.average
        top = benchmark.industry.top_percentile

        return IndustryContext(
            industry_standards={
                "entry_level": RoleStandard(minimum=avg * 0.7, competitive=avg * 0.85, preferred=avg),
                "experienced": RoleStandard(minimum=avg * 0.9, competitive=avg * 1.1, preferred=top * 0.9),
                "senior": RoleStandard(minimum=avg * 1.1, competitive=top * 0.9, preferred=top),
            },
            market_context=MarketContext(
                demand_trends="High demand for IT support professionals with strong communication skills",
                salary_impact=self._salary_impact(overall, avg),
                career_progression=self._career_progression(overall, avg, top),
            ),
            certification_alignment=CertificationAlignment(
                ready=overall >= avg * 0.9,
                recommended_certifications=self._certifications(overall, avg, top),
            ),
            benchmark_category=benchmark.category,
        )

    @staticmethod
    def _salary_impact(overall: float, avg: float) -> str:
        ratio = overall / avg
        if ratio >= 1.3:
            return "Top tier salary potential - 20-30% above market average"
        if ratio >= 1.15:
            return "Above average salary potential - 10-20% above market average"
        if ratio >= 0.9:
            return "Market rate salary potential"
        return "Below market salary potential - focus on skill development for improvement"

    @staticmethod
    def _career_progression(overall: float, avg: float, top: float) -> str:
        if overall >= top * 0.9:
            return "Ready for senior or leadership roles"
        if overall >= avg * 1.1:
            return "Ready for intermediate to advanced positions"
        if overall >= avg * 0.9:
            return "Ready for entry to intermediate positions"
        return "Focus on fundamental skill development before career advancement"

    @staticmethod
    def _certifications(overall: float, avg: float, top: float) -> List[str]:
        certifications = []
        if overall >= avg * 0.8:
            certifications += ["CompTIA A+ Certification", "ITIL Foundation Certification"]
        if overall >= avg:
            certifications += [
                "Customer Service Excellence Certification",
                "CompTIA Network+ Certification",
            ]
        if overall >= top * 0.9:
            certifications += [
                "CompTIA Security+ Certification",
                "Microsoft Certified: Azure Fundamentals",
            ]
        return certifications
