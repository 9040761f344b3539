"""
Score Presentation
simscore/scoring/presentation.py

Human-facing breakdown and explanation of a finished PerformanceScore.
Nothing here changes a score; it only labels and explains one.

Rating bands (overall and per dimension):
    >= 90  Exceptional
    >= 80  Excellent
    >= 70  Good
    >= 60  Acceptable
    else   Needs Improvement
"""

from typing import Dict, List, Optional

from simscore.models.context import ContextFactors
from simscore.models.enumerations import Dimension
from simscore.models.reports import (
    ComponentBreakdown,
    ContextualFactorsBreakdown,
    DimensionBreakdown,
    DimensionExplanation,
    IndustryContextExplanation,
    MethodologyExplanation,
    OverallBreakdown,
    ScoreBreakdown,
    ScoreExplanation,
)
from simscore.models.scores import PerformanceScore
from simscore.scoring.context_adjustment import ContextAdjustmentCalculator
from simscore.scoring.utils import round_half_up
from simscore.scoring.weights import SUB_DIMENSION_WEIGHTS


DIMENSION_NAMES: Dict[Dimension, str] = {
    Dimension.TECHNICAL: "Technical Competency",
    Dimension.COMMUNICATION: "Communication Skills",
    Dimension.PROCEDURAL: "Procedural Compliance",
    Dimension.CUSTOMER_SERVICE: "Customer Service",
    Dimension.PROBLEM_SOLVING: "Problem Solving",
}

COMPONENT_DESCRIPTIONS: Dict[str, str] = {
    "technical.accuracy": "Technical solution correctness and problem diagnosis accuracy",
    "technical.efficiency": "Time management and resource utilization effectiveness",
    "technical.knowledge": "Knowledge base utilization and information application",
    "technical.innovation": "Creative problem-solving and process improvement",
    "communication.clarity": "Clear, understandable communication with customers",
    "communication.empathy": "Customer empathy and emotional intelligence",
    "communication.responsiveness": "Timely responses and proactive communication",
    "communication.documentation": "Quality of written documentation and records",
    "procedural.compliance": "Adherence to established procedures and protocols",
    "procedural.security": "Security protocol compliance and privacy protection",
    "procedural.escalation": "Appropriate escalation timing and justification",
    "procedural.documentation": "Proper procedural documentation and record-keeping",
    "customer_service.satisfaction": "Direct customer satisfaction and feedback ratings",
    "customer_service.relationship": "Rapport building and customer relationship management",
    "customer_service.professionalism": "Professional behavior and service delivery",
    "customer_service.follow_up": "Follow-up quality and closure processes",
    "problem_solving.approach": "Systematic and logical problem-solving methodology",
    "problem_solving.creativity": "Creative and innovative solution development",
    "problem_solving.thoroughness": "Comprehensive investigation and analysis",
    "problem_solving.adaptability": "Flexibility and adaptation to changing requirements",
}

OVERALL_DESCRIPTIONS: Dict[str, str] = {
    "Exceptional": "Outstanding professional performance exceeding industry standards. Demonstrates mastery-level competency across all dimensions.",
    "Excellent": "Strong professional performance meeting high industry standards. Shows well-developed competency with minor optimization opportunities.",
    "Good": "Solid professional performance meeting industry standards. Demonstrates competency with clear development pathways.",
    "Acceptable": "Basic professional performance meeting minimum standards. Shows developing competency requiring continued improvement.",
    "Needs Improvement": "Performance below professional standards requiring focused development. Shows potential with dedicated improvement effort.",
}

STRENGTHS: Dict[Dimension, List[str]] = {
    Dimension.TECHNICAL: ["High technical accuracy", "Efficient problem resolution", "Strong knowledge application"],
    Dimension.COMMUNICATION: ["Clear customer communication", "Professional interaction style", "Effective documentation"],
    Dimension.PROCEDURAL: ["Excellent process compliance", "Strong security awareness", "Proper escalation practices"],
    Dimension.CUSTOMER_SERVICE: ["High customer satisfaction", "Strong relationship building", "Professional service delivery"],
    Dimension.PROBLEM_SOLVING: ["Systematic problem-solving approach", "Creative solution development", "Thorough analysis"],
}

IMPROVEMENTS: Dict[Dimension, List[str]] = {
    Dimension.TECHNICAL: ["Improve solution accuracy", "Enhance troubleshooting efficiency", "Expand technical knowledge"],
    Dimension.COMMUNICATION: ["Improve communication clarity", "Enhance customer empathy", "Strengthen documentation skills"],
    Dimension.PROCEDURAL: ["Follow procedures more consistently", "Improve security compliance", "Better escalation timing"],
    Dimension.CUSTOMER_SERVICE: ["Focus on customer satisfaction", "Build stronger relationships", "Enhance service professionalism"],
    Dimension.PROBLEM_SOLVING: ["Use more systematic approaches", "Develop creative solutions", "Improve thoroughness"],
}

DIMENSION_EXPLANATIONS: Dict[Dimension, DimensionExplanation] = {
    Dimension.TECHNICAL: DimensionExplanation(
        purpose="Measures technical problem-solving capability and accuracy",
        measurement="Based on solution correctness, efficiency, knowledge application, and innovation",
        importance="Core competency for IT support roles - directly impacts problem resolution quality",
        improvement_tips=[
            "Practice systematic troubleshooting methodologies",
            "Expand technical knowledge through training and research",
            "Focus on solution accuracy and verification processes",
        ],
    ),
    Dimension.COMMUNICATION: DimensionExplanation(
        purpose="Evaluates professional communication effectiveness with customers",
        measurement="Based on clarity, empathy, responsiveness, and documentation quality",
        importance="Critical for customer satisfaction and professional credibility",
        improvement_tips=[
            "Practice clear, jargon-free explanations",
            "Develop active listening and empathy skills",
            "Improve response timing and follow-up practices",
        ],
    ),
    Dimension.PROCEDURAL: DimensionExplanation(
        purpose="Assesses adherence to professional procedures and compliance",
        measurement="Based on process compliance, security adherence, and documentation",
        importance="Essential for maintaining quality standards and regulatory compliance",
        improvement_tips=[
            "Review and practice standard operating procedures",
            "Focus on security protocol compliance",
            "Improve documentation habits and record-keeping",
        ],
    ),
    Dimension.CUSTOMER_SERVICE: DimensionExplanation(
        purpose="Measures customer satisfaction and service quality delivery",
        measurement="Based on satisfaction ratings, relationship building, and professionalism",
        importance="Key driver of customer retention and business success",
        improvement_tips=[
            "Focus on customer needs and expectations",
            "Build rapport and trust with customers",
            "Maintain consistent professional service delivery",
        ],
    ),
    Dimension.PROBLEM_SOLVING: DimensionExplanation(
        purpose="Evaluates problem-solving methodology and adaptability",
        measurement="Based on systematic approach, creativity, thoroughness, and flexibility",
        importance="Fundamental skill for handling complex and varied IT issues",
        improvement_tips=[
            "Use structured problem-solving frameworks",
            "Practice creative thinking and alternative solutions",
            "Develop adaptability to changing requirements",
        ],
    ),
}

CALCULATION_STEPS = [
    "1. Evaluate performance in each sub-component (0-100 scale)",
    "2. Calculate weighted dimension scores using sub-component weights",
    "3. Apply contextual adjustments based on scenario complexity",
    "4. Combine dimensions using professional competency weights",
    "5. Generate final score with industry benchmark comparison",
]


def score_rating(score: float) -> str:
    if score >= 90:
        return "Exceptional"
    if score >= 80:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 60:
        return "Acceptable"
    return "Needs Improvement"


def score_grade(score: float) -> str:
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= 70:
        return "C"
    if score >= 60:
        return "D"
    return "F"


def format_score(score: float, include_grade: bool = True) -> str:
    """Format a score as '82/100 (B)'."""
    display = f"{round_half_up(score)}/100"
    return f"{display} ({score_grade(score)})" if include_grade else display


class ScorePresentation:
    """Builds the breakdown and explanation sections of a score report."""

    def __init__(
        self,
        dimension_weights: Dict[Dimension, float],
        adjustment: Optional[ContextAdjustmentCalculator] = None,
    ):
        self.dimension_weights = dimension_weights
        self.adjustment = adjustment or ContextAdjustmentCalculator()

    def generate_breakdown(self, score: PerformanceScore) -> ScoreBreakdown:
        return ScoreBreakdown(
            overall=self._overall(score),
            dimensions=[self._dimension(score, dim) for dim in Dimension],
            contextual_factors=self._contextual_factors(score.metadata.context_factors),
        )

    def generate_explanations(self, score: PerformanceScore) -> ScoreExplanation:
        return ScoreExplanation(
            methodology=MethodologyExplanation(
                overview=(
                    "Performance scoring uses a weighted multi-dimensional approach aligned with "
                    "industry standards for IT support professionals. Each dimension is evaluated "
                    "independently, then combined using professional competency weights to create "
                    "an overall score."
                ),
                dimension_weights={
                    DIMENSION_NAMES[dim]: round_half_up(float(weight) * 100)
                    for dim, weight in self.dimension_weights.items()
                },
                calculation_steps=CALCULATION_STEPS,
            ),
            dimension_explanations=DIMENSION_EXPLANATIONS,
            industry_context=IndustryContextExplanation(
                benchmark_comparison=self._benchmark_comparison(score.overall),
                professional_relevance=self._professional_relevance(score.overall),
                career_implications=self._career_implications(score.overall),
            ),
        )

    # ------------------------------------------------------------------
    # Breakdown sections
    # ------------------------------------------------------------------

    def _overall(self, score: PerformanceScore) -> OverallBreakdown:
        rating = score_rating(score.overall)
        weighted = score.dimensions.weighted_by_dimension()

        factors = []
        strong = [dim.value for dim, value in weighted.items() if value >= 85]
        weak = [dim.value for dim, value in weighted.items() if value < 70]
        if strong:
            factors.append(f"Strong performance in {', '.join(strong)}")
        if weak:
            factors.append(f"Development needed in {', '.join(weak)}")
        if score.metadata.context_factors.difficulty > 80:
            factors.append("Adjusted for high scenario difficulty")

        return OverallBreakdown(
            score=score.overall,
            rating=rating,
            description=OVERALL_DESCRIPTIONS[rating],
            factors=factors,
        )

    def _dimension(self, score: PerformanceScore, dimension: Dimension) -> DimensionBreakdown:
        dim_scores = score.dimensions.get(dimension)
        value = dim_scores.weighted
        components = [
            ComponentBreakdown(
                name=component.replace("_", " ").capitalize(),
                score=round_half_up(sub_score),
                weight=float(SUB_DIMENSION_WEIGHTS[dimension][component]),
                description=COMPONENT_DESCRIPTIONS[f"{dimension.value}.{component}"],
            )
            for component, sub_score in dim_scores.sub_scores().items()
        ]
        return DimensionBreakdown(
            dimension=dimension,
            name=DIMENSION_NAMES[dimension],
            score=round_half_up(value),
            rating=score_rating(value),
            components=components,
            strengths=list(STRENGTHS[dimension]) if value >= 85 else [],
            improvements=list(IMPROVEMENTS[dimension]) if value < 75 else [],
        )

    def _contextual_factors(self, factors: ContextFactors) -> ContextualFactorsBreakdown:
        result = self.adjustment.calculate(factors)
        adjustment = round_half_up((result.factor - 1) * 100)

        if not result.reasons:
            explanation = "No contextual adjustments applied - standard scenario conditions."
        else:
            explanation = (
                f"Score adjusted by {adjustment:+d}% to account for {', '.join(result.reasons)}."
            )
            if result.clamped:
                explanation += f" Raw factor {float(result.raw_factor):.2f} was capped at {float(result.factor):.2f}."

        return ContextualFactorsBreakdown(
            scenario_difficulty=factors.difficulty,
            adjustment_applied=adjustment,
            explanation=explanation,
        )

    # ------------------------------------------------------------------
    # Industry context text
    # ------------------------------------------------------------------

    @staticmethod
    def _benchmark_comparison(score: float) -> str:
        if score >= 90:
            return "Performance in top 10% of industry professionals - exceeds expectations significantly"
        if score >= 80:
            return "Performance above industry average - meets high professional standards"
        if score >= 70:
            return "Performance meets industry standards - demonstrates professional competency"
        return "Performance below industry average - improvement needed to meet professional standards"

    @staticmethod
    def _professional_relevance(score: float) -> str:
        if score >= 85:
            return "Score demonstrates advanced professional competency suitable for senior or specialized roles"
        if score >= 75:
            return "Score indicates solid professional competency suitable for standard IT support roles"
        if score >= 65:
            return "Score shows developing competency - suitable for entry-level roles with continued development"
        return "Score indicates need for fundamental skill development before professional role readiness"

    @staticmethod
    def _career_implications(score: float) -> str:
        if score >= 85:
            return "Strong potential for career advancement, leadership roles, and specialized positions"
        if score >= 75:
            return "Good foundation for career growth with opportunities for skill specialization"
        if score >= 65:
            return "Career development opportunities available with focused skill improvement"
        return "Focus on fundamental skill building recommended before pursuing career advancement"
