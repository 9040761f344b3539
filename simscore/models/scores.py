"""
Score models for finished sessions.

Sub-score sets are what the dimension engine returns; the ``*DimensionScore``
subclasses add the ``weighted`` value computed by the performance scorer.
"""

from datetime import datetime, timezone
from typing import Annotated, Dict, Type

from pydantic import BaseModel, ConfigDict, Field

from simscore.models.benchmark import AlignmentResult
from simscore.models.context import ContextFactors
from simscore.models.enumerations import Dimension


Score = Annotated[float, Field(ge=0, le=100)]


class SubScores(BaseModel):
    """Base class for the four named sub-scores of one dimension."""

    model_config = ConfigDict(frozen=True)

    def sub_scores(self) -> Dict[str, float]:
        return self.model_dump(exclude={"weighted"})


class TechnicalScores(SubScores):
    accuracy: Score
    efficiency: Score
    knowledge: Score
    innovation: Score


class CommunicationScores(SubScores):
    clarity: Score
    empathy: Score
    responsiveness: Score
    documentation: Score


class ProceduralScores(SubScores):
    compliance: Score
    security: Score
    escalation: Score
    documentation: Score


class CustomerServiceScores(SubScores):
    satisfaction: Score
    relationship: Score
    professionalism: Score
    follow_up: Score


class ProblemSolvingScores(SubScores):
    approach: Score
    creativity: Score
    thoroughness: Score
    adaptability: Score


class TechnicalDimensionScore(TechnicalScores):
    weighted: Score


class CommunicationDimensionScore(CommunicationScores):
    weighted: Score


class ProceduralDimensionScore(ProceduralScores):
    weighted: Score


class CustomerServiceDimensionScore(CustomerServiceScores):
    weighted: Score


class ProblemSolvingDimensionScore(ProblemSolvingScores):
    weighted: Score


DIMENSION_SCORE_MODELS: Dict[Dimension, Type[SubScores]] = {
    Dimension.TECHNICAL: TechnicalDimensionScore,
    Dimension.COMMUNICATION: CommunicationDimensionScore,
    Dimension.PROCEDURAL: ProceduralDimensionScore,
    Dimension.CUSTOMER_SERVICE: CustomerServiceDimensionScore,
    Dimension.PROBLEM_SOLVING: ProblemSolvingDimensionScore,
}


class DimensionScores(BaseModel):
    """The five weighted dimension score sets."""

    model_config = ConfigDict(frozen=True)

    technical: TechnicalDimensionScore
    communication: CommunicationDimensionScore
    procedural: ProceduralDimensionScore
    customer_service: CustomerServiceDimensionScore
    problem_solving: ProblemSolvingDimensionScore

    def get(self, dimension: Dimension) -> SubScores:
        return getattr(self, dimension.value)

    def weighted_by_dimension(self) -> Dict[Dimension, float]:
        return {dim: self.get(dim).weighted for dim in Dimension}


class ScoreMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: str
    scenario_id: str
    user_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    context_factors: ContextFactors
    adjustment_factor: float = Field(..., ge=0.90, le=1.15)
    industry_alignment: AlignmentResult


class PerformanceScore(BaseModel):
    """
    Final assessment of one finished session. Immutable report.
    """

    model_config = ConfigDict(frozen=True)

    overall: Score
    dimensions: DimensionScores
    metadata: ScoreMetadata
