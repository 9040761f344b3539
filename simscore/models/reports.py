"""
Read-only projections of stored performance scores for reporting dashboards.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from simscore.models.benchmark import IndustryContext, PercentileRanking
from simscore.models.enumerations import Dimension
from simscore.models.scores import PerformanceScore


class OverallBreakdown(BaseModel):
    score: float
    rating: str
    description: str
    factors: List[str] = Field(default_factory=list)


class ComponentBreakdown(BaseModel):
    name: str
    score: int
    weight: float
    description: str


class DimensionBreakdown(BaseModel):
    dimension: Dimension
    name: str
    score: int
    rating: str
    components: List[ComponentBreakdown]
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)


class ContextualFactorsBreakdown(BaseModel):
    scenario_difficulty: float
    adjustment_applied: float = Field(..., description="Applied adjustment in percentage points")
    explanation: str


class ScoreBreakdown(BaseModel):
    overall: OverallBreakdown
    dimensions: List[DimensionBreakdown]
    contextual_factors: ContextualFactorsBreakdown


class MethodologyExplanation(BaseModel):
    overview: str
    dimension_weights: Dict[str, int]
    calculation_steps: List[str]


class DimensionExplanation(BaseModel):
    purpose: str
    measurement: str
    importance: str
    improvement_tips: List[str]


class IndustryContextExplanation(BaseModel):
    benchmark_comparison: str
    professional_relevance: str
    career_implications: str


class ScoreExplanation(BaseModel):
    methodology: MethodologyExplanation
    dimension_explanations: Dict[Dimension, DimensionExplanation]
    industry_context: IndustryContextExplanation


class ScoreBreakdownReport(BaseModel):
    score: PerformanceScore
    breakdown: ScoreBreakdown
    recommendations: List[str] = Field(default_factory=list)
    industry_context: IndustryContext
    explanations: ScoreExplanation
    generated_at: datetime


class AveragePerformance(BaseModel):
    overall: int = Field(..., ge=0, le=100)
    dimensions: Dict[Dimension, int]
    sample_count: int = Field(..., ge=1)


class BenchmarkReport(BaseModel):
    user_id: str
    since: Optional[datetime] = None
    average_performance: AveragePerformance
    industry_rankings: PercentileRanking
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    generated_at: datetime
