from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from simscore.models.enumerations import AlignmentStatus, Dimension, IndustryReadiness


class IndustryStats(BaseModel):
    """Reference distribution of overall scores for one category."""

    model_config = ConfigDict(frozen=True)

    average: float = Field(..., gt=0, le=100)
    top_percentile: float = Field(..., gt=0, le=100)
    standard_deviation: float = Field(..., gt=0)
    sample_size: int = Field(..., ge=1)


class DimensionBenchmark(BaseModel):
    model_config = ConfigDict(frozen=True)

    average: float = Field(..., gt=0, le=100)
    top_percentile: float = Field(..., gt=0, le=100)


class BenchmarkProfile(BaseModel):
    """
    Reference data for one scenario category. Read-only once seeded.
    """

    model_config = ConfigDict(frozen=True)

    category: str = Field(..., min_length=1)
    industry: IndustryStats
    dimensions: Dict[Dimension, DimensionBenchmark]
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the reference data was last refreshed"
    )


class AlignmentDetail(BaseModel):
    """Alignment of one score (a dimension or the overall) with its benchmark."""

    model_config = ConfigDict(frozen=True)

    score: float
    industry_average: float
    alignment_ratio: float = Field(..., ge=0, description="score / industry average")
    alignment_score: float = Field(..., ge=0, le=100, description="min(100, ratio x 100)")
    status: AlignmentStatus


class AlignmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    overall: AlignmentDetail
    dimensions: Dict[Dimension, AlignmentDetail]
    meets_professional_standards: bool
    industry_readiness: IndustryReadiness
    recommendations: List[str] = Field(default_factory=list)


class PercentileRanking(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall: int = Field(..., ge=1, le=99)
    dimensions: Dict[Dimension, int]


class RoleStandard(BaseModel):
    minimum: float
    competitive: float
    preferred: float


class MarketContext(BaseModel):
    demand_trends: str
    salary_impact: str
    career_progression: str


class CertificationAlignment(BaseModel):
    ready: bool
    recommended_certifications: List[str] = Field(default_factory=list)


class IndustryContext(BaseModel):
    """Role-level standards and career context for a finished score."""

    industry_standards: Dict[str, RoleStandard]
    market_context: MarketContext
    certification_alignment: CertificationAlignment
    benchmark_category: Optional[str] = None
