"""
Real-time assessment models.

``AssessmentSession`` is the only mutable model in the package. It is owned by
the tracker and serialized whole into the session store after every event.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from simscore.models.context import ScenarioData
from simscore.models.enumerations import (
    Dimension,
    FeedbackPriority,
    FeedbackType,
    IndicatorType,
    Trend,
)
from simscore.models.events import ActionEvent, InteractionEvent


class ProgressiveScore(BaseModel):
    """Score computed from a partial event log."""

    model_config = ConfigDict(frozen=True)

    overall: int = Field(..., ge=0, le=100)
    dimensions: Dict[Dimension, int]
    confidence: int = Field(..., ge=0, le=100)
    completeness: int = Field(..., ge=0, le=100)


class PerformanceIndicator(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: IndicatorType
    category: str
    message: str
    score: float = Field(..., ge=0, le=100)
    timestamp: datetime
    actionable: bool = False
    recommendation: Optional[str] = None


class LiveFeedbackEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: FeedbackType
    message: str
    category: str
    priority: FeedbackPriority
    display_duration: int = Field(..., gt=0, description="Milliseconds")
    action_required: bool = False


class AssessmentUpdate(BaseModel):
    """Returned to the live UI layer on every event."""

    score: ProgressiveScore
    indicators: List[PerformanceIndicator] = Field(default_factory=list)
    feedback: List[LiveFeedbackEvent] = Field(default_factory=list)


class ScoreSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    score: ProgressiveScore


class KeyMoment(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    type: str
    description: str
    impact: str = Field(..., pattern="^(positive|negative)$")


class AssessmentSession(BaseModel):
    """State of one in-progress assessment."""

    session_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    scenario_id: str = Field(..., min_length=1)
    scenario: ScenarioData = Field(default_factory=ScenarioData)
    expected_duration: float = Field(..., gt=0, description="Minutes")
    start_time: datetime
    current_time: datetime
    actions: List[ActionEvent] = Field(default_factory=list)
    interactions: List[InteractionEvent] = Field(default_factory=list)
    last_completeness: int = Field(default=0, ge=0, le=100)
    first_snapshot: Optional[ScoreSnapshot] = Field(default=None, description="Score after the first event")
    key_moments: List[KeyMoment] = Field(default_factory=list)

    @property
    def elapsed_minutes(self) -> float:
        return max(0.0, (self.current_time - self.start_time).total_seconds() / 60)


class AssessmentSummary(BaseModel):
    session_id: str
    duration: float = Field(..., ge=0, description="Minutes")
    total_actions: int = Field(..., ge=0)
    total_interactions: int = Field(..., ge=0)
    final_score: ProgressiveScore
    performance_trends: Dict[Dimension, Trend]
    key_moments: List[KeyMoment] = Field(default_factory=list)
    recommendations_for_improvement: List[str] = Field(default_factory=list)


class AssessmentResult(BaseModel):
    final_score: ProgressiveScore
    summary: AssessmentSummary
