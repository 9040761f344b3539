from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from simscore.models.enumerations import ScenarioComplexity
from simscore.models.events import ActionEvent, InteractionEvent


DEFAULT_REQUIRED_STEPS = ["initial_assessment", "diagnosis", "solution", "verification"]


class ScenarioData(BaseModel):
    """
    Static scenario metadata supplied by the scenario repository.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    category: str = Field(
        default="general",
        min_length=1,
        description="Benchmark category (e.g. general, technical_support)"
    )

    difficulty: Optional[float] = Field(default=None, ge=0, le=100)

    estimated_time: Optional[float] = Field(
        default=None,
        gt=0,
        description="Expected resolution time in minutes"
    )

    complexity: Optional[ScenarioComplexity] = None

    required_steps: List[str] = Field(
        default_factory=lambda: list(DEFAULT_REQUIRED_STEPS),
        description="Action types a compliant resolution must contain"
    )

    requires_identity_verification: bool = False


class DocumentationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    completeness: Optional[float] = Field(default=None, ge=0, le=100)
    clarity: Optional[float] = Field(default=None, ge=0, le=100)


class ProceduralDocumentation(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps_documented: Optional[float] = Field(default=None, ge=0, le=100)
    reasoning_documented: Optional[float] = Field(default=None, ge=0, le=100)


class ResolutionData(BaseModel):
    """
    Outcome of the session, supplied by the orchestrator at session end.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    resolved: bool = Field(..., description="Whether the ticket was resolved")

    customer_satisfaction: Optional[float] = Field(default=None, ge=0, le=100)

    time_to_resolution: Optional[float] = Field(
        default=None,
        ge=0,
        description="Minutes from first contact to resolution"
    )

    follow_up_required: bool = False
    follow_up_provided: bool = False
    follow_up_quality: Optional[float] = Field(default=None, ge=0, le=100)

    escalated: bool = False
    should_have_escalated: bool = False

    documentation: Optional[DocumentationRecord] = None
    procedural_documentation: Optional[ProceduralDocumentation] = None
    steps: List[str] = Field(default_factory=list)

    solution_complexity: Optional[ScenarioComplexity] = None
    communication_innovation: Optional[float] = Field(default=None, ge=0, le=100)
    process_improvements: List[str] = Field(default_factory=list)
    innovative: bool = False
    completeness: Optional[float] = Field(default=None, ge=0, le=100)
    approach_flexibility: Optional[float] = Field(default=None, ge=0, le=100)


class ContextFactors(BaseModel):
    """
    Situational factors used for contextual adjustment (each 0-100).
    """

    model_config = ConfigDict(frozen=True)

    difficulty: float = Field(default=50, ge=0, le=100)
    time_constraints: float = Field(default=50, ge=0, le=100)
    resource_availability: float = Field(default=100, ge=0, le=100)
    customer_complexity: float = Field(default=50, ge=0, le=100)
    technical_complexity: float = Field(default=50, ge=0, le=100)


class ScoringContext(BaseModel):
    """
    Everything the final scorer needs for one finished session.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(..., min_length=1)
    scenario_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    scenario_data: ScenarioData
    actions: List[ActionEvent] = Field(default_factory=list)
    interactions: List[InteractionEvent] = Field(default_factory=list)
    resolution_data: ResolutionData
    context_factors: ContextFactors = Field(default_factory=ContextFactors)
