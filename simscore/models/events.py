"""
Event models produced by the session orchestrator.

Every optional signal is declared explicitly. ``None`` means the signal was
not observed, and the scoring rules treat it as absent rather than as zero.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


Signal = Optional[float]


class ActionEvent(BaseModel):
    """A trainee action (research, diagnosis, solution, escalation, ...)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(..., min_length=1, description="Action type, e.g. 'research'")
    timestamp: Optional[datetime] = Field(
        default=None,
        description="Server-assigned time the action was recorded",
    )

    quality: Signal = Field(default=None, ge=0, le=100)
    appropriateness: Signal = Field(default=None, ge=0, le=100)
    creativity: Signal = Field(default=None, ge=0, le=100)
    effectiveness: Signal = Field(default=None, ge=0, le=100)
    justification_quality: Signal = Field(default=None, ge=0, le=100)
    clarity: Signal = Field(default=None, ge=0, le=100)
    empathy: Signal = Field(default=None, ge=0, le=100)
    expertise_level: Optional[int] = Field(
        default=None, ge=1, le=5, description="Self-declared expertise tier (1-5)"
    )
    response_time: Optional[float] = Field(
        default=None, ge=0, description="Seconds taken to respond"
    )

    security_risk: Optional[bool] = None
    security_compliance: Optional[bool] = None
    proactive_security: Optional[bool] = None
    appropriate: Optional[bool] = None
    root_cause_analysis: Optional[bool] = None
    alternative: Optional[bool] = None
    strategy_change: Optional[bool] = None
    adaptive_response: Optional[bool] = None
    procedural_violation: Optional[bool] = None


class InteractionEvent(BaseModel):
    """A customer-facing turn."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(..., min_length=1, description="Interaction type, e.g. 'inquiry'")
    timestamp: Optional[datetime] = None

    clarity: Signal = Field(default=None, ge=0, le=100)
    empathy: Signal = Field(default=None, ge=0, le=100)
    satisfaction: Signal = Field(default=None, ge=0, le=100)
    emotional_intelligence: Signal = Field(default=None, ge=0, le=100)
    rapport: Signal = Field(default=None, ge=0, le=100)
    trust_building: Signal = Field(default=None, ge=0, le=100)
    professionalism: Signal = Field(default=None, ge=0, le=100)
    language_quality: Signal = Field(default=None, ge=0, le=100)
    response_time: Optional[float] = Field(
        default=None, ge=0, description="Seconds taken to respond"
    )

    proactive: Optional[bool] = None
    personal_connection: Optional[bool] = None
    unprofessional: Optional[bool] = None
