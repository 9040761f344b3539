from enum import Enum


class Dimension(str, Enum):
    TECHNICAL = "technical"
    COMMUNICATION = "communication"
    PROCEDURAL = "procedural"
    CUSTOMER_SERVICE = "customer_service"
    PROBLEM_SOLVING = "problem_solving"


class ScenarioComplexity(str, Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class IndicatorType(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    CONCERN = "concern"
    CRITICAL = "critical"


class FeedbackType(str, Enum):
    IMMEDIATE = "immediate"
    MILESTONE = "milestone"
    WARNING = "warning"
    ACHIEVEMENT = "achievement"


class FeedbackPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AlignmentStatus(str, Enum):
    EXCEEDS = "exceeds"      # ratio >= 1.2
    MEETS = "meets"          # ratio >= 1.0
    APPROACHING = "approaching"  # ratio >= 0.8
    BELOW = "below"


class IndustryReadiness(str, Enum):
    DEVELOPING = "developing"
    READY = "ready"
    ADVANCED = "advanced"


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
