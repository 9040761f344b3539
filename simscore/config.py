"""Application configuration with validation."""
from typing import Dict, Literal
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scoring core settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Simulated Support Performance Scoring"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Real-time session storage
    SESSION_STORE: Literal["memory", "redis"] = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_TTL_SECONDS: int = Field(default=14400, ge=60, le=604800)  # 4 hours
    SESSION_KEY_PREFIX: str = "simscore:session:"

    # Assessment defaults
    DEFAULT_EXPECTED_DURATION_MINUTES: float = Field(default=30.0, gt=0, le=480)
    RECENT_SCORES_LIMIT: int = Field(default=10, ge=1, le=500)

    # Dimension Weights
    W_TECHNICAL: float = Field(default=0.25, ge=0.0, le=1.0)
    W_COMMUNICATION: float = Field(default=0.25, ge=0.0, le=1.0)
    W_PROCEDURAL: float = Field(default=0.20, ge=0.0, le=1.0)
    W_CUSTOMER_SERVICE: float = Field(default=0.20, ge=0.0, le=1.0)
    W_PROBLEM_SOLVING: float = Field(default=0.10, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_dimension_weights(self):
        """Validate dimension weights sum to 1.0."""
        total = sum(self.dimension_weights.values())
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"Dimension weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Production sessions must survive a worker restart."""
        if self.APP_ENV == "production" and self.SESSION_STORE == "memory":
            raise ValueError("SESSION_STORE must be 'redis' in production")
        return self

    @property
    def dimension_weights(self) -> Dict[str, float]:
        """Get dimension weights keyed by Dimension value."""
        return {
            "technical": self.W_TECHNICAL,
            "communication": self.W_COMMUNICATION,
            "procedural": self.W_PROCEDURAL,
            "customer_service": self.W_CUSTOMER_SERVICE,
            "problem_solving": self.W_PROBLEM_SOLVING,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
