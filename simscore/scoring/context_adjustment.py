# simscore/scoring/context_adjustment.py
"""
Contextual Adjustment Calculator
---------------------------------
Derives a single multiplicative factor from the session's context factors and
applies it to every dimension's weighted score.

Formula:
    raw = 1.0
          + 0.05  if difficulty > 80
          − 0.03  if difficulty < 40
          + 0.03  if time_constraints > 80
          + 0.04  if customer_complexity > 75
          + 0.05  if technical_complexity > 85
          + 0.02  if resource_availability < 50
    factor = clamp(raw, 0.90, 1.15)
    adjusted = clamp(round_half_up(weighted × factor), 0, 100)

The thresholds are fixed constants; they are not derived from benchmark data.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from simscore.models.context import ContextFactors
from simscore.scoring.utils import clamp, round_half_up

logger = logging.getLogger(__name__)

MIN_FACTOR = Decimal("0.90")
MAX_FACTOR = Decimal("1.15")


@dataclass
class AdjustmentResult:
    """Output of ContextAdjustmentCalculator.calculate()."""
    factor: Decimal          # clamped to [0.90, 1.15]
    raw_factor: Decimal      # before clamping
    reasons: List[str] = field(default_factory=list)

    @property
    def clamped(self) -> bool:
        return self.factor != self.raw_factor


class ContextAdjustmentCalculator:
    """Calculate and apply the contextual adjustment factor."""

    def calculate(self, factors: ContextFactors) -> AdjustmentResult:
        raw = Decimal("1.0")
        reasons: List[str] = []

        if factors.difficulty > 80:
            raw += Decimal("0.05")
            reasons.append("high scenario difficulty")
        if factors.difficulty < 40:
            raw -= Decimal("0.03")
            reasons.append("low scenario difficulty")
        if factors.time_constraints > 80:
            raw += Decimal("0.03")
            reasons.append("time pressure")
        if factors.customer_complexity > 75:
            raw += Decimal("0.04")
            reasons.append("challenging customer interactions")
        if factors.technical_complexity > 85:
            raw += Decimal("0.05")
            reasons.append("complex technical requirements")
        if factors.resource_availability < 50:
            raw += Decimal("0.02")
            reasons.append("limited resources")

        factor = clamp(raw, MIN_FACTOR, MAX_FACTOR)

        logger.info(
            "context_adjustment_calculated",
            extra={
                "raw_factor": float(raw),
                "factor": float(factor),
                "reasons": reasons,
            },
        )
        return AdjustmentResult(factor=factor, raw_factor=raw, reasons=reasons)

    @staticmethod
    def apply(weighted: int, factor: Decimal) -> int:
        """Scale one weighted dimension score by the factor, rounded and clamped."""
        return clamp(round_half_up(Decimal(str(weighted)) * factor), 0, 100)
