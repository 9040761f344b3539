"""
Weight tables for final scoring.

Sub-dimension weights are fixed. Dimension weights default to the values
below and can be overridden through Settings (W_* variables).
"""

from decimal import Decimal
from typing import Dict, Mapping

from simscore.models.enumerations import Dimension


DIMENSION_WEIGHTS: Dict[Dimension, Decimal] = {
    Dimension.TECHNICAL: Decimal("0.25"),
    Dimension.COMMUNICATION: Decimal("0.25"),
    Dimension.PROCEDURAL: Decimal("0.20"),
    Dimension.CUSTOMER_SERVICE: Decimal("0.20"),
    Dimension.PROBLEM_SOLVING: Decimal("0.10"),
}

SUB_DIMENSION_WEIGHTS: Dict[Dimension, Dict[str, Decimal]] = {
    Dimension.TECHNICAL: {
        "accuracy": Decimal("0.40"),
        "efficiency": Decimal("0.25"),
        "knowledge": Decimal("0.25"),
        "innovation": Decimal("0.10"),
    },
    Dimension.COMMUNICATION: {
        "clarity": Decimal("0.30"),
        "empathy": Decimal("0.25"),
        "responsiveness": Decimal("0.25"),
        "documentation": Decimal("0.20"),
    },
    Dimension.PROCEDURAL: {
        "compliance": Decimal("0.35"),
        "security": Decimal("0.30"),
        "escalation": Decimal("0.20"),
        "documentation": Decimal("0.15"),
    },
    Dimension.CUSTOMER_SERVICE: {
        "satisfaction": Decimal("0.35"),
        "relationship": Decimal("0.25"),
        "professionalism": Decimal("0.25"),
        "follow_up": Decimal("0.15"),
    },
    Dimension.PROBLEM_SOLVING: {
        "approach": Decimal("0.35"),
        "creativity": Decimal("0.25"),
        "thoroughness": Decimal("0.25"),
        "adaptability": Decimal("0.15"),
    },
}


def dimension_weights_from(raw: Mapping[str, float]) -> Dict[Dimension, Decimal]:
    """Build a Dimension-keyed Decimal weight table from Settings.dimension_weights."""
    return {Dimension(key): Decimal(str(value)) for key, value in raw.items()}
