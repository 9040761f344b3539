"""
scoring/ - Performance Scoring Engine

Modules:
    utils.py               - Decimal rounding, clamp, means, normal CDF
    weights.py             - Dimension and sub-dimension weight tables
    dimension_engine.py    - Per-dimension sub-score calculators
    context_adjustment.py  - Contextual adjustment factor
    progressive.py         - Progressive (in-session) scores and indicators
    presentation.py        - Breakdown and explanation text for reports
    performance_scorer.py  - Final scoring pipeline and projections
"""
