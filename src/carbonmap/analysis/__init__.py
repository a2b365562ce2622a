"""Carbon credit estimation and project suggestions."""

from carbonmap.analysis.credits import (
    CARBON_TO_CO2_FACTOR,
    MARKET_PRICES,
    METHODOLOGIES,
    CreditEstimate,
    MarketTier,
    Methodology,
    classify_project,
    estimate_credits,
    recommend_methodologies,
    value_tiers,
)
from carbonmap.analysis.report import CarbonReport, build_report
from carbonmap.analysis.suggestions import SIGNIFICANT_REVENUE_USD, Suggestion, suggest

__all__ = [
    # credits
    "CARBON_TO_CO2_FACTOR",
    "MARKET_PRICES",
    "METHODOLOGIES",
    "CreditEstimate",
    "MarketTier",
    "Methodology",
    "classify_project",
    "estimate_credits",
    "recommend_methodologies",
    "value_tiers",
    # report
    "CarbonReport",
    "build_report",
    # suggestions
    "SIGNIFICANT_REVENUE_USD",
    "Suggestion",
    "suggest",
]
