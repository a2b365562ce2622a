"""Combine reducer totals with credit estimates and suggestions."""

from typing import TypedDict

from carbonmap.analysis.credits import CreditEstimate, estimate_credits
from carbonmap.analysis.suggestions import Suggestion, suggest


class CarbonReport(TypedDict):
    """Response body for a carbon calculation."""

    aboveground_tonnes: float
    belowground_tonnes: float
    total_tonnes: float
    credits: CreditEstimate | None
    suggestions: list[Suggestion]


def build_report(totals: dict) -> CarbonReport:
    """
    Attach credit estimates and suggestions to reducer totals.

    Args:
        totals: Dict with aboveground_tonnes, belowground_tonnes, total_tonnes

    Returns:
        CarbonReport; credits is None and suggestions empty when the
        total cannot be estimated (e.g. zero carbon)
    """
    credits = estimate_credits(totals.get("total_tonnes"))
    return CarbonReport(
        aboveground_tonnes=totals.get("aboveground_tonnes", 0.0),
        belowground_tonnes=totals.get("belowground_tonnes", 0.0),
        total_tonnes=totals.get("total_tonnes", 0.0),
        credits=credits,
        suggestions=suggest(credits) if credits else [],
    )
