"""Project development suggestions derived from a credit estimate."""

from typing import Literal, TypedDict

from carbonmap.analysis.credits import CreditEstimate
from carbonmap.core.units import format_tonnes, format_usd

# Voluntary-market average value (USD) above which revenue is called out
SIGNIFICANT_REVENUE_USD = 100_000

Priority = Literal["high", "medium", "low"]


class Suggestion(TypedDict):
    """A single recommendation for the project owner."""

    type: str
    priority: Priority
    title: str
    description: str
    action: str


def _scale_suggestion(co2_tonnes: float) -> Suggestion:
    return Suggestion(
        type="scale",
        priority="high",
        title="Large-scale project potential",
        description=(
            f"With {format_tonnes(co2_tonnes)} tonnes CO2e, this project has significant credit "
            "generation potential. Consider engaging a carbon project developer."
        ),
        action="Contact carbon project developers or consultants",
    )


def _financial_suggestion(voluntary_avg: float, high_quality_avg: float) -> Suggestion:
    return Suggestion(
        type="financial",
        priority="medium",
        title="Significant revenue potential",
        description=(
            f"Estimated value: {format_usd(voluntary_avg)} - {format_usd(high_quality_avg)} USD "
            "(voluntary to high-quality markets)."
        ),
        action="Consider upfront investment in certification",
    )


METHODOLOGY_SUGGESTION = Suggestion(
    type="methodology",
    priority="high",
    title="Choose a certification standard",
    description=(
        "Select a recognized carbon standard (VCS, Gold Standard, etc.) based on your project goals and budget."
    ),
    action="Review recommended methodologies and select one",
)

NEXT_STEPS_SUGGESTION = Suggestion(
    type="next_steps",
    priority="medium",
    title="Project development roadmap",
    description=(
        "Typical steps: 1) Feasibility study, 2) Methodology selection, 3) Project documentation, "
        "4) Verification, 5) Registration and issuance."
    ),
    action="Develop a project timeline and budget",
)

RISK_SUGGESTION = Suggestion(
    type="risk",
    priority="medium",
    title="Permanence and risk management",
    description=(
        "Carbon credits require long-term commitment. Consider buffer pools, insurance, and monitoring systems."
    ),
    action="Develop risk management strategy",
)


def suggest(estimate: CreditEstimate) -> list[Suggestion]:
    """
    Build prioritized suggestions for a credit estimate.

    Order is fixed: scale (large projects only), methodology, next steps,
    financial (voluntary average above SIGNIFICANT_REVENUE_USD only), risk.

    Args:
        estimate: Result of estimate_credits()

    Returns:
        Three to five suggestions
    """
    tiers = estimate["credit_estimates"]
    suggestions: list[Suggestion] = []

    if estimate["project_size"] == "large":
        suggestions.append(_scale_suggestion(estimate["co2_equivalent_tonnes"]))

    suggestions.append(Suggestion(**METHODOLOGY_SUGGESTION))
    suggestions.append(Suggestion(**NEXT_STEPS_SUGGESTION))

    if tiers["voluntary"]["avg"] > SIGNIFICANT_REVENUE_USD:
        suggestions.append(_financial_suggestion(tiers["voluntary"]["avg"], tiers["high_quality"]["avg"]))

    suggestions.append(Suggestion(**RISK_SUGGESTION))

    return suggestions
