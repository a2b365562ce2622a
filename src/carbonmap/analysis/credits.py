"""
Carbon Credit Estimation from Stored Biomass Carbon.

Converts a stored-carbon total (tonnes C) into CO2-equivalent tonnes,
illustrative market values across three price tiers, a project size
classification, and certification methodology recommendations.

Everything here is pure: no I/O, no shared mutable state. The price and
methodology tables are read-only module constants, and every estimate is
built from fresh dicts so callers can mutate what they get back.

Market prices are 2024 ballpark figures (USD per tonne CO2e). Actual
prices vary with project type, vintage, co-benefits, and registry.
"""

import math
import numbers
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Literal, TypedDict

# 1 tonne of carbon = 3.67 tonnes of CO2 equivalent (44/12, rounded).
# The rounded value is the market convention and is used exactly.
CARBON_TO_CO2_FACTOR = 3.67

# Project size thresholds (tonnes CO2e), lower bound inclusive
LARGE_PROJECT_MIN_CO2 = 100_000
MEDIUM_PROJECT_MIN_CO2 = 10_000

MARKET_INFO_NOTE = (
    "Prices are estimates and vary significantly based on project quality, "
    "location, co-benefits, and market conditions."
)
MARKET_INFO_LAST_UPDATED = "2024"

ProjectSize = Literal["small", "medium", "large"]
Complexity = Literal["low", "medium", "high"]
Suitability = Literal["low", "medium", "high"]


# =============================================================================
# Static Tables
# =============================================================================


@dataclass(frozen=True)
class MarketTier:
    """Unit price band for one carbon market context (USD / t CO2e)."""

    min: float
    avg: float
    max: float
    description: str

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Methodology:
    """A certification standard for turning stored carbon into credits."""

    name: str
    organization: str
    suitability: Suitability
    description: str
    requirements: tuple[str, ...]
    timeline: str
    cost_estimate: str
    website: str

    def as_dict(self) -> dict:
        data = asdict(self)
        data["requirements"] = list(self.requirements)
        return data


MARKET_PRICES: MappingProxyType[str, MarketTier] = MappingProxyType(
    {
        "voluntary": MarketTier(
            min=5,
            avg=15,
            max=50,
            description="Voluntary carbon market (VCM) - varies by project type and quality",
        ),
        "compliance": MarketTier(
            min=20,
            avg=40,
            max=100,
            description="Compliance markets (e.g., California Cap-and-Trade, EU ETS)",
        ),
        "high_quality": MarketTier(
            min=25,
            avg=35,
            max=80,
            description="High-quality credits (VCS, Gold Standard certified)",
        ),
    }
)

# Catalogue order matters: recommendations take the first matches.
METHODOLOGIES: tuple[Methodology, ...] = (
    Methodology(
        name="VCS (Verified Carbon Standard)",
        organization="Verra",
        suitability="high",
        description="Most widely used voluntary carbon standard. Good for forest carbon projects.",
        requirements=(
            "Project documentation and monitoring plan",
            "Third-party verification",
            "Additionality demonstration",
            "Permanence safeguards (buffer pool)",
        ),
        timeline="12-24 months",
        cost_estimate="$50,000 - $200,000+",
        website="https://verra.org",
    ),
    Methodology(
        name="Gold Standard",
        organization="Gold Standard Foundation",
        suitability="high",
        description="Premium standard with strong social and environmental co-benefits.",
        requirements=(
            "VCS requirements plus",
            "Social impact assessment",
            "Stakeholder engagement",
            "Sustainable Development Goals alignment",
        ),
        timeline="18-30 months",
        cost_estimate="$75,000 - $250,000+",
        website="https://www.goldstandard.org",
    ),
    Methodology(
        name="CAR (Climate Action Reserve)",
        organization="Climate Action Reserve",
        suitability="medium",
        description="US-focused standard, good for North American projects.",
        requirements=(
            "Project protocol compliance",
            "Third-party verification",
            "Registry account setup",
        ),
        timeline="12-18 months",
        cost_estimate="$40,000 - $150,000+",
        website="https://www.climateactionreserve.org",
    ),
    Methodology(
        name="ACR (American Carbon Registry)",
        organization="Winrock International",
        suitability="medium",
        description="US-based registry with forest carbon protocols.",
        requirements=(
            "Protocol-specific requirements",
            "Verification by approved verifiers",
            "Registry documentation",
        ),
        timeline="12-24 months",
        cost_estimate="$45,000 - $180,000+",
        website="https://americancarbonregistry.org",
    ),
)

MAX_RECOMMENDED_METHODOLOGIES = 2


# =============================================================================
# Result Types
# =============================================================================


class TierEstimate(TypedDict):
    """Market value range for one tier."""

    min: float
    avg: float
    max: float
    credits: float
    price_per_credit: dict


class MarketInfo(TypedDict):
    note: str
    last_updated: str


class CreditEstimate(TypedDict):
    """Carbon credit estimate for a stored-carbon total."""

    carbon_tonnes: float
    co2_equivalent_tonnes: float
    credit_estimates: dict[str, TierEstimate]
    project_size: ProjectSize
    project_complexity: Complexity
    recommended_methodologies: list[dict]
    all_methodologies: list[dict]
    conversion_factor: float
    market_info: MarketInfo


# =============================================================================
# Estimation
# =============================================================================


def _is_estimable(value: object) -> bool:
    """True for finite, positive real numbers (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value) and value > 0


def classify_project(co2_tonnes: float) -> tuple[ProjectSize, Complexity]:
    """
    Classify project size and complexity from CO2-equivalent tonnes.

    Intervals are closed on the lower bound:
        [100000, inf) -> large / high
        [10000, 100000) -> medium / medium
        [0, 10000) -> small / low
    """
    if co2_tonnes >= LARGE_PROJECT_MIN_CO2:
        return "large", "high"
    if co2_tonnes >= MEDIUM_PROJECT_MIN_CO2:
        return "medium", "medium"
    return "small", "low"


def value_tiers(co2_tonnes: float) -> dict[str, TierEstimate]:
    """Price a CO2-equivalent quantity against every market tier."""
    return {
        name: TierEstimate(
            min=co2_tonnes * tier.min,
            avg=co2_tonnes * tier.avg,
            max=co2_tonnes * tier.max,
            credits=co2_tonnes,
            price_per_credit=tier.as_dict(),
        )
        for name, tier in MARKET_PRICES.items()
    }


def recommend_methodologies(project_size: ProjectSize) -> list[Methodology]:
    """
    Pick up to two methodologies for a project.

    Large projects may use any methodology; otherwise only those whose
    suitability is not "low". No catalogue entry is currently rated low,
    so this yields the first two entries for every size.
    """
    eligible = [m for m in METHODOLOGIES if project_size == "large" or m.suitability != "low"]
    return eligible[:MAX_RECOMMENDED_METHODOLOGIES]


def estimate_credits(total_carbon_tonnes: float | None) -> CreditEstimate | None:
    """
    Estimate carbon credits for a stored-carbon total.

    Args:
        total_carbon_tonnes: Stored carbon in tonnes C (above + below ground)

    Returns:
        CreditEstimate, or None when no estimate is possible (missing,
        non-numeric, non-finite, zero, or negative input, or values
        too large to price). Never raises.
    """
    if not _is_estimable(total_carbon_tonnes):
        return None

    carbon_tonnes = float(total_carbon_tonnes)
    co2_equivalent = carbon_tonnes * CARBON_TO_CO2_FACTOR
    tiers = value_tiers(co2_equivalent)

    # Huge finite inputs can overflow once scaled
    if not math.isfinite(co2_equivalent) or not all(
        math.isfinite(tier[bound]) for tier in tiers.values() for bound in ("min", "avg", "max")
    ):
        return None

    project_size, project_complexity = classify_project(co2_equivalent)
    recommended = recommend_methodologies(project_size)

    return CreditEstimate(
        carbon_tonnes=carbon_tonnes,
        co2_equivalent_tonnes=co2_equivalent,
        credit_estimates=tiers,
        project_size=project_size,
        project_complexity=project_complexity,
        recommended_methodologies=[m.as_dict() for m in recommended],
        all_methodologies=[m.as_dict() for m in METHODOLOGIES],
        conversion_factor=CARBON_TO_CO2_FACTOR,
        market_info=MarketInfo(note=MARKET_INFO_NOTE, last_updated=MARKET_INFO_LAST_UPDATED),
    )
