"""Biomass carbon and carbon credit estimation tools.

This package sums biomass carbon over a drawn region with Google Earth
Engine and converts the total into illustrative carbon credit estimates.

Subpackages:
- carbonmap.core: Configuration and unit helpers
- carbonmap.analysis: Credit estimation and project suggestions
- carbonmap.satellite: Google Earth Engine biomass reduction
- carbonmap.server: FastAPI HTTP service
- carbonmap.cli: Command-line tools
"""

__version__ = "0.1.0"

# Re-export common items for convenience
from carbonmap.analysis import (  # noqa: E402
    build_report,
    estimate_credits,
    suggest,
)
from carbonmap.core import settings  # noqa: E402

__all__ = [
    "settings",
    "estimate_credits",
    "suggest",
    "build_report",
]
