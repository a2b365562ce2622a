"""Core module - configuration and unit helpers."""

from carbonmap.core import units
from carbonmap.core.config import configure_logging, get_project_root, settings
from carbonmap.core.units import (
    density_sum_to_tonnes,
    format_number,
    format_tonnes,
    format_usd,
    pixel_area_ha,
)

__all__ = [
    "units",
    "settings",
    "configure_logging",
    "get_project_root",
    # Unit conversion helpers
    "pixel_area_ha",
    "density_sum_to_tonnes",
    "format_number",
    "format_tonnes",
    "format_usd",
]
