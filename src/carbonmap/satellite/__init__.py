"""Satellite modules - Google Earth Engine biomass carbon reduction."""

from carbonmap.satellite.gee import (
    CarbonTotals,
    EarthEngineConfigError,
    EarthEngineError,
    GeometryError,
    RetryableEarthEngineError,
    calculate_carbon,
    ensure_initialized,
    initialize,
    to_ee_geometry,
)

__all__ = [
    "initialize",
    "ensure_initialized",
    "calculate_carbon",
    "to_ee_geometry",
    "CarbonTotals",
    "EarthEngineConfigError",
    "EarthEngineError",
    "RetryableEarthEngineError",
    "GeometryError",
]
