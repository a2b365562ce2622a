"""Unit conversion utilities using pint.

All internal values are stored in metric units:
- Mass: tonnes (t), which equals megagrams (Mg)
- Area: hectares (ha)
- Length: meters (m)
- Money: US dollars, as plain floats

Numbers leave the core modules raw. The format_* helpers here are only
for human-readable text (suggestion descriptions, CLI output).
"""

import pint

# Create a unit registry (lazily initialized)
_ureg: pint.UnitRegistry | None = None


def get_ureg() -> pint.UnitRegistry:
    """Get the pint unit registry (lazily initialized)."""
    global _ureg
    if _ureg is None:
        _ureg = pint.UnitRegistry()
    return _ureg


# =============================================================================
# Area / Mass Conversions
# =============================================================================


def pixel_area_ha(scale_m: float) -> float:
    """Area of a square raster pixel in hectares.

    Args:
        scale_m: Pixel edge length in meters

    Returns:
        Pixel area in hectares (300 m -> 9 ha)
    """
    ureg = get_ureg()
    return ((scale_m * ureg.meter) ** 2).to(ureg.hectare).magnitude


def density_sum_to_tonnes(density_sum: float, scale_m: float) -> float:
    """Convert a summed per-pixel density (Mg/ha) into total tonnes.

    A sum reducer over a density raster yields the sum of per-pixel
    densities; multiplying by the pixel area gives the mass.

    Args:
        density_sum: Sum of pixel values in Mg/ha
        scale_m: Pixel edge length in meters used for the reduction

    Returns:
        Total mass in tonnes
    """
    ureg = get_ureg()
    density = density_sum * ureg.megagram / ureg.hectare
    area = (scale_m * ureg.meter) ** 2
    return (density * area).to(ureg.tonne).magnitude


# =============================================================================
# Display Formatting
# =============================================================================


def format_number(value: float, decimals: int = 0) -> str:
    """Format a number with thousands separators.

    Args:
        value: Number to format
        decimals: Number of decimal places

    Returns:
        Formatted string like "183,500"
    """
    return f"{value:,.{decimals}f}"


def format_tonnes(tonnes: float, decimals: int = 0) -> str:
    """Format a mass in tonnes, e.g. "3,670"."""
    return format_number(tonnes, decimals)


def format_usd(amount: float, decimals: int = 0) -> str:
    """Format a dollar amount, e.g. "$2,752,500"."""
    return f"${format_number(amount, decimals)}"
