"""Unit conversion and display formatting using pint.

All internal data is stored in metric units:
- Area: hectares (ha)
- Carbon: tonnes CO2-equivalent (t CO2e)
- Methane emission factors: kg CH4/ha/day

Display units are controlled by settings.display_units:
- "metric": Display as stored (ha)
- "imperial": Convert area to acres

Carbon quantities are always shown in tonnes CO2e; credits are traded
in metric tonnes regardless of the farmer's preferred area unit.
"""

import pint

from carbonmrv.core.config import settings

# Create a unit registry (lazily initialized)
_ureg: pint.UnitRegistry | None = None


def get_ureg() -> pint.UnitRegistry:
    """Get the pint unit registry (lazily initialized)."""
    global _ureg
    if _ureg is None:
        _ureg = pint.UnitRegistry()
    return _ureg


# =============================================================================
# Area Conversions
# =============================================================================


def area_ha_to_display(hectares: float) -> tuple[float, str]:
    """Convert hectares to display units.

    Args:
        hectares: Area in hectares

    Returns:
        Tuple of (value, unit_symbol) in display units
    """
    ureg = get_ureg()

    if settings.display_units == "imperial":
        acres = (hectares * ureg.hectare).to(ureg.acre).magnitude
        return (acres, "ac")
    return (hectares, "ha")


def format_area(hectares: float, decimals: int = 2) -> str:
    """Format an area for display.

    Returns:
        Formatted string like "10.00 ha" or "24.71 ac"
    """
    value, unit = area_ha_to_display(hectares)
    return f"{value:.{decimals}f} {unit}"


# =============================================================================
# Carbon Formatting
# =============================================================================


def format_credits(tonnes_co2e: float, decimals: int = 2) -> str:
    """Format a carbon quantity like "39.50 t CO₂e"."""
    return f"{tonnes_co2e:.{decimals}f} t CO₂e"


def format_confidence(score: float) -> str:
    """Format a 0-1 confidence score as a percentage like "70.0%"."""
    return f"{score * 100:.1f}%"


def get_area_unit() -> str:
    """Get the area unit symbol for current display settings."""
    return "ac" if settings.display_units == "imperial" else "ha"


def is_imperial() -> bool:
    """Check if display units are imperial."""
    return settings.display_units == "imperial"
