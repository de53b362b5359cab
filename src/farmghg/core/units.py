"""Unit conversion utilities using pint.

All internal data is stored in metric (SI) units:
- Temperature: Celsius (°C)
- Precipitation/evapotranspiration: millimeters (mm)
- Mass: kilograms (kg), reported per gas (CH4, N2O, NH3) or per element (N, C)
- Energy: kilowatt hours (kWh)

Display units are controlled by settings.display_units:
- "metric": Display as stored (kg, °C, mm)
- "imperial": Convert to lb, °F, inches

Note: Temperature conversions use simple formulas rather than pint's
offset unit handling, which has ambiguity issues with multiplication.
"""

import pint

from farmghg.core.config import settings

# Create a unit registry (lazily initialized)
_ureg: pint.UnitRegistry | None = None


def get_ureg() -> pint.UnitRegistry:
    """Get the pint unit registry (lazily initialized)."""
    global _ureg
    if _ureg is None:
        _ureg = pint.UnitRegistry()
    return _ureg


# =============================================================================
# Mass Conversions
# =============================================================================


def kg_to_display(kg: float) -> tuple[float, str]:
    """Convert kilograms to display units.

    Args:
        kg: Mass in kilograms

    Returns:
        Tuple of (value, unit_symbol) in display units
    """
    ureg = get_ureg()

    if settings.display_units == "imperial":
        pounds = (kg * ureg.kilogram).to(ureg.pound).magnitude
        return (pounds, "lb")
    return (kg, "kg")


def format_mass(kg: float, decimals: int = 1, label: str = "") -> str:
    """Format a mass for display.

    Args:
        kg: Mass in kilograms
        decimals: Number of decimal places
        label: Optional species suffix (e.g. "CH4", "N2O-N")

    Returns:
        Formatted string like "12.5 kg CH4" or "27.6 lb CH4"
    """
    value, unit = kg_to_display(kg)
    text = f"{value:,.{decimals}f} {unit}"
    return f"{text} {label}" if label else text


def tonnes(kg: float) -> float:
    """Convert kilograms to metric tonnes."""
    ureg = get_ureg()
    return (kg * ureg.kilogram).to(ureg.metric_ton).magnitude


# =============================================================================
# Temperature Conversions
# =============================================================================


def celsius_to_fahrenheit(temp_c: float) -> float:
    """Convert Celsius to Fahrenheit."""
    return temp_c * 9 / 5 + 32


def format_temp(temp_c: float, decimals: int = 1) -> str:
    """Format temperature for display, e.g. "48.2°F" or "9.0°C"."""
    if settings.display_units == "imperial":
        return f"{celsius_to_fahrenheit(temp_c):.{decimals}f}°F"
    return f"{temp_c:.{decimals}f}°C"


# =============================================================================
# Precipitation/Length Conversions
# =============================================================================


def precip_mm_to_display(mm: float) -> tuple[float, str]:
    """Convert millimeters to display units.

    Args:
        mm: Precipitation in millimeters

    Returns:
        Tuple of (value, unit_symbol) in display units
    """
    ureg = get_ureg()

    if settings.display_units == "imperial":
        inches = (mm * ureg.mm).to(ureg.inch).magnitude
        return (inches, '"')
    return (mm, "mm")


def format_precip(mm: float, decimals: int | None = None) -> str:
    """Format precipitation or evapotranspiration for display.

    Args:
        mm: Depth in millimeters
        decimals: Number of decimal places (default: 2 for inches, 0 for mm)

    Returns:
        Formatted string like '15.72"' or "399mm"
    """
    value, unit = precip_mm_to_display(mm)

    if decimals is None:
        decimals = 2 if settings.display_units == "imperial" else 0

    return f"{value:.{decimals}f}{unit}"


def get_mass_unit() -> str:
    """Get the mass unit symbol for current display settings."""
    return "lb" if settings.display_units == "imperial" else "kg"


def is_imperial() -> bool:
    """Check if display units are imperial."""
    return settings.display_units == "imperial"
