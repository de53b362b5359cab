"""Core module - configuration, units, errors and HTTP client."""

from farmghg.core import client, units
from farmghg.core.client import (
    ExternalAPIError,
    RetryableError,
    http_get_with_retry,
)
from farmghg.core.config import get_cache_dir, settings
from farmghg.core.errors import (
    FarmConfigError,
    FarmGHGError,
    InvalidManagementPeriodError,
    MissingCoefficientError,
)
from farmghg.core.units import (
    format_mass,
    format_precip,
    format_temp,
    get_mass_unit,
    is_imperial,
    kg_to_display,
    tonnes,
)

__all__ = [
    "client",
    "units",
    "settings",
    "get_cache_dir",
    "http_get_with_retry",
    "RetryableError",
    "ExternalAPIError",
    "FarmGHGError",
    "FarmConfigError",
    "MissingCoefficientError",
    "InvalidManagementPeriodError",
    # Unit conversion helpers
    "format_mass",
    "format_precip",
    "format_temp",
    "kg_to_display",
    "tonnes",
    "get_mass_unit",
    "is_imperial",
]
