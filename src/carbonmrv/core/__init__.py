"""Core module - configuration, backend client and display units."""

from carbonmrv.core import client, units
from carbonmrv.core.client import (
    BackendAPIError,
    BackendNotConfiguredError,
    RetryableError,
    delete,
    eq,
    in_,
    insert,
    rest_request,
    rest_with_retry,
    select,
    update,
)
from carbonmrv.core.config import get_output_dir, settings
from carbonmrv.core.units import (
    area_ha_to_display,
    format_area,
    format_confidence,
    format_credits,
    get_area_unit,
    is_imperial,
)

__all__ = [
    "client",
    "units",
    "settings",
    "get_output_dir",
    "rest_request",
    "rest_with_retry",
    "select",
    "insert",
    "update",
    "delete",
    "eq",
    "in_",
    "RetryableError",
    "BackendAPIError",
    "BackendNotConfiguredError",
    # Unit conversion helpers
    "area_ha_to_display",
    "format_area",
    "format_credits",
    "format_confidence",
    "get_area_unit",
    "is_imperial",
]
