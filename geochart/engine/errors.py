"""Error taxonomy for the GeoChart engine."""
from __future__ import annotations

from typing import Any, Optional


class GeoChartError(Exception):
    """Base class for engine errors."""


class InvalidColorFormat(GeoChartError, ValueError):
    """Raised when a color value matches none of the supported forms."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid color: {value!r}")


class IncompatibleDataset(GeoChartError, ValueError):
    """Raised when a dataset does not have the one- or two-column shape."""


class RegionNotFound(GeoChartError, LookupError):
    """A dataset row references a region the region source does not know.

    Recorded (not raised) while binding; raised by programmatic selection.
    """

    def __init__(self, region_id: Any, row: Optional[int] = None):
        self.region_id = region_id
        self.row = row
        if region_id is None:
            message = f"No region bound to row {row}"
        elif row is None:
            message = f"Region {region_id!r} not found"
        else:
            message = f"Region {region_id!r} not found (row {row})"
        super().__init__(message)


__all__ = ["GeoChartError", "InvalidColorFormat", "IncompatibleDataset", "RegionNotFound"]
