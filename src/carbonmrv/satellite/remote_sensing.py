"""
Remote-sensing signals for farm locations.

Stands in for a Google Earth Engine / Sentinel-2 lookup. Values are drawn
from plausible ranges for actively growing cropland so the rest of the
workflow (estimate confidence, verifier review) can be exercised without
satellite credentials.
"""

import asyncio
import random
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import TypedDict

from carbonmrv.core.config import settings

# Signal ranges [low, high) for the mocked provider
NDVI_RANGE = (0.65, 0.95)
BIOMASS_INDEX_RANGE = (0.4, 0.8)
SOIL_MOISTURE_RANGE = (0.3, 0.7)
CLOUD_COVER_RANGE = (0.0, 0.3)


class RemoteSensingData(TypedDict):
    """Remote-sensing payload as stored on a submission."""

    ndvi: float
    biomass_index: float
    soil_moisture: float
    cloud_cover: float
    last_updated: str


@dataclass(frozen=True)
class GpsLocation:
    """Farm location in WGS84 degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    @classmethod
    def from_point(cls, point: dict) -> "GpsLocation":
        """Build from the backend's `{x: lon, y: lat}` point."""
        return cls(latitude=point["y"], longitude=point["x"])

    def to_point(self) -> dict:
        return {"x": self.longitude, "y": self.latitude}

    def to_dict(self) -> dict:
        return asdict(self)


def _uniform(rng: random.Random, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return low + rng.random() * (high - low)


async def fetch_remote_sensing(
    location: GpsLocation,
    rng: random.Random | None = None,
) -> RemoteSensingData:
    """
    Fetch remote-sensing signals for a location.

    Args:
        location: Farm GPS location
        rng: Random source (pass a seeded Random for reproducible values)

    Returns:
        RemoteSensingData with NDVI, biomass index, soil moisture and cloud cover
    """
    rng = rng or random.Random()

    if settings.remote_sensing_delay_seconds > 0:
        await asyncio.sleep(settings.remote_sensing_delay_seconds)

    return {
        "ndvi": round(_uniform(rng, NDVI_RANGE), 4),
        "biomass_index": round(_uniform(rng, BIOMASS_INDEX_RANGE), 4),
        "soil_moisture": round(_uniform(rng, SOIL_MOISTURE_RANGE), 4),
        "cloud_cover": round(_uniform(rng, CLOUD_COVER_RANGE), 4),
        "last_updated": datetime.now(UTC).isoformat(),
    }
