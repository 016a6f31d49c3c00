"""Satellite modules - remote-sensing signals for farm locations."""

from carbonmrv.satellite.remote_sensing import (
    GpsLocation,
    RemoteSensingData,
    fetch_remote_sensing,
)

__all__ = [
    "GpsLocation",
    "RemoteSensingData",
    "fetch_remote_sensing",
]
