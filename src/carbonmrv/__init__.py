"""Carbon-credit MRV tools for smallholder farms.

This package estimates agricultural carbon credits and supports the
farmer submission / verifier review workflow on top of a managed
Postgres backend.

Subpackages:
- carbonmrv.core: Configuration, backend client and display units
- carbonmrv.analysis: Carbon credit estimator
- carbonmrv.satellite: Remote-sensing signals
- carbonmrv.data: Farm/submission workflows and dashboard stats
- carbonmrv.reports: CSV, PDF and GeoJSON exports
- carbonmrv.cli: Command-line tools
"""

# Re-export common items for convenience
from carbonmrv.analysis import (
    EstimationInput,
    EstimationResult,
    InvalidInputError,
    Practices,
    RemoteSensing,
    estimate,
)
from carbonmrv.core import settings

__all__ = [
    "estimate",
    "EstimationInput",
    "EstimationResult",
    "InvalidInputError",
    "Practices",
    "RemoteSensing",
    "settings",
]

__version__ = "0.1.0"
