"""Analysis modules - carbon credit estimation."""

from carbonmrv.analysis.estimator import (
    CH4_GWP,
    RICE_EMISSION_FACTORS,
    SEQUESTRATION_RATES,
    CarbonBreakdown,
    EstimationInput,
    EstimationResult,
    InvalidInputError,
    Practices,
    RemoteSensing,
    estimate,
)

__all__ = [
    "estimate",
    "EstimationInput",
    "EstimationResult",
    "CarbonBreakdown",
    "Practices",
    "RemoteSensing",
    "InvalidInputError",
    "CH4_GWP",
    "RICE_EMISSION_FACTORS",
    "SEQUESTRATION_RATES",
]
