"""
Carbon Credit Estimation for Smallholder Farms.

Converts farm attributes (crop type, land size, water management, optional
satellite NDVI) into an estimated carbon-credit amount using simplified,
closed-form IPCC-style factors.

Components:
- Biomass sequestration: per-crop annual rate x area, scaled by NDVI
- Soil sequestration: fixed organic-matter rate x area, boosted by agroforestry
- Methane reduction: rice paddies only, baseline continuous flooding vs.
  the farm's water-management practice

References:
-----------
[1] IPCC 2019 Refinement to the 2006 Guidelines, Vol 4, Ch 5.5
    "Methane emissions from rice cultivation". Baseline daily emission
    factor for continuously flooded fields and scaling factors for
    intermittent flooding (alternate wetting & drying) and rainfed regimes.

[2] IPCC AR4 WG1, Table 2.14. CH4 100-year GWP = 25 (the value used by
    most voluntary carbon registries).

[3] Nair, P.K.R., et al. (2009). "Agroforestry as a strategy for carbon
    sequestration." J. Plant Nutr. Soil Sci. 172:10-23.
    Typical agroforestry sequestration 1-5 t CO2/ha/year.

The estimate is a screening value for MRV workflows, not a verified
registry quantity. Unrecognized crop types and water practices fall back
to default factors rather than failing; strict mode turns these fallbacks
into errors.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, field
from types import MappingProxyType

logger = logging.getLogger(__name__)

# CH4 Global Warming Potential (100-year, AR4) [2]
CH4_GWP = 25
DAYS_PER_YEAR = 365
KG_PER_TONNE = 1000


# =============================================================================
# Factor Tables
# =============================================================================

# Rice paddy methane emission factors (kg CH4/ha/day) [1]
RICE_EMISSION_FACTORS: Mapping[str, float] = MappingProxyType(
    {
        "continuous_flooding": 2.5,  # Baseline
        "alternate_wetting_drying": 1.2,
        "rainfed": 0.8,
    }
)
BASELINE_WATER_MANAGEMENT = "continuous_flooding"

# Annual biomass sequestration rates by crop type (t CO2/ha/year) [3]
SEQUESTRATION_RATES: Mapping[str, float] = MappingProxyType(
    {
        "agroforestry": 3.2,
        "rice_improved": 1.8,
        "soil_organic_matter": 0.5,
    }
)
DEFAULT_SEQUESTRATION_RATE = 1.5

# Soil organic matter accumulation (t CO2/ha/year)
SOIL_ORGANIC_MATTER_RATE = SEQUESTRATION_RATES["soil_organic_matter"]
AGROFORESTRY_SOIL_MULTIPLIER = 1.5

# Crop types offered to farmers. Those without an entry in
# SEQUESTRATION_RATES use the default rate without a warning.
KNOWN_CROP_TYPES = frozenset({"rice", "agroforestry", "mixed_crops", "vegetables", "rice_improved"})

AGROFORESTRY_METHODS = frozenset({"tree_plantation", "silviculture", "intercropping", "boundary_planting"})

# Confidence and NDVI adjustment
BASE_CONFIDENCE = 0.7
REMOTE_SENSING_CONFIDENCE_BOOST = 0.2
MAX_CONFIDENCE = 0.95
NDVI_ADJUSTMENT_SCALE = 2.0
MIN_NDVI_ADJUSTMENT = 0.5
MAX_NDVI_ADJUSTMENT = 1.5


class InvalidInputError(ValueError):
    """Raised when estimation input cannot produce a meaningful result."""

    pass


# =============================================================================
# Input / Result Types
# =============================================================================


@dataclass(frozen=True)
class Practices:
    """Farming practices reported for a farm."""

    # Rice only: continuous_flooding, alternate_wetting_drying, rainfed
    water_management: str | None = None
    # Free text, recorded for verifiers but not used in the formula
    fertilizer_usage: str | None = None
    agroforestry_methods: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping | None) -> "Practices":
        """Build from the backend's `practices` JSON (snake_case or camelCase keys)."""
        if not data:
            return cls()
        methods = data.get("agroforestry_methods", data.get("agroforestryMethods")) or ()
        return cls(
            water_management=data.get("water_management", data.get("waterManagement")) or None,
            fertilizer_usage=data.get("fertilizer_usage", data.get("fertilizerUsage")) or None,
            agroforestry_methods=tuple(methods),
        )


@dataclass(frozen=True)
class RemoteSensing:
    """Satellite signals for the farm. Only NDVI affects the estimate."""

    ndvi: float | None = None
    biomass_index: float | None = None
    soil_moisture: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping | None) -> "RemoteSensing | None":
        if not data:
            return None
        return cls(
            ndvi=data.get("ndvi"),
            biomass_index=data.get("biomass_index", data.get("biomassIndex")),
            soil_moisture=data.get("soil_moisture", data.get("soilMoisture")),
        )


@dataclass(frozen=True)
class EstimationInput:
    """Farm attributes for a single estimate."""

    crop_type: str
    land_size_hectares: float
    practices: Practices = field(default_factory=Practices)
    remote_sensing: RemoteSensing | None = None

    @classmethod
    def from_farm(cls, farm: Mapping, remote_sensing: Mapping | None = None) -> "EstimationInput":
        """Build from a backend `farms` row and optional remote-sensing payload."""
        return cls(
            crop_type=farm["crop_type"],
            land_size_hectares=farm["land_size"],
            practices=Practices.from_dict(farm.get("practices")),
            remote_sensing=RemoteSensing.from_dict(remote_sensing),
        )


@dataclass(frozen=True)
class CarbonBreakdown:
    """Raw components of the estimate (may be negative before clamping)."""

    biomass_carbon_sequestration: float
    soil_carbon_sequestration: float
    methane_reduction: float

    @property
    def total(self) -> float:
        return self.biomass_carbon_sequestration + self.soil_carbon_sequestration + self.methane_reduction


@dataclass(frozen=True)
class EstimationResult:
    """Estimated carbon credits for a farm (tonnes CO2e)."""

    # Biomass sequestration after NDVI adjustment (t CO2)
    biomass_estimate: float
    # Avoided rice methane (t CO2e)
    methane_emission_reduction: float
    # Credits, clamped to >= 0 (t CO2e)
    carbon_credits: float
    # 0-1
    confidence_score: float
    breakdown: CarbonBreakdown

    def to_dict(self) -> dict:
        return asdict(self)

    def to_row(self, submission_id: str) -> dict:
        """Shape as a backend `carbon_estimates` row keyed to a submission."""
        return {
            "submission_id": submission_id,
            "biomass_estimate": self.biomass_estimate,
            "methane_emission": self.methane_emission_reduction,
            "carbon_credits": self.carbon_credits,
            "confidence_score": self.confidence_score,
        }


# =============================================================================
# Validation
# =============================================================================


def _fallback(message: str, strict: bool) -> None:
    if strict:
        raise InvalidInputError(message)
    logger.warning("%s; using default factor", message)


def validate_input(data: EstimationInput, strict: bool = False) -> None:
    """
    Check an input before any computation.

    Non-positive or non-finite land sizes are always rejected. Unknown
    crop types and water practices are rejected only in strict mode;
    otherwise they are logged and the default factors apply.

    Raises:
        InvalidInputError: If the input is unusable
    """
    size = data.land_size_hectares
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        raise InvalidInputError(f"Land size must be a number, got {size!r}")
    if not math.isfinite(size) or size <= 0:
        raise InvalidInputError(f"Land size must be a positive number of hectares, got {size}")

    if data.remote_sensing is not None and data.remote_sensing.ndvi is not None:
        if not math.isfinite(data.remote_sensing.ndvi):
            raise InvalidInputError(f"NDVI must be finite, got {data.remote_sensing.ndvi}")

    if data.crop_type not in KNOWN_CROP_TYPES and data.crop_type not in SEQUESTRATION_RATES:
        _fallback(f"Unrecognized crop type {data.crop_type!r}", strict)

    water = data.practices.water_management
    if data.crop_type == "rice" and water and water not in RICE_EMISSION_FACTORS:
        _fallback(f"Unrecognized water management practice {water!r}", strict)


# =============================================================================
# Formula Components
# =============================================================================


def biomass_sequestration(crop_type: str, land_size_hectares: float) -> float:
    """Annual biomass sequestration (t CO2) before NDVI adjustment."""
    rate = SEQUESTRATION_RATES.get(crop_type, DEFAULT_SEQUESTRATION_RATE)
    return land_size_hectares * rate


def soil_sequestration(land_size_hectares: float, agroforestry_methods: Sequence[str] = ()) -> float:
    """Annual soil carbon sequestration (t CO2)."""
    soil = land_size_hectares * SOIL_ORGANIC_MATTER_RATE
    if agroforestry_methods:
        soil *= AGROFORESTRY_SOIL_MULTIPLIER
    return soil


def methane_reduction(crop_type: str, land_size_hectares: float, water_management: str | None) -> float:
    """
    Avoided rice methane versus continuous flooding (t CO2e/year).

    reduction = area × (EF_baseline − EF_practice) × 365 × GWP / 1000

    Zero for non-rice crops, for missing practice data and for unknown
    practices (which take the baseline factor). Not clamped: a practice
    factor above the baseline would give a negative value.
    """
    if crop_type != "rice" or not water_management:
        return 0.0

    baseline = RICE_EMISSION_FACTORS[BASELINE_WATER_MANAGEMENT]
    practice = RICE_EMISSION_FACTORS.get(water_management, baseline)
    return land_size_hectares * (baseline - practice) * DAYS_PER_YEAR * CH4_GWP / KG_PER_TONNE


def ndvi_adjustment(ndvi: float | None) -> float:
    """Biomass multiplier from NDVI: clamp(ndvi × 2, 0.5, 1.5), or 1.0 without NDVI."""
    if ndvi is None:
        return 1.0
    return max(MIN_NDVI_ADJUSTMENT, min(MAX_NDVI_ADJUSTMENT, ndvi * NDVI_ADJUSTMENT_SCALE))


def confidence_score(ndvi: float | None) -> float:
    """Fixed base confidence, raised by a flat boost when NDVI is available."""
    if ndvi is None:
        return BASE_CONFIDENCE
    return min(MAX_CONFIDENCE, BASE_CONFIDENCE + REMOTE_SENSING_CONFIDENCE_BOOST)


# =============================================================================
# Estimator
# =============================================================================


def estimate(data: EstimationInput, strict: bool = False) -> EstimationResult:
    """
    Estimate carbon credits for a farm.

    Args:
        data: Farm attributes and optional remote-sensing signals
        strict: Raise on unrecognized crop types / water practices
            instead of falling back to default factors

    Returns:
        EstimationResult; carbon_credits is clamped to >= 0 while the
        breakdown keeps the raw components

    Raises:
        InvalidInputError: On non-positive land size, non-finite NDVI,
            or (strict mode) unrecognized enum values
    """
    validate_input(data, strict=strict)

    land = data.land_size_hectares
    # NDVI 0.0 is a bare-soil reading, not a missing value
    ndvi = data.remote_sensing.ndvi if data.remote_sensing is not None else None

    biomass = biomass_sequestration(data.crop_type, land) * ndvi_adjustment(ndvi)
    soil = soil_sequestration(land, data.practices.agroforestry_methods)
    methane = methane_reduction(data.crop_type, land, data.practices.water_management)

    breakdown = CarbonBreakdown(
        biomass_carbon_sequestration=biomass,
        soil_carbon_sequestration=soil,
        methane_reduction=methane,
    )

    return EstimationResult(
        biomass_estimate=biomass,
        methane_emission_reduction=methane,
        carbon_credits=max(0.0, breakdown.total),
        confidence_score=confidence_score(ndvi),
        breakdown=breakdown,
    )
