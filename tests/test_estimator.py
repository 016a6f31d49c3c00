"""Tests for the carbon credit estimator."""

import logging
import math
from types import MappingProxyType

import pytest

from carbonmrv.analysis import estimator
from carbonmrv.analysis.estimator import (
    CH4_GWP,
    EstimationInput,
    InvalidInputError,
    Practices,
    RemoteSensing,
    biomass_sequestration,
    confidence_score,
    estimate,
    methane_reduction,
    ndvi_adjustment,
    soil_sequestration,
)


def rice(land: float, water: str | None = None, ndvi: float | None = None) -> EstimationInput:
    return EstimationInput(
        crop_type="rice",
        land_size_hectares=land,
        practices=Practices(water_management=water),
        remote_sensing=RemoteSensing(ndvi=ndvi) if ndvi is not None else None,
    )


class TestEstimateScenarios:
    """End-to-end estimates for representative farms."""

    def test_agroforestry_with_tree_plantation(self):
        """10 ha agroforestry with trees: 32 biomass + 7.5 soil."""
        result = estimate(
            EstimationInput(
                crop_type="agroforestry",
                land_size_hectares=10,
                practices=Practices(agroforestry_methods=("tree_plantation",)),
            )
        )

        assert result.biomass_estimate == pytest.approx(32.0)
        assert result.breakdown.soil_carbon_sequestration == pytest.approx(7.5)
        assert result.methane_emission_reduction == 0
        assert result.carbon_credits == pytest.approx(39.5)
        assert result.confidence_score == 0.7

    def test_rice_with_alternate_wetting_drying(self):
        """5 ha AWD rice: methane reduction dominates the estimate."""
        result = estimate(rice(5, "alternate_wetting_drying"))

        assert result.biomass_estimate == pytest.approx(7.5)
        assert result.breakdown.soil_carbon_sequestration == pytest.approx(2.5)
        assert result.methane_emission_reduction == pytest.approx(59.3125)
        assert result.carbon_credits == pytest.approx(69.3125)
        assert result.confidence_score == 0.7

    def test_ndvi_scales_biomass_and_raises_confidence(self):
        """NDVI 0.8 on 1 ha rice: biomass x1.5, confidence 0.9."""
        result = estimate(rice(1, ndvi=0.8))

        assert result.biomass_estimate == pytest.approx(2.25)
        assert result.carbon_credits == pytest.approx(2.75)
        assert result.confidence_score == pytest.approx(0.9)

    def test_unknown_crop_uses_default_rate(self):
        """Unrecognized crop falls back to 1.5 t/ha."""
        result = estimate(EstimationInput(crop_type="quinoa", land_size_hectares=2))

        assert result.biomass_estimate == pytest.approx(3.0)
        assert result.carbon_credits == pytest.approx(4.0)

    def test_soil_organic_matter_crop_uses_table_rate(self, caplog):
        """soil_organic_matter is in the rate table: 0.5 t/ha and no fallback warning."""
        with caplog.at_level(logging.WARNING, logger="carbonmrv.analysis.estimator"):
            result = estimate(EstimationInput(crop_type="soil_organic_matter", land_size_hectares=2))

        assert result.biomass_estimate == pytest.approx(1.0)
        assert result.carbon_credits == pytest.approx(2.0)
        assert caplog.text == ""

    def test_rice_improved_has_its_own_rate(self):
        """rice_improved uses 1.8 t/ha and gets no methane term."""
        result = estimate(
            EstimationInput(
                crop_type="rice_improved",
                land_size_hectares=1,
                practices=Practices(water_management="alternate_wetting_drying"),
            )
        )

        assert result.biomass_estimate == pytest.approx(1.8)
        assert result.methane_emission_reduction == 0


class TestEstimateProperties:
    """General properties of the estimate."""

    @pytest.mark.parametrize(
        "data",
        [
            rice(5, "alternate_wetting_drying"),
            rice(0.5, "rainfed", ndvi=0.1),
            rice(3, "continuous_flooding", ndvi=0.9),
            EstimationInput(crop_type="vegetables", land_size_hectares=0.2),
        ],
    )
    def test_credits_equal_clamped_sum_of_components(self, data):
        """Credits are max(0, biomass + soil + methane)."""
        result = estimate(data)

        assert result.carbon_credits >= 0
        assert result.carbon_credits == pytest.approx(max(0.0, result.breakdown.total))
        assert result.biomass_estimate == result.breakdown.biomass_carbon_sequestration
        assert result.methane_emission_reduction == result.breakdown.methane_reduction

    def test_negative_total_clamps_to_zero(self, monkeypatch):
        """A practice worse than baseline can push the raw total below zero."""
        monkeypatch.setattr(
            estimator,
            "RICE_EMISSION_FACTORS",
            MappingProxyType({"continuous_flooding": 2.5, "deep_flooding": 10.0}),
        )

        result = estimate(rice(1, "deep_flooding"))

        assert result.breakdown.methane_reduction < 0
        assert result.breakdown.total < 0
        assert result.carbon_credits == 0

    def test_doubling_land_doubles_credits(self):
        """Credits scale linearly with land size."""
        one = estimate(rice(2, "rainfed", ndvi=0.6))
        two = estimate(rice(4, "rainfed", ndvi=0.6))

        assert two.carbon_credits == pytest.approx(2 * one.carbon_credits)

    def test_confidence_is_fixed_without_ndvi(self):
        """Without NDVI confidence is always 0.7."""
        assert estimate(rice(1)).confidence_score == 0.7
        assert estimate(EstimationInput(crop_type="agroforestry", land_size_hectares=50)).confidence_score == 0.7

    def test_ndvi_zero_counts_as_present(self):
        """NDVI of 0 is an observation: minimum adjustment and boosted confidence."""
        result = estimate(rice(1, ndvi=0.0))

        assert result.biomass_estimate == pytest.approx(0.75)
        assert result.confidence_score == pytest.approx(0.9)

    def test_estimate_is_deterministic(self):
        data = rice(5, "alternate_wetting_drying", ndvi=0.7)
        assert estimate(data) == estimate(data)


class TestMethaneReduction:
    """Tests for the rice methane component."""

    def test_awd_beats_continuous_flooding(self):
        awd = methane_reduction("rice", 1, "alternate_wetting_drying")
        flooded = methane_reduction("rice", 1, "continuous_flooding")

        assert awd > 0
        assert flooded == 0

    def test_rainfed_reduction(self):
        """(2.5 - 0.8) x 365 x 25 / 1000 per hectare."""
        assert methane_reduction("rice", 1, "rainfed") == pytest.approx(1.7 * 365 * CH4_GWP / 1000)

    def test_non_rice_crop_has_no_reduction(self):
        assert methane_reduction("agroforestry", 10, "alternate_wetting_drying") == 0

    def test_missing_practice_has_no_reduction(self):
        assert methane_reduction("rice", 10, None) == 0

    def test_unknown_practice_uses_baseline(self):
        assert methane_reduction("rice", 10, "drip_irrigation") == 0


class TestComponents:
    """Tests for biomass, soil, NDVI and confidence helpers."""

    def test_biomass_rates(self):
        assert biomass_sequestration("agroforestry", 1) == pytest.approx(3.2)
        assert biomass_sequestration("rice_improved", 1) == pytest.approx(1.8)
        assert biomass_sequestration("rice", 1) == pytest.approx(1.5)
        assert biomass_sequestration("mixed_crops", 1) == pytest.approx(1.5)

    def test_soil_without_agroforestry(self):
        assert soil_sequestration(4) == pytest.approx(2.0)

    def test_soil_multiplier_applies_for_any_method(self):
        """Any agroforestry method gives the 1.5x soil boost, regardless of crop."""
        assert soil_sequestration(4, ("boundary_planting",)) == pytest.approx(3.0)
        assert soil_sequestration(4, ("intercropping", "silviculture")) == pytest.approx(3.0)

    def test_agroforestry_methods_boost_non_agroforestry_crop(self):
        result = estimate(
            EstimationInput(
                crop_type="vegetables",
                land_size_hectares=2,
                practices=Practices(agroforestry_methods=("intercropping",)),
            )
        )
        assert result.breakdown.soil_carbon_sequestration == pytest.approx(1.5)

    @pytest.mark.parametrize(
        "ndvi, expected",
        [
            (None, 1.0),
            (0.0, 0.5),
            (0.1, 0.5),
            (0.25, 0.5),
            (0.6, 1.2),
            (0.75, 1.5),
            (0.95, 1.5),
            (-0.3, 0.5),
        ],
    )
    def test_ndvi_adjustment_is_clamped(self, ndvi, expected):
        assert ndvi_adjustment(ndvi) == pytest.approx(expected)

    def test_confidence_bounds(self):
        assert confidence_score(None) == 0.7
        assert confidence_score(0.5) == pytest.approx(0.9)
        assert confidence_score(0.5) <= 0.95


class TestValidation:
    """Tests for input validation and fallbacks."""

    @pytest.mark.parametrize("land", [0, -1, -0.5, math.nan, math.inf])
    def test_rejects_unusable_land_size(self, land):
        with pytest.raises(InvalidInputError, match="Land size"):
            estimate(rice(land))

    @pytest.mark.parametrize("land", ["5", None, True])
    def test_rejects_non_numeric_land_size(self, land):
        with pytest.raises(InvalidInputError, match="must be a number"):
            estimate(EstimationInput(crop_type="rice", land_size_hectares=land))

    def test_rejects_non_finite_ndvi(self):
        with pytest.raises(InvalidInputError, match="NDVI"):
            estimate(rice(1, ndvi=math.nan))

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            estimate(rice(0))

    def test_unknown_crop_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="carbonmrv.analysis.estimator"):
            estimate(EstimationInput(crop_type="quinoa", land_size_hectares=2))

        assert "Unrecognized crop type 'quinoa'" in caplog.text

    def test_unknown_water_practice_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="carbonmrv.analysis.estimator"):
            result = estimate(rice(2, "drip_irrigation"))

        assert "drip_irrigation" in caplog.text
        assert result.methane_emission_reduction == 0

    def test_known_crop_without_rate_does_not_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="carbonmrv.analysis.estimator"):
            estimate(EstimationInput(crop_type="mixed_crops", land_size_hectares=2))

        assert caplog.text == ""

    def test_strict_mode_rejects_unknown_crop(self):
        with pytest.raises(InvalidInputError, match="quinoa"):
            estimate(EstimationInput(crop_type="quinoa", land_size_hectares=2), strict=True)

    def test_strict_mode_rejects_unknown_water_practice(self):
        with pytest.raises(InvalidInputError, match="drip_irrigation"):
            estimate(rice(2, "drip_irrigation"), strict=True)

    def test_strict_mode_accepts_known_values(self):
        result = estimate(rice(5, "alternate_wetting_drying"), strict=True)
        assert result.carbon_credits == pytest.approx(69.3125)


class TestInputParsing:
    """Tests for building inputs from backend rows."""

    def test_from_farm(self, sample_farm):
        data = EstimationInput.from_farm(sample_farm, {"ndvi": 0.8, "biomass_index": 0.5})

        assert data.crop_type == "rice"
        assert data.land_size_hectares == 5
        assert data.practices.water_management == "alternate_wetting_drying"
        assert data.practices.agroforestry_methods == ()
        assert data.remote_sensing == RemoteSensing(ndvi=0.8, biomass_index=0.5)

    def test_from_farm_without_practices(self):
        data = EstimationInput.from_farm({"crop_type": "vegetables", "land_size": 1, "practices": None})

        assert data.practices == Practices()
        assert data.remote_sensing is None

    def test_practices_accept_camel_case(self):
        practices = Practices.from_dict(
            {"waterManagement": "rainfed", "fertilizerUsage": "compost", "agroforestryMethods": ["intercropping"]}
        )

        assert practices == Practices("rainfed", "compost", ("intercropping",))

    def test_empty_remote_sensing_is_none(self):
        assert RemoteSensing.from_dict({}) is None
        assert RemoteSensing.from_dict(None) is None


class TestResultSerialization:
    """Tests for result shapes."""

    def test_to_row(self):
        result = estimate(rice(5, "alternate_wetting_drying"))
        row = result.to_row("sub-1")

        assert row["submission_id"] == "sub-1"
        assert row["methane_emission"] == pytest.approx(59.3125)
        assert row["carbon_credits"] == pytest.approx(69.3125)
        assert row["confidence_score"] == 0.7
        assert set(row) == {
            "submission_id",
            "biomass_estimate",
            "methane_emission",
            "carbon_credits",
            "confidence_score",
        }

    def test_to_dict_includes_breakdown(self):
        d = estimate(rice(1, ndvi=0.8)).to_dict()

        assert d["carbon_credits"] == pytest.approx(2.75)
        assert d["breakdown"]["soil_carbon_sequestration"] == pytest.approx(0.5)
