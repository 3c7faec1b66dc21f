"""
Driver Set Tests
================

Unit tests for driver set validation and loading.

Author: MRI Team
Version: 1.0.0
"""

import pytest

from shared.schemas.assessments import DriverDefinition
from mri.config import Settings
from mri.exceptions import DriverWeightsInvalidError
from mri.scoring.aggregator import aggregate
from mri.scoring.drivers import (
    DriverSet,
    as_driver_set,
    load_default_driver_set,
    max_weight_tolerance,
)

from tests.fixtures import REFERENCE_WEIGHTS


class TestDriverSet:
    """Tests for DriverSet invariants."""

    def test_reference_weights_valid(self, driver_set):
        assert len(driver_set) == 6
        assert driver_set.driver_ids == tuple(REFERENCE_WEIGHTS)
        assert driver_set.weight("sitting") == 0.25

    def test_membership(self, driver_set):
        assert "neck" in driver_set
        assert "lifting" not in driver_set
        assert driver_set.get("lifting") is None

    def test_unknown_weight_raises_key_error(self, driver_set):
        with pytest.raises(KeyError):
            driver_set.weight("lifting")

    def test_weights_must_sum_to_one(self):
        with pytest.raises(DriverWeightsInvalidError) as exc_info:
            DriverSet.from_weights({"a": 0.5, "b": 0.4})

        assert exc_info.value.total_weight == pytest.approx(0.9)

    def test_within_tolerance_accepted(self):
        drivers = DriverSet.from_weights({"a": 0.5, "b": 0.5000004})

        assert len(drivers) == 2

    def test_custom_tolerance(self):
        with pytest.raises(DriverWeightsInvalidError):
            DriverSet.from_weights({"a": 0.5, "b": 0.5000004}, tolerance=1e-9)

    def test_max_tolerance_at_one_decimal(self):
        assert float(max_weight_tolerance(1)) == pytest.approx(5e-4)
        assert float(max_weight_tolerance(2)) == pytest.approx(5e-5)

    @pytest.mark.parametrize("tolerance", [0.05, 5e-4, -1e-6])
    def test_tolerance_out_of_bounds_rejected(self, tolerance):
        with pytest.raises(DriverWeightsInvalidError, match="tolerance"):
            DriverSet.from_weights({"a": 0.6, "b": 0.41}, tolerance=tolerance)

    def test_weights_above_one_never_exceed_100(self):
        drivers = DriverSet.from_weights({"a": 0.6, "b": 0.4004}, tolerance=4.9e-4)

        result = aggregate([("r", "a", 4), ("r", "b", 4)], drivers)

        assert result.get_role("r").percentage == 100.0
        assert result.overall_score == 100.0

    def test_misconfigured_tolerance_is_engine_error(self):
        settings = Settings(driver_weight_tolerance=0.05)

        with pytest.raises(DriverWeightsInvalidError):
            load_default_driver_set(settings)

    def test_zero_weight_rejected(self):
        with pytest.raises(DriverWeightsInvalidError, match="outside"):
            DriverSet.from_weights({"a": 1.0, "b": 0.0})

    def test_duplicate_ids_rejected(self):
        definitions = (
            DriverDefinition(driver_id="a", weight=0.5),
            DriverDefinition(driver_id="a", weight=0.5),
        )
        with pytest.raises(DriverWeightsInvalidError, match="Duplicate"):
            DriverSet(definitions)

    def test_empty_set_allowed(self):
        assert len(DriverSet(())) == 0

    def test_as_driver_set_passthrough(self, driver_set):
        assert as_driver_set(driver_set) is driver_set


class TestDefaultDriverSet:
    """Tests for the configured reference driver set."""

    def test_default_weights(self):
        drivers = load_default_driver_set()

        assert drivers.driver_ids[0] == "sitting"
        assert drivers.get("sitting").name == "Sustained sitting"
        assert float(drivers.total_weight) == pytest.approx(1.0)

    def test_misconfigured_weights(self):
        settings = Settings(driver_weight_sitting=0.9)

        with pytest.raises(DriverWeightsInvalidError):
            load_default_driver_set(settings)
