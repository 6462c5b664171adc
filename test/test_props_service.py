"""
Unit tests for PropsService on the synthetic FAKE fluid

Author: RefrigProps Project
Date: 2026-10-17
"""

import math
import threading

import pytest

from fakes import FAKE_BULK, FAKE_FLUID, fake_props_si
from refrig_props.core.props_service import PropsService, get_props_service
from refrig_props.core.results import Error, Success
from refrig_props.core.saturation import Branch
from refrig_props.core.solver import EOSSolver


# FAKE at 100000 Paa: bubble point 210 K, dew point 212 K
P_ABS = 100000.0


class TestInitialization:
    """Test init / set_config / get_config."""

    def test_init_without_refrigerant(self, service):
        result = service.init()
        assert isinstance(result, Error)
        assert "Refrigerant must be specified" in result.message

    def test_init_invalid_units(self, service):
        result = service.init(refrigerant=FAKE_FLUID, temp_unit="X")
        assert result.type == "error"
        assert "Invalid temperature unit" in result.message

        result = service.init(refrigerant=FAKE_FLUID, pressure_unit="X")
        assert result.type == "error"
        assert "Invalid pressure unit" in result.message

    def test_init_then_update(self, service):
        first = service.init(refrigerant=FAKE_FLUID, temp_unit="C", pressure_unit="bar")
        assert first.ok
        assert first.message == "Initialized successfully"
        assert first.units == {"temperature": "C", "pressure": "bar"}

        second = service.init(pressure_unit="psig")
        assert second.ok
        assert second.message == "Default settings updated"
        assert second.units == {"temperature": "C", "pressure": "psig"}

    def test_set_config(self, service):
        result = service.set_config(refrigerant=FAKE_FLUID, temp_unit="F")
        assert result.ok
        assert result.message == "Config updated successfully"
        assert result["config"] == {"refrigerant": FAKE_FLUID, "temp_unit": "F", "pressure_unit": "Pa"}

    def test_set_config_propagates_errors(self, service):
        result = service.set_config(temp_unit="F")
        assert not result.ok
        assert "Refrigerant must be specified" in result.message

    def test_get_config(self, service):
        service.init(refrigerant=FAKE_FLUID, temp_unit="C", pressure_unit="bar")
        result = service.get_config()
        assert result["refrigerant"] == FAKE_FLUID
        assert result["temp_unit"] == "C"
        assert result["pressure_unit"] == "bar"

    def test_timeout_becomes_error(self, tables):
        release = threading.Event()

        def stuck_loader():
            release.wait(5.0)
            return fake_props_si

        service = PropsService(solver=EOSSolver(loader=stuck_loader, timeout=0.05), tables=tables)
        try:
            result = service.calculate_superheat(220.0, P_ABS, FAKE_FLUID, "K", "Paa")
            assert isinstance(result, Error)
            assert "timed out" in result.message
        finally:
            release.set()


class TestSuperheat:
    """Test superheat derivation."""

    def test_superheat(self, service):
        result = service.calculate_superheat(220.0, P_ABS, FAKE_FLUID, "K", "Paa")
        assert isinstance(result, Success)
        assert result["superheat"] == pytest.approx(8.0)
        assert result["saturation_temperature"] == pytest.approx(212.0)
        assert result.refrigerant == FAKE_FLUID
        assert result.units == {"temperature": "K", "pressure": "Paa"}

    def test_at_saturation_is_zero(self, service):
        result = service.calculate_superheat(212.0, P_ABS, FAKE_FLUID, "K", "Paa")
        assert result["superheat"] == 0.0

    def test_below_saturation_clamps_to_zero(self, service):
        result = service.calculate_superheat(150.0, P_ABS, FAKE_FLUID, "K", "Paa")
        assert result["superheat"] == 0.0

    def test_fahrenheit_delta(self, service):
        """Superheat is a difference: 8 K reads as 14.4 °F."""
        T_F = 220.0 * 9 / 5 - 459.67
        result = service.calculate_superheat(T_F, P_ABS, FAKE_FLUID, "F", "Paa")
        assert result["superheat"] == pytest.approx(14.4)
        assert result["saturation_temperature"] == pytest.approx(212.0 * 9 / 5 - 459.67)

    def test_unknown_fluid_is_infinity_error(self, service):
        result = service.calculate_superheat(25, 10, "NOT_A_FLUID", "C", "bar")
        assert isinstance(result, Error)
        assert result.message == "Superheat is infinity"
        assert result.note is not None


class TestSubcooling:
    """Test subcooling derivation."""

    def test_subcooling(self, service):
        result = service.calculate_subcooling(205.0, P_ABS, FAKE_FLUID, "K", "Paa")
        assert result["subcooling"] == pytest.approx(5.0)
        assert result["saturation_temperature"] == pytest.approx(210.0)

    def test_above_saturation_clamps_to_zero(self, service):
        result = service.calculate_subcooling(230.0, P_ABS, FAKE_FLUID, "K", "Paa")
        assert result["subcooling"] == 0.0

    def test_gauge_pressure(self, service):
        """0 kPag is 101325 Paa: bubble point 210.1325 K."""
        result = service.calculate_subcooling(200.0, 0.0, FAKE_FLUID, "K", "kPag")
        assert result["saturation_temperature"] == pytest.approx(210.1325)
        assert result["subcooling"] == pytest.approx(10.1325)

    def test_unknown_fluid_is_infinity_error(self, service):
        result = service.calculate_subcooling(25, 196.9, "R507", "C", "psig")
        assert isinstance(result, Error)
        assert result.message == "Subcooling is infinity"
        assert "R507A" in result.note


class TestSaturationLookups:
    """Test direct saturation temperature / pressure lookups."""

    def test_temperature_defaults_to_liquid(self, service):
        result = service.get_saturation_temperature(P_ABS, FAKE_FLUID, "K", "Paa")
        assert result["temperature"] == pytest.approx(210.0)

    def test_temperature_vapor_branch(self, service):
        result = service.get_saturation_temperature(P_ABS, FAKE_FLUID, "K", "Paa", branch="vapor")
        assert result["temperature"] == pytest.approx(212.0)

    def test_pressure(self, service):
        result = service.get_saturation_pressure(210.0, FAKE_FLUID, "K", "Paa")
        assert result["pressure"] == pytest.approx(P_ABS)
        result = service.get_saturation_pressure(212.0, FAKE_FLUID, "K", "kPaa", branch=Branch.VAPOR)
        assert result["pressure"] == pytest.approx(100.0)

    def test_raw_infinity_is_returned(self, service):
        """No infinity guard on direct lookups."""
        result = service.get_saturation_temperature(10, "NOT_A_FLUID", "C", "bar")
        assert result.ok
        assert math.isinf(result["temperature"])

    def test_unknown_branch(self, service):
        result = service.get_saturation_temperature(P_ABS, FAKE_FLUID, "K", "Paa", branch="steam")
        assert not result.ok
        assert "branch" in result.message

    def test_unit_conversion_consistency(self, service):
        c = service.get_saturation_temperature(1.0, FAKE_FLUID, "C", "bar")["temperature"]
        f = service.get_saturation_temperature(1.0, FAKE_FLUID, "F", "bar")["temperature"]
        k = service.get_saturation_temperature(1.0, FAKE_FLUID, "K", "bar")["temperature"]
        assert c * 9 / 5 + 32 == pytest.approx(f, abs=0.01)
        assert c + 273.15 == pytest.approx(k, abs=0.01)


class TestProperties:
    """Test the bulk property bundle."""

    def test_properties(self, service):
        result = service.get_properties(25.0, 1.0, FAKE_FLUID, "C", "bar")
        props = result["properties"]
        assert props["temperature"] == pytest.approx(25.0)
        assert props["pressure"] == pytest.approx(1.0)
        assert props["density"] == FAKE_BULK["D"]
        assert props["enthalpy"] == FAKE_BULK["H"]
        assert props["entropy"] == FAKE_BULK["S"]
        assert props["quality"] == FAKE_BULK["Q"]
        assert props["conductivity"] == FAKE_BULK["L"]
        assert props["viscosity"] == FAKE_BULK["V"]
        assert props["specific_heat"] == FAKE_BULK["C"]
        assert result.units["density"] == "kg/m³"
        assert result.units["temperature"] == "C"

    def test_non_physical_state(self, service):
        result = service.get_properties(-300.0, 1.0, FAKE_FLUID, "C", "bar")
        assert not result.ok
        assert "Temperature must be positive" in result.message


class TestConfigurationEffects:
    """Test defaults, overrides and error conversion."""

    def test_requires_refrigerant(self, service):
        result = service.calculate_superheat(25, 10)
        assert isinstance(result, Error)
        assert "Refrigerant must be specified" in result.message

    def test_uses_defaults(self, service):
        service.init(refrigerant=FAKE_FLUID, temp_unit="K", pressure_unit="Paa")
        result = service.calculate_superheat(220.0, P_ABS)
        assert result["superheat"] == pytest.approx(8.0)

    def test_override_persists(self, service):
        """A per-call unit override changes the defaults for later calls."""
        service.init(refrigerant=FAKE_FLUID, temp_unit="K", pressure_unit="Paa")
        service.calculate_superheat(20.0, 1.0, temp_unit="C", pressure_unit="bara")
        config = service.get_config()
        assert config["temp_unit"] == "C"
        assert config["pressure_unit"] == "bara"

    def test_invalid_unit_is_error(self, service):
        result = service.calculate_subcooling(25, 10, FAKE_FLUID, "X", "bar")
        assert isinstance(result, Error)
        assert "Invalid temperature unit" in result.message

    def test_invalid_refrigerant_type(self, service):
        result = service.calculate_superheat(25, 10, 744, "C", "bar")
        assert isinstance(result, Error)
        assert "Invalid refrigerant type" in result.message

    def test_to_dict(self, service):
        data = service.calculate_superheat(220.0, P_ABS, FAKE_FLUID, "K", "Paa").to_dict()
        assert data["type"] == "success"
        assert data["superheat"] == pytest.approx(8.0)
        assert data["refrigerant"] == FAKE_FLUID
        assert data["units"] == {"temperature": "K", "pressure": "Paa"}

        error = service.calculate_superheat(25, 10, "NOT_A_FLUID", "C", "bar").to_dict()
        assert error["type"] == "error"
        assert "note" in error

    def test_props_si(self, service):
        assert service.props_si("T", "P", P_ABS, "Q", 1, FAKE_FLUID) == pytest.approx(212.0)


def test_default_service_is_shared():
    assert get_props_service() is get_props_service()
