"""Tests for display unit conversion."""

import pytest

from farmghg.core import units
from farmghg.core.config import settings


@pytest.fixture
def imperial():
    original = settings.display_units
    settings.display_units = "imperial"
    try:
        yield
    finally:
        settings.display_units = original


@pytest.fixture
def metric():
    original = settings.display_units
    settings.display_units = "metric"
    try:
        yield
    finally:
        settings.display_units = original


class TestMass:
    """Tests for mass formatting."""

    def test_metric(self, metric):
        assert units.kg_to_display(12.5) == (12.5, "kg")
        assert units.format_mass(1234.56, label="CH4") == "1,234.6 kg CH4"
        assert units.get_mass_unit() == "kg"
        assert not units.is_imperial()

    def test_imperial(self, imperial):
        value, unit = units.kg_to_display(1.0)
        assert unit == "lb"
        assert value == pytest.approx(2.20462, rel=1e-4)
        assert units.format_mass(10.0, decimals=0) == "22 lb"
        assert units.is_imperial()

    def test_tonnes(self):
        assert units.tonnes(2500.0) == pytest.approx(2.5)


class TestTemperatureAndDepth:
    """Tests for temperature and precipitation formatting."""

    def test_celsius_to_fahrenheit(self):
        assert units.celsius_to_fahrenheit(0.0) == 32.0
        assert units.celsius_to_fahrenheit(-40.0) == -40.0

    def test_metric_formats(self, metric):
        assert units.format_temp(17.04) == "17.0°C"
        assert units.format_precip(384.4) == "384mm"

    def test_imperial_formats(self, imperial):
        assert units.format_temp(10.0) == "50.0°F"
        assert units.format_precip(25.4) == '1.00"'
