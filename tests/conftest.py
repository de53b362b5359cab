"""Shared test fixtures."""

import sys
from datetime import date
from pathlib import Path

import pytest
import respx

# Add src/ to path so tests can import farmghg
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from farmghg.data.enums import AnimalType  # noqa: E402
from farmghg.data.models import (  # noqa: E402
    AnimalComponent,
    AnimalGroup,
    Farm,
    ManagementPeriod,
    ManureDetails,
)
from farmghg.weather.climate import ClimateData  # noqa: E402

SAMPLE_FARM_PATH = Path(__file__).parent.parent / "examples" / "sample_farm.json"


@pytest.fixture
def mock_openmeteo_archive():
    """Mock Open-Meteo Archive API responses."""
    with respx.mock(base_url="https://archive-api.open-meteo.com") as mock:
        yield mock


@pytest.fixture
def sample_farm_path() -> Path:
    return SAMPLE_FARM_PATH


@pytest.fixture
def climate() -> ClimateData:
    """Prairie climate: cold winters, 17 °C in July, P/PE = 400/600."""
    return ClimateData(
        monthly_mean_temperatures=(-10.0, -8.0, -2.0, 5.0, 11.0, 16.0, 17.0, 18.0, 12.0, 6.0, -2.0, -8.0),
        total_annual_precipitation=400.0,
        total_annual_evapotranspiration=600.0,
    )


@pytest.fixture
def warm_climate() -> ClimateData:
    """17 °C all year, so the storage temperature factor is exactly 1."""
    return ClimateData(
        monthly_mean_temperatures=(17.0,) * 12,
        total_annual_precipitation=500.0,
        total_annual_evapotranspiration=500.0,
    )


@pytest.fixture
def make_period():
    """Factory for management periods (one day, 100 goats, no emission factors by default)."""

    def _make(
        animal_type: AnimalType = AnimalType.GOATS,
        start: date = date(2024, 1, 1),
        duration_days: int = 1,
        number_of_animals: int = 100,
        manure: ManureDetails | None = None,
        name: str = "period",
        **kwargs,
    ) -> ManagementPeriod:
        return ManagementPeriod(
            name=name,
            start=start,
            duration_days=duration_days,
            number_of_animals=number_of_animals,
            animal_type=animal_type,
            manure=manure if manure is not None else ManureDetails(nitrogen_excretion_rate=0.0),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_group():
    """Factory for a group from its periods."""

    def _make(*periods: ManagementPeriod, name: str = "Group", animal_type: AnimalType | None = None) -> AnimalGroup:
        return AnimalGroup(
            name=name,
            animal_type=animal_type or periods[0].animal_type,
            management_periods=tuple(periods),
        )

    return _make


@pytest.fixture
def make_farm(climate):
    """Factory for a farm with one component per category of the given groups."""

    def _make(
        *groups: AnimalGroup,
        fields=(),
        manure_exports=(),
        region: str = "default",
        climate_data: ClimateData | None = None,
    ) -> Farm:
        by_category: dict = {}
        for group in groups:
            by_category.setdefault(group.animal_type.category, []).append(group)
        components = tuple(
            AnimalComponent(name=f"{category.value} component", category=category, groups=tuple(category_groups))
            for category, category_groups in by_category.items()
        )
        return Farm(
            name="Test Farm",
            region=region,
            climate=climate_data or climate,
            components=components,
            fields=tuple(fields),
            manure_exports=tuple(manure_exports),
        )

    return _make
