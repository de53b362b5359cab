"""Tests for the daily emissions calculators."""

from dataclasses import fields
from datetime import date

import pytest

from farmghg.core.errors import MissingCoefficientError
from farmghg.data.coefficients import POULTRY_DIETS, CoefficientProvider
from farmghg.data.enums import AnimalType, BeddingMaterialType, ComponentCategory
from farmghg.data.models import Diet, HousingDetails, ManureDetails
from farmghg.emissions.categories import (
    CattleCalculator,
    OtherLivestockCalculator,
    PoultryCalculator,
    SheepCalculator,
    SwineCalculator,
    get_calculator,
)
from farmghg.emissions.constants import N2ON_TO_N2O, NH3N_TO_NH3
from farmghg.emissions.methodology import MethodologyVersion

V2 = MethodologyVersion.V2


def _compute(calculator, period, group, farm, previous=None):
    return calculator.compute_day(period, period.start, previous, group, farm)


class TestGetCalculator:
    """Tests for the calculator registry."""

    @pytest.mark.parametrize(
        "category,cls",
        [
            (ComponentCategory.BEEF, CattleCalculator),
            (ComponentCategory.DAIRY, CattleCalculator),
            (ComponentCategory.SWINE, SwineCalculator),
            (ComponentCategory.SHEEP, SheepCalculator),
            (ComponentCategory.POULTRY, PoultryCalculator),
            (ComponentCategory.OTHER, OtherLivestockCalculator),
        ],
    )
    def test_one_calculator_per_category(self, category, cls):
        calculator = get_calculator(category, "v2")
        assert isinstance(calculator, cls)
        assert calculator.category is category

    def test_methodology_from_string(self):
        assert get_calculator(ComponentCategory.OTHER, "v1").methodology is MethodologyVersion.V1


class TestFixedNitrogenScenario:
    """One day, 100 head, 0.02 kg N/head/day."""

    def test_nitrogen_excreted(self, make_period, make_group, make_farm):
        period = make_period(
            manure=ManureDetails(
                nitrogen_excretion_rate=0.02,
                n2o_direct_emission_factor=0.01,
                volatilization_fraction=0.0,
                leaching_fraction=0.0,
            )
        )
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group))

        assert record.nitrogen_excreted == pytest.approx(2.0)
        assert record.nitrogen_added_from_bedding == 0.0
        assert record.direct_n2on_emission == pytest.approx(2.0 * 0.01)
        assert record.volatilization_n2on_emission == 0.0
        assert record.leaching_n2on_emission == 0.0
        assert record.manure_n2o_emission == pytest.approx(2.0 * 0.01 * N2ON_TO_N2O)

    def test_multiplication_chain(self, make_period, make_group, make_farm):
        period = make_period(
            manure=ManureDetails(
                nitrogen_excretion_rate=0.02,
                n2o_direct_emission_factor=0.01,
                volatilization_fraction=0.2,
                volatilization_emission_factor=0.01,
                leaching_fraction=0.3,
                leaching_emission_factor=0.011,
            )
        )
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group))

        volatilization = 0.02 * 0.2 * 0.01 * 100
        leaching = 0.02 * 0.3 * 0.011 * 100
        assert record.fraction_of_manure_volatilized == 0.2
        assert record.volatilization_n2on_emission == pytest.approx(volatilization)
        assert record.leaching_n2on_emission == pytest.approx(leaching)
        assert record.indirect_n2on_emission == pytest.approx(volatilization + leaching)
        assert record.manure_n2on_emission == pytest.approx(0.02 + volatilization + leaching)
        assert record.nitrogen_available_for_land_application == pytest.approx(2.0 - 0.02 - leaching)

    def test_missing_fixed_rate_raises(self, make_period, make_group, make_farm):
        period = make_period(manure=ManureDetails())
        group = make_group(period)
        with pytest.raises(MissingCoefficientError):
            _compute(OtherLivestockCalculator(V2), period, group, make_farm(group))


class TestEggs:
    """Eggs and newly hatched eggs produce blank records."""

    @pytest.mark.parametrize(
        "animal_type",
        [
            AnimalType.CHICKEN_EGGS,
            AnimalType.TURKEY_EGGS,
            AnimalType.CHICKEN_NEWLY_HATCHED_EGGS,
            AnimalType.TURKEY_NEWLY_HATCHED_EGGS,
        ],
    )
    def test_blank_record(self, animal_type, make_period, make_group, make_farm):
        period = make_period(animal_type=animal_type, manure=ManureDetails(yearly_enteric_methane_rate=1.0))
        group = make_group(period)
        record = _compute(PoultryCalculator(V2), period, group, make_farm(group))

        for f in fields(record):
            value = getattr(record, f.name)
            if isinstance(value, float):
                assert value == 0.0, f.name

    def test_no_energy_emissions(self, make_period, make_group, make_farm):
        period = make_period(animal_type=AnimalType.CHICKEN_EGGS)
        group = make_group(period)
        assert PoultryCalculator(V2).monthly_energy_co2(period, group, 2024, 31, make_farm(group)) == 0.0

    def test_egg_group_with_broiler_period(self, make_period, make_group, make_farm):
        """An egg group stays blank even when its period names a metabolizing type."""
        period = make_period(animal_type=AnimalType.BROILERS, manure=ManureDetails(yearly_enteric_methane_rate=1.0))
        group = make_group(period, animal_type=AnimalType.CHICKEN_EGGS)
        farm = make_farm(group)
        calculator = PoultryCalculator(V2)

        assert _compute(calculator, period, group, farm).enteric_methane_emission == 0.0
        assert calculator.monthly_energy_co2(period, group, 2024, 31, farm) == 0.0


class TestPoultry:
    """Tests for chickens and turkeys."""

    def test_layer_nitrogen_from_diet(self, make_period, make_group, make_farm):
        period = make_period(animal_type=AnimalType.LAYERS_DRY_POULTRY, manure=ManureDetails())
        group = make_group(period)
        record = _compute(PoultryCalculator(V2), period, group, make_farm(group))

        diet = POULTRY_DIETS[AnimalType.LAYERS_DRY_POULTRY]
        intake = diet.daily_mean_intake * diet.crude_protein
        retained = diet.protein_live_weight * diet.weight_gain + diet.protein_content_egg * diet.egg_production / 1000
        assert record.protein_intake == pytest.approx(intake)
        assert record.protein_retained == pytest.approx(retained)
        assert record.nitrogen_excretion_rate == pytest.approx((intake - retained) / 6.25)
        assert record.nitrogen_excreted == pytest.approx((intake - retained) / 6.25 * 100)

    def test_broiler_nitrogen_from_growth(self, make_period, make_group, make_farm):
        period = make_period(animal_type=AnimalType.BROILERS, manure=ManureDetails())
        group = make_group(period)
        record = _compute(PoultryCalculator(V2), period, group, make_farm(group))

        diet = POULTRY_DIETS[AnimalType.BROILERS]
        retained = (diet.final_weight - diet.initial_weight) * 0.175 / diet.production_period
        assert record.protein_retained == pytest.approx(retained)

    def test_chicken_manure_methane_from_volatile_solids(self, make_period, make_group, make_farm):
        manure = ManureDetails(volatile_solids=0.02, methane_producing_capacity=0.39, methane_conversion_factor=0.015)
        period = make_period(animal_type=AnimalType.BROILERS, manure=manure)
        group = make_group(period)
        record = _compute(PoultryCalculator(V2), period, group, make_farm(group))

        rate = 0.02 * 0.39 * 0.67 * 0.015
        assert record.manure_methane_emission_rate == pytest.approx(rate)
        assert record.manure_methane_emission == pytest.approx(rate * 100)
        assert record.carbon_lost_as_methane == pytest.approx(rate * 100 * 12 / 16)

    def test_turkey_uses_constant_rates(self, make_period, make_group, make_farm):
        manure = ManureDetails(
            volatile_solids=0.5,
            methane_producing_capacity=0.39,
            methane_conversion_factor=0.015,
            daily_manure_methane_rate=0.0003,
            nitrogen_excretion_rate=0.0033,
        )
        period = make_period(animal_type=AnimalType.TURKEY_TOMS, manure=manure)
        group = make_group(period)
        record = _compute(PoultryCalculator(V2), period, group, make_farm(group))

        assert record.manure_methane_emission == pytest.approx(0.03)
        assert record.nitrogen_excreted == pytest.approx(0.33)
        assert record.protein_intake == 0.0

    def test_turkey_without_rate_raises(self, make_period, make_group, make_farm):
        period = make_period(animal_type=AnimalType.TURKEY_HENS, manure=ManureDetails())
        group = make_group(period)
        with pytest.raises(MissingCoefficientError):
            _compute(PoultryCalculator(V2), period, group, make_farm(group))

    def test_missing_diet_raises(self, make_period, make_group, make_farm):
        period = make_period(animal_type=AnimalType.LAYERS_DRY_POULTRY, manure=ManureDetails())
        group = make_group(period)
        calculator = PoultryCalculator(V2, CoefficientProvider(poultry_diets={}))
        with pytest.raises(MissingCoefficientError):
            _compute(calculator, period, group, make_farm(group))

    def test_enteric_methane_from_yearly_rate(self, make_period, make_group, make_farm):
        manure = ManureDetails(yearly_enteric_methane_rate=3.65, nitrogen_excretion_rate=0.001)
        period = make_period(animal_type=AnimalType.TURKEY_TOMS, manure=manure)
        group = make_group(period)
        record = _compute(PoultryCalculator(V2), period, group, make_farm(group))
        assert record.enteric_methane_emission == pytest.approx(1.0)

    def test_energy_emissions(self, make_period, make_group, make_farm):
        period = make_period(animal_type=AnimalType.BROILERS)
        group = make_group(period)
        energy = PoultryCalculator(V2).monthly_energy_co2(period, group, 2024, 31, make_farm(group))
        # default region, latest table year 2020: 0.12 kg CO2/kWh
        assert energy == pytest.approx(100 * 2.88 / 365 * 0.12 * 31)


class TestCarbonAndBedding:
    """Tests for fecal and bedding carbon."""

    def test_bedding_material_coefficient(self, make_period, make_group, make_farm):
        housing = HousingDetails(bedding_material=BeddingMaterialType.STRAW, bedding_rate=2.0, bedding_carbon=0.45)
        manure = ManureDetails(
            nitrogen_excretion_rate=0.0, manure_excretion_rate=10.0, fraction_of_carbon_in_manure=0.05
        )
        period = make_period(housing=housing, manure=manure)
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group))

        assert record.fecal_carbon_excretion == pytest.approx(10.0 * 0.05 * 100)
        assert record.carbon_added_from_bedding == pytest.approx(2.0 * 0.45 * 0.90 * 100)
        assert record.carbon_from_manure_and_bedding == pytest.approx(50.0 + 81.0)
        assert record.carbon_in_stored_manure == pytest.approx(131.0)

    def test_bedding_moisture_content(self, make_period, make_group, make_farm):
        housing = HousingDetails(
            bedding_material=BeddingMaterialType.STRAW,
            bedding_rate=2.0,
            bedding_nitrogen=0.01,
            bedding_moisture_content=25.0,
        )
        period = make_period(housing=housing)
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group))
        assert record.nitrogen_added_from_bedding == pytest.approx(2.0 * 0.01 * 0.75 * 100)

    def test_bedding_table_only_read_when_needed(self, make_period, make_group, make_farm):
        """A bedding table without NONE still serves unbedded and moisture-measured housing."""
        calculator = OtherLivestockCalculator(
            V2, CoefficientProvider(bedding_dry_matter={BeddingMaterialType.STRAW: 0.9})
        )
        measured = HousingDetails(bedding_rate=2.0, bedding_nitrogen=0.01, bedding_moisture_content=10.0)
        for housing in (HousingDetails(), measured):
            period = make_period(housing=housing)
            group = make_group(period)
            record = _compute(calculator, period, group, make_farm(group))
            expected = 2.0 * 0.01 * 0.9 * 100 if housing is measured else 0.0
            assert record.nitrogen_added_from_bedding == pytest.approx(expected)

        bedded = make_period(housing=HousingDetails(bedding_material=BeddingMaterialType.SAWDUST, bedding_rate=1.0))
        group = make_group(bedded)
        with pytest.raises(MissingCoefficientError, match="bedding dry matter"):
            _compute(calculator, bedded, group, make_farm(group))


class TestCattle:
    """Tests for beef and dairy cattle."""

    def _period(self, make_period, animal_type, **kwargs):
        return make_period(
            animal_type=animal_type,
            number_of_animals=10,
            duration_days=100,
            start_weight=500.0,
            end_weight=550.0,
            diet=Diet(crude_protein=0.14, dry_matter_intake=10.0, digestible_energy=0.65, methane_conversion_factor=6.5),
            manure=ManureDetails(methane_producing_capacity=0.19, methane_conversion_factor=0.02),
            **kwargs,
        )

    def test_enteric_methane_from_gross_energy(self, make_period, make_group, make_farm):
        period = self._period(make_period, AnimalType.BEEF_FINISHING_STEER)
        group = make_group(period)
        record = _compute(CattleCalculator(ComponentCategory.BEEF, V2), period, group, make_farm(group))

        rate = 10.0 * 18.45 * 0.065 / 55.65
        assert record.gross_energy_intake == pytest.approx(184.5)
        assert record.enteric_methane_emission_rate == pytest.approx(rate)
        assert record.enteric_methane_emission == pytest.approx(rate * 10)

    def test_volatile_solids_estimated_from_diet(self, make_period, make_group, make_farm):
        period = self._period(make_period, AnimalType.BEEF_FINISHING_STEER)
        group = make_group(period)
        record = _compute(CattleCalculator(ComponentCategory.BEEF, V2), period, group, make_farm(group))

        vs = 10.0 * (1 - 0.65 + 0.04) * (1 - 0.08)
        assert record.volatile_solids == pytest.approx(vs)
        assert record.manure_methane_emission_rate == pytest.approx(vs * 0.19 * 0.67 * 0.02)

    def test_growth_nitrogen(self, make_period, make_group, make_farm):
        period = self._period(make_period, AnimalType.BEEF_FINISHING_STEER)
        group = make_group(period)
        record = _compute(CattleCalculator(ComponentCategory.BEEF, V2), period, group, make_farm(group))

        retained = 50.0 * 0.16 / 100
        assert record.protein_retained == pytest.approx(retained)
        assert record.nitrogen_excretion_rate == pytest.approx((1.4 - retained) / 6.25)

    def test_dairy_milk_protein_retained(self, make_period, make_group, make_farm):
        period = self._period(
            make_period, AnimalType.DAIRY_LACTATING_COW, milk_production=30.0, milk_protein=0.033
        )
        group = make_group(period)
        record = _compute(CattleCalculator(ComponentCategory.DAIRY, V2), period, group, make_farm(group))

        retained = 50.0 * 0.16 / 100 + 30.0 * 0.033
        assert record.protein_retained == pytest.approx(retained)

    def test_rejects_non_cattle_category(self):
        with pytest.raises(ValueError):
            CattleCalculator(ComponentCategory.SWINE, V2)


class TestSwineAndSheep:
    """Tests for swine and sheep."""

    def test_swine_manure_methane_from_volatile_solids(self, make_period, make_group, make_farm):
        manure = ManureDetails(
            yearly_enteric_methane_rate=1.5,
            volatile_solids=0.3,
            methane_producing_capacity=0.45,
            methane_conversion_factor=0.1,
            nitrogen_excretion_rate=0.03,
        )
        period = make_period(animal_type=AnimalType.SWINE_FINISHER, manure=manure)
        group = make_group(period)
        record = _compute(SwineCalculator(V2), period, group, make_farm(group))

        assert record.enteric_methane_emission == pytest.approx(1.5 * 100 / 365)
        assert record.manure_methane_emission == pytest.approx(0.3 * 0.45 * 0.67 * 0.1 * 100)
        assert record.nitrogen_excreted == pytest.approx(3.0)

    def test_sheep_constant_manure_methane(self, make_period, make_group, make_farm):
        manure = ManureDetails(daily_manure_methane_rate=0.0005, volatile_solids=1.0, methane_producing_capacity=0.2)
        period = make_period(
            animal_type=AnimalType.EWES,
            manure=manure,
            diet=Diet(crude_protein=0.15, dry_matter_intake=1.5),
        )
        group = make_group(period)
        record = _compute(SheepCalculator(V2), period, group, make_farm(group))

        assert record.manure_methane_emission == pytest.approx(0.05)
        assert record.nitrogen_excretion_rate == pytest.approx(1.5 * 0.15 / 6.25)

    def test_sheep_and_other_have_no_energy(self, make_period, make_group, make_farm):
        period = make_period(animal_type=AnimalType.EWES)
        group = make_group(period)
        farm = make_farm(group)
        assert SheepCalculator(V2).monthly_energy_co2(period, group, 2024, 31, farm) == 0.0
        assert OtherLivestockCalculator(V2).monthly_energy_co2(period, group, 2024, 31, farm) == 0.0


class TestAmmonia:
    """Tests for housing and storage ammonia and the v1/v2 equation sets."""

    def _manure(self, **kwargs):
        return ManureDetails(
            nitrogen_excretion_rate=0.1,
            tan_fraction_of_excreted_nitrogen=0.6,
            storage_ammonia_emission_factor=0.1,
            **kwargs,
        )

    def _housing(self):
        return HousingDetails(ammonia_emission_factor=0.2)

    def test_housing_ammonia(self, make_period, make_group, make_farm, warm_climate):
        period = make_period(number_of_animals=10, manure=self._manure(), housing=self._housing())
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group, climate_data=warm_climate))

        assert record.tan_excretion == pytest.approx(0.6)
        assert record.ammonia_concentration_in_housing == pytest.approx(0.12)
        assert record.ammonia_emissions_from_housing == pytest.approx(0.12 * NH3N_TO_NH3)

    def test_yearly_tan_rate_takes_precedence(self, make_period, make_group, make_farm):
        period = make_period(number_of_animals=10, manure=self._manure(yearly_tan_excretion=36.5))
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group))
        assert record.tan_excretion_rate == pytest.approx(0.1)

    def test_v2_first_day_has_no_prior_term(self, make_period, make_group, make_farm, warm_climate):
        period = make_period(number_of_animals=10, manure=self._manure(), housing=self._housing())
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group, climate_data=warm_climate))

        assert record.tan_entering_storage == record.tan_excretion
        assert record.ammonia_lost_from_storage == pytest.approx(0.6 * 0.1)

    def test_v2_carries_over_previous_day(self, make_period, make_group, make_farm, warm_climate):
        period = make_period(number_of_animals=10, duration_days=2, manure=self._manure(), housing=self._housing())
        group = make_group(period)
        farm = make_farm(group, climate_data=warm_climate)
        calculator = OtherLivestockCalculator(V2)

        first = calculator.compute_day(period, date(2024, 1, 1), None, group, farm)
        second = calculator.compute_day(period, date(2024, 1, 2), first, group, farm)

        assert second.tan_entering_storage == pytest.approx(0.6 + 0.6 - 0.12)
        assert second.ammonia_lost_from_storage == pytest.approx(1.08 * 0.1)
        assert second.ammonia_emissions_from_storage == pytest.approx(1.08 * 0.1 * NH3N_TO_NH3)

    def test_v2_temperature_adjustment(self, make_period, make_group, make_farm):
        # July is 17 °C, April is 5 °C
        manure = self._manure()
        july = make_period(number_of_animals=10, start=date(2024, 7, 1), manure=manure)
        april = make_period(number_of_animals=10, start=date(2024, 4, 1), manure=manure)
        calculator = OtherLivestockCalculator(V2)

        july_record = _compute(calculator, july, make_group(july), make_farm(make_group(july)))
        april_record = _compute(calculator, april, make_group(april), make_farm(make_group(april)))

        assert july_record.storage_temperature_factor == 1.0
        assert april_record.storage_temperature_factor == pytest.approx(1 - 0.058 * 12)
        assert april_record.ammonia_lost_from_storage == pytest.approx(0.6 * 0.1 * (1 - 0.058 * 12))

    def test_v2_cold_month_has_no_storage_loss(self, make_period, make_group, make_farm):
        period = make_period(number_of_animals=10, manure=self._manure())
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group))
        assert record.storage_temperature_factor == 0.0
        assert record.ammonia_lost_from_storage == 0.0

    def test_v1_constant_storage_loss(self, make_period, make_group, make_farm):
        period = make_period(number_of_animals=10, duration_days=2, manure=self._manure(), housing=self._housing())
        group = make_group(period)
        farm = make_farm(group)
        calculator = OtherLivestockCalculator(MethodologyVersion.V1)

        first = calculator.compute_day(period, date(2024, 1, 1), None, group, farm)
        second = calculator.compute_day(period, date(2024, 1, 2), first, group, farm)

        # No carry-over and no temperature adjustment, even in January
        for record in (first, second):
            assert record.tan_entering_storage == pytest.approx(0.6)
            assert record.storage_temperature_factor == 1.0
            assert record.ammonia_lost_from_storage == pytest.approx(0.06 * 0.1 * 10)

    def test_volatilization_fraction_computed(self, make_period, make_group, make_farm, warm_climate):
        period = make_period(number_of_animals=10, manure=self._manure(), housing=self._housing())
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group, climate_data=warm_climate))

        assert record.fraction_of_manure_volatilized == pytest.approx((0.12 + 0.06) / 1.0)

    def test_zero_nitrogen_gives_zero_fractions(self, make_period, make_group, make_farm):
        period = make_period(manure=ManureDetails(nitrogen_excretion_rate=0.0, fraction_of_nitrogen_in_manure=0.0))
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group))

        assert record.fraction_of_manure_volatilized == 0.0
        assert record.manure_carbon_nitrogen_ratio == 0.0
        assert record.volume_available_for_land_application == 0.0


class TestLandApplicationAvailability:
    """Tests for N, TAN and volume left for land application."""

    def test_available_nitrogen_split(self, make_period, make_group, make_farm, warm_climate):
        manure = ManureDetails(
            nitrogen_excretion_rate=0.1,
            storage_ammonia_emission_factor=0.1,
            n2o_direct_emission_factor=0.01,
            fraction_of_nitrogen_in_manure=0.005,
            manure_excretion_rate=20.0,
            fraction_of_carbon_in_manure=0.05,
        )
        housing = HousingDetails(ammonia_emission_factor=0.2)
        period = make_period(number_of_animals=10, manure=manure, housing=housing)
        group = make_group(period)
        record = _compute(OtherLivestockCalculator(V2), period, group, make_farm(group, climate_data=warm_climate))

        n_available = 1.0 - (0.01 + 0.12 + 0.06)
        tan_available = 0.6 - 0.12 - 0.06
        assert record.nitrogen_available_for_land_application == pytest.approx(n_available)
        assert record.tan_available_for_land_application == pytest.approx(tan_available)
        assert record.organic_nitrogen_available_for_land_application == pytest.approx(n_available - tan_available)
        assert record.volume_available_for_land_application == pytest.approx(n_available / 0.005)
        assert record.manure_carbon_nitrogen_ratio == pytest.approx(10.0 / n_available)
