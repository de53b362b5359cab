"""
Daily loop and monthly/annual aggregation.

Each group's days run strictly in order, each day receiving the previous
day's record. Groups do not depend on each other. Monthly summaries sum
the amount fields of the daily records and average the rate fields;
annual summaries do the same over months, so a daily total over a year
always equals the annual total.
"""

from collections import defaultdict
from collections.abc import Callable, Iterable

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.models import AnimalComponent, AnimalGroup, Farm
from farmghg.data.timeline import iter_group_days, validate_group_timeline
from farmghg.emissions.categories import DailyEmissionsCalculator, get_calculator
from farmghg.emissions.methodology import MethodologyVersion
from farmghg.emissions.records import (
    AVERAGED_FIELDS,
    SUMMED_FIELDS,
    AnimalComponentEmissionsResults,
    GroupEmissionsByDay,
    GroupEmissionsByMonth,
    GroupEmissionsByYear,
    GroupEmissionsResult,
)


def _summarize(records: list[GroupEmissionsByDay]) -> tuple[dict[str, float], dict[str, float]]:
    days = len(records)
    totals = {name: sum(getattr(r, name) for r in records) for name in SUMMED_FIELDS}
    averages = {name: sum(getattr(r, name) for r in records) / days if days else 0.0 for name in AVERAGED_FIELDS}
    return totals, averages


def calculate_daily_emissions(
    group: AnimalGroup,
    farm: Farm,
    calculator: DailyEmissionsCalculator,
) -> list[GroupEmissionsByDay]:
    """
    Run the day loop for one group.

    Raises:
        InvalidManagementPeriodError: Before any day is computed, if the timeline is invalid
        MissingCoefficientError: If a lookup fails; no records are returned
    """
    validate_group_timeline(group)

    records: list[GroupEmissionsByDay] = []
    previous: GroupEmissionsByDay | None = None
    for period, day in iter_group_days(group):
        previous = calculator.compute_day(period, day, previous, group, farm)
        records.append(previous)
    return records


def aggregate_by_month(
    records: Iterable[GroupEmissionsByDay],
    group: AnimalGroup,
    farm: Farm,
    calculator: DailyEmissionsCalculator,
) -> list[GroupEmissionsByMonth]:
    """Roll daily records into calendar months, adding barn energy CO2."""
    by_month: dict[tuple[int, int], list[GroupEmissionsByDay]] = defaultdict(list)
    for record in records:
        by_month[(record.date.year, record.date.month)].append(record)

    months = []
    for (year, month), month_records in sorted(by_month.items()):
        energy = 0.0
        for period in group.management_periods:
            days = period.days_in_month(year, month)
            if days:
                energy += calculator.monthly_energy_co2(period, group, year, days, farm)

        totals, averages = _summarize(month_records)
        months.append(
            GroupEmissionsByMonth(
                year=year,
                month=month,
                days=len(month_records),
                totals=totals,
                averages=averages,
                energy_carbon_dioxide=energy,
            )
        )
    return months


def aggregate_by_year(months: Iterable[GroupEmissionsByMonth]) -> list[GroupEmissionsByYear]:
    """Roll monthly summaries into calendar years (rates weighted by days)."""
    by_year: dict[int, list[GroupEmissionsByMonth]] = defaultdict(list)
    for month in months:
        by_year[month.year].append(month)

    years = []
    for year, year_months in sorted(by_year.items()):
        days = sum(m.days for m in year_months)
        totals = {name: sum(m.totals[name] for m in year_months) for name in SUMMED_FIELDS}
        averages = {
            name: sum(m.averages[name] * m.days for m in year_months) / days if days else 0.0
            for name in AVERAGED_FIELDS
        }
        years.append(
            GroupEmissionsByYear(
                year=year,
                days=days,
                totals=totals,
                averages=averages,
                energy_carbon_dioxide=sum(m.energy_carbon_dioxide for m in year_months),
            )
        )
    return years


def calculate_group_emissions(
    group: AnimalGroup,
    farm: Farm,
    methodology: MethodologyVersion | str | None = None,
    coefficients: CoefficientProvider = default_coefficients,
) -> GroupEmissionsResult:
    """Daily records plus monthly and annual summaries for one group."""
    calculator = get_calculator(group.animal_type.category, methodology, coefficients)
    return _run_group(group, farm, calculator)


def _run_group(group: AnimalGroup, farm: Farm, calculator: DailyEmissionsCalculator) -> GroupEmissionsResult:
    daily = calculate_daily_emissions(group, farm, calculator)
    monthly = aggregate_by_month(daily, group, farm, calculator)
    yearly = aggregate_by_year(monthly)
    return GroupEmissionsResult(
        group_name=group.name,
        animal_type=group.animal_type,
        daily=tuple(daily),
        monthly=tuple(monthly),
        yearly=tuple(yearly),
    )


def calculate_component_emissions(
    component: AnimalComponent,
    farm: Farm,
    methodology: MethodologyVersion | str | None = None,
    coefficients: CoefficientProvider = default_coefficients,
) -> AnimalComponentEmissionsResults:
    calculator = get_calculator(component.category, methodology, coefficients)
    groups = [_run_group(group, farm, calculator) for group in component.groups]
    return AnimalComponentEmissionsResults(
        component_name=component.name,
        category=component.category,
        groups=tuple(groups),
    )


def calculate_farm_emissions(
    farm: Farm,
    methodology: MethodologyVersion | str | None = None,
    coefficients: CoefficientProvider = default_coefficients,
    on_progress: Callable[[str], None] | None = None,
) -> list[AnimalComponentEmissionsResults]:
    """
    Emission results for every animal component of a farm.

    Args:
        farm: Farm to simulate
        methodology: Equation set (default: settings.methodology_version)
        coefficients: Coefficient tables
        on_progress: Optional callback for progress messages (e.g. print)

    Raises:
        InvalidManagementPeriodError: If any group's timeline is invalid
        MissingCoefficientError: If any lookup fails
    """
    version = MethodologyVersion.resolve(methodology)
    results = []
    for component in farm.components:
        if on_progress:
            on_progress(f"  {component.name} ({component.category.value}, {len(component.groups)} groups)")
        results.append(calculate_component_emissions(component, farm, version, coefficients))
    return results


def farm_annual_totals(results: Iterable[AnimalComponentEmissionsResults], year: int) -> dict[str, float]:
    """Sum of the components' annual totals for one year."""
    totals: dict[str, float] = defaultdict(float)
    for component in results:
        for name, value in component.annual_totals(year).items():
            totals[name] += value
    return dict(totals)
