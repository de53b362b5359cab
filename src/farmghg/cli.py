"""Command line interface for farm emission calculations."""

import argparse
import asyncio
import json
import sys

from farmghg.core import ExternalAPIError, FarmGHGError, get_cache_dir, settings
from farmghg.core.units import format_mass, format_precip, format_temp
from farmghg.data.loader import load_farm
from farmghg.simulation import FarmRun, run_farm
from farmghg.weather.openmeteo import climate_cache_path, get_climate_data

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _load_and_run(args: argparse.Namespace) -> FarmRun:
    farm = load_farm(args.farm)
    return run_farm(farm, methodology=getattr(args, "methodology", None), on_progress=print)


def _selected_years(run: FarmRun, year: int | None) -> list[int]:
    years = run.years()
    return [year] if year is not None else years


def _print_year(run: FarmRun, year: int) -> None:
    print(f"\n--- {year} ---")
    print(f"{'Group':<28} {'Enteric CH4':>14} {'Manure CH4':>14} {'Manure N2O':>14} {'NH3':>12}")
    print("-" * 86)
    for component in run.components:
        for group in component.groups:
            summary = group.year(year)
            if summary is None:
                continue
            t = summary.totals
            print(
                f"{group.group_name:<28} "
                f"{format_mass(t['enteric_methane_emission']):>14} "
                f"{format_mass(t['manure_methane_emission']):>14} "
                f"{format_mass(t['manure_n2o_emission'], decimals=2):>14} "
                f"{format_mass(summary.total_ammonia):>12}"
            )

    totals = run.annual_totals(year)
    print("\nFarm totals:")
    print(f"  Methane:                 {format_mass(totals['total_methane'], label='CH4')}")
    print(f"  Manure N2O:              {format_mass(totals['total_n2o'], decimals=2, label='N2O')}")
    print(f"  Land application N2O:    {format_mass(totals['land_application_indirect_n2o'], decimals=2, label='N2O')}")
    print(f"  Ammonia:                 {format_mass(totals['total_ammonia'], label='NH3')}")
    print(f"  Energy:                  {format_mass(totals['energy_carbon_dioxide'], label='CO2')}")
    print(f"  CO2 equivalent:          {format_mass(totals['carbon_dioxide_equivalent'], label='CO2e')}")
    print(f"  N available for land:    {format_mass(totals['nitrogen_available_for_land_application'], label='N')}")


async def cmd_run(args: argparse.Namespace) -> None:
    """Calculate a farm's emissions."""
    print("=" * 70)
    print("Farm Emissions")
    print("=" * 70)

    run = _load_and_run(args)
    results = run.to_dict(include_daily=args.daily)

    output_path = get_cache_dir() / "emissions_results.json"
    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    if args.json:
        print(json.dumps(results, indent=2))
        return

    print(f"\nFarm: {run.farm.name} ({run.farm.region})")
    for year in _selected_years(run, args.year):
        _print_year(run, year)

    if run.land_application:
        print("\nLand application:")
        print(f"{'Date':<12} {'Field':<20} {'Manure':<10} {'Used':>6} {'NH3':>12} {'Indirect N2O':>14}")
        print("-" * 78)
        for r in run.land_application:
            if args.year is not None and r.date.year != args.year:
                continue
            print(
                f"{r.date.isoformat():<12} {r.field_name:<20} {r.animal_type.value:<10} "
                f"{r.fraction_used:>6.2f} {format_mass(r.adjusted_ammonia_emission, decimals=2):>12} "
                f"{format_mass(r.indirect_n2o, decimals=3):>14}"
            )

    print(f"\nSaved to: {output_path}")


async def cmd_manure(args: argparse.Namespace) -> None:
    """Show manure tank balances."""
    print("=" * 70)
    print("Manure Tanks")
    print("=" * 70)

    run = _load_and_run(args)
    service = run.manure

    for year in _selected_years(run, args.year):
        print(f"\n--- {year} ---")
        print(f"{'Manure':<10} {'Produced':>14} {'N':>12} {'TAN':>12} {'Applied':>14} {'Exported':>14}")
        print("-" * 80)
        for tank in service.tanks(year):
            print(
                f"{tank.animal_type.value:<10} {format_mass(tank.volume_created):>14} "
                f"{format_mass(tank.nitrogen_created):>12} {format_mass(tank.tan_created):>12} "
                f"{format_mass(tank.volume_land_applied):>14} {format_mass(tank.volume_exported):>14}"
            )
        print(f"\nTotal produced: {format_mass(service.get_total_volume_created(year))}")
        print(f"Total TAN:      {format_mass(service.get_total_tan_created(year), label='N')}")
        print(f"For export:     {format_mass(service.get_amount_available_for_export(year))}")

    produced = service.get_manure_types_produced_on_farm(run.farm)
    if produced:
        print("\nYear with most manure remaining:")
        for category in produced:
            print(f"  {category.value:<10} {service.get_year_highest_volume_remaining(category)}")


async def cmd_climate(args: argparse.Namespace) -> None:
    """Fetch and summarize a year of climate data."""
    lat = args.lat if args.lat is not None else settings.latitude
    lon = args.lon if args.lon is not None else settings.longitude

    print(f"Fetching {args.year} climate for ({lat:.4f}, {lon:.4f}) from Open-Meteo...")
    climate = await get_climate_data(args.year, lat, lon, refresh=args.refresh)
    path = climate_cache_path(args.year)

    print(f"\n{'Month':<6} {'Mean temp':>10}")
    print("-" * 18)
    for i, temp in enumerate(climate.monthly_mean_temperatures):
        print(f"{MONTH_NAMES[i]:<6} {format_temp(temp):>10}")

    print(f"\nMean annual temperature: {format_temp(climate.mean_annual_temperature)}")
    print(f"Annual precipitation:    {format_precip(climate.total_annual_precipitation)}")
    print(f"Annual ET0:              {format_precip(climate.total_annual_evapotranspiration)}")
    print(f"P/PE ratio:              {climate.precipitation_to_evapotranspiration_ratio:.2f}")
    print(f"\nSaved to: {path}")


async def cli_main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Livestock greenhouse gas and nutrient emissions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  farmghg run farm.json                     Annual emissions for every group
  farmghg run farm.json --methodology v1    Constant storage ammonia loss
  farmghg run farm.json --year 2024 --json  One year, as JSON
  farmghg manure farm.json                  Manure tank balances
  farmghg climate --year 2024               Fetch climate for the default location
""",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # run - Farm emissions
    run_parser = subparsers.add_parser("run", help="Calculate farm emissions")
    run_parser.add_argument("farm", help="Farm JSON file")
    run_parser.add_argument(
        "--methodology",
        choices=["v1", "v2"],
        default=None,
        help=f"Storage ammonia equation set (default: {settings.methodology_version})",
    )
    run_parser.add_argument("--year", type=int, help="Only show this year")
    run_parser.add_argument("--json", action="store_true", help="Output as JSON")
    run_parser.add_argument("--daily", action="store_true", help="Include daily records in saved results")

    # manure - Tank balances
    manure_parser = subparsers.add_parser("manure", help="Show manure tank balances")
    manure_parser.add_argument("farm", help="Farm JSON file")
    manure_parser.add_argument("--methodology", choices=["v1", "v2"], default=None)
    manure_parser.add_argument("--year", type=int, help="Only show this year")

    # climate - Open-Meteo climate summary
    climate_parser = subparsers.add_parser("climate", help="Fetch a year of climate data from Open-Meteo")
    climate_parser.add_argument("--year", type=int, required=True, help="Calendar year")
    climate_parser.add_argument("--lat", type=float, help=f"Latitude (default: {settings.latitude})")
    climate_parser.add_argument("--lon", type=float, help=f"Longitude (default: {settings.longitude})")
    climate_parser.add_argument("--refresh", action="store_true", help="Ignore cached climate data")

    args = parser.parse_args()

    try:
        if args.command == "run":
            await cmd_run(args)
        elif args.command == "manure":
            await cmd_manure(args)
        elif args.command == "climate":
            await cmd_climate(args)
        else:
            parser.print_help()
    except (FarmGHGError, ExternalAPIError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli() -> None:
    """CLI entry point."""
    asyncio.run(cli_main())


if __name__ == "__main__":
    cli()
