#!/usr/bin/env python3
"""
Chart monthly farm emissions from the cached results of `farmghg run`.
"""

import json
import sys
from collections import defaultdict
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from farmghg.core import get_cache_dir
from farmghg.emissions.constants import CH4_GWP, N2O_GWP


def monthly_totals(results: dict) -> dict[str, dict[tuple[int, int], float]]:
    """Farm-wide monthly CH4, N2O and NH3 (kg) summed over every group."""
    series: dict[str, dict[tuple[int, int], float]] = {
        "enteric_ch4": defaultdict(float),
        "manure_ch4": defaultdict(float),
        "n2o": defaultdict(float),
        "nh3": defaultdict(float),
        "energy_co2": defaultdict(float),
    }
    for component in results["components"]:
        for group in component["groups"]:
            for month in group["monthly"]:
                key = (month["year"], month["month"])
                t = month["totals"]
                series["enteric_ch4"][key] += t["enteric_methane_emission"]
                series["manure_ch4"][key] += t["manure_methane_emission"]
                series["n2o"][key] += t["manure_n2o_emission"]
                series["nh3"][key] += t["ammonia_emissions_from_housing"] + t["ammonia_emissions_from_storage"]
                series["energy_co2"][key] += month["energy_carbon_dioxide"]
    return series


def create_emissions_chart():
    """Create a 2-panel chart: monthly gases and the CO2e share by source."""

    with open(get_cache_dir() / "emissions_results.json") as f:
        results = json.load(f)

    series = monthly_totals(results)
    months = sorted(series["enteric_ch4"])
    if not months:
        print("No monthly results to chart")
        return None

    labels = [f"{year}-{month:02d}" for year, month in months]
    enteric = np.array([series["enteric_ch4"][m] for m in months])
    manure = np.array([series["manure_ch4"][m] for m in months])
    n2o = np.array([series["n2o"][m] for m in months])
    nh3 = np.array([series["nh3"][m] for m in months])
    energy = np.array([series["energy_co2"][m] for m in months])

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(14, 10))
    fig.suptitle(f"{results['farm']} - Monthly Emissions ({results['methodology']})", fontsize=14, fontweight="bold")

    # Panel 1: Gases by month
    x = np.arange(len(months))
    width = 0.3
    ax1.bar(x - width, enteric, width, label="Enteric CH4", color="#e67e22")
    ax1.bar(x, manure, width, label="Manure CH4", color="#d35400")
    ax1.bar(x + width, nh3, width, label="NH3", color="#95a5a6")
    ax1.set_ylabel("kg")
    ax1.set_xticks(x)
    ax1.set_xticklabels(labels, rotation=45, ha="right")

    ax1b = ax1.twinx()
    ax1b.plot(x, n2o, color="#8e44ad", marker="o", label="Manure N2O")
    ax1b.set_ylabel("kg N2O")

    handles, names = ax1.get_legend_handles_labels()
    handles_b, names_b = ax1b.get_legend_handles_labels()
    ax1.legend(handles + handles_b, names + names_b, loc="upper left")
    ax1.set_title("Emissions by Month", fontsize=11, fontweight="bold")

    # Panel 2: CO2e stacked by source
    co2e = np.vstack([enteric * CH4_GWP, manure * CH4_GWP, n2o * N2O_GWP, energy]) / 1000
    ax2.stackplot(
        x,
        co2e,
        labels=["Enteric CH4", "Manure CH4", "Manure N2O", "Energy CO2"],
        colors=["#e67e22", "#d35400", "#8e44ad", "#34495e"],
        alpha=0.85,
    )
    ax2.set_ylabel("t CO2e")
    ax2.set_xticks(x)
    ax2.set_xticklabels(labels, rotation=45, ha="right")
    ax2.legend(loc="upper left")
    ax2.set_title(f"CO2 Equivalent: {co2e.sum():.1f} t total", fontsize=11, fontweight="bold")

    plt.tight_layout(rect=[0, 0, 1, 0.95])

    output_path = get_cache_dir() / "emissions_chart.png"
    plt.savefig(output_path, dpi=150, bbox_inches="tight", facecolor="white")
    print(f"Saved: {output_path}")

    plt.close()
    return output_path


if __name__ == "__main__":
    create_emissions_chart()
