"""
Route Price Calculator
======================

Interactive CLI tool to quote a single route.

Usage:
    python -m pricing.scripts.calculator
"""

from pricing.data.reference.defaults import (
    DEFAULT_VEHICLE,
    DEFAULT_TRAFFIC,
    DEFAULT_WEATHER,
    DEFAULT_SLA,
    DEFAULT_RISK,
    DEFAULT_ORDERS,
    DEFAULT_DRIVERS,
    DEFAULT_PRICE_PER_KG,
    DEFAULT_PRICE_PER_M3,
    DEFAULT_PACKAGE_SURCHARGE_BASE,
)
from pricing.data.reference.rate_tables import VEHICLES, COST_PER_KM, FIXED_FEE, DEFAULT_SURCHARGE_FRACTION
from pricing.engine import calculate_price
from pricing.models import PricingParams, PricingResult
from pricing.multipliers import LOOKUP
from pricing.version import VERSION


def choose(prompt: str, options: list[str], default: str) -> str:
    """Numbered menu; empty input keeps the default."""
    print(f"\n{prompt}:")
    for i, option in enumerate(options, start=1):
        marker = " (default)" if option == default else ""
        print(f"  {i}. {option}{marker}")
    choice = input(f"Select (1-{len(options)}): ").strip()
    if not choice:
        return default
    return options[int(choice) - 1]


def ask_number(prompt: str, default: float | int, cast=float):
    """Numeric prompt; empty input keeps the default."""
    value = input(f"{prompt} [default: {default}]: ").strip()
    return cast(value) if value else default


def get_user_input() -> dict:
    """Prompt user for route details and conditions."""
    print("\n=== Route Price Calculator ===")
    print(f"Version: {VERSION}\n")

    # Route
    distance_km = float(input("Distance (km, first point + within route): "))
    total_packages = ask_number("Packages", 1, int)
    unique_stops = ask_number("Unique stops", total_packages, int)
    total_weight_kg = ask_number("Total weight (kg)", 0.0)
    total_volume_m3 = ask_number("Total volume (m3)", 0.0)

    vehicle = choose("Vehicle", list(VEHICLES), DEFAULT_VEHICLE)

    # Conditions
    levels = {}
    defaults = {
        "traffic": DEFAULT_TRAFFIC,
        "weather": DEFAULT_WEATHER,
        "sla": DEFAULT_SLA,
        "risk": DEFAULT_RISK,
    }
    for m in LOOKUP:
        levels[m.param] = choose(m.label, m.choices(), defaults[m.param])

    # Load
    print()
    orders = ask_number("Orders (pedidos)", DEFAULT_ORDERS, int)
    drivers = ask_number("Drivers (motoristas)", DEFAULT_DRIVERS, int)

    # Rates
    print()
    rates = {
        "price_per_kg": ask_number("Price per kg", DEFAULT_PRICE_PER_KG),
        "price_per_m3": ask_number("Price per m3", DEFAULT_PRICE_PER_M3),
        "package_surcharge_base": ask_number("Extra package base price", DEFAULT_PACKAGE_SURCHARGE_BASE),
        "package_surcharge_fraction": ask_number("Extra package fraction", float(DEFAULT_SURCHARGE_FRACTION)),
    }

    return {
        "distance_km": distance_km,
        "total_packages": total_packages,
        "unique_stops": unique_stops,
        "total_weight_kg": total_weight_kg,
        "total_volume_m3": total_volume_m3,
        "params": PricingParams(vehicle=vehicle, orders=orders, drivers=drivers, **levels, **rates),
    }


def print_results(result: PricingResult, route: dict) -> None:
    """Print calculation results."""
    params = route["params"]

    print("\n" + "=" * 50)
    print("CALCULATION RESULTS")
    print("=" * 50)

    # Input summary
    print(f"\nRoute: {route['distance_km']} km, {route['total_packages']} packages, {route['unique_stops']} stops")
    print(f"Vehicle: {params.vehicle} ({COST_PER_KM[params.vehicle]}/km, fixed {FIXED_FEE[params.vehicle]})")
    print(f"Conditions: traffic {params.traffic}, weather {params.weather}, SLA {params.sla}, risk {params.risk}")
    print(f"Load: {params.orders} orders / {params.drivers} drivers")

    # Multipliers
    print("\n--- Multipliers ---")
    for name, value in result.multipliers.as_dict().items():
        print(f"{name:<4} {value:>8.4f}")

    # Cost breakdown
    print("\n--- Cost Breakdown ---")
    for step in result.breakdown[:-1]:
        note = f"  ({step.note})" if step.note else ""
        print(f"{step.step + ':':<25} {step.value:>10.2f}{note}")

    print(f"{'':<25} {'=' * 10}")
    print(f"{'TOTAL:':<25} {result.final_price:>10.2f}")
    print(f"\nRate tables: {result.rate_table_version}")
    print()


def main():
    """Main entry point."""
    try:
        # Get user input
        route = get_user_input()

        # Price the route
        result = calculate_price(
            route["distance_km"],
            route["params"],
            total_packages=route["total_packages"],
            unique_stops=route["unique_stops"],
            total_weight_kg=route["total_weight_kg"],
            total_volume_m3=route["total_volume_m3"],
        )

        # Print results
        print_results(result, route)

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
