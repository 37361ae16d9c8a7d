"""
Price Routes
============

Prices every route of a route points export and prints the table.

Usage:
    python -m pricing.scripts.price_routes --points rotas.csv
    python -m pricing.scripts.price_routes --points rotas.csv --separator ";"
    python -m pricing.scripts.price_routes --points rotas.csv --vehicle R1=van --vehicle R7=moto
    python -m pricing.scripts.price_routes --points rotas.csv --traffic INTENSO --output priced.csv
"""

import argparse
import logging
from pathlib import Path

import polars as pl

from pricing.calculate_costs import calculate_costs, price_operation, operation_totals
from pricing.data.loaders import load_route_points
from pricing.data.reference.defaults import (
    DEFAULT_VEHICLE,
    DEFAULT_ORDERS,
    DEFAULT_DRIVERS,
)
from pricing.data.reference.rate_tables import VEHICLES
from pricing.models import PricingParams, default_params
from pricing.multipliers import LOOKUP
from pricing.version import VERSION


# =============================================================================
# CONFIGURATION
# =============================================================================

# Columns shown in the console table
DISPLAY_COLS = [
    "route_name",
    "vehicle",
    "distance_km",
    "total_packages",
    "unique_stops",
    "extra_packages",
    "total_weight_kg",
    "multiplier_product",
    "cost_multi_package",
    "cost_fixed",
    "cost_total",
]


# =============================================================================
# ARGUMENTS
# =============================================================================

def parse_route_vehicles(values: list[str] | None) -> dict[str, str]:
    """Parse repeated ROUTE=VEHICLE arguments into a mapping."""
    mapping = {}
    for value in values or []:
        route, sep, vehicle = value.partition("=")
        if not sep or not route.strip():
            raise argparse.ArgumentTypeError(f"Expected ROUTE=VEHICLE, got {value!r}")
        mapping[route.strip()] = vehicle.strip()
    return mapping


def add_pricing_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every script that prices routes."""
    defaults = default_params()
    parser.add_argument(
        "--separator",
        type=str,
        default=",",
        help="CSV field separator (default: ',')"
    )
    parser.add_argument(
        "--vehicle",
        action="append",
        metavar="ROUTE=VEHICLE",
        help=f"Vehicle of a route, repeatable (one of {', '.join(VEHICLES)}; default: {DEFAULT_VEHICLE})"
    )
    for m in LOOKUP:
        parser.add_argument(
            f"--{m.param}",
            type=str.upper,
            choices=m.choices(),
            default=getattr(defaults, m.param),
            help=f"{m.label} level"
        )
    parser.add_argument(
        "--orders",
        type=int,
        default=DEFAULT_ORDERS,
        help=f"Orders of the operation (default: {DEFAULT_ORDERS})"
    )
    parser.add_argument(
        "--drivers",
        type=int,
        default=DEFAULT_DRIVERS,
        help=f"Drivers available (default: {DEFAULT_DRIVERS})"
    )
    parser.add_argument(
        "--apply-vehicle-factor",
        action="store_true",
        help="Include the vehicle multiplier V in the multiplier product"
    )
    for flag, attr, label in [
        ("--price-per-kg", "price_per_kg", "Price per kg of weight"),
        ("--price-per-m3", "price_per_m3", "Price per m3 of volume"),
        ("--package-surcharge-base", "package_surcharge_base", "Base price of an extra package"),
        ("--package-surcharge-fraction", "package_surcharge_fraction", "Fraction of the base charged per extra package"),
    ]:
        default = float(getattr(defaults, attr))
        parser.add_argument(
            flag,
            type=float,
            default=default,
            help=f"{label} (default: {default})"
        )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log loader and pipeline progress"
    )


def params_from_args(args: argparse.Namespace) -> PricingParams:
    """Build PricingParams from parsed arguments."""
    return PricingParams(
        traffic=args.traffic,
        weather=args.weather,
        sla=args.sla,
        risk=args.risk,
        orders=args.orders,
        drivers=args.drivers,
        price_per_kg=args.price_per_kg,
        price_per_m3=args.price_per_m3,
        package_surcharge_base=args.package_surcharge_base,
        package_surcharge_fraction=args.package_surcharge_fraction,
        apply_vehicle_factor=args.apply_vehicle_factor,
    )


# =============================================================================
# OUTPUT
# =============================================================================

def print_summary(priced: pl.DataFrame, params: PricingParams, route_vehicles: dict[str, str], points: pl.DataFrame) -> None:
    """Print per-route table and operation totals."""
    with pl.Config(tbl_rows=-1, tbl_cols=-1, tbl_width_chars=200):
        print(priced.select(DISPLAY_COLS))

    totals = operation_totals(priced)
    _, operation = price_operation(points, params, route_vehicles)

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Routes:              {totals['route_count']:,}")
    print(f"Packages:            {totals['total_packages']:,}")
    print(f"Unique stops:        {totals['unique_stops']:,}")
    print(f"Distance:            {totals['distance_km']:,.2f} km")
    print(f"Sum of route prices: {totals['total_price']:,.2f}")
    fixed = next(step for step in operation.breakdown if step.step == "Fixed fee")
    print(f"Operation price:     {operation.final_price:,.2f} (fleet: {fixed.note})")
    print("=" * 60)


# =============================================================================
# MAIN
# =============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Price every route of a route points export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m pricing.scripts.price_routes --points rotas.csv
  python -m pricing.scripts.price_routes --points rotas.csv --vehicle R1=van
  python -m pricing.scripts.price_routes --points rotas.csv --output priced.csv
        """
    )

    parser.add_argument(
        "--points",
        type=str,
        required=True,
        help="Route points CSV (rotas.csv)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the priced routes to this CSV file"
    )
    add_pricing_arguments(parser)

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        route_vehicles = parse_route_vehicles(args.vehicle)
        params = params_from_args(args)

        print("=" * 60)
        print(f"ROUTE PRICING (calculator {VERSION})")
        print("=" * 60)

        print("\nLoading route points...")
        points = load_route_points(args.points, separator=args.separator)
        print(f"  Loaded {len(points):,} points")

        print("Calculating costs...\n")
        priced = calculate_costs(points, params, route_vehicles)

        print_summary(priced, params, route_vehicles, points)

        if args.output:
            output_path = Path(args.output)
            priced.write_csv(output_path)
            print(f"\nPriced routes saved to: {output_path.absolute()}")

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
