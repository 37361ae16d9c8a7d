"""
Compare Planned to Settled
==========================

Compares each driver's planned price (route points priced by the rate engine)
with the driver's settled values and prints the reconciliation.

Usage:
    python -m pricing.scripts.compare_planned_to_settled --points rotas.csv --costs valores.csv
    python -m pricing.scripts.compare_planned_to_settled --points rotas.csv --costs valores.csv --separator ";"
    python -m pricing.scripts.compare_planned_to_settled --points rotas.csv --costs valores.csv --output drivers.csv
"""

import argparse
import logging
from decimal import Decimal
from pathlib import Path

import polars as pl

from pricing.data.loaders import load_route_points, load_driver_costs
from pricing.reconcile import compare_planned_to_settled, summarize_reconciliation
from pricing.scripts.price_routes import add_pricing_arguments, params_from_args, parse_route_vehicles
from pricing.version import VERSION


# =============================================================================
# CONFIGURATION
# =============================================================================

# Drivers listed in the outlier section
TOP_N = 10


# =============================================================================
# FORMATTING
# =============================================================================

def format_amount(value: Decimal | float | None) -> str:
    """Format as amount with thousands separator."""
    if value is None:
        return "-"
    return f"{value:,.2f}"


def format_percent(value: float | None) -> str:
    """Format as signed percentage."""
    if value is None:
        return "-"
    return f"{value:+.1f}%"


# =============================================================================
# OUTPUT
# =============================================================================

def print_drivers(df: pl.DataFrame) -> None:
    """Per-driver table."""
    print(f"\n{'Driver':<30} {'Routes':>6} {'Pkgs':>6} {'Stops':>6} {'Planned':>12} {'Settled':>12} {'Variance':>12} {'%':>8}")
    print("-" * 98)
    for row in df.iter_rows(named=True):
        print(
            f"{row['driver_name'][:30]:<30} {row['routes']:>6} {row['total_packages']:>6} {row['unique_stops']:>6} "
            f"{format_amount(row['planned_total']):>12} {format_amount(row['settled_total']):>12} "
            f"{format_amount(row['variance']):>12} {format_percent(row['variance_pct']):>8}"
        )


def print_outliers(df: pl.DataFrame, top_n: int = TOP_N) -> None:
    """Largest absolute variances among settled drivers."""
    outliers = (
        df
        .filter(pl.col("has_settlement"))
        .with_columns(pl.col("variance").abs().alias("_abs_variance"))
        .sort("_abs_variance", descending=True)
        .head(top_n)
    )
    if len(outliers) == 0:
        return

    print(f"\nLargest variances (top {top_n}):")
    for row in outliers.iter_rows(named=True):
        print(f"  {row['driver_name']:<30} {format_amount(row['variance']):>12} ({format_percent(row['variance_pct'])})")

    unmatched = df.filter(~pl.col("has_settlement"))["driver_name"].to_list()
    if unmatched:
        print(f"\nDrivers without settlement ({len(unmatched)}): {', '.join(unmatched)}")


def print_summary(summary: dict) -> None:
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Drivers compared:    {summary['driver_count']:,}")
    print(f"With settlement:     {summary['matched_drivers']:,}")
    print(f"Planned total:       {format_amount(summary['total_planned'])}")
    print(f"Settled total:       {format_amount(summary['total_settled'])}")
    print(f"Variance:            {format_amount(summary['variance'])} ({summary['variance_pct']:+.2f}%)")
    print(f"Match rate:          {summary['match_rate']:.1f}%")
    print("=" * 60)


# =============================================================================
# MAIN
# =============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Compare planned route prices to settled driver values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m pricing.scripts.compare_planned_to_settled --points rotas.csv --costs valores.csv
  python -m pricing.scripts.compare_planned_to_settled --points rotas.csv --costs valores.csv --vehicle R1=van
        """
    )

    parser.add_argument(
        "--points",
        type=str,
        required=True,
        help="Route points CSV (rotas.csv)"
    )
    parser.add_argument(
        "--costs",
        type=str,
        required=True,
        help="Driver settlement CSV (valores.csv)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the per-driver comparison to this CSV file"
    )
    add_pricing_arguments(parser)

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        route_vehicles = parse_route_vehicles(args.vehicle)
        params = params_from_args(args)

        print("=" * 60)
        print(f"PLANNED VS SETTLED (calculator {VERSION})")
        print("=" * 60)

        print("\nLoading data...")
        points = load_route_points(args.points, separator=args.separator)
        costs = load_driver_costs(args.costs, separator=args.separator)
        print(f"  Loaded {len(points):,} points and {len(costs):,} settlement rows")

        print("Reconciling drivers...")
        df = compare_planned_to_settled(points, costs, params, route_vehicles)
        summary = summarize_reconciliation(df)

        print_drivers(df)
        print_outliers(df)
        print_summary(summary)

        if args.output:
            output_path = Path(args.output)
            df.write_csv(output_path)
            print(f"\nComparison saved to: {output_path.absolute()}")

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
