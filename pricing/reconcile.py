"""
Planned vs Settled Reconciliation

Compares what each driver's deliveries are worth under the rate engine
(planned) with what the driver was actually paid (settled).

PLANNED
-------
Points are grouped by driver_name. Each driver group is summarized like a
route (route distances summed over the driver's routes, stops counted per
route) and priced once, with the fixed fee summed over the vehicles of the
driver's routes.

SETTLED
-------
Driver settlement rows are matched through CafID: a driver's settled values
are the sums over every settlement row whose caf_id appears on that
driver's points. Drivers with no matching row have has_settlement = False
and null settled/variance values.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal, localcontext

import polars as pl

from shared.errors import EmptyInputError
from shared.money import MONEY_CONTEXT, ZERO, round2, to_decimal
from shared.sorting import natural_key
from .aggregate import summarize_points
from .calculate_costs import validate_route_vehicles
from .columns import REQUIRED_DRIVER_COST_COLS, require_columns
from .data.reference.defaults import DEFAULT_VEHICLE
from .engine import calculate_price
from .models import PricingParams, default_params


logger = logging.getLogger(__name__)


# =============================================================================
# DRIVER IDENTITY
# =============================================================================

def driver_caf_ids(points: pl.DataFrame) -> dict[str, set[str]]:
    """
    Map each driver to the CafIDs found on their points.

    Blank or null driver names and CafIDs are skipped.
    """
    require_columns(points, ["driver_name", "caf_id"], frame="Route points")

    pairs = (
        points
        .select([
            pl.col("driver_name").cast(pl.Utf8).str.strip_chars(),
            pl.col("caf_id").cast(pl.Utf8).str.strip_chars(),
        ])
        .filter(
            pl.col("driver_name").is_not_null() & (pl.col("driver_name") != "")
            & pl.col("caf_id").is_not_null() & (pl.col("caf_id") != "")
        )
        .unique(maintain_order=True)
    )

    result: dict[str, set[str]] = {}
    for name, caf_id in pairs.iter_rows():
        result.setdefault(name, set()).add(caf_id)
    return result


# =============================================================================
# COMPARISON
# =============================================================================

def compare_planned_to_settled(
    points: pl.DataFrame,
    driver_costs: pl.DataFrame,
    params: PricingParams | None = None,
    route_vehicles: Mapping[str, str] | None = None,
) -> pl.DataFrame:
    """
    One row per driver comparing planned price and settled value.

    Args:
        points: Route points with driver_name and caf_id
        driver_costs: Settlement rows (see load_driver_costs)
        params: Pricing configuration (dashboard defaults if not provided)
        route_vehicles: route_name -> vehicle; unmapped routes use DEFAULT_VEHICLE

    Returns:
        DataFrame, drivers in natural name order:
            - driver_name, routes, total_packages, unique_stops, distance_km
            - planned_total, settled_total, settled_daily_fixed
            - has_settlement, variance (settled - planned), variance_pct

    Raises:
        EmptyInputError: If no point has a driver name
    """
    if params is None:
        params = default_params()
    route_vehicles = validate_route_vehicles(route_vehicles)
    require_columns(points, ["driver_name", "caf_id"], frame="Route points")
    require_columns(driver_costs, REQUIRED_DRIVER_COST_COLS, frame="Driver costs")

    driver_points = _points_with_driver(points)
    if driver_points.height == 0:
        raise EmptyInputError("No route points with a driver name")

    summary = summarize_points(driver_points, by="driver_name")
    driver_routes = _routes_by_driver(driver_points)
    caf_ids = driver_caf_ids(driver_points)
    settlements = _settlements_by_caf_id(driver_costs)

    rows = []
    for row in summary.iter_rows(named=True):
        name = row["driver_name"]
        routes = driver_routes[name]
        fleet = [route_vehicles.get(route, DEFAULT_VEHICLE) for route in routes]

        planned = calculate_price(
            row["distance_km"],
            params,
            total_packages=row["total_packages"],
            unique_stops=row["unique_stops"],
            total_weight_kg=row["total_weight_kg"],
            total_volume_m3=row["total_volume_m3"],
            fleet=fleet,
        ).final_price

        matched = [settlements[c] for c in sorted(caf_ids.get(name, set())) if c in settlements]
        rows.append({
            "driver_name": name,
            "routes": len(routes),
            "total_packages": row["total_packages"],
            "unique_stops": row["unique_stops"],
            "distance_km": row["distance_km"],
            **_compare(planned, matched),
        })

    logger.debug("Reconciled %d drivers against %d settlement rows", len(rows), driver_costs.height)

    rows.sort(key=lambda r: natural_key(r["driver_name"]))
    return pl.DataFrame(rows, schema=RECONCILIATION_SCHEMA)


RECONCILIATION_SCHEMA = {
    "driver_name": pl.Utf8,
    "routes": pl.Int64,
    "total_packages": pl.Int64,
    "unique_stops": pl.Int64,
    "distance_km": pl.Float64,
    "planned_total": pl.Float64,
    "settled_total": pl.Float64,
    "settled_daily_fixed": pl.Float64,
    "has_settlement": pl.Boolean,
    "variance": pl.Float64,
    "variance_pct": pl.Float64,
}


def _compare(planned: Decimal, matched: list[tuple[Decimal, Decimal]]) -> dict:
    """Settled sums and variance for one driver."""
    if not matched:
        return {
            "planned_total": float(planned),
            "settled_total": None,
            "settled_daily_fixed": None,
            "has_settlement": False,
            "variance": None,
            "variance_pct": None,
        }

    with localcontext(MONEY_CONTEXT):
        settled_total = sum((total for total, _ in matched), ZERO)
        settled_daily_fixed = sum((fixed for _, fixed in matched), ZERO)
        variance = round2(settled_total - planned)
        variance_pct = float(variance / planned * 100) if planned != 0 else None

    return {
        "planned_total": float(planned),
        "settled_total": float(round2(settled_total)),
        "settled_daily_fixed": float(round2(settled_daily_fixed)),
        "has_settlement": True,
        "variance": float(variance),
        "variance_pct": variance_pct,
    }


# =============================================================================
# SUMMARY
# =============================================================================

def summarize_reconciliation(df: pl.DataFrame) -> dict:
    """
    Portfolio totals of a compare_planned_to_settled() output.

    Totals only cover drivers with a settlement, so planned and settled
    describe the same set of drivers. Money totals are Decimal, rounded
    half away from zero like every other price.
    """
    if len(df) == 0:
        return {
            "driver_count": 0,
            "matched_drivers": 0,
            "total_planned": ZERO,
            "total_settled": ZERO,
            "variance": ZERO,
            "variance_pct": 0.0,
            "match_rate": 0.0,
        }

    matched = df.filter(pl.col("has_settlement"))
    with localcontext(MONEY_CONTEXT):
        total_planned = round2(sum((to_decimal(v) for v in matched["planned_total"].to_list()), ZERO))
        total_settled = round2(sum((to_decimal(v) for v in matched["settled_total"].to_list()), ZERO))
        variance = round2(total_settled - total_planned)
        variance_pct = float(variance / total_planned * 100) if total_planned != 0 else 0.0

    return {
        "driver_count": len(df),
        "matched_drivers": len(matched),
        "total_planned": total_planned,
        "total_settled": total_settled,
        "variance": variance,
        "variance_pct": variance_pct,
        "match_rate": len(matched) / len(df) * 100,
    }


# =============================================================================
# HELPERS
# =============================================================================

def _points_with_driver(points: pl.DataFrame) -> pl.DataFrame:
    """Points with a non-blank driver name, names stripped."""
    return (
        points
        .with_columns(pl.col("driver_name").cast(pl.Utf8).str.strip_chars())
        .filter(pl.col("driver_name").is_not_null() & (pl.col("driver_name") != ""))
    )


def _routes_by_driver(points: pl.DataFrame) -> dict[str, list[str]]:
    """Distinct routes of each driver, in first-appearance order."""
    routes: dict[str, list[str]] = {}
    for name, route in points.select(["driver_name", "route_name"]).unique(maintain_order=True).iter_rows():
        routes.setdefault(name, []).append(route)
    return routes


def _settlements_by_caf_id(driver_costs: pl.DataFrame) -> dict[str, tuple[Decimal, Decimal]]:
    """CafID -> (sum of total, sum of daily_fixed) as Decimals."""
    df = driver_costs.with_columns(pl.col("caf_id").cast(pl.Utf8).str.strip_chars())
    if "daily_fixed" not in df.columns:
        df = df.with_columns(pl.lit(0.0).alias("daily_fixed"))

    sums: dict[str, tuple[Decimal, Decimal]] = {}
    for caf_id, total, daily_fixed in df.select(["caf_id", "total", "daily_fixed"]).iter_rows():
        if caf_id is None or caf_id == "":
            continue
        prev_total, prev_fixed = sums.get(caf_id, (ZERO, ZERO))
        sums[caf_id] = (
            MONEY_CONTEXT.add(prev_total, to_decimal(total, "total")),
            MONEY_CONTEXT.add(prev_fixed, to_decimal(daily_fixed, "daily_fixed")),
        )
    return sums


__all__ = [
    "driver_caf_ids",
    "compare_planned_to_settled",
    "summarize_reconciliation",
    "RECONCILIATION_SCHEMA",
]
