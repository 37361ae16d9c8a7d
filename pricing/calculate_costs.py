"""
Route Pricing Calculator

DataFrame in, DataFrame out. The input can come from any source (CSV export,
manual creation in a test) as long as it contains the required columns. The
output has one row per route with its summary figures and price appended.

REQUIRED INPUT COLUMNS
----------------------
    route_name                  - Route identifier
    order                       - Sequence order
    lat, lon                    - Coordinates (stop identity)
    distance_first_point_km     - Route-level distance, depot to first point
    distance_within_route_km    - Route-level distance inside the route

OPTIONAL INPUT COLUMNS
----------------------
    weight_kg, volume_cm3       - Missing or null count as zero
    driver_name, caf_id         - Used by reconciliation

OUTPUT COLUMNS
--------------
    supplement_routes() produces:
        - route_name, distance_km, total_packages, unique_stops
        - total_weight_kg, total_volume_m3, extra_packages

    calculate() adds:
        - vehicle
        - multiplier_* values (v, t, c, s, sla, r) and multiplier_product
        - cost_* amounts (distance, weight, volume, multi_package, fixed, total)
        - calculator_version, rate_table_version

VEHICLE ASSIGNMENT
------------------
route_vehicles maps route_name -> vehicle. It is owned by the caller and
passed into every call; routes missing from it use DEFAULT_VEHICLE.

USAGE
-----
    from pricing.calculate_costs import calculate_costs
    result = calculate_costs(points, params, route_vehicles={"R1": "van"})
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

import polars as pl

from shared.errors import ConfigurationError
from shared.money import ZERO, round2, to_decimal
from shared.sorting import natural_key
from .aggregate import aggregate_points, aggregate_route, summarize_points
from .data.reference.defaults import DEFAULT_VEHICLE
from .data.reference.rate_tables import RATE_TABLE_VERSION, VEHICLES
from .engine import calculate_price
from .models import AggregatedRouteMetrics, PricingParams, PricingResult, default_params
from .multipliers import ALL as ALL_MULTIPLIERS
from .version import VERSION


logger = logging.getLogger(__name__)


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def calculate_costs(
    points: pl.DataFrame,
    params: PricingParams | None = None,
    route_vehicles: Mapping[str, str] | None = None,
) -> pl.DataFrame:
    """
    Price every route of a points DataFrame.

    This is the main entry point. Takes raw route points and returns one
    row per route with summary figures and costs.

    Args:
        points: Route points DataFrame (see module docstring)
        params: Pricing configuration (dashboard defaults if not provided)
        route_vehicles: route_name -> vehicle; unmapped routes use DEFAULT_VEHICLE

    Returns:
        DataFrame with one row per route, in natural route order
    """
    df = supplement_routes(points)
    df = calculate(df, params, route_vehicles)
    return df


# =============================================================================
# SUPPLEMENT ROUTES
# =============================================================================

def supplement_routes(points: pl.DataFrame) -> pl.DataFrame:
    """
    Summarize points into one row per route, in natural route order.

    Args:
        points: Route points DataFrame

    Returns:
        DataFrame with route_name and the summary columns
    """
    df = summarize_points(points, by="route_name")
    return _sort_routes(df)


def _sort_routes(df: pl.DataFrame) -> pl.DataFrame:
    """Sort by route name, numbers by value ("R2" before "R10")."""
    names = sorted(df["route_name"].to_list(), key=natural_key)
    rank = {name: i for i, name in enumerate(names)}
    return (
        df
        .with_columns(pl.col("route_name").replace_strict(rank, return_dtype=pl.Int64).alias("_rank"))
        .sort("_rank")
        .drop("_rank")
    )


# =============================================================================
# CALCULATE COSTS
# =============================================================================

def calculate(
    df: pl.DataFrame,
    params: PricingParams | None = None,
    route_vehicles: Mapping[str, str] | None = None,
) -> pl.DataFrame:
    """
    Price supplemented routes.

    Args:
        df: Route summaries from supplement_routes
        params: Pricing configuration (dashboard defaults if not provided)
        route_vehicles: route_name -> vehicle

    Returns:
        DataFrame with vehicle, multipliers, costs and version stamps
    """
    if params is None:
        params = default_params()
    route_vehicles = validate_route_vehicles(route_vehicles)

    vehicles = [route_vehicles.get(name, DEFAULT_VEHICLE) for name in df["route_name"].to_list()]
    results = [
        _price_summary_row(row, params.with_vehicle(vehicle))
        for row, vehicle in zip(df.iter_rows(named=True), vehicles)
    ]
    logger.debug("Priced %d routes", len(results))

    df = df.with_columns(pl.Series("vehicle", vehicles, dtype=pl.Utf8))
    df = _add_multiplier_columns(df, results)
    df = _add_cost_columns(df, results)
    df = _stamp_version(df)

    return df


def _price_summary_row(row: dict, params: PricingParams) -> PricingResult:
    """Run the rate engine on one summary row."""
    return calculate_price(
        row["distance_km"],
        params,
        total_packages=row["total_packages"],
        unique_stops=row["unique_stops"],
        total_weight_kg=row["total_weight_kg"],
        total_volume_m3=row["total_volume_m3"],
    )


def _add_multiplier_columns(df: pl.DataFrame, results: list[PricingResult]) -> pl.DataFrame:
    """One column per multiplier, plus the applied product."""
    return df.with_columns(
        [
            pl.Series(
                f"multiplier_{m.name.lower()}",
                [float(r.multipliers.as_dict()[m.name]) for r in results],
                dtype=pl.Float64,
            )
            for m in ALL_MULTIPLIERS
        ] + [
            pl.Series("multiplier_product", [float(r.multiplier_product) for r in results], dtype=pl.Float64),
        ]
    )


def _add_cost_columns(df: pl.DataFrame, results: list[PricingResult]) -> pl.DataFrame:
    """Cost columns, each rounded to cents."""
    def cents(values: list[Decimal]) -> list[float]:
        return [float(round2(v)) for v in values]

    return df.with_columns([
        pl.Series("cost_distance", cents([r.base for r in results]), dtype=pl.Float64),
        pl.Series("cost_weight", cents([r.base_weight for r in results]), dtype=pl.Float64),
        pl.Series("cost_volume", cents([r.base_volume for r in results]), dtype=pl.Float64),
        pl.Series("cost_multi_package", cents([r.multi_package_addition for r in results]), dtype=pl.Float64),
        pl.Series("cost_fixed", cents([r.fixed_fee for r in results]), dtype=pl.Float64),
        pl.Series("cost_total", cents([r.final_price for r in results]), dtype=pl.Float64),
    ])


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator and rate table versions on output."""
    return df.with_columns([
        pl.lit(VERSION).alias("calculator_version"),
        pl.lit(RATE_TABLE_VERSION).alias("rate_table_version"),
    ])


# =============================================================================
# OPERATION
# =============================================================================

def price_operation(
    points: pl.DataFrame,
    params: PricingParams | None = None,
    route_vehicles: Mapping[str, str] | None = None,
) -> tuple[AggregatedRouteMetrics, PricingResult]:
    """
    Price the whole operation as one unit.

    Distance, packages, stops, weight and volume are aggregated over every
    route. The cost per km is the one of params.vehicle; the fixed fee is
    summed over the fleet (one vehicle per route, from route_vehicles).

    Returns:
        (metrics, result) for the operation
    """
    if params is None:
        params = default_params()
    route_vehicles = validate_route_vehicles(route_vehicles)

    metrics = aggregate_points(points)
    route_names = points["route_name"].unique(maintain_order=True).to_list()
    fleet = [route_vehicles.get(name, DEFAULT_VEHICLE) for name in route_names]

    result = calculate_price(
        metrics.distance_km,
        params,
        total_packages=metrics.total_packages,
        unique_stops=metrics.unique_stops,
        total_weight_kg=metrics.total_weight_kg,
        total_volume_m3=metrics.total_volume_m3,
        fleet=fleet,
    )
    return metrics, result


def operation_totals(priced: pl.DataFrame) -> dict:
    """
    Totals of a calculate_costs() output.

    Returns:
        dict with route_count, total_price (Decimal, sum of route prices),
        unique_stops, total_packages, distance_km, total_weight_kg,
        total_volume_m3
    """
    if priced.height == 0:
        return {
            "route_count": 0,
            "total_price": ZERO,
            "unique_stops": 0,
            "total_packages": 0,
            "distance_km": 0.0,
            "total_weight_kg": 0.0,
            "total_volume_m3": 0.0,
        }

    return {
        "route_count": priced.height,
        "total_price": sum((to_decimal(v) for v in priced["cost_total"].to_list()), ZERO),
        "unique_stops": int(priced["unique_stops"].sum()),
        "total_packages": int(priced["total_packages"].sum()),
        "distance_km": float(priced["distance_km"].sum()),
        "total_weight_kg": float(priced["total_weight_kg"].sum()),
        "total_volume_m3": float(priced["total_volume_m3"].sum()),
    }


# =============================================================================
# AUDIT
# =============================================================================

def audit_route(
    points: pl.DataFrame,
    route_name: str,
    params: PricingParams | None = None,
    route_vehicles: Mapping[str, str] | None = None,
) -> dict:
    """
    Planned view of one route for the audit panel.

    Returns:
        dict with route_name, vehicle, planned_stops, total_packages,
        planned_addition, planned_total, efficiency (stops per package)
        and the full PricingResult under "pricing"

    Raises:
        EmptyInputError: If the route has no points
    """
    if params is None:
        params = default_params()
    route_vehicles = validate_route_vehicles(route_vehicles)

    metrics = aggregate_route(points, route_name)
    vehicle = route_vehicles.get(route_name, DEFAULT_VEHICLE)
    result = calculate_price(
        metrics.distance_km,
        params.with_vehicle(vehicle),
        total_packages=metrics.total_packages,
        unique_stops=metrics.unique_stops,
        total_weight_kg=metrics.total_weight_kg,
        total_volume_m3=metrics.total_volume_m3,
    )

    return {
        "route_name": route_name,
        "vehicle": vehicle,
        "planned_stops": metrics.unique_stops,
        "total_packages": metrics.total_packages,
        "planned_addition": result.multi_package_addition,
        "planned_total": result.final_price,
        "efficiency": metrics.unique_stops / metrics.total_packages,
        "pricing": result,
    }


# =============================================================================
# HELPERS
# =============================================================================

def validate_route_vehicles(route_vehicles: Mapping[str, str] | None) -> Mapping[str, str]:
    """
    Check every mapped vehicle is a known vehicle class.

    Returns:
        The mapping (empty dict for None)

    Raises:
        ConfigurationError: Listing the routes with unknown vehicles
    """
    if route_vehicles is None:
        return {}

    unknown = {route: v for route, v in route_vehicles.items() if v not in VEHICLES}
    if unknown:
        details = ", ".join(f"{route}={v!r}" for route, v in unknown.items())
        raise ConfigurationError(f"Unknown vehicles in route assignment: {details}. Use one of {list(VEHICLES)}")
    return route_vehicles


__all__ = [
    "calculate_costs",
    "supplement_routes",
    "calculate",
    "price_operation",
    "operation_totals",
    "audit_route",
    "validate_route_vehicles",
]
