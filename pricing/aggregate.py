"""
Aggregate Route Points

Reduces per-package route points into the summary figures the rate engine
prices: distance, packages, unique stops, weight, volume, extra packages.

ROUTE-LEVEL DISTANCES
---------------------
distance_first_point_km and distance_within_route_km are route-level facts
repeated on every point of the route. route_summaries() reads them once per
route (from the point with the lowest order) into a RouteSummary table;
they are never summed across points. A group spanning several routes
(a driver, the whole operation) sums its routes' distances.

STOP IDENTITY
-------------
A stop is a location: its coordinates rounded to STOP_PRECISION digits.
Routes and drivers count distinct locations. The operation total prices
every route on its own, so there a location visited by two routes counts
as two stops (stops_per_route).
"""

import logging

import polars as pl

from shared.errors import EmptyInputError, ValidationError
from .columns import REQUIRED_POINT_COLS, require_columns
from .data.reference.defaults import STOP_PRECISION, CM3_PER_M3
from .models import AggregatedRouteMetrics


logger = logging.getLogger(__name__)

OPERATION_KEY = "__ALL__"

# Internal key of the whole-dataset group, renamed to "group" on output
GROUP_KEY = "_group"


# =============================================================================
# MAIN ENTRY POINTS
# =============================================================================

def aggregate_points(
    points: pl.DataFrame,
    predicate: pl.Expr | None = None,
    stops_per_route: bool = True,
) -> AggregatedRouteMetrics:
    """
    Aggregate a set of points into one AggregatedRouteMetrics.

    Args:
        points: Route points DataFrame
        predicate: Optional filter selecting the group (e.g.,
            pl.col("route_name") == "R1"). None aggregates every point.
        stops_per_route: Count a location once per route visiting it.
            False counts it once for the whole group.

    Returns:
        AggregatedRouteMetrics for the selected points

    Raises:
        EmptyInputError: If no point is selected. Distance is undefined
            for an empty route, so no zero-valued result is returned.
    """
    if predicate is not None:
        points = points.filter(predicate)

    if points.height == 0:
        raise EmptyInputError("No route points to aggregate")

    row = summarize_points(points, by=None, stops_per_route=stops_per_route).row(0, named=True)
    return AggregatedRouteMetrics(
        distance_km=row["distance_km"],
        total_packages=row["total_packages"],
        unique_stops=row["unique_stops"],
        total_weight_kg=row["total_weight_kg"],
        total_volume_m3=row["total_volume_m3"],
    )


def aggregate_route(points: pl.DataFrame, route_name: str) -> AggregatedRouteMetrics:
    """Aggregate the points of one route."""
    try:
        return aggregate_points(points, pl.col("route_name") == route_name)
    except EmptyInputError:
        raise EmptyInputError(f"Route {route_name!r} has no points") from None


def aggregate_driver(points: pl.DataFrame, driver_name: str) -> AggregatedRouteMetrics:
    """Aggregate the points delivered by one driver."""
    require_columns(points, ["driver_name"], frame="Route points")
    try:
        return aggregate_points(points, pl.col("driver_name") == driver_name, stops_per_route=False)
    except EmptyInputError:
        raise EmptyInputError(f"Driver {driver_name!r} has no points") from None


# =============================================================================
# SUMMARIES
# =============================================================================

def summarize_points(
    points: pl.DataFrame,
    by: str | None = "route_name",
    stops_per_route: bool | None = None,
) -> pl.DataFrame:
    """
    Summarize points per group.

    Args:
        points: Route points DataFrame
        by: Grouping column ("route_name", "driver_name", ...) or None to
            summarize the whole dataset as one group
        stops_per_route: Count a location once per route of the group.
            None does so only for the whole-dataset summary.

    Returns:
        DataFrame with one row per group, in first-appearance order:
            - <by> (or "group" when by is None)
            - distance_km, total_packages, unique_stops
            - total_weight_kg, total_volume_m3, extra_packages

    Raises:
        EmptyInputError: If points is empty
    """
    if points.height == 0:
        raise EmptyInputError("No route points to summarize")

    require_columns(points, REQUIRED_POINT_COLS, frame="Route points")
    if by is not None:
        require_columns(points, [by], frame="Route points")

    key = by if by is not None else GROUP_KEY
    if stops_per_route is None:
        stops_per_route = by is None
    stop_partition = [key, "route_name"] if stops_per_route else [key]
    routes = route_summaries(points)
    route_distance = dict(zip(routes["route_name"].to_list(), routes["distance_km"].to_list()))

    df = (
        _prepare_points(points, by, key)
        .with_columns(
            pl.col("route_name")
            .replace_strict(route_distance, return_dtype=pl.Float64)
            .alias("_route_distance_km")
        )
        .with_columns([
            # First point of each route within the group carries its distance
            (pl.int_range(pl.len()).over([key, "route_name"]) == 0).alias("_first_of_route"),
            # First package of each stop
            (
                pl.int_range(pl.len()).over(stop_partition + ["_stop_lat", "_stop_lon"]) == 0
            ).alias("_first_of_stop"),
        ])
    )

    summary = (
        df
        .group_by(key, maintain_order=True)
        .agg([
            pl.col("_route_distance_km").filter(pl.col("_first_of_route")).sum().alias("distance_km"),
            pl.len().cast(pl.Int64).alias("total_packages"),
            pl.col("_first_of_stop").sum().cast(pl.Int64).alias("unique_stops"),
            pl.col("_weight_kg").sum().alias("total_weight_kg"),
            (pl.col("_volume_cm3").sum() / CM3_PER_M3).alias("total_volume_m3"),
        ])
        .with_columns(
            (pl.col("total_packages") - pl.col("unique_stops"))
            .clip(lower_bound=0)
            .alias("extra_packages")
        )
        .select([
            key,
            "distance_km",
            "total_packages",
            "unique_stops",
            "total_weight_kg",
            "total_volume_m3",
            "extra_packages",
        ])
    )
    if by is None:
        summary = summary.rename({GROUP_KEY: "group"})
    return summary


def route_summaries(points: pl.DataFrame) -> pl.DataFrame:
    """
    Derive the RouteSummary table: route-level distances, read once per route.

    Args:
        points: Route points DataFrame

    Returns:
        DataFrame with one row per route (first-appearance order):
            - route_name
            - distance_first_point_km, distance_within_route_km
            - distance_km (sum of the two)

    Raises:
        ValidationError: If a route has no distance values
    """
    require_columns(points, REQUIRED_POINT_COLS, frame="Route points")
    if points["route_name"].null_count() > 0:
        raise ValidationError("Route points with no route_name")
    _warn_inconsistent_distances(points)

    routes = (
        points
        .sort("order", nulls_last=True, maintain_order=True)
        .group_by("route_name", maintain_order=True)
        .agg([
            pl.col("distance_first_point_km").cast(pl.Float64).first(),
            pl.col("distance_within_route_km").cast(pl.Float64).first(),
        ])
        .with_columns(
            (pl.col("distance_first_point_km") + pl.col("distance_within_route_km"))
            .alias("distance_km")
        )
    )

    undefined = routes.filter(
        pl.col("distance_km").is_null() | pl.col("distance_km").is_nan()
    )["route_name"].to_list()
    if undefined:
        raise ValidationError(f"Routes without distance values: {', '.join(map(str, undefined))}")

    negative = routes.filter(pl.col("distance_km") < 0)["route_name"].to_list()
    if negative:
        raise ValidationError(f"Routes with negative distance: {', '.join(map(str, negative))}")

    return routes


# =============================================================================
# HELPERS
# =============================================================================

def stop_key_exprs(precision: int = STOP_PRECISION) -> list[pl.Expr]:
    """Rounded coordinate columns identifying a stop."""
    # + 0.0 folds -0.0 into 0.0 so both round to the same stop
    return [
        (pl.col("lat").cast(pl.Float64).round(precision) + 0.0).alias("_stop_lat"),
        (pl.col("lon").cast(pl.Float64).round(precision) + 0.0).alias("_stop_lon"),
    ]


def _prepare_points(points: pl.DataFrame, by: str | None, key: str) -> pl.DataFrame:
    """Add group key, stop key and zero-filled weight/volume columns."""
    df = points
    if by is None:
        df = df.with_columns(pl.lit(OPERATION_KEY).alias(key))

    return df.with_columns(
        stop_key_exprs() + [
            _zero_filled(df, "weight_kg").alias("_weight_kg"),
            _zero_filled(df, "volume_cm3").alias("_volume_cm3"),
        ]
    )


def _zero_filled(df: pl.DataFrame, col: str) -> pl.Expr:
    """Missing column, null and NaN all count as zero."""
    if col not in df.columns:
        return pl.lit(0.0)
    return pl.col(col).cast(pl.Float64).fill_nan(None).fill_null(0.0)


def _warn_inconsistent_distances(points: pl.DataFrame) -> None:
    """Log routes whose points disagree on the route-level distance fields."""
    conflicting = (
        points
        .group_by("route_name", maintain_order=True)
        .agg([
            pl.col("distance_first_point_km").n_unique().alias("_first"),
            pl.col("distance_within_route_km").n_unique().alias("_within"),
        ])
        .filter((pl.col("_first") > 1) | (pl.col("_within") > 1))
    )["route_name"].to_list()

    if conflicting:
        logger.warning(
            "Routes with inconsistent distance fields (first point wins): %s",
            ", ".join(map(str, conflicting)),
        )


__all__ = [
    "aggregate_points",
    "aggregate_route",
    "aggregate_driver",
    "summarize_points",
    "route_summaries",
    "stop_key_exprs",
    "OPERATION_KEY",
]
