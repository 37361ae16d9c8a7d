"""
Unit Tests for Point Aggregation

Tests distances, stop counting, weight/volume sums and empty input.

Run with: pytest pricing/tests/test_aggregate.py -v
"""

import logging

import pytest
import polars as pl

from pricing.aggregate import (
    aggregate_points,
    aggregate_route,
    aggregate_driver,
    summarize_points,
    route_summaries,
)
from shared.errors import EmptyInputError, ValidationError


def single_route(lats: list[float], lons: list[float]) -> pl.DataFrame:
    """One route with the given coordinates, 1 km + 1 km on every point."""
    n = len(lats)
    return pl.DataFrame({
        "route_name": ["R"] * n,
        "order": list(range(1, n + 1)),
        "lat": lats,
        "lon": lons,
        "distance_first_point_km": [1.0] * n,
        "distance_within_route_km": [1.0] * n,
    })


# =============================================================================
# ROUTE TESTS
# =============================================================================

class TestAggregateRoute:
    """Tests for a single route."""

    def test_distance_read_once(self, points):
        """Route-level distances are not summed over points."""
        metrics = aggregate_route(points, "R1")
        assert metrics.distance_km == pytest.approx(10.0)

    def test_packages_and_stops(self, points):
        metrics = aggregate_route(points, "R1")
        assert metrics.total_packages == 3
        assert metrics.unique_stops == 2
        assert metrics.extra_packages == 1

    def test_weight_nulls_count_as_zero(self, points):
        metrics = aggregate_route(points, "R1")
        assert metrics.total_weight_kg == pytest.approx(3.5)

    def test_volume_converted_to_m3(self, points):
        """3000 cm3 = 0.003 m3."""
        metrics = aggregate_route(points, "R1")
        assert metrics.total_volume_m3 == pytest.approx(0.003)

    def test_missing_weight_and_volume_columns(self, points):
        metrics = aggregate_route(points.drop(["weight_kg", "volume_cm3"]), "R1")
        assert metrics.total_weight_kg == 0
        assert metrics.total_volume_m3 == 0

    def test_unknown_route_is_empty(self, points):
        """A route with no points raises, never returns zeros."""
        with pytest.raises(EmptyInputError, match="R9"):
            aggregate_route(points, "R9")


# =============================================================================
# STOP IDENTITY TESTS
# =============================================================================

class TestStopIdentity:
    """Tests for unique stop counting."""

    def test_sub_precision_difference_same_stop(self):
        """Coordinates equal to 6 digits are the same stop."""
        df = single_route([-23.1234561, -23.1234564], [-46.5, -46.5])
        assert aggregate_points(df).unique_stops == 1

    def test_above_precision_different_stops(self):
        df = single_route([-23.1234, -23.1235], [-46.5, -46.5])
        assert aggregate_points(df).unique_stops == 2

    def test_negative_zero(self):
        """-0.0 and 0.0 are the same coordinate."""
        df = single_route([-0.0, 0.0], [10.0, 10.0])
        assert aggregate_points(df).unique_stops == 1

    def test_same_location_on_two_routes(self, points):
        """The operation total counts a shared location once per route."""
        metrics = aggregate_points(points)
        assert metrics.unique_stops == 4

    def test_stops_never_exceed_packages(self, points):
        summary = summarize_points(points)
        assert (summary["unique_stops"] <= summary["total_packages"]).all()


# =============================================================================
# GROUP TESTS
# =============================================================================

class TestGroups:
    """Tests for driver and operation groups."""

    def test_operation_sums_route_distances(self, points):
        metrics = aggregate_points(points)
        assert metrics.distance_km == pytest.approx(15.0)
        assert metrics.total_packages == 5

    def test_driver(self, points):
        metrics = aggregate_driver(points, "Bruno")
        assert metrics.distance_km == pytest.approx(5.0)
        assert metrics.total_packages == 2
        assert metrics.unique_stops == 2

    def test_unknown_driver_is_empty(self, points):
        with pytest.raises(EmptyInputError, match="Carla"):
            aggregate_driver(points, "Carla")

    def test_predicate(self, points):
        metrics = aggregate_points(points, pl.col("weight_kg") > 0.75)
        assert metrics.total_packages == 2

    def test_empty_frame(self, points):
        with pytest.raises(EmptyInputError):
            aggregate_points(points.clear())

    def test_summary_per_route(self, points):
        summary = summarize_points(points, by="route_name")
        assert summary["route_name"].to_list() == ["R1", "R2"]
        assert summary["distance_km"].to_list() == pytest.approx([10.0, 5.0])
        assert summary["extra_packages"].to_list() == [1, 0]

    def test_summary_per_driver(self, points):
        summary = summarize_points(points, by="driver_name")
        assert summary["driver_name"].to_list() == ["Ana", "Bruno"]
        assert summary["total_packages"].to_list() == [3, 2]

    def test_driver_counts_shared_location_once(self, points):
        """One driver on two routes through the same location."""
        df = points.with_columns(pl.lit("Ana").alias("driver_name"))
        metrics = aggregate_driver(df, "Ana")
        assert metrics.unique_stops == 3
        assert metrics.total_packages == 5
        assert metrics.distance_km == pytest.approx(15.0)

        summary = summarize_points(df, by="driver_name")
        assert summary["unique_stops"].to_list() == [3]
        assert summary["extra_packages"].to_list() == [2]

        assert aggregate_points(df).unique_stops == 4

    def test_whole_dataset_keeps_group_column(self, points):
        df = points.with_columns(pl.lit("x").alias("group"))
        summary = summarize_points(df, by=None)
        assert summary["group"].to_list() == ["__ALL__"]
        assert summary["total_packages"].to_list() == [5]

        by_group = summarize_points(df, by="group")
        assert by_group["group"].to_list() == ["x"]
        assert by_group["total_packages"].to_list() == [5]


# =============================================================================
# ROUTE SUMMARY TESTS
# =============================================================================

class TestRouteSummaries:
    """Tests for route-level distance extraction."""

    def test_first_point_by_order_wins(self, caplog):
        """Conflicting distance fields: lowest order wins, with a warning."""
        df = pl.DataFrame({
            "route_name": ["R", "R"],
            "order": [2, 1],
            "lat": [0.0, 1.0],
            "lon": [0.0, 1.0],
            "distance_first_point_km": [5.0, 3.0],
            "distance_within_route_km": [1.0, 1.0],
        })
        with caplog.at_level(logging.WARNING, logger="pricing.aggregate"):
            routes = route_summaries(df)
        assert routes["distance_km"][0] == pytest.approx(4.0)
        assert "inconsistent distance" in caplog.text

    def test_null_distance(self):
        df = single_route([0.0], [0.0]).with_columns(
            pl.lit(None, dtype=pl.Float64).alias("distance_first_point_km")
        )
        with pytest.raises(ValidationError, match="without distance"):
            route_summaries(df)

    def test_negative_distance(self):
        df = single_route([0.0], [0.0]).with_columns(
            pl.lit(-3.0).alias("distance_first_point_km")
        )
        with pytest.raises(ValidationError, match="negative"):
            aggregate_points(df)

    def test_missing_column(self, points):
        with pytest.raises(ValidationError, match="distance_within_route_km"):
            aggregate_points(points.drop("distance_within_route_km"))
