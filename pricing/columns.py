"""
Column Schema Definitions

Documents all columns at each pipeline stage and provides validation utilities.
"""

import polars as pl

from shared.errors import ValidationError
from .multipliers import ALL as ALL_MULTIPLIERS


# =============================================================================
# ROUTE POINT COLUMNS (one row per package)
# =============================================================================

REQUIRED_POINT_COLS = [
    "route_name",                   # Route identifier
    "order",                        # Sequence order within the dataset
    "lat",                          # Latitude (stop identity)
    "lon",                          # Longitude (stop identity)
    "distance_first_point_km",      # Route-level: depot to first point
    "distance_within_route_km",     # Route-level: distance inside the route
]

OPTIONAL_POINT_COLS = [
    "awb",                          # Package waybill
    "stop",                         # Stop index from the routing tool
    "caf_id",                       # Driver registration id
    "driver_name",                  # Assigned driver
    "weight_kg",                    # Package weight (null counts as 0)
    "volume_cm3",                   # Package volume (null counts as 0)
]


# =============================================================================
# DRIVER COST COLUMNS (one row per settlement line)
# =============================================================================

REQUIRED_DRIVER_COST_COLS = [
    "caf_id",                       # Driver registration id (join key)
    "total",                        # Settled total (ValorTotal)
]

SETTLEMENT_VALUE_COLS = [
    "total",                        # ValorTotal
    "daily_fixed",                  # ValorDiariaFixa
    "additional",                   # ValorAdicional
    "under_300g",                   # ValorMenor_300Gr
    "over_300g",                    # ValorMaior_300Gr
    "over_10kg",                    # ValorMaior_10k
    "over_20kg",                    # ValorMaior_20k
]


# =============================================================================
# SUMMARY COLUMNS (added by summarize_points)
# =============================================================================

SUMMARY_COLS = [
    "distance_km",                  # Route-level distances, summed per route
    "total_packages",               # Number of points
    "unique_stops",                 # Distinct rounded coordinates per route
    "total_weight_kg",              # Sum of weight_kg
    "total_volume_m3",              # Sum of volume_cm3 / 1,000,000
    "extra_packages",               # max(0, total_packages - unique_stops)
]


# =============================================================================
# COST COLUMNS (added by calculate_costs)
# =============================================================================

def _multiplier_cols() -> list[str]:
    """One column per multiplier value."""
    return [f"multiplier_{m.name.lower()}" for m in ALL_MULTIPLIERS]


MULTIPLIER_COLS = _multiplier_cols()
# multiplier_v, multiplier_t, multiplier_c, multiplier_s, multiplier_sla, multiplier_r

COST_COLS = [
    "cost_distance",                # distance_km * cost per km
    "cost_weight",                  # total_weight_kg * price per kg
    "cost_volume",                  # total_volume_m3 * price per m3
    "multiplier_product",           # Product of the applied multipliers
    "cost_multi_package",           # Surcharge for co-located packages
    "cost_fixed",                   # Fixed fee of the vehicle
    "cost_total",                   # Final rounded price
]


# =============================================================================
# METADATA COLUMNS
# =============================================================================

METADATA_COLS = [
    "vehicle",                      # Vehicle the route was priced with
    "calculator_version",           # Version stamp from pricing/version.py
    "rate_table_version",           # Version of the rate tables
]


# =============================================================================
# COLUMN SETS
# =============================================================================

AFTER_CALCULATE = (
    ["route_name"] +
    SUMMARY_COLS +
    MULTIPLIER_COLS +
    COST_COLS +
    METADATA_COLS
)


# =============================================================================
# VALIDATION
# =============================================================================

def require_columns(df: pl.DataFrame, columns: list[str], frame: str = "DataFrame") -> None:
    """
    Check that df carries every column in columns.

    Raises:
        ValidationError: Listing the missing columns
    """
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValidationError(f"{frame} is missing required columns: {', '.join(missing)}")
