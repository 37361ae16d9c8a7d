"""
Load CSV Datasets

Reads the two exports the pricing works from:
    - rotas.csv   : one row per package (route points)
    - valores.csv : one row per driver settlement line

Headers are matched case-insensitively and renamed to the pipeline column
names (see pricing/columns.py). The separator is passed in explicitly.
"""

import logging
from pathlib import Path

import polars as pl

from ...columns import (
    REQUIRED_POINT_COLS,
    OPTIONAL_POINT_COLS,
    REQUIRED_DRIVER_COST_COLS,
    SETTLEMENT_VALUE_COLS,
    require_columns,
)


logger = logging.getLogger(__name__)

MISSING_ROUTE_NAME = "S/N"


# =============================================================================
# HEADER MAPPINGS
# =============================================================================

# Lowercased export header -> pipeline column
POINT_HEADERS = {
    "routename": "route_name",
    "awb": "awb",
    "order": "order",
    "parada": "stop",
    "lat": "lat",
    "long": "lon",
    "lon": "lon",
    "cafid": "caf_id",
    "nome": "driver_name",
    "peso_kg": "weight_kg",
    "volume_cm3": "volume_cm3",
    "valor": "value",
    "distancia_primeiro_ponto_km": "distance_first_point_km",
    "distancia_dentro_rota_km": "distance_within_route_km",
    "tempo_primeiro_ponto": "time_first_point",
    "tempo_dentro_rota": "time_within_route",
}

DRIVER_COST_HEADERS = {
    "mot_nome": "driver_name",
    "cafid": "caf_id",
    "valordiariafixa": "daily_fixed",
    "valortotal": "total",
    "valoradicional": "additional",
    "valormenor_300gr": "under_300g",
    "valormaior_300gr": "over_300g",
    "valormaior_10k": "over_10kg",
    "valormaior_20k": "over_20kg",
}

POINT_FLOAT_COLS = [
    "lat",
    "lon",
    "weight_kg",
    "volume_cm3",
    "value",
    "distance_first_point_km",
    "distance_within_route_km",
]
POINT_INT_COLS = ["order", "stop"]
POINT_STR_COLS = ["route_name", "awb", "caf_id", "driver_name"]


# =============================================================================
# LOADERS
# =============================================================================

def load_route_points(path: str | Path, separator: str = ",") -> pl.DataFrame:
    """
    Load route points from a CSV export.

    Args:
        path: CSV file path
        separator: Field separator (";" for spreadsheet exports)

    Returns:
        DataFrame with one row per package, sorted by order, with every
        column of REQUIRED_POINT_COLS and OPTIONAL_POINT_COLS present
        (optional columns absent from the file are null).
    """
    df = pl.read_csv(path, separator=separator, infer_schema_length=0)
    df = _rename_headers(df, POINT_HEADERS)
    require_columns(df, REQUIRED_POINT_COLS, frame=f"Route points ({Path(path).name})")

    df = df.with_columns([
        pl.lit(None, dtype=pl.Utf8).alias(c)
        for c in OPTIONAL_POINT_COLS if c not in df.columns
    ])

    df = df.with_columns(
        [pl.col(c).str.strip_chars().cast(pl.Float64, strict=False) for c in POINT_FLOAT_COLS if c in df.columns] +
        [pl.col(c).str.strip_chars().cast(pl.Int64, strict=False) for c in POINT_INT_COLS if c in df.columns] +
        [pl.col(c).str.strip_chars() for c in POINT_STR_COLS]
    )

    df = df.with_columns(
        pl.when(pl.col("route_name").is_null() | (pl.col("route_name") == ""))
        .then(pl.lit(MISSING_ROUTE_NAME))
        .otherwise(pl.col("route_name"))
        .alias("route_name")
    )

    df = df.sort("order", nulls_last=True, maintain_order=True)

    logger.info(
        "Loaded %d route points (%d routes) from %s",
        len(df), df["route_name"].n_unique(), path,
    )
    return df


def load_driver_costs(path: str | Path, separator: str = ",") -> pl.DataFrame:
    """
    Load driver settlement values from a CSV export.

    Values may carry quotes and thousands commas ("1,234.50"); both are
    stripped before casting. Unparseable or missing values become 0.

    Args:
        path: CSV file path
        separator: Field separator

    Returns:
        DataFrame with driver_name, caf_id and every SETTLEMENT_VALUE_COLS
        column as Float64.
    """
    df = pl.read_csv(path, separator=separator, infer_schema_length=0)
    df = _rename_headers(df, DRIVER_COST_HEADERS)
    require_columns(df, REQUIRED_DRIVER_COST_COLS, frame=f"Driver costs ({Path(path).name})")

    if "driver_name" not in df.columns:
        df = df.with_columns(pl.lit(None, dtype=pl.Utf8).alias("driver_name"))

    df = df.with_columns(
        [pl.col(c).str.strip_chars() for c in ["driver_name", "caf_id"]] +
        [
            _parse_amount(c) if c in df.columns else pl.lit(0.0).alias(c)
            for c in SETTLEMENT_VALUE_COLS
        ]
    )

    logger.info("Loaded %d driver settlement rows from %s", len(df), path)
    return df


# =============================================================================
# HELPERS
# =============================================================================

def _rename_headers(df: pl.DataFrame, headers: dict[str, str]) -> pl.DataFrame:
    """Rename export headers to pipeline columns (pipeline names pass through)."""
    known = {**headers, **{v: v for v in headers.values()}}
    rename = {}
    for col in df.columns:
        target = known.get(col.strip().lower())
        if target is not None and target not in rename.values():
            rename[col] = target
    return df.rename(rename)


def _parse_amount(col: str) -> pl.Expr:
    """Strip quotes and thousands commas, cast to float, default 0."""
    return (
        pl.col(col)
        .str.replace_all('"', "", literal=True)
        .str.replace_all(",", "", literal=True)
        .str.strip_chars()
        .cast(pl.Float64, strict=False)
        .fill_null(0.0)
        .alias(col)
    )
