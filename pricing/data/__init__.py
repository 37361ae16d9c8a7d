"""
Pricing Data

Reference data and loaders for rate tables and route datasets.

Structure:
    - reference/: Static reference data (rate tables, defaults)
    - loaders/: Dataset loaders (route points and driver settlement CSVs),
      imported as pricing.data.loaders
"""

from .reference.rate_tables import (
    RATE_TABLE_VERSION,
    VEHICLES,
    COST_PER_KM,
    FIXED_FEE,
    VEHICLE_FACTOR,
    DEFAULT_SURCHARGE_FRACTION,
)
from .reference.defaults import (
    STOP_PRECISION,
    DEFAULT_VEHICLE,
    CM3_PER_M3,
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

__all__ = [
    # Rate tables
    "RATE_TABLE_VERSION",
    "VEHICLES",
    "COST_PER_KM",
    "FIXED_FEE",
    "VEHICLE_FACTOR",
    "DEFAULT_SURCHARGE_FRACTION",
    # Defaults
    "STOP_PRECISION",
    "DEFAULT_VEHICLE",
    "CM3_PER_M3",
    "DEFAULT_TRAFFIC",
    "DEFAULT_WEATHER",
    "DEFAULT_SLA",
    "DEFAULT_RISK",
    "DEFAULT_ORDERS",
    "DEFAULT_DRIVERS",
    "DEFAULT_PRICE_PER_KG",
    "DEFAULT_PRICE_PER_M3",
    "DEFAULT_PACKAGE_SURCHARGE_BASE",
]
