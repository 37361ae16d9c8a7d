"""
Reference Data

Static rate tables and pricing defaults.
"""

from .rate_tables import (
    RATE_TABLE_VERSION,
    VEHICLES,
    COST_PER_KM,
    FIXED_FEE,
    VEHICLE_FACTOR,
    TRAFFIC,
    WEATHER,
    SERVICE_LEVEL,
    RISK,
    LOAD_FACTOR_MIN,
    LOAD_FACTOR_MAX,
    DEFAULT_SURCHARGE_FRACTION,
)
from .defaults import STOP_PRECISION, DEFAULT_VEHICLE, CM3_PER_M3

__all__ = [
    "RATE_TABLE_VERSION",
    "VEHICLES",
    "COST_PER_KM",
    "FIXED_FEE",
    "VEHICLE_FACTOR",
    "TRAFFIC",
    "WEATHER",
    "SERVICE_LEVEL",
    "RISK",
    "LOAD_FACTOR_MIN",
    "LOAD_FACTOR_MAX",
    "DEFAULT_SURCHARGE_FRACTION",
    "STOP_PRECISION",
    "DEFAULT_VEHICLE",
    "CM3_PER_M3",
]
