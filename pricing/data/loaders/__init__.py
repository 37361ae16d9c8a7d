"""
Data Loaders

Loaders for the route point and driver settlement exports.
"""

from .csv_files import (
    load_route_points,
    load_driver_costs,
    POINT_HEADERS,
    DRIVER_COST_HEADERS,
)

__all__ = [
    "load_route_points",
    "load_driver_costs",
    "POINT_HEADERS",
    "DRIVER_COST_HEADERS",
]
