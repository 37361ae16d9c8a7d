"""
Route Pricing Module

Prices last-mile delivery routes from their points: distance, packages,
stops, weight and volume under traffic, weather, service level, risk and
load conditions.
"""

from .engine import calculate_price
from .aggregate import aggregate_points, aggregate_route, aggregate_driver, summarize_points
from .calculate_costs import calculate_costs, price_operation, operation_totals, audit_route
from .reconcile import compare_planned_to_settled, summarize_reconciliation
from .models import AggregatedRouteMetrics, PricingParams, PricingResult, default_params
from .version import VERSION

__all__ = [
    "calculate_price",
    "aggregate_points",
    "aggregate_route",
    "aggregate_driver",
    "summarize_points",
    "calculate_costs",
    "price_operation",
    "operation_totals",
    "audit_route",
    "compare_planned_to_settled",
    "summarize_reconciliation",
    "AggregatedRouteMetrics",
    "PricingParams",
    "PricingResult",
    "default_params",
    "VERSION",
]
