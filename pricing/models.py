"""
Pricing Models

Value types passed between the aggregator and the rate engine. All of them
are frozen: a result is recomputed on every parameter change, never edited.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal

from .data.reference.rate_tables import DEFAULT_SURCHARGE_FRACTION
from .data.reference.defaults import (
    DEFAULT_VEHICLE,
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


# =============================================================================
# ENGINE INPUTS
# =============================================================================

@dataclass(frozen=True)
class AggregatedRouteMetrics:
    """Summary figures of a route, a driver or the whole operation."""
    distance_km: float
    total_packages: int
    unique_stops: int
    total_weight_kg: float
    total_volume_m3: float

    @property
    def extra_packages(self) -> int:
        """Packages sharing a stop with at least one other package."""
        return max(0, self.total_packages - self.unique_stops)


@dataclass(frozen=True)
class PricingParams:
    """
    Caller-supplied pricing configuration.

    Levels must belong to their multiplier tables (see
    pricing/data/reference/rate_tables.py); numerics must be >= 0. Both are
    checked by calculate_price, not here.
    """
    vehicle: str = DEFAULT_VEHICLE
    traffic: str = DEFAULT_TRAFFIC
    weather: str = DEFAULT_WEATHER
    sla: str = DEFAULT_SLA
    risk: str = DEFAULT_RISK
    orders: int = DEFAULT_ORDERS
    drivers: int = DEFAULT_DRIVERS
    price_per_kg: float | Decimal = DEFAULT_PRICE_PER_KG
    price_per_m3: float | Decimal = DEFAULT_PRICE_PER_M3
    package_surcharge_base: float | Decimal = DEFAULT_PACKAGE_SURCHARGE_BASE
    package_surcharge_fraction: float | Decimal = DEFAULT_SURCHARGE_FRACTION
    apply_vehicle_factor: bool = False

    def with_vehicle(self, vehicle: str) -> "PricingParams":
        """Copy of these params priced with another vehicle."""
        return replace(self, vehicle=vehicle)


def default_params() -> PricingParams:
    """Starting values of the pricing dashboard."""
    return PricingParams()


# =============================================================================
# ENGINE OUTPUTS
# =============================================================================

@dataclass(frozen=True)
class BreakdownStep:
    """One line of the audit trail."""
    step: str
    value: Decimal
    note: str | None = None


@dataclass(frozen=True)
class Multipliers:
    """The six multiplier values. V is reported even when not applied."""
    V: Decimal
    T: Decimal
    C: Decimal
    S: Decimal
    SLA: Decimal
    R: Decimal

    def as_dict(self) -> dict[str, Decimal]:
        return {"V": self.V, "T": self.T, "C": self.C, "S": self.S, "SLA": self.SLA, "R": self.R}


@dataclass(frozen=True)
class PricingResult:
    """
    Price of one route (or driver, or operation).

    final_price is rounded to cents. The breakdown lists the computation in
    order: distance, weight, volume, multiplier product, multi-package
    addition, fixed fee, final total.
    """
    final_price: Decimal
    base: Decimal
    base_weight: Decimal
    base_volume: Decimal
    fixed_fee: Decimal
    multi_package_addition: Decimal
    extra_packages: int
    multipliers: Multipliers
    multiplier_product: Decimal
    breakdown: tuple[BreakdownStep, ...] = field(default_factory=tuple)
    rate_table_version: str = ""
