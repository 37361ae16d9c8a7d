"""
Rate Engine

Pure pricing function: route attributes and PricingParams in, PricingResult
out. No I/O and no state; identical inputs give identical results.

FORMULA
-------
    base_distance = distance_km * COST_PER_KM[vehicle]
    base_weight   = total_weight_kg * price_per_kg
    base_volume   = total_volume_m3 * price_per_m3

    multiplier_product = T * C * SLA * R * S   (* V if apply_vehicle_factor)

    fixed_fee              = FIXED_FEE[vehicle]  (sum over fleet if given)
    multi_package_addition = extra_packages * package_surcharge_base
                             * package_surcharge_fraction

    final_price = round2((base_distance + base_weight + base_volume)
                         * multiplier_product + fixed_fee
                         + multi_package_addition)

Amounts are Decimals evaluated in MONEY_CONTEXT; only final_price and base
are rounded.
"""

from collections import Counter
from collections.abc import Sequence
from decimal import Decimal, localcontext

from shared.errors import ConfigurationError, ValidationError
from shared.money import MONEY_CONTEXT, ZERO, round2, to_decimal
from .data.reference.rate_tables import RATE_TABLE_VERSION, COST_PER_KM, FIXED_FEE
from .models import BreakdownStep, Multipliers, PricingParams, PricingResult
from .multipliers import V, T, C, S, SLA, R, DERIVED, LOOKUP, OPTIONAL


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def calculate_price(
    distance_km: float | Decimal,
    params: PricingParams,
    total_packages: int = 1,
    unique_stops: int = 1,
    total_weight_kg: float | Decimal = 0,
    total_volume_m3: float | Decimal = 0,
    fleet: Sequence[str] | None = None,
) -> PricingResult:
    """
    Price a route from its physical and operational attributes.

    Args:
        distance_km: Route distance (first point + within route)
        params: Pricing configuration
        total_packages: Number of packages on the route
        unique_stops: Number of distinct stop locations (<= total_packages)
        total_weight_kg: Total package weight
        total_volume_m3: Total package volume (0 if volume is not tracked)
        fleet: Vehicles dispatched when pricing a multi-vehicle operation.
            The fixed fee becomes the sum of their fees. None prices a
            single params.vehicle.

    Returns:
        PricingResult with the rounded final price and the ordered breakdown

    Raises:
        ConfigurationError: Vehicle or level outside its closed set
        ValidationError: Negative or non-finite numerics, or more stops
            than packages
    """
    # Lookups first: unknown levels are configuration errors
    c_km = _cost_per_km(params.vehicle)
    v = V.factor(params.vehicle)
    t = T.factor(params.traffic)
    c = C.factor(params.weather)
    sla = SLA.factor(params.sla)
    r = R.factor(params.risk)
    fixed_fee, fleet_note = _fixed_fee(params.vehicle, fleet)

    # Numeric inputs
    distance = _non_negative(distance_km, "distance_km")
    weight = _non_negative(total_weight_kg, "total_weight_kg")
    volume = _non_negative(total_volume_m3, "total_volume_m3")
    price_per_kg = _non_negative(params.price_per_kg, "price_per_kg")
    price_per_m3 = _non_negative(params.price_per_m3, "price_per_m3")
    surcharge_base = _non_negative(params.package_surcharge_base, "package_surcharge_base")
    surcharge_fraction = _non_negative(params.package_surcharge_fraction, "package_surcharge_fraction")
    orders = _non_negative(params.orders, "orders")
    drivers = _non_negative(params.drivers, "drivers")
    packages = _count(total_packages, "total_packages")
    stops = _count(unique_stops, "unique_stops")
    if stops > packages:
        raise ValidationError(
            f"unique_stops ({stops}) cannot exceed total_packages ({packages})"
        )

    s = S.factor(orders, drivers)
    extra_packages = max(0, packages - stops)

    with localcontext(MONEY_CONTEXT):
        # 1-3. Variable base
        base_distance = distance * c_km
        base_weight = weight * price_per_kg
        base_volume = volume * price_per_m3

        # 4-6. Multipliers
        factors = {V.name: v, T.name: t, C.name: c, SLA.name: sla, R.name: r, S.name: s}
        applied = (OPTIONAL if params.apply_vehicle_factor else []) + LOOKUP + DERIVED
        applied_names = [m.name for m in applied]
        multiplier_product = Decimal(1)
        for m in applied:
            multiplier_product *= factors[m.name]

        # 8. Co-located packages
        multi_package_addition = extra_packages * surcharge_base * surcharge_fraction

        # 9. Total
        final_raw = (
            (base_distance + base_weight + base_volume) * multiplier_product
            + fixed_fee
            + multi_package_addition
        )
        final_price = round2(final_raw)

    breakdown = (
        BreakdownStep(
            "Base (distance)",
            base_distance,
            f"{distance:.2f} km x {c_km:.2f}/km ({params.vehicle})",
        ),
        BreakdownStep(
            "Base (weight)",
            base_weight,
            f"{weight:.2f} kg x {price_per_kg:.2f}/kg",
        ),
        BreakdownStep(
            "Base (volume)",
            base_volume,
            f"{volume:.3f} m3 x {price_per_m3:.2f}/m3",
        ),
        BreakdownStep(
            "Multipliers",
            multiplier_product,
            " x ".join(applied_names),
        ),
        BreakdownStep(
            "Multi-package addition",
            multi_package_addition,
            f"{extra_packages} extra packages x {surcharge_fraction:.0%} of {surcharge_base:.2f}",
        ),
        BreakdownStep("Fixed fee", fixed_fee, fleet_note),
        BreakdownStep("Total", final_price),
    )

    return PricingResult(
        final_price=final_price,
        base=round2(base_distance),
        base_weight=base_weight,
        base_volume=base_volume,
        fixed_fee=fixed_fee,
        multi_package_addition=multi_package_addition,
        extra_packages=extra_packages,
        multipliers=Multipliers(V=v, T=t, C=c, S=s, SLA=sla, R=r),
        multiplier_product=multiplier_product,
        breakdown=breakdown,
        rate_table_version=RATE_TABLE_VERSION,
    )


# =============================================================================
# LOOKUPS
# =============================================================================

def _cost_per_km(vehicle: str) -> Decimal:
    try:
        return COST_PER_KM[vehicle]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"Vehicle {vehicle!r} is not one of {list(COST_PER_KM)}"
        ) from None


def _fixed_fee(vehicle: str, fleet: Sequence[str] | None) -> tuple[Decimal, str]:
    """Fixed fee for one vehicle, or summed over a fleet, with its note."""
    if fleet is None:
        return _fee_for(vehicle), vehicle

    if isinstance(fleet, str):
        raise ValidationError("fleet must be a sequence of vehicles, not a string")
    if len(fleet) == 0:
        raise ValidationError("fleet must contain at least one vehicle")

    with localcontext(MONEY_CONTEXT):
        total = sum((_fee_for(v) for v in fleet), ZERO)

    counts = Counter(fleet)
    note = " + ".join(f"{n} x {v}" for v, n in sorted(counts.items()))
    return total, note


def _fee_for(vehicle: str) -> Decimal:
    try:
        return FIXED_FEE[vehicle]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"Vehicle {vehicle!r} is not one of {list(FIXED_FEE)}"
        ) from None


# =============================================================================
# VALIDATION
# =============================================================================

def _non_negative(value, field: str) -> Decimal:
    amount = to_decimal(value, field)
    if amount < 0:
        raise ValidationError(f"{field} must be >= 0, got {value}")
    return amount


def _count(value, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer, got bool")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{field} must be >= 0, got {value}")
    return value


__all__ = [
    "calculate_price",
]
