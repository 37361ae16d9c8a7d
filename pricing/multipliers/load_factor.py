"""
Load Factor Multiplier (S)

DERIVED MULTIPLIER
------------------
Unlike the table-driven multipliers, S is computed from the order and
driver counts of the operation. It captures under-staffing: every order
beyond one per driver adds strain.

    S = 1 + max(0, (orders - drivers) / drivers)

S is clamped to [LOAD_FACTOR_MIN, LOAD_FACTOR_MAX] so the ratio cannot
diverge. With no drivers at all the operation is maximally strained and S
saturates at LOAD_FACTOR_MAX, whatever the order count.
"""

from decimal import Decimal, localcontext

from shared.money import MONEY_CONTEXT, ZERO, to_decimal
from .base import Multiplier, clamp
from ..data.reference.rate_tables import LOAD_FACTOR_MIN, LOAD_FACTOR_MAX


class S(Multiplier):
    """Load factor - orders per available driver."""

    # Identity
    name = "S"
    label = "Load factor"
    param = None

    # Derived, no level table
    levels = {}
    minimum = LOAD_FACTOR_MIN
    maximum = LOAD_FACTOR_MAX

    @classmethod
    def choices(cls) -> list[str]:
        return []

    @classmethod
    def factor(cls, orders: int | float | Decimal, drivers: int | float | Decimal) -> Decimal:
        """
        Load factor for an order count and a driver count.

        Args:
            orders: Orders to deliver (pedidos)
            drivers: Drivers available (motoristas)

        Returns:
            Decimal in [minimum, maximum]
        """
        orders = to_decimal(orders, "orders")
        drivers = to_decimal(drivers, "drivers")

        if drivers <= 0:
            return cls.maximum

        with localcontext(MONEY_CONTEXT):
            strain = max(ZERO, (orders - drivers) / drivers)
            return clamp(1 + strain, cls.minimum, cls.maximum)

    @classmethod
    def configuration_errors(cls) -> list[str]:
        errors = []
        if cls.minimum < 1:
            errors.append(f"{cls.name}: minimum must be >= 1")
        if cls.minimum > cls.maximum:
            errors.append(f"{cls.name}: minimum must not exceed maximum")
        return errors
