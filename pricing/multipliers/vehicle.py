"""
Vehicle Multiplier (V)

OPTIONAL MULTIPLIER
-------------------
Vehicle class is already priced through the cost per km and the fixed fee.
V is always reported in the breakdown but only enters the multiplier
product when PricingParams.apply_vehicle_factor is set.
"""

from .base import Multiplier
from ..data.reference.rate_tables import VEHICLE_FACTOR


class V(Multiplier):
    """Vehicle class factor - moto, carro, van, caminhao."""

    # Identity
    name = "V"
    label = "Vehicle"
    param = "vehicle"

    # Table
    levels = VEHICLE_FACTOR
