"""
Traffic Multiplier (T)

Scales the variable part of the price with road congestion on the day.
"""

from .base import Multiplier
from ..data.reference.rate_tables import TRAFFIC


class T(Multiplier):
    """Traffic - LIVRE (free flow) to MUITO_INTENSO (gridlock)."""

    # Identity
    name = "T"
    label = "Traffic"
    param = "traffic"

    # Table
    levels = TRAFFIC
