"""
Weather Multiplier (C)

Clear sky is neutral; rain and storms slow deliveries down.
"""

from .base import Multiplier
from ..data.reference.rate_tables import WEATHER


class C(Multiplier):
    """Weather (clima) - CEU_LIMPO to TEMPESTADE."""

    # Identity
    name = "C"
    label = "Weather"
    param = "weather"

    # Table
    levels = WEATHER
