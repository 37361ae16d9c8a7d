"""
Risk Multiplier (R)

Operational risk of the delivery area (theft, access restrictions).
"""

from .base import Multiplier
from ..data.reference.rate_tables import RISK


class R(Multiplier):
    """Risk - BAIXO to MUITO_ALTO."""

    # Identity
    name = "R"
    label = "Risk"
    param = "risk"

    # Table
    levels = RISK
