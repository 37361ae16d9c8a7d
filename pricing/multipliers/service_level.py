"""
Service Level Multiplier (SLA)

Faster delivery promises cost more: NORMAL, SAME_DAY, EXPRESS, IMEDIATA.
"""

from .base import Multiplier
from ..data.reference.rate_tables import SERVICE_LEVEL


class SLA(Multiplier):
    """Service level agreement of the route."""

    # Identity
    name = "SLA"
    label = "Service level"
    param = "sla"

    # Table
    levels = SERVICE_LEVEL
