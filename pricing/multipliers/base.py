"""
Multiplier Base Class

Re-exports from shared.multipliers for pricing multipliers.
"""

from shared.multipliers import Multiplier, clamp

__all__ = [
    "Multiplier",
    "clamp",
]
