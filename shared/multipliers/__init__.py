"""
Shared Multipliers

Base class and utilities for price multipliers.
"""

from .base import Multiplier, clamp

__all__ = [
    "Multiplier",
    "clamp",
]
