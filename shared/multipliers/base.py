"""
Multiplier Base Class

Shared base class for the table-driven price multipliers.
"""

from abc import ABC
from decimal import Decimal

from ..errors import ConfigurationError


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    """Clamp value into [lower, upper]."""
    return min(max(value, lower), upper)


# =============================================================================
# BASE CLASS
# =============================================================================

class Multiplier(ABC):
    """
    Base class for all multipliers.

    Attributes:
        IDENTITY
            name    - Short code shown in breakdown notes (e.g., "T", "SLA")
            label   - Human readable name (e.g., "Traffic")
            param   - PricingParams field holding the selected level

        TABLE
            levels  - Closed set of levels mapped to their factor.
                      The first level is the neutral one (factor 1.0).
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str
    label: str
    param: str

    # -------------------------------------------------------------------------
    # TABLE
    # -------------------------------------------------------------------------
    levels: dict[str, Decimal]

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def choices(cls) -> list[str]:
        """Legal levels, in table order."""
        return list(cls.levels)

    @classmethod
    def factor(cls, level: str) -> Decimal:
        """
        Look up the factor for a level.

        Raises:
            ConfigurationError: If level is not in the closed set
        """
        try:
            return cls.levels[level]
        except (KeyError, TypeError):
            raise ConfigurationError(
                f"{cls.label} level {level!r} is not one of {cls.choices()}"
            ) from None

    @classmethod
    def configuration_errors(cls) -> list[str]:
        """Describe problems with the table (empty, non-Decimal or non-positive factors)."""
        errors = []
        if not cls.levels:
            errors.append(f"{cls.name}: levels table is empty")
        for level, value in cls.levels.items():
            if not isinstance(value, Decimal):
                errors.append(f"{cls.name}: factor for {level} must be a Decimal")
            elif value <= 0:
                errors.append(f"{cls.name}: factor for {level} must be > 0")
        return errors
