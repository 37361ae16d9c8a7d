"""
Multipliers Package

Exports all multiplier classes and processing groups.

Multiplier order (as reported in every PricingResult):
    V, T, C, S, SLA, R

Groups:
    LOOKUP  - table-driven multipliers, level taken from PricingParams
    DERIVED - computed from the operation (load factor)
    OPTIONAL - reported always, applied only on request (vehicle factor)
"""

from shared.errors import ConfigurationError
from .base import Multiplier, clamp
from .vehicle import V
from .traffic import T
from .weather import C
from .load_factor import S
from .service_level import SLA
from .risk import R
from ..data.reference.rate_tables import VEHICLES, COST_PER_KM, FIXED_FEE


# All multipliers, in reporting order
ALL = [V, T, C, S, SLA, R]


# =============================================================================
# PROCESSING GROUPS
# =============================================================================

OPTIONAL = [V]

DERIVED = [S]

# T, C, SLA, R
LOOKUP = [m for m in ALL if m not in OPTIONAL and m not in DERIVED]


# =============================================================================
# HELPERS
# =============================================================================

def get_multiplier(name: str) -> type[Multiplier]:
    """Get a multiplier class by its short code (e.g., "SLA")."""
    for m in ALL:
        if m.name == name:
            return m
    raise ConfigurationError(f"Unknown multiplier {name!r}")


def vehicle_errors() -> list[str]:
    """Describe problems with the per-vehicle tables."""
    errors = []
    for table_name, table in (("COST_PER_KM", COST_PER_KM), ("FIXED_FEE", FIXED_FEE), ("VEHICLE_FACTOR", V.levels)):
        missing = [v for v in VEHICLES if v not in table]
        extra = [v for v in table if v not in VEHICLES]
        if missing:
            errors.append(f"{table_name}: missing vehicles {missing}")
        if extra:
            errors.append(f"{table_name}: unknown vehicles {extra}")
        for vehicle, value in table.items():
            if value <= 0:
                errors.append(f"{table_name}: value for {vehicle} must be > 0")
    return errors


# =============================================================================
# VALIDATION
# =============================================================================

def validate_rate_tables() -> None:
    """
    Validate rate table integrity.

    Raises ConfigurationError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = vehicle_errors()

    for m in ALL:
        errors.extend(m.configuration_errors())

    # Every lookup multiplier must read a distinct PricingParams field
    params = [m.param for m in LOOKUP + OPTIONAL]
    if len(params) != len(set(params)):
        errors.append(f"multipliers share a PricingParams field: {params}")

    if errors:
        raise ConfigurationError("Rate table configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_rate_tables()

__all__ = [
    # Base
    "Multiplier",
    "clamp",
    # Multiplier classes
    "V",
    "T",
    "C",
    "S",
    "SLA",
    "R",
    # Lists
    "ALL",
    "LOOKUP",
    "DERIVED",
    "OPTIONAL",
    # Helpers
    "get_multiplier",
    "vehicle_errors",
    "validate_rate_tables",
]
