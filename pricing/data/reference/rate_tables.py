"""
Rate Tables

Canonical rate tables for route pricing. Every constant the engine prices
with lives here; bump RATE_TABLE_VERSION whenever a value changes.
Last updated: 2025-11-20

VEHICLE TABLES
--------------
    COST_PER_KM     - Price per kilometre driven, by vehicle class
    FIXED_FEE       - Flat fee per vehicle dispatched
    VEHICLE_FACTOR  - Vehicle class multiplier (V). Only applied when
                      PricingParams.apply_vehicle_factor is set, because
                      vehicle class is already priced through COST_PER_KM
                      and FIXED_FEE.

OPERATIONAL MULTIPLIERS
-----------------------
    TRAFFIC, WEATHER, SERVICE_LEVEL, RISK - first level is neutral (1.0)

LOAD FACTOR (S)
---------------
    S = 1 + max(0, (orders - drivers) / drivers), clamped to
    [LOAD_FACTOR_MIN, LOAD_FACTOR_MAX]. No drivers saturates at the max.

MULTI-PACKAGE
-------------
    Each package sharing a stop with another one adds
    package_surcharge_base * DEFAULT_SURCHARGE_FRACTION.
"""

from decimal import Decimal


RATE_TABLE_VERSION = "2025.11"

VEHICLES = ("moto", "carro", "van", "caminhao")


# =============================================================================
# VEHICLE TABLES
# =============================================================================

COST_PER_KM = {
    "moto": Decimal("1.2"),
    "carro": Decimal("2.5"),
    "van": Decimal("4.2"),
    "caminhao": Decimal("7.5"),
}

FIXED_FEE = {
    "moto": Decimal("5.0"),
    "carro": Decimal("8.0"),
    "van": Decimal("15.0"),
    "caminhao": Decimal("25.0"),
}

VEHICLE_FACTOR = {
    "moto": Decimal("1.0"),
    "carro": Decimal("1.15"),
    "van": Decimal("1.35"),
    "caminhao": Decimal("1.8"),
}


# =============================================================================
# OPERATIONAL MULTIPLIERS
# =============================================================================

TRAFFIC = {
    "LIVRE": Decimal("1.0"),
    "MODERADO": Decimal("1.15"),
    "INTENSO": Decimal("1.35"),
    "MUITO_INTENSO": Decimal("1.6"),
}

WEATHER = {
    "CEU_LIMPO": Decimal("1.0"),
    "CHUVA_FRACA": Decimal("1.1"),
    "CHUVA_FORTE": Decimal("1.25"),
    "TEMPESTADE": Decimal("1.45"),
}

SERVICE_LEVEL = {
    "NORMAL": Decimal("1.0"),
    "SAME_DAY": Decimal("1.1"),
    "EXPRESS": Decimal("1.25"),
    "IMEDIATA": Decimal("1.45"),
}

RISK = {
    "BAIXO": Decimal("1.0"),
    "MEDIO": Decimal("1.1"),
    "ALTO": Decimal("1.2"),
    "MUITO_ALTO": Decimal("1.3"),
}


# =============================================================================
# LOAD FACTOR
# =============================================================================

LOAD_FACTOR_MIN = Decimal("1.0")
LOAD_FACTOR_MAX = Decimal("2.5")


# =============================================================================
# MULTI-PACKAGE
# =============================================================================

DEFAULT_SURCHARGE_FRACTION = Decimal("0.5")
