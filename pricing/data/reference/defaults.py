"""
Pricing Defaults

Defaults used when the caller does not say otherwise.
Last updated: 2025-11-20

STOP IDENTITY
-------------
Two packages belong to the same stop when their coordinates match after
rounding to STOP_PRECISION decimal digits (about 11 cm at the equator).
This precision is used for every unique-stop count.

VEHICLE ASSIGNMENT
------------------
Routes missing from the caller's route -> vehicle mapping are priced as
DEFAULT_VEHICLE.
"""

STOP_PRECISION = 6

DEFAULT_VEHICLE = "carro"

# Starting values of the pricing dashboard
DEFAULT_TRAFFIC = "MODERADO"
DEFAULT_WEATHER = "CEU_LIMPO"
DEFAULT_SLA = "NORMAL"
DEFAULT_RISK = "BAIXO"
DEFAULT_ORDERS = 100
DEFAULT_DRIVERS = 100
DEFAULT_PRICE_PER_KG = 0.15
DEFAULT_PRICE_PER_M3 = 0.10
DEFAULT_PACKAGE_SURCHARGE_BASE = 3.0

CM3_PER_M3 = 1_000_000
