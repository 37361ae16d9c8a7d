"""
Shared fixtures for the pricing tests.
"""

import pytest
import polars as pl

from pricing.models import PricingParams


@pytest.fixture
def neutral_params():
    """Every multiplier at 1.0, no weight or volume pricing."""
    return PricingParams(
        vehicle="carro",
        traffic="LIVRE",
        weather="CEU_LIMPO",
        sla="NORMAL",
        risk="BAIXO",
        orders=100,
        drivers=100,
        price_per_kg=0,
        price_per_m3=0,
        package_surcharge_base=3.0,
        package_surcharge_fraction=0.5,
    )


@pytest.fixture
def points():
    """
    Two routes, two drivers.

    R1 (Ana):   3 packages, 2 stops (first two share coordinates), 10 km
    R2 (Bruno): 2 packages, 2 stops, 5 km. Its first stop has the same
                coordinates as R1's first stop.
    """
    return pl.DataFrame({
        "route_name": ["R1", "R1", "R1", "R2", "R2"],
        "order": [1, 2, 3, 4, 5],
        "lat": [-23.550520, -23.550520, -23.561000, -23.550520, -23.570000],
        "lon": [-46.633308, -46.633308, -46.640000, -46.633308, -46.650000],
        "distance_first_point_km": [2.0, 2.0, 2.0, 1.0, 1.0],
        "distance_within_route_km": [8.0, 8.0, 8.0, 4.0, 4.0],
        "weight_kg": [1.0, None, 2.5, 0.5, 0.5],
        "volume_cm3": [1000.0, 2000.0, None, 500.0, 500.0],
        "driver_name": ["Ana", "Ana", "Ana", "Bruno", "Bruno"],
        "caf_id": ["101", "101", "101", "202", "202"],
    })
