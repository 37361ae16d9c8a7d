"""
Unit Tests for Rate Tables, Multipliers and Money Helpers

Run with: pytest pricing/tests/test_rate_tables.py -v
"""

from decimal import Decimal

import pytest

from pricing.data.reference import rate_tables
from pricing.data.reference.rate_tables import VEHICLES, COST_PER_KM, FIXED_FEE
from pricing.multipliers import (
    ALL,
    LOOKUP,
    V, T, C, S, SLA, R,
    get_multiplier,
    validate_rate_tables,
    vehicle_errors,
)
from shared.errors import ConfigurationError, ValidationError
from shared.money import round2, to_decimal


# =============================================================================
# RATE TABLE TESTS
# =============================================================================

class TestRateTables:
    """Tests for table integrity."""

    def test_tables_valid(self):
        validate_rate_tables()
        assert vehicle_errors() == []

    def test_zero_fixed_fee(self, monkeypatch):
        monkeypatch.setitem(rate_tables.FIXED_FEE, "van", Decimal("0"))
        with pytest.raises(ConfigurationError, match="FIXED_FEE: value for van must be > 0"):
            validate_rate_tables()

    def test_negative_cost_per_km(self, monkeypatch):
        monkeypatch.setitem(rate_tables.COST_PER_KM, "moto", Decimal("-1"))
        with pytest.raises(ConfigurationError, match="COST_PER_KM: value for moto"):
            validate_rate_tables()

    def test_vehicle_missing_from_table(self, monkeypatch):
        monkeypatch.delitem(rate_tables.COST_PER_KM, "van")
        with pytest.raises(ConfigurationError, match="COST_PER_KM: missing vehicles"):
            validate_rate_tables()

    def test_load_factor_bounds_out_of_order(self, monkeypatch):
        monkeypatch.setattr(S, "minimum", Decimal("3"))
        with pytest.raises(ConfigurationError, match="minimum must not exceed maximum"):
            validate_rate_tables()

    def test_every_vehicle_priced(self):
        for vehicle in VEHICLES:
            assert COST_PER_KM[vehicle] > 0
            assert FIXED_FEE[vehicle] > 0
            assert V.factor(vehicle) > 0

    def test_first_level_is_neutral(self):
        for m in LOOKUP:
            assert m.factor(m.choices()[0]) == Decimal("1.0")

    def test_reporting_order(self):
        assert [m.name for m in ALL] == ["V", "T", "C", "S", "SLA", "R"]

    def test_get_multiplier(self):
        assert get_multiplier("SLA") is SLA
        with pytest.raises(ConfigurationError):
            get_multiplier("X")

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError, match="Weather"):
            C.factor("GRANIZO")

    def test_levels(self):
        assert T.factor("MUITO_INTENSO") == Decimal("1.6")
        assert C.factor("TEMPESTADE") == Decimal("1.45")
        assert SLA.factor("IMEDIATA") == Decimal("1.45")
        assert R.factor("MUITO_ALTO") == Decimal("1.3")


# =============================================================================
# LOAD FACTOR TESTS
# =============================================================================

class TestLoadFactor:
    """Tests for the derived load factor S."""

    @pytest.mark.parametrize("orders,drivers,expected", [
        (100, 100, "1"),
        (50, 100, "1"),
        (150, 100, "1.5"),
        (250, 100, "2.5"),
        (1000, 100, "2.5"),
        (0, 0, "2.5"),
        (500, 0, "2.5"),
    ])
    def test_factor(self, orders, drivers, expected):
        assert S.factor(orders, drivers) == Decimal(expected)

    def test_no_levels(self):
        assert S.choices() == []
        assert S.configuration_errors() == []


# =============================================================================
# MONEY TESTS
# =============================================================================

class TestMoney:
    """Tests for Decimal conversion and rounding."""

    def test_float_uses_shortest_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_none_is_zero(self):
        assert to_decimal(None) == Decimal("0")

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), True, "10"])
    def test_rejected(self, value):
        with pytest.raises(ValidationError):
            to_decimal(value, "distance_km")

    @pytest.mark.parametrize("value,expected", [
        ("2.675", "2.68"),
        ("-2.675", "-2.68"),
        ("2.665", "2.67"),
        ("1.004", "1.00"),
    ])
    def test_round_half_away_from_zero(self, value, expected):
        assert round2(Decimal(value)) == Decimal(expected)

    def test_round_idempotent(self):
        for value in ["0.005", "12.3456", "-7.125", "100"]:
            once = round2(Decimal(value))
            assert round2(once) == once
