"""
Unit Tests for Script Argument Handling

Run with: pytest pricing/tests/test_scripts.py -v
"""

import argparse

import pytest

from pricing.models import default_params
from pricing.scripts import calculator
from pricing.scripts.price_routes import add_pricing_arguments, params_from_args


def parse(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    add_pricing_arguments(parser)
    return parser.parse_args(argv)


# =============================================================================
# PRICE ROUTES ARGUMENTS
# =============================================================================

class TestPricingArguments:
    """Tests for the shared pricing arguments."""

    def test_defaults(self):
        params = params_from_args(parse([]))
        defaults = default_params()
        assert params.price_per_kg == pytest.approx(float(defaults.price_per_kg))
        assert params.price_per_m3 == pytest.approx(float(defaults.price_per_m3))
        assert params.package_surcharge_base == pytest.approx(float(defaults.package_surcharge_base))
        assert params.package_surcharge_fraction == pytest.approx(float(defaults.package_surcharge_fraction))

    def test_rates_configurable(self):
        args = parse([
            "--price-per-kg", "0.4",
            "--price-per-m3", "2",
            "--package-surcharge-base", "5",
            "--package-surcharge-fraction", "1",
        ])
        params = params_from_args(args)
        assert params.price_per_kg == pytest.approx(0.4)
        assert params.price_per_m3 == pytest.approx(2.0)
        assert params.package_surcharge_base == pytest.approx(5.0)
        assert params.package_surcharge_fraction == pytest.approx(1.0)

    def test_levels_and_load(self):
        params = params_from_args(parse(["--traffic", "intenso", "--orders", "150", "--drivers", "80"]))
        assert params.traffic == "INTENSO"
        assert params.orders == 150
        assert params.drivers == 80


# =============================================================================
# INTERACTIVE CALCULATOR
# =============================================================================

class TestCalculatorInput:
    """Tests for the interactive prompts."""

    def answer(self, monkeypatch, answers):
        replies = iter(answers)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))

    def test_rates_prompted(self, monkeypatch):
        self.answer(monkeypatch, [
            "12.5",                     # distance
            "4", "2", "3.0", "0.1",     # packages, stops, weight, volume
            "",                         # vehicle
            "", "", "", "",             # traffic, weather, SLA, risk
            "", "",                     # orders, drivers
            "0.5", "3", "4", "1",       # per kg, per m3, package base, fraction
        ])
        route = calculator.get_user_input()
        params = route["params"]
        assert route["distance_km"] == pytest.approx(12.5)
        assert route["unique_stops"] == 2
        assert params.price_per_kg == pytest.approx(0.5)
        assert params.price_per_m3 == pytest.approx(3.0)
        assert params.package_surcharge_base == pytest.approx(4.0)
        assert params.package_surcharge_fraction == pytest.approx(1.0)

    def test_rates_default(self, monkeypatch):
        self.answer(monkeypatch, ["10"] + [""] * 15)
        params = calculator.get_user_input()["params"]
        defaults = default_params()
        assert params.vehicle == defaults.vehicle
        assert params.price_per_kg == pytest.approx(float(defaults.price_per_kg))
        assert params.package_surcharge_fraction == pytest.approx(float(defaults.package_surcharge_fraction))
