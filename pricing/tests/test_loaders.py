"""
Unit Tests for the CSV Loaders

Run with: pytest pricing/tests/test_loaders.py -v
"""

import pytest
import polars as pl

from pricing.calculate_costs import calculate_costs
from pricing.data.loaders import load_route_points, load_driver_costs
from shared.errors import ValidationError


ROTAS_CSV = """\
routeName,AWB,order,Parada,lat,long,CafID,nome,peso_kg,distancia_primeiro_ponto_km,distancia_dentro_rota_km
R2,AWB4,4,1,-23.55,-46.63,202,Bruno,0.5,1.0,4.0
R1,AWB1,1,1,-23.55,-46.63,101,Ana,1.0,2.0,8.0
R1,AWB2,2,1,-23.55,-46.63,101,Ana,,2.0,8.0
R1,AWB3,3,2,-23.56,-46.64,101,Ana,2.5,2.0,8.0
,AWB5,5,1,-23.57,-46.65,,,0.2,0.5,0.5
"""

VALORES_CSV = """\
mot_nome;CafID;ValorDiariaFixa;ValorTotal;ValorAdicional
ANA SILVA;101;"1,000.00";"1,234.50";10
BRUNO;202;;abc;
"""


@pytest.fixture
def rotas_path(tmp_path):
    path = tmp_path / "rotas.csv"
    path.write_text(ROTAS_CSV, encoding="utf-8")
    return path


@pytest.fixture
def valores_path(tmp_path):
    path = tmp_path / "valores.csv"
    path.write_text(VALORES_CSV, encoding="utf-8")
    return path


# =============================================================================
# ROUTE POINTS
# =============================================================================

class TestLoadRoutePoints:
    """Tests for the rotas.csv loader."""

    def test_headers_renamed(self, rotas_path):
        df = load_route_points(rotas_path)
        for col in ["route_name", "awb", "stop", "lon", "caf_id", "driver_name", "weight_kg"]:
            assert col in df.columns

    def test_types(self, rotas_path):
        df = load_route_points(rotas_path)
        assert df["lat"].dtype == pl.Float64
        assert df["order"].dtype == pl.Int64
        assert df["distance_first_point_km"].dtype == pl.Float64

    def test_sorted_by_order(self, rotas_path):
        df = load_route_points(rotas_path)
        assert df["order"].to_list() == [1, 2, 3, 4, 5]

    def test_blank_route_name(self, rotas_path):
        df = load_route_points(rotas_path)
        assert df["route_name"][-1] == "S/N"

    def test_missing_optional_columns_added(self, rotas_path):
        df = load_route_points(rotas_path)
        assert df["volume_cm3"].null_count() == len(df)

    def test_semicolon_separator(self, tmp_path):
        path = tmp_path / "rotas.csv"
        path.write_text(ROTAS_CSV.replace(",", ";"), encoding="utf-8")
        df = load_route_points(path, separator=";")
        assert len(df) == 5

    def test_missing_required_column(self, tmp_path):
        path = tmp_path / "rotas.csv"
        path.write_text("routeName,order,lat,long\nR1,1,0,0\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="distance_first_point_km"):
            load_route_points(path)

    def test_prices_loaded_points(self, rotas_path):
        """Loaded export goes straight into the pipeline."""
        df = calculate_costs(load_route_points(rotas_path))
        assert df["route_name"].to_list() == ["R1", "R2", "S/N"]
        assert df["total_packages"].to_list() == [3, 1, 1]
        assert df["unique_stops"].to_list() == [2, 1, 1]


# =============================================================================
# DRIVER COSTS
# =============================================================================

class TestLoadDriverCosts:
    """Tests for the valores.csv loader."""

    def test_amounts_parsed(self, valores_path):
        df = load_driver_costs(valores_path, separator=";")
        assert df["total"][0] == pytest.approx(1234.50)
        assert df["daily_fixed"][0] == pytest.approx(1000.0)
        assert df["additional"][0] == pytest.approx(10.0)

    def test_unparseable_amounts_are_zero(self, valores_path):
        df = load_driver_costs(valores_path, separator=";")
        assert df["total"][1] == 0.0
        assert df["daily_fixed"][1] == 0.0

    def test_missing_value_columns_are_zero(self, valores_path):
        df = load_driver_costs(valores_path, separator=";")
        assert (df["over_20kg"] == 0.0).all()

    def test_identity_columns(self, valores_path):
        df = load_driver_costs(valores_path, separator=";")
        assert df["caf_id"].to_list() == ["101", "202"]
        assert df["driver_name"].to_list() == ["ANA SILVA", "BRUNO"]
