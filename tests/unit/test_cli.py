"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from precifica import __version__
from precifica.cli.app import app

runner = CliRunner()


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestImpostos:
    """Tests for the regime comparison command."""

    def test_json_comparison(self):
        """Test the JSON output lists ranked regimes."""
        result = runner.invoke(
            app, ["impostos", "--faturamento-anual", "200000", "--tipo", "comercio", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 6
        anexo_1 = next(item for item in data if item["regime_id"] == "anexo_1")
        assert anexo_1["effective_rate"] == pytest.approx(4.33)

    def test_specific_regime(self):
        """Test a single regime is resolved."""
        result = runner.invoke(
            app, ["impostos", "-a", "50000", "--regime", "mei", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [item["regime_id"] for item in data] == ["mei"]
        assert data[0]["monthly_tax"] == pytest.approx(75.60)

    def test_table_output(self):
        """Test the table shows the cheapest regime."""
        result = runner.invoke(app, ["impostos", "-a", "50000"])

        assert result.exit_code == 0
        assert "Menor carga" in result.output

    def test_ceiling_revenue_recommends_presumed(self):
        """Test zero-tax anexos at the ceiling are not shown as the cheapest."""
        result = runner.invoke(app, ["impostos", "-a", "4800000"])

        assert result.exit_code == 0
        assert "Menor carga: Lucro Presumido" in result.output

    def test_unresolvable_regime(self):
        """Test Lucro Real exits with an error."""
        result = runner.invoke(app, ["impostos", "-a", "200000", "--regime", "lucro_real"])

        assert result.exit_code == 1
        assert "Regime sem cálculo" in result.output

    def test_negative_revenue(self):
        """Test invalid revenue is reported as an input error."""
        result = runner.invoke(app, ["impostos", "--faturamento-anual=-10"])

        assert result.exit_code == 1
        assert "Entrada inválida" in result.output


class TestSensibilidade:
    """Tests for the sensitivity command."""

    def test_json(self):
        result = runner.invoke(
            app, ["sensibilidade", "-c", "50", "--margem", "30", "--frete", "10", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [v["variable"] for v in data["variables"]] == [
            "cost",
            "margin",
            "shipping",
            "marketing",
        ]

    def test_table_output(self):
        result = runner.invoke(app, ["sensibilidade", "-c", "50", "--margem", "30"])

        assert result.exit_code == 0
        assert "Recomendações" in result.output

    def test_undefined_price(self):
        """Test margin plus fees at or above 100% is an error."""
        result = runner.invoke(
            app, ["sensibilidade", "-c", "50", "--margem", "90", "--taxa-marketplace", "20"]
        )

        assert result.exit_code == 1
        assert "preço indefinido" in result.output


class TestSugestoes:
    """Tests for the price suggestion command."""

    def test_json(self):
        result = runner.invoke(app, ["sugestoes", "-c", "100", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [s["strategy"] for s in data] == [
            "ai-recommended",
            "conservative",
            "competitive",
            "premium",
        ]

    def test_unknown_marketplace_warns(self):
        """Test an unknown marketplace falls back with a warning."""
        result = runner.invoke(app, ["sugestoes", "-c", "100", "--marketplace", "xyz"])

        assert result.exit_code == 0
        assert "desconhecido" in result.output


class TestMarketplaces:
    """Tests for the marketplace comparison command."""

    def test_json(self):
        result = runner.invoke(app, ["marketplaces", "-c", "100", "--margem", "20", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["best_marketplace"]["marketplace_id"] == "mercadolivre_premium"

    def test_subset(self):
        result = runner.invoke(
            app,
            ["marketplaces", "-c", "100", "--margem", "20", "--somente", "amazon,shopee", "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert {q["marketplace_id"] for q in data["results"]} == {"amazon", "shopee"}

    def test_unknown_marketplace(self):
        result = runner.invoke(
            app, ["marketplaces", "-c", "100", "--margem", "20", "--somente", "foo"]
        )

        assert result.exit_code == 1
        assert "Marketplace desconhecido: foo" in result.output

    def test_empty_selection(self):
        """Test a selection without ids is rejected."""
        result = runner.invoke(
            app, ["marketplaces", "-c", "100", "--margem", "20", "--somente", ","]
        )

        assert result.exit_code == 1
        assert "Nenhum marketplace" in result.output

    def test_table_output(self):
        result = runner.invoke(app, ["marketplaces", "-c", "100", "--margem", "20"])

        assert result.exit_code == 0
        assert "Melhor opção" in result.output
