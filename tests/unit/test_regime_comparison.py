"""Tests for the regime comparison orchestrator."""

import pytest

from precifica.core.analyzers import (
    RegimeComparisonOrchestrator,
    best_regime,
    compare_all_regimes,
    potential_savings,
)
from precifica.core.models import BusinessType, TaxCalculationInput


def _input(annual: float, business_type: BusinessType = BusinessType.SERVICOS) -> TaxCalculationInput:
    return TaxCalculationInput(
        monthly_revenue=annual / 12, annual_revenue=annual, business_type=business_type
    )


class TestEligibility:
    """Tests for which regimes are compared."""

    def test_mei_excluded_above_its_ceiling(self, comercio_200k):
        """Test R$ 200k compares the five anexos and Lucro Presumido."""
        results = compare_all_regimes(comercio_200k)

        ids = {r.regime_id for r in results}
        assert ids == {"anexo_1", "anexo_2", "anexo_3", "anexo_4", "anexo_5", "lucro_presumido"}

    def test_mei_included_within_ceiling(self):
        """Test small revenue includes MEI."""
        results = compare_all_regimes(_input(50_000))
        assert len(results) == 7
        assert "mei" in {r.regime_id for r in results}

    def test_only_presumed_above_simples_ceiling(self):
        """Test revenue above R$ 4.8M leaves only Lucro Presumido."""
        results = compare_all_regimes(_input(5_000_000))
        assert [r.regime_id for r in results] == ["lucro_presumido"]

    def test_lucro_real_never_compared(self):
        """Test Lucro Real has no calculation and is never listed."""
        results = compare_all_regimes(_input(1_000_000, BusinessType.INDUSTRIA))
        assert "lucro_real" not in {r.regime_id for r in results}

    def test_ceiling_revenue_ranks_anexo_warnings_first(self):
        """Test revenue at the ceiling keeps zero-tax anexos with warnings."""
        results = compare_all_regimes(_input(4_800_000))

        anexos = results[:5]
        assert all(r.regime_id.startswith("anexo_") for r in anexos)
        assert all(r.monthly_tax == 0 and r.has_warnings for r in anexos)
        assert results[-1].regime_id == "lucro_presumido"


class TestRanking:
    """Tests for ordering and summary helpers."""

    def test_sorted_by_monthly_tax(self, comercio_200k):
        """Test results are in ascending monthly tax order."""
        results = compare_all_regimes(comercio_200k)
        taxes = [r.monthly_tax for r in results]
        assert taxes == sorted(taxes)

    def test_mei_is_cheapest_for_small_services(self):
        """Test MEI wins at R$ 50k for services."""
        results = compare_all_regimes(_input(50_000))

        best = best_regime(results)
        assert best.regime_id == "mei"
        # Anexo V (15.5%) minus MEI (12 x 75.60)
        assert potential_savings(results) == pytest.approx(7_750 - 907.20)

    def test_recommended_only(self):
        """Test filtering by recommended regimes keeps the ranking."""
        results = compare_all_regimes(
            _input(50_000, BusinessType.SERVICOS_INTELECTUAIS), recommended_only=True
        )
        assert [r.regime_id for r in results] == ["lucro_presumido", "anexo_5"]

    def test_orchestrator_is_reusable(self, comercio_200k):
        """Test comparing twice gives the same ranking."""
        orchestrator = RegimeComparisonOrchestrator()
        first = orchestrator.compare_all_eligible(comercio_200k)
        second = orchestrator.compare_all_eligible(comercio_200k)
        assert first == second

    def test_empty_results(self):
        """Test helpers on an empty comparison."""
        assert best_regime([]) is None
        assert potential_savings([]) == 0


class TestCeilingRevenue:
    """Tests for summary helpers when anexos cannot hold the revenue."""

    def test_best_regime_skips_out_of_table_anexos(self):
        """Test the cheapest applicable regime is chosen at R$ 4.8M."""
        results = compare_all_regimes(_input(4_800_000))

        assert results[0].regime_id == "anexo_1"
        assert not results[0].applicable
        assert best_regime(results).regime_id == "lucro_presumido"

    def test_savings_ignore_out_of_table_anexos(self):
        """Test zero-tax anexos do not inflate potential savings."""
        results = compare_all_regimes(_input(4_800_000))
        assert potential_savings(results) == 0

    def test_best_regime_none_when_nothing_applies(self):
        """Test only non-applicable results yield no best regime."""
        results = compare_all_regimes(_input(4_800_000))
        anexos = [r for r in results if not r.applicable]

        assert len(anexos) == 5
        assert best_regime(anexos) is None
        assert potential_savings(anexos) == 0
