"""Tests for the tax regime catalog."""

import pytest

from precifica.core.models import SimplesAnexo, TaxBracket
from precifica.core.rules import (
    DEFAULT_CATALOG,
    LIMITE_SIMPLES_NACIONAL,
    LUCRO_PRESUMIDO,
    SIMPLES_NACIONAL_ANEXOS,
    get_anexo_by_id,
    get_regime_by_id,
    list_business_type_recommendations,
    list_regimes,
)


class TestSimplesTables:
    """Tests for the Simples Nacional anexo tables."""

    def test_five_anexos_with_six_brackets(self):
        """Test every anexo carries six faixas."""
        assert len(SIMPLES_NACIONAL_ANEXOS) == 5
        for anexo in SIMPLES_NACIONAL_ANEXOS:
            assert len(anexo.brackets) == 6

    def test_brackets_are_contiguous(self):
        """Test each bracket starts where the previous one ends."""
        for anexo in SIMPLES_NACIONAL_ANEXOS:
            assert anexo.brackets[0].revenue_from == 0
            for previous, current in zip(anexo.brackets, anexo.brackets[1:]):
                assert current.revenue_from == previous.revenue_to
                assert current.index == previous.index + 1

    def test_ceiling_is_shared(self):
        """Test every anexo ends at the Simples Nacional ceiling."""
        for anexo in SIMPLES_NACIONAL_ANEXOS:
            assert anexo.revenue_ceiling == LIMITE_SIMPLES_NACIONAL
        assert DEFAULT_CATALOG.simples_ceiling == LIMITE_SIMPLES_NACIONAL

    def test_anexo_i_second_bracket(self):
        """Test Anexo I faixa 2 values."""
        bracket = get_anexo_by_id("anexo_1").brackets[1]
        assert bracket.revenue_from == 180_000
        assert bracket.revenue_to == 360_000
        assert bracket.nominal_rate == 7.3
        assert bracket.deduction == 5_940

    def test_find_bracket_lower_bound_inclusive(self):
        """Test revenue equal to a lower bound belongs to that bracket."""
        anexo = get_anexo_by_id("anexo_1")
        assert anexo.find_bracket(180_000).index == 2
        assert anexo.find_bracket(179_999.99).index == 1

    def test_find_bracket_above_ceiling(self):
        """Test no bracket is found at or above the ceiling."""
        anexo = get_anexo_by_id("anexo_1")
        assert anexo.find_bracket(4_800_000) is None

    def test_next_bracket_of_last_is_none(self):
        """Test the last bracket has no successor."""
        anexo = get_anexo_by_id("anexo_3")
        assert anexo.next_bracket(anexo.brackets[-1]) is None
        assert anexo.next_bracket(anexo.brackets[0]).index == 2


class TestAnexoValidation:
    """Tests for bracket table validation."""

    def test_rejects_gap_between_brackets(self):
        """Test a gap between brackets is rejected."""
        with pytest.raises(ValueError, match="contígua"):
            SimplesAnexo(
                id="anexo_x",
                name="Anexo X",
                brackets=(
                    TaxBracket(index=1, revenue_from=0, revenue_to=100, nominal_rate=1.0),
                    TaxBracket(index=2, revenue_from=200, revenue_to=300, nominal_rate=2.0),
                ),
            )

    def test_rejects_table_not_starting_at_zero(self):
        """Test the first bracket must start at zero."""
        with pytest.raises(ValueError, match="começar em 0"):
            SimplesAnexo(
                id="anexo_x",
                name="Anexo X",
                brackets=(
                    TaxBracket(index=1, revenue_from=10, revenue_to=100, nominal_rate=1.0),
                ),
            )

    def test_rejects_out_of_order_index(self):
        """Test bracket indexes must follow table order."""
        with pytest.raises(ValueError, match="fora de ordem"):
            SimplesAnexo(
                id="anexo_x",
                name="Anexo X",
                brackets=(
                    TaxBracket(index=2, revenue_from=0, revenue_to=100, nominal_rate=1.0),
                ),
            )


class TestCatalogLookups:
    """Tests for regime and business type lookups."""

    def test_get_regime_by_id(self):
        """Test lookup of known and unknown regimes."""
        assert get_regime_by_id("mei").revenue_limit == 81_000
        assert get_regime_by_id("anexo_5").brackets[0].nominal_rate == 15.5
        assert get_regime_by_id("lucro_real") is not None
        assert get_regime_by_id("inexistente") is None

    def test_list_regimes(self):
        """Test listing returns anexos, MEI and both profit regimes."""
        ids = [r.id for r in list_regimes()]
        assert ids == [
            "anexo_1",
            "anexo_2",
            "anexo_3",
            "anexo_4",
            "anexo_5",
            "mei",
            "lucro_presumido",
            "lucro_real",
        ]

    def test_business_type_recommendations(self):
        """Test recommended regimes per business type."""
        assert list_business_type_recommendations("comercio") == [
            "mei",
            "anexo_1",
            "lucro_presumido",
        ]
        assert list_business_type_recommendations("servicos_intelectuais") == [
            "anexo_5",
            "lucro_presumido",
        ]

    def test_unknown_business_type_has_no_recommendations(self):
        """Test unknown business types yield an empty list."""
        assert list_business_type_recommendations("agro") == []

    def test_presumed_profit_surtax_threshold(self):
        """Test the annual surtax threshold is twelve monthly thresholds."""
        assert LUCRO_PRESUMIDO.surtax_annual_threshold == 240_000
