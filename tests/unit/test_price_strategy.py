"""Tests for the price strategy generator."""

import pytest

from precifica.core.analyzers import PriceStrategyGenerator, generate_price_suggestions
from precifica.core.analyzers.price_strategy import TEXTOS_ESTRATEGIA
from precifica.core.models import (
    BrandStrength,
    PriceSuggestionInput,
    PricingStrategy,
    Seasonality,
)


def _by_strategy(suggestions):
    return {s.strategy: s for s in suggestions}


class TestSuggestedPrices:
    """Tests for the four strategy prices."""

    def test_fixed_order(self, suggestion_input, fee_profile_10):
        """Test suggestions come in recommended, conservative, competitive, premium order."""
        suggestions = generate_price_suggestions(suggestion_input, fee_profile_10)
        assert [s.strategy for s in suggestions] == [
            PricingStrategy.AI_RECOMMENDED,
            PricingStrategy.CONSERVATIVE,
            PricingStrategy.COMPETITIVE,
            PricingStrategy.PREMIUM,
        ]

    def test_prices_with_ten_percent_commission(self, suggestion_input, fee_profile_10):
        """Test prices for cost base 115 and a 10% commission."""
        prices = {
            strategy: s.suggested_price
            for strategy, s in _by_strategy(
                generate_price_suggestions(suggestion_input, fee_profile_10)
            ).items()
        }

        assert prices[PricingStrategy.CONSERVATIVE] == pytest.approx(153.33, abs=0.01)
        assert prices[PricingStrategy.COMPETITIVE] == pytest.approx(176.92, abs=0.01)
        assert prices[PricingStrategy.AI_RECOMMENDED] == pytest.approx(191.67, abs=0.01)
        assert prices[PricingStrategy.PREMIUM] == pytest.approx(230.00, abs=0.01)

    def test_prices_increase_with_margin(self, suggestion_input, fee_profile_10):
        """Test a higher margin never yields a lower price."""
        suggestions = sorted(
            generate_price_suggestions(suggestion_input, fee_profile_10),
            key=lambda s: s.margin_percent,
        )
        prices = [s.suggested_price for s in suggestions]
        assert prices == sorted(prices)

    def test_price_for_margin(self, suggestion_input, fee_profile_10):
        """Test the generator prices arbitrary margins."""
        generator = PriceStrategyGenerator(suggestion_input, fee_profile_10)
        assert generator.price_for_margin(0) == pytest.approx(115 / 0.9)


class TestConfidence:
    """Tests for confidence scores."""

    def test_base_confidence(self, suggestion_input, fee_profile_10):
        """Test base confidence of each strategy."""
        by_strategy = _by_strategy(generate_price_suggestions(suggestion_input, fee_profile_10))

        assert by_strategy[PricingStrategy.AI_RECOMMENDED].confidence == 85
        assert by_strategy[PricingStrategy.CONSERVATIVE].confidence == 92
        assert by_strategy[PricingStrategy.COMPETITIVE].confidence == 88
        assert by_strategy[PricingStrategy.PREMIUM].confidence == 75

    def test_bonuses_only_for_recommended(self, fee_profile_10):
        """Test premium brand and high seasonality raise the recommended confidence."""
        suggestion_input = PriceSuggestionInput(
            cost=100,
            brand_strength=BrandStrength.PREMIUM,
            seasonality=Seasonality.HIGH,
        )
        by_strategy = _by_strategy(generate_price_suggestions(suggestion_input, fee_profile_10))

        assert by_strategy[PricingStrategy.AI_RECOMMENDED].confidence == 93
        assert by_strategy[PricingStrategy.PREMIUM].confidence == 75

    def test_no_bonus_for_established_brand(self, fee_profile_10):
        """Test only the premium brand earns a bonus."""
        suggestion_input = PriceSuggestionInput(
            cost=100, brand_strength=BrandStrength.ESTABLISHED, seasonality=Seasonality.LOW
        )
        suggestions = generate_price_suggestions(suggestion_input, fee_profile_10)
        assert suggestions[0].confidence == 85


class TestExpectedOutcome:
    """Tests for projected outcomes."""

    def test_without_volume(self, suggestion_input, fee_profile_10):
        """Test monthly figures are absent without a volume."""
        conservative = _by_strategy(
            generate_price_suggestions(suggestion_input, fee_profile_10)
        )[PricingStrategy.CONSERVATIVE]
        outcome = conservative.expected_outcome

        assert outcome.conversion_rate_assumption == 95
        assert outcome.unit_fees == pytest.approx(115 / 0.75 * 0.10)
        assert outcome.unit_profit == pytest.approx(23.0)
        assert outcome.monthly_revenue is None
        assert outcome.monthly_profit is None
        assert outcome.roi is None
        assert outcome.break_even_days is None

    def test_with_volume_and_investment(self, fee_profile_10):
        """Test monthly projection, ROI and break-even days."""
        suggestion_input = PriceSuggestionInput(
            cost=100,
            shipping=10,
            packaging=5,
            marketing=5,
            other_costs=3,
            monthly_volume=100,
        )
        conservative = _by_strategy(
            generate_price_suggestions(suggestion_input, fee_profile_10)
        )[PricingStrategy.CONSERVATIVE]
        outcome = conservative.expected_outcome

        # price 123 / 0.75 = 164; profit 24.6 per unit; 95 units converted
        assert outcome.monthly_revenue == pytest.approx(164 * 95)
        assert outcome.monthly_profit == pytest.approx(24.6 * 95)
        assert outcome.roi == pytest.approx(20.0)
        assert outcome.break_even_days == 1

    def test_no_break_even_without_investment(self, fee_profile_10):
        """Test break-even days are omitted without marketing or other costs."""
        suggestion_input = PriceSuggestionInput(cost=100, monthly_volume=100)
        outcome = generate_price_suggestions(suggestion_input, fee_profile_10)[0].expected_outcome

        assert outcome.monthly_profit is not None
        assert outcome.break_even_days is None

    def test_rationale_is_not_shared(self, suggestion_input, fee_profile_10):
        """Test mutating a suggestion leaves the rationale templates intact."""
        suggestion = generate_price_suggestions(suggestion_input, fee_profile_10)[0]
        suggestion.rationale.risks.append("extra")

        _, _, template = TEXTOS_ESTRATEGIA[PricingStrategy.AI_RECOMMENDED]
        assert "extra" not in template.risks


class TestFeeProfiles:
    """Tests for marketplace fee profile selection."""

    def test_marketplace_lookup(self):
        """Test the marketplace id selects the profile, payment fee excluded."""
        generator = PriceStrategyGenerator(PriceSuggestionInput(cost=100, marketplace="shopee"))
        assert generator.fee_profile.id == "shopee"
        assert generator.fee_fraction == pytest.approx(0.14)

    def test_payment_fee_opt_in(self):
        """Test the payment fee is added when requested."""
        generator = PriceStrategyGenerator(
            PriceSuggestionInput(cost=100, marketplace="shopee", include_payment_fee=True)
        )
        assert generator.fee_fraction == pytest.approx(0.16)

    def test_unknown_marketplace_falls_back(self):
        """Test an unknown id falls back to the first profile."""
        generator = PriceStrategyGenerator(PriceSuggestionInput(cost=100, marketplace="xyz"))
        assert generator.fee_profile.id == "mercadolivre_classico"
