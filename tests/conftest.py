"""Pytest configuration and fixtures."""

import pytest

from precifica.core.models import (
    MarketplaceComparisonInput,
    MarketplaceFeeProfile,
    PriceSuggestionInput,
    ScenarioInput,
    TaxCalculationInput,
)


@pytest.fixture
def comercio_200k() -> TaxCalculationInput:
    """Commerce business with R$ 200k trailing revenue."""
    return TaxCalculationInput(
        monthly_revenue=200_000 / 12,
        annual_revenue=200_000,
        business_type="comercio",
    )


@pytest.fixture
def scenario() -> ScenarioInput:
    """Product scenario with fees, shipping and marketing."""
    return ScenarioInput(
        cost=50.0,
        target_margin=30.0,
        shipping=10.0,
        packaging=2.0,
        marketing=5.0,
        other_costs=3.0,
        marketplace_fee_percent=13.0,
        payment_fee_percent=2.0,
    )


@pytest.fixture
def fee_profile_10() -> MarketplaceFeeProfile:
    """Flat 10% commission profile."""
    return MarketplaceFeeProfile(id="teste", name="Teste", commission_percent=10.0)


@pytest.fixture
def suggestion_input() -> PriceSuggestionInput:
    """Unit costs for price suggestions."""
    return PriceSuggestionInput(cost=100.0, shipping=10.0, packaging=5.0)


@pytest.fixture
def comparison_input() -> MarketplaceComparisonInput:
    """Unit costs for the marketplace comparison."""
    return MarketplaceComparisonInput(cost=100.0, target_margin=20.0, shipping=10.0)
