"""Calculation engines for tax regimes and pricing."""

from precifica.core.analyzers.marketplace_comparison import (
    MarketplaceComparator,
    compare_marketplaces,
)
from precifica.core.analyzers.price_strategy import (
    PriceStrategyGenerator,
    generate_price_suggestions,
)
from precifica.core.analyzers.regime_comparison import (
    RegimeComparisonOrchestrator,
    best_regime,
    compare_all_regimes,
    potential_savings,
)
from precifica.core.analyzers.sensitivity import (
    SensitivityAnalyzer,
    analyze_sensitivity,
    baseline,
)
from precifica.core.analyzers.tax_regime import (
    TaxRegimeResolver,
    calculate_specific_regime,
)

__all__ = [
    "MarketplaceComparator",
    "PriceStrategyGenerator",
    "RegimeComparisonOrchestrator",
    "SensitivityAnalyzer",
    "TaxRegimeResolver",
    "analyze_sensitivity",
    "baseline",
    "best_regime",
    "calculate_specific_regime",
    "compare_all_regimes",
    "compare_marketplaces",
    "generate_price_suggestions",
    "potential_savings",
]
