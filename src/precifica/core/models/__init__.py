"""Domain models for tax regimes, scenarios and price suggestions."""

from precifica.core.models.enums import (
    ActivityMix,
    BrandStrength,
    BusinessType,
    PricingStrategy,
    RegimeKind,
    RiskLevel,
    Seasonality,
    SensitivityVariable,
    Severity,
    TaxFlag,
)
from precifica.core.models.pricing import (
    ExpectedOutcome,
    MarketplaceComparisonInput,
    MarketplaceComparisonResult,
    MarketplaceFeeBreakdown,
    MarketplaceFeeProfile,
    MarketplaceQuote,
    PriceSuggestion,
    PriceSuggestionInput,
    SuggestionRationale,
)
from precifica.core.models.regime import (
    BusinessTypeProfile,
    MEIRegime,
    PresumedProfitRegime,
    RealProfitRegime,
    RegimeDefinition,
    SimplesAnexo,
    StatutoryRates,
    TaxBracket,
)
from precifica.core.models.scenario import (
    BreakEvenPoint,
    ScenarioInput,
    ScenarioPoint,
    SensitivityResult,
    VariableImpact,
)
from precifica.core.models.tax import Alert, TaxCalculationInput, TaxCalculationResult

__all__ = [
    # Enums
    "ActivityMix",
    "BrandStrength",
    "BusinessType",
    "PricingStrategy",
    "RegimeKind",
    "RiskLevel",
    "Seasonality",
    "SensitivityVariable",
    "Severity",
    "TaxFlag",
    # Regimes
    "BusinessTypeProfile",
    "MEIRegime",
    "PresumedProfitRegime",
    "RealProfitRegime",
    "RegimeDefinition",
    "SimplesAnexo",
    "StatutoryRates",
    "TaxBracket",
    # Tax
    "Alert",
    "TaxCalculationInput",
    "TaxCalculationResult",
    # Scenario
    "BreakEvenPoint",
    "ScenarioInput",
    "ScenarioPoint",
    "SensitivityResult",
    "VariableImpact",
    # Pricing
    "ExpectedOutcome",
    "MarketplaceComparisonInput",
    "MarketplaceComparisonResult",
    "MarketplaceFeeBreakdown",
    "MarketplaceFeeProfile",
    "MarketplaceQuote",
    "PriceSuggestion",
    "PriceSuggestionInput",
    "SuggestionRationale",
]
