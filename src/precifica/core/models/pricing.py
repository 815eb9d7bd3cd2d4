"""Price suggestion and marketplace models."""

from typing import Optional

from pydantic import BaseModel, Field

from precifica.core.models.enums import BrandStrength, PricingStrategy, Seasonality


class MarketplaceFeeProfile(BaseModel):
    """Fees a marketplace charges as a percentage of the sale price."""

    id: str = Field(..., description="Profile id (e.g. shopee)")
    name: str = Field(..., description="Display name")
    commission_percent: float = Field(..., ge=0, lt=100)
    payment_fee_percent: float = Field(default=0.0, ge=0, lt=100)
    advertising_fee_percent: float = Field(default=0.0, ge=0, lt=100)

    model_config = {"frozen": True}


class PriceSuggestionInput(BaseModel):
    """Unit costs and market context used to suggest prices."""

    cost: float = Field(..., ge=0)
    shipping: float = Field(default=0.0, ge=0)
    packaging: float = Field(default=0.0, ge=0)
    marketing: float = Field(default=0.0, ge=0)
    other_costs: float = Field(default=0.0, ge=0)
    marketplace: str = Field(default="", description="Marketplace fee profile id")
    include_payment_fee: bool = Field(default=False)
    monthly_volume: Optional[float] = Field(default=None, ge=0)
    brand_strength: Optional[BrandStrength] = Field(default=None)
    seasonality: Optional[Seasonality] = Field(default=None)

    @property
    def operational_costs(self) -> float:
        """Shipping, packaging, marketing and other costs per unit."""
        return self.shipping + self.packaging + self.marketing + self.other_costs

    model_config = {"frozen": True}


class ExpectedOutcome(BaseModel):
    """Projected outcome of selling at a suggested price.

    Monthly figures are only present when a monthly volume was supplied;
    ``break_even_days`` is omitted unless both investment and daily profit
    are positive.
    """

    conversion_rate_assumption: float = Field(..., description="Assumed conversion (%)")
    unit_fees: float = Field(default=0.0, description="Fees per unit (R$)")
    unit_profit: float = Field(default=0.0, description="Profit per unit (R$)")
    monthly_revenue: Optional[float] = Field(default=None)
    monthly_profit: Optional[float] = Field(default=None)
    roi: Optional[float] = Field(default=None, description="Return on cost (%)")
    break_even_days: Optional[int] = Field(default=None)


class SuggestionRationale(BaseModel):
    """Narrative supporting a pricing strategy."""

    market_position: str = ""
    conversion_expectation: str = ""
    profit_expectation: str = ""
    competitive_analysis: str = ""
    risks: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)


class PriceSuggestion(BaseModel):
    """A suggested price under one strategy."""

    strategy: PricingStrategy
    label: str = Field(..., description="Display label")
    description: str = Field(default="")
    margin_percent: float = Field(..., description="Margin the price was built on (%)")
    suggested_price: float = Field(..., description="Suggested sale price (R$)")
    confidence: int = Field(..., ge=0, description="Confidence score")
    rationale: SuggestionRationale = Field(default_factory=SuggestionRationale)
    expected_outcome: ExpectedOutcome


class MarketplaceComparisonInput(BaseModel):
    """Unit costs priced across every marketplace at one target margin."""

    cost: float = Field(..., ge=0)
    target_margin: float = Field(..., ge=0, lt=100)
    shipping: float = Field(default=0.0, ge=0)
    packaging: float = Field(default=0.0, ge=0)
    marketing: float = Field(default=0.0, ge=0)
    other_costs: float = Field(default=0.0, ge=0)
    include_payment_fee: bool = Field(default=False)

    model_config = {"frozen": True}


class MarketplaceFeeBreakdown(BaseModel):
    """Per-unit fee amounts of one marketplace."""

    marketplace_fee: float = 0.0
    marketplace_fee_percent: float = 0.0
    payment_fee: float = 0.0
    payment_fee_percent: float = 0.0
    advertising_fee: float = 0.0
    advertising_fee_percent: float = 0.0


class MarketplaceQuote(BaseModel):
    """Price and profit of the scenario on one marketplace."""

    marketplace_id: str
    marketplace_name: str
    suggested_price: float
    net_profit: float
    profit_margin: float = Field(..., description="Net profit / price (%)")
    total_fees: float
    total_costs: float
    ranking: int = Field(default=0, description="1 = highest net profit")
    profit_difference: float = Field(default=0.0, description="Best net profit minus this one")
    profit_difference_percent: float = Field(default=0.0)
    is_recommended: bool = Field(default=False)
    breakdown: MarketplaceFeeBreakdown = Field(default_factory=MarketplaceFeeBreakdown)
    insights: list[str] = Field(default_factory=list)


class MarketplaceComparisonResult(BaseModel):
    """All marketplaces ranked by net profit."""

    results: list[MarketplaceQuote] = Field(default_factory=list)
    best_marketplace: Optional[MarketplaceQuote] = None
    worst_marketplace: Optional[MarketplaceQuote] = None
    average_profit: float = 0.0
    average_margin: float = 0.0
    lowest_fees: Optional[MarketplaceQuote] = None
    highest_fees: Optional[MarketplaceQuote] = None
    potential_savings: float = Field(default=0.0, description="Best minus worst net profit")
