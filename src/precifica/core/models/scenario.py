"""Scenario and sensitivity analysis models."""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from precifica.core.models.enums import RiskLevel, SensitivityVariable


class ScenarioInput(BaseModel):
    """A priced product scenario (per-unit costs, fees and target margin)."""

    cost: float = Field(..., ge=0, description="Unit acquisition/production cost")
    target_margin: float = Field(..., ge=0, lt=100, description="Target margin (%)")
    shipping: float = Field(default=0.0, ge=0)
    packaging: float = Field(default=0.0, ge=0)
    marketing: float = Field(default=0.0, ge=0)
    other_costs: float = Field(default=0.0, ge=0)
    marketplace_fee_percent: float = Field(default=0.0, ge=0, lt=100)
    payment_fee_percent: float = Field(default=0.0, ge=0, lt=100)
    monthly_volume: Optional[float] = Field(default=None, ge=0, description="Units sold per month")

    @computed_field
    @property
    def operational_costs(self) -> float:
        """Shipping, packaging, marketing and other costs per unit."""
        return self.shipping + self.packaging + self.marketing + self.other_costs

    @computed_field
    @property
    def total_fee_fraction(self) -> float:
        """Marketplace and payment fees as a fraction of price."""
        return (self.marketplace_fee_percent + self.payment_fee_percent) / 100

    model_config = {"frozen": True}


class ScenarioPoint(BaseModel):
    """Outcome of perturbing one variable by ``percent_change``."""

    percent_change: int = Field(..., description="Perturbation applied (%)")
    perturbed_value: float = Field(..., description="Variable value after perturbation")
    resulting_profit: float = Field(..., description="Profit at the perturbed value")
    profit_change_percent: float = Field(..., description="Profit change vs baseline (%)")
    price_delta: float = Field(default=0.0, description="Price change vs baseline (R$)")


class VariableImpact(BaseModel):
    """Sensitivity of profit to one scenario variable."""

    variable: SensitivityVariable
    label: str = Field(..., description="Display label")
    base_value: float
    scenarios: list[ScenarioPoint] = Field(default_factory=list)
    elasticity: float = Field(..., ge=0)
    risk: RiskLevel
    risk_explanation: str = Field(default="")

    def point_at(self, percent_change: int) -> Optional[ScenarioPoint]:
        """Return the scenario point for a given perturbation, if sampled."""
        return next(
            (p for p in self.scenarios if p.percent_change == percent_change), None
        )


class BreakEvenPoint(BaseModel):
    """Largest tolerable perturbation of a variable before profit hits zero."""

    variable: SensitivityVariable
    max_increase_percent_before_loss: int = Field(
        ..., description="Smallest sampled increase with profit <= 0 (100 = none)"
    )
    max_decrease_percent: int = Field(default=-100)
    critical_value: float = Field(..., description="Variable value at break-even")

    @property
    def has_break_even(self) -> bool:
        """Check if profit crossed zero inside the sampled range."""
        return self.max_increase_percent_before_loss < 100


class SensitivityResult(BaseModel):
    """Complete sensitivity analysis of a scenario."""

    variables: list[VariableImpact] = Field(default_factory=list)
    most_sensitive: VariableImpact
    least_sensitive: VariableImpact
    break_even_points: list[BreakEvenPoint] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    def impact_for(self, variable: SensitivityVariable) -> Optional[VariableImpact]:
        """Return the impact of a variable, if it was analyzed."""
        return next((v for v in self.variables if v.variable == variable), None)
