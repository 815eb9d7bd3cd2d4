"""Tax calculation input and result models."""

from typing import Optional

from pydantic import BaseModel, Field

from precifica.core.models.enums import ActivityMix, BusinessType, Severity


class Alert(BaseModel):
    """In-band notice attached to a calculation result."""

    severity: Severity = Field(..., description="info or warning")
    message: str = Field(..., description="Human-readable message")

    model_config = {"frozen": True}


class TaxCalculationInput(BaseModel):
    """Revenue figures and business profile for one calculation request."""

    monthly_revenue: float = Field(..., ge=0, description="Monthly revenue (R$)")
    annual_revenue: float = Field(..., ge=0, description="Trailing 12-month revenue (RBT12)")
    business_type: BusinessType = Field(default=BusinessType.SERVICOS)
    regime_id: Optional[str] = Field(
        default=None, description="mei, simples, lucro_presumido or an anexo id"
    )
    bracket_table_id: Optional[str] = Field(
        default=None, description="Anexo id when regime_id is 'simples'"
    )
    activity_mix: Optional[ActivityMix] = Field(
        default=None, description="Overrides the MEI activity mix derived from business_type"
    )

    model_config = {"frozen": True}


class TaxCalculationResult(BaseModel):
    """Tax burden of a revenue figure under one regime."""

    regime_id: str = Field(..., description="Regime or anexo id")
    regime_name: str = Field(..., description="Display name")
    effective_rate: float = Field(default=0.0, description="Effective rate (%)")
    monthly_tax: float = Field(default=0.0, description="Monthly tax (R$)")
    annual_tax: float = Field(default=0.0, description="Annual tax (R$)")

    bracket_index: Optional[int] = Field(default=None, description="Selected faixa")
    nominal_rate: Optional[float] = Field(default=None, description="Nominal rate (%)")
    deduction: Optional[float] = Field(default=None, description="Amount deducted (R$)")
    breakdown: Optional[dict[str, float]] = Field(
        default=None, description="Component contribution as % of annual revenue"
    )
    applicable: bool = Field(
        default=True, description="False when revenue falls outside the bracket table"
    )

    alerts: list[Alert] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """Check if any warning alert was emitted."""
        return any(a.severity == Severity.WARNING for a in self.alerts)
