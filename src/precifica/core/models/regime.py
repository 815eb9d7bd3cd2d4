"""Tax regime definition models.

Regime definitions are built once (see ``precifica.core.rules.tax_regimes``)
and never mutated. Percentages are plain numbers in percent units
(``7.3`` means 7.3%).
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from precifica.core.models.enums import ActivityMix, BusinessType, RegimeKind, TaxFlag


class TaxBracket(BaseModel):
    """A single revenue bracket (faixa) of a Simples Nacional anexo."""

    index: int = Field(..., ge=1, description="Bracket number (faixa), 1-based")
    revenue_from: float = Field(..., ge=0, description="Lower bound (inclusive)")
    revenue_to: float = Field(..., gt=0, description="Upper bound (exclusive)")
    nominal_rate: float = Field(..., ge=0, description="Nominal rate (%)")
    deduction: float = Field(default=0.0, ge=0, description="Amount to deduct (R$)")

    def contains(self, annual_revenue: float) -> bool:
        """Check if revenue falls inside [revenue_from, revenue_to)."""
        return self.revenue_from <= annual_revenue < self.revenue_to

    model_config = {"frozen": True}


class SimplesAnexo(BaseModel):
    """Progressive-bracket table of one Simples Nacional activity family."""

    id: str = Field(..., description="Anexo id (e.g. anexo_1)")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    activities: tuple[str, ...] = Field(default=())
    brackets: tuple[TaxBracket, ...] = Field(..., min_length=1)
    tax_flags: frozenset[TaxFlag] = Field(
        default=frozenset(), description="Sub-taxes that compose the bracket rate"
    )
    kind: RegimeKind = Field(default=RegimeKind.SIMPLES)

    @model_validator(mode="after")
    def validate_brackets(self) -> "SimplesAnexo":
        """Brackets must start at zero and be contiguous, ordered by index."""
        if self.brackets[0].revenue_from != 0:
            raise ValueError(f"{self.id}: primeira faixa deve começar em 0")
        for position, bracket in enumerate(self.brackets, start=1):
            if bracket.index != position:
                raise ValueError(f"{self.id}: faixas fora de ordem ({bracket.index})")
        for previous, current in zip(self.brackets, self.brackets[1:]):
            if current.revenue_from != previous.revenue_to:
                raise ValueError(
                    f"{self.id}: faixa {current.index} não é contígua à faixa {previous.index}"
                )
        return self

    @property
    def revenue_ceiling(self) -> float:
        """Eligibility ceiling (upper bound of the last bracket)."""
        return self.brackets[-1].revenue_to

    def find_bracket(self, annual_revenue: float) -> Optional[TaxBracket]:
        """Return the unique bracket containing the revenue, if any."""
        return next((b for b in self.brackets if b.contains(annual_revenue)), None)

    def next_bracket(self, bracket: TaxBracket) -> Optional[TaxBracket]:
        """Return the bracket following ``bracket``, if any."""
        if bracket.index < len(self.brackets):
            return self.brackets[bracket.index]
        return None

    model_config = {"frozen": True}


class MEIRegime(BaseModel):
    """Flat-fee micro-entrepreneur regime."""

    id: str = Field(default="mei")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    revenue_limit: float = Field(..., gt=0, description="Annual revenue ceiling")
    monthly_fees: dict[ActivityMix, float] = Field(
        ..., description="Fixed monthly fee (DAS) by activity mix"
    )
    benefits: tuple[str, ...] = Field(default=())
    kind: RegimeKind = Field(default=RegimeKind.MEI)

    model_config = {"frozen": True}


class StatutoryRates(BaseModel):
    """Statutory rates (%) of the profit-based regimes."""

    irpj: float = Field(..., description="Income tax on profit")
    irpj_additional: float = Field(..., description="Income tax surtax")
    csll: float = Field(..., description="Social contribution on profit")
    pis: float = Field(..., description="PIS on gross revenue")
    cofins: float = Field(..., description="COFINS on gross revenue")

    model_config = {"frozen": True}


class PresumedProfitRegime(BaseModel):
    """Lucro Presumido: taxes computed on a presumed profit margin."""

    id: str = Field(default="lucro_presumido")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    revenue_limit: float = Field(..., gt=0)
    presumed_margins: dict[BusinessType, float] = Field(
        ..., description="Presumed profit margin (%) by business type"
    )
    rates: StatutoryRates
    surtax_monthly_threshold: float = Field(
        ..., description="Monthly presumed profit above which the surtax applies"
    )
    kind: RegimeKind = Field(default=RegimeKind.LUCRO_PRESUMIDO)

    @property
    def surtax_annual_threshold(self) -> float:
        """Annualized surtax threshold."""
        return self.surtax_monthly_threshold * 12

    model_config = {"frozen": True}


class RealProfitRegime(BaseModel):
    """Lucro Real rate table (kept for regimes mandated by ceiling breach)."""

    id: str = Field(default="lucro_real")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    mandatory_for: tuple[str, ...] = Field(default=())
    rates: StatutoryRates
    kind: RegimeKind = Field(default=RegimeKind.LUCRO_REAL)

    model_config = {"frozen": True}


RegimeDefinition = SimplesAnexo | MEIRegime | PresumedProfitRegime | RealProfitRegime


class BusinessTypeProfile(BaseModel):
    """Business type with the regimes usually recommended for it."""

    id: BusinessType
    name: str
    description: str = Field(default="")
    recommended_regimes: tuple[str, ...] = Field(default=())

    model_config = {"frozen": True}
