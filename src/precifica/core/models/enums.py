"""Enumerations for pricing and tax domain models."""

from enum import Enum


class BusinessType(str, Enum):
    """Taxable activity family of the business."""

    COMERCIO = "comercio"
    INDUSTRIA = "industria"
    SERVICOS = "servicos"
    SERVICOS_INTELECTUAIS = "servicos_intelectuais"


class ActivityMix(str, Enum):
    """MEI activity mix (selects the fixed monthly fee)."""

    COMERCIO = "comercio"
    SERVICOS = "servicos"
    COMERCIO_SERVICOS = "comercio_servicos"


class TaxFlag(str, Enum):
    """Sub-taxes collected inside a Simples Nacional bracket."""

    IRPJ = "irpj"
    CSLL = "csll"
    COFINS = "cofins"
    PIS = "pis"
    CPP = "cpp"
    ICMS = "icms"
    ISS = "iss"
    IPI = "ipi"


class RegimeKind(str, Enum):
    """Tax regime families."""

    SIMPLES = "simples"
    MEI = "mei"
    LUCRO_PRESUMIDO = "lucro_presumido"
    LUCRO_REAL = "lucro_real"


class Severity(str, Enum):
    """Severity levels for calculation alerts."""

    INFO = "info"
    WARNING = "warning"


class SensitivityVariable(str, Enum):
    """Scenario drivers tracked by the sensitivity analysis."""

    COST = "cost"
    MARGIN = "margin"
    VOLUME = "volume"
    SHIPPING = "shipping"
    MARKETING = "marketing"


class RiskLevel(str, Enum):
    """Risk tier of a scenario variable."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PricingStrategy(str, Enum):
    """Named pricing strategies."""

    AI_RECOMMENDED = "ai-recommended"
    CONSERVATIVE = "conservative"
    COMPETITIVE = "competitive"
    PREMIUM = "premium"


class BrandStrength(str, Enum):
    """Perceived brand strength."""

    NEW = "new"
    ESTABLISHED = "established"
    PREMIUM = "premium"


class Seasonality(str, Enum):
    """Demand seasonality of the product."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
