"""Pricing formula and pricing/sensitivity constants.

Price for a target margin is the markup-over-fees formula used by every
engine in the package:

    price = (cost + operational_costs) / (1 - margin/100 - fee_fraction)
"""

import logging
from typing import NamedTuple

from precifica.core.models.enums import PricingStrategy, SensitivityVariable

logger = logging.getLogger(__name__)


# === Sensitivity grid ===

# Percent perturbations applied to each variable: -50, -40, ..., +50
SENSITIVITY_GRID: tuple[int, ...] = tuple(range(-50, 51, 10))

# Margins outside this band (%) are dropped from the margin grid
MARGEM_MINIMA_PLAUSIVEL = 5.0
MARGEM_MAXIMA_PLAUSIVEL = 80.0

# Break-even sentinels when profit never reaches zero in the grid
BREAK_EVEN_SENTINELA_AUMENTO = 100
BREAK_EVEN_SENTINELA_REDUCAO = -100

# Risk thresholds by variable: (high above, medium above)
LIMIARES_RISCO_CUSTO = (2.0, 1.0)
LIMIARES_RISCO_PADRAO = (1.5, 0.8)

# Recommendation triggers
ELASTICIDADE_CUSTO_ALERTA = 1.5
ELASTICIDADE_FRETE_ALERTA = 1.0

ROTULOS_VARIAVEIS: dict[SensitivityVariable, str] = {
    SensitivityVariable.COST: "Custo do Produto",
    SensitivityVariable.MARGIN: "Margem de Lucro",
    SensitivityVariable.VOLUME: "Volume de Vendas",
    SensitivityVariable.SHIPPING: "Frete",
    SensitivityVariable.MARKETING: "Marketing",
}


# === Strategies ===


class StrategyParameters(NamedTuple):
    """Fixed parameters of a pricing strategy."""

    strategy: PricingStrategy
    margin_percent: float
    conversion_rate: float
    base_confidence: int


ESTRATEGIA_CONSERVADORA = StrategyParameters(PricingStrategy.CONSERVATIVE, 15.0, 95.0, 92)
ESTRATEGIA_COMPETITIVA = StrategyParameters(PricingStrategy.COMPETITIVE, 25.0, 80.0, 88)
ESTRATEGIA_PREMIUM = StrategyParameters(PricingStrategy.PREMIUM, 40.0, 60.0, 75)
ESTRATEGIA_RECOMENDADA = StrategyParameters(PricingStrategy.AI_RECOMMENDED, 30.0, 75.0, 85)

# Output order of the generated suggestions
ORDEM_ESTRATEGIAS: tuple[StrategyParameters, ...] = (
    ESTRATEGIA_RECOMENDADA,
    ESTRATEGIA_CONSERVADORA,
    ESTRATEGIA_COMPETITIVA,
    ESTRATEGIA_PREMIUM,
)

# Confidence bonuses of the recommended strategy (no upper clamp)
BONUS_CONFIANCA_MARCA_PREMIUM = 5
BONUS_CONFIANCA_SAZONALIDADE_ALTA = 3

DIAS_POR_MES = 30

# Divisors at or below this are treated as zero (float noise around 100%)
DIVISOR_MINIMO = 1e-9


# === Formula primitive ===


def price_is_defined(margin_percent: float, fee_fraction: float) -> bool:
    """Check if margin plus fees leave a positive share of the price for costs."""
    return 1 - margin_percent / 100 - fee_fraction > DIVISOR_MINIMO


def calculate_price(cost_base: float, margin_percent: float, fee_fraction: float) -> float:
    """Calculate the sale price that yields ``margin_percent`` after fees.

    Args:
        cost_base: Unit cost plus operational costs
        margin_percent: Target margin in percent units (e.g. 25 for 25%)
        fee_fraction: Sum of price-proportional fees as a fraction (0.16)

    Returns:
        Sale price, or 0.0 when margin plus fees consume the whole price
        (within float tolerance)
    """
    if not price_is_defined(margin_percent, fee_fraction):
        logger.warning(
            "Margem %.2f%% + taxas %.2f%% >= 100%%; preço indefinido",
            margin_percent,
            fee_fraction * 100,
        )
        return 0.0
    return cost_base / (1 - margin_percent / 100 - fee_fraction)


def calculate_fees(price: float, fee_fraction: float) -> float:
    """Calculate price-proportional fees in currency."""
    return price * fee_fraction


def calculate_unit_profit(price: float, cost_base: float, fee_fraction: float) -> float:
    """Calculate profit per unit after costs and fees."""
    return price - cost_base - calculate_fees(price, fee_fraction)


def percent_change(value: float, base: float) -> float:
    """Calculate the percent change of ``value`` relative to ``base``.

    Returns 0 when the base is zero instead of propagating inf/nan.
    """
    if base == 0:
        return 0.0
    return (value - base) / base * 100
