"""Rule-based price suggestions.

Builds four pricing strategies from unit costs and a marketplace fee
profile, each with a confidence score and a projected monthly outcome.
"""

import logging
import math
from typing import Optional

from precifica.core.models.enums import BrandStrength, PricingStrategy, Seasonality
from precifica.core.models.pricing import (
    ExpectedOutcome,
    MarketplaceFeeProfile,
    PriceSuggestion,
    PriceSuggestionInput,
    SuggestionRationale,
)
from precifica.core.rules.marketplaces import get_marketplace_profile
from precifica.core.rules.pricing import (
    BONUS_CONFIANCA_MARCA_PREMIUM,
    BONUS_CONFIANCA_SAZONALIDADE_ALTA,
    DIAS_POR_MES,
    ORDEM_ESTRATEGIAS,
    StrategyParameters,
    calculate_fees,
    calculate_price,
    calculate_unit_profit,
)

logger = logging.getLogger(__name__)


# Display texts per strategy: (label, description, rationale)
TEXTOS_ESTRATEGIA: dict[PricingStrategy, tuple[str, str, SuggestionRationale]] = {
    PricingStrategy.CONSERVATIVE: (
        "Preço Conservador",
        "Foco em alto volume de vendas",
        SuggestionRationale(
            market_position="Posicionamento acessível, ideal para entrar no mercado rapidamente",
            conversion_expectation="Taxa de conversão esperada de 90-95% devido ao preço competitivo",
            profit_expectation="Margem menor, mas compensada pelo alto volume de vendas",
            competitive_analysis="Preço abaixo da média do mercado, bom para ganhar market share",
            risks=[
                "Margem de lucro reduzida por unidade",
                "Pode criar percepção de produto de baixa qualidade",
                "Difícil aumentar preço depois",
            ],
            opportunities=[
                "Rápida penetração de mercado",
                "Alto volume de vendas",
                "Fidelização por preço",
            ],
        ),
    ),
    PricingStrategy.COMPETITIVE: (
        "Preço Competitivo",
        "Equilíbrio entre margem e volume",
        SuggestionRationale(
            market_position="Posicionamento no centro do mercado, preço justo e competitivo",
            conversion_expectation="Taxa de conversão esperada de 75-85%",
            profit_expectation="Margem saudável com volume considerável de vendas",
            competitive_analysis="Preço alinhado com a média do mercado",
            risks=[
                "Concorrência direta com várias marcas",
                "Necessita diferenciação além do preço",
            ],
            opportunities=[
                "Melhor equilíbrio entre lucro e volume",
                "Sustentável a longo prazo",
                "Flexibilidade para promoções",
            ],
        ),
    ),
    PricingStrategy.PREMIUM: (
        "Preço Premium",
        "Máxima rentabilidade por venda",
        SuggestionRationale(
            market_position="Posicionamento de alto valor, produto diferenciado",
            conversion_expectation="Taxa de conversão esperada de 55-65%",
            profit_expectation="Máxima margem de lucro por unidade vendida",
            competitive_analysis="Preço acima da média, exige forte diferenciação e valor percebido",
            risks=[
                "Volume de vendas reduzido",
                "Exige investimento em branding",
                "Sensível a avaliações negativas",
            ],
            opportunities=[
                "Público menos sensível a preço",
                "Posicionamento de marca forte",
                "Margem para programas de fidelidade",
            ],
        ),
    ),
    PricingStrategy.AI_RECOMMENDED: (
        "Preço Recomendado",
        "Equilíbrio entre competitivo e premium",
        SuggestionRationale(
            market_position="Posicionamento intermediário entre competitivo e premium",
            conversion_expectation="Taxa de conversão esperada de 70-80%",
            profit_expectation="Melhor relação lucro/volume entre as estratégias",
            competitive_analysis="Confiança ajustada por força da marca e sazonalidade",
            risks=[
                "Heurística baseada em regras, necessita validação contínua",
                "Pode variar conforme mudanças de mercado",
            ],
            opportunities=[
                "Adaptação a sazonalidades",
                "Maximização de ROI a longo prazo",
            ],
        ),
    ),
}


class PriceStrategyGenerator:
    """Generates conservative, competitive, premium and recommended prices."""

    def __init__(
        self,
        suggestion_input: PriceSuggestionInput,
        fee_profile: Optional[MarketplaceFeeProfile] = None,
    ):
        self.input = suggestion_input
        self.fee_profile = fee_profile or get_marketplace_profile(suggestion_input.marketplace)

        payment_fee = (
            self.fee_profile.payment_fee_percent if suggestion_input.include_payment_fee else 0.0
        )
        self.fee_fraction = (self.fee_profile.commission_percent + payment_fee) / 100
        self.operational_costs = suggestion_input.operational_costs
        self.cost_base = suggestion_input.cost + self.operational_costs

    def generate(self) -> list[PriceSuggestion]:
        """Return exactly four suggestions: recommended, conservative, competitive, premium."""
        logger.debug(
            "Sugestões para %s: custo base %.2f, taxas %.2f%%",
            self.fee_profile.id,
            self.cost_base,
            self.fee_fraction * 100,
        )
        return [self._suggest(params) for params in ORDEM_ESTRATEGIAS]

    def price_for_margin(self, margin_percent: float) -> float:
        """Sale price that yields the given margin after fees."""
        return calculate_price(self.cost_base, margin_percent, self.fee_fraction)

    def _suggest(self, params: StrategyParameters) -> PriceSuggestion:
        label, description, rationale = TEXTOS_ESTRATEGIA[params.strategy]
        price = self.price_for_margin(params.margin_percent)

        return PriceSuggestion(
            strategy=params.strategy,
            label=label,
            description=description,
            margin_percent=params.margin_percent,
            suggested_price=price,
            confidence=self._confidence(params),
            rationale=rationale.model_copy(deep=True),
            expected_outcome=self._outcome(price, params.conversion_rate),
        )

    def _confidence(self, params: StrategyParameters) -> int:
        """Confidence score; only the recommended strategy gets bonuses."""
        confidence = params.base_confidence
        if params.strategy != PricingStrategy.AI_RECOMMENDED:
            return confidence

        if self.input.brand_strength == BrandStrength.PREMIUM:
            confidence += BONUS_CONFIANCA_MARCA_PREMIUM
        if self.input.seasonality == Seasonality.HIGH:
            confidence += BONUS_CONFIANCA_SAZONALIDADE_ALTA
        return confidence

    def _outcome(self, price: float, conversion_rate: float) -> ExpectedOutcome:
        """Project unit and monthly results at the assumed conversion."""
        fees = calculate_fees(price, self.fee_fraction)
        profit = calculate_unit_profit(price, self.cost_base, self.fee_fraction)

        volume = self.input.monthly_volume
        if not volume or volume <= 0:
            return ExpectedOutcome(
                conversion_rate_assumption=conversion_rate,
                unit_fees=fees,
                unit_profit=profit,
            )

        adjusted_volume = volume * conversion_rate / 100
        monthly_profit = profit * adjusted_volume
        total_investment = self.cost_base * adjusted_volume
        roi = monthly_profit / total_investment * 100 if total_investment > 0 else 0.0

        break_even_days = None
        daily_profit = monthly_profit / DIAS_POR_MES
        initial_investment = self.input.marketing + self.input.other_costs
        if daily_profit > 0 and initial_investment > 0:
            break_even_days = math.ceil(initial_investment / daily_profit)

        return ExpectedOutcome(
            conversion_rate_assumption=conversion_rate,
            unit_fees=fees,
            unit_profit=profit,
            monthly_revenue=price * adjusted_volume,
            monthly_profit=monthly_profit,
            roi=roi,
            break_even_days=break_even_days,
        )


def generate_price_suggestions(
    suggestion_input: PriceSuggestionInput,
    fee_profile: Optional[MarketplaceFeeProfile] = None,
) -> list[PriceSuggestion]:
    """Convenience function to generate price suggestions.

    Args:
        suggestion_input: Unit costs and market context
        fee_profile: Explicit fee profile (overrides the marketplace lookup)

    Returns:
        Four suggestions in fixed strategy order
    """
    generator = PriceStrategyGenerator(suggestion_input, fee_profile)
    return generator.generate()
