"""Tax regime resolver.

Resolves a revenue figure against one regime definition:
- Simples Nacional anexos (progressive brackets)
- MEI (flat monthly fee)
- Lucro Presumido (presumed profit margin)

All functions are pure: results depend only on the inputs and the
immutable regime catalog.
"""

import logging
from typing import Callable, Optional

from precifica.core.models.enums import ActivityMix, BusinessType, Severity
from precifica.core.models.regime import MEIRegime, PresumedProfitRegime, SimplesAnexo
from precifica.core.models.tax import Alert, TaxCalculationInput, TaxCalculationResult
from precifica.core.rules.tax_regimes import (
    DEFAULT_CATALOG,
    MEI_ATIVIDADE_POR_TIPO,
    MEI_UTILIZACAO_ALERTA,
    RegimeCatalog,
)
from precifica.shared.formatters import format_currency

logger = logging.getLogger(__name__)

# Share of the bracket ceiling above which a bracket-change warning is emitted
PROXIMIDADE_FAIXA_ALERTA = 85.0


def _rate_of(amount: float, annual_revenue: float) -> float:
    """Express an amount as a percentage of annual revenue (0 for zero revenue)."""
    if annual_revenue == 0:
        return 0.0
    return amount / annual_revenue * 100


class TaxRegimeResolver:
    """Computes effective rate and tax due for a revenue under one regime."""

    def __init__(self, catalog: RegimeCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

        # regime_id -> handler; anexo ids are resolved through "simples"
        self._dispatch: dict[str, Callable[[TaxCalculationInput], Optional[TaxCalculationResult]]] = {
            catalog.mei.id: self._resolve_mei_input,
            catalog.lucro_presumido.id: self._resolve_presumed_input,
            "simples": self._resolve_simples_input,
        }

    def resolve_progressive_bracket(
        self,
        anexo: SimplesAnexo,
        monthly_revenue: float,
        annual_revenue: float,
    ) -> TaxCalculationResult:
        """Resolve a Simples Nacional anexo.

        Effective rate: ((RBT12 x nominal) - deduction) / RBT12.
        Revenue above the last bracket is not extrapolated: the result
        carries a zero rate and a warning.
        """
        bracket = anexo.find_bracket(annual_revenue)

        if bracket is None:
            logger.debug("%s: receita %.2f acima do teto", anexo.id, annual_revenue)
            return TaxCalculationResult(
                regime_id=anexo.id,
                regime_name=anexo.name,
                applicable=False,
                alerts=[
                    Alert(
                        severity=Severity.WARNING,
                        message=(
                            f"Faturamento fora do limite do Simples Nacional "
                            f"({format_currency(anexo.revenue_ceiling)}/ano)"
                        ),
                    )
                ],
            )

        if annual_revenue == 0:
            effective_rate = 0.0
        else:
            effective_rate = (
                (annual_revenue * bracket.nominal_rate / 100) - bracket.deduction
            ) / annual_revenue * 100

        alerts: list[Alert] = []

        # Proximity to the next bracket
        next_bracket = anexo.next_bracket(bracket)
        utilizacao = annual_revenue / bracket.revenue_to * 100
        if utilizacao > PROXIMIDADE_FAIXA_ALERTA and next_bracket is not None:
            alerts.append(
                Alert(
                    severity=Severity.WARNING,
                    message=(
                        f"Você está a {100 - utilizacao:.1f}% de mudar para a faixa "
                        f"{next_bracket.index} (alíquota {next_bracket.nominal_rate}%)"
                    ),
                )
            )

        logger.debug(
            "%s: faixa %d, alíquota efetiva %.4f%%", anexo.id, bracket.index, effective_rate
        )

        return TaxCalculationResult(
            regime_id=anexo.id,
            regime_name=anexo.name,
            effective_rate=effective_rate,
            monthly_tax=monthly_revenue * effective_rate / 100,
            annual_tax=annual_revenue * effective_rate / 100,
            bracket_index=bracket.index,
            nominal_rate=bracket.nominal_rate,
            deduction=bracket.deduction,
            alerts=alerts,
        )

    def resolve_flat_fee(
        self,
        mei: MEIRegime,
        monthly_revenue: float,
        annual_revenue: float,
        activity_mix: ActivityMix,
    ) -> TaxCalculationResult:
        """Resolve the MEI fixed monthly fee for an activity mix."""
        alerts: list[Alert] = []

        if annual_revenue > mei.revenue_limit:
            alerts.append(
                Alert(
                    severity=Severity.WARNING,
                    message=(
                        f"Faturamento acima do limite do MEI "
                        f"({format_currency(mei.revenue_limit)}). "
                        f"Necessário migrar para outro regime."
                    ),
                )
            )

        monthly_tax = mei.monthly_fees[activity_mix]
        annual_tax = monthly_tax * 12
        effective_rate = _rate_of(annual_tax, annual_revenue)

        utilizacao = annual_revenue / mei.revenue_limit * 100
        if utilizacao > MEI_UTILIZACAO_ALERTA:
            alerts.append(
                Alert(
                    severity=Severity.INFO,
                    message=(
                        f"Você já utilizou {utilizacao:.1f}% do limite anual do MEI. "
                        f"Planeje a transição para outro regime."
                    ),
                )
            )

        logger.debug("mei: atividade %s, DAS %.2f", activity_mix.value, monthly_tax)

        return TaxCalculationResult(
            regime_id=mei.id,
            regime_name=mei.name,
            effective_rate=effective_rate,
            monthly_tax=monthly_tax,
            annual_tax=annual_tax,
            alerts=alerts,
            recommendations=list(mei.benefits),
        )

    def resolve_presumed_margin(
        self,
        regime: PresumedProfitRegime,
        monthly_revenue: float,
        annual_revenue: float,
        business_type: BusinessType,
    ) -> TaxCalculationResult:
        """Resolve Lucro Presumido.

        - IRPJ: 15% of presumed profit + 10% above the annual surtax threshold
        - CSLL: 9% of presumed profit
        - PIS and COFINS: on gross revenue
        """
        rates = regime.rates
        presumed_margin = regime.presumed_margins[business_type]
        presumed_profit = annual_revenue * presumed_margin / 100

        irpj = presumed_profit * rates.irpj / 100
        irpj_additional = max(
            0.0, (presumed_profit - regime.surtax_annual_threshold) * rates.irpj_additional / 100
        )
        csll = presumed_profit * rates.csll / 100
        pis = annual_revenue * rates.pis / 100
        cofins = annual_revenue * rates.cofins / 100

        total_tax = irpj + irpj_additional + csll + pis + cofins

        breakdown = {
            "irpj": _rate_of(irpj, annual_revenue),
            "irpj_adicional": _rate_of(irpj_additional, annual_revenue),
            "csll": _rate_of(csll, annual_revenue),
            "pis": _rate_of(pis, annual_revenue),
            "cofins": _rate_of(cofins, annual_revenue),
        }

        alerts: list[Alert] = []
        if annual_revenue > regime.revenue_limit:
            alerts.append(
                Alert(
                    severity=Severity.WARNING,
                    message=(
                        "Faturamento acima do limite do Lucro Presumido. "
                        "Necessário migrar para Lucro Real."
                    ),
                )
            )

        logger.debug(
            "lucro_presumido: margem %.0f%%, imposto anual %.2f", presumed_margin, total_tax
        )

        return TaxCalculationResult(
            regime_id=regime.id,
            regime_name=regime.name,
            effective_rate=_rate_of(total_tax, annual_revenue),
            monthly_tax=total_tax / 12,
            annual_tax=total_tax,
            breakdown=breakdown,
            alerts=alerts,
        )

    def resolve(self, calc_input: TaxCalculationInput) -> Optional[TaxCalculationResult]:
        """Resolve the single regime named by ``calc_input.regime_id``.

        Returns None when the regime is unknown or has no calculation
        (Lucro Real).
        """
        if calc_input.regime_id is None:
            return None

        handler = self._dispatch.get(calc_input.regime_id)
        if handler is not None:
            return handler(calc_input)

        # Anexo id given directly as regime
        anexo = self.catalog.get_anexo_by_id(calc_input.regime_id)
        if anexo is not None:
            return self.resolve_progressive_bracket(
                anexo, calc_input.monthly_revenue, calc_input.annual_revenue
            )

        logger.debug("Regime sem cálculo: %s", calc_input.regime_id)
        return None

    def activity_mix_for(self, calc_input: TaxCalculationInput) -> ActivityMix:
        """MEI activity mix: explicit override or derived from business type."""
        return calc_input.activity_mix or MEI_ATIVIDADE_POR_TIPO[calc_input.business_type]

    def _resolve_mei_input(self, calc_input: TaxCalculationInput) -> TaxCalculationResult:
        return self.resolve_flat_fee(
            self.catalog.mei,
            calc_input.monthly_revenue,
            calc_input.annual_revenue,
            self.activity_mix_for(calc_input),
        )

    def _resolve_presumed_input(self, calc_input: TaxCalculationInput) -> TaxCalculationResult:
        return self.resolve_presumed_margin(
            self.catalog.lucro_presumido,
            calc_input.monthly_revenue,
            calc_input.annual_revenue,
            calc_input.business_type,
        )

    def _resolve_simples_input(
        self, calc_input: TaxCalculationInput
    ) -> Optional[TaxCalculationResult]:
        if not calc_input.bracket_table_id:
            return None
        anexo = self.catalog.get_anexo_by_id(calc_input.bracket_table_id)
        if anexo is None:
            return None
        return self.resolve_progressive_bracket(
            anexo, calc_input.monthly_revenue, calc_input.annual_revenue
        )


def calculate_specific_regime(
    calc_input: TaxCalculationInput,
) -> Optional[TaxCalculationResult]:
    """Convenience function to resolve one regime with the default catalog.

    Args:
        calc_input: Revenue figures, business type and regime selection

    Returns:
        Calculation result, or None when the regime cannot be resolved
    """
    return TaxRegimeResolver().resolve(calc_input)
