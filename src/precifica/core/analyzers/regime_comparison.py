"""Comparison of every regime a business is eligible for."""

import logging
from typing import Optional

from precifica.core.analyzers.tax_regime import TaxRegimeResolver
from precifica.core.models.tax import TaxCalculationInput, TaxCalculationResult
from precifica.core.rules.tax_regimes import DEFAULT_CATALOG, RegimeCatalog

logger = logging.getLogger(__name__)


class RegimeComparisonOrchestrator:
    """Runs the resolver across eligible regimes and ranks them by tax burden.

    Eligibility:
    - MEI when annual revenue is within the MEI ceiling
    - every Simples Nacional anexo within the Simples ceiling
    - Lucro Presumido always
    """

    def __init__(self, catalog: RegimeCatalog = DEFAULT_CATALOG):
        self.catalog = catalog
        self.resolver = TaxRegimeResolver(catalog)

    def compare_all_eligible(
        self,
        calc_input: TaxCalculationInput,
        recommended_only: bool = False,
    ) -> list[TaxCalculationResult]:
        """Return eligible regimes sorted by monthly tax, lowest first.

        Args:
            calc_input: Revenue figures and business type
            recommended_only: Keep only regimes recommended for the business type

        Returns:
            Results in ascending monthly tax order (ties keep catalog order)
        """
        annual = calc_input.annual_revenue
        monthly = calc_input.monthly_revenue
        results: list[TaxCalculationResult] = []

        if annual <= self.catalog.mei.revenue_limit:
            results.append(
                self.resolver.resolve_flat_fee(
                    self.catalog.mei,
                    monthly,
                    annual,
                    self.resolver.activity_mix_for(calc_input),
                )
            )

        if annual <= self.catalog.simples_ceiling:
            for anexo in self.catalog.anexos:
                results.append(self.resolver.resolve_progressive_bracket(anexo, monthly, annual))

        results.append(
            self.resolver.resolve_presumed_margin(
                self.catalog.lucro_presumido, monthly, annual, calc_input.business_type
            )
        )

        if recommended_only:
            recommended = set(
                self.catalog.list_business_type_recommendations(calc_input.business_type.value)
            )
            results = [r for r in results if r.regime_id in recommended]

        logger.debug("%d regimes elegíveis para receita anual %.2f", len(results), annual)

        return sorted(results, key=lambda r: r.monthly_tax)


def _applicable(results: list[TaxCalculationResult]) -> list[TaxCalculationResult]:
    return [r for r in results if r.applicable]


def best_regime(results: list[TaxCalculationResult]) -> Optional[TaxCalculationResult]:
    """Return the lowest-burden applicable result of a ranked comparison, if any.

    Anexos whose bracket table does not contain the revenue are skipped.
    """
    applicable = _applicable(results)
    return min(applicable, key=lambda r: r.monthly_tax) if applicable else None


def potential_savings(results: list[TaxCalculationResult]) -> float:
    """Annual tax difference between the costliest and the cheapest regime."""
    applicable = _applicable(results)
    if not applicable:
        return 0.0
    annual_taxes = [r.annual_tax for r in applicable]
    return max(annual_taxes) - min(annual_taxes)


def compare_all_regimes(
    calc_input: TaxCalculationInput,
    recommended_only: bool = False,
) -> list[TaxCalculationResult]:
    """Convenience function to compare regimes with the default catalog.

    Args:
        calc_input: Revenue figures and business type
        recommended_only: Keep only regimes recommended for the business type

    Returns:
        Results sorted by monthly tax, lowest first
    """
    orchestrator = RegimeComparisonOrchestrator()
    return orchestrator.compare_all_eligible(calc_input, recommended_only=recommended_only)
