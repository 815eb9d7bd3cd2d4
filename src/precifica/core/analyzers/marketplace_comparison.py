"""Compare the same product priced on every marketplace."""

import logging
from typing import Optional

from precifica.core.models.pricing import (
    MarketplaceComparisonInput,
    MarketplaceComparisonResult,
    MarketplaceFeeBreakdown,
    MarketplaceFeeProfile,
    MarketplaceQuote,
)
from precifica.core.rules.marketplaces import MARKETPLACE_PROFILES
from precifica.core.rules.pricing import calculate_price

logger = logging.getLogger(__name__)

# Net margin below which a marketplace is flagged as tight
MARGEM_BAIXA_ALERTA = 10.0
# Fee share of the price above which a marketplace is flagged as expensive
TAXAS_ALTAS_ALERTA = 20.0


class MarketplaceComparator:
    """Prices a scenario on each fee profile and ranks by net profit."""

    def __init__(
        self,
        comparison_input: MarketplaceComparisonInput,
        profiles: tuple[MarketplaceFeeProfile, ...] = MARKETPLACE_PROFILES,
    ):
        self.input = comparison_input
        self.profiles = profiles

    def compare(self) -> MarketplaceComparisonResult:
        """Rank every marketplace by net profit, highest first."""
        quotes = sorted(
            (self._quote(profile) for profile in self.profiles),
            key=lambda q: q.net_profit,
            reverse=True,
        )
        if not quotes:
            return MarketplaceComparisonResult()

        best_profit = quotes[0].net_profit
        for ranking, quote in enumerate(quotes, start=1):
            quote.ranking = ranking
            quote.is_recommended = ranking == 1
            quote.profit_difference = best_profit - quote.net_profit
            quote.profit_difference_percent = (
                quote.profit_difference / best_profit * 100 if best_profit > 0 else 0.0
            )

        by_fees = sorted(quotes, key=lambda q: q.total_fees)

        logger.debug("Melhor marketplace: %s", quotes[0].marketplace_id)

        return MarketplaceComparisonResult(
            results=quotes,
            best_marketplace=quotes[0],
            worst_marketplace=quotes[-1],
            average_profit=sum(q.net_profit for q in quotes) / len(quotes),
            average_margin=sum(q.profit_margin for q in quotes) / len(quotes),
            lowest_fees=by_fees[0],
            highest_fees=by_fees[-1],
            potential_savings=best_profit - quotes[-1].net_profit,
        )

    def _quote(self, profile: MarketplaceFeeProfile) -> MarketplaceQuote:
        """Price the scenario on one marketplace."""
        inp = self.input
        payment_percent = profile.payment_fee_percent if inp.include_payment_fee else 0.0
        fee_fraction = (
            profile.commission_percent + payment_percent + profile.advertising_fee_percent
        ) / 100

        cost_base = inp.cost + inp.shipping + inp.packaging + inp.marketing + inp.other_costs
        price = calculate_price(cost_base, inp.target_margin, fee_fraction)

        breakdown = MarketplaceFeeBreakdown(
            marketplace_fee=price * profile.commission_percent / 100,
            marketplace_fee_percent=profile.commission_percent,
            payment_fee=price * payment_percent / 100,
            payment_fee_percent=payment_percent,
            advertising_fee=price * profile.advertising_fee_percent / 100,
            advertising_fee_percent=profile.advertising_fee_percent,
        )
        total_fees = breakdown.marketplace_fee + breakdown.payment_fee + breakdown.advertising_fee
        total_costs = cost_base + total_fees
        net_profit = price - total_costs
        profit_margin = net_profit / price * 100 if price > 0 else 0.0

        return MarketplaceQuote(
            marketplace_id=profile.id,
            marketplace_name=profile.name,
            suggested_price=price,
            net_profit=net_profit,
            profit_margin=profit_margin,
            total_fees=total_fees,
            total_costs=total_costs,
            breakdown=breakdown,
            insights=self._insights(profile, profit_margin, total_fees, price),
        )

    def _insights(
        self,
        profile: MarketplaceFeeProfile,
        profit_margin: float,
        total_fees: float,
        price: float,
    ) -> list[str]:
        insights = []
        fee_share = total_fees / price * 100 if price > 0 else 0.0

        if fee_share > TAXAS_ALTAS_ALERTA:
            insights.append(
                f"Taxas do {profile.name} consomem {fee_share:.1f}% do preço de venda."
            )
        if profit_margin < MARGEM_BAIXA_ALERTA:
            insights.append(
                f"Margem líquida de {profit_margin:.1f}% no {profile.name} é apertada."
            )
        return insights


def compare_marketplaces(
    comparison_input: MarketplaceComparisonInput,
    profiles: Optional[tuple[MarketplaceFeeProfile, ...]] = None,
) -> MarketplaceComparisonResult:
    """Convenience function to compare every marketplace.

    Args:
        comparison_input: Unit costs and target margin
        profiles: Fee profiles to compare (defaults to the built-in catalog)

    Returns:
        Quotes ranked by net profit and summary statistics
    """
    comparator = MarketplaceComparator(
        comparison_input, profiles if profiles is not None else MARKETPLACE_PROFILES
    )
    return comparator.compare()
