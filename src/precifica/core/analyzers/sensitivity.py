"""Sensitivity analysis: "what if the cost goes up 10%?"

Perturbs one scenario variable at a time across a symmetric percentage
grid and measures how profit and price respond.
"""

import logging
from typing import Callable, Optional

from precifica.core.models.enums import RiskLevel, SensitivityVariable
from precifica.core.models.scenario import (
    BreakEvenPoint,
    ScenarioInput,
    ScenarioPoint,
    SensitivityResult,
    VariableImpact,
)
from precifica.core.rules.pricing import (
    BREAK_EVEN_SENTINELA_AUMENTO,
    BREAK_EVEN_SENTINELA_REDUCAO,
    ELASTICIDADE_CUSTO_ALERTA,
    ELASTICIDADE_FRETE_ALERTA,
    LIMIARES_RISCO_CUSTO,
    LIMIARES_RISCO_PADRAO,
    MARGEM_MAXIMA_PLAUSIVEL,
    MARGEM_MINIMA_PLAUSIVEL,
    ROTULOS_VARIAVEIS,
    SENSITIVITY_GRID,
    calculate_price,
    calculate_unit_profit,
    percent_change,
    price_is_defined,
)

logger = logging.getLogger(__name__)


def _classify(elasticity: float, thresholds: tuple[float, float]) -> RiskLevel:
    high, medium = thresholds
    if elasticity > high:
        return RiskLevel.HIGH
    if elasticity > medium:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def _elasticity(points: list[ScenarioPoint]) -> float:
    """Average percent profit change per percent input change over the grid."""
    if len(points) < 2:
        return 1.0
    first, last = points[0], points[-1]
    return abs(
        (last.profit_change_percent - first.profit_change_percent)
        / (last.percent_change - first.percent_change)
    )


def baseline(scenario: ScenarioInput) -> tuple[float, float]:
    """Price and unit profit of a scenario at its own target margin.

    Returns:
        Tuple of (price, profit)
    """
    cost_base = scenario.cost + scenario.operational_costs
    price = calculate_price(cost_base, scenario.target_margin, scenario.total_fee_fraction)
    profit = calculate_unit_profit(price, cost_base, scenario.total_fee_fraction)
    return price, profit


class SensitivityAnalyzer:
    """Analyzes how each cost/price driver affects profit.

    Tracks:
    - Product cost
    - Target margin (caller-controlled, always low risk)
    - Monthly volume (market-controlled, always medium risk; only when given)
    - Shipping
    - Marketing
    """

    def __init__(
        self,
        scenario: ScenarioInput,
        current_profit: float,
        current_price: float,
        baseline_margin_target: Optional[float] = None,
    ):
        self.scenario = scenario
        self.current_profit = current_profit
        self.current_price = current_price
        self.margin = (
            scenario.target_margin if baseline_margin_target is None else baseline_margin_target
        )
        self._fee_fraction = scenario.total_fee_fraction

    def analyze(self) -> SensitivityResult:
        """Run every variable through the grid and summarize the results."""
        variables = [
            self._analyze_cost(),
            self._analyze_margin(),
        ]

        volume = self._analyze_volume()
        if volume is not None:
            variables.append(volume)

        variables.append(self._analyze_shipping())
        variables.append(self._analyze_marketing())

        ranked = sorted(variables, key=lambda v: v.elasticity, reverse=True)
        most_sensitive, least_sensitive = ranked[0], ranked[-1]

        logger.debug(
            "Sensibilidade: mais sensível=%s (%.3f), menos sensível=%s (%.3f)",
            most_sensitive.variable.value,
            most_sensitive.elasticity,
            least_sensitive.variable.value,
            least_sensitive.elasticity,
        )

        return SensitivityResult(
            variables=variables,
            most_sensitive=most_sensitive,
            least_sensitive=least_sensitive,
            break_even_points=self._break_even_points(variables),
            recommendations=self._recommendations(variables, most_sensitive, least_sensitive),
        )

    def _price_point(
        self,
        change: int,
        perturbed_value: float,
        cost: float,
        operational_costs: float,
        margin: float,
    ) -> ScenarioPoint:
        """Reprice the scenario and compare against the baseline."""
        cost_base = cost + operational_costs
        price = calculate_price(cost_base, margin, self._fee_fraction)
        profit = calculate_unit_profit(price, cost_base, self._fee_fraction)
        return ScenarioPoint(
            percent_change=change,
            perturbed_value=perturbed_value,
            resulting_profit=profit,
            profit_change_percent=percent_change(profit, self.current_profit),
            price_delta=price - self.current_price,
        )

    def _operational_costs(
        self, shipping: Optional[float] = None, marketing: Optional[float] = None
    ) -> float:
        s = self.scenario
        return (
            (s.shipping if shipping is None else shipping)
            + s.packaging
            + (s.marketing if marketing is None else marketing)
            + s.other_costs
        )

    def _analyze_cost(self) -> VariableImpact:
        base = self.scenario.cost
        points = []
        for change in SENSITIVITY_GRID:
            new_cost = base * (1 + change / 100)
            points.append(
                self._price_point(change, new_cost, new_cost, self._operational_costs(), self.margin)
            )

        elasticity = _elasticity(points)
        return VariableImpact(
            variable=SensitivityVariable.COST,
            label=ROTULOS_VARIAVEIS[SensitivityVariable.COST],
            base_value=base,
            scenarios=points,
            elasticity=elasticity,
            risk=_classify(elasticity, LIMIARES_RISCO_CUSTO),
            risk_explanation=(
                f"Cada 10% de aumento no custo altera o lucro em ~{elasticity * 10:.1f}%"
            ),
        )

    def _analyze_margin(self) -> VariableImpact:
        points = []
        for change in SENSITIVITY_GRID:
            new_margin = self.margin * (1 + change / 100)
            if new_margin < MARGEM_MINIMA_PLAUSIVEL or new_margin > MARGEM_MAXIMA_PLAUSIVEL:
                continue
            if not price_is_defined(new_margin, self._fee_fraction):
                continue
            points.append(
                self._price_point(
                    change, new_margin, self.scenario.cost, self._operational_costs(), new_margin
                )
            )

        return VariableImpact(
            variable=SensitivityVariable.MARGIN,
            label=ROTULOS_VARIAVEIS[SensitivityVariable.MARGIN],
            base_value=self.margin,
            scenarios=points,
            elasticity=_elasticity(points),
            risk=RiskLevel.LOW,
            risk_explanation="Margem está sob seu controle direto - ajuste conforme necessário",
        )

    def _analyze_volume(self) -> Optional[VariableImpact]:
        volume = self.scenario.monthly_volume
        if not volume or volume <= 0:
            return None

        base_monthly_profit = self.current_profit * volume
        points = []
        for change in SENSITIVITY_GRID:
            new_volume = volume * (1 + change / 100)
            monthly_profit = self.current_profit * new_volume
            points.append(
                ScenarioPoint(
                    percent_change=change,
                    perturbed_value=new_volume,
                    resulting_profit=monthly_profit,
                    profit_change_percent=percent_change(monthly_profit, base_monthly_profit),
                    price_delta=0.0,
                )
            )

        return VariableImpact(
            variable=SensitivityVariable.VOLUME,
            label=ROTULOS_VARIAVEIS[SensitivityVariable.VOLUME],
            base_value=volume,
            scenarios=points,
            elasticity=_elasticity(points),
            risk=RiskLevel.MEDIUM,
            risk_explanation="Volume depende de fatores de mercado e marketing",
        )

    def _analyze_operational(
        self,
        variable: SensitivityVariable,
        base: float,
        operational_costs_for: Callable[[float], float],
        explanation: str,
    ) -> VariableImpact:
        points = []
        for change in SENSITIVITY_GRID:
            new_value = base * (1 + change / 100)
            points.append(
                self._price_point(
                    change,
                    new_value,
                    self.scenario.cost,
                    operational_costs_for(new_value),
                    self.margin,
                )
            )

        elasticity = _elasticity(points)
        return VariableImpact(
            variable=variable,
            label=ROTULOS_VARIAVEIS[variable],
            base_value=base,
            scenarios=points,
            elasticity=elasticity,
            risk=_classify(elasticity, LIMIARES_RISCO_PADRAO),
            risk_explanation=explanation.format(elasticity * 10),
        )

    def _analyze_shipping(self) -> VariableImpact:
        return self._analyze_operational(
            SensitivityVariable.SHIPPING,
            self.scenario.shipping,
            lambda value: self._operational_costs(shipping=value),
            "Cada 10% de aumento no frete altera o lucro em ~{:.1f}%",
        )

    def _analyze_marketing(self) -> VariableImpact:
        return self._analyze_operational(
            SensitivityVariable.MARKETING,
            self.scenario.marketing,
            lambda value: self._operational_costs(marketing=value),
            "Cada 10% de aumento em marketing altera o lucro em ~{:.1f}%",
        )

    def _break_even_points(self, variables: list[VariableImpact]) -> list[BreakEvenPoint]:
        """Smallest positive perturbation with profit <= 0, per non-volume variable."""
        points = []
        for impact in variables:
            if impact.variable == SensitivityVariable.VOLUME:
                continue

            max_increase = BREAK_EVEN_SENTINELA_AUMENTO
            critical_value = impact.base_value
            for scenario in impact.scenarios:
                if (
                    scenario.resulting_profit <= 0
                    and 0 < scenario.percent_change < max_increase
                ):
                    max_increase = scenario.percent_change
                    critical_value = scenario.perturbed_value

            points.append(
                BreakEvenPoint(
                    variable=impact.variable,
                    max_increase_percent_before_loss=max_increase,
                    max_decrease_percent=BREAK_EVEN_SENTINELA_REDUCAO,
                    critical_value=critical_value,
                )
            )
        return points

    def _recommendations(
        self,
        variables: list[VariableImpact],
        most_sensitive: VariableImpact,
        least_sensitive: VariableImpact,
    ) -> list[str]:
        by_variable = {v.variable: v for v in variables}
        recommendations = []

        if most_sensitive.risk == RiskLevel.HIGH:
            recommendations.append(
                f"Seu lucro é altamente sensível a mudanças em {most_sensitive.label}. "
                f"Priorize negociações e alternativas."
            )

        cost = by_variable.get(SensitivityVariable.COST)
        if cost is not None and cost.elasticity > ELASTICIDADE_CUSTO_ALERTA:
            recommendations.append(
                "Considere buscar fornecedores alternativos ou aumentar volume "
                "para reduzir custo unitário."
            )

        shipping = by_variable.get(SensitivityVariable.SHIPPING)
        if shipping is not None and shipping.elasticity > ELASTICIDADE_FRETE_ALERTA:
            recommendations.append(
                "Frete tem impacto significativo. Avalie frete grátis acima de certo "
                "valor ou parcerias logísticas."
            )

        if least_sensitive.variable == SensitivityVariable.MARKETING:
            recommendations.append(
                "Marketing tem baixo impacto no custo. Considere aumentar investimento "
                "para ganhar volume."
            )

        recommendations.append(
            f"Foco principal: monitorar {most_sensitive.label} de perto, "
            f"pois tem maior impacto no lucro."
        )
        return recommendations


def analyze_sensitivity(
    scenario: ScenarioInput,
    current_profit: Optional[float] = None,
    current_price: Optional[float] = None,
    baseline_margin_target: Optional[float] = None,
) -> SensitivityResult:
    """Convenience function to run sensitivity analysis.

    Args:
        scenario: Priced scenario to perturb
        current_profit: Baseline unit profit (defaults to the scenario's own)
        current_price: Baseline price (defaults to the scenario's own)
        baseline_margin_target: Margin used for repricing (defaults to target_margin)

    Returns:
        Per-variable impacts, break-even points and recommendations
    """
    if current_profit is None or current_price is None:
        price, profit = baseline(scenario)
        current_price = price if current_price is None else current_price
        current_profit = profit if current_profit is None else current_profit

    analyzer = SensitivityAnalyzer(scenario, current_profit, current_price, baseline_margin_target)
    return analyzer.analyze()
