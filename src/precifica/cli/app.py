"""Main Typer application for Precifica."""

import json
from typing import Annotated, Optional, TypeVar

import typer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rich.panel import Panel
from rich.table import Table

from precifica import __version__
from precifica.cli.console import (
    configure_logging,
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from precifica.core.analyzers import (
    analyze_sensitivity,
    baseline,
    best_regime,
    calculate_specific_regime,
    compare_all_regimes,
    compare_marketplaces,
    generate_price_suggestions,
    potential_savings,
)
from precifica.core.models import (
    ActivityMix,
    BrandStrength,
    BusinessType,
    MarketplaceComparisonInput,
    PriceSuggestionInput,
    RiskLevel,
    ScenarioInput,
    Seasonality,
    Severity,
    TaxCalculationInput,
    TaxCalculationResult,
)
from precifica.core.rules import MARKETPLACE_PROFILES, find_marketplace_profile
from precifica.shared.exceptions import (
    CalculationError,
    PrecificaError,
    UnknownMarketplaceError,
    UnknownRegimeError,
    ValidationError,
)
from precifica.shared.formatters import (
    format_currency,
    format_optional_currency,
    format_percentage,
    format_variation,
)

app = typer.Typer(
    name="precifica",
    help="Comparador de regimes tributários e assistente de precificação",
    add_completion=True,
    no_args_is_help=True,
)

M = TypeVar("M", bound=BaseModel)

RISK_STYLE = {
    RiskLevel.LOW: "risk_low",
    RiskLevel.MEDIUM: "risk_medium",
    RiskLevel.HIGH: "risk_high",
}

# Shared option declarations
Custo = Annotated[float, typer.Option("--custo", "-c", help="Custo unitário do produto")]
Frete = Annotated[float, typer.Option("--frete", help="Frete por unidade")]
Embalagem = Annotated[float, typer.Option("--embalagem", help="Embalagem por unidade")]
Marketing = Annotated[float, typer.Option("--marketing", help="Marketing por unidade")]
Outros = Annotated[float, typer.Option("--outros", help="Outros custos por unidade")]
Volume = Annotated[
    Optional[float], typer.Option("--volume", help="Volume mensal de vendas (unidades)")
]
JsonOutput = Annotated[bool, typer.Option("--json", help="Saída em JSON")]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Precifica v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Mostra a versão e sai",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Mostra logs detalhados dos cálculos")
    ] = False,
) -> None:
    """Precifica - impostos, sensibilidade e sugestões de preço."""
    configure_logging(verbose)


def _build(model_cls: type[M], **values) -> M:
    """Build an input model, converting pydantic errors to ValidationError."""
    try:
        return model_cls(**values)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(f"Entrada inválida - {details}") from e


def _echo_json(payload: BaseModel | list[BaseModel]) -> None:
    """Print models as JSON (format consumed by history persistence)."""
    if isinstance(payload, list):
        data = [item.model_dump(mode="json") for item in payload]
    else:
        data = payload.model_dump(mode="json")
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


@app.command()
def impostos(
    faturamento_anual: Annotated[
        float, typer.Option("--faturamento-anual", "-a", help="Receita bruta dos últimos 12 meses")
    ],
    faturamento_mensal: Annotated[
        Optional[float],
        typer.Option("--faturamento-mensal", "-m", help="Receita do mês (padrão: anual / 12)"),
    ] = None,
    tipo: Annotated[
        BusinessType, typer.Option("--tipo", "-t", help="Tipo de atividade")
    ] = BusinessType.SERVICOS,
    atividade_mei: Annotated[
        Optional[ActivityMix],
        typer.Option("--atividade-mei", help="Atividade do MEI (sobrepõe o tipo)"),
    ] = None,
    regime: Annotated[
        Optional[str],
        typer.Option("--regime", "-r", help="mei, simples, lucro_presumido ou id de anexo"),
    ] = None,
    anexo: Annotated[
        Optional[str], typer.Option("--anexo", help="Anexo quando --regime simples")
    ] = None,
    recomendados: Annotated[
        bool, typer.Option("--recomendados", help="Apenas regimes recomendados para o tipo")
    ] = False,
    json_output: JsonOutput = False,
) -> None:
    """Compara regimes tributários para um faturamento."""
    try:
        calc_input = _build(
            TaxCalculationInput,
            annual_revenue=faturamento_anual,
            monthly_revenue=(
                faturamento_anual / 12 if faturamento_mensal is None else faturamento_mensal
            ),
            business_type=tipo,
            regime_id=regime,
            bracket_table_id=anexo,
            activity_mix=atividade_mei,
        )

        if regime is not None:
            result = calculate_specific_regime(calc_input)
            if result is None:
                raise UnknownRegimeError(f"Regime sem cálculo disponível: {regime}")
            results = [result]
        else:
            results = compare_all_regimes(calc_input, recommended_only=recomendados)

        if json_output:
            _echo_json(results)
            return

        _display_regimes(calc_input, results)

    except PrecificaError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _display_regimes(
    calc_input: TaxCalculationInput, results: list[TaxCalculationResult]
) -> None:
    console.print()
    console.print(
        Panel.fit(
            f"[header]Faturamento anual:[/header] {format_currency(calc_input.annual_revenue)}\n"
            f"[header]Faturamento mensal:[/header] {format_currency(calc_input.monthly_revenue)}\n"
            f"[header]Tipo:[/header] {calc_input.business_type.value}",
            title="Comparativo de Regimes",
            border_style="blue",
        )
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=3)
    table.add_column("Regime")
    table.add_column("Faixa", justify="center")
    table.add_column("Alíquota efetiva", justify="right")
    table.add_column("Imposto mensal", justify="right", style="currency")
    table.add_column("Imposto anual", justify="right", style="currency")

    for position, result in enumerate(results, start=1):
        table.add_row(
            str(position),
            result.regime_name,
            str(result.bracket_index) if result.bracket_index else "-",
            format_percentage(result.effective_rate),
            format_currency(result.monthly_tax),
            format_currency(result.annual_tax),
        )
    console.print(table)

    for result in results:
        for alert in result.alerts:
            message = f"{result.regime_name}: {alert.message}"
            if alert.severity == Severity.WARNING:
                print_warning(message)
            else:
                print_info(message)

    best = best_regime(results)
    if best is not None and len(results) > 1:
        console.print()
        print_success(
            f"Menor carga: {best.regime_name} "
            f"({format_currency(best.monthly_tax)}/mês). "
            f"Economia potencial: {format_currency(potential_savings(results))}/ano."
        )


@app.command()
def sensibilidade(
    custo: Custo,
    margem: Annotated[float, typer.Option("--margem", help="Margem alvo (%)")],
    frete: Frete = 0.0,
    embalagem: Embalagem = 0.0,
    marketing: Marketing = 0.0,
    outros: Outros = 0.0,
    taxa_marketplace: Annotated[
        float, typer.Option("--taxa-marketplace", help="Comissão do marketplace (%)")
    ] = 0.0,
    taxa_pagamento: Annotated[
        float, typer.Option("--taxa-pagamento", help="Taxa de pagamento (%)")
    ] = 0.0,
    volume: Volume = None,
    json_output: JsonOutput = False,
) -> None:
    """Analisa como cada variável afeta o lucro ("e se o custo subir 10%?")."""
    try:
        scenario = _build(
            ScenarioInput,
            cost=custo,
            target_margin=margem,
            shipping=frete,
            packaging=embalagem,
            marketing=marketing,
            other_costs=outros,
            marketplace_fee_percent=taxa_marketplace,
            payment_fee_percent=taxa_pagamento,
            monthly_volume=volume,
        )

        price, profit = baseline(scenario)
        if price <= 0:
            raise CalculationError("Margem + taxas somam 100% ou mais; preço indefinido")

        result = analyze_sensitivity(scenario, profit, price)

        if json_output:
            _echo_json(result)
            return

        console.print()
        console.print(
            Panel.fit(
                f"[header]Preço atual:[/header] {format_currency(price)}\n"
                f"[header]Lucro unitário:[/header] {format_currency(profit)}",
                title="Análise de Sensibilidade",
                border_style="blue",
            )
        )

        table = Table(show_header=True, header_style="bold")
        table.add_column("Variável")
        table.add_column("Base", justify="right")
        table.add_column("-50%", justify="right")
        table.add_column("+50%", justify="right")
        table.add_column("Elasticidade", justify="right")
        table.add_column("Risco", justify="center")

        for impact in result.variables:
            low = impact.point_at(-50)
            high = impact.point_at(50)
            style = RISK_STYLE[impact.risk]
            table.add_row(
                impact.label,
                f"{impact.base_value:,.2f}",
                format_variation(low.profit_change_percent) if low else "-",
                format_variation(high.profit_change_percent) if high else "-",
                f"{impact.elasticity:.2f}",
                f"[{style}]{impact.risk.value}[/{style}]",
            )
        console.print(table)

        for point in result.break_even_points:
            if point.has_break_even:
                print_warning(
                    f"{point.variable.value}: prejuízo a partir de "
                    f"+{point.max_increase_percent_before_loss}% "
                    f"(valor crítico {point.critical_value:,.2f})"
                )

        console.print()
        console.print("[header]Recomendações:[/header]")
        for recommendation in result.recommendations:
            console.print(f"  • {recommendation}")

    except PrecificaError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def sugestoes(
    custo: Custo,
    frete: Frete = 0.0,
    embalagem: Embalagem = 0.0,
    marketing: Marketing = 0.0,
    outros: Outros = 0.0,
    marketplace: Annotated[
        str, typer.Option("--marketplace", help="Perfil de taxas do marketplace")
    ] = MARKETPLACE_PROFILES[0].id,
    incluir_taxa_pagamento: Annotated[
        bool, typer.Option("--incluir-taxa-pagamento", help="Inclui taxa de pagamento")
    ] = False,
    volume: Volume = None,
    marca: Annotated[
        Optional[BrandStrength], typer.Option("--marca", help="Força da marca")
    ] = None,
    sazonalidade: Annotated[
        Optional[Seasonality], typer.Option("--sazonalidade", help="Sazonalidade da demanda")
    ] = None,
    json_output: JsonOutput = False,
) -> None:
    """Gera quatro sugestões de preço (recomendado, conservador, competitivo, premium)."""
    try:
        suggestion_input = _build(
            PriceSuggestionInput,
            cost=custo,
            shipping=frete,
            packaging=embalagem,
            marketing=marketing,
            other_costs=outros,
            marketplace=marketplace,
            include_payment_fee=incluir_taxa_pagamento,
            monthly_volume=volume,
            brand_strength=marca,
            seasonality=sazonalidade,
        )

        if find_marketplace_profile(marketplace) is None and not json_output:
            print_warning(
                f"Marketplace '{marketplace}' desconhecido; usando {MARKETPLACE_PROFILES[0].name}"
            )

        suggestions = generate_price_suggestions(suggestion_input)

        if json_output:
            _echo_json(suggestions)
            return

        table = Table(show_header=True, header_style="bold", title="Sugestões de Preço")
        table.add_column("Estratégia")
        table.add_column("Margem", justify="right")
        table.add_column("Preço", justify="right", style="currency")
        table.add_column("Confiança", justify="right")
        table.add_column("Lucro mensal", justify="right")
        table.add_column("ROI", justify="right")
        table.add_column("Retorno (dias)", justify="right")

        for suggestion in suggestions:
            outcome = suggestion.expected_outcome
            table.add_row(
                suggestion.label,
                format_percentage(suggestion.margin_percent, decimals=0),
                format_currency(suggestion.suggested_price),
                str(suggestion.confidence),
                format_optional_currency(outcome.monthly_profit),
                format_percentage(outcome.roi, decimals=1) if outcome.roi is not None else "-",
                str(outcome.break_even_days) if outcome.break_even_days else "-",
            )
        console.print()
        console.print(table)

    except PrecificaError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def marketplaces(
    custo: Custo,
    margem: Annotated[float, typer.Option("--margem", help="Margem alvo (%)")],
    frete: Frete = 0.0,
    embalagem: Embalagem = 0.0,
    marketing: Marketing = 0.0,
    outros: Outros = 0.0,
    incluir_taxa_pagamento: Annotated[
        bool, typer.Option("--incluir-taxa-pagamento", help="Inclui taxa de pagamento")
    ] = False,
    somente: Annotated[
        Optional[str],
        typer.Option("--somente", help="Ids de marketplaces separados por vírgula"),
    ] = None,
    json_output: JsonOutput = False,
) -> None:
    """Compara preço e lucro do produto em cada marketplace."""
    try:
        comparison_input = _build(
            MarketplaceComparisonInput,
            cost=custo,
            target_margin=margem,
            shipping=frete,
            packaging=embalagem,
            marketing=marketing,
            other_costs=outros,
            include_payment_fee=incluir_taxa_pagamento,
        )

        profiles = None
        if somente:
            profiles = []
            for marketplace_id in (m.strip() for m in somente.split(",") if m.strip()):
                profile = find_marketplace_profile(marketplace_id)
                if profile is None:
                    raise UnknownMarketplaceError(f"Marketplace desconhecido: {marketplace_id}")
                profiles.append(profile)
            if not profiles:
                raise ValidationError("Nenhum marketplace informado em --somente")
            profiles = tuple(profiles)

        result = compare_marketplaces(comparison_input, profiles)

        if json_output:
            _echo_json(result)
            return

        table = Table(show_header=True, header_style="bold", title="Comparativo de Marketplaces")
        table.add_column("#", style="dim", width=3)
        table.add_column("Marketplace")
        table.add_column("Preço", justify="right")
        table.add_column("Taxas", justify="right")
        table.add_column("Lucro líquido", justify="right", style="currency")
        table.add_column("Margem", justify="right")

        for quote in result.results:
            table.add_row(
                str(quote.ranking),
                quote.marketplace_name,
                format_currency(quote.suggested_price),
                format_currency(quote.total_fees),
                format_currency(quote.net_profit),
                format_percentage(quote.profit_margin, decimals=1),
            )
        console.print()
        console.print(table)

        if result.best_marketplace is not None:
            print_success(f"Melhor opção: {result.best_marketplace.marketplace_name}")
        for quote in result.results:
            for insight in quote.insights:
                print_info(insight)

    except PrecificaError as e:
        print_error(str(e))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
