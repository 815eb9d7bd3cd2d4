"""Tax regime tables for Brazilian small and mid-sized businesses (2025).

Simples Nacional anexos I-V, MEI, Lucro Presumido and Lucro Real.
Sources:
- Lei Complementar 123/2006, anexos I a V (redação LC 155/2016)
- https://www8.receita.fazenda.gov.br/simplesnacional/
"""

from typing import Optional

from pydantic import BaseModel

from precifica.core.models.enums import ActivityMix, BusinessType, TaxFlag
from precifica.core.models.regime import (
    BusinessTypeProfile,
    MEIRegime,
    PresumedProfitRegime,
    RealProfitRegime,
    RegimeDefinition,
    SimplesAnexo,
    StatutoryRates,
    TaxBracket,
)


def _faixas(*rows: tuple[float, float, float, float]) -> tuple[TaxBracket, ...]:
    """Build brackets from (revenue_from, revenue_to, nominal_rate, deduction) rows."""
    return tuple(
        TaxBracket(
            index=i,
            revenue_from=revenue_from,
            revenue_to=revenue_to,
            nominal_rate=rate,
            deduction=deduction,
        )
        for i, (revenue_from, revenue_to, rate, deduction) in enumerate(rows, start=1)
    )


# === Simples Nacional ===

# Upper revenue bound shared by every anexo
LIMITE_SIMPLES_NACIONAL = 4_800_000.0

ANEXO_I = SimplesAnexo(
    id="anexo_1",
    name="Anexo I - Comércio",
    description="Atividades de comércio em geral",
    activities=("Comércio varejista", "Comércio atacadista", "Revenda de mercadorias"),
    brackets=_faixas(
        (0, 180_000, 4.0, 0),
        (180_000, 360_000, 7.3, 5_940),
        (360_000, 720_000, 9.5, 13_860),
        (720_000, 1_800_000, 10.7, 22_500),
        (1_800_000, 3_600_000, 14.3, 87_300),
        (3_600_000, 4_800_000, 19.0, 378_000),
    ),
    tax_flags=frozenset(
        {TaxFlag.IRPJ, TaxFlag.CSLL, TaxFlag.COFINS, TaxFlag.PIS, TaxFlag.CPP, TaxFlag.ICMS}
    ),
)

ANEXO_II = SimplesAnexo(
    id="anexo_2",
    name="Anexo II - Indústria",
    description="Atividades industriais e equiparadas",
    activities=("Fabricação de produtos", "Industrialização", "Transformação de matéria-prima"),
    brackets=_faixas(
        (0, 180_000, 4.5, 0),
        (180_000, 360_000, 7.8, 5_940),
        (360_000, 720_000, 10.0, 13_860),
        (720_000, 1_800_000, 11.2, 22_500),
        (1_800_000, 3_600_000, 14.7, 85_500),
        (3_600_000, 4_800_000, 30.0, 720_000),
    ),
    tax_flags=frozenset(
        {
            TaxFlag.IRPJ,
            TaxFlag.CSLL,
            TaxFlag.COFINS,
            TaxFlag.PIS,
            TaxFlag.CPP,
            TaxFlag.ICMS,
            TaxFlag.IPI,
        }
    ),
)

ANEXO_III = SimplesAnexo(
    id="anexo_3",
    name="Anexo III - Serviços",
    description="Prestação de serviços com ISS",
    activities=(
        "Serviços de instalação",
        "Serviços de reparos",
        "Agências de viagens",
        "Escritórios de contabilidade",
    ),
    brackets=_faixas(
        (0, 180_000, 6.0, 0),
        (180_000, 360_000, 11.2, 9_360),
        (360_000, 720_000, 13.5, 17_640),
        (720_000, 1_800_000, 16.0, 35_640),
        (1_800_000, 3_600_000, 21.0, 125_640),
        (3_600_000, 4_800_000, 33.0, 648_000),
    ),
    tax_flags=frozenset(
        {TaxFlag.IRPJ, TaxFlag.CSLL, TaxFlag.COFINS, TaxFlag.PIS, TaxFlag.CPP, TaxFlag.ISS}
    ),
)

ANEXO_IV = SimplesAnexo(
    id="anexo_4",
    name="Anexo IV - Serviços Específicos",
    description="Serviços de construção civil, vigilância, limpeza",
    activities=(
        "Construção civil",
        "Serviços de vigilância",
        "Serviços de limpeza",
        "Obras e reformas",
    ),
    brackets=_faixas(
        (0, 180_000, 4.5, 0),
        (180_000, 360_000, 9.0, 8_100),
        (360_000, 720_000, 10.2, 12_420),
        (720_000, 1_800_000, 14.0, 39_780),
        (1_800_000, 3_600_000, 22.0, 183_780),
        (3_600_000, 4_800_000, 33.0, 828_000),
    ),
    # CPP is paid apart from the DAS in Anexo IV
    tax_flags=frozenset({TaxFlag.IRPJ, TaxFlag.CSLL, TaxFlag.COFINS, TaxFlag.PIS, TaxFlag.ISS}),
)

ANEXO_V = SimplesAnexo(
    id="anexo_5",
    name="Anexo V - Serviços Intelectuais",
    description="Serviços de advocacia, engenharia, consultoria, medicina",
    activities=(
        "Advocacia",
        "Engenharia",
        "Medicina",
        "Odontologia",
        "Consultoria",
        "Publicidade",
        "Jornalismo",
        "Tecnologia",
    ),
    brackets=_faixas(
        (0, 180_000, 15.5, 0),
        (180_000, 360_000, 18.0, 4_500),
        (360_000, 720_000, 19.5, 9_900),
        (720_000, 1_800_000, 20.5, 17_100),
        (1_800_000, 3_600_000, 23.0, 62_100),
        (3_600_000, 4_800_000, 30.5, 540_000),
    ),
    tax_flags=frozenset(
        {TaxFlag.IRPJ, TaxFlag.CSLL, TaxFlag.COFINS, TaxFlag.PIS, TaxFlag.CPP, TaxFlag.ISS}
    ),
)

SIMPLES_NACIONAL_ANEXOS: tuple[SimplesAnexo, ...] = (
    ANEXO_I,
    ANEXO_II,
    ANEXO_III,
    ANEXO_IV,
    ANEXO_V,
)

# === MEI ===

MEI = MEIRegime(
    id="mei",
    name="MEI - Microempreendedor Individual",
    description="Para faturamento até R$ 81.000,00/ano",
    revenue_limit=81_000.0,
    monthly_fees={
        ActivityMix.COMERCIO: 71.60,  # INSS (5%) + ICMS (R$ 1,00)
        ActivityMix.SERVICOS: 75.60,  # INSS (5%) + ISS (R$ 5,00)
        ActivityMix.COMERCIO_SERVICOS: 76.60,  # INSS + ICMS + ISS
    },
    benefits=(
        "Aposentadoria por idade",
        "Aposentadoria por invalidez",
        "Auxílio-doença",
        "Salário-maternidade",
        "Pensão por morte",
    ),
)

# Share of the MEI ceiling above which a transition notice is emitted
MEI_UTILIZACAO_ALERTA = 80.0

# === Lucro Presumido / Lucro Real ===

LUCRO_PRESUMIDO = PresumedProfitRegime(
    id="lucro_presumido",
    name="Lucro Presumido",
    description="Para faturamento até R$ 78 milhões/ano",
    revenue_limit=78_000_000.0,
    presumed_margins={
        BusinessType.COMERCIO: 8.0,
        BusinessType.INDUSTRIA: 8.0,
        BusinessType.SERVICOS: 32.0,
        BusinessType.SERVICOS_INTELECTUAIS: 32.0,
    },
    rates=StatutoryRates(irpj=15.0, irpj_additional=10.0, csll=9.0, pis=0.65, cofins=3.0),
    surtax_monthly_threshold=20_000.0,
)

LUCRO_REAL = RealProfitRegime(
    id="lucro_real",
    name="Lucro Real",
    description="Tributação sobre lucro contábil efetivo",
    mandatory_for=(
        "Receita bruta > R$ 78 milhões/ano",
        "Instituições financeiras",
        "Factoring",
        "Empresas com lucros no exterior",
    ),
    rates=StatutoryRates(irpj=15.0, irpj_additional=10.0, csll=9.0, pis=1.65, cofins=7.6),
)

# === Business types ===

BUSINESS_TYPES: tuple[BusinessTypeProfile, ...] = (
    BusinessTypeProfile(
        id=BusinessType.COMERCIO,
        name="Comércio",
        description="Compra e venda de mercadorias",
        recommended_regimes=("mei", "anexo_1", "lucro_presumido"),
    ),
    BusinessTypeProfile(
        id=BusinessType.INDUSTRIA,
        name="Indústria",
        description="Fabricação e transformação de produtos",
        recommended_regimes=("anexo_2", "lucro_presumido", "lucro_real"),
    ),
    BusinessTypeProfile(
        id=BusinessType.SERVICOS,
        name="Serviços",
        description="Prestação de serviços em geral",
        recommended_regimes=("mei", "anexo_3", "anexo_4", "lucro_presumido"),
    ),
    BusinessTypeProfile(
        id=BusinessType.SERVICOS_INTELECTUAIS,
        name="Serviços Intelectuais",
        description="Consultoria, tecnologia, advocacia, medicina",
        recommended_regimes=("anexo_5", "lucro_presumido"),
    ),
)

# MEI fee by business type (industry sells goods)
MEI_ATIVIDADE_POR_TIPO: dict[BusinessType, ActivityMix] = {
    BusinessType.COMERCIO: ActivityMix.COMERCIO,
    BusinessType.INDUSTRIA: ActivityMix.COMERCIO,
    BusinessType.SERVICOS: ActivityMix.SERVICOS,
    BusinessType.SERVICOS_INTELECTUAIS: ActivityMix.SERVICOS,
}


class RegimeCatalog(BaseModel):
    """Immutable set of regime tables handed to the resolvers."""

    anexos: tuple[SimplesAnexo, ...]
    mei: MEIRegime
    lucro_presumido: PresumedProfitRegime
    lucro_real: RealProfitRegime
    business_types: tuple[BusinessTypeProfile, ...]

    @property
    def simples_ceiling(self) -> float:
        """Highest eligibility ceiling among the anexos."""
        return max(a.revenue_ceiling for a in self.anexos)

    def list_regimes(self) -> list[RegimeDefinition]:
        """Return every regime definition, anexos first."""
        return [*self.anexos, self.mei, self.lucro_presumido, self.lucro_real]

    def get_regime_by_id(self, regime_id: str) -> Optional[RegimeDefinition]:
        """Return the regime with the given id, or None."""
        return next((r for r in self.list_regimes() if r.id == regime_id), None)

    def get_anexo_by_id(self, anexo_id: str) -> Optional[SimplesAnexo]:
        """Return the Simples Nacional anexo with the given id, or None."""
        return next((a for a in self.anexos if a.id == anexo_id), None)

    def get_business_type_by_id(self, business_type: str) -> Optional[BusinessTypeProfile]:
        """Return the business type profile, or None."""
        return next((b for b in self.business_types if b.id.value == business_type), None)

    def list_business_type_recommendations(self, business_type: str) -> list[str]:
        """Return the regime ids recommended for a business type (empty if unknown)."""
        profile = self.get_business_type_by_id(business_type)
        return list(profile.recommended_regimes) if profile else []

    model_config = {"frozen": True}


DEFAULT_CATALOG = RegimeCatalog(
    anexos=SIMPLES_NACIONAL_ANEXOS,
    mei=MEI,
    lucro_presumido=LUCRO_PRESUMIDO,
    lucro_real=LUCRO_REAL,
    business_types=BUSINESS_TYPES,
)


def get_regime_by_id(regime_id: str) -> Optional[RegimeDefinition]:
    """Look up a regime in the default catalog."""
    return DEFAULT_CATALOG.get_regime_by_id(regime_id)


def list_regimes() -> list[RegimeDefinition]:
    """List every regime in the default catalog."""
    return DEFAULT_CATALOG.list_regimes()


def list_business_type_recommendations(business_type: str) -> list[str]:
    """List regime ids recommended for a business type in the default catalog."""
    return DEFAULT_CATALOG.list_business_type_recommendations(business_type)


def get_anexo_by_id(anexo_id: str) -> Optional[SimplesAnexo]:
    """Look up a Simples Nacional anexo in the default catalog."""
    return DEFAULT_CATALOG.get_anexo_by_id(anexo_id)
