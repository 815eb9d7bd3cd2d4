"""Compiled-in tables and formulas for tax and pricing calculations."""

from precifica.core.rules.marketplaces import (
    DEFAULT_MARKETPLACE,
    MARKETPLACE_PROFILES,
    find_marketplace_profile,
    get_marketplace_profile,
)
from precifica.core.rules.pricing import (
    SENSITIVITY_GRID,
    calculate_fees,
    calculate_price,
    calculate_unit_profit,
    percent_change,
    price_is_defined,
)
from precifica.core.rules.tax_regimes import (
    DEFAULT_CATALOG,
    LIMITE_SIMPLES_NACIONAL,
    LUCRO_PRESUMIDO,
    LUCRO_REAL,
    MEI,
    SIMPLES_NACIONAL_ANEXOS,
    RegimeCatalog,
    get_anexo_by_id,
    get_regime_by_id,
    list_business_type_recommendations,
    list_regimes,
)

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_MARKETPLACE",
    "LIMITE_SIMPLES_NACIONAL",
    "LUCRO_PRESUMIDO",
    "LUCRO_REAL",
    "MARKETPLACE_PROFILES",
    "MEI",
    "SENSITIVITY_GRID",
    "SIMPLES_NACIONAL_ANEXOS",
    "RegimeCatalog",
    "calculate_fees",
    "calculate_price",
    "calculate_unit_profit",
    "find_marketplace_profile",
    "get_anexo_by_id",
    "get_marketplace_profile",
    "get_regime_by_id",
    "list_business_type_recommendations",
    "list_regimes",
    "percent_change",
    "price_is_defined",
]
