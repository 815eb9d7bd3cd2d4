"""Marketplace fee profiles (Brazil, 2025 reference values).

Commissions use the "Outros" category of each marketplace. Fallback for
unknown ids is the first profile.
"""

from typing import Optional

from precifica.core.models.pricing import MarketplaceFeeProfile

MERCADO_LIVRE_CLASSICO = MarketplaceFeeProfile(
    id="mercadolivre_classico",
    name="Mercado Livre Clássico",
    commission_percent=13.0,
)

MERCADO_LIVRE_PREMIUM = MarketplaceFeeProfile(
    id="mercadolivre_premium",
    name="Mercado Livre Premium",
    commission_percent=17.0,
)

SHOPEE = MarketplaceFeeProfile(
    id="shopee",
    name="Shopee",
    commission_percent=14.0,
    payment_fee_percent=2.0,  # transaction fee for CNPJ sellers
)

AMAZON = MarketplaceFeeProfile(
    id="amazon",
    name="Amazon",
    commission_percent=12.0,
)

MARKETPLACE_PROFILES: tuple[MarketplaceFeeProfile, ...] = (
    MERCADO_LIVRE_CLASSICO,
    MERCADO_LIVRE_PREMIUM,
    SHOPEE,
    AMAZON,
)

DEFAULT_MARKETPLACE = MARKETPLACE_PROFILES[0]


def find_marketplace_profile(marketplace_id: str) -> Optional[MarketplaceFeeProfile]:
    """Return the fee profile with the given id, or None."""
    return next((p for p in MARKETPLACE_PROFILES if p.id == marketplace_id), None)


def get_marketplace_profile(marketplace_id: str) -> MarketplaceFeeProfile:
    """Return the fee profile with the given id, falling back to the default."""
    return find_marketplace_profile(marketplace_id) or DEFAULT_MARKETPLACE
