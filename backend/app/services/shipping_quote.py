"""
Shipping Quote Service

Resolves the shipping options shown at checkout for a cart subtotal.

Free-shipping promotion (all amounts in minor units):
- subtotal >= FREE_SHIPPING_THRESHOLD: "Free Shipping" is offered at 0 and
  "Standard Shipping" is withdrawn.
- below the threshold: "Free Shipping" is withdrawn and "Standard Shipping"
  is offered at its stored amount.
- every other option is always offered at its stored amount.

Quote retrieval never fails the checkout: if the catalog cannot be read the
shopper simply sees no shipping methods.
"""
import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import CatalogUnavailableError
from app.core.utils import parse_int_prefix
from app.models.shipping_option import ShippingOption, ShippingTier, classify_tier
from app.schemas.shipping import CalculatedPrice, FreeShippingProgress, QuotedOption

logger = logging.getLogger(__name__)

# €150.00
FREE_SHIPPING_THRESHOLD = 15000


def normalize_subtotal(raw: Any) -> int:
    """Coerce a client-supplied subtotal to a non-negative integer (0 on garbage)."""
    value = parse_int_prefix(raw)
    if value is None or value < 0:
        return 0
    return value


def quote_amount(tier: ShippingTier, amount: int, subtotal: int) -> int:
    """Amount charged for one option at this subtotal."""
    if tier in (ShippingTier.FREE, ShippingTier.STANDARD) and subtotal >= FREE_SHIPPING_THRESHOLD:
        return 0
    return amount


def is_offered(tier: ShippingTier, subtotal: int) -> bool:
    """Whether an option is shown at all at this subtotal."""
    qualifies = subtotal >= FREE_SHIPPING_THRESHOLD
    if tier is ShippingTier.FREE:
        return qualifies
    if tier is ShippingTier.STANDARD:
        return not qualifies
    return True


def free_shipping_progress(subtotal: int) -> FreeShippingProgress:
    """How far a normalized subtotal is from free shipping."""
    remaining = max(0, FREE_SHIPPING_THRESHOLD - subtotal)
    return FreeShippingProgress(
        threshold=FREE_SHIPPING_THRESHOLD,
        subtotal=subtotal,
        qualifies=subtotal >= FREE_SHIPPING_THRESHOLD,
        remaining=remaining,
        progress=min(1.0, subtotal / FREE_SHIPPING_THRESHOLD),
    )


def resolve_shipping_options(options: Sequence[ShippingOption], subtotal: int) -> List[QuotedOption]:
    """
    Apply the free-shipping promotion to a catalog.

    Args:
        options: Catalog rows, already sorted by amount ascending
        subtotal: Normalized cart subtotal in minor units

    Returns:
        Quoted options in catalog order. Filtering never reorders.
    """
    quoted = []
    for option in options:
        tier = classify_tier(option.name)
        if not is_offered(tier, subtotal):
            continue

        amount = quote_amount(tier, option.amount, subtotal)
        quoted.append(
            QuotedOption(
                id=option.id,
                name=option.name,
                amount=amount,
                is_tax_inclusive=True,
                estimated_days=option.estimated_days,
                calculated_price=CalculatedPrice(calculated_amount=amount),
            )
        )
    return quoted


class ShippingQuoteService:
    """Reads the shipping catalog and prices it for a subtotal."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_catalog(self) -> List[ShippingOption]:
        """
        Load every shipping option, cheapest first.

        Raises:
            CatalogUnavailableError: the query failed for any reason
        """
        try:
            result = await self.db.execute(
                select(ShippingOption).order_by(ShippingOption.amount.asc(), ShippingOption.id.asc())
            )
            return list(result.scalars().all())
        except Exception as e:
            raise CatalogUnavailableError(
                "Shipping options could not be loaded",
                details={"cause": f"{type(e).__name__}: {e}"},
            ) from e

    async def quote(self, subtotal: Optional[Any] = None) -> List[QuotedOption]:
        """
        Quote shipping for a raw subtotal.

        Returns an empty list when the catalog is unavailable or cannot be
        priced.
        """
        try:
            normalized = normalize_subtotal(subtotal)
            catalog = await self.load_catalog()
            options = resolve_shipping_options(catalog, normalized)
        except CatalogUnavailableError as e:
            logger.error(f"Shipping options error: {e.to_dict()}")
            await self._reset_session()
            return []
        except Exception as e:
            logger.error(f"Shipping quote failed: {type(e).__name__}: {e}")
            return []

        logger.debug(
            f"Quoted {len(options)}/{len(catalog)} shipping options for subtotal {normalized}"
        )
        return options

    async def _reset_session(self) -> None:
        """Roll back the failed read so the request session can still commit."""
        try:
            await self.db.rollback()
        except Exception as e:
            logger.warning(f"Rollback after catalog failure also failed: {type(e).__name__}: {e}")
