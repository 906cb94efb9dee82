"""
Product-level discount calculation: sale prices, percentage discounts and sale windows.

All functions are pure given an explicit ``now``; callers that omit it get
the current UTC time.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from storefront_pricing.models import DiscountableProduct, DiscountResult, DiscountType

logger = logging.getLogger(__name__)

MINOR_UNIT = Decimal("0.01")


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def round_currency(value: float) -> float:
    """Round to two decimal places, half-up."""
    if not math.isfinite(value):
        return value
    return float(_to_decimal(value).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP))


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_within_sale_window(
    product: DiscountableProduct,
    now: Optional[datetime] = None,
) -> bool:
    """Both bounds are inclusive; a missing bound leaves that side open."""
    current = as_utc(now or datetime.now(timezone.utc))

    if product.sale_start_date is not None and current < as_utc(product.sale_start_date):
        return False
    if product.sale_end_date is not None and current > as_utc(product.sale_end_date):
        return False
    return True


def _no_discount(price: float, is_valid_sale_date: bool) -> DiscountResult:
    return DiscountResult(
        has_discount=False,
        original_price=price,
        discounted_price=price,
        savings_amount=0.0,
        savings_percent=0,
        discount_type=DiscountType.NONE,
        is_valid_sale_date=is_valid_sale_date,
    )


def calculate_product_price(
    product: DiscountableProduct,
    now: Optional[datetime] = None,
) -> DiscountResult:
    """
    Calculate the effective price of a product after its own discount.

    A valid sale price takes precedence over a percentage discount. Products
    that are not on sale, are outside their sale window, or carry no usable
    discount data get a no-discount result.

    Args:
        product: Pricing view of the product
        now: Moment to evaluate the sale window at; defaults to current UTC time

    Returns:
        DiscountResult with discounted_price in [0, original_price]
    """
    original_price = product.price
    is_valid_sale_date = is_within_sale_window(product, now)

    if not product.on_sale or not is_valid_sale_date:
        return _no_discount(original_price, is_valid_sale_date)

    sale_price = product.sale_price
    discount_percent = product.discount_percent

    if sale_price is not None and 0 < sale_price < original_price:
        discounted = _to_decimal(sale_price)
        discount_type = DiscountType.SALE_PRICE
    elif discount_percent is not None and 0 < discount_percent < 100:
        discounted = (
            _to_decimal(original_price) * (1 - _to_decimal(discount_percent) / 100)
        ).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)
        discount_type = DiscountType.PERCENTAGE
    else:
        logger.debug(
            f"Product {product.id} is on sale without a usable sale price or percentage",
            extra={"product_id": str(product.id)},
        )
        return _no_discount(original_price, is_valid_sale_date)

    original = _to_decimal(original_price)
    if discounted >= original or discounted < 0:
        return _no_discount(original_price, is_valid_sale_date)

    savings = max(Decimal(0), original - discounted).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)
    savings_percent = 0
    if original != 0:
        savings_percent = int((savings / original * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    return DiscountResult(
        has_discount=True,
        original_price=original_price,
        discounted_price=float(discounted),
        savings_amount=float(savings),
        savings_percent=savings_percent,
        discount_type=discount_type,
        is_valid_sale_date=is_valid_sale_date,
    )


def is_product_discount_valid(
    product: DiscountableProduct,
    now: Optional[datetime] = None,
) -> bool:
    """Check whether a product currently has an active discount."""
    info = calculate_product_price(product, now)
    return info.has_discount and info.is_valid_sale_date


def get_discounted_products(
    products: Iterable[DiscountableProduct],
    now: Optional[datetime] = None,
) -> list[DiscountableProduct]:
    """Keep only products with an active discount, preserving order."""
    return [p for p in products if is_product_discount_valid(p, now)]


def sort_by_discount_percent(
    products: Iterable[DiscountableProduct],
    now: Optional[datetime] = None,
) -> list[DiscountableProduct]:
    """Return a new list ordered by savings percent, highest first."""
    return sorted(
        products,
        key=lambda p: calculate_product_price(p, now).savings_percent,
        reverse=True,
    )


@dataclass
class BulkSavings:
    """Aggregate pricing across a list of products."""
    total_original_price: float = 0.0
    total_discounted_price: float = 0.0
    total_savings: float = 0.0
    average_discount: float = 0.0
    discounted_count: int = 0

    def to_dict(self) -> dict:
        return {
            "totalOriginalPrice": self.total_original_price,
            "totalDiscountedPrice": self.total_discounted_price,
            "totalSavings": self.total_savings,
            "averageDiscount": self.average_discount,
            "discountedCount": self.discounted_count,
        }


def calculate_bulk_savings(
    products: Iterable[DiscountableProduct],
    now: Optional[datetime] = None,
) -> BulkSavings:
    """Total original/discounted prices and savings for an admin overview."""
    total_original = Decimal(0)
    total_discounted = Decimal(0)
    total_savings = Decimal(0)
    total_percent = Decimal(0)
    discounted_count = 0

    for product in products:
        info = calculate_product_price(product, now)
        total_original += _to_decimal(info.original_price)
        total_discounted += _to_decimal(info.discounted_price)
        total_savings += _to_decimal(info.savings_amount)
        if info.has_discount:
            discounted_count += 1
            total_percent += info.savings_percent

    average = Decimal(0)
    if discounted_count:
        average = total_percent / discounted_count

    return BulkSavings(
        total_original_price=float(total_original.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)),
        total_discounted_price=float(total_discounted.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)),
        total_savings=float(total_savings.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)),
        average_discount=float(average.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)),
        discounted_count=discounted_count,
    )
