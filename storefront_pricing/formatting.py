"""
Locale-aware number, percentage and price formatting for English and Arabic.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from storefront_pricing import config
from storefront_pricing.discounts import round_currency
from storefront_pricing.localization import normalize_language
from storefront_pricing.models import DiscountResult, DiscountType, Language

ARABIC_DIGITS = str.maketrans("0123456789", "٠١٢٣٤٥٦٧٨٩")
ARABIC_GROUP_SEPARATOR = "٬"
ARABIC_DECIMAL_SEPARATOR = "٫"
ARABIC_PERCENT_SIGN = "٪"


def format_number(
    number: float,
    locale: Any = Language.EN,
    decimal_places: Optional[int] = None,
) -> str:
    """
    Format a number with grouping for the given locale.

    Args:
        number: The number to format
        locale: "en" or "ar"; Arabic output uses Arabic-Indic digits
        decimal_places: Fixed number of decimals, or None to keep up to three

    Returns:
        Formatted number string
    """
    if not math.isfinite(number):
        return str(number)

    if decimal_places is None:
        formatted = f"{Decimal(str(number)).quantize(Decimal('0.001'), rounding=ROUND_HALF_UP):,f}"
        if "." in formatted:
            formatted = formatted.rstrip("0").rstrip(".")
    else:
        quantum = Decimal(1).scaleb(-decimal_places)
        formatted = f"{Decimal(str(number)).quantize(quantum, rounding=ROUND_HALF_UP):,f}"

    if normalize_language(locale) is Language.AR:
        formatted = (
            formatted.replace(",", ARABIC_GROUP_SEPARATOR)
            .replace(".", ARABIC_DECIMAL_SEPARATOR)
            .translate(ARABIC_DIGITS)
        )
    return formatted


def format_percentage(
    percentage: float,
    locale: Any = Language.EN,
    decimal_places: int = 0,
) -> str:
    """Format a percentage value (25 for 25%) with the locale's percent sign."""
    sign = ARABIC_PERCENT_SIGN if normalize_language(locale) is Language.AR else "%"
    return f"{format_number(percentage, locale, decimal_places)}{sign}"


def format_discount_percent(percent: float, locale: Any = Language.EN) -> str:
    return format_percentage(percent, locale, decimal_places=0)


def format_price(price: float, currency: str = config.DEFAULT_CURRENCY) -> str:
    return f"{round_currency(price):.2f} {currency}"


def get_discount_badge(discount: DiscountResult) -> Optional[str]:
    """English badge text for a discount, or None when there is none."""
    if not discount.has_discount:
        return None

    if discount.discount_type is DiscountType.SALE_PRICE:
        return f"Save {format_price(discount.savings_amount)}"
    if discount.discount_type is DiscountType.PERCENTAGE:
        return f"{format_discount_percent(discount.savings_percent)} OFF"
    return None
