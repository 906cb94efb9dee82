"""
Storefront Pricing - pricing and localization core for a bilingual storefront.

This package resolves English/Arabic content with fallbacks, calculates
product discounts within sale windows, and prices product variant
selections. Callers pass already-fetched data; nothing here performs I/O.
"""

from storefront_pricing.discounts import (
    calculate_bulk_savings,
    calculate_product_price,
    round_currency,
)
from storefront_pricing.exceptions import (
    ConfigurationError,
    DataQualityError,
    PriceCalculationError,
    PricingError,
    ValidationError,
)
from storefront_pricing.localization import ensure_localized_content, get_localized_string
from storefront_pricing.models import (
    DiscountableProduct,
    DiscountResult,
    LocalizedContent,
    ProductAttribute,
    ProductVariant,
)
from storefront_pricing.pricer import PricingResult, ProductPricer
from storefront_pricing.variants import VariantResolution, VariantResolver, resolve_variant_price

__all__ = [
    "ensure_localized_content",
    "get_localized_string",
    "calculate_product_price",
    "calculate_bulk_savings",
    "round_currency",
    "resolve_variant_price",
    "VariantResolver",
    "VariantResolution",
    "ProductPricer",
    "PricingResult",
    "LocalizedContent",
    "DiscountableProduct",
    "DiscountResult",
    "ProductAttribute",
    "ProductVariant",
    "PricingError",
    "ValidationError",
    "PriceCalculationError",
    "DataQualityError",
    "ConfigurationError",
]

__version__ = "1.0.0"
