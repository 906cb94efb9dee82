"""
Variant attribute resolution: matching a shopper's attribute choices to a variant
and pricing the selection.

A matched variant's own price is authoritative. Without one, the price is the
base price plus the modifiers of the selected values. Stock never affects
matching; it is reported on the result for display.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from storefront_pricing.discounts import round_currency
from storefront_pricing.models import (
    AttributeType,
    ProductAttribute,
    ProductVariant,
    parse_attributes,
    parse_variants,
)

logger = logging.getLogger(__name__)

SIZE_CODE_PATTERN = re.compile(r"^u(\d+)$")


@dataclass
class VariantResolution:
    """
    Price for a selection plus the variant it matched, if any.

    Stock, SKU and image come from the matched variant and fall back to the
    product-level values otherwise.
    """
    price: float
    matched_variant: Optional[ProductVariant] = None
    product_in_stock: bool = True
    product_sku: Optional[str] = None
    product_image: Optional[str] = None

    @property
    def in_stock(self) -> bool:
        return self.matched_variant.in_stock if self.matched_variant else self.product_in_stock

    @property
    def sku(self) -> Optional[str]:
        if self.matched_variant and self.matched_variant.sku:
            return self.matched_variant.sku
        return self.product_sku

    @property
    def image(self) -> Optional[str]:
        if self.matched_variant and self.matched_variant.image:
            return self.matched_variant.image
        return self.product_image

    def to_dict(self) -> dict:
        return {
            "price": self.price,
            "matchedVariant": (
                self.matched_variant.model_dump(mode="json", by_alias=True)
                if self.matched_variant
                else None
            ),
        }


def _effective_selection(selection: Any) -> dict[str, str]:
    """Drop unselected entries; ids are compared as strings."""
    if not isinstance(selection, dict):
        return {}
    return {
        str(attr_id): str(value_id)
        for attr_id, value_id in selection.items()
        if value_id is not None and value_id != ""
    }


def _variant_matches(variant: ProductVariant, selection: dict[str, str]) -> bool:
    return all(
        variant.attribute_values.get(attr_id) == value_id
        for attr_id, value_id in selection.items()
    )


def find_matching_variant(
    variants: Any,
    selection: Any,
) -> Optional[ProductVariant]:
    """First variant, in supplied order, agreeing with every selected pair."""
    chosen = _effective_selection(selection)
    variants = parse_variants(variants)
    if not variants or not chosen:
        return None
    return next((v for v in variants if _variant_matches(v, chosen)), None)


def _selected_value(attribute: ProductAttribute, value_id: str):
    return next((v for v in attribute.values if v.id == value_id), None)


def calculate_modifier_price(
    base_price: float,
    attributes: Any,
    selection: Any,
) -> float:
    """Base price plus the price modifier of each selected value."""
    chosen = _effective_selection(selection)
    total = base_price

    for attribute in parse_attributes(attributes):
        value_id = chosen.get(attribute.id)
        if value_id is None:
            continue
        value = _selected_value(attribute, value_id)
        if value is None:
            logger.debug(f"Selected value {value_id!r} not found on attribute {attribute.id!r}")
            continue
        total += value.price_modifier or 0

    return round_currency(total)


def resolve_variant_price(
    base_price: float,
    attributes: Any,
    variants: Any,
    selection: Any,
    in_stock: bool = True,
    sku: Optional[str] = None,
    image: Optional[str] = None,
) -> VariantResolution:
    """
    Resolve the price of an attribute selection.

    Args:
        base_price: Product price before attribute adjustments
        attributes: Product attributes with their values, as models or raw JSON
        variants: Product variants in display order, as models or raw JSON
        selection: Attribute id -> value id; may be partial
        in_stock: Product-level stock flag used when no variant matches
        sku: Product-level SKU used when no variant matches
        image: Product-level image used when no variant matches

    Returns:
        VariantResolution with the price and the matched variant (or None)
    """
    matched = find_matching_variant(variants, selection)
    product_data = {"product_in_stock": in_stock, "product_sku": sku, "product_image": image}

    if matched is not None and matched.price is not None:
        return VariantResolution(price=matched.price, matched_variant=matched, **product_data)

    return VariantResolution(
        price=calculate_modifier_price(base_price, attributes, selection),
        matched_variant=matched,
        **product_data,
    )


def format_value_for_display(value: str, label: Optional[str], attribute_type: Any) -> str:
    """Prefer the label; render size codes like "u42" as "Size 42"."""
    if label:
        return label

    if attribute_type == AttributeType.SIZE:
        match = SIZE_CODE_PATTERN.match(value)
        if match:
            return f"Size {match.group(1)}"

    return value


class VariantResolver:
    """
    Resolves selections against one product's attributes and variants.

    Accepts loaded models or raw JSON lists; invalid raw entries are skipped.
    """

    def __init__(
        self,
        attributes: Any = None,
        variants: Any = None,
        in_stock: bool = True,
        sku: Optional[str] = None,
        image: Optional[str] = None,
    ):
        self.attributes = parse_attributes(attributes)
        self.variants = parse_variants(variants)
        self.in_stock = in_stock
        self.sku = sku
        self.image = image

    def find_variant(self, selection: Any) -> Optional[ProductVariant]:
        return find_matching_variant(self.variants, selection)

    def resolve(self, base_price: float, selection: Any) -> VariantResolution:
        return resolve_variant_price(
            base_price,
            self.attributes,
            self.variants,
            selection,
            in_stock=self.in_stock,
            sku=self.sku,
            image=self.image,
        )

    def get_attribute(self, attribute_id: str) -> Optional[ProductAttribute]:
        return next((a for a in self.attributes if a.id == str(attribute_id)), None)

    def is_value_unavailable(self, attribute_id: str, value_id: str, selection: Any = None) -> bool:
        """
        Check whether choosing a value would lead to nothing purchasable.

        A value flagged out of stock is always unavailable. When the product
        has variants, the value is also unavailable if no in-stock variant
        matches the current selection extended with it.
        """
        attribute = self.get_attribute(attribute_id)
        if attribute is not None:
            value = _selected_value(attribute, str(value_id))
            if value is not None and not value.in_stock:
                return True

        if not self.variants:
            return False

        hypothetical = _effective_selection(selection)
        hypothetical[str(attribute_id)] = str(value_id)

        return not any(
            variant.in_stock and _variant_matches(variant, hypothetical)
            for variant in self.variants
        )

    def selected_label(self, attribute_id: str, selection: Any) -> str:
        """Display label of the currently selected value, or ""."""
        attribute = self.get_attribute(attribute_id)
        if attribute is None:
            return ""

        value_id = _effective_selection(selection).get(attribute.id)
        if value_id is None:
            return ""

        value = _selected_value(attribute, value_id)
        if value is None:
            return ""
        return format_value_for_display(value.value, value.label, attribute.type)
