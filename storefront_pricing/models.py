"""
Data models for storefront pricing and localization.
Models accept the camelCase keys of the storefront API as well as snake_case names.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


def _coerce_str(value: Any) -> Any:
    """JSON ids and size values often arrive as numbers."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class StorefrontModel(BaseModel):
    """Base model shared by all storefront records."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        allow_inf_nan=False,
    )


class Language(str, Enum):
    """Supported storefront languages."""
    EN = "en"
    AR = "ar"


class LocalizedContent(StorefrontModel):
    """Text with English and Arabic renderings; empty string means no content."""
    en: str = ""
    ar: str = ""


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    SALE_PRICE = "sale_price"
    NONE = "none"


class DiscountableProduct(StorefrontModel):
    """Read-only pricing view of a product."""
    id: Union[str, int]
    price: float
    sale_price: Optional[float] = Field(None, alias="salePrice")
    discount_percent: Optional[float] = Field(None, alias="discountPercent")
    on_sale: bool = Field(False, alias="onSale")
    sale_start_date: Optional[datetime] = Field(None, alias="saleStartDate")
    sale_end_date: Optional[datetime] = Field(None, alias="saleEndDate")


class DiscountResult(StorefrontModel):
    """
    Outcome of a discount calculation.

    discounted_price never exceeds original_price; without a discount the two
    are equal and savings_amount is zero.
    """
    has_discount: bool = Field(False, alias="hasDiscount")
    original_price: float = Field(..., alias="originalPrice")
    discounted_price: float = Field(..., alias="discountedPrice")
    savings_amount: float = Field(0.0, alias="savingsAmount")
    savings_percent: int = Field(0, alias="savingsPercent")
    discount_type: DiscountType = Field(DiscountType.NONE, alias="discountType")
    is_valid_sale_date: bool = Field(True, alias="isValidSaleDate")

    def to_dict(self) -> dict:
        """Convert to the JSON shape used by API responses."""
        return self.model_dump(mode="json", by_alias=True)


class AttributeType(str, Enum):
    COLOR = "color"
    SIZE = "size"
    MATERIAL = "material"
    STYLE = "style"
    CUSTOM = "custom"


class ProductAttributeValue(StorefrontModel):
    """One selectable value of a product attribute (e.g. Red, XL)."""
    id: str
    value: str
    label: Optional[str] = None
    hex_color: Optional[str] = Field(None, alias="hexColor")
    price_modifier: Optional[float] = Field(None, alias="priceModifier")
    in_stock: bool = Field(True, alias="inStock")

    @field_validator("id", "value", "label", "hex_color", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return _coerce_str(value)

    @field_validator("in_stock", mode="before")
    @classmethod
    def _default_in_stock(cls, value: Any) -> Any:
        return True if value is None else value


class ProductAttribute(StorefrontModel):
    """Attribute definition with its ordered list of values."""
    id: str
    name: LocalizedContent = Field(default_factory=LocalizedContent)
    type: AttributeType = AttributeType.CUSTOM
    required: bool = False
    values: list[ProductAttributeValue] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _coerce_str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _localize_name(cls, value: Any) -> LocalizedContent:
        from storefront_pricing.localization import ensure_localized_content
        return ensure_localized_content(value)

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> AttributeType:
        if isinstance(value, str):
            value = value.strip().lower()
        try:
            return AttributeType(value)
        except ValueError:
            return AttributeType.CUSTOM

    @field_validator("required", mode="before")
    @classmethod
    def _default_required(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("values", mode="before")
    @classmethod
    def _valid_values(cls, value: Any) -> list:
        """Drop unusable values one by one so the rest keep their modifiers."""
        return _parse_records(ProductAttributeValue, value, "attribute value")


class ProductVariant(StorefrontModel):
    """A purchasable combination of attribute values."""
    id: str
    attribute_values: dict[str, str] = Field(default_factory=dict, alias="attributeValues")
    price: Optional[float] = None
    image: Optional[str] = None
    sku: Optional[str] = None
    in_stock: bool = Field(True, alias="inStock")
    stock_quantity: int = Field(0, alias="stockQuantity")

    @field_validator("id", "sku", "image", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _coerce_str(value)

    @field_validator("in_stock", mode="before")
    @classmethod
    def _default_in_stock(cls, value: Any) -> Any:
        return True if value is None else value

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def _default_stock_quantity(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("attribute_values", mode="before")
    @classmethod
    def _canonical_attribute_values(cls, value: Any) -> dict[str, str]:
        """Collapse object-map and array-of-pairs shapes into one id->id map."""
        if value is None:
            return {}
        if isinstance(value, dict):
            return {
                str(attr_id): str(value_id)
                for attr_id, value_id in value.items()
                if value_id is not None
            }
        if isinstance(value, list):
            pairs = {}
            for entry in value:
                if not isinstance(entry, dict):
                    continue
                attr_id = entry.get("attributeId", entry.get("attribute_id"))
                value_id = entry.get("valueId", entry.get("value_id"))
                if attr_id is None or value_id is None:
                    continue
                pairs.setdefault(str(attr_id), str(value_id))
            return pairs
        return {}


class Category(StorefrontModel):
    """Navigation category row, optionally carrying its children."""
    id: str
    slug: str
    name_en: str = ""
    name_ar: str = ""
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    parent_id: Optional[str] = Field(None, alias="parentId")
    sort_order: int = Field(0, alias="sortOrder")
    level: int = 0
    path: Optional[str] = None
    is_active: bool = Field(True, alias="isActive")
    children: list["Category"] = Field(default_factory=list)

    @field_validator("id", "parent_id", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return _coerce_str(value)

    @property
    def name(self) -> LocalizedContent:
        from storefront_pricing.localization import ensure_localized_content
        return ensure_localized_content({"name_en": self.name_en, "name_ar": self.name_ar})


def _parse_records(model: type, raw_items: Any, kind: str) -> list:
    """Load a JSON list into models, skipping entries that fail validation."""
    if not isinstance(raw_items, list):
        return []

    records = []
    for idx, item in enumerate(raw_items):
        if isinstance(item, model):
            records.append(item)
            continue
        try:
            records.append(model.model_validate(item))
        except PydanticValidationError as e:
            logger.warning(
                f"Skipping invalid {kind} at index {idx}: {e.error_count()} validation error(s)",
                extra={"extra_data": {"item": str(item)[:200]}},
            )
    return records


def parse_attributes(raw_attributes: Any) -> list[ProductAttribute]:
    """Load product attributes from JSON-decoded data."""
    return _parse_records(ProductAttribute, raw_attributes, "attribute")


def parse_variants(raw_variants: Any) -> list[ProductVariant]:
    """Load product variants from JSON-decoded data."""
    return _parse_records(ProductVariant, raw_variants, "variant")
