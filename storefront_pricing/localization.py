"""
Multilingual content resolution for English/Arabic storefront data.

Admin-entered text is frequently filled in for one language only, and older
records store a bare string. Everything here degrades to empty strings rather
than raising, so a missing translation never breaks a page.
"""

import logging
from collections.abc import Mapping
from typing import Any

from storefront_pricing.models import Language, LocalizedContent

logger = logging.getLogger(__name__)

LOCALIZED_FIELDS = ("name", "category", "description")


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def ensure_localized_content(value: Any) -> LocalizedContent:
    """
    Normalize any localizable input into a LocalizedContent.

    Args:
        value: A bare string, a LocalizedContent, a mapping with en/ar keys,
            a category row with name_en/name_ar keys, or anything else

    Returns:
        LocalizedContent with both languages present (possibly empty)
    """
    if isinstance(value, str):
        return LocalizedContent(en=value, ar=value)

    if isinstance(value, LocalizedContent):
        return LocalizedContent(en=value.en, ar=value.ar)

    if isinstance(value, Mapping):
        if "en" in value or "ar" in value:
            return LocalizedContent(
                en=_as_text(value.get("en")),
                ar=_as_text(value.get("ar")),
            )
        if "name_en" in value or "name_ar" in value:
            name_en = _as_text(value.get("name_en"))
            name_ar = _as_text(value.get("name_ar"))
            return LocalizedContent(en=name_en or name_ar, ar=name_ar or name_en)

    return LocalizedContent()


def normalize_language(language: Any) -> Language:
    """Map a requested language to a supported one; anything unknown is English."""
    if language == Language.AR:
        return Language.AR
    return Language.EN


def get_localized_string(content: Any, language: Any) -> str:
    """
    Pick the string for a language, falling back to the other language.

    Args:
        content: Any localizable input (see ensure_localized_content)
        language: "en" or "ar"; other values are treated as "en"

    Returns:
        The requested translation, the other one if it is empty, or ""
    """
    localized = ensure_localized_content(content)
    lang = normalize_language(language)

    primary, fallback = (
        (localized.ar, localized.en) if lang is Language.AR else (localized.en, localized.ar)
    )
    return primary or fallback


def convert_to_multilingual_product(product: dict) -> dict:
    """
    Convert an API or legacy product record to the multilingual shape.

    Records carrying both name_en and name_ar build their localized fields
    from the _en/_ar pairs; everything else is normalized from the bare field.
    """
    converted = dict(product)

    if product.get("name_en") and product.get("name_ar"):
        for field_name in LOCALIZED_FIELDS:
            en_value = product.get(f"{field_name}_en")
            ar_value = product.get(f"{field_name}_ar")
            if en_value and ar_value:
                converted[field_name] = LocalizedContent(en=_as_text(en_value), ar=_as_text(ar_value))
            else:
                converted[field_name] = ensure_localized_content(product.get(field_name) or "")
    else:
        for field_name in LOCALIZED_FIELDS:
            converted[field_name] = ensure_localized_content(product.get(field_name) or "")

    converted["variants"] = product.get("variants") or []
    converted["attributes"] = product.get("attributes") or []
    return converted


def convert_to_legacy_product(product: dict, language: Any = Language.EN) -> dict:
    """Flatten a multilingual product record to single-language strings."""
    legacy = dict(product)
    for field_name in LOCALIZED_FIELDS:
        legacy[field_name] = get_localized_string(product.get(field_name), language)
    return legacy


CATEGORY_MAPPINGS = {
    "Electronics": LocalizedContent(en="Electronics", ar="الإلكترونيات"),
    "Fashion": LocalizedContent(en="Fashion", ar="الأزياء"),
    "Home": LocalizedContent(en="Home & Kitchen", ar="المنزل والمطبخ"),
    "Sports": LocalizedContent(en="Sports", ar="الرياضة"),
    "Books": LocalizedContent(en="Books", ar="الكتب"),
    "Beauty": LocalizedContent(en="Beauty", ar="الجمال"),
}


def get_category_translation(category_name: str) -> LocalizedContent:
    """Look up the built-in translation of a category name in either language."""
    for mapping in CATEGORY_MAPPINGS.values():
        if category_name in (mapping.en, mapping.ar):
            return ensure_localized_content(mapping)

    logger.debug(f"No built-in translation for category {category_name!r}")
    return ensure_localized_content(category_name)
