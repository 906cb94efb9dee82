"""Tests for multilingual content resolution."""

import pytest

from storefront_pricing.localization import (
    convert_to_legacy_product,
    convert_to_multilingual_product,
    ensure_localized_content,
    get_category_translation,
    get_localized_string,
    normalize_language,
)
from storefront_pricing.models import Language, LocalizedContent


class TestEnsureLocalizedContent:
    """Tests for ensure_localized_content."""

    def test_string_is_mirrored(self):
        result = ensure_localized_content("T-Shirt")
        assert result == LocalizedContent(en="T-Shirt", ar="T-Shirt")

    def test_full_object(self):
        result = ensure_localized_content({"en": "Dress", "ar": "فستان"})
        assert result.en == "Dress"
        assert result.ar == "فستان"

    def test_partial_object_fills_missing_with_empty(self):
        assert ensure_localized_content({"en": "Dress"}) == LocalizedContent(en="Dress", ar="")
        assert ensure_localized_content({"ar": "فستان"}) == LocalizedContent(en="", ar="فستان")

    def test_none_values_in_object(self):
        result = ensure_localized_content({"en": None, "ar": "فستان"})
        assert result == LocalizedContent(en="", ar="فستان")

    def test_non_string_members_count_as_missing(self):
        result = ensure_localized_content({"en": 42, "ar": ["x"]})
        assert result == LocalizedContent(en="", ar="")

    def test_category_row_shape_cross_fills(self):
        result = ensure_localized_content({"name_en": "Shoes", "name_ar": ""})
        assert result == LocalizedContent(en="Shoes", ar="Shoes")

    def test_localized_content_is_copied(self):
        original = LocalizedContent(en="Bag", ar="حقيبة")
        result = ensure_localized_content(original)
        assert result == original
        assert result is not original

    @pytest.mark.parametrize("value", [None, 0, 12.5, True, [], ["en"], {}, {"title": "x"}, object()])
    def test_totality(self, value):
        result = ensure_localized_content(value)
        assert isinstance(result.en, str)
        assert isinstance(result.ar, str)
        assert result == LocalizedContent(en="", ar="")

    @pytest.mark.parametrize("value", [
        "Hat",
        {"en": "Hat"},
        {"ar": "قبعة"},
        {"name_en": "Hat", "name_ar": "قبعة"},
        None,
        42,
    ])
    def test_idempotent(self, value):
        once = ensure_localized_content(value)
        assert ensure_localized_content(once) == once
        assert ensure_localized_content(once.model_dump()) == once


class TestGetLocalizedString:
    """Tests for get_localized_string."""

    def test_returns_requested_language(self):
        content = LocalizedContent(en="Dress", ar="فستان")
        assert get_localized_string(content, "en") == "Dress"
        assert get_localized_string(content, "ar") == "فستان"

    def test_falls_back_to_other_language(self):
        assert get_localized_string(LocalizedContent(en="", ar="X"), "en") == "X"
        assert get_localized_string(LocalizedContent(en="Y", ar=""), "ar") == "Y"

    def test_both_empty_returns_empty(self):
        assert get_localized_string(LocalizedContent(en="", ar=""), "en") == ""
        assert get_localized_string(LocalizedContent(), "ar") == ""

    def test_unknown_language_treated_as_english(self):
        content = LocalizedContent(en="Dress", ar="فستان")
        assert get_localized_string(content, "fr") == "Dress"
        assert get_localized_string(content, None) == "Dress"
        assert get_localized_string(content, 7) == "Dress"

    def test_accepts_raw_inputs(self):
        assert get_localized_string("Plain", "ar") == "Plain"
        assert get_localized_string({"ar": "فستان"}, "en") == "فستان"
        assert get_localized_string(None, "en") == ""

    def test_accepts_language_enum(self):
        content = LocalizedContent(en="Dress", ar="فستان")
        assert get_localized_string(content, Language.AR) == "فستان"

    def test_normalize_language(self):
        assert normalize_language("ar") is Language.AR
        assert normalize_language("en") is Language.EN
        assert normalize_language("AR") is Language.EN
        assert normalize_language(None) is Language.EN


class TestProductConversion:
    """Tests for multilingual/legacy product conversion."""

    def test_api_product_with_language_pairs(self):
        product = {
            "id": 1,
            "name_en": "Dress",
            "name_ar": "فستان",
            "category_en": "Women",
            "category_ar": "نساء",
            "description_en": "Summer dress",
            "description": "Summer dress",
        }
        result = convert_to_multilingual_product(product)

        assert result["name"] == LocalizedContent(en="Dress", ar="فستان")
        assert result["category"] == LocalizedContent(en="Women", ar="نساء")
        assert result["description"] == LocalizedContent(en="Summer dress", ar="Summer dress")
        assert result["variants"] == []
        assert result["attributes"] == []
        assert "name" not in product

    def test_legacy_product_is_normalized(self):
        product = {"id": 2, "name": "Mug", "category": {"en": "Home"}, "variants": [{"id": "v"}]}
        result = convert_to_multilingual_product(product)

        assert result["name"] == LocalizedContent(en="Mug", ar="Mug")
        assert result["category"] == LocalizedContent(en="Home", ar="")
        assert result["description"] == LocalizedContent(en="", ar="")
        assert result["variants"] == [{"id": "v"}]

    def test_convert_to_legacy_product(self):
        product = {
            "id": 3,
            "name": LocalizedContent(en="Lamp", ar="مصباح"),
            "category": {"en": "", "ar": "المنزل"},
            "description": None,
        }
        result = convert_to_legacy_product(product, "ar")

        assert result["name"] == "مصباح"
        assert result["category"] == "المنزل"
        assert result["description"] == ""
        assert convert_to_legacy_product(product)["category"] == "المنزل"


class TestCategoryTranslation:
    """Tests for built-in category translations."""

    def test_english_name(self):
        assert get_category_translation("Fashion") == LocalizedContent(en="Fashion", ar="الأزياء")

    def test_arabic_name(self):
        assert get_category_translation("الكتب").en == "Books"

    def test_unknown_name_is_mirrored(self):
        assert get_category_translation("Toys") == LocalizedContent(en="Toys", ar="Toys")
