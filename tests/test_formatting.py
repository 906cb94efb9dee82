"""Tests for locale-aware formatting."""

from storefront_pricing.formatting import (
    format_discount_percent,
    format_number,
    format_percentage,
    format_price,
    get_discount_badge,
)
from storefront_pricing.models import DiscountResult, DiscountType


class TestFormatNumber:
    """Tests for format_number."""

    def test_english_grouping(self):
        assert format_number(1234567.5) == "1,234,567.5"
        assert format_number(1234.5, "en", 2) == "1,234.50"

    def test_arabic_digits(self):
        assert format_number(25, "ar") == "٢٥"
        assert format_number(1234.5, "ar", 2) == "١٬٢٣٤٫٥٠"

    def test_unknown_locale_is_english(self):
        assert format_number(25, "fr") == "25"

    def test_non_finite_passes_through(self):
        assert format_number(float("inf")) == "inf"
        assert format_number(float("nan"), "ar", 2) == "nan"
        assert format_price(float("inf")) == "inf SAR"


class TestFormatPercentage:
    """Tests for percentage formatting."""

    def test_english(self):
        assert format_percentage(25) == "25%"
        assert format_percentage(12.345, "en", 1) == "12.3%"

    def test_arabic(self):
        assert format_percentage(25, "ar") == "٢٥٪"

    def test_discount_percent_rounds(self):
        assert format_discount_percent(24.5) == "25%"
        assert format_discount_percent(33.3, "ar") == "٣٣٪"


class TestFormatPrice:
    """Tests for format_price."""

    def test_default_currency(self):
        assert format_price(12.5) == "12.50 SAR"

    def test_custom_currency(self):
        assert format_price(3, "USD") == "3.00 USD"


class TestDiscountBadge:
    """Tests for get_discount_badge."""

    def test_no_discount(self):
        result = DiscountResult(original_price=100, discounted_price=100)
        assert get_discount_badge(result) is None

    def test_sale_price_badge(self):
        result = DiscountResult(
            has_discount=True,
            original_price=100,
            discounted_price=80,
            savings_amount=20,
            savings_percent=20,
            discount_type=DiscountType.SALE_PRICE,
        )
        assert get_discount_badge(result) == "Save 20.00 SAR"

    def test_percentage_badge(self):
        result = DiscountResult(
            has_discount=True,
            original_price=100,
            discounted_price=75,
            savings_amount=25,
            savings_percent=25,
            discount_type=DiscountType.PERCENTAGE,
        )
        assert get_discount_badge(result) == "25% OFF"
