"""
Batch pricing of already-fetched product records.
Validates raw product dicts, calculates their discounts and collects failures
and data quality warnings without aborting the batch.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from storefront_pricing.discounts import as_utc, calculate_product_price
from storefront_pricing.exceptions import (
    DataQualityError,
    ErrorContext,
    PriceCalculationError,
    ValidationError,
)
from storefront_pricing.logging_config import get_correlation_id, log_execution_time
from storefront_pricing.models import DiscountableProduct, DiscountResult

logger = logging.getLogger(__name__)


@dataclass
class PricedProduct:
    """A product id paired with its calculated discount."""
    product_id: str
    discount: DiscountResult
    warning: Optional[dict] = None

    def to_dict(self) -> dict:
        return {"productId": self.product_id, **self.discount.to_dict()}


@dataclass
class PricingResult:
    """Result of a batch pricing operation."""
    successful: list[PricedProduct] = field(default_factory=list)
    failed: list[dict] = field(default_factory=list)
    warnings: list[dict] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.successful)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def total_count(self) -> int:
        return self.success_count + self.failure_count

    def to_dict(self) -> dict:
        return {
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "total_count": self.total_count,
            "failed_product_ids": [f.get("product_id") for f in self.failed],
            "warning_count": len(self.warnings),
        }


class ProductValidator:
    """Checks raw product records before they are loaded."""

    REQUIRED_FIELDS = ["id", "price"]

    def __init__(self):
        self.validation_errors: list[ValidationError] = []

    def validate(self, raw_product: Any) -> bool:
        """
        Validate raw product structure.

        Args:
            raw_product: Raw product dictionary

        Returns:
            True if valid, False otherwise
        """
        self.validation_errors.clear()

        if not isinstance(raw_product, dict):
            self.validation_errors.append(
                ValidationError(
                    message="Product record is not an object",
                    field_name="product",
                    expected="object",
                    actual=type(raw_product).__name__,
                )
            )
            return False

        for field_name in self.REQUIRED_FIELDS:
            value = raw_product.get(field_name)
            if value is None or value == "":
                self.validation_errors.append(
                    ValidationError(
                        message=f"Missing required field: {field_name}",
                        field_name=field_name,
                        expected="non-empty value",
                        actual=value,
                    )
                )

        return len(self.validation_errors) == 0


class ProductPricer:
    """
    Prices batches of raw product records.

    Pass ``now`` to evaluate every sale window in a batch at the same moment;
    without it each product is checked against the current time.
    """

    def __init__(self, correlation_id: Optional[str] = None, now: Optional[datetime] = None):
        self.correlation_id = correlation_id or get_correlation_id()
        self.now = now
        self.validator = ProductValidator()
        self.result = PricingResult()

    @log_execution_time(logger)
    def price_batch(self, raw_products: list[dict]) -> PricingResult:
        """
        Price a batch of raw products.

        Args:
            raw_products: List of raw product dictionaries

        Returns:
            PricingResult with priced and failed products
        """
        self.result = PricingResult()

        logger.info(
            f"Starting batch pricing of {len(raw_products)} products",
            extra={"metrics": {"input_count": len(raw_products)}},
        )

        for idx, raw_product in enumerate(raw_products):
            try:
                priced = self.price(raw_product)
                if priced:
                    self.result.successful.append(priced)
                    if priced.warning:
                        self.result.warnings.append(priced.warning)
                else:
                    self.result.failed.append({
                        "product_id": self._extract_product_id(raw_product),
                        "error": [e.to_dict() for e in self.validator.validation_errors],
                        "index": idx,
                    })
            except PriceCalculationError as e:
                self.result.failed.append({
                    "product_id": e.context.product_id,
                    "error": e.to_dict(),
                    "index": idx,
                })

        logger.info(
            "Batch pricing complete",
            extra={
                "metrics": {
                    "success_count": self.result.success_count,
                    "failure_count": self.result.failure_count,
                    "warning_count": len(self.result.warnings),
                }
            },
        )

        return self.result

    def price(self, raw_product: Any) -> Optional[PricedProduct]:
        """
        Price a single raw product record.

        Args:
            raw_product: Raw product dict as returned by the product API

        Returns:
            PricedProduct or None if validation fails

        Raises:
            PriceCalculationError: If the record cannot be loaded
        """
        if not self.validator.validate(raw_product):
            for error in self.validator.validation_errors:
                logger.warning(f"Validation failed: {error.message}")
            return None

        product_id = str(raw_product["id"])
        context = ErrorContext(
            correlation_id=self.correlation_id,
            product_id=product_id,
        )

        try:
            product = DiscountableProduct.model_validate(raw_product)
        except PydanticValidationError as e:
            first_error = e.errors()[0] if e.errors() else {}
            raise PriceCalculationError(
                message=f"Failed to load product {product_id}: {e.error_count()} invalid field(s)",
                product_id=product_id,
                field_name=".".join(str(p) for p in first_error.get("loc", ())) or None,
                context=context,
                original_exception=e,
            )

        warning = None
        issues = self._check_data_quality(product)
        if issues:
            error = DataQualityError(
                message=f"Product {product_id} has {len(issues)} pricing data issue(s)",
                product_id=product_id,
                issues=issues,
                context=ErrorContext(correlation_id=self.correlation_id),
            )
            warning = {
                "product_id": product_id,
                "issues": issues,
                "error": error.to_dict(),
            }

        return PricedProduct(
            product_id=product_id,
            discount=calculate_product_price(product, self.now),
            warning=warning,
        )

    def _check_data_quality(self, product: DiscountableProduct) -> list[str]:
        """Check for pricing data issues and return warnings."""
        issues = []

        if product.price <= 0:
            issues.append("Price is zero or negative")

        if product.sale_price is not None and product.sale_price >= product.price:
            issues.append("Sale price is not below the regular price")

        if product.discount_percent is not None and not 0 < product.discount_percent < 100:
            issues.append("Discount percent is outside the 0-100 range")

        if product.on_sale and product.sale_price is None and product.discount_percent is None:
            issues.append("Product is on sale without a sale price or discount percent")

        if (
            product.sale_start_date is not None
            and product.sale_end_date is not None
            and as_utc(product.sale_start_date) > as_utc(product.sale_end_date)
        ):
            issues.append("Sale window ends before it starts")

        return issues

    def _extract_product_id(self, raw_product: Any) -> str:
        """Safely extract product ID from raw product."""
        if isinstance(raw_product, dict) and raw_product.get("id") is not None:
            return str(raw_product["id"])
        return "unknown"
