"""
Custom exceptions for the storefront pricing package.

The pricing and localization functions never raise on bad data; these
exceptions belong to the batch/boundary layer, where a failure is recorded
against a product and the run continues.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for routing and handling."""
    VALIDATION = "validation"
    CALCULATION = "calculation"
    DATA_QUALITY = "data_quality"
    CONFIGURATION = "configuration"


@dataclass
class ErrorContext:
    """Context attached to an error for logging and batch reports."""
    correlation_id: Optional[str] = None
    product_id: Optional[str] = None
    field_name: Optional[str] = None
    expected_type: Optional[str] = None
    actual_value: Optional[Any] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    additional_data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "correlation_id": self.correlation_id,
            "product_id": self.product_id,
            "field_name": self.field_name,
            "expected_type": self.expected_type,
            "actual_value": str(self.actual_value) if self.actual_value is not None else None,
            "timestamp": self.timestamp,
            **self.additional_data,
        }


class PricingError(Exception):
    """Base exception for all storefront pricing errors."""

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.CALCULATION,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.original_exception = original_exception

    def to_dict(self) -> dict:
        """Serialize exception for logging and batch reports."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context.to_dict(),
            "original_exception": str(self.original_exception) if self.original_exception else None,
        }


class ValidationError(PricingError):
    """Raised (or collected) when raw input is missing a required field."""

    def __init__(
        self,
        message: str,
        field_name: str,
        expected: str,
        actual: Any,
        context: Optional[ErrorContext] = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_name = field_name
        ctx.expected_type = expected
        ctx.actual_value = actual

        super().__init__(
            message=message,
            context=ctx,
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
        )
        self.field_name = field_name
        self.expected = expected
        self.actual = actual


class PriceCalculationError(PricingError):
    """Raised when a product record cannot be loaded or priced."""

    def __init__(
        self,
        message: str,
        product_id: str,
        field_name: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        original_exception: Optional[Exception] = None,
    ):
        ctx = context or ErrorContext()
        ctx.product_id = product_id
        ctx.field_name = field_name

        super().__init__(
            message=message,
            context=ctx,
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.CALCULATION,
            original_exception=original_exception,
        )


class DataQualityError(PricingError):
    """Describes non-fatal data quality issues found while pricing."""

    def __init__(
        self,
        message: str,
        product_id: str,
        issues: list[str],
        context: Optional[ErrorContext] = None,
    ):
        ctx = context or ErrorContext()
        ctx.product_id = product_id
        ctx.additional_data["quality_issues"] = issues

        super().__init__(
            message=message,
            context=ctx,
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.DATA_QUALITY,
        )
        self.issues = issues


class ConfigurationError(PricingError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: str,
        context: Optional[ErrorContext] = None,
    ):
        ctx = context or ErrorContext()
        ctx.additional_data["config_key"] = config_key

        super().__init__(
            message=message,
            context=ctx,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
        )
        self.config_key = config_key
