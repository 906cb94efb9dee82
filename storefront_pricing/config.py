"""
Environment-driven settings for the storefront pricing package.
Values are read once at import time; pricing functions never consult them.
"""

import os
from typing import Optional

from storefront_pricing.exceptions import ConfigurationError

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")
SERVICE_NAME = os.environ.get("SERVICE_NAME", "storefront-pricing")
DEFAULT_CURRENCY = os.environ.get("DEFAULT_CURRENCY", "SAR")

LOG_FORMATS = ("text", "json")


def get_log_format(value: Optional[str] = None) -> str:
    """Return the validated log format, raising ConfigurationError if unknown."""
    fmt = (value if value is not None else LOG_FORMAT).strip().lower()
    if fmt not in LOG_FORMATS:
        raise ConfigurationError(
            message=f"Unsupported LOG_FORMAT {fmt!r}, expected one of {LOG_FORMATS}",
            config_key="LOG_FORMAT",
        )
    return fmt
