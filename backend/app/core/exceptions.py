"""
Storefront Exception Hierarchy

Structured exception classes for the checkout subsystems. All exceptions
carry code, message and details so route handlers and logs share one shape.

Exception Hierarchy:
    StorefrontError
    ├── ShippingError
    │   └── CatalogUnavailableError
    ├── CheckoutError
    │   └── OrderCreateError
    └── OrderLookupError
        └── OrderNotFoundError
"""
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging
        severity: P0-P3 severity level
        status_code: HTTP status the API layer answers with
    """

    default_code: str = "STOREFRONT_ERROR"
    default_severity: str = "P2"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


# =============================================================================
# SHIPPING ERRORS
# =============================================================================

class ShippingError(StorefrontError):
    """Base exception for shipping quote errors."""
    default_code = "SHIPPING_ERROR"


class CatalogUnavailableError(ShippingError):
    """The shipping options table could not be read."""
    default_code = "CATALOG_UNAVAILABLE"
    default_severity = "P1"


# =============================================================================
# CHECKOUT ERRORS
# =============================================================================

class CheckoutError(StorefrontError):
    """Base exception for checkout errors."""
    default_code = "CHECKOUT_ERROR"
    status_code = 400


class OrderCreateError(CheckoutError):
    """The order row could not be written."""
    default_code = "ORDER_CREATE_FAILED"
    default_severity = "P1"
    status_code = 500


# =============================================================================
# ORDER LOOKUP ERRORS
# =============================================================================

class OrderLookupError(StorefrontError):
    """Order lookup rejected or found nothing."""
    default_code = "ORDER_LOOKUP_ERROR"
    default_severity = "P3"
    status_code = 400


class OrderNotFoundError(OrderLookupError):
    """No order matched the lookup."""
    default_code = "ORDER_NOT_FOUND"
    status_code = 404
