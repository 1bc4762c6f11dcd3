"""
Error taxonomy for the order notification service.

Errors carry a severity and a category so handlers can log them with a
consistent structure. Only input validation errors are fatal to a whole
stream batch; everything else is local to a single record or swallowed by
the immediate exclusive filler path.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    PARSING = "PARSING"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    CONFIGURATION = "CONFIGURATION"


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.VALIDATION,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class OrderNotificationInputValidationError(BaseServiceError):
    """Raised when a stream batch fails the structural schema check."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="STREAM_INPUT_VALIDATION_ERROR",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.VALIDATION,
        )


class OrderParseError(BaseServiceError):
    """Raised when a stream record cannot be read into an order."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="ORDER_PARSE_ERROR",
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.PARSING,
        )


class UnexpectedOrderTypeError(OrderParseError):
    """Raised when a record carries an order type this service does not know."""

    def __init__(self, order_type: Any):
        super().__init__(f"Unexpected order type: {order_type}")
        self.error_code = "UNEXPECTED_ORDER_TYPE"
        self.order_type = order_type


class NoRpcUrlConfiguredError(BaseServiceError):
    """Raised when a block number is requested for a chain without an RPC url."""

    def __init__(self, chain_id: int):
        super().__init__(
            message=f"No RPC url defined for chain {chain_id}",
            error_code="NO_RPC_URL_CONFIGURED",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.CONFIGURATION,
        )
        self.chain_id = chain_id


class BlockNumberFetchError(BaseServiceError):
    """Raised when the JSON-RPC node does not return a usable block number."""

    def __init__(self, chain_id: int, reason: str, original_error: Optional[Exception] = None):
        super().__init__(
            message=f"Failed to fetch block number for chain {chain_id}: {reason}",
            error_code="BLOCK_NUMBER_FETCH_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.EXTERNAL_SERVICE,
        )
        self.chain_id = chain_id
        self.original_error = original_error
