"""
Custom exceptions for the pen inventory backend.

Exception Hierarchy:
    PenInventoryError (base)
    ├── ConfigurationError      - Missing credentials/settings (startup failure)
    ├── ValidationError         - Customization payload rejected (400)
    ├── TempOrderNotFoundError  - Unknown or already finalized tempOrderId (404)
    ├── PaymentRejectedError    - Webhook reported a non-success status (400)
    └── CollaboratorError       - Firebase or Sheets call failed (500)
        ├── InventoryUpdateError - Counter transaction failed
        └── OrderLogError        - Spreadsheet append failed

Usage:
    ConfigurationError is raised by create_app() and stops the process.
    Everything else is raised by services and converted to an HTTP response
    at the route boundary using the exception's status_code.
"""

from typing import Optional, Dict, Any


class PenInventoryError(Exception):
    """
    Base exception for all pen inventory backend errors.

    Routes can catch this single class and answer with ``status_code``.
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# STARTUP ERRORS - Application will not start if these occur
# =============================================================================

class ConfigurationError(PenInventoryError):
    """
    Required configuration is missing from the environment.

    Raised while building the Firebase and Sheets collaborators. The process
    should exit with the list of missing variables.
    """

    def __init__(self, missing: list):
        message = f"Missing required configuration: {', '.join(missing)}"
        details = {
            "missing": list(missing),
            "resolution": "Set the variables in the environment or in .env"
        }
        super().__init__(message, details)
        self.missing = list(missing)


# =============================================================================
# CLIENT ERRORS - Bad input from the storefront or payment processor
# =============================================================================

class ValidationError(PenInventoryError):
    """Customization payload is missing pen or trinkets, or is malformed."""

    status_code = 400

    def __init__(self, message: str, fields: Optional[list] = None):
        details = {"fields": list(fields)} if fields else None
        super().__init__(message, details)
        self.fields = list(fields or [])


class TempOrderNotFoundError(PenInventoryError):
    """
    No staged order exists for the identifier.

    The order was never staged, has already been finalized, or expired.
    """

    status_code = 404

    def __init__(self, temp_order_id: str):
        super().__init__("Temp order not found", {"temp_order_id": temp_order_id})
        self.temp_order_id = temp_order_id


class PaymentRejectedError(PenInventoryError):
    """Payment webhook carried a status other than the success sentinel."""

    status_code = 400

    def __init__(self, payment_status: Any, temp_order_id: Optional[str] = None):
        details = {"payment_status": payment_status}
        if temp_order_id:
            details["temp_order_id"] = temp_order_id
        super().__init__("Payment not successful.", details)
        self.payment_status = payment_status
        self.temp_order_id = temp_order_id


# =============================================================================
# COLLABORATOR ERRORS - Firebase / Google Sheets failures
# =============================================================================

class CollaboratorError(PenInventoryError):
    """
    Base class for failures of the external inventory store or order log.

    These are never retried here. The payment processor's own webhook retry
    policy is expected to call again.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if cause is not None:
            error_details["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(message, error_details)
        self.cause = cause


class InventoryUpdateError(CollaboratorError):
    """A counter transaction against the Realtime Database failed."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to decrement inventory at {path}", cause, {"path": path})
        self.path = path


class OrderLogError(CollaboratorError):
    """Appending a row to the order log spreadsheet failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, cause)
