"""Domain-specific exceptions with user-ready messages for the pet feeder backend."""

from typing import Any


class BusinessLogicException(Exception):
    """Base exception class for business logic errors.

    All business logic exceptions include user-ready messages that can be
    displayed directly in the dashboard without client-side message construction.
    """

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)

    @property
    def payload(self) -> dict[str, Any]:
        """Extra fields merged into the error response body."""
        return {}


class RecordNotFoundException(BusinessLogicException):
    """Exception raised when a requested record is not found."""

    def __init__(self, resource_type: str, identifier: str) -> None:
        message = f"{resource_type} {identifier} was not found"
        super().__init__(message, error_code="RECORD_NOT_FOUND")


class InvalidOperationException(BusinessLogicException):
    """Exception raised when an operation cannot be performed due to business rules."""

    def __init__(self, operation: str, cause: str) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Cannot {operation} because {cause}"
        super().__init__(message, error_code="INVALID_OPERATION")


class InsufficientFeedException(BusinessLogicException):
    """Exception raised when the hopper holds less feed than a dispense needs."""

    def __init__(self, current_weight: int) -> None:
        self.current_weight = current_weight
        message = f"Insufficient feed. Only {current_weight}g remaining."
        super().__init__(message, error_code="INSUFFICIENT_FEED")

    @property
    def payload(self) -> dict[str, Any]:
        return {"currentWeight": self.current_weight}


class ValidationException(BusinessLogicException):
    """Exception raised when validation fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="VALIDATION_FAILED")


class ProcessingException(BusinessLogicException):
    """Exception raised when internal processing fails."""

    def __init__(self, operation: str, cause: str) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Cannot {operation} because processing failed: {cause}"
        super().__init__(message, error_code="PROCESSING_ERROR")


class AuthenticationException(BusinessLogicException):
    """Exception raised when authentication fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="AUTHENTICATION_REQUIRED")
