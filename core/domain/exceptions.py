"""
Domain exceptions.

Domain exceptions represent caller errors and store failures. Business
outcomes of activation and verification (banned, expired, device limit
reached, device not activated) are not exceptions; they are carried as
ActivationOutcome values on the result DTOs.
"""
from typing import Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    retryable = False

    def __init__(self, message: str, code: Optional[str] = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when input is missing or malformed."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="VALIDATION_ERROR")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class CustomerNotFoundError(LicenseException):
    """Raised when no customer record has the requested id."""

    def __init__(self, message: str = "Customer not found"):
        super().__init__(message, code="NOT_FOUND")


class InvalidLicenseKeyError(LicenseException):
    """Raised when a license key does not match any customer record."""

    def __init__(self, message: str = "Invalid license key"):
        super().__init__(message, code="INVALID_LICENSE")


class DuplicateCustomerError(LicenseException):
    """Raised when a new record collides with an existing id or license key."""

    def __init__(self, message: str = "Customer id or license key already exists"):
        super().__init__(message, code="DUPLICATE_CUSTOMER")


class StoreException(DomainException):
    """Base exception for persistence failures."""

    pass


class StoreContentionError(StoreException):
    """
    Raised when a record stays locked by another writer past the lock timeout.

    The operation did not happen and may be retried as is.
    """

    retryable = True

    def __init__(self, message: str = "Record is locked by a concurrent update"):
        super().__init__(message, code="STORE_CONTENTION")
