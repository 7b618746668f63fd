"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class UnauthenticatedError(DomainException):
    """Raised when a credential is missing, malformed or expired."""

    def __init__(self, message: str = "Authentication required", reason: str = None):
        super().__init__(message, code="UNAUTHENTICATED")
        self.reason = reason


class ForbiddenError(DomainException):
    """Raised when the caller's role does not allow the operation."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="FORBIDDEN")


class InvalidFormatError(DomainException):
    """Raised when a license key or date is malformed."""

    def __init__(self, message: str = "Invalid format"):
        super().__init__(message, code="INVALID_FORMAT")


class InvalidArgumentError(DomainException):
    """Raised when operation parameters are missing or conflicting."""

    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message, code="INVALID_ARGUMENT")


class NotFoundError(DomainException):
    """Base exception for missing entities."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class AccountNotFoundError(NotFoundError):
    """Raised when an account is not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="ACCOUNT_NOT_FOUND")


class ConflictError(DomainException):
    """Base exception for business-rule conflicts."""

    def __init__(self, message: str = "Conflicting state", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class LicenseAssignedToAnotherAdminError(ConflictError):
    """Raised when a license is already owned by a different account."""

    def __init__(self, message: str = "This license is already assigned to another admin"):
        super().__init__(message, code="LICENSE_ASSIGNED_TO_ANOTHER_ADMIN")


class LicenseAlreadyUsedError(ConflictError):
    """Raised when a license is no longer claimable."""

    def __init__(self, message: str = "Invalid or already used key"):
        super().__init__(message, code="LICENSE_ALREADY_USED")


class ActiveLicenseExistsError(ConflictError):
    """Raised when the caller already holds an active license."""

    def __init__(self, message: str = "You already have an active license"):
        super().__init__(message, code="ACTIVE_LICENSE_EXISTS")


class AccountAlreadyExistsError(ConflictError):
    """Raised when an account with the same email exists."""

    def __init__(self, message: str = "User with this email already exists"):
        super().__init__(message, code="ACCOUNT_ALREADY_EXISTS")


class AdminHasNoLicenseError(ConflictError):
    """Raised when a renewal targets an admin without a license."""

    def __init__(self, message: str = "Admin does not have a license"):
        super().__init__(message, code="ADMIN_HAS_NO_LICENSE")


class KeyspaceExhaustedError(DomainException):
    """Raised when no unique license key was found within the retry budget."""

    def __init__(self, message: str = "Failed to generate unique license key"):
        super().__init__(message, code="KEYSPACE_EXHAUSTED")


class InfrastructureError(DomainException):
    """Raised when the store or another backend is unavailable."""

    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message, code="INFRASTRUCTURE_ERROR")
