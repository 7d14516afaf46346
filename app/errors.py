"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
FORBIDDEN = "FORBIDDEN"
UNAUTHORIZED = "UNAUTHORIZED"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    code = VALIDATION_ERROR


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    code = NOT_FOUND


class DuplicateResourceError(DomainError):
    """Raised when attempting to create or update a resource that would violate a uniqueness constraint."""

    code = DUPLICATE_RESOURCE


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail (e.g. apartment not listed, empty checkout)."""

    code = VALIDATION_ERROR


class ForbiddenError(DomainError):
    """Raised when the current user may not act on the target resource."""

    code = FORBIDDEN


class UnauthorizedError(DomainError):
    """Raised when credentials are missing or invalid."""

    code = UNAUTHORIZED
