"""Domain exceptions for the compliance document service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in core.exception_handlers.
"""

from typing import Any


class ComplianceDocsException(Exception):
    """Base exception for all application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses: error, message, and details when present."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(ComplianceDocsException):
    """Raised when input validation fails (missing field, bad format, bad sort key)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class DuplicateUserException(ComplianceDocsException):
    """Raised when registering an email that is already taken."""

    def __init__(self) -> None:
        super().__init__("User with this email already exists", "DUPLICATE_USER")


class InvalidCredentialsException(ComplianceDocsException):
    """Raised on failed login or failed current-password check.

    Unknown email and wrong password share one message so callers cannot
    probe which accounts exist.
    """

    INVALID = "Invalid email or password"
    DEACTIVATED = "This account has been deactivated"

    def __init__(self, message: str = INVALID) -> None:
        super().__init__(message, "INVALID_CREDENTIALS")


class UnauthenticatedException(ComplianceDocsException):
    """Raised when a protected route is called without a usable identity."""

    def __init__(self, message: str = "Authentication token is missing") -> None:
        super().__init__(message, "UNAUTHENTICATED")


class InvalidTokenException(ComplianceDocsException):
    """Raised when a token fails signature or expiry validation."""

    def __init__(self, message: str = "Authentication token is invalid or expired") -> None:
        super().__init__(message, "INVALID_TOKEN")


class AccountDisabledException(ComplianceDocsException):
    """Raised when a valid token belongs to a deactivated user."""

    def __init__(self) -> None:
        super().__init__("User account is deactivated", "ACCOUNT_DISABLED")


class AuthorizationException(ComplianceDocsException):
    """Raised when the caller's role may not perform the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(ComplianceDocsException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        super().__init__(
            f"{resource_type.capitalize()} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class ConflictException(ComplianceDocsException):
    """Raised when an operation collides with existing state (duplicate name, in-use)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "CONFLICT", details)


class InvalidCategoryException(ComplianceDocsException):
    """Raised when a document references a category that does not exist."""

    def __init__(self, category_id: str) -> None:
        super().__init__(
            "Invalid category",
            "INVALID_CATEGORY",
            {"category_id": category_id},
        )


class InvalidSubcategoryException(ComplianceDocsException):
    """Raised when a subcategory is not a member of the document's category."""

    def __init__(self, subcategory: str, category_id: str) -> None:
        super().__init__(
            "Invalid subcategory for the selected category",
            "INVALID_SUBCATEGORY",
            {"subcategory": subcategory, "category_id": category_id},
        )


class FileNotFoundException(ComplianceDocsException):
    """Raised when a record exists but its stored blob is missing."""

    def __init__(self, document_id: str, version: int | None = None) -> None:
        details: dict[str, Any] = {"document_id": document_id}
        if version is not None:
            details["version"] = version
        super().__init__("File not found on server", "FILE_NOT_FOUND", details)


class DocumentVersionConflictException(ComplianceDocsException):
    """Raised when a concurrent revision upload already advanced the version."""

    def __init__(self, document_id: str, expected_version: int) -> None:
        super().__init__(
            f"Document {document_id} was modified concurrently; retry the upload",
            "VERSION_CONFLICT",
            {"document_id": document_id, "expected_version": expected_version},
        )


class SqlNotConfiguredException(ComplianceDocsException):
    """Raised when a DB session is requested but DATABASE_URL is not usable."""

    def __init__(self) -> None:
        super().__init__(
            "Database is not configured",
            "SQL_NOT_CONFIGURED",
        )
