"""
Custom Exceptions for the KGHS Alumni Network API
=================================================

Raise these instead of generic Exception so the API layer can map them to a
status code and a `{"msg": ...}` body. The `code` is logged server-side only;
clients see the human-readable message.

Usage:
    from alumni.core.exceptions import ResourceNotFoundError

    if not thread:
        raise ResourceNotFoundError("Thread", thread_id)
"""

from typing import Optional, Any, Dict


class AlumniError(Exception):
    """Base exception for all application errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"msg": self.message}


# ============================================
# Validation Errors (400)
# ============================================

class ValidationError(AlumniError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, code: str = "VALIDATION_ERROR", field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code=code, details=details)


class InvalidGraduationYearError(ValidationError):
    """Graduation year outside the accepted window"""

    def __init__(self, year: int):
        super().__init__("Invalid graduation year", code="INVALID_YEAR", field="graduationYear")
        self.details["value"] = year


class InvalidAmountError(ValidationError):
    """Donation amount below the minimum"""

    def __init__(self):
        super().__init__("Invalid amount", code="INVALID_AMOUNT", field="amount")


class MissingFieldError(ValidationError):
    """A required multipart field was not sent"""

    def __init__(self, message: str, field: str):
        super().__init__(message, code="MISSING_FIELD", field=field)


class InvalidFileTypeError(ValidationError):
    """File type not allowed"""

    def __init__(self, file_type: str, allowed_types: list):
        super().__init__(
            f"File type '{file_type}' not allowed. Allowed: {', '.join(allowed_types)}",
            code="INVALID_FILE_TYPE",
        )
        self.details = {"file_type": file_type, "allowed_types": allowed_types}


class DuplicateEmailError(ValidationError):
    """Email already registered"""

    def __init__(self, email: str):
        super().__init__("User already exists", code="DUPLICATE_EMAIL", field="email")
        self.details["email"] = email


class InvalidCredentialsError(ValidationError):
    """Unknown email or wrong password"""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(AlumniError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed", code: str = "UNAUTHENTICATED"):
        super().__init__(message, code=code)


class MissingTokenError(AuthenticationError):
    """No bearer token on the request"""

    def __init__(self):
        super().__init__("No token")


class InvalidTokenError(AuthenticationError):
    """JWT token is invalid"""

    def __init__(self):
        super().__init__("Invalid token", code="INVALID_TOKEN")


class TokenExpiredError(AuthenticationError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired", code="TOKEN_EXPIRED")


class AuthorizationError(AlumniError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Admin access required", code: str = "FORBIDDEN"):
        super().__init__(message, code=code)


class PendingApprovalError(AuthorizationError):
    """Account exists but has not been approved by an administrator"""

    def __init__(self):
        super().__init__(
            "Your account is pending approval. Please check your email.",
            code="PENDING_APPROVAL",
        )


# ============================================
# Resource Errors (404)
# ============================================

class ResourceNotFoundError(AlumniError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class ThreadNotFoundError(ResourceNotFoundError):
    def __init__(self, thread_id: str):
        super().__init__("Thread", thread_id)


# ============================================
# Server Errors (500)
# ============================================

class ServerError(AlumniError):
    """Unexpected failure; message is generic, detail goes to the log"""

    status_code = 500

    def __init__(self, message: str = "Server error", code: str = "SERVER_ERROR"):
        super().__init__(message, code=code)


class StorageError(ServerError):
    """Object storage upload failed"""

    def __init__(self, message: str = "Upload failed"):
        super().__init__(message, code="STORAGE_ERROR")


class PaymentGatewayError(ServerError):
    """Payment gateway call failed"""

    def __init__(self, message: str = "Payment gateway error", gateway_message: Optional[str] = None):
        super().__init__(message, code="PAYMENT_GATEWAY_ERROR")
        if gateway_message:
            self.details["gateway_message"] = gateway_message


class EmailDeliveryError(ServerError):
    """Email provider rejected or failed the send"""

    def __init__(self, message: str = "Email delivery failed"):
        super().__init__(message, code="EMAIL_DELIVERY_FAILED")


def error_response(error: AlumniError) -> Dict[str, Any]:
    """Convert exception to API error response body"""
    return error.to_dict()
