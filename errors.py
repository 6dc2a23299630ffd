"""Error taxonomy shared by the services and the HTTP layer."""


class StorefrontError(Exception):
    """Base class for storefront failures. Carries a public message and status."""

    status_code = 500
    default_message = "Internal server error."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Raised when required fields are missing or malformed."""

    status_code = 400
    default_message = "Request data is incomplete."


class AuthError(StorefrontError):
    """Raised when a credential pair does not match any account."""

    status_code = 401
    default_message = "Invalid credentials."


class UnauthorizedError(StorefrontError):
    """Raised when a protected route is called without a bearer token."""

    status_code = 401
    default_message = "Authentication token is required."


class ForbiddenError(StorefrontError):
    """Raised when a bearer token has a bad signature or has expired."""

    status_code = 403
    default_message = "Invalid or expired token."


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found."


class ConflictError(StorefrontError):
    status_code = 409
    default_message = "Resource already exists."


class StoreError(StorefrontError):
    """Raised when the document store fails underneath an operation."""

    status_code = 500
    default_message = "Database error."
