"""Domain errors. Handled by the exception handler registered in main.py."""


class PortfolioError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PortfolioError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(ValidationError):
    status_code = 409
    default_message = "Resource already exists"


class NotFoundError(PortfolioError):
    status_code = 404
    default_message = "Not found"


class AuthenticationError(PortfolioError):
    status_code = 401
    default_message = "Invalid credentials"


class NotAuthenticated(AuthenticationError):
    default_message = "Please login to access this resource"


class InvalidToken(NotAuthenticated):
    """Session token failed signature, expiry or shape checks."""


class InvalidResetToken(AuthenticationError):
    status_code = 400
    default_message = "Reset password token is invalid or has expired"


class UploadError(PortfolioError):
    status_code = 502
    default_message = "Failed to upload file"


class DeliveryError(PortfolioError):
    status_code = 502
    default_message = "Failed to send email"


class PersistenceError(PortfolioError):
    status_code = 503
    default_message = "Database unavailable"


class ConfigurationError(RuntimeError):
    """Fatal misconfiguration detected at startup."""
