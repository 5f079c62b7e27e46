"""
Application error taxonomy.

Every error raised on purpose by the services carries the HTTP status, a
stable machine-readable code and an optional ``details`` payload; ``main``
renders them with the ``{"status": "error", ...}`` envelope.
"""

from typing import Any


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class AuthenticationMissing(AppError):
    status_code = 401
    code = "auth_missing"
    default_message = "No token provided"


class AuthenticationInvalid(AppError):
    status_code = 403
    code = "auth_invalid"
    default_message = "Invalid or expired token"


class InvalidCredentials(AppError):
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class ValidationFailed(AppError):
    status_code = 400
    code = "validation_failed"
    default_message = "Invalid request data"


class ConflictError(AppError):
    status_code = 400
    code = "already_exists"
    default_message = "Resource already exists"


class ResourceNotFound(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class CredentialMissing(AppError):
    status_code = 400
    code = "credential_missing"
    default_message = "Anthropic API key not found in profile settings"


class UnsupportedContentType(AppError):
    status_code = 400
    code = "unsupported_type"
    default_message = "Unsupported content type"


class UpstreamGenerationFailed(AppError):
    status_code = 502
    code = "generation_failed"
    default_message = "Failed to generate content"


class PersistenceFailed(AppError):
    status_code = 500
    code = "persistence_failed"
    default_message = "Failed to save content"
