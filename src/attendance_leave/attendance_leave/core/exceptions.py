from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is the HTTP status the controller layer replies with.
    """

    status_code = 400

    def __init__(self, message: str, *, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class SchemaError(DomainError):
    """Raised when a sheet lacks an expected column."""


class SheetConfigError(DomainError):
    """Raised when the expected sheet (tab) does not exist in the spreadsheet."""


class RangeError(DomainError):
    """Raised when the store cannot parse the requested A1 range."""


class InvalidRoleError(DomainError):
    """Raised when a matched user carries a role outside the allow-list."""


class AuthenticationError(DomainError):
    status_code = 401


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid."""


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is missing, tampered with or expired."""


class PermissionDeniedError(DomainError):
    """Raised when the store refuses access to the spreadsheet."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class EmptyTableError(NotFoundError):
    """Raised when a range holds no rows (or no non-empty records)."""


class UploadError(DomainError):
    status_code = 500


class StoreError(DomainError):
    """Any other failure reported by the spreadsheet store."""

    status_code = 500


class ConfigurationError(Exception):
    """Raised at startup when required settings are absent."""
