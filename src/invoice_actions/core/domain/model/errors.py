from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Sequence


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    NOT_FOUND = "not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    AUTH_FAILURE = "auth_failure"


FieldErrors = Mapping[str, Sequence[str]]


@dataclass(frozen=True)
class InvoiceActionError(Exception):
    message: str

    kind = ErrorKind.PERSISTENCE

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ValidationError(InvoiceActionError):
    field_errors: FieldErrors = field(default_factory=dict)

    kind = ErrorKind.VALIDATION


@dataclass(frozen=True)
class PersistenceError(InvoiceActionError):
    kind = ErrorKind.PERSISTENCE


@dataclass(frozen=True)
class InvoiceNotFound(PersistenceError):
    invoice_id: str = ""

    kind = ErrorKind.NOT_FOUND

    def __str__(self) -> str:  # pragma: no cover
        return f"invoice_not_found: {self.invoice_id} ({self.message})"


@dataclass(frozen=True)
class AuthenticationError(InvoiceActionError):
    kind: ErrorKind = ErrorKind.INVALID_CREDENTIALS


class AuthErrorKind(str, Enum):
    CREDENTIALS_SIGNIN = "credentials_signin"
    CONFIGURATION = "configuration"
    ACCESS_DENIED = "access_denied"
    CALLBACK = "callback"


class IdentityProviderError(Exception):
    """Raised by identity provider adapters; anything else is unclassified."""

    def __init__(self, kind: AuthErrorKind, message: str = "") -> None:
        super().__init__(message or kind.value)
        self.kind = kind
