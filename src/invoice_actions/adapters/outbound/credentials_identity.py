from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass, field
from typing import Mapping

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from invoice_actions.core.domain.model.errors import AuthErrorKind, IdentityProviderError
from invoice_actions.core.ports.outbound.identity import IdentityProvider

log = structlog.get_logger(__name__)

CREDENTIALS_STRATEGY = "credentials"


class Credentials(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)


def hash_password(password: str, salt: bytes | None = None) -> str:
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.scrypt(password.encode(), salt=salt, n=2**14, r=8, p=1)
    return f"scrypt${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        scheme, salt_hex, digest_hex = stored.split("$")
    except ValueError:
        return False
    if scheme != "scrypt":
        return False
    expected = hash_password(password, bytes.fromhex(salt_hex)).split("$")[2]
    return hmac.compare_digest(expected, digest_hex)


@dataclass
class CredentialsIdentityProvider(IdentityProvider):
    """
    Development identity provider: email -> scrypt hash, one active session.
    A real deployment plugs in its own provider behind the same port.
    """

    users: Mapping[str, str] = field(default_factory=dict)
    signed_in: str | None = None

    def sign_in(self, strategy: str, credentials: Mapping[str, str]) -> None:
        if strategy != CREDENTIALS_STRATEGY:
            raise IdentityProviderError(
                AuthErrorKind.CONFIGURATION, f"unsupported strategy: {strategy}"
            )

        try:
            creds = Credentials.model_validate(dict(credentials))
        except SchemaError:
            raise IdentityProviderError(
                AuthErrorKind.CREDENTIALS_SIGNIN, "malformed credentials"
            ) from None

        stored = self.users.get(creds.email.lower())
        if stored is None or not verify_password(creds.password, stored):
            raise IdentityProviderError(AuthErrorKind.CREDENTIALS_SIGNIN, "credentials rejected")

        self.signed_in = creds.email.lower()
        log.debug("session_started", email=self.signed_in)

    def sign_out(self) -> None:
        self.signed_in = None
