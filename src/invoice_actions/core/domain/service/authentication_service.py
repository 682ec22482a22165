from __future__ import annotations

from dataclasses import dataclass

import structlog
from returns.result import Failure, Result, Success

from invoice_actions.core.domain.model.errors import (
    AuthenticationError,
    AuthErrorKind,
    ErrorKind,
    IdentityProviderError,
)
from invoice_actions.core.ports.inbound.authenticate import (
    AuthenticateCommand,
    AuthenticateUseCase,
    LogoutUseCase,
)
from invoice_actions.core.ports.outbound.identity import IdentityProvider
from invoice_actions.core.ports.outbound.navigation import (
    Redirect,
    Redirector,
    ViewInvalidator,
)

log = structlog.get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_FAILURE_MESSAGE = "Something went wrong."


@dataclass(frozen=True)
class AuthenticationDeps:
    identity: IdentityProvider
    redirector: Redirector
    invalidator: ViewInvalidator
    dashboard_path: str = "/dashboard"
    strategy: str = "credentials"


@dataclass(frozen=True)
class AuthenticationService(AuthenticateUseCase, LogoutUseCase):
    deps: AuthenticationDeps

    def authenticate(
        self, command: AuthenticateCommand
    ) -> Result[Redirect, AuthenticationError]:
        # only provider errors are classified; everything else propagates
        try:
            self.deps.identity.sign_in(self.deps.strategy, dict(command.form))
        except IdentityProviderError as exc:
            return Failure(_classify(exc))

        log.info("signed_in", strategy=self.deps.strategy)
        return Success(self.deps.redirector.redirect(self.deps.dashboard_path))

    def logout(self) -> None:
        self.deps.identity.sign_out()
        self.deps.invalidator.invalidate(self.deps.dashboard_path)
        log.info("signed_out")


def _classify(exc: IdentityProviderError) -> AuthenticationError:
    if exc.kind is AuthErrorKind.CREDENTIALS_SIGNIN:
        log.info("sign_in_rejected")
        return AuthenticationError(
            message=INVALID_CREDENTIALS_MESSAGE, kind=ErrorKind.INVALID_CREDENTIALS
        )
    log.warning("sign_in_failed", provider_error=exc.kind.value)
    return AuthenticationError(message=GENERIC_FAILURE_MESSAGE, kind=ErrorKind.AUTH_FAILURE)
