from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol

from returns.result import Result

from invoice_actions.core.domain.model.errors import AuthenticationError
from invoice_actions.core.ports.outbound.navigation import Redirect


@dataclass(frozen=True)
class AuthenticateCommand:
    form: Mapping[str, str]


class AuthenticateUseCase(Protocol):
    def authenticate(
        self, command: AuthenticateCommand
    ) -> Result[Redirect, AuthenticationError]:
        """Unclassified errors are raised, not wrapped."""
        ...


class LogoutUseCase(Protocol):
    def logout(self) -> None: ...
