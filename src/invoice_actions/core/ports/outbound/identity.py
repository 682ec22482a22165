from __future__ import annotations

from typing import Mapping, Protocol


class IdentityProvider(Protocol):
    def sign_in(self, strategy: str, credentials: Mapping[str, str]) -> None:
        """Raises IdentityProviderError on a classified failure."""
        ...

    def sign_out(self) -> None: ...
