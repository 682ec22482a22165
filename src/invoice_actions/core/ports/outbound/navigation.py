from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Redirect:
    location: str


class Redirector(Protocol):
    def redirect(self, path: str) -> Redirect: ...


class ViewInvalidator(Protocol):
    """Fire-and-forget: marks the rendered view for a route as stale."""

    def invalidate(self, path: str) -> None: ...
