from __future__ import annotations

from dataclasses import dataclass

from invoice_actions.core.ports.outbound.navigation import Redirect, Redirector


@dataclass(frozen=True)
class RouteRedirector(Redirector):
    root_path: str = ""

    def redirect(self, path: str) -> Redirect:
        return Redirect(location=f"{self.root_path.rstrip('/')}{path}")
