from __future__ import annotations

from datetime import date, datetime, timezone

from invoice_actions.core.ports.outbound.clock import Clock


class SystemClock(Clock):
    def today(self) -> date:
        return datetime.now(timezone.utc).date()
