from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict

import structlog

from invoice_actions.core.ports.outbound.navigation import ViewInvalidator

log = structlog.get_logger(__name__)


@dataclass
class InMemoryViewCache(ViewInvalidator):
    """Rendered output per route; a route is recomputed after invalidation.

    Each path carries a generation that ``invalidate`` bumps. A reader takes
    the generation before computing a view and hands it back to ``put``; the
    view is kept only if no invalidation happened in between.
    """

    _views: Dict[str, Any] = field(default_factory=dict)
    _generations: Dict[str, int] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, path: str) -> Any | None:
        with self._lock:
            return self._views.get(path)

    def generation(self, path: str) -> int:
        with self._lock:
            return self._generations.get(path, 0)

    def put(self, path: str, view: Any, generation: int) -> bool:
        with self._lock:
            if self._generations.get(path, 0) != generation:
                stored = False
            else:
                self._views[path] = view
                stored = True
        if not stored:
            log.debug("view_discarded", path=path, generation=generation)
        return stored

    def invalidate(self, path: str) -> None:
        with self._lock:
            dropped = self._views.pop(path, None) is not None
            self._generations[path] = self._generations.get(path, 0) + 1
        log.debug("view_invalidated", path=path, dropped=dropped)
