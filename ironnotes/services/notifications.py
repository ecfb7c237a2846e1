from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

log = logging.getLogger(__name__)

@dataclass(slots=True)
class PendingNotification:
    identifier: str
    fire_at: datetime
    title: str
    body: str

class Notifier(Protocol):
    """Deferred local notifications: schedule at an instant, cancel everything pending."""

    def schedule(self, fire_at: datetime, title: str, body: str, *, identifier: str) -> None: ...

    def cancel_all(self) -> None: ...

class InMemoryNotifier:
    """Keeps pending requests in a dict keyed by identifier; rescheduling replaces."""

    def __init__(self) -> None:
        self.pending: dict[str, PendingNotification] = {}

    def schedule(self, fire_at: datetime, title: str, body: str, *, identifier: str) -> None:
        self.pending[identifier] = PendingNotification(identifier, fire_at, title, body)

    def cancel_all(self) -> None:
        self.pending.clear()

    def due(self, now: datetime) -> list[PendingNotification]:
        return [n for n in self.pending.values() if n.fire_at <= now]

class LoggingNotifier(InMemoryNotifier):
    def schedule(self, fire_at: datetime, title: str, body: str, *, identifier: str) -> None:
        super().schedule(fire_at, title, body, identifier=identifier)
        log.info("notification %s scheduled for %s: %s", identifier, fire_at.isoformat(), title)

    def cancel_all(self) -> None:
        if self.pending:
            log.info("cancelled %d pending notification(s)", len(self.pending))
        super().cancel_all()
