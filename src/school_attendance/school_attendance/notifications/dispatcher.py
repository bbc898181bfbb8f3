from __future__ import annotations

import logging
from typing import Iterable

from .model import Notification
from .sink import NotificationSink

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Sends queued notifications; one recipient's failure never stops the rest."""

    def __init__(self, sink: NotificationSink):
        self._sink = sink

    def dispatch(self, notifications: Iterable[Notification]) -> int:
        delivered = 0
        for n in notifications:
            try:
                if self._sink.send(n.email, n.name, n.status, n.message):
                    delivered += 1
            except Exception:
                logger.exception("Notification to %s failed", n.email)
        return delivered
