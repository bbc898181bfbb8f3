from __future__ import annotations

from typing import Protocol

from ..core.enums import AttendanceStatus


class NotificationSink(Protocol):
    def send(self, email: str, name: str, status: AttendanceStatus, message: str) -> bool:
        """Deliver one message. False means it was not sent (e.g. not configured)."""

        raise NotImplementedError
