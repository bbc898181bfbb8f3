from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus


def auto_mark_message(deadline: str) -> str:
    return (
        f"You did not mark your attendance today by {deadline}. "
        "It has been automatically marked as Leave. "
        "Please ensure to mark attendance on time in the future."
    )


@dataclass(frozen=True)
class Notification:
    """One queued message to a teacher; delivery is independent of the ledger write."""

    email: str
    name: str
    status: AttendanceStatus
    message: str
