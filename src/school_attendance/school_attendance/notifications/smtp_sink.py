from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotificationError
from .sink import NotificationSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmtpSettings:
    host: Optional[str]
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = True
    mail_from: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.user and self.password)


class SmtpNotificationSink(NotificationSink):
    def __init__(self, settings: SmtpSettings, *, timeout: float = 15.0):
        self._settings = settings
        self._timeout = timeout

    def send(self, email: str, name: str, status: AttendanceStatus, message: str) -> bool:
        s = self._settings
        if not s.is_configured:
            logger.warning("SMTP is not configured, skipping notification to %s", email)
            return False

        msg = EmailMessage()
        msg["Subject"] = f"Attendance auto-marked as {status.value}"
        msg["From"] = s.mail_from or s.user
        msg["To"] = email
        msg.set_content(f"Dear {name},\n\n{message}\n")

        try:
            with smtplib.SMTP(s.host, s.port, timeout=self._timeout) as server:
                if s.use_tls:
                    server.starttls()
                server.login(s.user, s.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Failed to send email to {email}: {e}") from e

        return True
