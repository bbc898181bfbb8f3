from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Teacher:
    """Directory entry as seen by the attendance engine.

    Note: Accounts are owned by the host application; this is a read-only view.
    """

    teacher_id: int
    name: str
    employee_id: Optional[str]
    email: Optional[str]
    role: Role = Role.TEACHER
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.teacher_id,
            "name": self.name,
            "employeeId": self.employee_id,
            "email": self.email,
        }
