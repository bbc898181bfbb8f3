from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Teacher


class TeacherDirectory(Protocol):
    """Read-only access to teacher identities."""

    def get(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Teacher]:
        """Active users with the teacher role."""

        raise NotImplementedError
