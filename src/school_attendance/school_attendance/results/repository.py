from __future__ import annotations

from typing import Protocol, Sequence

from .model import ResultDocument


class ResultRepository(Protocol):
    def find_by_uploader(self, teacher_id: int) -> Sequence[ResultDocument]:
        raise NotImplementedError
