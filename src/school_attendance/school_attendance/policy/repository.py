from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import PolicySettings


class PolicyRepository(Protocol):
    """Storage for the singleton policy row."""

    def get(self) -> Optional[PolicySettings]:
        raise NotImplementedError

    def create_default(self, defaults: PolicySettings) -> PolicySettings:
        """Insert defaults unless a row exists; return the stored row."""

        raise NotImplementedError

    def save_fields(self, changes: Mapping[str, Any]) -> None:
        """Write only the given columns of the stored row."""

        raise NotImplementedError
