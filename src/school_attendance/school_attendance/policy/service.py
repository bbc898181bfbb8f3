from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping, Optional

from ..common.validators import require_hhmm
from ..core.exceptions import ValidationError
from .model import PolicySettings, PolicyUpdate
from .repository import PolicyRepository

logger = logging.getLogger(__name__)

_TIME_FIELDS = {"deadline_time", "half_day_threshold"}
_BOOL_FIELDS = {"enabled", "enable_half_day", "auto_mark_as_leave", "exclude_weekends", "notify_teachers"}
_INT_FIELDS = {"yearly_leave_limit"}


class PolicyService:
    """Cached access to the policy row.

    Injected into every consumer instead of being looked up globally. The
    cache is filled lazily and dropped on every update.
    """

    def __init__(self, repository: PolicyRepository, *, defaults: Optional[PolicySettings] = None):
        self._repository = repository
        self._defaults = defaults or PolicySettings()
        self._cached: Optional[PolicySettings] = None

    def get(self) -> PolicySettings:
        cached = self._cached
        if cached is not None:
            return cached

        settings = self._repository.get()
        if settings is None:
            logger.info("No attendance policy stored, creating defaults")
            settings = self._repository.create_default(self._defaults)

        self._cached = settings
        return settings

    def invalidate(self) -> None:
        self._cached = None

    def update(self, changes: Mapping[str, Any]) -> PolicyUpdate:
        known = {f.name for f in fields(PolicySettings)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValidationError(f"Unknown setting(s): {', '.join(unknown)}")

        clean: dict[str, Any] = {}
        for name, value in changes.items():
            if name in _TIME_FIELDS:
                clean[name] = require_hhmm(value, name)
            elif name in _BOOL_FIELDS:
                if not isinstance(value, bool):
                    raise ValidationError(f"{name} must be true or false")
                clean[name] = value
            elif name in _INT_FIELDS:
                if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                    raise ValidationError(f"{name} must be a positive integer")
                clean[name] = value

        # Only the submitted columns are written so concurrent updates of
        # different fields both survive; the stored row is re-read afterwards.
        previous = self.get()
        if clean:
            self._repository.save_fields(clean)
        self.invalidate()
        updated = self.get()

        deadline_changed = updated.deadline_time != previous.deadline_time
        logger.info(
            "Attendance policy updated fields=%s deadline_changed=%s",
            sorted(clean),
            deadline_changed,
        )
        return PolicyUpdate(settings=updated, deadline_changed=deadline_changed)
