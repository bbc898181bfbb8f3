from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.constants import POLICY_KEY
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, mysql_time_to_hhmm
from .model import PolicySettings
from .repository import PolicyRepository

_COLUMNS = """
    enabled, deadline_time, half_day_threshold, enable_half_day,
    auto_mark_as_leave, exclude_weekends, notify_teachers, yearly_leave_limit
"""

# Column names double as the only identifiers interpolated into UPDATE.
_WRITABLE = (
    "enabled",
    "deadline_time",
    "half_day_threshold",
    "enable_half_day",
    "auto_mark_as_leave",
    "exclude_weekends",
    "notify_teachers",
    "yearly_leave_limit",
)


def _row_to_settings(r: dict) -> PolicySettings:
    return PolicySettings(
        enabled=bool(r["enabled"]),
        deadline_time=mysql_time_to_hhmm(r["deadline_time"]),
        half_day_threshold=mysql_time_to_hhmm(r["half_day_threshold"]),
        enable_half_day=bool(r["enable_half_day"]),
        auto_mark_as_leave=bool(r["auto_mark_as_leave"]),
        exclude_weekends=bool(r["exclude_weekends"]),
        notify_teachers=bool(r["notify_teachers"]),
        yearly_leave_limit=int(r["yearly_leave_limit"]),
    )


class MySQLPolicyRepository(PolicyRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, key: str = POLICY_KEY):
        self._conn_factory = conn_factory
        self._key = key

    def get(self) -> Optional[PolicySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_policy WHERE config_key=%s", (self._key,))
            r = fetchone(cur)
            return _row_to_settings(r) if r else None

    def create_default(self, defaults: PolicySettings) -> PolicySettings:
        with db_cursor(self._conn_factory) as (_, cur):
            # Concurrent first reads both land here; the unique key keeps one row.
            cur.execute(
                f"""
                INSERT INTO attendance_policy(config_key, {_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE config_key=config_key
                """,
                (
                    self._key,
                    int(defaults.enabled),
                    defaults.deadline_time,
                    defaults.half_day_threshold,
                    int(defaults.enable_half_day),
                    int(defaults.auto_mark_as_leave),
                    int(defaults.exclude_weekends),
                    int(defaults.notify_teachers),
                    int(defaults.yearly_leave_limit),
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_policy WHERE config_key=%s", (self._key,))
            return _row_to_settings(fetchone(cur))

    def save_fields(self, changes: Mapping[str, Any]) -> None:
        unknown = set(changes) - set(_WRITABLE)
        if unknown:
            raise ValueError(f"Not a policy column: {', '.join(sorted(unknown))}")
        if not changes:
            return

        names = [n for n in _WRITABLE if n in changes]
        params = [int(changes[n]) if isinstance(changes[n], bool) else changes[n] for n in names]
        assignments = ", ".join(f"{n}=%s" for n in names)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_policy SET {assignments} WHERE config_key=%s",
                (*params, self._key),
            )
