from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ResultDocument, SubjectMark
from .repository import ResultRepository


class MySQLResultRepository(ResultRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_uploader(self, teacher_id: int) -> Sequence[ResultDocument]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    r.result_id, r.uploaded_by, r.student_name, r.gr_number, r.standard,
                    r.academic_year, r.created_at,
                    rs.subject_name, rs.marks, rs.max_marks
                FROM results r
                LEFT JOIN result_subjects rs ON rs.result_id = r.result_id
                WHERE r.uploaded_by=%s
                ORDER BY r.result_id ASC, rs.subject_id ASC
                """,
                (int(teacher_id),),
            )
            rows = fetchall(cur)

        headers: dict[int, dict] = {}
        subjects: dict[int, list[SubjectMark]] = {}
        for r in rows:
            rid = int(r["result_id"])
            if rid not in headers:
                headers[rid] = r
                subjects[rid] = []
            if r.get("subject_name") is not None:
                subjects[rid].append(
                    SubjectMark(name=r["subject_name"], marks=float(r["marks"]), max_marks=float(r["max_marks"]))
                )

        return [
            ResultDocument(
                result_id=rid,
                uploaded_by=int(h["uploaded_by"]),
                student_name=h["student_name"],
                gr_number=h["gr_number"],
                standard=h["standard"],
                created_at=h["created_at"],
                academic_year=h.get("academic_year"),
                subjects=tuple(subjects[rid]),
            )
            for rid, h in headers.items()
        ]
