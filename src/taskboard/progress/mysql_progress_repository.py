from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ProgressEntry
from .repository import ProgressRepository

_SELECT = """
    SELECT h.id, h.task_id, h.task_name, h.user_id, h.history_date, h.time_spent,
           h.remarks, h.status, h.created_by, h.created_at, s.task_type
    FROM task_history h
    LEFT JOIN self_tasks s ON s.task_id = h.task_id
"""


def _to_entry(r: dict) -> ProgressEntry:
    return ProgressEntry(
        entry_id=int(r["id"]),
        task_id=int(r["task_id"]),
        task_name=r["task_name"],
        user_id=int(r["user_id"]),
        history_date=r["history_date"],
        status=r["status"],
        created_by=int(r["created_by"]),
        time_spent=r.get("time_spent"),
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
        task_type=r.get("task_type"),
    )


class MySQLProgressRepository(ProgressRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(
        self,
        *,
        task_id: int,
        task_name: str,
        user_id: int,
        history_date: date,
        status: str,
        created_by: int,
        time_spent: Optional[int] = None,
        remarks: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO task_history(task_id, task_name, user_id, history_date, time_spent, remarks, status, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(task_id), task_name, int(user_id), history_date, time_spent, remarks, status, int(created_by)),
            )
            return int(cur.lastrowid)

    def list_for_task(self, *, task_id: int) -> Sequence[ProgressEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE h.task_id=%s ORDER BY h.created_at DESC, h.id DESC", (int(task_id),))
            return [_to_entry(r) for r in fetchall(cur)]

    def list_for_user_on(self, *, user_id: int, day: date) -> Sequence[ProgressEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE h.user_id=%s AND h.history_date=%s ORDER BY h.id", (int(user_id), day))
            return [_to_entry(r) for r in fetchall(cur)]
