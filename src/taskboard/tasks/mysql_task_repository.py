from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import TaskKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Task, TaskRef
from .repository import SELF_TASK_FIELDS, TaskRepository

_TABLE = {
    TaskKind.SELF: "self_tasks",
    TaskKind.MASTER: "master_tasks",
}

# Column identifying the user the task belongs to.
_OWNER_COLUMN = {
    TaskKind.SELF: "user_id",
    TaskKind.MASTER: "assigned_to",
}

_SELECT = {
    TaskKind.SELF: """
        SELECT task_id, user_id, task_name, task_type, date, timeline, time_in_mins, status
        FROM self_tasks
    """,
    TaskKind.MASTER: """
        SELECT task_id, assigned_by, assigned_to, task_name, date, timeline, status, remarks
        FROM master_tasks
    """,
}


def _to_task(kind: TaskKind, r: dict) -> Task:
    if kind == TaskKind.SELF:
        return Task(
            task_id=int(r["task_id"]),
            kind=kind,
            task_name=r["task_name"],
            owner_id=int(r["user_id"]),
            date=r["date"],
            timeline=r["timeline"],
            status=r["status"],
            task_type=r.get("task_type"),
            time_in_mins=r.get("time_in_mins"),
        )
    return Task(
        task_id=int(r["task_id"]),
        kind=kind,
        task_name=r["task_name"],
        owner_id=int(r["assigned_to"]),
        date=r["date"],
        timeline=r["timeline"],
        status=r["status"],
        assigned_by=int(r["assigned_by"]),
        remarks=r.get("remarks"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, ref: TaskRef, *, owner_id: Optional[int] = None) -> Optional[Task]:
        sql = _SELECT[ref.kind] + " WHERE task_id=%s"
        params: list[object] = [int(ref.task_id)]
        if owner_id is not None:
            sql += f" AND {_OWNER_COLUMN[ref.kind]}=%s"
            params.append(int(owner_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            if not r:
                return None
            return _to_task(ref.kind, r)

    def update_timeline(self, ref: TaskRef, new_deadline: date, *, owner_id: Optional[int] = None) -> bool:
        sql = f"UPDATE {_TABLE[ref.kind]} SET timeline=%s WHERE task_id=%s"
        params: list[object] = [new_deadline, int(ref.task_id)]
        if owner_id is not None:
            sql += f" AND {_OWNER_COLUMN[ref.kind]}=%s"
            params.append(int(owner_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return cur.rowcount > 0

    def create_self_task(
        self,
        *,
        user_id: int,
        task_name: str,
        task_date: date,
        timeline: date,
        status: str,
        task_type: Optional[str] = None,
        time_in_mins: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO self_tasks(user_id, task_name, task_type, date, timeline, time_in_mins, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), task_name, task_type, task_date, timeline, time_in_mins, status),
            )
            return int(cur.lastrowid)

    def create_master_task(
        self,
        *,
        assigned_by: int,
        assigned_to: int,
        task_name: str,
        task_date: date,
        timeline: date,
        status: str,
        remarks: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO master_tasks(assigned_by, assigned_to, task_name, date, timeline, status, remarks)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(assigned_by), int(assigned_to), task_name, task_date, timeline, status, remarks),
            )
            return int(cur.lastrowid)

    def list_self_tasks_on(self, *, user_id: int, day: date) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT[TaskKind.SELF] + " WHERE user_id=%s AND date=%s ORDER BY task_id",
                (int(user_id), day),
            )
            return [_to_task(TaskKind.SELF, r) for r in fetchall(cur)]

    def update_self_task(self, *, task_id: int, owner_id: int, fields: Mapping[str, Any]) -> bool:
        cols = [c for c in SELF_TASK_FIELDS if c in fields]
        if not cols:
            return self.get(TaskRef.self_task(task_id), owner_id=owner_id) is not None

        sql = f"UPDATE self_tasks SET {', '.join(f'{c}=%s' for c in cols)} WHERE task_id=%s AND user_id=%s"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (*[fields[c] for c in cols], int(task_id), int(owner_id)))
            return cur.rowcount > 0
