from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import DeadlineAction, RequestStatus, TaskKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..tasks.model import TaskRef
from .model import DeadlineHistoryEntry, DeadlineRequest
from .repository import DeadlineRepository


def _to_request(r: dict) -> DeadlineRequest:
    return DeadlineRequest(
        request_id=int(r["id"]),
        task_id=int(r["task_id"]),
        requested_by=int(r["requested_by"]),
        requested_deadline=r["requested_deadline"],
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=r.get("created_at"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
    )


class MySQLDeadlineRepository(DeadlineRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Requests --------
    def create_request(
        self,
        *,
        task_id: int,
        requested_by: int,
        requested_deadline: date,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO task_deadline_requests(task_id, requested_by, requested_deadline, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(task_id), int(requested_by), requested_deadline, reason, RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_request(self, *, request_id: int) -> Optional[DeadlineRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, task_id, requested_by, requested_deadline, reason,
                       status, created_at, reviewed_by, reviewed_at
                FROM task_deadline_requests
                WHERE id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def decide_request(self, *, request_id: int, status: RequestStatus, reviewed_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE task_deadline_requests
                SET status=%s, reviewed_by=%s, reviewed_at=NOW()
                WHERE id=%s AND status=%s
                """,
                (status.value, int(reviewed_by), int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        requested_by: Optional[int] = None,
        assigned_by: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[DeadlineRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if requested_by is not None:
            clauses.append("r.requested_by=%s")
            params.append(int(requested_by))
        if assigned_by is not None:
            clauses.append("t.assigned_by=%s")
            params.append(int(assigned_by))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.id, r.task_id, r.requested_by, r.requested_deadline, r.reason,
                       r.status, r.created_at, r.reviewed_by, r.reviewed_at
                FROM task_deadline_requests r
                JOIN master_tasks t ON t.task_id = r.task_id
                WHERE {where}
                ORDER BY r.created_at DESC, r.id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_request(r) for r in fetchall(cur)]

    # -------- History --------
    def append_history(
        self,
        *,
        ref: TaskRef,
        old_deadline: Optional[date],
        new_deadline: date,
        action: DeadlineAction,
        changed_by: int,
        reason: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO task_deadline_history(
                    task_type, task_id, old_deadline, new_deadline, action, reason, changed_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    ref.kind.value,
                    int(ref.task_id),
                    old_deadline,
                    new_deadline,
                    action.value,
                    reason,
                    int(changed_by),
                ),
            )
            return int(cur.lastrowid)

    def list_history(self, *, ref: TaskRef) -> Sequence[DeadlineHistoryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, task_type, task_id, old_deadline, new_deadline,
                       action, reason, changed_by, changed_at
                FROM task_deadline_history
                WHERE task_type=%s AND task_id=%s
                ORDER BY changed_at ASC, id ASC
                """,
                (ref.kind.value, int(ref.task_id)),
            )
            return [
                DeadlineHistoryEntry(
                    entry_id=int(r["id"]),
                    task_type=TaskKind(r["task_type"]),
                    task_id=int(r["task_id"]),
                    old_deadline=r.get("old_deadline"),
                    new_deadline=r["new_deadline"],
                    action=DeadlineAction(r["action"]),
                    changed_by=int(r["changed_by"]),
                    changed_at=r["changed_at"],
                    reason=r.get("reason"),
                )
                for r in fetchall(cur)
            ]
