from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Meeting
from .repository import MEETING_FIELDS, MeetingRepository

_SELECT = """
    SELECT meeting_id, user_id, meeting_name, date, dept, co_person, time_in_mins,
           prop_slot, status, notes, created_at
    FROM meetings
"""


def _to_meeting(r: dict) -> Meeting:
    return Meeting(
        meeting_id=int(r["meeting_id"]),
        user_id=int(r["user_id"]),
        meeting_name=r["meeting_name"],
        date=r["date"],
        status=r["status"],
        dept=r.get("dept"),
        co_person=r.get("co_person"),
        time_in_mins=r.get("time_in_mins"),
        prop_slot=r.get("prop_slot"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
    )


def _columns(fields: Mapping[str, Any]) -> list[str]:
    return [c for c in MEETING_FIELDS if c in fields]


class MySQLMeetingRepository(MeetingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, fields: Mapping[str, Any]) -> int:
        cols = _columns(fields)
        sql = f"INSERT INTO meetings(user_id, {', '.join(cols)}) VALUES({', '.join(['%s'] * (len(cols) + 1))})"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(user_id), *[fields[c] for c in cols]))
            return int(cur.lastrowid)

    def get(self, *, meeting_id: int, owner_id: int) -> Optional[Meeting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE meeting_id=%s AND user_id=%s", (int(meeting_id), int(owner_id)))
            r = fetchone(cur)
            return _to_meeting(r) if r else None

    def update(self, *, meeting_id: int, owner_id: int, fields: Mapping[str, Any]) -> bool:
        cols = _columns(fields)
        if not cols:
            return self.get(meeting_id=meeting_id, owner_id=owner_id) is not None

        sql = f"UPDATE meetings SET {', '.join(f'{c}=%s' for c in cols)} WHERE meeting_id=%s AND user_id=%s"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (*[fields[c] for c in cols], int(meeting_id), int(owner_id)))
            return cur.rowcount > 0

    def list_for_user(
        self,
        *,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
    ) -> Sequence[Meeting]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start is not None:
            clauses.append("date>=%s")
            params.append(start)
        if end is not None:
            clauses.append("date<=%s")
            params.append(end)
        if status:
            clauses.append("status=%s")
            params.append(status)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE " + " AND ".join(clauses) + " ORDER BY date DESC, meeting_id DESC", tuple(params))
            return [_to_meeting(r) for r in fetchall(cur)]
