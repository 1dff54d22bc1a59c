from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import DeadlineAction, RequestStatus, TaskKind


@dataclass(frozen=True)
class DeadlineRequest:
    """A request by an assignee to move the deadline of an assigned task."""

    request_id: int
    task_id: int
    requested_by: int
    requested_deadline: date
    reason: str
    status: RequestStatus
    created_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None


@dataclass(frozen=True)
class DeadlineHistoryEntry:
    """One row of the append-only deadline audit trail."""

    entry_id: int
    task_type: TaskKind
    task_id: int
    old_deadline: Optional[date]
    new_deadline: date
    action: DeadlineAction
    changed_by: int
    changed_at: datetime
    reason: Optional[str] = None
