from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import DeadlineAction, RequestStatus
from ..tasks.model import TaskRef
from .model import DeadlineHistoryEntry, DeadlineRequest


class DeadlineRepository(Protocol):
    # Requests
    def create_request(
        self,
        *,
        task_id: int,
        requested_by: int,
        requested_deadline: date,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get_request(self, *, request_id: int) -> Optional[DeadlineRequest]:
        raise NotImplementedError

    def decide_request(self, *, request_id: int, status: RequestStatus, reviewed_by: int) -> bool:
        """Move a pending request to ``status`` in one conditional write.

        Returns False when the request is missing or no longer pending.
        """

        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        requested_by: Optional[int] = None,
        assigned_by: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[DeadlineRequest]:
        raise NotImplementedError

    # History (append-only)
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
        raise NotImplementedError

    def list_history(self, *, ref: TaskRef) -> Sequence[DeadlineHistoryEntry]:
        """Entries for one task, oldest first."""

        raise NotImplementedError
