from __future__ import annotations

import logging
from typing import Any, Sequence

from ..common.validators import require_date, require_int
from ..core.actor import Actor
from ..core.constants import DEFAULT_REQUEST_LIST_LIMIT
from ..core.enums import DeadlineAction, RequestStatus
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..tasks.model import Task, TaskRef
from ..tasks.repository import TaskRepository
from .model import DeadlineHistoryEntry, DeadlineRequest
from .repository import DeadlineRepository

logger = logging.getLogger(__name__)

DECISIONS = {
    "approved": RequestStatus.APPROVED,
    "rejected": RequestStatus.REJECTED,
}


def _require_fields(*values: Any) -> None:
    for v in values:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValidationError("Missing required fields")


class DeadlineRevisionService:
    """Deadline changes for both task kinds.

    Self tasks are pushed directly by their owner. Assigned tasks go through a
    request that the assigner approves or rejects. Every step appends one row
    to the deadline history; nothing in the history is ever updated.
    """

    def __init__(self, deadlines: DeadlineRepository, tasks: TaskRepository):
        self._deadlines = deadlines
        self._tasks = tasks

    # -------- Self tasks --------
    def revise_self_deadline(self, *, actor: Actor, task_id, new_deadline, reason) -> None:
        _require_fields(task_id, new_deadline, reason)
        ref = TaskRef.self_task(require_int(task_id, "task_id"))
        deadline = require_date(new_deadline, "new_deadline")

        task = self._tasks.get(ref, owner_id=actor.user_id)
        if not task:
            raise NotFoundError("Task not found")

        # History first: if this write fails the task is left untouched.
        self._deadlines.append_history(
            ref=ref,
            old_deadline=task.timeline,
            new_deadline=deadline,
            action=DeadlineAction.PUSHED,
            changed_by=actor.user_id,
            reason=str(reason).strip(),
        )

        # No transaction spans both writes; a failure here leaves the history row.
        try:
            updated = self._tasks.update_timeline(ref, deadline, owner_id=actor.user_id)
        except StoreError:
            logger.error("self task %s: history recorded but deadline update failed", ref.task_id)
            raise
        if not updated:
            logger.error("self task %s: history recorded but task row vanished", ref.task_id)
            raise StoreError("Failed to update deadline")

        logger.info("user %s pushed self task %s deadline %s -> %s", actor.user_id, ref.task_id, task.timeline, deadline)

    def self_history(self, *, actor: Actor, task_id) -> Sequence[DeadlineHistoryEntry]:
        ref = TaskRef.self_task(require_int(task_id, "task_id"))
        if not self._tasks.get(ref, owner_id=actor.user_id):
            raise NotFoundError("Task not found")
        return self._deadlines.list_history(ref=ref)

    # -------- Assigned tasks --------
    def request_master_deadline(self, *, actor: Actor, task_id, new_deadline, reason) -> int:
        _require_fields(task_id, new_deadline, reason)
        ref = TaskRef.master_task(require_int(task_id, "task_id"))
        deadline = require_date(new_deadline, "new_deadline")
        reason = str(reason).strip()

        task = self._tasks.get(ref)
        if not task:
            raise NotFoundError("Task not found")

        request_id = self._deadlines.create_request(
            task_id=ref.task_id,
            requested_by=actor.user_id,
            requested_deadline=deadline,
            reason=reason,
        )
        self._deadlines.append_history(
            ref=ref,
            old_deadline=task.timeline,
            new_deadline=deadline,
            action=DeadlineAction.REQUESTED,
            changed_by=actor.user_id,
            reason=reason,
        )
        logger.info("user %s requested deadline %s for task %s (request %s)", actor.user_id, deadline, ref.task_id, request_id)
        return request_id

    def review_master_deadline(self, *, actor: Actor, request_id, decision) -> RequestStatus:
        if request_id in (None, "") or not isinstance(decision, str) or decision not in DECISIONS:
            raise ValidationError("Invalid input")
        status = DECISIONS[decision]
        request_id = require_int(request_id, "request_id")

        req = self._deadlines.get_request(request_id=request_id)
        if not req:
            raise NotFoundError("Request not found")
        if req.status != RequestStatus.PENDING:
            raise ConflictError("Request already reviewed")

        ref = TaskRef.master_task(req.task_id)
        task = self._tasks.get(ref)
        if not task:
            raise NotFoundError("Task not found")
        if task.assigned_by != actor.user_id:
            raise AuthorizationError("Not authorized")

        # The conditional write is the real pending check; a concurrent reviewer
        # that got here first makes it match zero rows.
        if not self._deadlines.decide_request(request_id=request_id, status=status, reviewed_by=actor.user_id):
            raise ConflictError("Request already reviewed")

        if status == RequestStatus.APPROVED:
            self._apply_approved_deadline(req, task)

        self._deadlines.append_history(
            ref=ref,
            old_deadline=task.timeline,
            new_deadline=req.requested_deadline,
            action=DeadlineAction(status.value),
            changed_by=actor.user_id,
        )
        logger.info("user %s %s deadline request %s on task %s", actor.user_id, status.value, request_id, ref.task_id)
        return status

    def _apply_approved_deadline(self, req: DeadlineRequest, task: Task) -> None:
        try:
            updated = self._tasks.update_timeline(task.ref, req.requested_deadline)
        except StoreError:
            logger.error("request %s approved but task %s deadline update failed", req.request_id, task.task_id)
            raise
        if not updated:
            logger.error("request %s approved but task %s row vanished", req.request_id, task.task_id)
            raise StoreError("Failed to update deadline")

    def master_history(self, *, actor: Actor, task_id) -> Sequence[DeadlineHistoryEntry]:
        ref = TaskRef.master_task(require_int(task_id, "task_id"))
        task = self._tasks.get(ref)
        if not task:
            raise NotFoundError("Task not found")
        if task.assigned_by != actor.user_id:
            raise AuthorizationError("Not authorized")
        return self._deadlines.list_history(ref=ref)

    # -------- Request queues --------
    def list_pending_for_reviewer(self, *, actor: Actor) -> Sequence[DeadlineRequest]:
        return self._deadlines.list_requests(
            status=RequestStatus.PENDING,
            assigned_by=actor.user_id,
            limit=DEFAULT_REQUEST_LIST_LIMIT,
        )

    def list_my_requests(self, *, actor: Actor) -> Sequence[DeadlineRequest]:
        return self._deadlines.list_requests(requested_by=actor.user_id, limit=DEFAULT_REQUEST_LIST_LIMIT)
