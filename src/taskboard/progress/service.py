from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_minutes, optional_text, require_date
from ..core.actor import Actor
from ..core.exceptions import NotFoundError
from ..tasks.model import Task, TaskRef
from ..tasks.repository import TaskRepository
from .model import ProgressEntry
from .repository import ProgressRepository

logger = logging.getLogger(__name__)


class ProgressService:
    """Daily progress log for self tasks; only the task's owner may read or write it."""

    def __init__(self, progress: ProgressRepository, tasks: TaskRepository):
        self._progress = progress
        self._tasks = tasks

    def _own_task(self, actor: Actor, task_id) -> Task:
        task = self._tasks.get(TaskRef.self_task(task_id), owner_id=actor.user_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def log_progress(
        self,
        *,
        actor: Actor,
        task_id: int,
        history_date=None,
        time_spent=None,
        remarks: Optional[str] = None,
        status: Optional[str] = None,
    ) -> int:
        task = self._own_task(actor, task_id)
        day = require_date(history_date, "history_date") if history_date not in (None, "") else task.date

        entry_id = self._progress.add(
            task_id=task.task_id,
            task_name=task.task_name,
            user_id=task.owner_id,
            history_date=day,
            status=optional_text(status) or task.status,
            created_by=actor.user_id,
            time_spent=optional_minutes(time_spent, "time_spent"),
            remarks=optional_text(remarks),
        )
        logger.info("user %s logged progress on task %s for %s", actor.user_id, task.task_id, day)
        return entry_id

    def task_progress(self, *, actor: Actor, task_id: int) -> Sequence[ProgressEntry]:
        task = self._own_task(actor, task_id)
        return self._progress.list_for_task(task_id=task.task_id)
