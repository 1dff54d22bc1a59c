from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Mapping, Optional

from ..common.datetime_utils import today_local
from ..common.validators import optional_minutes, optional_text, require_date, require_int, require_non_empty
from ..core.actor import Actor
from ..core.constants import LAST_WORKING_DAY_LOOKBACK_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..progress.repository import ProgressRepository
from .model import Task, TaskRef
from .repository import SELF_TASK_FIELDS, TaskRepository

logger = logging.getLogger(__name__)

ASSIGNER_ROLES = frozenset({Role.HOD, Role.SUB_ADMIN, Role.ADMIN})


class TaskService:
    def __init__(
        self,
        tasks: TaskRepository,
        progress: Optional[ProgressRepository] = None,
        *,
        lookback_days: int = LAST_WORKING_DAY_LOOKBACK_DAYS,
    ):
        self._tasks = tasks
        self._progress = progress
        self._lookback_days = int(lookback_days)

    def create_self_task(
        self,
        *,
        actor: Actor,
        task_name: str,
        task_date,
        timeline,
        status: str = "",
        task_type: Optional[str] = None,
        time_in_mins=None,
    ) -> int:
        name = require_non_empty(task_name, "task_name")
        start = require_date(task_date, "date")
        deadline = require_date(timeline, "timeline")
        minutes = optional_minutes(time_in_mins, "time_in_mins")

        return self._tasks.create_self_task(
            user_id=actor.user_id,
            task_name=name,
            task_date=start,
            timeline=deadline,
            status=(status or "").strip() or "Pending",
            task_type=(task_type or "").strip() or None,
            time_in_mins=minutes,
        )

    def assign_task(
        self,
        *,
        actor: Actor,
        assigned_to,
        task_name: str,
        task_date,
        timeline,
        status: str = "",
        remarks: Optional[str] = None,
    ) -> int:
        if actor.role not in ASSIGNER_ROLES:
            raise AuthorizationError("Only HOD, Sub-Admin or Admin can assign tasks")

        task_id = self._tasks.create_master_task(
            assigned_by=actor.user_id,
            assigned_to=require_int(assigned_to, "assigned_to"),
            task_name=require_non_empty(task_name, "task_name"),
            task_date=require_date(task_date, "date"),
            timeline=require_date(timeline, "timeline"),
            status=(status or "").strip() or "Pending",
            remarks=(remarks or "").strip() or None,
        )
        logger.info("user %s assigned task %s to user %s", actor.user_id, task_id, assigned_to)
        return task_id

    def get_self_task(self, *, actor: Actor, task_id: int) -> Task:
        task = self._tasks.get(TaskRef.self_task(task_id), owner_id=actor.user_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def update_self_task(self, *, actor: Actor, task_id: int, data: Mapping[str, Any]) -> Task:
        """Edit the actor's own self task.

        Moving the task to another ``date`` first records its current state in
        the progress log, so the day it was worked on keeps its entry.
        """
        task = self.get_self_task(actor=actor, task_id=task_id)
        if data.get("timeline") not in (None, "") and require_date(data["timeline"], "timeline") != task.timeline:
            raise ValidationError("Use /revise-self-deadline to change the timeline")

        fields: dict[str, Any] = {}
        for field in SELF_TASK_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if field == "task_name":
                fields[field] = require_non_empty(value, field)
            elif field == "date":
                fields[field] = require_date(value, field)
            elif field == "time_in_mins":
                fields[field] = optional_minutes(value, field)
            elif field == "status":
                fields[field] = require_non_empty(value, field)
            else:
                fields[field] = optional_text(value)

        if self._progress is not None and fields.get("date", task.date) != task.date:
            self._progress.add(
                task_id=task.task_id,
                task_name=task.task_name,
                user_id=task.owner_id,
                history_date=task.date,
                status=task.status,
                created_by=actor.user_id,
                time_spent=task.time_in_mins,
            )

        if not self._tasks.update_self_task(task_id=task.task_id, owner_id=actor.user_id, fields=fields):
            raise NotFoundError("Task not found")
        return self.get_self_task(actor=actor, task_id=task.task_id)

    def last_working_day(self, *, actor: Actor, today: Optional[date] = None) -> dict:
        """Find the most recent day before ``today`` on which the actor logged work.

        Scans back one day at a time, starting with yesterday, for at most
        ``lookback_days`` days. A day counts when it has self tasks dated on it
        or progress entries logged for it.
        """
        check = (today or today_local()) - timedelta(days=1)

        for days_back in range(1, self._lookback_days + 1):
            tasks = list(self._tasks.list_self_tasks_on(user_id=actor.user_id, day=check))
            progress = []
            if self._progress is not None:
                progress = list(self._progress.list_for_user_on(user_id=actor.user_id, day=check))
            if tasks or progress:
                return {
                    "tasks": tasks,
                    "progress": progress,
                    "date": check,
                    "found": True,
                    "days_back": days_back,
                }
            check -= timedelta(days=1)

        logger.debug("no working day in the last %s days for user %s", self._lookback_days, actor.user_id)
        return {
            "tasks": [],
            "date": None,
            "found": False,
            "message": f"No tasks found in last {self._lookback_days} days",
        }
