from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Task, TaskRef

# Editable columns of a self task. The timeline only moves through the deadline workflow.
SELF_TASK_FIELDS = ("task_name", "task_type", "date", "time_in_mins", "status")


class TaskRepository(Protocol):
    def get(self, ref: TaskRef, *, owner_id: Optional[int] = None) -> Optional[Task]:
        """Fetch a task; with ``owner_id`` the row must also belong to that user."""

        raise NotImplementedError

    def update_timeline(self, ref: TaskRef, new_deadline: date, *, owner_id: Optional[int] = None) -> bool:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def list_self_tasks_on(self, *, user_id: int, day: date) -> Sequence[Task]:
        raise NotImplementedError

    def update_self_task(self, *, task_id: int, owner_id: int, fields: Mapping[str, Any]) -> bool:
        """Overwrite the given ``SELF_TASK_FIELDS`` of a user's own task."""

        raise NotImplementedError
