from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import TaskKind


@dataclass(frozen=True)
class TaskRef:
    """Points at a task in either task table.

    Self tasks and assigned ("master") tasks are stored separately but share
    the deadline workflow, so callers pass a ``TaskRef`` instead of a bare id.
    """

    kind: TaskKind
    task_id: int

    @classmethod
    def self_task(cls, task_id: int) -> "TaskRef":
        return cls(kind=TaskKind.SELF, task_id=int(task_id))

    @classmethod
    def master_task(cls, task_id: int) -> "TaskRef":
        return cls(kind=TaskKind.MASTER, task_id=int(task_id))


@dataclass(frozen=True)
class Task:
    """Read model common to both task kinds.

    ``owner_id`` is the self task's user or the master task's assignee;
    ``assigned_by`` is only set for master tasks.
    """

    task_id: int
    kind: TaskKind
    task_name: str
    owner_id: int
    date: date
    timeline: date
    status: str
    assigned_by: Optional[int] = None
    task_type: Optional[str] = None
    time_in_mins: Optional[int] = None
    remarks: Optional[str] = None

    @property
    def ref(self) -> TaskRef:
        return TaskRef(kind=self.kind, task_id=self.task_id)
