from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .deadlines.mysql_deadline_repository import MySQLDeadlineRepository
from .deadlines.repository import DeadlineRepository
from .deadlines.service import DeadlineRevisionService
from .meetings.mysql_meeting_repository import MySQLMeetingRepository
from .meetings.repository import MeetingRepository
from .meetings.service import MeetingService
from .progress.mysql_progress_repository import MySQLProgressRepository
from .progress.repository import ProgressRepository
from .progress.service import ProgressService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService


@dataclass(frozen=True)
class Container:
    tasks_repo: TaskRepository
    deadlines_repo: DeadlineRepository
    progress_repo: ProgressRepository
    meetings_repo: MeetingRepository

    task_service: TaskService
    deadline_service: DeadlineRevisionService
    progress_service: ProgressService
    meeting_service: MeetingService

    conn: Optional[DatabaseConnection] = None


def wire(
    tasks_repo: TaskRepository,
    deadlines_repo: DeadlineRepository,
    progress_repo: ProgressRepository,
    meetings_repo: MeetingRepository,
    *,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        tasks_repo=tasks_repo,
        deadlines_repo=deadlines_repo,
        progress_repo=progress_repo,
        meetings_repo=meetings_repo,
        task_service=TaskService(tasks_repo, progress_repo),
        deadline_service=DeadlineRevisionService(deadlines_repo, tasks_repo),
        progress_service=ProgressService(progress_repo, tasks_repo),
        meeting_service=MeetingService(meetings_repo),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        MySQLTaskRepository(conn),
        MySQLDeadlineRepository(conn),
        MySQLProgressRepository(conn),
        MySQLMeetingRepository(conn),
        conn=conn,
    )
