from __future__ import annotations

from datetime import date

import pytest

from fakes import InMemoryProgress, InMemoryTasks
from taskboard.core.actor import Actor
from taskboard.core.enums import Role
from taskboard.core.exceptions import NotFoundError, ValidationError
from taskboard.progress.service import ProgressService

MEMBER = Actor(user_id=5, role=Role.MEMBER)


def _setup():
    tasks = InMemoryTasks()
    progress = InMemoryProgress(tasks)
    return tasks, progress, ProgressService(progress, tasks)


def test_log_defaults_to_task_day_and_status():
    tasks, progress, svc = _setup()
    task = tasks.add_self_task(user_id=MEMBER.user_id, timeline=date(2024, 1, 9), task_date=date(2024, 1, 3))

    svc.log_progress(actor=MEMBER, task_id=task.task_id, time_spent="40", remarks="  drafted intro ")

    [entry] = progress.entries
    assert entry.history_date == date(2024, 1, 3)
    assert entry.status == "Pending"
    assert entry.time_spent == 40
    assert entry.remarks == "drafted intro"
    assert entry.task_name == task.task_name
    assert entry.created_by == MEMBER.user_id


def test_entries_come_back_newest_first():
    tasks, _, svc = _setup()
    task = tasks.add_self_task(user_id=MEMBER.user_id, timeline=date(2024, 1, 9))
    first = svc.log_progress(actor=MEMBER, task_id=task.task_id, history_date="2024-01-02")
    second = svc.log_progress(actor=MEMBER, task_id=task.task_id, history_date="2024-01-03", status="Done")

    entries = svc.task_progress(actor=MEMBER, task_id=task.task_id)

    assert [e.entry_id for e in entries] == [second, first]
    assert entries[0].status == "Done"


def test_other_users_task_is_not_found():
    tasks, progress, svc = _setup()
    task = tasks.add_self_task(user_id=99, timeline=date(2024, 1, 9))

    with pytest.raises(NotFoundError):
        svc.log_progress(actor=MEMBER, task_id=task.task_id)
    with pytest.raises(NotFoundError):
        svc.task_progress(actor=MEMBER, task_id=task.task_id)
    assert progress.entries == []


@pytest.mark.parametrize("payload", [{"time_spent": -10}, {"time_spent": 2.5}, {"history_date": "yesterday"}])
def test_bad_values_are_rejected(payload):
    tasks, progress, svc = _setup()
    task = tasks.add_self_task(user_id=MEMBER.user_id, timeline=date(2024, 1, 9))

    with pytest.raises(ValidationError):
        svc.log_progress(actor=MEMBER, task_id=task.task_id, **payload)
    assert progress.entries == []
