from __future__ import annotations

from datetime import date

import pytest

from fakes import InMemoryDeadlines, InMemoryTasks
from taskboard.core.actor import Actor
from taskboard.core.enums import DeadlineAction, RequestStatus, Role, TaskKind
from taskboard.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from taskboard.deadlines.service import DeadlineRevisionService
from taskboard.tasks.model import TaskRef

OWNER = Actor(user_id=7, role=Role.MEMBER)
HOD = Actor(user_id=1, role=Role.HOD)
ASSIGNEE = Actor(user_id=2, role=Role.MEMBER)
OTHER_HOD = Actor(user_id=3, role=Role.HOD)


@pytest.fixture
def tasks():
    return InMemoryTasks()


@pytest.fixture
def deadlines(tasks):
    return InMemoryDeadlines(tasks)


@pytest.fixture
def svc(deadlines, tasks):
    return DeadlineRevisionService(deadlines, tasks)


@pytest.fixture
def master_task(tasks):
    return tasks.add_master_task(assigned_by=HOD.user_id, assigned_to=ASSIGNEE.user_id, timeline=date(2024, 1, 20))


def _request(svc, task, new_deadline="2024-02-01"):
    return svc.request_master_deadline(actor=ASSIGNEE, task_id=task.task_id, new_deadline=new_deadline, reason="blocked on vendor")


# -------- Self tasks --------
def test_owner_pushes_self_deadline_and_history_records_it(svc, tasks, deadlines):
    task = tasks.add_self_task(user_id=OWNER.user_id, timeline=date(2024, 1, 10))

    svc.revise_self_deadline(actor=OWNER, task_id=task.task_id, new_deadline="2024-01-15", reason="scope change")

    assert tasks.get(task.ref).timeline == date(2024, 1, 15)
    history = svc.self_history(actor=OWNER, task_id=task.task_id)
    assert len(history) == 1
    entry = history[0]
    assert entry.task_type == TaskKind.SELF
    assert entry.old_deadline == date(2024, 1, 10)
    assert entry.new_deadline == date(2024, 1, 15)
    assert entry.action == DeadlineAction.PUSHED
    assert entry.reason == "scope change"
    assert entry.changed_by == OWNER.user_id


@pytest.mark.parametrize(
    "payload",
    [
        {"task_id": None, "new_deadline": "2024-01-15", "reason": "x"},
        {"task_id": 1, "new_deadline": "", "reason": "x"},
        {"task_id": 1, "new_deadline": "2024-01-15", "reason": "   "},
    ],
)
def test_self_revision_requires_all_fields(svc, payload):
    with pytest.raises(ValidationError):
        svc.revise_self_deadline(actor=OWNER, **payload)


def test_self_revision_rejects_malformed_date(svc, tasks):
    task = tasks.add_self_task(user_id=OWNER.user_id, timeline=date(2024, 1, 10))
    with pytest.raises(ValidationError):
        svc.revise_self_deadline(actor=OWNER, task_id=task.task_id, new_deadline="15/01/2024", reason="x")


def test_self_revision_of_someone_elses_task_is_not_found(svc, tasks, deadlines):
    task = tasks.add_self_task(user_id=99, timeline=date(2024, 1, 10))

    with pytest.raises(NotFoundError):
        svc.revise_self_deadline(actor=OWNER, task_id=task.task_id, new_deadline="2024-01-15", reason="x")

    assert deadlines.history == []
    assert tasks.get(task.ref).timeline == date(2024, 1, 10)


def test_history_failure_leaves_self_task_untouched(svc, tasks, deadlines):
    task = tasks.add_self_task(user_id=OWNER.user_id, timeline=date(2024, 1, 10))
    deadlines.fail_history = True

    with pytest.raises(StoreError):
        svc.revise_self_deadline(actor=OWNER, task_id=task.task_id, new_deadline="2024-01-15", reason="x")

    assert tasks.updates == []
    assert tasks.get(task.ref).timeline == date(2024, 1, 10)


def test_task_update_failure_keeps_history_row(svc, tasks, deadlines):
    task = tasks.add_self_task(user_id=OWNER.user_id, timeline=date(2024, 1, 10))
    tasks.fail_update = True

    with pytest.raises(StoreError):
        svc.revise_self_deadline(actor=OWNER, task_id=task.task_id, new_deadline="2024-01-15", reason="x")

    assert [h.action for h in deadlines.history] == [DeadlineAction.PUSHED]
    assert tasks.get(task.ref).timeline == date(2024, 1, 10)


def test_self_history_is_empty_for_untouched_task(svc, tasks):
    task = tasks.add_self_task(user_id=OWNER.user_id, timeline=date(2024, 1, 10))
    assert list(svc.self_history(actor=OWNER, task_id=task.task_id)) == []


def test_self_history_hidden_from_non_owner(svc, tasks):
    task = tasks.add_self_task(user_id=OWNER.user_id, timeline=date(2024, 1, 10))
    with pytest.raises(NotFoundError):
        svc.self_history(actor=ASSIGNEE, task_id=task.task_id)


# -------- Assigned tasks: request --------
def test_assignee_request_creates_pending_request_and_history(svc, deadlines, tasks, master_task):
    rid = _request(svc, master_task)

    req = deadlines.get_request(request_id=rid)
    assert req.status == RequestStatus.PENDING
    assert req.requested_by == ASSIGNEE.user_id
    assert req.requested_deadline == date(2024, 2, 1)
    assert req.reviewed_by is None and req.reviewed_at is None

    [entry] = deadlines.history
    assert entry.task_type == TaskKind.MASTER
    assert entry.action == DeadlineAction.REQUESTED
    assert entry.old_deadline == date(2024, 1, 20)
    assert entry.new_deadline == date(2024, 2, 1)
    # A request never moves the deadline by itself.
    assert tasks.get(master_task.ref).timeline == date(2024, 1, 20)


def test_request_for_missing_task_is_not_found(svc, deadlines):
    with pytest.raises(NotFoundError):
        svc.request_master_deadline(actor=ASSIGNEE, task_id=404, new_deadline="2024-02-01", reason="x")
    assert deadlines.requests == {}


def test_request_requires_reason(svc, master_task):
    with pytest.raises(ValidationError):
        svc.request_master_deadline(actor=ASSIGNEE, task_id=master_task.task_id, new_deadline="2024-02-01", reason="")


# -------- Assigned tasks: review --------
def test_assigner_approval_moves_deadline(svc, deadlines, tasks, master_task):
    rid = _request(svc, master_task)

    status = svc.review_master_deadline(actor=HOD, request_id=rid, decision="approved")

    assert status == RequestStatus.APPROVED
    req = deadlines.get_request(request_id=rid)
    assert req.status == RequestStatus.APPROVED
    assert req.reviewed_by == HOD.user_id
    assert req.reviewed_at is not None
    assert tasks.get(master_task.ref).timeline == date(2024, 2, 1)
    assert [h.action for h in deadlines.history] == [DeadlineAction.REQUESTED, DeadlineAction.APPROVED]
    assert deadlines.history[-1].changed_by == HOD.user_id


def test_second_review_conflicts_and_changes_nothing(svc, deadlines, tasks, master_task):
    rid = _request(svc, master_task)
    svc.review_master_deadline(actor=HOD, request_id=rid, decision="approved")
    before = deadlines.get_request(request_id=rid)
    history_len = len(deadlines.history)

    with pytest.raises(ConflictError, match="Request already reviewed"):
        svc.review_master_deadline(actor=HOD, request_id=rid, decision="rejected")

    assert deadlines.get_request(request_id=rid) == before
    assert len(deadlines.history) == history_len
    assert tasks.get(master_task.ref).timeline == date(2024, 2, 1)


def test_rejection_never_touches_task(svc, deadlines, tasks, master_task):
    rid = _request(svc, master_task)

    status = svc.review_master_deadline(actor=HOD, request_id=rid, decision="rejected")

    assert status == RequestStatus.REJECTED
    assert deadlines.get_request(request_id=rid).status == RequestStatus.REJECTED
    assert tasks.updates == []
    assert tasks.get(master_task.ref).timeline == date(2024, 1, 20)
    assert deadlines.history[-1].action == DeadlineAction.REJECTED


@pytest.mark.parametrize("decision", ["approved", "rejected"])
def test_non_assigner_review_is_forbidden(svc, deadlines, master_task, decision):
    rid = _request(svc, master_task)

    with pytest.raises(AuthorizationError):
        svc.review_master_deadline(actor=OTHER_HOD, request_id=rid, decision=decision)

    assert deadlines.get_request(request_id=rid).status == RequestStatus.PENDING


@pytest.mark.parametrize("decision", [None, "", "APPROVED", "maybe", ["approved"]])
def test_invalid_decision_is_rejected_before_lookup(svc, decision):
    # Request 404 does not exist: validation must win over not-found.
    with pytest.raises(ValidationError):
        svc.review_master_deadline(actor=HOD, request_id=404, decision=decision)


def test_review_of_missing_request_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.review_master_deadline(actor=HOD, request_id=404, decision="approved")


def test_already_reviewed_is_checked_before_authorization(svc, master_task):
    rid = _request(svc, master_task)
    svc.review_master_deadline(actor=HOD, request_id=rid, decision="rejected")

    with pytest.raises(ConflictError):
        svc.review_master_deadline(actor=OTHER_HOD, request_id=rid, decision="approved")


def test_losing_a_review_race_is_a_conflict(svc, deadlines, tasks, master_task):
    rid = _request(svc, master_task)
    stale = deadlines.get_request(request_id=rid)
    # Another reviewer wins between our read and our write.
    deadlines.decide_request(request_id=rid, status=RequestStatus.REJECTED, reviewed_by=HOD.user_id)
    deadlines.get_request = lambda *, request_id: stale

    with pytest.raises(ConflictError):
        svc.review_master_deadline(actor=HOD, request_id=rid, decision="approved")

    assert tasks.updates == []
    assert deadlines.requests[rid].status == RequestStatus.REJECTED


def test_master_history_is_ordered_and_append_only(svc, deadlines, master_task):
    rid = _request(svc, master_task)
    first_read = list(svc.master_history(actor=HOD, task_id=master_task.task_id))

    svc.review_master_deadline(actor=HOD, request_id=rid, decision="approved")
    second_read = list(svc.master_history(actor=HOD, task_id=master_task.task_id))

    assert second_read[: len(first_read)] == first_read
    assert [h.action for h in second_read] == [DeadlineAction.REQUESTED, DeadlineAction.APPROVED]
    assert [h.changed_at for h in second_read] == sorted(h.changed_at for h in second_read)


def test_master_history_is_for_assigner_only(svc, master_task):
    with pytest.raises(AuthorizationError):
        svc.master_history(actor=ASSIGNEE, task_id=master_task.task_id)


def test_master_history_of_missing_task_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.master_history(actor=HOD, task_id=404)


# -------- Queues --------
def test_pending_queue_only_lists_reviewers_tasks(svc, tasks, master_task):
    foreign = tasks.add_master_task(assigned_by=OTHER_HOD.user_id, assigned_to=ASSIGNEE.user_id, timeline=date(2024, 1, 20))
    mine = _request(svc, master_task)
    _request(svc, foreign)
    done = _request(svc, master_task, new_deadline="2024-03-01")
    svc.review_master_deadline(actor=HOD, request_id=done, decision="rejected")

    pending = svc.list_pending_for_reviewer(actor=HOD)

    assert [r.request_id for r in pending] == [mine]


def test_requester_sees_rejected_status(svc, master_task):
    rid = _request(svc, master_task)
    svc.review_master_deadline(actor=HOD, request_id=rid, decision="rejected")

    [req] = svc.list_my_requests(actor=ASSIGNEE)

    assert req.request_id == rid
    assert req.status == RequestStatus.REJECTED
    assert svc.list_my_requests(actor=HOD) == []


def test_task_ref_kind_discriminates_tables(tasks):
    self_task = tasks.add_self_task(user_id=OWNER.user_id, timeline=date(2024, 1, 10))
    assert tasks.get(TaskRef.master_task(self_task.task_id)) is None
    assert tasks.get(self_task.ref) == self_task
