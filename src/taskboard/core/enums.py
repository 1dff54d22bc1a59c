from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Organisation roles, as stored on the user profile."""

    MEMBER = "Member"
    HOD = "HOD"
    SUB_ADMIN = "Sub-Admin"
    ADMIN = "Admin"


class TaskKind(str, Enum):
    """Which table a task lives in."""

    SELF = "self"
    MASTER = "master"


class RequestStatus(str, Enum):
    """Deadline revision request lifecycle."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DeadlineAction(str, Enum):
    REQUESTED = "requested"
    APPROVED = "approved"
    REJECTED = "rejected"
    PUSHED = "pushed"
