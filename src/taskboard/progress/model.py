from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class ProgressEntry:
    """A day's work logged against a self task.

    ``task_type`` is read from the task itself, when it still exists.
    """

    entry_id: int
    task_id: int
    task_name: str
    user_id: int
    history_date: date
    status: str
    created_by: int
    time_spent: Optional[int] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    task_type: Optional[str] = None
