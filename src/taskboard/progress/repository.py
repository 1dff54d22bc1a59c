from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ProgressEntry


class ProgressRepository(Protocol):
    def add(
        self,
        *,
        task_id: int,
        task_name: str,
        user_id: int,
        history_date: date,
        status: str,
        created_by: int,
        time_spent: Optional[int] = None,
        remarks: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def list_for_task(self, *, task_id: int) -> Sequence[ProgressEntry]:
        """Entries of one task, newest first."""

        raise NotImplementedError

    def list_for_user_on(self, *, user_id: int, day: date) -> Sequence[ProgressEntry]:
        raise NotImplementedError
