from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Meeting

# Columns a meeting update may touch.
MEETING_FIELDS = ("meeting_name", "date", "dept", "co_person", "time_in_mins", "prop_slot", "status", "notes")


class MeetingRepository(Protocol):
    def create(self, *, user_id: int, fields: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def get(self, *, meeting_id: int, owner_id: int) -> Optional[Meeting]:
        raise NotImplementedError

    def update(self, *, meeting_id: int, owner_id: int, fields: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def list_for_user(
        self,
        *,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
    ) -> Sequence[Meeting]:
        """Meetings of one user, optionally within ``[start, end]`` and with one status."""

        raise NotImplementedError
