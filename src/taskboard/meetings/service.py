from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import date_filter_range, today_local
from ..common.validators import optional_minutes, optional_text, require_date, require_int, require_non_empty
from ..core.actor import Actor
from ..core.constants import DEFAULT_MEETING_STATUS, MEETING_DATE_FILTERS
from ..core.exceptions import NotFoundError, ValidationError
from .model import Meeting
from .repository import MEETING_FIELDS, MeetingRepository

logger = logging.getLogger(__name__)


def _clean(field: str, value: Any) -> Any:
    if field == "meeting_name":
        return require_non_empty(value, field)
    if field == "date":
        return require_date(value, field)
    if field == "time_in_mins":
        return optional_minutes(value, field)
    if field == "status":
        return require_non_empty(value, field)
    return optional_text(value)


class MeetingService:
    """A user's own meetings: create, edit and list them by date window."""

    def __init__(self, meetings: MeetingRepository):
        self._meetings = meetings

    def create_meeting(self, *, actor: Actor, data: Mapping[str, Any]) -> int:
        fields = {f: _clean(f, data.get(f)) for f in MEETING_FIELDS if f != "status"}
        fields["status"] = optional_text(data.get("status")) or DEFAULT_MEETING_STATUS

        meeting_id = self._meetings.create(user_id=actor.user_id, fields=fields)
        logger.info("user %s created meeting %s on %s", actor.user_id, meeting_id, fields["date"])
        return meeting_id

    def update_meeting(self, *, actor: Actor, meeting_id, data: Mapping[str, Any]) -> Meeting:
        mid = require_int(meeting_id, "meeting_id")
        fields = {f: _clean(f, data[f]) for f in MEETING_FIELDS if f in data}

        if not self._meetings.update(meeting_id=mid, owner_id=actor.user_id, fields=fields):
            raise NotFoundError("Meeting not found")
        meeting = self._meetings.get(meeting_id=mid, owner_id=actor.user_id)
        if meeting is None:
            raise NotFoundError("Meeting not found")
        return meeting

    def filter_meetings(
        self,
        *,
        actor: Actor,
        date_filter: Optional[str] = None,
        status: Optional[str] = None,
        custom_date=None,
        today: Optional[date] = None,
    ) -> Sequence[Meeting]:
        start = end = None
        if date_filter not in (None, "", "all"):
            if date_filter not in MEETING_DATE_FILTERS:
                raise ValidationError("Invalid date_filter")
            custom = require_date(custom_date, "custom_date") if date_filter == "custom" else None
            start, end = date_filter_range(date_filter, today=today or today_local(), custom_date=custom)

        wanted = optional_text(status)
        return self._meetings.list_for_user(
            user_id=actor.user_id,
            start=start,
            end=end,
            status=None if wanted == "all" else wanted,
        )
