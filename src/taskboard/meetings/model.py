from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Meeting:
    meeting_id: int
    user_id: int
    meeting_name: str
    date: date
    status: str
    dept: Optional[str] = None
    co_person: Optional[str] = None
    time_in_mins: Optional[int] = None
    prop_slot: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
