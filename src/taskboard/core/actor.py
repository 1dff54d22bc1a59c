from __future__ import annotations

from dataclasses import dataclass

from .enums import Role


@dataclass(frozen=True)
class Actor:
    """The authenticated user on whose behalf a service call runs."""

    user_id: int
    role: Role
