from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a site account.

    Note: plain data object, no DB access here. ``points`` is only changed by attendance reconciliation.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    points: int = 0
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    user_id: int
    name: str
    points: int
