"""Shared pytest fixtures: small record collections used across query tests."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List

import pytest

from rowquery.core.records import BaseRecord


class User(BaseRecord):
    """User record with a method that must never count as a data field."""

    id: str
    email: str
    permissions_level: int
    permissions: Dict[str, bool]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def is_admin(self) -> bool:
        return self.permissions_level == 0


@dataclass
class Coord:
    x: int
    y: int


TODAY = datetime(2024, 3, 15, 12, 0, 0)
YESTERDAY = TODAY - timedelta(days=1)
DAY_BEFORE_YESTERDAY = TODAY - timedelta(days=2)


@pytest.fixture
def users() -> List[User]:
    """Three users: ids '1', '2', '3'; user '3' is the only admin."""
    return [
        User(
            id="1",
            email="abc@gmail.com",
            permissions_level=1,
            permissions={"remember_me": True, "send_notifications": False},
            is_active=True,
            created_at=YESTERDAY,
            updated_at=YESTERDAY,
        ),
        User(
            id="2",
            email="ghi@gmail.com",
            permissions_level=3,
            permissions={"remember_me": True, "send_notifications": False},
            is_active=False,
            created_at=DAY_BEFORE_YESTERDAY,
            updated_at=DAY_BEFORE_YESTERDAY,
        ),
        User(
            id="3",
            email="def@gmail.com",
            permissions_level=0,
            permissions={"remember_me": False, "send_notifications": True},
            is_active=True,
            created_at=TODAY,
            updated_at=TODAY,
        ),
    ]


@pytest.fixture
def coords() -> List[Coord]:
    return [
        Coord(2, 2),
        Coord(1, 4),
        Coord(2, 3),
        Coord(1, 1),
        Coord(1, 3),
        Coord(1, 2),
        Coord(2, 4),
        Coord(2, 1),
    ]


@pytest.fixture
def user_dicts(users) -> List[dict]:  # pylint: disable=redefined-outer-name
    """The same users as plain JSON-like dicts (dates as ISO strings)."""
    out = []
    for user in users:
        record = user.to_dict()
        record["created_at"] = record["created_at"].isoformat()
        record["updated_at"] = record["updated_at"].isoformat()
        out.append(record)
    return out
