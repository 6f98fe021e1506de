from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Source of the current time for every "today"/"9 AM"/"5 PM" decision."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Local wall clock of the server."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock pinned to a settable instant.

    Note: Used by tests and by tooling that replays a day.
    """

    def __init__(self, current: datetime):
        self._current = current

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        self._current = current

    def advance(self, **kwargs) -> datetime:
        self._current = self._current + timedelta(**kwargs)
        return self._current
