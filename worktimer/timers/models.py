"""Data models."""

from dataclasses import dataclass
from datetime import datetime, timedelta

ONE_HOUR = timedelta(hours=1)


@dataclass
class Timer:
    """One active work assignment for a freelancer."""

    owner_id: int
    end_time: datetime  # UTC
    private_channel_id: int
    total_duration_hours: float
    reminder_count: int = 0
    last_reminder_time: datetime | None = None  # UTC

    def remaining(self, now: datetime) -> timedelta:
        """Time left until the deadline (negative once overdue)."""
        return self.end_time - now

    def is_expired(self, now: datetime) -> bool:
        return now >= self.end_time

    def hours_overdue(self, now: datetime) -> float:
        return (now - self.end_time) / ONE_HOUR


@dataclass
class RetainedSettings:
    """Duration an owner was last assigned, kept after the timer is gone."""

    hours: float
    minutes: float
    total_duration_hours: float

    @property
    def duration(self) -> timedelta:
        return timedelta(hours=self.hours, minutes=self.minutes)


@dataclass
class StartResult:
    """Outcome of a start request."""

    timer: Timer
    created: bool  # False when the timer was already running


@dataclass
class AssignRequest:
    """Admin request to give a freelancer a timer."""

    owner_id: int
    hours: float
    private_channel_id: int
    minutes: float = 0

    @property
    def duration_hours(self) -> float:
        return self.hours + self.minutes / 60
