"""In-memory timer store - the single owner of all timer state."""

import logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from worktimer.timers.errors import InvalidDuration, NotAssigned
from worktimer.timers.models import RetainedSettings, StartResult, Timer

logger = logging.getLogger(__name__)


class TimerStore:
    """Authoritative mapping of freelancers to timers, channels and settings.

    Holds at most one timer per owner. Channel bindings and retained
    settings outlive the timers they were recorded with, so a freelancer can
    restart the clock after completing work without a fresh assignment.

    Nothing here sends messages; operations return what the caller needs to
    notify the freelancer.
    """

    def __init__(self):
        self._timers: dict[int, Timer] = {}
        self._channels: dict[int, int] = {}
        self._settings: dict[int, RetainedSettings] = {}

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, owner_id: object) -> bool:
        return owner_id in self._timers

    # Mutations

    def assign(
        self,
        owner_id: int,
        hours: float,
        private_channel_id: int,
        *,
        minutes: float = 0,
        now: datetime | None = None,
    ) -> Timer:
        """Give an owner a new timer, replacing any running one.

        The duration is ``hours`` plus ``minutes``; both are kept so a later
        restart reproduces it.
        """
        if hours < 0 or minutes < 0:
            raise InvalidDuration("Hours and minutes cannot be negative.")

        duration_hours = hours + minutes / 60
        if duration_hours <= 0:
            raise InvalidDuration()

        if now is None:
            now = datetime.now(ZoneInfo("UTC"))

        try:
            end_time = now + timedelta(hours=hours, minutes=minutes)
        except OverflowError:
            raise InvalidDuration("Timer duration is too long.") from None

        previous = self._timers.get(owner_id)
        if previous is not None:
            logger.warning(
                f"Replacing running timer for {owner_id} "
                f"(was due {previous.end_time.isoformat()})"
            )

        timer = Timer(
            owner_id=owner_id,
            end_time=end_time,
            private_channel_id=private_channel_id,
            total_duration_hours=duration_hours,
        )

        self._channels[owner_id] = private_channel_id
        self._settings[owner_id] = RetainedSettings(
            hours=hours, minutes=minutes, total_duration_hours=duration_hours
        )
        self._timers[owner_id] = timer

        logger.info(f"Assigned {duration_hours:g}h timer to {owner_id}")
        return timer

    def start(self, owner_id: int, now: datetime | None = None) -> StartResult:
        """Start work for an owner.

        A running timer is returned untouched. Without one, a fresh timer is
        built from the owner's retained settings and channel binding.
        """
        timer = self._timers.get(owner_id)
        if timer is not None:
            return StartResult(timer=timer, created=False)

        settings = self._settings.get(owner_id)
        channel_id = self._channels.get(owner_id)
        if settings is None or channel_id is None:
            raise NotAssigned()

        if now is None:
            now = datetime.now(ZoneInfo("UTC"))

        timer = Timer(
            owner_id=owner_id,
            end_time=now + settings.duration,
            private_channel_id=channel_id,
            total_duration_hours=settings.total_duration_hours,
        )
        self._timers[owner_id] = timer

        logger.info(f"Restarted timer for {owner_id} from retained settings")
        return StartResult(timer=timer, created=True)

    def complete(self, owner_id: int) -> Timer:
        """Remove an owner's timer. Bindings and settings are kept."""
        timer = self._timers.pop(owner_id, None)
        if timer is None:
            raise NotAssigned("You do not have an active timer assigned to you.")

        logger.info(f"Timer completed for {owner_id}")
        return timer

    def record_reminder(self, timer: Timer, now: datetime) -> Timer | None:
        """Commit a sent reminder on a timer the scheduler read earlier.

        Returns None when that timer was completed or replaced since, so a
        successor timer never inherits its reminders.
        """
        if self._timers.get(timer.owner_id) is not timer:
            return None

        timer.reminder_count += 1
        if timer.last_reminder_time is None or now > timer.last_reminder_time:
            timer.last_reminder_time = now
        return timer

    # Queries

    def get(self, owner_id: int) -> Timer | None:
        return self._timers.get(owner_id)

    def all(self) -> list[Timer]:
        """Snapshot of all active timers."""
        return list(self._timers.values())

    def channel_for(self, owner_id: int) -> int | None:
        return self._channels.get(owner_id)

    def settings_for(self, owner_id: int) -> RetainedSettings | None:
        return self._settings.get(owner_id)
