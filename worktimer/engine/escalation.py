"""Escalation tier logic for overdue timers."""

from datetime import datetime
from zoneinfo import ZoneInfo

from worktimer.timers.models import Timer
from worktimer.utils.constants import REMINDER_TIERS, ReminderTier


def get_tier(reminder_count: int) -> ReminderTier | None:
    """Get the tier the next reminder belongs to.

    Returns None once every tier has been sent; the timer then stays in the
    store without further reminders until it is completed or reassigned.
    """
    if 0 <= reminder_count < len(REMINDER_TIERS):
        return REMINDER_TIERS[reminder_count]
    return None


def in_band(tier: ReminderTier, hours_overdue: float) -> bool:
    """Check whether the overdue hours fall inside a tier's band."""
    if hours_overdue < tier.min_hours_overdue:
        return False
    return tier.max_hours_overdue is None or hours_overdue < tier.max_hours_overdue


def should_remind(timer: Timer, now: datetime | None = None) -> bool:
    """Check if a timer is due for its next reminder right now.

    The reminder count is the only index into the tier table: the first
    reminder fires as soon as the deadline passes, reminder k waits until
    the overdue hours enter band k. A missed band is not skipped over; the
    count simply stays put and no later tier can fire for that timer.

    Args:
        timer: The timer to check
        now: Current time (UTC), defaults to now

    Returns:
        True if a reminder should be sent
    """
    if now is None:
        now = datetime.now(ZoneInfo("UTC"))

    if not timer.is_expired(now):
        return False

    tier = get_tier(timer.reminder_count)
    if tier is None:
        return False

    if tier.index == 0:
        return True

    return in_band(tier, timer.hours_overdue(now))


def reminder_message(timer: Timer, mention: str) -> str:
    """Format the reminder text for the timer's next tier."""
    tier = get_tier(timer.reminder_count)
    if tier is None:
        raise ValueError(f"No reminder tier left for {timer.owner_id}")
    return tier.template.format(mention=mention)
