"""Constants and default values."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReminderTier:
    """One step of the overdue escalation, indexed by reminder count."""

    index: int
    name: str
    min_hours_overdue: float
    max_hours_overdue: float | None  # None = open ended
    template: str  # formatted with {mention}


# Tier k fires when a timer has had exactly k reminders and is inside the band
REMINDER_TIERS = [
    ReminderTier(
        0,
        "deadline_passed",
        0.0,
        None,
        "{mention} ⏳ Your deadline has passed. We have not received your submission "
        "or an update. If there is a delay, you need to make us aware of the reason "
        "and provide a specific updated timeline for delivery.",
    ),
    ReminderTier(
        1,
        "overdue_12h",
        12.0,
        24.0,
        "{mention} 🚨 12 hours overdue. We still haven't received your submission or "
        "an update. This must be addressed immediately. Let us know your status and "
        "when we can expect delivery.",
    ),
    ReminderTier(
        2,
        "overdue_24h",
        24.0,
        48.0,
        "{mention} ⚠️ 24 hours overdue. This delay is now affecting the project "
        "timeline, which is not acceptable. We need an immediate update with a firm "
        "delivery time.",
    ),
    ReminderTier(
        3,
        "overdue_48h",
        48.0,
        72.0,
        "{mention} ⏳ 48 hours overdue. This extended delay is causing significant "
        "issues. We need to know exactly when this will be delivered. A lack of "
        "communication will force us to take further action.",
    ),
    ReminderTier(
        4,
        "final_warning",
        72.0,
        96.0,
        "{mention} 🚨 72 hours overdue. This is the second-last reminder. If we do not "
        "receive a response in the next 24 hours, we will begin looking for another "
        "candidate to complete this task. Please respond with an immediate update.",
    ),
    ReminderTier(
        5,
        "final_decision",
        96.0,
        None,
        "{mention} ❗ Final Decision: 4 days overdue. Since we have not received an "
        "update, we will be moving forward with another candidate to complete this "
        "task. If you wish to discuss this further, reach out immediately, but we can "
        "no longer wait.",
    ),
]

# Longest timer an admin can assign
MAX_ASSIGN_HOURS = 24 * 365

# Callback data for the panel buttons
ACTION_START = "start"
ACTION_COMPLETE = "complete"
TARGET_ANY = "any"
TARGET_UNASSIGNED = "unassigned"

# bot_data keys
STORE_KEY = "store"
PANEL_KEY = "panel"
NAMES_KEY = "display_names"
PANEL_JOB_NAME = "panel_refresh"
REMINDER_JOB_NAME = "reminders"
