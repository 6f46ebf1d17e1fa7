"""Message text formatters."""

from datetime import datetime
from html import escape
from zoneinfo import ZoneInfo

from worktimer.engine.panel import PanelEntry
from worktimer.timers.models import Timer
from worktimer.utils.time_utils import format_duration_hours, format_time_left

PANEL_INSTRUCTIONS = (
    "1. Admins assign timers using /assign\n"
    "2. Assigned freelancers can use the buttons below\n"
    "3. Countdown timers will appear here when assigned"
)


def format_panel(entries: list[PanelEntry], now: datetime | None = None) -> str:
    """Format the control panel message."""
    if now is None:
        now = datetime.now(ZoneInfo("UTC"))

    lines = [
        "🕒 <b>Work Timer Control Panel</b>",
        "",
        "This panel allows freelancers to manage their assigned work timers.",
        "",
    ]

    if entries:
        for entry in entries:
            remaining = (
                f"⏰ <b>{entry.time_remaining}</b>" if entry.expired else entry.time_remaining
            )
            lines.append(f"<b>{escape(entry.display_name)}'s Timer</b>")
            lines.append(f"⏱️ Time Remaining: {remaining}")
            lines.append(f"📅 Total Duration: {entry.total_duration}")
            lines.append("")
    else:
        lines.append(
            "⏱️ No active timers currently. Admins must assign timers to "
            "freelancers using the /assign command."
        )
        lines.append("")

    lines.append("<b>📋 Instructions</b>")
    lines.append(PANEL_INSTRUCTIONS)
    lines.append("")
    lines.append(f"<i>Updated {now.strftime('%H:%M:%S')} UTC</i>")
    return "\n".join(lines)


def format_assign_confirmation(
    owner_name: str, hours: float, minutes: float, channel_id: int, replaced: bool
) -> str:
    """Confirmation sent to the admin after /assign."""
    if minutes > 0:
        duration = f"{hours:g} hours and {minutes:g} minutes"
    else:
        duration = f"{hours:g} hours"

    text = (
        f"Timer assigned to <b>{escape(owner_name)}</b> for {duration}. "
        f"Private chat: <code>{channel_id}</code>"
    )
    if replaced:
        text += "\n\n⚠️ This replaced a timer that was still running."
    return text


def format_started_message(timer: Timer, now: datetime | None = None) -> str:
    """Notice posted to the private chat when work starts."""
    if now is None:
        now = datetime.now(ZoneInfo("UTC"))

    return (
        "⚡ <b>Work Timer Started</b>\n\n"
        "You have started your work timer!\n\n"
        f"⏱️ <b>Time Remaining:</b> {format_time_left(timer.remaining(now))}\n"
        f"📅 <b>Total Duration:</b> {format_duration_hours(timer.total_duration_hours)}\n\n"
        "Complete your work within the allocated time and press "
        "\"Complete Work\" when finished."
    )


def format_completed_message() -> str:
    """Notice posted to the private chat when work is completed."""
    return (
        "✅ <b>Work Completed</b>\n\n"
        "<b>Congratulations!</b> Your work has been marked as complete.\n\n"
        "<b>📋 Next Steps</b>\n"
        "1️⃣ Attach your completed work in this chat\n"
        "2️⃣ Upload the work to Trello\n"
        "3️⃣ Move the Trello card to the appropriate list\n\n"
        "🎉 Thank you for completing your work."
    )


def format_welcome_message() -> str:
    """Format the welcome message for /start."""
    return """
<b>Welcome to WorkTimer!</b> 🕒

Admins assign you a work timer. When the deadline passes without the work being
marked complete, I'll follow up in your private chat, more firmly each time.

Use the buttons on the control panel to start and complete your work.
/help - Full command list
""".strip()


def format_help_message() -> str:
    """Format the help message."""
    return """
<b>WorkTimer Commands 🕒</b>

<b>Admins:</b>
/panel - Post the control panel in this chat
/assign &lt;user_id&gt; &lt;hours&gt; &lt;private_chat_id&gt; [minutes] - Assign a timer
  (or reply to the freelancer's message with /assign &lt;hours&gt; &lt;private_chat_id&gt; [minutes])
/timers - List running timers

<b>Freelancers:</b>
⚡ Start Work - Start (or restart) your assigned timer
✅ Complete Work - Mark your work as complete

<b>Reminders:</b>
Once a deadline passes you get a reminder right away, then at 12, 24, 48, 72
and 96 hours overdue.
""".strip()
