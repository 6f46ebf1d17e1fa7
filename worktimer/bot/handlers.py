"""Command handlers."""

import logging
import math
from datetime import datetime
from html import escape
from typing import Any
from zoneinfo import ZoneInfo

from telegram import ChatPermissions, Update, User
from telegram.constants import ChatMemberStatus, ChatType
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from worktimer.bot.formatters import (
    format_assign_confirmation,
    format_help_message,
    format_panel,
    format_welcome_message,
)
from worktimer.bot.keyboards import owner_keyboard
from worktimer.bot.notifier import notify, set_send_permission
from worktimer.bot.panel import (
    PanelLocation,
    panel_refresh_job,
    refresh_panel,
    render_panel,
)
from worktimer.config import Config
from worktimer.engine.panel import derive_panel
from worktimer.timers.errors import InvalidDuration, Unauthorized, WorkTimerError
from worktimer.timers.models import AssignRequest
from worktimer.timers.store import TimerStore
from worktimer.utils.constants import (
    MAX_ASSIGN_HOURS,
    NAMES_KEY,
    PANEL_JOB_NAME,
    PANEL_KEY,
    STORE_KEY,
)
from worktimer.utils.time_utils import format_time_left

logger = logging.getLogger(__name__)

ASSIGN_USAGE = (
    "Usage: /assign <user_id> <hours> <private_chat_id> [minutes]\n"
    "or reply to the freelancer's message with: /assign <hours> <private_chat_id> [minutes]"
)


def remember_name(bot_data: dict[str, Any], user: User) -> None:
    """Keep the latest display name for a Telegram user."""
    bot_data.setdefault(NAMES_KEY, {})[user.id] = user.full_name


def _is_explicit_form(args: list[str]) -> bool:
    """Whether three arguments read as <user_id> <hours> <private_chat_id>.

    Group chat IDs are negative, so a negative third argument is a chat ID
    rather than a minute count. In forum topics every command is a reply,
    which makes this the only way to tell the two forms apart.
    """
    if len(args) != 3:
        return False
    try:
        int(args[0])
        return int(args[2]) < 0
    except ValueError:
        return False


def parse_assign_args(args: list[str], reply_user_id: int | None = None) -> AssignRequest:
    """Parse /assign arguments.

    Raises:
        ValueError: malformed arguments (caller shows usage)
        InvalidDuration: the timer would not run for any time
    """
    if reply_user_id is not None and len(args) in (2, 3) and not _is_explicit_form(args):
        owner_id = reply_user_id
        rest = args
    elif len(args) in (3, 4):
        owner_id = int(args[0])
        rest = args[1:]
    else:
        raise ValueError("wrong number of arguments")

    hours = float(rest[0])
    private_channel_id = int(rest[1])
    minutes = float(rest[2]) if len(rest) > 2 else 0.0

    if not (math.isfinite(hours) and math.isfinite(minutes)):
        raise ValueError("hours and minutes must be numbers")
    if hours < 0 or minutes < 0:
        raise InvalidDuration("Hours and minutes cannot be negative.")
    if hours + minutes / 60 > MAX_ASSIGN_HOURS:
        raise InvalidDuration(f"Timers can run for at most {MAX_ASSIGN_HOURS} hours.")

    request = AssignRequest(
        owner_id=owner_id,
        hours=hours,
        private_channel_id=private_channel_id,
        minutes=minutes,
    )
    if request.duration_hours <= 0:
        raise InvalidDuration()
    return request


async def ensure_admin(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Raise Unauthorized unless the sender may run admin commands."""
    user = update.effective_user
    chat = update.effective_chat
    if user is None:
        raise Unauthorized()

    if user.id in Config.ADMIN_USER_IDS:
        return

    if chat is not None and chat.type != ChatType.PRIVATE:
        try:
            member = await context.bot.get_chat_member(chat.id, user.id)
        except TelegramError as e:
            logger.warning(f"Could not check admin status of {user.id}: {e}")
        else:
            if member.status in (ChatMemberStatus.ADMINISTRATOR, ChatMemberStatus.OWNER):
                return

    raise Unauthorized("You need administrator permissions to use this command.")


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command."""
    if not update.effective_user or not update.message:
        return

    remember_name(context.bot_data, update.effective_user)
    await update.message.reply_html(format_welcome_message())


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command."""
    if not update.message:
        return

    await update.message.reply_html(format_help_message())


async def panel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /panel command - post the control panel in this chat."""
    if not update.effective_chat or not update.message:
        return

    try:
        await ensure_admin(update, context)
    except WorkTimerError as e:
        await update.message.reply_text(e.user_message)
        return

    chat = update.effective_chat

    # Only the bot posts in the panel chat
    if chat.type != ChatType.PRIVATE:
        try:
            await context.bot.set_chat_permissions(
                chat.id, ChatPermissions(can_send_messages=False)
            )
        except TelegramError as e:
            logger.warning(f"Could not lock panel chat {chat.id}: {e}")

    text, keyboard = render_panel(context.bot_data)
    message = await context.bot.send_message(
        chat_id=chat.id, text=text, parse_mode="HTML", reply_markup=keyboard
    )
    context.bot_data[PANEL_KEY] = PanelLocation(chat_id=chat.id, message_id=message.message_id)
    logger.info(f"Panel posted in chat {chat.id}")

    job_queue = context.job_queue
    if job_queue and not job_queue.get_jobs_by_name(PANEL_JOB_NAME):
        job_queue.run_repeating(
            panel_refresh_job,
            interval=Config.PANEL_REFRESH_INTERVAL,
            first=Config.PANEL_REFRESH_INTERVAL,
            name=PANEL_JOB_NAME,
        )
        logger.info(f"Panel refresh job scheduled (interval: {Config.PANEL_REFRESH_INTERVAL}s)")


async def resolve_name(context: ContextTypes.DEFAULT_TYPE, owner_id: int) -> str:
    """Best-effort display name for a user ID."""
    names: dict[int, str] = context.bot_data.setdefault(NAMES_KEY, {})
    if owner_id in names:
        return names[owner_id]

    try:
        chat = await context.bot.get_chat(owner_id)
    except TelegramError as e:
        logger.warning(f"Could not look up user {owner_id}: {e}")
        return str(owner_id)

    name = chat.full_name or chat.username or str(owner_id)
    names[owner_id] = name
    return name


async def assign_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /assign command - give a freelancer a work timer."""
    if not update.effective_user or not update.message:
        return

    try:
        await ensure_admin(update, context)
    except WorkTimerError as e:
        await update.message.reply_text(e.user_message)
        return

    reply_user = None
    if update.message.reply_to_message and update.message.reply_to_message.from_user:
        reply_user = update.message.reply_to_message.from_user
        remember_name(context.bot_data, reply_user)

    try:
        request = parse_assign_args(
            list(context.args or []), reply_user.id if reply_user else None
        )
    except InvalidDuration as e:
        await update.message.reply_text(e.user_message)
        return
    except ValueError:
        await update.message.reply_text(ASSIGN_USAGE)
        return

    store: TimerStore = context.bot_data[STORE_KEY]
    replaced = request.owner_id in store
    try:
        timer = store.assign(
            request.owner_id,
            request.hours,
            request.private_channel_id,
            minutes=request.minutes,
        )
    except InvalidDuration as e:
        await update.message.reply_text(e.user_message)
        return

    owner_name = await resolve_name(context, request.owner_id)
    logger.info(
        f"{update.effective_user.id} assigned {request.duration_hours:g}h to {request.owner_id}"
    )

    await update.message.reply_html(
        format_assign_confirmation(
            owner_name, request.hours, request.minutes, request.private_channel_id, replaced
        )
    )

    await notify(
        context.bot,
        timer.private_channel_id,
        f"🕒 You have been assigned a work timer of "
        f"{request.duration_hours:g} hours. Press Start Work when you begin.",
        reply_markup=owner_keyboard(request.owner_id),
    )

    location: PanelLocation | None = context.bot_data.get(PANEL_KEY)
    if location is None:
        await update.message.reply_text(
            "No main panel found. Please create one using the /panel command first."
        )
        return

    await refresh_panel(context.bot, context.bot_data)
    await set_send_permission(context.bot, location.chat_id, request.owner_id, False)


async def timers_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /timers command - list running timers."""
    if not update.message:
        return

    try:
        await ensure_admin(update, context)
    except WorkTimerError as e:
        await update.message.reply_text(e.user_message)
        return

    store: TimerStore = context.bot_data[STORE_KEY]
    names: dict[int, str] = context.bot_data.get(NAMES_KEY, {})
    timers = store.all()
    if not timers:
        await update.message.reply_text("No active timers.")
        return

    now = datetime.now(ZoneInfo("UTC"))
    entries = derive_panel(
        timers, now, name_for=lambda owner_id: names.get(owner_id, str(owner_id))
    )
    lines = [format_panel(entries, now), "", "<b>Deadlines</b>"]
    for timer, entry in zip(timers, entries):
        if entry.expired:
            status = f"overdue by {format_time_left(-timer.remaining(now))}"
        else:
            status = f"due in {entry.time_remaining}"
        lines.append(
            f"• {escape(entry.display_name)}: {status} "
            f"({timer.reminder_count} reminders sent)"
        )
    await update.message.reply_html("\n".join(lines))
