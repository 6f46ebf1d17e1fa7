"""Callback query handlers for the panel buttons."""

import logging

from telegram import Update
from telegram.ext import ContextTypes

from worktimer.bot.actions import (
    CompleteRequested,
    StartRequested,
    authorize_owner,
    decode_action,
    to_request,
)
from worktimer.bot.formatters import format_completed_message, format_started_message
from worktimer.bot.handlers import remember_name
from worktimer.bot.notifier import notify
from worktimer.bot.panel import refresh_panel
from worktimer.timers.errors import WorkTimerError
from worktimer.timers.store import TimerStore
from worktimer.utils.constants import STORE_KEY

logger = logging.getLogger(__name__)


async def handle_start(
    update: Update, context: ContextTypes.DEFAULT_TYPE, request: StartRequested
) -> None:
    """Handle 'Start Work' button press."""
    owner_id = authorize_owner(request)
    store: TimerStore = context.bot_data[STORE_KEY]

    result = store.start(owner_id)
    logger.info(
        f"Timer {'restarted' if result.created else 'already running'} for {owner_id}"
    )

    await notify(context.bot, result.timer.private_channel_id, format_started_message(result.timer))

    if result.created:
        answer = "⚡ Timer started! Good luck with your work! Check your private chat for details."
    else:
        answer = "⚡ Your timer is already running. Check your private chat for the time left."
    await update.callback_query.answer(answer, show_alert=True)  # type: ignore[union-attr]

    await refresh_panel(context.bot, context.bot_data)


async def handle_complete(
    update: Update, context: ContextTypes.DEFAULT_TYPE, request: CompleteRequested
) -> None:
    """Handle 'Complete Work' button press."""
    owner_id = authorize_owner(request)
    store: TimerStore = context.bot_data[STORE_KEY]

    timer = store.complete(owner_id)
    logger.info(f"Work completed by {owner_id}")

    await notify(context.bot, timer.private_channel_id, format_completed_message())
    await update.callback_query.answer("✅ Work marked as complete!", show_alert=True)  # type: ignore[union-attr]

    await refresh_panel(context.bot, context.bot_data)


async def callback_router(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Route callback queries to appropriate handlers."""
    if not update.callback_query or not update.effective_user:
        return

    query = update.callback_query
    action = decode_action(query.data)

    if action is None:
        await query.answer("Unknown action")
        return

    user = update.effective_user
    remember_name(context.bot_data, user)
    logger.info(f"Button interaction: {action.kind} pressed by {user.id}")

    try:
        request = to_request(action, user.id)
        if isinstance(request, StartRequested):
            await handle_start(update, context, request)
        else:
            await handle_complete(update, context, request)
    except WorkTimerError as e:
        logger.info(f"Rejected {action.kind} from {user.id}: {e}")
        await query.answer(e.user_message, show_alert=True)
