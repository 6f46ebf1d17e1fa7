"""Reminder engine - the periodic tick that escalates overdue timers."""

import logging
from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

from telegram import Bot
from telegram.ext import ContextTypes
from telegram.helpers import mention_html

from worktimer.bot.notifier import send_message
from worktimer.engine.escalation import get_tier, reminder_message, should_remind
from worktimer.timers.errors import ChannelUnreachable
from worktimer.timers.store import TimerStore
from worktimer.utils.constants import NAMES_KEY, STORE_KEY

logger = logging.getLogger(__name__)


def default_mention(owner_id: int) -> str:
    return mention_html(owner_id, str(owner_id))


async def tick(
    bot: Bot,
    store: TimerStore,
    now: datetime | None = None,
    mention_for: Callable[[int], str] | None = None,
) -> int:
    """Scan all timers once and send the reminders that are due.

    For each timer past its deadline whose next tier is due:
    1. Sends the tier message to the owner's private chat
    2. Only after a successful send, bumps the reminder count

    A failed send leaves the timer as it was, so the next tick retries.

    Returns:
        Number of reminders sent
    """
    if now is None:
        now = datetime.now(ZoneInfo("UTC"))
    if mention_for is None:
        mention_for = default_mention

    timers = store.all()
    logger.debug(f"Checking reminders at {now.isoformat()} - active timers: {len(timers)}")

    sent = 0
    for timer in timers:
        try:
            if not should_remind(timer, now):
                continue

            tier = get_tier(timer.reminder_count)
            message = reminder_message(timer, mention_for(timer.owner_id))

            try:
                await send_message(bot, timer.private_channel_id, message)
            except ChannelUnreachable as e:
                logger.error(f"Failed to send reminder for {timer.owner_id}: {e}")
                # Don't update the timer, will retry next tick
                continue

            if store.record_reminder(timer, now) is None:
                logger.info(
                    f"Timer for {timer.owner_id} changed while its reminder was sent"
                )
                continue

            sent += 1
            logger.info(
                f"Sent reminder for {timer.owner_id} ({tier.name} tier, "
                f"count: {timer.reminder_count})"
            )

        except Exception as e:
            logger.error(f"Error processing timer for {timer.owner_id}: {e}")
            continue

    if sent:
        logger.info(f"Tick: {sent} reminders sent")
    return sent


async def reminder_job(context: ContextTypes.DEFAULT_TYPE) -> None:
    """Job callback for the reminder tick."""
    store: TimerStore = context.bot_data[STORE_KEY]
    names: dict[int, str] = context.bot_data.get(NAMES_KEY, {})

    def mention_for(owner_id: int) -> str:
        return mention_html(owner_id, names.get(owner_id, str(owner_id)))

    await tick(context.bot, store, mention_for=mention_for)
