"""Outbound calls to Telegram used by the timer logic."""

import logging

from telegram import Bot, ChatPermissions, InlineKeyboardMarkup, Message
from telegram.constants import ParseMode
from telegram.error import TelegramError

from worktimer.timers.errors import ChannelUnreachable

logger = logging.getLogger(__name__)


async def send_message(
    bot: Bot,
    channel_id: int,
    text: str,
    reply_markup: InlineKeyboardMarkup | None = None,
) -> Message:
    """Send an HTML message, raising ChannelUnreachable on failure."""
    try:
        return await bot.send_message(
            chat_id=channel_id,
            text=text,
            parse_mode=ParseMode.HTML,
            reply_markup=reply_markup,
        )
    except TelegramError as e:
        raise ChannelUnreachable(channel_id, str(e)) from e


async def notify(
    bot: Bot,
    channel_id: int,
    text: str,
    reply_markup: InlineKeyboardMarkup | None = None,
) -> bool:
    """Best-effort send. Failures are logged and swallowed."""
    try:
        await send_message(bot, channel_id, text, reply_markup)
        return True
    except ChannelUnreachable as e:
        logger.error(f"Failed to notify chat {channel_id}: {e}")
        return False


async def set_send_permission(
    bot: Bot, channel_id: int, user_id: int, can_send: bool
) -> bool:
    """Allow or forbid a member to post in a group chat."""
    try:
        await bot.restrict_chat_member(
            chat_id=channel_id,
            user_id=user_id,
            permissions=ChatPermissions(can_send_messages=can_send),
        )
        return True
    except TelegramError as e:
        logger.warning(
            f"Could not set send permission for {user_id} in chat {channel_id}: {e}"
        )
        return False
