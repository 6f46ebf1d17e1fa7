"""Control panel message tracking and refresh."""

import logging
from dataclasses import dataclass
from typing import Any

from telegram import Bot
from telegram.constants import ParseMode
from telegram.error import BadRequest, TelegramError
from telegram.ext import ContextTypes

from worktimer.bot.formatters import format_panel
from worktimer.bot.keyboards import panel_keyboard
from worktimer.engine.panel import derive_panel
from worktimer.timers.store import TimerStore
from worktimer.utils.constants import NAMES_KEY, PANEL_KEY, STORE_KEY

logger = logging.getLogger(__name__)


@dataclass
class PanelLocation:
    """Where the control panel message lives."""

    chat_id: int
    message_id: int


def render_panel(bot_data: dict[str, Any]) -> tuple[str, Any]:
    """Build the panel text and keyboard from the current store contents."""
    store: TimerStore = bot_data[STORE_KEY]
    names: dict[int, str] = bot_data.get(NAMES_KEY, {})

    timers = store.all()
    entries = derive_panel(timers, name_for=lambda owner_id: names.get(owner_id, str(owner_id)))
    return format_panel(entries), panel_keyboard(bool(timers))


async def refresh_panel(bot: Bot, bot_data: dict[str, Any]) -> None:
    """Edit the panel message in place. Failures are logged."""
    location: PanelLocation | None = bot_data.get(PANEL_KEY)
    if location is None:
        return

    text, keyboard = render_panel(bot_data)
    try:
        await bot.edit_message_text(
            chat_id=location.chat_id,
            message_id=location.message_id,
            text=text,
            parse_mode=ParseMode.HTML,
            reply_markup=keyboard,
        )
    except BadRequest as e:
        if "not modified" in str(e).lower():
            return
        logger.error(f"Error updating panel: {e}")
    except TelegramError as e:
        logger.error(f"Error updating panel: {e}")


async def panel_refresh_job(context: ContextTypes.DEFAULT_TYPE) -> None:
    """Job callback that keeps the panel countdowns current."""
    await refresh_panel(context.bot, context.bot_data)
