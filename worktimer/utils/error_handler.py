"""Global error handler for the bot."""

import logging
import traceback

from telegram import Update
from telegram.ext import ContextTypes

logger = logging.getLogger(__name__)


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle errors in the bot."""
    logger.error("Exception while handling an update:", exc_info=context.error)

    tb_list = traceback.format_exception(None, context.error, context.error.__traceback__)
    tb_string = "".join(tb_list)
    logger.error(f"Traceback:\n{tb_string}")

    if not isinstance(update, Update):
        return

    error_message = "😅 Oops! Something went wrong. The error has been logged, please try again."
    if "Timed out" in str(context.error) or "Timeout" in str(context.error):
        error_message = "⏱️ Request timed out. Please try again in a moment."

    try:
        if update.callback_query:
            await update.callback_query.answer(error_message, show_alert=True)
        elif update.effective_message:
            await update.effective_message.reply_text(error_message)
    except Exception as e:
        logger.error(f"Failed to send error message to user: {e}")
