"""Main entry point for the WorkTimer bot."""

import logging
import sys

from telegram.ext import Application, CallbackQueryHandler, CommandHandler

from worktimer.bot.callbacks import callback_router
from worktimer.bot.handlers import (
    assign_command,
    help_command,
    panel_command,
    start_command,
    timers_command,
)
from worktimer.config import Config
from worktimer.engine.reminder_engine import reminder_job
from worktimer.timers.store import TimerStore
from worktimer.utils.constants import NAMES_KEY, REMINDER_JOB_NAME, STORE_KEY
from worktimer.utils.error_handler import error_handler

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    stream=sys.stdout,
)

logger = logging.getLogger(__name__)


async def post_init(application: Application) -> None:
    """Initialize bot resources after application is created."""
    # State lives only as long as the process
    application.bot_data[STORE_KEY] = TimerStore()
    application.bot_data[NAMES_KEY] = {}

    job_queue = application.job_queue
    if job_queue:
        job_queue.run_repeating(
            reminder_job,
            interval=Config.TICK_INTERVAL,
            first=Config.TICK_INTERVAL,
            name=REMINDER_JOB_NAME,
        )
        logger.info(f"Reminder job scheduled (interval: {Config.TICK_INTERVAL}s)")
    else:
        logger.warning("No job queue available, reminders will not be sent")

    logger.info("WorkTimer initialized successfully")


async def post_shutdown(application: Application) -> None:
    """Report what was lost on shutdown."""
    store: TimerStore | None = application.bot_data.get(STORE_KEY)
    if store is not None and len(store):
        logger.warning(f"Shutting down with {len(store)} active timers (not persisted)")

    logger.info("WorkTimer shut down")


def main() -> None:
    """Start the bot."""
    # Validate configuration
    try:
        Config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    application = (
        Application.builder()
        .token(Config.TELEGRAM_BOT_TOKEN)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    # Commands
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("panel", panel_command))
    application.add_handler(CommandHandler("assign", assign_command))
    application.add_handler(CommandHandler("timers", timers_command))

    # Panel buttons
    application.add_handler(CallbackQueryHandler(callback_router))

    # Error handler
    application.add_error_handler(error_handler)

    logger.info("Starting WorkTimer bot...")
    application.run_polling(allowed_updates=["message", "callback_query"])


if __name__ == "__main__":
    main()
