"""Tests for the panel button handlers."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from worktimer.bot.callbacks import callback_router
from worktimer.bot.panel import PanelLocation
from worktimer.timers.store import TimerStore
from worktimer.utils.constants import NAMES_KEY, PANEL_KEY, STORE_KEY

OWNER = 1001
CHANNEL = -5001


def make_context(store: TimerStore) -> MagicMock:
    context = MagicMock()
    context.bot_data = {STORE_KEY: store, NAMES_KEY: {}}
    context.bot.send_message = AsyncMock()
    context.bot.edit_message_text = AsyncMock()
    return context


def make_update(data: str, user_id: int = OWNER) -> MagicMock:
    update = MagicMock()
    update.effective_user.id = user_id
    update.effective_user.full_name = "Ada Lovelace"
    update.callback_query.data = data
    update.callback_query.answer = AsyncMock()
    return update


def press(data: str, context, user_id: int = OWNER) -> MagicMock:
    update = make_update(data, user_id)
    asyncio.run(callback_router(update, context))
    return update


def answer_text(update) -> str:
    return update.callback_query.answer.call_args.args[0]


def test_start_running_timer():
    """Test pressing start on a running timer reports it and posts the time left."""
    store = TimerStore()
    store.assign(OWNER, 2, CHANNEL)
    context = make_context(store)

    update = press("start:any", context)

    assert "already running" in answer_text(update)
    assert context.bot.send_message.call_args.kwargs["chat_id"] == CHANNEL
    assert "Work Timer Started" in context.bot.send_message.call_args.kwargs["text"]
    assert context.bot_data[NAMES_KEY][OWNER] == "Ada Lovelace"


def test_complete_then_restart():
    """Test completing work and starting again from retained settings."""
    store = TimerStore()
    store.assign(OWNER, 2, CHANNEL)
    context = make_context(store)

    update = press("complete:any", context)
    assert "complete" in answer_text(update)
    assert store.get(OWNER) is None
    assert "Work Completed" in context.bot.send_message.call_args.kwargs["text"]

    update = press("start:any", context)
    assert "Timer started" in answer_text(update)
    assert store.get(OWNER).reminder_count == 0


def test_complete_without_timer():
    """Test completing with nothing assigned is rejected privately."""
    store = TimerStore()
    context = make_context(store)

    update = press("complete:any", context)

    assert update.callback_query.answer.call_args.kwargs["show_alert"] is True
    assert "active timer" in answer_text(update)
    context.bot.send_message.assert_not_awaited()


def test_other_owner_rejected():
    """Test a freelancer cannot complete someone else's timer."""
    store = TimerStore()
    store.assign(OWNER, 2, CHANNEL)
    context = make_context(store)

    update = press(f"complete:{OWNER}", context, user_id=2002)

    assert "someone else" in answer_text(update)
    assert store.get(OWNER) is not None


def test_unassigned_button():
    """Test the placeholder buttons explain that nothing is assigned."""
    context = make_context(TimerStore())

    update = press("start:unassigned", context)

    assert "not been assigned" in answer_text(update)


def test_panel_refreshed_after_mutation():
    """Test the panel message is edited after a button press."""
    store = TimerStore()
    store.assign(OWNER, 2, CHANNEL)
    context = make_context(store)
    context.bot_data[PANEL_KEY] = PanelLocation(chat_id=-9000, message_id=12)

    press("complete:any", context)

    kwargs = context.bot.edit_message_text.call_args.kwargs
    assert kwargs["chat_id"] == -9000
    assert kwargs["message_id"] == 12
    assert "No active timers" in kwargs["text"]


def test_restart_from_panel_after_last_timer_completed():
    """Test the panel's placeholder buttons still restart from retained settings."""
    store = TimerStore()
    store.assign(OWNER, 2, CHANNEL)
    context = make_context(store)
    context.bot_data[PANEL_KEY] = PanelLocation(chat_id=-9000, message_id=12)

    press("complete:any", context)
    keyboard = context.bot.edit_message_text.call_args.kwargs["reply_markup"]
    start_data = keyboard.inline_keyboard[0][0].callback_data
    assert start_data == "start:unassigned"

    update = press(start_data, context)

    assert "Timer started" in answer_text(update)
    assert store.get(OWNER) is not None
    assert store.get(OWNER).private_channel_id == CHANNEL
