"""Tests for the admin command handlers."""

import asyncio
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

import pytest
from telegram.constants import ChatType

from worktimer.bot.handlers import assign_command, timers_command
from worktimer.bot.panel import PanelLocation
from worktimer.config import Config
from worktimer.timers.store import TimerStore
from worktimer.utils.constants import NAMES_KEY, PANEL_KEY, STORE_KEY

ADMIN = 42
OWNER = 1001
CHANNEL = -5001


@pytest.fixture(autouse=True)
def admin(monkeypatch):
    monkeypatch.setattr(Config, "ADMIN_USER_IDS", frozenset({ADMIN}))


def make_context(store: TimerStore, args: list[str]) -> MagicMock:
    context = MagicMock()
    context.args = args
    context.bot_data = {STORE_KEY: store, NAMES_KEY: {}}
    context.bot.send_message = AsyncMock()
    context.bot.edit_message_text = AsyncMock()
    context.bot.restrict_chat_member = AsyncMock()
    context.bot.get_chat = AsyncMock(return_value=MagicMock(full_name="Ada Lovelace"))
    return context


def make_update(user_id: int = ADMIN) -> MagicMock:
    update = MagicMock()
    update.effective_user.id = user_id
    update.effective_chat.type = ChatType.PRIVATE
    update.message.reply_to_message = None
    update.message.reply_html = AsyncMock()
    update.message.reply_text = AsyncMock()
    return update


def run_assign(context, user_id: int = ADMIN) -> MagicMock:
    update = make_update(user_id)
    asyncio.run(assign_command(update, context))
    return update


def replies(update) -> list[str]:
    calls = update.message.reply_html.call_args_list + update.message.reply_text.call_args_list
    return [call.args[0] for call in calls]


def test_assign_notifies_freelancer():
    """Test the freelancer gets a notice with their own Start/Complete buttons."""
    store = TimerStore()
    context = make_context(store, [str(OWNER), "2", str(CHANNEL)])

    update = run_assign(context)

    assert store.get(OWNER).private_channel_id == CHANNEL
    assert "Ada Lovelace" in update.message.reply_html.call_args.args[0]

    kwargs = context.bot.send_message.call_args.kwargs
    assert kwargs["chat_id"] == CHANNEL
    assert "2 hours" in kwargs["text"]
    buttons = kwargs["reply_markup"].inline_keyboard[0]
    assert [b.callback_data for b in buttons] == [f"start:{OWNER}", f"complete:{OWNER}"]


def test_assign_reports_replaced_timer():
    """Test reassigning a running timer says so in the confirmation."""
    store = TimerStore()
    store.assign(OWNER, 5, CHANNEL)
    context = make_context(store, [str(OWNER), "1", str(CHANNEL), "30"])

    update = run_assign(context)

    assert "replaced a timer" in update.message.reply_html.call_args.args[0]
    assert store.get(OWNER).total_duration_hours == 1.5


def test_assign_without_panel_warns():
    """Test the admin is told to create a panel when none exists."""
    context = make_context(TimerStore(), [str(OWNER), "2", str(CHANNEL)])

    update = run_assign(context)

    assert "No main panel found" in update.message.reply_text.call_args.args[0]
    context.bot.edit_message_text.assert_not_awaited()
    context.bot.restrict_chat_member.assert_not_awaited()


def test_assign_mutes_freelancer_in_panel_chat():
    """Test the panel is refreshed and the freelancer muted in the panel chat."""
    context = make_context(TimerStore(), [str(OWNER), "2", str(CHANNEL)])
    context.bot_data[PANEL_KEY] = PanelLocation(chat_id=-9000, message_id=12)

    update = run_assign(context)

    assert context.bot.edit_message_text.call_args.kwargs["chat_id"] == -9000
    kwargs = context.bot.restrict_chat_member.call_args.kwargs
    assert kwargs["chat_id"] == -9000
    assert kwargs["user_id"] == OWNER
    assert kwargs["permissions"].can_send_messages is False
    assert not any("No main panel" in text for text in replies(update))


def test_assign_rejects_too_long_duration():
    """Test an enormous duration is refused without touching the store."""
    store = TimerStore()
    context = make_context(store, [str(OWNER), "1e10", str(CHANNEL)])

    update = run_assign(context)

    assert "at most" in update.message.reply_text.call_args.args[0]
    assert len(store) == 0
    context.bot.send_message.assert_not_awaited()


def test_assign_requires_admin():
    """Test non-admins cannot assign timers."""
    store = TimerStore()
    context = make_context(store, [str(OWNER), "2", str(CHANNEL)])

    update = run_assign(context, user_id=OWNER)

    assert "administrator" in update.message.reply_text.call_args.args[0]
    assert len(store) == 0


def test_timers_lists_deadlines():
    """Test /timers shows how far each timer is overdue or how long is left."""
    store = TimerStore()
    now = datetime.now(ZoneInfo("UTC"))
    store.assign(OWNER, 1, CHANNEL, now=now - timedelta(hours=3))
    store.assign(2002, 5, -6000, now=now)
    context = make_context(store, [])
    context.bot_data[NAMES_KEY] = {OWNER: "Ada", 2002: "Linus"}

    update = make_update()
    asyncio.run(timers_command(update, context))

    text = update.message.reply_html.call_args.args[0]
    assert "Ada: overdue by 0" in text
    assert "Linus: due in 04:" in text
    assert "(0 reminders sent)" in text
