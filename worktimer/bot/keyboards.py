"""Inline keyboard builders."""

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from worktimer.bot.actions import PanelAction


def panel_keyboard(has_timers: bool) -> InlineKeyboardMarkup:
    """Keyboard for the control panel: Start Work, Complete Work.

    While no timer runs the placeholder variants are shown. They still act
    on the presser, who may restart from retained settings.
    """
    unassigned = not has_timers
    start = PanelAction(kind="start", unassigned=unassigned)
    complete = PanelAction(kind="complete", unassigned=unassigned)
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton("⚡ Start Work", callback_data=start.to_callback_data())],
            [
                InlineKeyboardButton(
                    "✅ Complete Work", callback_data=complete.to_callback_data()
                )
            ],
        ]
    )


def owner_keyboard(owner_id: int) -> InlineKeyboardMarkup:
    """Keyboard for a freelancer's private chat, bound to that freelancer."""
    start = PanelAction(kind="start", target_owner_id=owner_id)
    complete = PanelAction(kind="complete", target_owner_id=owner_id)
    return InlineKeyboardMarkup(
        [
            [
                InlineKeyboardButton("⚡ Start Work", callback_data=start.to_callback_data()),
                InlineKeyboardButton(
                    "✅ Complete Work", callback_data=complete.to_callback_data()
                ),
            ]
        ]
    )
