"""Panel state derivation - what the control panel shows for each timer."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable
from zoneinfo import ZoneInfo

from worktimer.timers.models import Timer
from worktimer.utils.time_utils import format_duration_hours, format_time_left


@dataclass(frozen=True)
class PanelEntry:
    """One timer row of the panel."""

    owner_id: int
    display_name: str
    time_remaining: str
    total_duration: str
    expired: bool


def derive_panel(
    timers: Iterable[Timer],
    now: datetime | None = None,
    name_for: Callable[[int], str] | None = None,
) -> list[PanelEntry]:
    """Build panel rows from the active timers. No side effects."""
    if now is None:
        now = datetime.now(ZoneInfo("UTC"))
    if name_for is None:
        name_for = str

    return [
        PanelEntry(
            owner_id=timer.owner_id,
            display_name=name_for(timer.owner_id),
            time_remaining=format_time_left(timer.remaining(now)),
            total_duration=format_duration_hours(timer.total_duration_hours),
            expired=timer.is_expired(now),
        )
        for timer in timers
    ]
