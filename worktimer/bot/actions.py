"""Inbound panel events, decoded once from callback data."""

from dataclasses import dataclass
from typing import Literal

from worktimer.timers.errors import Unauthorized
from worktimer.utils.constants import (
    ACTION_COMPLETE,
    ACTION_START,
    TARGET_ANY,
    TARGET_UNASSIGNED,
)

ActionKind = Literal["start", "complete"]


@dataclass(frozen=True)
class PanelAction:
    """A button press on the control panel."""

    kind: ActionKind
    target_owner_id: int | None = None  # None = whoever pressed it
    unassigned: bool = False  # Placeholder buttons shown while no timer runs

    def to_callback_data(self) -> str:
        if self.unassigned:
            target = TARGET_UNASSIGNED
        elif self.target_owner_id is None:
            target = TARGET_ANY
        else:
            target = str(self.target_owner_id)
        return f"{self.kind}:{target}"


@dataclass(frozen=True)
class StartRequested:
    requester_id: int
    target_owner_id: int | None = None


@dataclass(frozen=True)
class CompleteRequested:
    requester_id: int
    target_owner_id: int | None = None


OwnerRequest = StartRequested | CompleteRequested


def decode_action(data: str | None) -> PanelAction | None:
    """Parse callback data like "start:any" or "complete:12345".

    Returns None for anything that is not a panel action.
    """
    if not data:
        return None

    kind, _, target = data.partition(":")
    if kind not in (ACTION_START, ACTION_COMPLETE):
        return None

    if target == TARGET_UNASSIGNED:
        return PanelAction(kind=kind, unassigned=True)  # type: ignore[arg-type]
    if target in ("", TARGET_ANY):
        return PanelAction(kind=kind)  # type: ignore[arg-type]

    try:
        owner_id = int(target)
    except ValueError:
        return None
    return PanelAction(kind=kind, target_owner_id=owner_id)  # type: ignore[arg-type]


def to_request(action: PanelAction, requester_id: int) -> OwnerRequest:
    """Turn a button press into the owner-gated request it stands for.

    Placeholder buttons act like the shared ones: the panel can show them
    while a freelancer still has retained settings to restart from, so only
    the store decides whether anything is assigned.
    """
    if action.kind == ACTION_START:
        return StartRequested(requester_id, action.target_owner_id)
    return CompleteRequested(requester_id, action.target_owner_id)


def authorize_owner(request: OwnerRequest) -> int:
    """Return the owner the request acts on, or raise Unauthorized.

    Only the owner of a timer may start or complete it.
    """
    if request.target_owner_id is None:
        return request.requester_id
    if request.target_owner_id != request.requester_id:
        raise Unauthorized("This timer is assigned to someone else.")
    return request.requester_id
