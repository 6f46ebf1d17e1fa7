"""Domain errors.

Each error carries a ``user_message`` that handlers send back privately to
whoever triggered it.
"""


class WorkTimerError(Exception):
    """Base class for errors surfaced to bot users."""

    user_message = "Something went wrong with your timer."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message)
        if message:
            self.user_message = message


class Unauthorized(WorkTimerError):
    """Requester is not allowed to perform the action."""

    user_message = "You are not allowed to do that."


class NotAssigned(WorkTimerError):
    """No timer (and, for start, no retained settings) for the owner."""

    user_message = (
        "You have not been assigned a timer yet. "
        "Please ask an administrator to assign you a timer."
    )


class InvalidDuration(WorkTimerError):
    """Assignment with a non-positive duration."""

    user_message = "Timer duration must be greater than zero."


class ChannelUnreachable(WorkTimerError):
    """Sending to a chat failed. Logged, never shown to users."""

    user_message = "Could not reach the private channel."

    def __init__(self, channel_id: int, reason: str = ""):
        self.channel_id = channel_id
        self.reason = reason
        Exception.__init__(self, f"Chat {channel_id} unreachable: {reason}")
