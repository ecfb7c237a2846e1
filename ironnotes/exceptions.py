"""
Exceptions raised by the IronNotes core.
"""


class IronNotesError(Exception):
    """Base exception for all IronNotes errors."""
    pass


class ParseFailure(IronNotesError, ValueError):
    """Raised when shorthand set notation cannot be understood."""

    def __init__(self, text: str, reason: str):
        super().__init__(f"cannot parse {text!r}: {reason}")
        self.text = text
        self.reason = reason


class NotFoundError(IronNotesError, LookupError):
    """Raised when a requested session or exercise does not exist."""
    pass


class NotificationError(IronNotesError):
    """Raised by a notifier when a deferred notification cannot be scheduled."""
    pass
