class ProgressionError(Exception):
    """Base exception for hunt progression errors."""

    pass


class ValidationError(ProgressionError):
    """Raised for a malformed team code, an empty team name or a bad digit."""

    pass


class NotFoundError(ProgressionError):
    """Raised when an operation references an id absent from the roster."""

    pass


class NoTeamSelectedError(NotFoundError):
    """Raised when an operation needs a selected team and none is selected."""

    pass


class BrokenReferenceError(ProgressionError):
    """Raised when the selected team is no longer present in the team roster."""

    pass
