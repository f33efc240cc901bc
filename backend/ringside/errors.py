"""
Domain errors raised by the roster services.

Persistence failures (sqlalchemy.exc.*) are not wrapped; they propagate
to the caller unchanged.
"""


class RosterError(Exception):
    """Base class for match roster errors"""

    pass


class OverAssignmentError(RosterError):
    """Raised when more referees are attached to a match than its type allows"""

    def __init__(self, match_id, required: int, requested: int):
        self.match_id = match_id
        self.required = required
        self.requested = requested
        super().__init__(
            f"Too many referees for match {match_id}: requires {required}, got {requested}"
        )


class InvariantViolation(RosterError):
    """Raised when a write would leave a match or title in an inconsistent state"""

    def __init__(self, message: str, code: str = "INVARIANT_VIOLATION"):
        self.code = code
        self.message = message
        super().__init__(message)
