"""
Domain errors raised by the progression services.

The HTTP layer maps them to status codes in ``lexiq.main``.
"""


class LexiqError(Exception):
    """Base class for progression engine errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LexiqError):
    """A referenced exercise, lesson or user does not exist."""

    status_code = 404


class ForbiddenError(LexiqError):
    """Submission against a locked lesson by a user who cannot bypass locks."""

    status_code = 403
