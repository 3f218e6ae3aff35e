"""
Domain error taxonomy.

Services raise these at the point of detection; the API layer maps them to
HTTP responses through a single exception handler (see shareit.main).
None of them is retried: they are validation and business-rule failures.
"""

from fastapi import status


class ShareItError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ShareItError):
    """Unknown booking/user/item, or a booking the caller may not see."""
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(ShareItError):
    """Caller is known but is not the item owner."""
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(ShareItError):
    """Self-booking, unavailable item, or a status that cannot change."""
    status_code = status.HTTP_409_CONFLICT


class InvalidArgumentError(ShareItError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnsupportedStateError(ShareItError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, state: str):
        super().__init__(f"Unknown state: {state}")
        self.state = state


class CommentConsistencyError(ShareItError):
    """Author has no finished booking of the item."""
    status_code = status.HTTP_400_BAD_REQUEST
