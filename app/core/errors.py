"""Error taxonomy for workout-log operations.

Every error carries the message shown to the caller and the HTTP status the
API layer renders it with. Internal detail (which ownership check failed,
the driver error text) goes to the log, never into ``message``.
"""

from __future__ import annotations


class WorkoutLogError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(WorkoutLogError):
    """No caller identity could be resolved."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundOrUnauthorized(WorkoutLogError):
    """Record is missing or belongs to another user. Both look the same to the caller."""

    status_code = 404
    default_message = "Not found or unauthorized"

    def __init__(self, resource: str = "Record"):
        self.resource = resource
        super().__init__(f"{resource} not found or unauthorized")


class InvalidInput(WorkoutLogError):
    """Shape or range violation; carries the first violated field's message."""

    status_code = 422
    default_message = "Invalid input"


class HasDependentSets(WorkoutLogError):
    """A workout exercise still has logged sets and cannot be removed."""

    status_code = 409
    default_message = "Cannot delete exercise with existing sets. Delete all sets first."


class StorageFailure(WorkoutLogError):
    """Storage error. The message names the action only, never the driver error."""

    status_code = 500
    default_message = "Storage operation failed"

    def __init__(self, action: str | None = None):
        super().__init__(f"Failed to {action}" if action else None)
