"""
Error taxonomy for the task planner.

Every failure surfaced by the core carries a machine-readable ``kind`` and a
human-readable message. The HTTP layer maps kinds to status codes:

- validation -> 400
- not_found  -> 404
- storage    -> 500
"""


class PlannerError(Exception):
    """Base class for all planner failures."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Structured form used in API error bodies."""
        return {"error": self.kind, "detail": self.message}


class ValidationError(PlannerError):
    """A required field is missing or a supplied value is invalid."""

    kind = "validation"


class NotFoundError(PlannerError):
    """The operation referenced a task id that does not exist."""

    kind = "not_found"


class StorageError(PlannerError):
    """The underlying SQLite database failed."""

    kind = "storage"
