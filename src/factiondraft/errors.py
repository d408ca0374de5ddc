"""Error taxonomy for draft operations.

Every error raised by the domain layer is a DraftError. The API layer turns
them into HTTP responses using ``status_code``; nothing here is a server
fault, so all of them map to 4xx statuses.
"""


class DraftError(Exception):
    """Base class for rejected draft operations."""

    code = "draft_error"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON error body."""
        return {"code": self.code, "detail": self.message}


class ValidationError(DraftError):
    """Malformed or empty input."""

    code = "validation_error"
    status_code = 400


class ConfigurationError(DraftError):
    """Mode configuration without the base game."""

    code = "configuration_error"
    status_code = 400


class InsufficientPoolError(DraftError):
    """Not enough factions in the pool for the roster size."""

    code = "insufficient_pool"
    status_code = 400

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Not enough factions for draft: need {required}, got {available}.")
        self.required = required
        self.available = available


class NotFoundError(DraftError):
    """Unknown room code, or player not recognized by the room."""

    code = "not_found"
    status_code = 404


class ForbiddenError(DraftError):
    """Caller lacks permission for the operation."""

    code = "forbidden"
    status_code = 403


class InvalidStateError(DraftError):
    """Operation attempted in the wrong room status."""

    code = "invalid_state"
    status_code = 409


class ConflictError(DraftError):
    """Duplicate pick, or a write that kept losing to concurrent writers."""

    code = "conflict"
    status_code = 409


class StaleRoomError(Exception):
    """A compare-and-swap write found a newer version of the room.

    Raised by room stores and handled by the room manager; never surfaced
    to API callers.
    """

    def __init__(self, code: str, expected: int, actual: int | None) -> None:
        super().__init__(f"Room {code} changed: expected version {expected}, found {actual}")
        self.room_code = code
        self.expected = expected
        self.actual = actual
