"""Domain exceptions raised by the engine and the backend gateway.

The pricing and billing functions raise these to signal rejected operations.
Exception handlers in main.py translate them into the standard
error envelope: {"error": {"code": "...", "message": "..."}}. None of them
invalidates the caller's state; a rejected edit leaves the draft as it was.
"""


class DomainError(Exception):
    """Base class for all domain exceptions."""

    code = "domain_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when the backend does not know the requested entity."""

    code = "not_found"

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state."""

    code = "conflict"


class InvalidDateRangeError(DomainError):
    """Raised when a check-out date is not after the check-in date."""

    code = "invalid_date_range"


class ValidationFailedError(DomainError):
    """Raised for malformed input on a draft edit (custom item, discount)."""

    code = "validation_failed"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class RateUnavailableError(DomainError):
    """Raised when neither the monthly table nor the flat rate gives a price."""

    code = "rate_unavailable"

    def __init__(self, room_id: str, month: int) -> None:
        self.room_id = room_id
        self.month = month
        super().__init__(f"No nightly rate available for room {room_id} in month {month}")


class ImmutableLineItemError(ConflictError):
    """Raised when a protected line item is removed from a draft."""

    code = "immutable_line_item"

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        super().__init__(reason)


class InvoiceLockedError(ConflictError):
    """Raised when a cancelled invoice is edited."""

    code = "invoice_locked"


class RoomUnavailableError(ConflictError):
    """Raised when a stay extension runs into another booking of the same room."""

    code = "room_unavailable"


class BackendUnavailableError(Exception):
    """Raised when the backend collaborator cannot be reached or fails.

    Not a DomainError: nothing is wrong with the request itself, and the
    caller is expected to retry with the same draft.
    """

    code = "backend_unavailable"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
