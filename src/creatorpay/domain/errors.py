"""Domain-specific exception classes for the creator compensation estimator."""

from creatorpay.domain.types import RecordState


class CreatorPayError(Exception):
    """Base class for all domain errors in creatorpay."""


class InvalidTransitionError(CreatorPayError):
    """Raised when an invalid record lifecycle transition is attempted.

    Attributes:
        current_state: The state the record was in when the transition was attempted.
        event: The event that was rejected.
    """

    def __init__(self, current_state: RecordState, event: str) -> None:
        self.current_state = current_state
        self.event = event
        super().__init__(
            f"Cannot apply event '{event}' in state '{current_state}'"
        )


class PersistenceError(CreatorPayError):
    """Raised when writing a collection to storage fails.

    Attributes:
        key: The storage key that could not be written.
    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to persist '{key}': {reason}")
