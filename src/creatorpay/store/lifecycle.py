"""Creator record lifecycle: transition map and per-record state machine."""

from __future__ import annotations

from enum import StrEnum

from creatorpay.domain.errors import InvalidTransitionError
from creatorpay.domain.types import RecordState


class RecordEvent(StrEnum):
    """Events that can trigger record lifecycle transitions."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# All valid (current_state, event_string) -> next_state mappings.
# Any pair not in this dict is an invalid transition.
TRANSITIONS: dict[tuple[RecordState, str], RecordState] = {
    (RecordState.ABSENT, RecordEvent.CREATE): RecordState.SAVED,
    (RecordState.SAVED, RecordEvent.UPDATE): RecordState.EDITED,
    (RecordState.SAVED, RecordEvent.DELETE): RecordState.DELETED,
    (RecordState.EDITED, RecordEvent.UPDATE): RecordState.EDITED,
    (RecordState.EDITED, RecordEvent.DELETE): RecordState.DELETED,
}

# States that reject all events -- no outgoing transitions allowed.
TERMINAL_STATES: frozenset[RecordState] = frozenset({RecordState.DELETED})


class RecordLifecycle:
    """Finite state machine for one creator record.

    Usage::

        lc = RecordLifecycle()
        lc.trigger("create")   # -> SAVED
        lc.trigger("update")   # -> EDITED
        lc.trigger("delete")   # -> DELETED (terminal)
    """

    def __init__(self, initial_state: RecordState = RecordState.ABSENT) -> None:
        self._state: RecordState = initial_state
        self._history: list[tuple[RecordState, str, RecordState]] = []

    @property
    def state(self) -> RecordState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Return True if the record has been deleted."""
        return self._state in TERMINAL_STATES

    @property
    def history(self) -> list[tuple[RecordState, str, RecordState]]:
        """Return a copy of the ``(from_state, event, to_state)`` history."""
        return list(self._history)

    def can_trigger(self, event: str) -> bool:
        """Return True if *event* is valid from the current state."""
        return not self.is_terminal and (self._state, event) in TRANSITIONS

    def trigger(self, event: str) -> RecordState:
        """Apply an event to the current state and transition.

        Args:
            event: The event string (e.g. ``"update"``).

        Returns:
            The new state after the transition.

        Raises:
            InvalidTransitionError: If the transition is not allowed from
                the current state, or if the record is deleted.
        """
        if not self.can_trigger(event):
            raise InvalidTransitionError(self._state, event)

        old_state = self._state
        new_state = TRANSITIONS[(old_state, event)]
        self._history.append((old_state, event, new_state))
        self._state = new_state
        return new_state
