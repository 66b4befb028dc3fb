"""Builder lifecycle state machine."""

from enum import Enum, auto
from typing import ClassVar

from serfig.errors import SerfigError


class BuilderState(Enum):
    """Builder lifecycle states.

    State transitions:
        COLLECTING -> BUILT: A build has been started; the builder is consumed
    """

    COLLECTING = auto()
    BUILT = auto()


class BuilderStateError(SerfigError):
    """Raised when an invalid state transition is attempted."""

    def __init__(
        self,
        from_state: BuilderState,
        to_state: BuilderState,
        action: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state, or the state the action
                requires.
            action: Name of the rejected builder operation, if any.
        """
        self.from_state = from_state
        self.to_state = to_state
        self.action = action
        if action is None:
            message = (
                f"Invalid state transition: {from_state.name} -> {to_state.name}"
            )
        else:
            message = (
                f"Cannot {action}: builder is {from_state.name}, "
                f"requires {to_state.name}"
            )
        super().__init__(message)


class BuilderStateMachine:
    """State machine for a builder.

    A builder accepts sources while COLLECTING and is consumed by its
    first build.
    """

    VALID_TRANSITIONS: ClassVar[dict[BuilderState, set[BuilderState]]] = {
        BuilderState.COLLECTING: {BuilderState.BUILT},
        BuilderState.BUILT: set(),  # Terminal state
    }

    def __init__(self) -> None:
        """Initialize the state machine in COLLECTING state."""
        self._state = BuilderState.COLLECTING

    @property
    def state(self) -> BuilderState:
        """Get the current state."""
        return self._state

    def can_transition(self, to_state: BuilderState) -> bool:
        """Check if a transition to the given state is valid."""
        return to_state in self.VALID_TRANSITIONS.get(self._state, set())

    def transition(self, to_state: BuilderState) -> None:
        """Transition to a new state.

        Args:
            to_state: The target state.

        Raises:
            BuilderStateError: If the transition is invalid.
        """
        if not self.can_transition(to_state):
            raise BuilderStateError(self._state, to_state)
        self._state = to_state

    def require(self, state: BuilderState, action: str) -> None:
        """Ensure the machine is in ``state`` before an action.

        Args:
            state: The state the action requires.
            action: Name of the operation, for the error message.

        Raises:
            BuilderStateError: If the current state differs.
        """
        if self._state != state:
            raise BuilderStateError(self._state, state, action)

    def is_terminal(self) -> bool:
        """Check if the current state is terminal (no more transitions allowed)."""
        return not self.VALID_TRANSITIONS[self._state]
