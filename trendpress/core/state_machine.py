"""Generic state machine for validated stage transitions.

Used by the trend pipeline to walk COLLECT through FINALIZE and to reject
out-of-order stage changes.

Example:
    transitions: TransitionMap[Stage] = {
        Stage.IDLE: [Stage.RUNNING],
        Stage.RUNNING: [Stage.IDLE],
    }
    sm = StateMachine(Stage.IDLE, transitions)
    sm.transition_to(Stage.RUNNING)
"""

from enum import Enum
from typing import Generic, TypeVar

from trendpress.core.exceptions import TrendPressError

T = TypeVar("T", bound=str | Enum)

TransitionMap = dict[T, list[T]]


class InvalidTransitionError(TrendPressError):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, current: T, target: T, allowed: list[T] | None = None):
        self.current = current
        self.target = target
        self.allowed = allowed or []
        allowed_str = ", ".join(str(s) for s in self.allowed) if self.allowed else "none"
        super().__init__(
            message=f"Invalid transition from '{current}' to '{target}'. "
            f"Allowed transitions: {allowed_str}",
            context={
                "current": str(current),
                "target": str(target),
                "allowed": [str(s) for s in self.allowed],
            },
        )


class StateMachine(Generic[T]):
    """Generic state machine for status transitions.

    Attributes:
        current: Current state
        allowed_transitions: States reachable from the current one
    """

    def __init__(self, initial: T, transitions: TransitionMap[T]):
        """Initialize state machine.

        Args:
            initial: Initial state
            transitions: Map of state -> list of allowed target states
        """
        self._current = initial
        self._transitions = transitions

    @property
    def current(self) -> T:
        """Get current state."""
        return self._current

    @property
    def allowed_transitions(self) -> list[T]:
        """Get list of states we can transition to from current state."""
        return self._transitions.get(self._current, [])

    def can_transition(self, target: T) -> bool:
        return target in self.allowed_transitions

    def transition_to(self, target: T) -> T:
        """Perform transition and return new state.

        Args:
            target: Target state

        Returns:
            The new current state

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(
                current=self._current,
                target=target,
                allowed=self.allowed_transitions,
            )
        self._current = target
        return self._current

    def reset(self, state: T) -> None:
        """Reset to a specific state, bypassing transition rules."""
        self._current = state

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current!r}, allowed={self.allowed_transitions!r})"


__all__ = ["InvalidTransitionError", "StateMachine", "TransitionMap"]
