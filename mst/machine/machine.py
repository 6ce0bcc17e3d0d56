"""State machine entity.

Holds the current state, the visited-state history and the shared context,
and runs the instruction set. Transition legality is enforced here; choosing
the next state is left to a TransitionPolicy.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from mst.core.errors import (
    ContextTypeError,
    InstructionActionError,
    InvalidTransitionError,
    MissingContextKeyError,
    OracleError,
)
from mst.machine.instruction import InstructionFailure, StepReport

if TYPE_CHECKING:
    from mst.machine.config import StateMachineConfig
    from mst.machine.instruction import Instruction
    from mst.policy.base import TransitionPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

TransitionListener = Callable[[str, str], None]


@dataclass(frozen=True)
class MachineSnapshot:
    """Read-only copy of a machine's observable state."""

    state: str
    visited_states: frozenset[str]
    history: tuple[str, ...]
    data: dict[str, Any]


class StateMachine:
    """Instruction-driven finite-state machine.

    Example:
        >>> config = StateMachineConfig(
        ...     initial_state="A",
        ...     possible_states=["A", "B"],
        ...     goal_predicate=visited("B"),
        ... )
        >>> machine = StateMachine(config)
        >>> machine.transition("B")
        >>> machine.goal_reached()
        True
    """

    def __init__(self, config: StateMachineConfig) -> None:
        self._config = config
        self._state = config.initial_state
        # dict keeps insertion order for deterministic prompt rendering
        self._visited: dict[str, None] = {config.initial_state: None}
        self._history: list[str] = [config.initial_state]
        self._data: dict[str, Any] = {}
        self._failures: list[InstructionFailure] = []
        self._listeners: list[TransitionListener] = []
        self._transition_count = 0

        logger.info("StateMachine initialized (initial state: %s)", self._state)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> StateMachineConfig:
        return self._config

    @property
    def state(self) -> str:
        """Current state."""
        return self._state

    @property
    def possible_states(self) -> tuple[str, ...]:
        return self._config.possible_states

    @property
    def visited_states(self) -> frozenset[str]:
        """Every state occupied since construction, initial state included."""
        return frozenset(self._visited)

    @property
    def visited_in_order(self) -> tuple[str, ...]:
        """Visited states in first-visit order."""
        return tuple(self._visited)

    @property
    def history(self) -> tuple[str, ...]:
        """Every state assigned, in order, starting with the initial state."""
        return tuple(self._history)

    @property
    def context_prompt(self) -> str:
        return self._config.context_prompt

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        return self._config.instructions

    @property
    def transition_policy(self) -> TransitionPolicy | None:
        return self._config.transition_policy

    @property
    def data(self) -> dict[str, Any]:
        """Shallow copy of the shared context."""
        return dict(self._data)

    @property
    def instruction_failures(self) -> list[InstructionFailure]:
        return list(self._failures)

    @property
    def transition_count(self) -> int:
        """Number of successful transitions since construction."""
        return self._transition_count

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def transition(self, new_state: str) -> None:
        """Move to ``new_state``.

        Raises:
            InvalidTransitionError: If ``new_state`` is not in the catalog.
                The machine is left unchanged.
        """
        if new_state not in self._config.possible_states:
            logger.error(
                "Invalid state transition attempted: %s -> %s", self._state, new_state
            )
            raise InvalidTransitionError(self._state, new_state)

        previous = self._state
        logger.info("Transitioning from %s to %s", previous, new_state)
        self._state = new_state
        self._visited[new_state] = None
        self._history.append(new_state)
        self._transition_count += 1

        for listener in list(self._listeners):
            listener(previous, new_state)

    def subscribe(self, listener: TransitionListener) -> Callable[[], None]:
        """Register a ``listener(from_state, to_state)`` called on transitions.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def goal_reached(self) -> bool:
        """Evaluate the goal predicate against the current snapshot."""
        reached = bool(self._config.goal_predicate(self.visited_states, self))
        logger.debug("Goal reached status: %s", reached)
        return reached

    # -------------------------------------------------------------------------
    # Context
    # -------------------------------------------------------------------------

    def set_data(self, key: str, value: Any) -> None:
        logger.debug("Setting data: %s", key)
        self._data[key] = value

    def get_data(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def has_data(self, key: str) -> bool:
        return key in self._data

    def require_data(self, key: str, expected_type: type[T] | None = None) -> T:
        """Read a context value that must be present.

        Args:
            key: Context key.
            expected_type: Optional type the value must be an instance of.

        Raises:
            MissingContextKeyError: If the key was never set.
            ContextTypeError: If the value has the wrong type.
        """
        if key not in self._data:
            raise MissingContextKeyError(key)
        value = self._data[key]
        if expected_type is not None and not isinstance(value, expected_type):
            raise ContextTypeError(key, expected_type, type(value))
        return value

    # -------------------------------------------------------------------------
    # Instructions
    # -------------------------------------------------------------------------

    def active_instructions(self) -> list[Instruction]:
        """Instructions whose condition holds right now."""
        return [i for i in self._config.instructions if i.condition(self)]

    async def execute_instructions(self) -> StepReport:
        """Run every instruction whose condition holds, in declared order.

        Each action is awaited to completion before the next condition is
        evaluated. A failing action is logged and recorded; the remaining
        instructions still run. Invalid transitions requested by an action
        and oracle failures propagate and end the run.
        """
        report = StepReport()
        start_count = self._transition_count
        logger.debug("Executing instructions in state %s", self._state)

        for instruction in self._config.instructions:
            if not instruction.condition(self):
                continue

            logger.debug("Executing instruction: %s", instruction.description)
            state = self._state
            try:
                result = instruction.action(self)
                if inspect.isawaitable(result):
                    await result
            except (InvalidTransitionError, OracleError):
                raise
            except Exception as e:
                error = InstructionActionError(instruction.description, state, e)
                logger.error("%s", error, exc_info=True)
                failure = InstructionFailure.from_error(error)
                self._failures.append(failure)
                report.failures.append(failure)
            else:
                report.executed.append(instruction.description)

        report.transitioned = self._transition_count != start_count
        return report

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def snapshot(self) -> MachineSnapshot:
        return MachineSnapshot(
            state=self._state,
            visited_states=self.visited_states,
            history=self.history,
            data=dict(self._data),
        )

    def __repr__(self) -> str:
        return (
            f"StateMachine(state={self._state!r}, "
            f"visited={len(self._visited)}/{len(self._config.possible_states)})"
        )
