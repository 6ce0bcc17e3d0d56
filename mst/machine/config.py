"""Configuration consumed when constructing a state machine."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mst.core.errors import ConfigurationError
from mst.machine.instruction import Instruction

if TYPE_CHECKING:
    from collections.abc import Set

    from mst.machine.machine import StateMachine
    from mst.policy.base import TransitionPolicy

GoalPredicate = Callable[["Set[str]", "StateMachine"], bool]


def visited(target: str) -> GoalPredicate:
    """Goal predicate that holds once ``target`` has been visited."""

    def predicate(visited_states: Set[str], machine: StateMachine) -> bool:
        return target in visited_states

    return predicate


@dataclass
class StateMachineConfig:
    """Everything needed to build one machine for one run.

    Validated on construction: the catalog must be non-empty and free of
    duplicates, and must contain the initial state. A transition policy, when
    given, validates itself against the catalog.
    """

    initial_state: str
    possible_states: Sequence[str]
    goal_predicate: GoalPredicate
    context_prompt: str = ""
    instructions: Sequence[Instruction] = field(default_factory=tuple)
    transition_policy: TransitionPolicy | None = None

    def __post_init__(self) -> None:
        self.possible_states = tuple(self.possible_states)
        self.instructions = tuple(self.instructions)

        if not self.possible_states:
            raise ConfigurationError("possible_states must not be empty")

        duplicates = sorted(s for s, n in Counter(self.possible_states).items() if n > 1)
        if duplicates:
            raise ConfigurationError(f"Duplicate states in catalog: {duplicates}")

        if self.initial_state not in self.possible_states:
            raise ConfigurationError(
                f"Initial state {self.initial_state!r} is not in possible_states"
            )

        if self.transition_policy is not None:
            self.transition_policy.validate(self.possible_states)
