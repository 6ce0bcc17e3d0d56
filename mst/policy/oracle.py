"""Oracle-backed transition policy.

Builds a textual context bundle from the machine, asks the oracle for a
next-state label and validates the answer. Anything that is not an exact
catalog label different from the current state is replaced by the default
fallback resolver.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mst.policy.base import TransitionDecision
from mst.policy.fallback import default_next_state, first_unvisited

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mst.machine.machine import StateMachine
    from mst.oracle.base import Oracle

logger = logging.getLogger(__name__)

TRANSITION_RULES = """\
Choose the next state from the possible states.
Rules:
1. The next state MUST be different from the current state.
2. Choose a state that hasn't been visited yet, if possible.
3. The goal is to reach a state where the goal predicate is satisfied.
4. Consider the context, active instructions, and additional data to make a realistic decision.

Reply with just the chosen state."""


def build_transition_prompt(machine: StateMachine) -> str:
    """Render the oracle prompt for ``machine``'s current snapshot."""
    active = "\n".join(i.description for i in machine.active_instructions())
    context = "\n".join(f"{key}: {value}" for key, value in machine.data.items())

    return (
        f"{machine.context_prompt}\n"
        "\n"
        f"Current state: {machine.state}\n"
        f"Visited states: {', '.join(machine.visited_in_order)}\n"
        f"Possible states: {', '.join(machine.possible_states)}\n"
        "\n"
        "Active instructions:\n"
        f"{active}\n"
        "\n"
        "Additional context:\n"
        f"{context}\n"
        "\n"
        f"{TRANSITION_RULES}"
    )


def parse_candidate(response: str) -> str:
    """First non-empty line of the trimmed response ("" if there is none)."""
    for line in response.strip().splitlines():
        if line.strip():
            return line.strip()
    return ""


def is_acceptable(candidate: str, machine: StateMachine) -> bool:
    """Exact catalog member that differs from the current state."""
    return candidate in machine.possible_states and candidate != machine.state


class OraclePolicy:
    """Delegates the choice of next state to an external oracle."""

    name = "oracle"

    def __init__(self, oracle: Oracle) -> None:
        self._oracle = oracle

    @property
    def oracle(self) -> Oracle:
        return self._oracle

    def validate(self, possible_states: Sequence[str]) -> None:
        """Any catalog is acceptable; the fallback always has an answer."""

    def has_successor(self, state: str) -> bool:
        return True

    async def next_state(self, machine: StateMachine) -> TransitionDecision:
        """Ask the oracle, falling back on invalid candidates.

        Raises:
            OracleError: If the oracle request itself fails.
        """
        prompt = build_transition_prompt(machine)
        response = await self._oracle(prompt)
        candidate = parse_candidate(response)
        logger.info("Oracle's choice: %s", candidate or "<empty>")

        if is_acceptable(candidate, machine):
            return TransitionDecision(state=candidate, candidate=candidate)

        wrapped = first_unvisited(machine.possible_states, machine.visited_states) is None
        fallback = default_next_state(machine.possible_states, machine.visited_states)
        logger.warning(
            "Oracle candidate %r rejected in state %s; falling back to %s",
            candidate,
            machine.state,
            fallback,
        )
        if wrapped:
            logger.warning(
                "All states visited; fallback wraps to %s and may re-run its instructions",
                fallback,
            )
        return TransitionDecision(
            state=fallback, candidate=candidate, fell_back=True, wrapped=wrapped
        )

    def __repr__(self) -> str:
        return f"OraclePolicy({self._oracle!r})"
