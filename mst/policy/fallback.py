"""Default fallback resolver for invalid oracle candidates."""

from __future__ import annotations

from collections.abc import Sequence, Set


def first_unvisited(
    possible_states: Sequence[str], visited_states: Set[str]
) -> str | None:
    """First catalog entry not yet visited, in declared order."""
    return next((s for s in possible_states if s not in visited_states), None)


def default_next_state(possible_states: Sequence[str], visited_states: Set[str]) -> str:
    """Deterministic tie-break when a candidate cannot be used.

    Returns the first unvisited state in catalog order, or the first state of
    the catalog once everything has been visited.
    """
    if not possible_states:
        raise ValueError("possible_states must not be empty")
    unvisited = first_unvisited(possible_states, visited_states)
    return unvisited if unvisited is not None else possible_states[0]
