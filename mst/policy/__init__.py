"""Transition policies: oracle-backed and table-backed."""

from mst.policy.base import TransitionDecision, TransitionPolicy
from mst.policy.fallback import default_next_state
from mst.policy.oracle import (
    OraclePolicy,
    build_transition_prompt,
    is_acceptable,
    parse_candidate,
)
from mst.policy.table import TablePolicy

__all__ = [
    "OraclePolicy",
    "TablePolicy",
    "TransitionDecision",
    "TransitionPolicy",
    "build_transition_prompt",
    "default_next_state",
    "is_acceptable",
    "parse_candidate",
]
