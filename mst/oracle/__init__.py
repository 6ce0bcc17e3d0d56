"""Decision oracles: protocol, Claude transport, retry wrapper, scripted replay."""

from mst.oracle.base import Oracle
from mst.oracle.claude import ClaudeOracle
from mst.oracle.retry import RetryingOracle
from mst.oracle.scripted import ScriptedOracle

__all__ = [
    "ClaudeOracle",
    "Oracle",
    "RetryingOracle",
    "ScriptedOracle",
]
