"""Deterministic oracle replaying canned responses."""

from __future__ import annotations

from collections.abc import Iterable

from mst.core.errors import OracleError


class ScriptedOracle:
    """Returns queued responses in order and records every prompt.

    Useful for offline runs and demos. Raises OracleError once the script is
    exhausted.
    """

    def __init__(self, responses: Iterable[str]) -> None:
        self._responses = list(responses)
        self.prompts: list[str] = []

    @property
    def remaining(self) -> int:
        return len(self._responses)

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._responses:
            raise OracleError("Scripted oracle has no responses left")
        return self._responses.pop(0)
