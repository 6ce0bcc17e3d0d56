"""Plan text parsing for the problem-solving scenario."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field

PLAN_HEADER_PREFIX = "Step-by-step plan"

# Numbered items "1.", lettered sub-items "(a)", and "-" / "*" bullets
STEP_PATTERN = re.compile(r"^\s*(?:(\d+)\.|\(([a-z])\)|-|\*)\s*(.+)")


class PlanStep(BaseModel):
    """One line of a parsed plan."""

    kind: Literal["main", "sub", "bullet", "unknown"]
    content: str
    number: int | None = None
    letter: str | None = None

    def __str__(self) -> str:
        if self.kind == "main":
            return f"{self.number}. {self.content}"
        if self.kind == "sub":
            return f"({self.letter}) {self.content}"
        if self.kind == "bullet":
            return f"- {self.content}"
        return self.content


class Plan(BaseModel):
    """Parsed plan: optional header line plus ordered steps."""

    header: str = ""
    steps: list[PlanStep] = Field(default_factory=list)

    def pop_next(self) -> PlanStep | None:
        """Remove and return the first pending step."""
        return self.steps.pop(0) if self.steps else None


def parse_step(line: str) -> PlanStep:
    match = STEP_PATTERN.match(line)
    if match is None:
        return PlanStep(kind="unknown", content=line.strip())

    number, letter, content = match.groups()
    if number:
        return PlanStep(kind="main", number=int(number), content=content.strip())
    if letter:
        return PlanStep(kind="sub", letter=letter, content=content.strip())
    return PlanStep(kind="bullet", content=content.strip())


def parse_plan(text: str) -> Plan:
    """Split free-text plan output into a header and typed steps.

    Blank lines are dropped. Lines before a "Step-by-step plan" header are
    discarded along with the header itself, which is kept separately.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    header = ""
    body = lines
    header_index = next(
        (i for i, line in enumerate(lines) if line.startswith(PLAN_HEADER_PREFIX)),
        None,
    )
    if header_index is not None:
        header = lines[header_index]
        body = lines[header_index + 1 :]

    return Plan(header=header, steps=[parse_step(line) for line in body])
