"""Decision oracle protocol."""

from typing import Protocol


class Oracle(Protocol):
    """Injected capability: text prompt in, free-text answer out.

    Implementations raise OracleError on transport, auth or rate-limit
    failures.
    """

    async def __call__(self, prompt: str) -> str: ...
