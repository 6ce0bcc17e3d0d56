"""Bounded retry with exponential backoff around an oracle."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from mst.core.constants import ORACLE
from mst.core.errors import OracleError, OracleRetriesExhaustedError

if TYPE_CHECKING:
    from mst.oracle.base import Oracle

logger = logging.getLogger(__name__)


class RetryingOracle:
    """Retries OracleError failures, then gives up with a distinct error.

    Delays grow as ``base_delay * 2 ** (attempt - 1)`` (1s, 2s, 4s by
    default). Other exceptions propagate immediately.
    """

    def __init__(
        self,
        inner: Oracle,
        *,
        max_retries: int = ORACLE.max_retries,
        base_delay: float = ORACLE.base_retry_delay,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._inner = inner
        self._max_retries = max_retries
        self._base_delay = base_delay

    @property
    def inner(self) -> Oracle:
        return self._inner

    async def __call__(self, prompt: str) -> str:
        last_error: OracleError | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                return await self._inner(prompt)
            except OracleError as e:
                last_error = e
                logger.warning(
                    "Oracle attempt %d/%d failed: %s", attempt, self._max_retries, e
                )

            if attempt < self._max_retries:
                delay = self._base_delay * (2 ** (attempt - 1))
                logger.info("Retrying oracle in %.1fs...", delay)
                await asyncio.sleep(delay)

        logger.error("Oracle failed after %d attempts: %s", self._max_retries, last_error)
        raise OracleRetriesExhaustedError(self._max_retries, last_error) from last_error

    def __repr__(self) -> str:
        return f"RetryingOracle({self._inner!r}, max_retries={self._max_retries})"
