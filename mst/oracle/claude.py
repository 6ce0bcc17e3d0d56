"""Claude-backed decision oracle via the Claude Agent SDK."""

from __future__ import annotations

import logging

from claude_agent_sdk import ClaudeAgentOptions, ClaudeSDKError, query
from claude_agent_sdk.types import ResultMessage

from mst.core.errors import OracleError

logger = logging.getLogger(__name__)

SUPPORTED_MODELS = [
    "claude-haiku-4-5-20251001",
    "claude-sonnet-4-5-20250929",
    "claude-opus-4-5-20251101",
]
DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


class ClaudeOracle:
    """Sends a single-turn prompt to Claude and returns the text reply."""

    def __init__(self, model: str = DEFAULT_MODEL) -> None:
        if model not in SUPPORTED_MODELS:
            logger.warning("Unsupported model %s, using %s", model, DEFAULT_MODEL)
            model = DEFAULT_MODEL
        self._model = model
        self._options = ClaudeAgentOptions(model=model, max_turns=1)

    @property
    def model(self) -> str:
        return self._model

    async def __call__(self, prompt: str) -> str:
        """Query Claude.

        Raises:
            OracleError: If the SDK fails or reports an error result.
        """
        logger.debug("Oracle request (%s): %d chars", self._model, len(prompt))
        parts: list[str] = []
        try:
            async for message in query(prompt=prompt, options=self._options):
                if isinstance(message, ResultMessage) and message.is_error:
                    raise OracleError(f"Claude returned an error result: {message.result}")
                if (content := getattr(message, "content", None)) is not None:
                    for block in content:
                        if (text := getattr(block, "text", None)) is not None:
                            parts.append(text)
        except (ClaudeSDKError, OSError) as e:
            raise OracleError(f"Claude request failed: {e}") from e

        response = "".join(parts)
        logger.debug("Oracle response: %s", response[:200])
        return response

    def __repr__(self) -> str:
        return f"ClaudeOracle(model={self._model!r})"
