"""Environment variable validation."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from mst.core.enums import Tier
from mst.core.errors import ConfigurationError

TIER_ENV_VAR = "MST_MODEL_TIER"

# Any one of these lets the Claude Agent SDK authenticate
AUTH_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "CLAUDE_CODE_OAUTH_TOKEN",
    "CLAUDE_CODE_USE_BEDROCK",
    "CLAUDE_CODE_USE_VERTEX",
)


def has_cli_login(home: Path | None = None) -> bool:
    """Whether `claude login` left credentials under ``home``."""
    home = home or Path.home()
    return (home / ".claude" / ".credentials.json").is_file()


def default_tier() -> Tier:
    """Model tier from MST_MODEL_TIER, or med when unset.

    Raises:
        ConfigurationError: If the variable names an unknown tier.
    """
    value = os.getenv(TIER_ENV_VAR, "").strip().lower()
    if not value:
        return Tier.MED
    try:
        return Tier(value)
    except ValueError:
        choices = ", ".join(t.value for t in Tier)
        raise ConfigurationError(
            f"{TIER_ENV_VAR}={value!r} is not one of: {choices}"
        ) from None


def validate_required_env(home: Path | None = None) -> None:
    """Validate the environment at startup.

    Required (any one):
        ANTHROPIC_API_KEY, CLAUDE_CODE_OAUTH_TOKEN, CLAUDE_CODE_USE_BEDROCK,
        CLAUDE_CODE_USE_VERTEX, or an existing `claude login`

    Optional (with defaults):
        MST_MODEL_TIER: Default model tier for the oracle (default: med)

    Exits with code 1 if no authentication is available or the tier is invalid.
    """
    errors: list[str] = []

    if not any(os.getenv(name) for name in AUTH_ENV_VARS) and not has_cli_login(home):
        errors.append(
            f"No Claude credentials found: set one of {', '.join(AUTH_ENV_VARS)} "
            "or run `claude login`"
        )

    try:
        default_tier()
    except ConfigurationError as e:
        errors.append(str(e))

    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        print("Set them in .env or export them before running mst", file=sys.stderr)
        sys.exit(1)
