"""Oracle model configuration and factory functions."""

import logging
from functools import lru_cache

from mst.core.enums import Tier
from mst.oracle import ClaudeOracle, RetryingOracle

logger = logging.getLogger(__name__)

# Tier → Model mapping
TIER_TO_MODEL: dict[Tier, str] = {
    Tier.LOW: "claude-haiku-4-5-20251001",
    Tier.MED: "claude-sonnet-4-5-20250929",
    Tier.HIGH: "claude-opus-4-5-20251101",
}


@lru_cache(maxsize=3)
def get_oracle(tier: Tier = Tier.MED) -> RetryingOracle:
    """Get cached oracle for a model tier.

    Args:
        tier: Model tier (low, med, high)

    Returns:
        Claude oracle wrapped with bounded retry.
    """
    model = TIER_TO_MODEL[Tier(tier)]
    logger.debug("Creating oracle: tier=%s → model=%s", tier, model)
    return RetryingOracle(ClaudeOracle(model))


__all__ = ["TIER_TO_MODEL", "get_oracle"]
