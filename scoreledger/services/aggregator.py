"""
Weighted merge across ledgers (ZUNIONSTORE ... WEIGHTS)

For every member of any source ledger:
    destination[member] = sum(weight[src] * src[member])   (absent -> 0)

The destination is overwritten. Scores are NOT checked against any ledger's
min/max; entries pushed below min are removed by the next reap, entries above
max stay until adjusted.
"""
import logging
from typing import Mapping

from scoreledger.errors import InvalidWeightsError
from scoreledger.models.results import WsumResult
from scoreledger.services.validator import is_finite_number

logger = logging.getLogger(__name__)


def validate_weights(weights: Mapping[str, float], method: str = "wsum") -> dict:
    """Copy `weights` into a plain dict, rejecting empty or non-numeric input."""
    if not weights:
        raise InvalidWeightsError(method, "at least one source ledger is required")
    checked = {}
    for source, weight in weights.items():
        if not isinstance(source, str) or not source:
            raise InvalidWeightsError(method, f"invalid source ledger name {source!r}")
        if not is_finite_number(weight):
            raise InvalidWeightsError(method, f"non-numeric weight for '{source}'")
        checked[source] = weight
    return checked


async def wsum(redis, destination: str, weights: Mapping[str, float]) -> WsumResult:
    """
    Store the weighted sum of the source ledgers into `destination`.

    Args:
        redis: redis.asyncio client shared by the ledgers
        destination: ledger name to overwrite
        weights: {source ledger name: weight}

    Returns:
        WsumResult with the number of members written
    """
    if not isinstance(destination, str) or not destination:
        raise InvalidWeightsError("wsum", "invalid destination ledger name")
    checked = validate_weights(weights)

    count = await redis.zunionstore(destination, checked)

    logger.info(f"wsum -> {destination}: {count} members from {list(checked)}")
    return WsumResult(destination=destination, weights=dict(weights), count=count)
