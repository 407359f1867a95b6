import logging
import math
import random
from typing import Protocol, Sequence

from .errors import InvalidWeights

logger = logging.getLogger(__name__)

_default_rng = random.Random()


class RandomSource(Protocol):
    def random(self) -> float: ...


def select(
    weights: Sequence[float],
    forced_index: int | None = None,
    rng: RandomSource | None = None,
    uniform_fallback: bool = True,
) -> int:
    """Pick a segment index with probability weights[i] / sum(weights).

    A forced index inside the wheel wins without touching the random source.
    When every weight is zero the pick is uniform over all segments, unless
    `uniform_fallback` is off, in which case InvalidWeights is raised.
    """
    n: int = len(weights)
    if n == 0:
        raise InvalidWeights("no weights to select from")

    if forced_index is not None:
        if 0 <= forced_index < n:
            return forced_index
        logger.warning(
            "Forced winner %s is outside 0..%d, ignoring it", forced_index, n - 1
        )

    for w in weights:
        if not math.isfinite(w) or w < 0:
            raise InvalidWeights(f"weight {w!r} must be a finite non-negative number")

    rng = rng or _default_rng
    total: float = math.fsum(weights)
    if total <= 0:
        if not uniform_fallback:
            raise InvalidWeights("all weights are zero")
        idx: int = min(int(rng.random() * n), n - 1)
        logger.warning("All weights are zero, picked index %d uniformly", idx)
        return idx

    r: float = rng.random() * total
    cumulative: float = 0.0
    last_positive: int = 0
    for i, w in enumerate(weights):
        if w <= 0:
            continue
        cumulative += w
        last_positive = i
        if cumulative >= r:
            return i

    # rounding left the running sum just under r
    return last_positive
