"""Standard normal sampler built on the Box-Muller transform."""

import logging
import math

import numpy as np

from stock_sim.errors import DegenerateDrawError, InvalidParameterError

logger = logging.getLogger(__name__)


def check_seed(seed) -> int:
    """Validate an integer seed for numpy's default generator."""
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidParameterError(f"Seed must be an integer, got {seed!r}.")
    if seed < 0:
        raise InvalidParameterError(f"Seed must be non-negative, got {seed}.")
    return int(seed)


class NormalSampler:
    """Draw N(0, 1) deviates from a private uniform generator."""

    def __init__(self, seed: int) -> None:
        """
        Parameters
        ----------
        seed : int
            Seed of the uniform source (numpy Generator, not the global RNG)
        """
        self.seed = check_seed(seed)
        self._rng = np.random.default_rng(self.seed)

    def __repr__(self) -> str:
        return f"NormalSampler(seed={self.seed})"

    def sample(self) -> float:
        """
        Return one standard normal deviate.

        Consumes exactly two uniform draws u1, u2 in [0, 1) and returns
        sqrt(-2 ln u1) * cos(2 pi u2). The uniform source can return exactly
        0, in which case ln(u1) is undefined and DegenerateDrawError is raised.
        """
        u1 = self._rng.random()
        u2 = self._rng.random()
        if u1 == 0.0:
            raise DegenerateDrawError("Uniform source returned exactly 0 for u1.")
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def sample_many(self, n: int) -> np.ndarray:
        """Draw n deviates in sequence, same as n calls to sample()."""
        if n < 0:
            raise InvalidParameterError(f"Sample count must be non-negative, got {n}.")
        out = np.empty(n)
        for i in range(n):
            out[i] = self.sample()
        logger.debug("%r drew %d deviates", self, n)
        return out
