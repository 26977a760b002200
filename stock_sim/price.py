"""
GBM (Geometric Brownian Motion) price path generator.
- Log-return per step: (mu - 0.5*sigma^2)*dt + sigma*sqrt(dt)*z
- z comes from a Box-Muller sampler owned by the simulator
- The path is built completely before it is returned, so errors never leak partial paths
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from stock_sim.constants import (
    DEFAULT_AMOUNT_OF_YEARS,
    DEFAULT_DRIFT,
    DEFAULT_NUMBER_OF_STEPS,
    DEFAULT_VOLATILITY,
)
from stock_sim.errors import InvalidParameterError, PriceConversionError
from stock_sim.numeric import resolve_numeric
from stock_sim.sampler import NormalSampler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationParams:
    """GBM parameters shared by every path generated with them."""

    drift: float = DEFAULT_DRIFT
    volatility: float = DEFAULT_VOLATILITY
    amount_of_years: float = DEFAULT_AMOUNT_OF_YEARS
    number_of_steps: int = DEFAULT_NUMBER_OF_STEPS


def _finite(name: str, value) -> float:
    try:
        x = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be a number, got {value!r}.") from exc
    if not math.isfinite(x):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}.")
    return x


def _steps(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(f"number_of_steps must be an integer, got {value!r}.")
    if value < 0:
        raise InvalidParameterError(f"number_of_steps must be >= 0, got {value}.")
    return int(value)


class PriceSimulator:
    """Simulate price paths using Geometric Brownian Motion (GBM)."""

    def __init__(self, seed: int) -> None:
        """
        Parameters
        ----------
        seed : int
            Seed for reproducibility; the same seed and parameters give the same path
        """
        self._sampler = NormalSampler(seed)
        self.seed = self._sampler.seed

    def __repr__(self) -> str:
        return f"PriceSimulator(seed={self.seed})"

    def generate_path(
        self,
        initial_price,
        drift: float = DEFAULT_DRIFT,
        volatility: float = DEFAULT_VOLATILITY,
        amount_of_years: float = DEFAULT_AMOUNT_OF_YEARS,
        number_of_steps: int = DEFAULT_NUMBER_OF_STEPS,
        numeric=float,
    ) -> np.ndarray:
        """
        Generate one GBM price path.

        Parameters
        ----------
        initial_price
            Price at time 0, stored unchanged as element 0
        drift : float
            Expected annualized return (mu)
        volatility : float
            Annualized standard deviation of returns (sigma), not required to be >= 0
        amount_of_years : float
            Horizon in years, must be >= 0
        number_of_steps : int
            Number of steps; 0 returns a single element path
        numeric
            Output type: float, int, Decimal, a numpy dtype or a NumericType

        Returns
        -------
        Read-only np.ndarray of length number_of_steps + 1
        """
        steps = _steps(number_of_steps)
        mu = _finite("drift", drift)
        sigma = _finite("volatility", volatility)
        years = _finite("amount_of_years", amount_of_years)
        if years < 0:
            raise InvalidParameterError(f"amount_of_years must be >= 0, got {years}.")

        kind = resolve_numeric(numeric)
        first = kind.coerce(initial_price)

        logger.debug(
            "%r generating path: initial_price=%s, drift=%.6f, volatility=%.6f, "
            "amount_of_years=%.6f, number_of_steps=%d, numeric=%r",
            self,
            first,
            mu,
            sigma,
            years,
            steps,
            kind,
        )

        prices = [first]
        if steps > 0:
            dt = years / steps
            drift_term = (mu - 0.5 * sigma * sigma) * dt
            diffusion = sigma * math.sqrt(dt)
            if not (math.isfinite(drift_term) and math.isfinite(diffusion)):
                raise InvalidParameterError(
                    f"drift={mu!r} and volatility={sigma!r} overflow the log-return."
                )
            # The carry is never rounded, only the stored prices are
            carry = kind.start(first)
            for i in range(1, steps + 1):
                z = self._sampler.sample()
                try:
                    factor = math.exp(drift_term + diffusion * z)
                except OverflowError as exc:
                    raise PriceConversionError(
                        f"Growth factor overflowed float64 at step {i}."
                    ) from exc
                carry = kind.advance(carry, factor)
                prices.append(kind.store(carry))

        path = np.array(prices, dtype=kind.dtype)
        path.setflags(write=False)
        logger.debug("%r final price: %s", self, path[-1])
        return path

    def generate(
        self, initial_price, params: SimulationParams | None = None, numeric=float
    ) -> np.ndarray:
        """Generate a path from a SimulationParams record."""
        params = params if params is not None else SimulationParams()
        return self.generate_path(
            initial_price,
            drift=params.drift,
            volatility=params.volatility,
            amount_of_years=params.amount_of_years,
            number_of_steps=params.number_of_steps,
            numeric=numeric,
        )
