"""Stock value object and its construction from explicit or simulated history."""

import logging

import numpy as np
import pandas as pd

from stock_sim.errors import InvalidParameterError
from stock_sim.price import PriceSimulator, SimulationParams

logger = logging.getLogger(__name__)


class Stock:
    """A labeled instrument with an optional price history."""

    def __init__(
        self,
        symbol: str,
        name: str | None = None,
        history: np.ndarray | None = None,
        horizon: float | None = None,
    ) -> None:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise InvalidParameterError(
                f"Symbol must be a single character, got {symbol!r}."
            )
        self.symbol = symbol
        self.name = name
        self.history = history
        # Horizon in years, only known for simulated histories
        self.horizon = horizon

    def __repr__(self) -> str:
        size = None if self.history is None else len(self.history)
        return (
            f"Stock(symbol='{self.symbol}', "
            f"name={self.name!r}, "
            f"history_len={size}, "
            f"horizon={self.horizon})"
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the history to a pandas DataFrame."""
        if self.history is None:
            return pd.DataFrame(columns=["step", "price"])

        data = {"step": np.arange(len(self.history))}
        if self.horizon is not None:
            data["time"] = np.linspace(0.0, self.horizon, len(self.history))
        data["price"] = self.history
        return pd.DataFrame(data)


def build_stock(
    symbol: str,
    name: str | None = None,
    history=None,
    *,
    seed: int | None = None,
    initial_price=None,
    params: SimulationParams | None = None,
    numeric=None,
) -> Stock:
    """
    Build a Stock from an explicit history or from a simulated GBM path.

    An explicit history is copied into a read-only array. Passing an
    initial_price simulates the history instead, which requires a seed;
    numeric defaults to float. seed, params and numeric only apply to a
    simulated history and are rejected otherwise.
    """
    if history is not None and initial_price is not None:
        raise InvalidParameterError("Pass either history or initial_price, not both.")

    if initial_price is None:
        unused = [
            key
            for key, value in (("seed", seed), ("params", params), ("numeric", numeric))
            if value is not None
        ]
        if unused:
            raise InvalidParameterError(
                f"{', '.join(unused)} only apply to a generated history."
            )

    if initial_price is not None:
        if seed is None:
            raise InvalidParameterError("A seed is required to generate a history.")
        params = params if params is not None else SimulationParams()
        path = PriceSimulator(seed).generate(
            initial_price, params, numeric=numeric if numeric is not None else float
        )
        logger.debug("Built %s with generated history of %d prices", symbol, len(path))
        return Stock(symbol, name, path, horizon=params.amount_of_years)

    if history is not None:
        path = np.array(history)
        if path.ndim != 1:
            raise InvalidParameterError(
                f"History must be one dimensional, got shape {path.shape}."
            )
        path.setflags(write=False)
        logger.debug("Built %s with explicit history of %d prices", symbol, len(path))
        return Stock(symbol, name, path)

    return Stock(symbol, name)
