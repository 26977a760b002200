"""Synthetic stock price histories from Geometric Brownian Motion."""

from stock_sim.errors import (
    DegenerateDrawError,
    InvalidParameterError,
    PriceConversionError,
    StockSimError,
)
from stock_sim.numeric import (
    FixedPointType,
    FloatType,
    IntegerType,
    NumericType,
    resolve_numeric,
)
from stock_sim.price import PriceSimulator, SimulationParams
from stock_sim.sampler import NormalSampler
from stock_sim.stock import Stock, build_stock

__all__ = [
    "DegenerateDrawError",
    "FixedPointType",
    "FloatType",
    "IntegerType",
    "InvalidParameterError",
    "NormalSampler",
    "NumericType",
    "PriceConversionError",
    "PriceSimulator",
    "SimulationParams",
    "Stock",
    "StockSimError",
    "build_stock",
    "resolve_numeric",
]
