"""Exceptions raised by the price simulator."""


class StockSimError(Exception):
    """Base class for all simulator errors."""


class InvalidParameterError(StockSimError, ValueError):
    """A simulation or construction parameter is out of its domain."""


class PriceConversionError(StockSimError, OverflowError):
    """A price cannot be represented in the requested numeric type."""


class DegenerateDrawError(StockSimError, ArithmeticError):
    """The uniform source returned a value the Box-Muller transform cannot use."""
