"""
Numeric representations for simulated prices.
- Float types carry the recurrence in float64
- Integer and fixed-point types carry an unrounded Decimal, so wide prices stay exact
- Each stored price goes through a checked cast that raises instead of wrapping
"""

import logging
import math
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext

import numpy as np

from stock_sim.constants import (
    DECIMAL_CARRY_PRECISION,
    DEFAULT_FIXED_POINT_DIGITS,
    DEFAULT_FIXED_POINT_PLACES,
)
from stock_sim.errors import InvalidParameterError, PriceConversionError

logger = logging.getLogger(__name__)


def _reject_bool(value) -> None:
    if isinstance(value, (bool, np.bool_)):
        raise PriceConversionError(f"Price {value!r} is a boolean, not a number.")


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise PriceConversionError(f"Price {value!r} is not a representable number.") from exc


class NumericType:
    """
    Base class for the numeric type a price path is stored in.

    The recurrence works on a carry: start() builds it from the initial
    price, advance() multiplies it by a float growth factor and store()
    converts it into the stored price.
    """

    dtype = np.dtype(object)

    def coerce(self, value):
        """Convert an initial price, failing unless it is representable."""
        raise NotImplementedError

    def from_float(self, x: float):
        """Convert a float price, failing instead of wrapping."""
        raise NotImplementedError

    def start(self, first):
        return float(first)

    def advance(self, carry, factor: float):
        return carry * factor

    def store(self, carry):
        return self.from_float(carry)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dtype={self.dtype})"


class _DecimalCarry(NumericType):
    """Exact Decimal carry shared by integer and fixed-point prices."""

    carry_precision = DECIMAL_CARRY_PRECISION

    def start(self, first) -> Decimal:
        return first if isinstance(first, Decimal) else Decimal(int(first))

    def advance(self, carry: Decimal, factor: float) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = self.carry_precision
            return carry * Decimal(factor)


class FloatType(NumericType):
    """Prices stored as a numpy floating point dtype (float16/32/64)."""

    def __init__(self, dtype=np.float64) -> None:
        self.dtype = np.dtype(dtype)
        if self.dtype.kind != "f":
            raise InvalidParameterError(f"{self.dtype} is not a floating point dtype.")

    def _cast(self, x: float):
        with np.errstate(over="ignore"):
            value = self.dtype.type(x)
        if not np.isfinite(value):
            raise PriceConversionError(
                f"Price {x!r} is not representable as finite {self.dtype}."
            )
        return value

    def coerce(self, value):
        _reject_bool(value)
        return self._cast(_to_float(value))

    def from_float(self, x: float):
        return self._cast(x)


class IntegerType(_DecimalCarry):
    """Prices stored as a numpy integer dtype, rounded half to even."""

    def __init__(self, dtype=np.int64) -> None:
        self.dtype = np.dtype(dtype)
        if self.dtype.kind not in "iu":
            raise InvalidParameterError(f"{self.dtype} is not an integer dtype.")
        info = np.iinfo(self.dtype)
        self.min = int(info.min)
        self.max = int(info.max)

    def _checked(self, n: int, source):
        if not self.min <= n <= self.max:
            raise PriceConversionError(
                f"Price {source!r} overflows {self.dtype} "
                f"(range [{self.min}, {self.max}])."
            )
        return self.dtype.type(n)

    def coerce(self, value):
        _reject_bool(value)
        if isinstance(value, (int, np.integer)):
            return self._checked(int(value), value)
        x = _to_float(value)
        if not math.isfinite(x) or not x.is_integer():
            raise PriceConversionError(
                f"Price {value!r} is not exactly representable as {self.dtype}."
            )
        return self._checked(int(x), value)

    def from_float(self, x: float):
        if not math.isfinite(x):
            raise PriceConversionError(f"Cannot convert non-finite price {x!r}.")
        # A small price may round to exactly 0; it is kept as is.
        return self._checked(round(x), x)

    def store(self, carry: Decimal):
        with localcontext() as ctx:
            ctx.prec = self.carry_precision
            n = int(carry.to_integral_value(rounding=ROUND_HALF_EVEN))
        return self._checked(n, carry)


class FixedPointType(_DecimalCarry):
    """Prices stored as Decimal values quantized to a fixed number of places."""

    def __init__(
        self,
        places: int = DEFAULT_FIXED_POINT_PLACES,
        max_digits: int = DEFAULT_FIXED_POINT_DIGITS,
    ) -> None:
        if places < 0 or max_digits < 1 or places >= max_digits:
            raise InvalidParameterError(
                "Fixed point needs places >= 0 and max_digits > places."
            )
        self.places = places
        self.max_digits = max_digits
        self.quantum = Decimal(1).scaleb(-places)
        self.carry_precision = max(DECIMAL_CARRY_PRECISION, 2 * max_digits)

    def __repr__(self) -> str:
        return f"FixedPointType(places={self.places}, max_digits={self.max_digits})"

    def _quantize(self, d: Decimal, source) -> Decimal:
        # Quantizing past prec digits raises InvalidOperation
        with localcontext() as ctx:
            ctx.prec = self.max_digits
            try:
                q = d.quantize(self.quantum, rounding=ROUND_HALF_EVEN)
            except InvalidOperation as exc:
                raise PriceConversionError(
                    f"Price {source!r} needs more than {self.max_digits} digits."
                ) from exc
        return q

    def coerce(self, value) -> Decimal:
        _reject_bool(value)
        if isinstance(value, float):
            d = Decimal(repr(value))
        else:
            try:
                d = Decimal(value)
            except (TypeError, ValueError, InvalidOperation) as exc:
                raise PriceConversionError(f"Price {value!r} is not numeric.") from exc
        if not d.is_finite():
            raise PriceConversionError(f"Price {value!r} is not finite.")
        q = self._quantize(d, value)
        if q != d:
            raise PriceConversionError(
                f"Price {value!r} is not exactly representable with {self.places} places."
            )
        return q

    def from_float(self, x: float) -> Decimal:
        if not math.isfinite(x):
            raise PriceConversionError(f"Cannot convert non-finite price {x!r}.")
        return self._quantize(Decimal(x), x)

    def store(self, carry: Decimal) -> Decimal:
        return self._quantize(carry, carry)


def resolve_numeric(numeric) -> NumericType:
    """Map float, int, Decimal, a numpy dtype or a NumericType to a NumericType."""
    if isinstance(numeric, NumericType):
        return numeric
    if numeric is None:
        raise InvalidParameterError("numeric must name a type, got None.")
    if numeric is Decimal:
        return FixedPointType()
    try:
        dtype = np.dtype(numeric)
    except TypeError as exc:
        raise InvalidParameterError(f"Unsupported numeric type: {numeric!r}") from exc

    if dtype.kind == "f":
        kind = FloatType(dtype)
    elif dtype.kind in "iu":
        kind = IntegerType(dtype)
    else:
        raise InvalidParameterError(f"Unsupported numeric type: {numeric!r}")
    logger.debug("Resolved numeric type %r to %r", numeric, kind)
    return kind
