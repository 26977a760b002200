"""Default parameters for the price simulator."""

# GBM parameters
DEFAULT_DRIFT = 0.2
DEFAULT_VOLATILITY = 0.4
DEFAULT_AMOUNT_OF_YEARS = 1.0
DEFAULT_NUMBER_OF_STEPS = 365

# Fixed-point prices
DEFAULT_FIXED_POINT_PLACES = 2
DEFAULT_FIXED_POINT_DIGITS = 18

# Decimal precision of the unrounded carry for integer and fixed-point paths
DECIMAL_CARRY_PRECISION = 60
