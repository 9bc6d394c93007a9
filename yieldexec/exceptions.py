"""Custom exception hierarchy for the yieldexec library."""


class YieldExecError(Exception):
    """Base exception for all yieldexec library errors."""


class ConfigurationError(YieldExecError):
    """Invalid configuration parameters or missing required arguments."""


class DataError(YieldExecError):
    """Invalid input data: wrong type, shape, or alignment."""


class InvalidOrderBookError(DataError):
    """Order book snapshot is unusable: an empty side or a non-positive mid."""


class InvalidAmountError(DataError):
    """Target trade amount is not strictly positive."""


class EmptyPoolSetError(DataError):
    """Allocation was requested over an empty pool set."""


class InvalidCapitalError(DataError):
    """Capital to allocate is not strictly positive."""


class NumericOverflowError(YieldExecError, ArithmeticError):
    """A guarded division met a zero or non-finite denominator."""
