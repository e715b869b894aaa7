from __future__ import annotations


class NumvecError(Exception):
    """Base class for every error raised by numvec."""


class UnsupportedTypeError(NumvecError, TypeError):
    """A value is outside the supported numeric set (int, float32, float64, ValuedNumber)."""


class TypeMismatchError(NumvecError, TypeError):
    """Operands of a binary operation have different numeric representations."""


class DivisionByZeroError(NumvecError, ZeroDivisionError):
    """Integer (or fixed-point) division by zero. Floats follow IEEE 754 instead."""


class InvalidIndexError(NumvecError, IndexError):
    """Component index other than 0 (x) or 1 (y)."""


class BoundsError(NumvecError, IndexError):
    """A sequence is too short to build a vector from."""


class NumericOverflowError(NumvecError, OverflowError):
    """An integer is too large to be evaluated in double precision."""
