"""
Numeric dispatch layer.

One entry point per arithmetic primitive. Every primitive validates its
operands, then routes to the implementation for their representation:

- integers (``int``, signed numpy integers) use native integer arithmetic;
  division truncates toward zero and refuses a zero divisor
- ``np.float32`` and ``float`` follow IEEE 754 and never raise
  (division by zero gives ``±inf``/``nan``)
- custom numbers delegate to their ``ValuedNumber`` methods

``sqrt``, ``inv_sqrt`` and ``atan2`` are evaluated in double precision for
integers and single-precision floats, then narrowed back to the operand's
representation (truncation toward zero for integers).

The result of every primitive has the representation of its operands.
"""
from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np

from numvec.config import ToleranceConfig
from numvec.errors import (
    DivisionByZeroError,
    NumericOverflowError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from numvec.numeric.kinds import NumericKind, check_same, check_type, kind_of, representation
from numvec.numeric.valued import ValuedNumber
from numvec.utils.types import N, Number

__all__ = [
    "check_type",
    "negate", "add", "sub", "mul", "div",
    "sqrt", "inv_sqrt", "atan2",
    "widen", "isclose",
]


def _ieee():
    # numpy warns on overflow / invalid / divide-by-zero; here those are regular results
    return np.errstate(all="ignore")


def _binary_kind(a: Any, b: Any) -> NumericKind:
    check_same(a, b)
    return kind_of(a)


def _as_double(value: Any) -> np.float64:
    """Double-precision value of an int or float operand."""
    try:
        return np.float64(value)
    except OverflowError as e:
        # only Python ints are unbounded
        raise NumericOverflowError(
            f"{type(value).__name__} value with {value.bit_length()} bits does not fit in double precision."
        ) from e


def _truncating_div(a: N, b: N) -> N:
    """Integer quotient rounded toward zero (Python's // rounds toward -inf)."""
    q = a // b
    if (a % b != 0) and ((a < 0) != (b < 0)):
        q += 1
    return q


def _narrow_to_int(value: float, like: N) -> N:
    """Narrow a double-precision result to the integer type of `like`, truncating."""
    if math.isnan(value):
        return type(like)(0)
    return type(like)(math.trunc(value))


def _narrow(value: float, like: N) -> N:
    if isinstance(like, (int, np.signedinteger)):
        return _narrow_to_int(value, like)
    return type(like)(value)


############################
# UNARY PRIMITIVES
############################

def negate(value: N) -> N:
    """
    Arithmetic negation.

    Floats are negated as ``value * -1`` so that ``negate(0.0)`` is ``-0.0``.
    """
    kind = kind_of(value)
    if kind is NumericKind.CUSTOM:
        return value.negate()
    with _ieee():
        if kind is NumericKind.INTEGER:
            return -value
        return value * type(value)(-1)


def sqrt(value: N) -> N:
    """
    Square root.

    Negative floats give ``nan``; for integers the ``nan`` narrows to 0.
    """
    kind = kind_of(value)
    if kind is NumericKind.CUSTOM:
        return value.sqrt()
    with _ieee():
        r = np.sqrt(_as_double(value))
    return _narrow(float(r), value)


def inv_sqrt(value: N) -> N:
    """
    Reciprocal square root, ``1 / sqrt(value)``.

    Raises
    ------
    DivisionByZeroError
        For an integer zero. Float zeros give ``+inf``.
    """
    kind = kind_of(value)
    if kind is NumericKind.CUSTOM:
        return value.inv_sqrt()
    if kind is NumericKind.INTEGER and value == 0:
        raise DivisionByZeroError(f"inv_sqrt of integer zero ({type(value).__name__}).")
    with _ieee():
        r = np.divide(1.0, np.sqrt(_as_double(value)))
    return _narrow(float(r), value)


############################
# BINARY PRIMITIVES
############################

def add(a: N, b: N) -> N:
    kind = _binary_kind(a, b)
    if kind is NumericKind.CUSTOM:
        return a.add(b)
    with _ieee():
        return a + b


def sub(a: N, b: N) -> N:
    kind = _binary_kind(a, b)
    if kind is NumericKind.CUSTOM:
        return a.sub(b)
    with _ieee():
        return a - b


def mul(a: N, b: N) -> N:
    kind = _binary_kind(a, b)
    if kind is NumericKind.CUSTOM:
        return a.mul(b)
    with _ieee():
        return a * b


def div(a: N, b: N) -> N:
    """
    Division.

    Integers truncate toward zero (``div(-7, 2) == -3``). Floats follow IEEE 754:
    ``div(5.0, 0.0) == inf``, ``div(0.0, 0.0)`` is ``nan``.

    Raises
    ------
    DivisionByZeroError
        If `b` is an integer zero.
    """
    kind = _binary_kind(a, b)
    if kind is NumericKind.CUSTOM:
        return a.div(b)
    if kind is NumericKind.INTEGER:
        if b == 0:
            raise DivisionByZeroError(f"Integer division by zero ({type(a).__name__}).")
        with _ieee():
            return _truncating_div(a, b)
    if kind is NumericKind.FLOAT32:
        with _ieee():
            return a / b
    with _ieee():
        return type(a)(np.divide(np.float64(a), np.float64(b)))


def atan2(a: N, b: N) -> N:
    """
    Two-argument arctangent of ``a / b`` (``a`` is the y coordinate).

    Integer results are truncated toward zero, so they can only be -3..3.
    """
    kind = _binary_kind(a, b)
    if kind is NumericKind.CUSTOM:
        return a.atan2(b)
    return _narrow(math.atan2(_as_double(a), _as_double(b)), a)


############################
# CONVERSIONS AND COMPARISON
############################

def _target_representation(target: type) -> type:
    if not isinstance(target, type):
        raise UnsupportedTypeError(f"Expected a numeric type, got {target!r}.")
    if issubclass(target, (bool, np.bool_)):
        raise UnsupportedTypeError(f"Unexpected type: {target}")
    if issubclass(target, np.float32):
        return np.float32
    if issubclass(target, float):
        return float
    if issubclass(target, np.signedinteger):
        return target
    if issubclass(target, int):
        return int
    if issubclass(target, np.generic):
        raise UnsupportedTypeError(f"Unexpected type: {target}")
    if issubclass(target, ValuedNumber):
        return target
    raise UnsupportedTypeError(f"Unexpected type: {target}")


def _int_bits(rep: type) -> float:
    if rep is int:
        return math.inf
    return np.iinfo(rep).bits


def widen(value: Number, target: type) -> Number:
    """
    Convert `value` to the representation `target` if that never loses range.

    Allowed conversions
    -------------------
    - identity (same representation)
    - integer -> float, integer -> np.float32, np.float32 -> float
    - numpy integer -> wider numpy integer or Python int

    Raises
    ------
    UnsupportedTypeError
        If `value` or `target` is outside the supported numeric set.
    TypeMismatchError
        For narrowing conversions and any conversion to or from a custom type.
    """
    src = representation(value)
    dst = _target_representation(target)
    if src is dst:
        return value

    src_is_int = src is int or issubclass(src, np.signedinteger)
    dst_is_int = dst is int or issubclass(dst, np.signedinteger)

    if dst is float and (src_is_int or src is np.float32):
        return target(_as_double(value))
    if dst is np.float32 and src_is_int:
        return np.float32(_as_double(value))
    if src_is_int and dst_is_int and _int_bits(dst) >= _int_bits(src):
        return dst(value)
    raise TypeMismatchError(f"Cannot widen {src.__name__} to {dst.__name__}.")


def isclose(a: N, b: N, tol: Optional[ToleranceConfig] = None) -> bool:
    """
    Compare two values of the same representation.

    Integers and custom numbers compare exactly. Floats use `tol`, or the
    default tolerance of their kind (see ``ToleranceConfig.for_kind``).
    """
    kind = _binary_kind(a, b)
    if kind is NumericKind.INTEGER or kind is NumericKind.CUSTOM:
        return bool(a == b)
    cfg = tol if tol is not None else ToleranceConfig.for_kind(kind)
    return math.isclose(float(a), float(b), rel_tol=cfg.rtol, abs_tol=cfg.atol)
