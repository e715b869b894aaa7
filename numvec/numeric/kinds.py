from __future__ import annotations

from enum import Enum, auto
from typing import Any

import numpy as np

from numvec.errors import TypeMismatchError, UnsupportedTypeError
from numvec.numeric.valued import ValuedNumber


class NumericKind(Enum):
    """
    The closed set of numeric variants understood by the dispatch layer.

    Notes
    -----
    - INTEGER: Python ``int`` (``bool`` excluded) or a signed numpy integer scalar
    - FLOAT32: ``numpy.float32``
    - FLOAT64: Python ``float``, including ``numpy.float64``
    - CUSTOM: any object implementing the ``ValuedNumber`` protocol
    """
    INTEGER = auto()
    FLOAT32 = auto()
    FLOAT64 = auto()
    CUSTOM  = auto()


def representation(value: Any) -> type:
    """
    Return the representation key of `value`.

    Two values can be combined by a binary operation only if their keys are
    equal. Keys are concrete types: ``int``, a numpy signed integer type,
    ``np.float32``, ``float`` (shared by ``float`` and ``np.float64``), or the
    type of a custom number.

    Raises
    ------
    UnsupportedTypeError
        If `value` is not part of the supported numeric set.
    """
    if isinstance(value, (bool, np.bool_)):
        raise UnsupportedTypeError(f"Unexpected type: {type(value)}")
    if isinstance(value, np.float32):
        return np.float32
    if isinstance(value, float):
        return float
    if isinstance(value, np.signedinteger):
        return type(value)
    if isinstance(value, int):
        return int
    if isinstance(value, (np.generic, complex)):
        # other numpy scalars (float16, uint8, longdouble, ...) are not part of the tower
        raise UnsupportedTypeError(f"Unexpected type: {type(value)}")
    if isinstance(value, ValuedNumber):
        return type(value)
    raise UnsupportedTypeError(f"Unexpected type: {type(value)}")


def kind_of(value: Any) -> NumericKind:
    """Classify `value` into its NumericKind."""
    rep = representation(value)
    if rep is np.float32:
        return NumericKind.FLOAT32
    if rep is float:
        return NumericKind.FLOAT64
    if rep is int or issubclass(rep, np.signedinteger):
        return NumericKind.INTEGER
    return NumericKind.CUSTOM


def check_type(value: Any) -> None:
    """Raise UnsupportedTypeError unless `value` belongs to the supported set."""
    representation(value)


def check_same(a: Any, b: Any) -> type:
    """
    Check that `a` and `b` are supported and share one representation.

    Returns
    -------
    type
        The shared representation key.

    Raises
    ------
    UnsupportedTypeError
        If either operand is outside the supported set.
    TypeMismatchError
        If the operands have different representations (no implicit coercion).
    """
    ra = representation(a)
    rb = representation(b)
    if ra is not rb:
        raise TypeMismatchError(
            f"Operands must share one numeric representation, got {ra.__name__} and {rb.__name__}."
        )
    return ra
