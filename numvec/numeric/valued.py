# numvec/numeric/valued.py
from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

V = TypeVar("V", bound="ValuedNumber")


@runtime_checkable
class ValuedNumber(Protocol):
    """
    Capability a user-defined number type implements to take part in dispatch.

    Every method takes and returns values of the implementing type: the
    dispatch layer guarantees that both operands of a binary method have the
    same concrete type before delegating, so implementations never need to
    handle foreign operands.

    Requirements
    ------------
    - Values are immutable: every method returns a new instance.
    - ``div`` and ``inv_sqrt`` decide their own division-by-zero policy
      (raise ``numvec.errors.DivisionByZeroError`` or return a sentinel).

    Example
    -------
    >>> from numvec.numeric.fixed import Fixed
    >>> isinstance(Fixed.from_float(1.5), ValuedNumber)
    True
    """
    def negate(self: V) -> V: ...
    def add(self: V, other: V) -> V: ...
    def sub(self: V, other: V) -> V: ...
    def mul(self: V, other: V) -> V: ...
    def div(self: V, other: V) -> V: ...
    def sqrt(self: V) -> V: ...
    def inv_sqrt(self: V) -> V: ...
    def atan2(self: V, other: V) -> V: ...
