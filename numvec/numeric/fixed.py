# numvec/numeric/fixed.py
from __future__ import annotations

import math
from dataclasses import dataclass

from numvec.errors import DivisionByZeroError

FRACTION_BITS: int = 16
ONE: int = 1 << FRACTION_BITS


def _tdiv(n: int, d: int) -> int:
    # integer quotient rounded toward zero
    q = abs(n) // abs(d)
    return q if (n < 0) == (d < 0) else -q


@dataclass(frozen=True, slots=True)
class Fixed:
    """
    Binary fixed-point number with 16 fractional bits.

    The value represented is ``raw / 2**16``. `raw` is a Python int, so the
    integer part is not bounded. Products and quotients are truncated toward
    zero, which keeps ``a*b + b*(-a) == 0`` exact.

    This type implements the ``ValuedNumber`` protocol and can be used
    anywhere a built-in numeric representation can, e.g. as Vector2 components.

    Parameters
    ----------
    raw : int
        Scaled integer value.

    Example
    -------
    >>> Fixed.from_float(1.5).mul(Fixed.from_int(2))
    Fixed(3.0)
    """
    raw: int

    def __post_init__(self) -> None:
        if isinstance(self.raw, bool) or not isinstance(self.raw, int):
            raise TypeError(f"Fixed.raw must be an int, got {type(self.raw)}.")

    @classmethod
    def from_int(cls, value: int) -> "Fixed":
        return cls(int(value) << FRACTION_BITS)

    @classmethod
    def from_float(cls, value: float) -> "Fixed":
        """Nearest representable value to `value` (must be finite)."""
        if not math.isfinite(value):
            raise ValueError(f"Fixed cannot represent {value}.")
        return cls(round(float(value) * ONE))

    def to_float(self) -> float:
        return self.raw / ONE

    def __float__(self) -> float:
        return self.to_float()

    def __repr__(self) -> str:
        return f"Fixed({self.to_float()!r})"

    # --- ValuedNumber ---------------------------------------------------------

    def negate(self) -> "Fixed":
        return Fixed(-self.raw)

    def add(self, other: "Fixed") -> "Fixed":
        return Fixed(self.raw + other.raw)

    def sub(self, other: "Fixed") -> "Fixed":
        return Fixed(self.raw - other.raw)

    def mul(self, other: "Fixed") -> "Fixed":
        return Fixed(_tdiv(self.raw * other.raw, ONE))

    def div(self, other: "Fixed") -> "Fixed":
        if other.raw == 0:
            raise DivisionByZeroError("Fixed-point division by zero.")
        return Fixed(_tdiv(self.raw * ONE, other.raw))

    def sqrt(self) -> "Fixed":
        if self.raw < 0:
            raise ValueError(f"sqrt of negative value {self!r}.")
        # sqrt(raw / ONE) * ONE == sqrt(raw * ONE)
        return Fixed(math.isqrt(self.raw * ONE))

    def inv_sqrt(self) -> "Fixed":
        if self.raw == 0:
            raise DivisionByZeroError("inv_sqrt of fixed-point zero.")
        return Fixed.from_int(1).div(self.sqrt())

    def atan2(self, other: "Fixed") -> "Fixed":
        # the ratio is scale-free, so raw values can be used directly
        return Fixed.from_float(math.atan2(self.raw, other.raw))
