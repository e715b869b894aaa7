from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import Any, Dict, Generic, Iterable, Iterator, Optional, Tuple, Union

import numpy as np

from numvec.config import ToleranceConfig
from numvec.errors import BoundsError, InvalidIndexError
from numvec.numeric import dispatch as nd
from numvec.numeric.kinds import NumericKind, check_same, kind_of, representation
from numvec.numeric.registry import get_number_type, name_of
from numvec.utils.types import N


@dataclass(frozen=True, slots=True)
class Vector2(Generic[N]):
    """
    Immutable 2D vector over one numeric representation.

    Both components must share one representation: ``int`` (or a signed numpy
    integer), ``np.float32``, ``float``, or a custom ``ValuedNumber`` type.
    Every scalar step is performed by ``numvec.numeric.dispatch``, so the
    algebra below behaves the same for all representations, including their
    division-by-zero policy.

    Parameters
    ----------
    x, y
        Components.

    Raises
    ------
    UnsupportedTypeError
        If a component is outside the supported numeric set.
    TypeMismatchError
        If the components have different representations, e.g. ``Vector2(1, 2.0)``.

    Notes
    -----
    Arithmetic methods accept three call forms, all giving identical results:

    >>> v = Vector2(1.0, 2.0)
    >>> v.add(Vector2(3.0, 3.0)) == v.add(3.0) == v.add(3.0, 3.0)
    True
    """
    x: N
    y: N

    # keep numpy scalars from turning `np.float32(2) * v` into an array op
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        check_same(self.x, self.y)

    ############################
    # CONSTRUCTION
    ############################

    @classmethod
    def from_components(cls, x: N, y: N) -> "Vector2[N]":
        return cls(x, y)

    @classmethod
    def from_scalar(cls, value: N) -> "Vector2[N]":
        """Vector with both components equal to `value`."""
        return cls(value, value)

    @classmethod
    def from_vector(cls, other: "Vector2[Any]", as_type: Optional[type] = None) -> "Vector2[Any]":
        """
        Copy `other`, optionally widening its components to `as_type`.

        Widening follows ``dispatch.widen``: int -> float32 -> float, and
        numpy integers to wider integers. Narrowing raises TypeMismatchError.
        """
        if as_type is None:
            return cls(other.x, other.y)
        return cls(nd.widen(other.x, as_type), nd.widen(other.y, as_type))

    @classmethod
    def from_sequence(cls, seq: Iterable[N]) -> "Vector2[N]":
        """
        Build a vector from the first two elements of `seq` (list, tuple, ndarray, ...).

        Raises
        ------
        BoundsError
            If `seq` has fewer than two elements.
        """
        head = list(islice(iter(seq), 2))
        if len(head) < 2:
            raise BoundsError(f"Expected a sequence of at least 2 elements, got {len(head)}.")
        return cls(head[0], head[1])

    ############################
    # ACCESS
    ############################

    @property
    def kind(self) -> NumericKind:
        return kind_of(self.x)

    def get(self, index: int) -> N:
        """Component by index: 0 -> x, 1 -> y."""
        if isinstance(index, (int, np.integer)) and not isinstance(index, bool):
            if index == 0:
                return self.x
            if index == 1:
                return self.y
        raise InvalidIndexError(f"Unexpected value: {index!r}")

    def __getitem__(self, index: int) -> N:
        return self.get(index)

    def __iter__(self) -> Iterator[N]:
        yield self.x
        yield self.y

    def __len__(self) -> int:
        return 2

    def to_list(self) -> list:
        return [self.x, self.y]

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        if dtype is None and self.kind is NumericKind.CUSTOM:
            dtype = object
        return np.array([self.x, self.y], dtype=dtype)

    ############################
    # ALGEBRA
    ############################

    @staticmethod
    def _operand(a: Union["Vector2[N]", N], b: Optional[N], *, broadcast: bool = True) -> Tuple[N, N]:
        # resolve the (vector | scalar | two scalars) call forms
        if isinstance(a, Vector2):
            if b is not None:
                raise TypeError("A second operand is not allowed when the first one is a Vector2.")
            return a.x, a.y
        if b is None:
            if not broadcast:
                raise TypeError("Expected a Vector2 or two scalars.")
            return a, a
        return a, b

    def perpendicular(self) -> "Vector2[N]":
        """``(y, -x)``: the vector rotated by -90 degrees."""
        return Vector2(self.y, nd.negate(self.x))

    def add(self, a: Union["Vector2[N]", N], b: Optional[N] = None) -> "Vector2[N]":
        ox, oy = self._operand(a, b)
        return Vector2(nd.add(self.x, ox), nd.add(self.y, oy))

    def sub(self, a: Union["Vector2[N]", N], b: Optional[N] = None) -> "Vector2[N]":
        ox, oy = self._operand(a, b)
        return Vector2(nd.sub(self.x, ox), nd.sub(self.y, oy))

    def mul(self, a: Union["Vector2[N]", N], b: Optional[N] = None) -> "Vector2[N]":
        ox, oy = self._operand(a, b)
        return Vector2(nd.mul(self.x, ox), nd.mul(self.y, oy))

    def div(self, a: Union["Vector2[N]", N], b: Optional[N] = None) -> "Vector2[N]":
        ox, oy = self._operand(a, b)
        return Vector2(nd.div(self.x, ox), nd.div(self.y, oy))

    def negate(self) -> "Vector2[N]":
        return Vector2(nd.negate(self.x), nd.negate(self.y))

    def dot(self, v: "Vector2[N]") -> N:
        return nd.add(nd.mul(self.x, v.x), nd.mul(self.y, v.y))

    def angle(self, v: "Vector2[N]") -> N:
        """
        Signed angle from this vector to `v`, in (-pi, pi].

        Computed as ``atan2(cross, dot)``, so ``u.angle(u) == 0`` exactly and
        ``u.angle(-u) == pi`` for double precision.
        """
        dot = nd.add(nd.mul(self.x, v.x), nd.mul(self.y, v.y))
        det = nd.sub(nd.mul(self.x, v.y), nd.mul(self.y, v.x))
        return nd.atan2(det, dot)

    def length_squared(self) -> N:
        return nd.add(nd.mul(self.x, self.x), nd.mul(self.y, self.y))

    def length(self) -> N:
        return nd.sqrt(self.length_squared())

    def distance_squared(self, a: Union["Vector2[N]", N], b: Optional[N] = None) -> N:
        """Squared distance to a point given as a Vector2 or as two coordinates."""
        ox, oy = self._operand(a, b, broadcast=False)
        return distance_squared(self.x, self.y, ox, oy)

    def distance(self, a: Union["Vector2[N]", N], b: Optional[N] = None) -> N:
        """Euclidean distance to a point given as a Vector2 or as two coordinates."""
        return nd.sqrt(self.distance_squared(a, b))

    def normalize(self, length: Optional[N] = None) -> "Vector2[N]":
        """
        Scale to unit length, or to `length` if given.

        Zero vectors are not special-cased: float components become nan,
        integer vectors raise DivisionByZeroError. Integer vectors are
        normalized with a truncated inverse length.
        """
        inv_length = nd.inv_sqrt(self.length_squared())
        if length is not None:
            inv_length = nd.mul(inv_length, length)
        return Vector2(nd.mul(self.x, inv_length), nd.mul(self.y, inv_length))

    def isclose(self, other: "Vector2[N]", tol: Optional[ToleranceConfig] = None) -> bool:
        """Componentwise ``dispatch.isclose``."""
        return nd.isclose(self.x, other.x, tol) and nd.isclose(self.y, other.y, tol)

    ############################
    # OPERATORS
    ############################

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.sub(other)

    def __mul__(self, other):
        return self.mul(other)

    def __rmul__(self, scalar):
        return Vector2(nd.mul(scalar, self.x), nd.mul(scalar, self.y))

    def __truediv__(self, other):
        return self.div(other)

    def __neg__(self):
        return self.negate()

    ############################
    # SERIALIZATION
    ############################

    def to_dict(self) -> Dict[str, Any]:
        kind = self.kind
        d: Dict[str, Any] = {"kind": kind.name}
        if kind is NumericKind.CUSTOM:
            entry = get_number_type(name_of(type(self.x)))
            d["type"] = entry.name
            d["x"] = entry.encode(self.x)
            d["y"] = entry.encode(self.y)
        elif kind is NumericKind.INTEGER:
            rep = representation(self.x)
            if rep is not int:
                d["dtype"] = np.dtype(rep).name
            d["x"] = int(self.x)
            d["y"] = int(self.y)
        else:
            d["x"] = float(self.x)
            d["y"] = float(self.y)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Vector2[Any]":
        try:
            kind = NumericKind[d["kind"]]
        except KeyError as e:
            raise ValueError(f"Unknown or missing vector kind {d.get('kind')!r}.") from e

        if kind is NumericKind.CUSTOM:
            decode = get_number_type(d["type"]).decode
        elif kind is NumericKind.INTEGER:
            dtype = d.get("dtype")
            decode = int if dtype is None else np.dtype(dtype).type
        elif kind is NumericKind.FLOAT32:
            decode = np.float32
        else:
            decode = float
        return cls(decode(d["x"]), decode(d["y"]))


############################
# COORDINATE FORMS
############################

def length(x: N, y: N) -> N:
    """Length of the vector (x, y) without building a Vector2."""
    return nd.sqrt(nd.add(nd.mul(x, x), nd.mul(y, y)))


def distance_squared(x1: N, y1: N, x2: N, y2: N) -> N:
    """Squared Euclidean distance between the points (x1, y1) and (x2, y2)."""
    tx = nd.sub(x1, x2)
    ty = nd.sub(y1, y2)
    return nd.add(nd.mul(tx, tx), nd.mul(ty, ty))


def distance(x1: N, y1: N, x2: N, y2: N) -> N:
    """Euclidean distance between the points (x1, y1) and (x2, y2)."""
    return nd.sqrt(distance_squared(x1, y1, x2, y2))
