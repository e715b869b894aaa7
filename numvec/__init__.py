"""
numvec: arithmetic written once for int, float32, float64 and custom numbers,
and a 2D vector type built on top of it.
"""
from .errors import (
    NumvecError,
    UnsupportedTypeError,
    TypeMismatchError,
    DivisionByZeroError,
    InvalidIndexError,
    BoundsError,
    NumericOverflowError,
)
from .numeric import (
    NumericKind,
    ValuedNumber,
    Fixed,
    check_type,
    kind_of,
    widen,
    register_number_type,
)
from .config import ToleranceConfig
from .geometry import Vector2
from .io.vectors import save_vectors, load_vectors

__version__ = "0.1.0"
