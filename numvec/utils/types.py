from __future__ import annotations

from typing import TypeVar, Union

import numpy as np

from numvec.numeric.valued import ValuedNumber

Integer = Union[int, np.signedinteger]
Float32 = np.float32
Float64 = float  # np.float64 is a float subclass
Number = Union[Integer, Float32, Float64, ValuedNumber]

N = TypeVar("N")  # one numeric representation, shared by every operand of a call

__all__ = [
    "Integer", "Float32", "Float64", "Number",
    "N",
]
