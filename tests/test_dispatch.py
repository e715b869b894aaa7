import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from numvec.errors import (
    DivisionByZeroError,
    NumericOverflowError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from numvec.numeric import dispatch as nd
from numvec.numeric.fixed import Fixed
from numvec.numeric.kinds import NumericKind, kind_of, representation
from numvec.numeric.valued import ValuedNumber
from numvec.config import ToleranceConfig


@dataclass(frozen=True)
class Trace:
    """Custom number that only records which operations reached it."""
    log: tuple = ()

    def _then(self, op):
        return Trace(self.log + (op,))

    def negate(self): return self._then("negate")
    def add(self, other): return self._then("add")
    def sub(self, other): return self._then("sub")
    def mul(self, other): return self._then("mul")
    def div(self, other): return self._then("div")
    def sqrt(self): return self._then("sqrt")
    def inv_sqrt(self): return self._then("inv_sqrt")
    def atan2(self, other): return self._then("atan2")


# one pair of operands per representation
PAIRS = [
    (3, -7),
    (np.int32(3), np.int32(-7)),
    (np.float32(1.5), np.float32(-0.25)),
    (2.5, -0.75),
    (Fixed.from_float(1.5), Fixed.from_float(-0.25)),
]


############################
# TYPE CHECKS
############################

def test_kinds_of_supported_values():
    assert kind_of(1) is NumericKind.INTEGER
    assert kind_of(np.int64(1)) is NumericKind.INTEGER
    assert kind_of(np.float32(1)) is NumericKind.FLOAT32
    assert kind_of(1.0) is NumericKind.FLOAT64
    assert kind_of(np.float64(1.0)) is NumericKind.FLOAT64
    assert kind_of(Fixed.from_int(1)) is NumericKind.CUSTOM
    assert kind_of(Trace()) is NumericKind.CUSTOM


def test_float64_and_python_float_share_representation():
    assert representation(np.float64(1.0)) is representation(1.0)
    assert nd.add(np.float64(1.0), 2.0) == 3.0


@pytest.mark.parametrize(
    "value",
    [True, np.bool_(True), "1", None, 1j, Decimal("1"), Fraction(1, 2),
     np.float16(1), np.uint8(1), [1, 2]],
)
def test_check_type_rejects_unsupported(value):
    with pytest.raises(UnsupportedTypeError, match="Unexpected type"):
        nd.check_type(value)


def test_unsupported_operand_is_reported_before_mismatch():
    with pytest.raises(UnsupportedTypeError):
        nd.add(1, "2")
    with pytest.raises(UnsupportedTypeError):
        nd.negate(Decimal("1.5"))


@pytest.mark.parametrize(
    "a, b",
    [(1, 2.0), (np.int32(1), 1), (np.int32(1), np.int64(1)), (np.float32(1), 1.0),
     (1.0, Fixed.from_int(1)), (Fixed.from_int(1), Trace())],
)
def test_mixed_representations_raise(a, b):
    for op in (nd.add, nd.sub, nd.mul, nd.div, nd.atan2):
        with pytest.raises(TypeMismatchError):
            op(a, b)


def test_errors_are_catchable_as_builtin_exceptions():
    with pytest.raises(TypeError):
        nd.add(1, 2.0)
    with pytest.raises(ZeroDivisionError):
        nd.div(1, 0)


def test_custom_protocol_is_structural():
    assert isinstance(Fixed.from_int(1), ValuedNumber)
    assert isinstance(Trace(), ValuedNumber)
    assert not isinstance(1.0, ValuedNumber)


############################
# ALGEBRAIC PROPERTIES
############################

@pytest.mark.parametrize("a, b", PAIRS)
def test_add_and_mul_commute(a, b):
    assert nd.add(a, b) == nd.add(b, a)
    assert nd.mul(a, b) == nd.mul(b, a)


@pytest.mark.parametrize("a, b", PAIRS)
def test_sub_is_antisymmetric(a, b):
    assert nd.sub(a, b) == nd.negate(nd.sub(b, a))


@pytest.mark.parametrize("a, b", PAIRS)
def test_double_negation_is_identity(a, b):
    assert nd.negate(nd.negate(a)) == a
    assert nd.negate(nd.negate(b)) == b


@pytest.mark.parametrize("a, b", PAIRS)
def test_results_keep_operand_type(a, b):
    for op in (nd.add, nd.sub, nd.mul, nd.atan2):
        assert type(op(a, b)) is type(a)
    assert type(nd.negate(a)) is type(a)
    assert type(nd.sqrt(nd.mul(a, a))) is type(a)


def test_negate_float_zero_gives_negative_zero():
    assert math.copysign(1.0, nd.negate(0.0)) == -1.0
    assert np.signbit(nd.negate(np.float32(0.0)))
    assert nd.negate(0) == 0


def test_custom_values_delegate():
    t = Trace()
    assert nd.negate(t).log == ("negate",)
    assert nd.add(t, t).log == ("add",)
    assert nd.sub(t, t).log == ("sub",)
    assert nd.mul(t, t).log == ("mul",)
    assert nd.div(t, t).log == ("div",)
    assert nd.sqrt(t).log == ("sqrt",)
    assert nd.inv_sqrt(t).log == ("inv_sqrt",)
    assert nd.atan2(t, t).log == ("atan2",)


############################
# DIVISION
############################

def test_integer_division_truncates_toward_zero():
    assert nd.div(7, 2) == 3
    assert nd.div(-7, 2) == -3
    assert nd.div(7, -2) == -3
    assert nd.div(-7, -2) == 3
    assert nd.div(-8, 2) == -4
    assert nd.div(np.int32(-7), np.int32(2)) == np.int32(-3)
    assert type(nd.div(np.int32(-7), np.int32(2))) is np.int32


def test_integer_division_by_zero_raises():
    with pytest.raises(DivisionByZeroError):
        nd.div(5, 0)
    with pytest.raises(DivisionByZeroError):
        nd.div(np.int64(5), np.int64(0))


def test_float_division_by_zero_follows_ieee():
    assert nd.div(5.0, 0.0) == math.inf
    assert nd.div(-5.0, 0.0) == -math.inf
    assert math.isnan(nd.div(0.0, 0.0))

    r = nd.div(np.float32(1.0), np.float32(0.0))
    assert type(r) is np.float32
    assert np.isinf(r)


def test_float_overflow_does_not_raise():
    assert nd.mul(1e308, 10.0) == math.inf
    assert np.isinf(nd.mul(np.float32(3e38), np.float32(10.0)))


def test_fixed_width_integers_wrap():
    assert nd.add(np.int32(2**31 - 1), np.int32(1)) == np.int32(-2**31)


############################
# SQRT / INV_SQRT / ATAN2
############################

def test_integer_sqrt_truncates():
    assert nd.sqrt(16) == 4
    assert nd.sqrt(15) == 3
    assert type(nd.sqrt(15)) is int
    assert nd.sqrt(np.int32(99)) == np.int32(9)
    assert nd.sqrt(-4) == 0


def test_float_sqrt():
    assert nd.sqrt(2.0) == math.sqrt(2.0)
    assert math.isnan(nd.sqrt(-1.0))

    r = nd.sqrt(np.float32(2.0))
    assert type(r) is np.float32
    assert r == np.float32(math.sqrt(2.0))


def test_inv_sqrt():
    assert nd.inv_sqrt(4.0) == 0.5
    assert nd.inv_sqrt(0.0) == math.inf
    assert nd.inv_sqrt(np.float32(4.0)) == np.float32(0.5)
    assert nd.inv_sqrt(1) == 1
    assert nd.inv_sqrt(4) == 0
    with pytest.raises(DivisionByZeroError):
        nd.inv_sqrt(0)


def test_atan2_per_representation():
    assert nd.atan2(0.0, -1.0) == math.pi
    assert nd.atan2(1.0, 2.0) == math.atan2(1.0, 2.0)
    assert nd.atan2(np.float32(1.0), np.float32(2.0)) == np.float32(math.atan2(1.0, 2.0))
    # integers: 0.785 -> 0, 2.356 -> 2, -2.356 -> -2
    assert nd.atan2(1, 1) == 0
    assert nd.atan2(1, -1) == 2
    assert nd.atan2(-1, -1) == -2


############################
# WIDEN / ISCLOSE
############################

def test_widen_allowed():
    assert nd.widen(3, float) == 3.0
    assert type(nd.widen(3, float)) is float
    assert type(nd.widen(3, np.float32)) is np.float32
    assert nd.widen(np.float32(1.5), float) == 1.5
    assert type(nd.widen(np.int32(5), np.int64)) is np.int64
    assert type(nd.widen(np.int32(5), int)) is int
    assert nd.widen(2.0, np.float64) == 2.0


def test_widen_rejects_narrowing():
    with pytest.raises(TypeMismatchError):
        nd.widen(1.5, int)
    with pytest.raises(TypeMismatchError):
        nd.widen(1.5, np.float32)
    with pytest.raises(TypeMismatchError):
        nd.widen(np.int64(5), np.int32)
    with pytest.raises(TypeMismatchError):
        nd.widen(5, np.int64)
    with pytest.raises(TypeMismatchError):
        nd.widen(Fixed.from_int(1), float)
    with pytest.raises(UnsupportedTypeError):
        nd.widen(1, str)


def test_isclose():
    assert nd.isclose(0.1 + 0.2, 0.3)
    assert not nd.isclose(1.0, 1.001)
    assert nd.isclose(1.0, 1.001, ToleranceConfig(rtol=1e-2))
    assert nd.isclose(np.float32(0.1) + np.float32(0.2), np.float32(0.3))
    assert nd.isclose(1, 1)
    assert not nd.isclose(1, 2)
    assert nd.isclose(Fixed.from_int(2), Fixed.from_int(2))
    with pytest.raises(TypeMismatchError):
        nd.isclose(1, 1.0)


def test_huge_python_ints_raise_typed_overflow():
    big = 10**400
    with pytest.raises(NumericOverflowError):
        nd.sqrt(big)
    with pytest.raises(NumericOverflowError):
        nd.inv_sqrt(big)
    with pytest.raises(NumericOverflowError):
        nd.atan2(big, 1)
    with pytest.raises(NumericOverflowError):
        nd.widen(big, float)
    with pytest.raises(OverflowError):
        nd.sqrt(-big)
    # exact integer arithmetic is unaffected
    assert nd.add(big, 1) - big == 1
    assert nd.sqrt(10**300) == int(math.sqrt(1e300))
