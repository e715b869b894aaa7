from .kinds import (
    NumericKind,
    representation,
    kind_of,
    check_type,
    check_same,
)
from .valued import ValuedNumber
from .dispatch import (
    negate,
    add,
    sub,
    mul,
    div,
    sqrt,
    inv_sqrt,
    atan2,
    widen,
    isclose,
)
from .fixed import Fixed
from .registry import (
    NumberType,
    get_number_type,
    list_number_types,
    register_number_type,
)
