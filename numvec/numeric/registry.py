from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from numvec.numeric.fixed import Fixed
from numvec.numeric.valued import ValuedNumber


@dataclass(frozen=True, slots=True)
class NumberType:
    """
    Serialization entry for a custom (``ValuedNumber``) type.

    Parameters
    ----------
    name : str
        Identifier stored in serialized data (e.g. the "type" field of a vector).
    cls : type
        The custom number class.
    encode : callable
        Converts an instance into a YAML/JSON friendly scalar.
    decode : callable
        Inverse of `encode`.
    """
    name: str
    cls: type
    encode: Callable[[Any], Any]
    decode: Callable[[Any], Any]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("NumberType.name must be a non-empty string.")
        if not isinstance(self.cls, type) or not issubclass(self.cls, ValuedNumber):
            raise TypeError(f"NumberType.cls must implement ValuedNumber, got {self.cls!r}.")


_PRESETS: Dict[str, NumberType] = {
    "fixed16": NumberType(
        name="fixed16",
        cls=Fixed,
        encode=lambda f: f.raw,
        decode=lambda raw: Fixed(int(raw)),
    ),
}

for k, t in _PRESETS.items():
    if k != t.name:
        raise RuntimeError(f"Preset key {k!r} != number type name {t.name!r}")


def get_number_type(name: str) -> NumberType:
    """
    Retrieve a registered custom number type by name.

    Raises
    ------
    KeyError
        If the name is unknown.
    """
    try:
        return _PRESETS[name]
    except KeyError as e:
        raise KeyError(f"Unknown number type {name!r}. Available: {list_number_types()}") from e


def name_of(cls: type) -> str:
    """Return the registered name of `cls`; raises KeyError if it was never registered."""
    for k, t in _PRESETS.items():
        if t.cls is cls:
            return k
    raise KeyError(f"Number type {cls.__name__!r} is not registered. Use register_number_type().")


def list_number_types() -> List[str]:
    """List registered custom number type names."""
    return sorted(_PRESETS.keys())


def register_number_type(
    name: str,
    cls: type,
    encode: Callable[[Any], Any],
    decode: Callable[[Any], Any],
    *,
    overwrite: bool = False,
) -> NumberType:
    """
    Register a custom number type so vectors of it can be serialized.

    Parameters
    ----------
    name:
        Name stored in serialized data.
    cls:
        A class implementing the ValuedNumber protocol.
    encode, decode:
        Conversion to and from a plain scalar.
    overwrite:
        If False (default), raises if `name` already exists.
    """
    k = name.strip()
    if not k:
        raise ValueError("Number type name must be a non-empty string.")
    if (k in _PRESETS) and not overwrite:
        raise KeyError(f"Number type {k!r} already exists. Use overwrite=True to replace it.")
    entry = NumberType(name=k, cls=cls, encode=encode, decode=decode)
    _PRESETS[k] = entry
    return entry
