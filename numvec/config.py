from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from numvec.numeric.kinds import NumericKind


@dataclass(frozen=True, slots=True)
class ToleranceConfig:
    """
    Tolerances used to compare floating-point values.

    Parameters
    ----------
    rtol
        Relative tolerance, as in ``math.isclose(rel_tol=...)``.
    atol
        Absolute tolerance, as in ``math.isclose(abs_tol=...)``.

    Notes
    -----
    Integer and custom values always compare exactly; their default
    tolerance is zero and is only used for documentation purposes.
    """
    rtol: float = 1e-12
    atol: float = 1e-15

    def __post_init__(self) -> None:
        object.__setattr__(self, "rtol", float(self.rtol))
        object.__setattr__(self, "atol", float(self.atol))
        self.validate()

    def validate(self) -> None:
        for name in ("rtol", "atol"):
            v = getattr(self, name)
            if not math.isfinite(v):
                raise ValueError(f"tolerance.{name} must be finite, got {v}.")
            if v < 0:
                raise ValueError(f"tolerance.{name} must be >= 0, got {v}.")

    @classmethod
    def for_kind(cls, kind: NumericKind) -> "ToleranceConfig":
        """Default tolerance for values of `kind`."""
        if kind is NumericKind.FLOAT32:
            return cls(rtol=1e-6, atol=1e-7)
        if kind is NumericKind.FLOAT64:
            return cls(rtol=1e-12, atol=1e-15)
        return cls(rtol=0.0, atol=0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rtol": float(self.rtol),
            "atol": float(self.atol),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ToleranceConfig":
        return cls(
            rtol=float(d.get("rtol", 1e-12)),
            atol=float(d.get("atol", 1e-15)),
        )

    def to_yaml(self, path: str) -> None:
        from numvec.io import dump_yaml

        dump_yaml({"tolerance": self.to_dict()}, path)

    @classmethod
    def from_yaml(cls, path: str) -> "ToleranceConfig":
        from numvec.io import load_yaml

        d = load_yaml(path)
        try:
            return cls.from_dict(d["tolerance"])
        except KeyError as e:
            raise KeyError("The specified YAML file does not contain a field called 'tolerance'") from e
