from __future__ import annotations

import numbers
from dataclasses import asdict, dataclass, fields, replace as dc_replace
from typing import Any, Dict, Mapping

from ..config import settings
from ..utils.errors import InvalidParameterError

PARAM_RANGES = settings.PARAM_RANGES


def check_range(name: str, value: Any) -> int:
    """Validate one slider value against PARAM_RANGES and return it as int."""
    if name not in PARAM_RANGES:
        raise InvalidParameterError(f"Unknown adjustment parameter '{name}'", parameter=name, value=value)
    # bool is an int subclass but never a valid slider value
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            f"Parameter '{name}' must be an integer, got {type(value).__name__}",
            parameter=name,
            value=value,
        )
    value = int(value)
    low, high, _ = PARAM_RANGES[name]
    if not low <= value <= high:
        raise InvalidParameterError(
            f"Parameter '{name}'={value} is outside [{low}, {high}]",
            parameter=name,
            value=value,
        )
    return value


@dataclass(frozen=True)
class AdjustmentParameters:
    """Immutable snapshot of the six retouch sliders."""

    brightness: int = 0
    contrast: int = 0
    shadows: int = 0
    highlights: int = 0
    smoothing: int = 0
    sharpness: int = 0

    def validate(self) -> "AdjustmentParameters":
        for f in fields(self):
            check_range(f.name, getattr(self, f.name))
        return self

    @property
    def is_neutral(self) -> bool:
        return all(getattr(self, f.name) == PARAM_RANGES[f.name][2] for f in fields(self))

    def clamped(self) -> "AdjustmentParameters":
        """Copy with every value rounded and clamped into its declared range."""
        values = {}
        for f in fields(self):
            low, high, _ = PARAM_RANGES[f.name]
            raw = getattr(self, f.name)
            try:
                number = int(round(float(raw)))
            except (TypeError, ValueError, OverflowError) as e:
                raise InvalidParameterError(
                    f"Parameter '{f.name}' must be numeric, got {raw!r}",
                    parameter=f.name,
                    value=raw,
                    original_error=e,
                ) from e
            values[f.name] = max(low, min(high, number))
        return AdjustmentParameters(**values)

    def replace(self, **changes: int) -> "AdjustmentParameters":
        return dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, int]:
        # NumPy integer scalars are not JSON serializable
        return {k: int(v) if isinstance(v, numbers.Integral) else v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict: bool = True) -> "AdjustmentParameters":
        """
        Build parameters from a mapping such as a preset's "parameters" entry.

        Missing keys take their neutral value. With strict=True unknown keys and
        out-of-range values raise InvalidParameterError; otherwise unknown keys
        are ignored and values are clamped.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown and strict:
            raise InvalidParameterError(f"Unknown adjustment parameter(s): {', '.join(sorted(unknown))}")
        params = cls(**{k: v for k, v in data.items() if k in known})
        return params.validate() if strict else params.clamped()
