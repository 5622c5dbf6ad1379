from __future__ import annotations

import math
import numbers


class InvalidParameterError(ValueError):
    """Raised when surface parameters cannot describe a mesh grid."""


def validate_segments(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}.")
    if value < 1:
        raise InvalidParameterError(f"{name} must be >= 1, got {value}.")
    return int(value)


def validate_positive(name: str, value: object) -> float:
    number = _as_finite(name, value)
    if number <= 0.0:
        raise InvalidParameterError(f"{name} must be > 0, got {number}.")
    return number


def validate_angle(name: str, value: object) -> float:
    return _as_finite(name, value)


def _as_finite(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}.")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidParameterError(f"{name} must be finite, got {number}.")
    return number
