from __future__ import annotations

from typing import Any

from .errors import InvalidValueError
from .types import ValueKind

_PRIMITIVE_TYPES = (str, int, float, bool)


def classify(value: Any) -> ValueKind:
    """Classify a JSON value as primitive, array or object.

    None counts as a primitive. Tuples are treated like lists so callers
    can pass immutable sequences.
    """
    if value is None or isinstance(value, _PRIMITIVE_TYPES):
        return ValueKind.PRIMITIVE
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    raise InvalidValueError(value)
