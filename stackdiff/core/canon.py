"""Canonical JSON encoding used for value equality.

Two values are deep-equal exactly when their canonical encodings match.

Guarantees:
- canon(v) is deterministic: same input always yields identical bytes
- Dict key order is irrelevant (sorted internally)
- Booleans never equal numbers (True != 1)
- Integral floats collapse to ints (1.0 == 1), as JSON has one number type
- Strings are compared verbatim
- NaN and infinities equal only themselves, never their string spelling
"""
from __future__ import annotations

import hashlib
import json
import math
from typing import Any

from .errors import InvalidValueError


def canon(value: Any) -> bytes:
    """Canonicalize a JSON value to compact, sorted-key UTF-8 bytes."""
    return json.dumps(
        _normalize_value(value),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Compute SHA-256 hex digest of bytes."""
    return hashlib.sha256(data).hexdigest()


def fingerprint(value: Any) -> str:
    """Short stable fingerprint of a JSON value, for log messages."""
    return sha256_hex(canon(value))[:12]


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality of two JSON values."""
    if a is b:
        return True
    return canon(a) == canon(b)


def _normalize_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # Non-finite floats encode as bare NaN/Infinity tokens, which no
        # string can collide with.
        if not math.isfinite(value):
            return value
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return {str(k): _normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_value(v) for v in value]
    raise InvalidValueError(value)
