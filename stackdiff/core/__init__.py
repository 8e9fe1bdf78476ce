"""Core types and logic for stackdiff."""

from .canon import canon, deep_equal, fingerprint, sha256_hex
from .classify import classify
from .errors import (
    ChangeSetError,
    InvalidOptionsError,
    InvalidValueError,
    StackDiffError,
)
from .json_diff import (
    MATCH_THRESHOLD,
    build_array_diff,
    build_diff,
    build_node,
    build_object_diff,
    has_changes,
    matches,
)
from .render import Line, format_line, get_diff_lines, get_object_diff
from .types import (
    Action,
    ArrayNode,
    Change,
    Diff,
    DiffNode,
    ObjectNode,
    Primitive,
    RenderOptions,
    Replace,
    ValueKind,
)

__all__ = [
    # Data model
    "Action",
    "ValueKind",
    "Primitive",
    "ObjectNode",
    "ArrayNode",
    "DiffNode",
    "Change",
    "Replace",
    "Diff",
    "RenderOptions",
    # Equality
    "canon",
    "deep_equal",
    "fingerprint",
    "sha256_hex",
    # Comparison
    "classify",
    "build_diff",
    "build_node",
    "build_object_diff",
    "build_array_diff",
    "matches",
    "has_changes",
    "MATCH_THRESHOLD",
    # Rendering
    "Line",
    "format_line",
    "get_diff_lines",
    "get_object_diff",
    # Exceptions
    "StackDiffError",
    "InvalidValueError",
    "InvalidOptionsError",
    "ChangeSetError",
]
