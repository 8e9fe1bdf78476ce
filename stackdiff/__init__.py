from .changeset import (
    CHANGE_ACTIONS,
    ChangeSetReport,
    ChangeSetTotals,
    ResourceChange,
    render_change_set,
)
from .core import (
    # Data model
    Action,
    ArrayNode,
    Change,
    ChangeSetError,
    Diff,
    DiffNode,
    # Exceptions
    InvalidOptionsError,
    InvalidValueError,
    ObjectNode,
    Primitive,
    RenderOptions,
    Replace,
    StackDiffError,
    ValueKind,
    # Comparison
    build_array_diff,
    build_diff,
    classify,
    deep_equal,
    # Rendering
    get_diff_lines,
    get_object_diff,
    has_changes,
    matches,
)
from .version import STACKDIFF_VERSION

__all__ = [
    # Version
    "STACKDIFF_VERSION",
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
    # Comparison
    "classify",
    "deep_equal",
    "build_diff",
    "build_array_diff",
    "matches",
    "has_changes",
    # Rendering
    "get_diff_lines",
    "get_object_diff",
    # Change sets
    "CHANGE_ACTIONS",
    "ChangeSetReport",
    "ChangeSetTotals",
    "ResourceChange",
    "render_change_set",
    # Exceptions
    "StackDiffError",
    "InvalidValueError",
    "InvalidOptionsError",
    "ChangeSetError",
]
