"""Structural diff tree construction for JSON-like values.

build_diff() walks two values and classifies every position:

- None on both sides: unchanged null
- None on one side: the other side is an Add/Remove subtree
- Kind mismatch (primitive/array/object): Replace
- Primitives: unchanged when equal, otherwise Replace
- Objects: before-keys in order, then after-only keys; recurse on shared keys
- Arrays: greedy left-to-right alignment with lookahead (build_array_diff)

Fresh subtrees (added, removed, or either side of a Replace) carry their
action on every descendant, so an added object is Add all the way down.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from .canon import deep_equal
from .classify import classify
from .types import (
    Action,
    ArrayNode,
    Change,
    Diff,
    DiffNode,
    ObjectNode,
    Primitive,
    Replace,
    ValueKind,
)

logger = logging.getLogger(__name__)

# Minimum share of keys (objects) or index-aligned matching items (arrays)
# for two array elements to count as the same logical element.
MATCH_THRESHOLD = 0.5


def build_diff(before: Any, after: Any) -> Diff:
    """Compare two JSON values and return the classified diff tree."""
    if before is None and after is None:
        return Change(Action.DEFAULT, Primitive(None))
    if before is None:
        return Change(Action.ADD, build_node(after, Action.ADD))
    if after is None:
        return Change(Action.REMOVE, build_node(before, Action.REMOVE))

    before_kind = classify(before)
    after_kind = classify(after)
    if before_kind is not after_kind:
        return Replace(
            build_node(before, Action.REMOVE), build_node(after, Action.ADD)
        )

    if before_kind is ValueKind.PRIMITIVE:
        if deep_equal(before, after):
            return Change(Action.DEFAULT, Primitive(after))
        return Replace(Primitive(before), Primitive(after))
    if before_kind is ValueKind.ARRAY:
        return build_array_diff(before, after)
    return build_object_diff(before, after)


def build_node(value: Any, action: Action) -> DiffNode:
    """Build a node for a value that exists on one side only.

    Every descendant is tagged with ``action``.
    """
    kind = classify(value)
    if kind is ValueKind.PRIMITIVE:
        return Primitive(value)
    if kind is ValueKind.ARRAY:
        return ArrayNode([Change(action, build_node(item, action)) for item in value])
    return ObjectNode(
        {key: Change(action, build_node(item, action)) for key, item in value.items()}
    )


def build_object_diff(before: Dict[str, Any], after: Dict[str, Any]) -> Change:
    properties: Dict[str, Diff] = {}
    for key, value in before.items():
        if key not in after:
            properties[key] = Change(Action.REMOVE, build_node(value, Action.REMOVE))
        else:
            properties[key] = build_diff(value, after[key])
    for key, value in after.items():
        if key not in before:
            properties[key] = Change(Action.ADD, build_node(value, Action.ADD))
    return Change(Action.DEFAULT, ObjectNode(properties))


def build_array_diff(before: Sequence[Any], after: Sequence[Any]) -> Change:
    """Align two arrays element by element.

    Two cursors walk the arrays. At each step, in order:

    1. The current elements match: unchanged if equal, otherwise their
       recursive diff. Both cursors advance.
    2. The before element matches something later in ``after`` (or
       ``before`` is exhausted): the after element is an Add.
    3. The after element matches something later in ``before`` (or
       ``after`` is exhausted): the before element is a Remove.
    4. Otherwise the pair is a Replace.

    This is greedy: a decision is never revisited.
    """
    items: List[Diff] = []
    i = 0
    j = 0
    while i < len(before) or j < len(after):
        has_before = i < len(before)
        has_after = j < len(after)
        b = before[i] if has_before else None
        a = after[j] if has_after else None

        if has_before and has_after and matches(b, a):
            if deep_equal(b, a):
                items.append(Change(Action.DEFAULT, build_node(a, Action.DEFAULT)))
            elif classify(b) is classify(a):
                items.append(build_diff(b, a))
            else:
                items.append(_replace(b, a))
            i += 1
            j += 1
        elif not has_before or _matches_any(b, after[j + 1 :]):
            items.append(Change(Action.ADD, build_node(a, Action.ADD)))
            j += 1
        elif not has_after or _matches_any(a, before[i + 1 :]):
            items.append(Change(Action.REMOVE, build_node(b, Action.REMOVE)))
            i += 1
        else:
            items.append(_replace(b, a))
            i += 1
            j += 1

    if logger.isEnabledFor(logging.DEBUG):
        counts = {action: 0 for action in Action}
        for item in items:
            counts[item.action] += 1
        logger.debug(
            "aligned arrays of %d and %d items: %d unchanged/updated, "
            "%d added, %d removed, %d replaced",
            len(before),
            len(after),
            counts[Action.DEFAULT],
            counts[Action.ADD],
            counts[Action.REMOVE],
            counts[Action.REPLACE],
        )
    return Change(Action.DEFAULT, ArrayNode(items))


def matches(x: Any, y: Any) -> bool:
    """Decide whether two array elements are the same logical element.

    Equal values always match. Objects match when at least half of all
    their keys are shared; arrays match when at least half of the
    index-aligned pairs match (relative to the longer array). Distinct
    primitives and values of different kinds never match.
    """
    if deep_equal(x, y):
        return True
    kind = classify(x)
    if kind is not classify(y):
        return False
    if kind is ValueKind.PRIMITIVE:
        return False
    if kind is ValueKind.OBJECT:
        all_keys = set(x) | set(y)
        if not all_keys:
            return True
        shared = set(x) & set(y)
        return len(shared) / len(all_keys) >= MATCH_THRESHOLD
    if not x and not y:
        return True
    matching = sum(1 for left, right in zip(x, y) if matches(left, right))
    return matching / max(len(x), len(y)) >= MATCH_THRESHOLD


def has_changes(diff: Diff) -> bool:
    """Return True if the subtree holds anything other than unchanged values."""
    if isinstance(diff, Replace):
        return True
    if diff.action is not Action.DEFAULT:
        return True
    node = diff.node
    if isinstance(node, ObjectNode):
        return any(has_changes(child) for child in node.properties.values())
    if isinstance(node, ArrayNode):
        return any(has_changes(item) for item in node.items)
    return False


def _matches_any(value: Any, candidates: Sequence[Any]) -> bool:
    return any(matches(value, candidate) for candidate in candidates)


def _replace(before: Any, after: Any) -> Replace:
    return Replace(build_node(before, Action.REMOVE), build_node(after, Action.ADD))
