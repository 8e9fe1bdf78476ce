"""Line renderer for diff trees.

Turns a Diff into YAML-like lines such as::

      Properties:
  -     BucketName: "old"
  +     BucketName: "new"
        Tags:
          - Key: "team"
  -         Value: "a"
  +         Value: "b"

Every line is ``<icon> <lead><key: ><literal>``. The lead is the
indentation plus any array markers (``- ``) still waiting to be printed.
Markers are printed once, on the first line an element produces; after
that the lead is blanked to spaces of the same width so columns line up.

Rendering is a pure recursive descent: each call returns its own list of
lines and the caller concatenates them.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, List, Mapping, Optional, Union

from rich.color import ColorSystem
from rich.style import Style

from .json_diff import build_diff, has_changes
from .types import (
    Action,
    ArrayNode,
    Diff,
    DiffNode,
    ObjectNode,
    Primitive,
    RenderOptions,
    Replace,
)

logger = logging.getLogger(__name__)

ARRAY_MARKER = "- "
NESTED_INDENT = "  "

ICONS = {
    Action.ADD: "+",
    Action.REMOVE: "-",
    Action.DEFAULT: " ",
}

COLORS = {
    Action.ADD: "green",
    Action.REMOVE: "red",
    Action.DEFAULT: "white",
}

OptionsLike = Union[RenderOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class Line:
    """A rendered line before the icon and colour are applied."""

    action: Action
    text: str


def get_object_diff(
    before: Any,
    after: Any,
    options: OptionsLike = None,
    change_notes: Optional[Mapping[str, str]] = None,
    key: str = "",
) -> List[str]:
    """Diff two JSON values and render the result as text lines."""
    return get_diff_lines(build_diff(before, after), options, change_notes, key)


def get_diff_lines(
    diff: Diff,
    options: OptionsLike = None,
    change_notes: Optional[Mapping[str, str]] = None,
    key: str = "",
    array_prefix: str = "",
    path: str = "",
) -> List[str]:
    """Render a diff tree as formatted lines.

    Args:
        diff: Tree produced by build_diff()
        options: RenderOptions, or a mapping accepted by RenderOptions.from_dict
        change_notes: Notes keyed by slash-joined path, appended as `` # note``
        key: Key to print for the root node (e.g. a resource logical id)
        array_prefix: Pending lead for the first line, e.g. ``"  - "``
        path: Path of the parent of the root node
    """
    opts = _coerce_options(options)
    renderer = _Renderer(opts, change_notes or {})
    lines = renderer.render_diff(diff, key, array_prefix, "", _join_path(path, key))
    logger.debug("rendered %d lines for %r", len(lines), key or path or "<root>")
    return [format_line(line, opts) for line in lines]


def format_line(line: Line, options: RenderOptions) -> str:
    icon = options.icon_override or ICONS[line.action]
    text = f"{icon} {line.text}"
    if not options.show_color:
        return text
    color = options.color_override or COLORS[line.action]
    return _style(color).render(text, color_system=ColorSystem.STANDARD)


def json_literal(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class _Renderer:
    def __init__(self, options: RenderOptions, change_notes: Mapping[str, str]):
        self.options = options
        self.change_notes = change_notes

    def render_diff(
        self,
        diff: Diff,
        key: str,
        lead: str,
        marker: str,
        path: str,
        force: Optional[Action] = None,
    ) -> List[Line]:
        if (
            force is None
            and not self.options.show_unchanged_properties
            and not has_changes(diff)
        ):
            return []

        if isinstance(diff, Replace):
            removed = self.render_node(
                diff.before,
                Action.REMOVE,
                key,
                lead,
                marker,
                path,
                force=Action.REMOVE,
                annotate=False,
            )
            # Outer markers are only repeated when the kind changed. Two
            # non-empty containers of the same kind share the element's
            # marker; otherwise the after side repeats it.
            if diff.before.kind is diff.after.kind:
                if _is_open(diff.before) and _is_open(diff.after):
                    lead, marker = _blank(lead + marker), ""
                else:
                    lead = _blank(lead)
            added = self.render_node(
                diff.after, Action.ADD, key, lead, marker, path, force=Action.ADD
            )
            return removed + added

        return self.render_node(
            diff.node, force or diff.action, key, lead, marker, path, force=force
        )

    def render_node(
        self,
        node: DiffNode,
        action: Action,
        key: str,
        lead: str,
        marker: str,
        path: str,
        force: Optional[Action] = None,
        annotate: bool = True,
    ) -> List[Line]:
        head = lead + marker
        label = f"{key}: " if key else ""

        if isinstance(node, Primitive):
            lines = [Line(action, f"{head}{label}{json_literal(node.value)}")]
        elif isinstance(node, ObjectNode) and not node.properties:
            lines = [Line(action, f"{head}{label}{{}}")]
        elif isinstance(node, ArrayNode) and not node.items:
            lines = [Line(action, f"{head}{label}[]")]
        else:
            lines = self._render_children(node, action, key, head, path, force)

        if annotate and lines:
            note = self.change_notes.get(path)
            if note:
                lines[0] = replace(lines[0], text=f"{lines[0].text} # {note}")
        return lines

    def _render_children(
        self,
        node: DiffNode,
        action: Action,
        key: str,
        head: str,
        path: str,
        force: Optional[Action],
    ) -> List[Line]:
        lines: List[Line] = []
        if key:
            lines.append(Line(action, f"{head}{key}:"))
            lead = _blank(head) + NESTED_INDENT
        else:
            lead = head

        if isinstance(node, ObjectNode):
            children = [
                (child_key, child, "", _join_path(path, child_key))
                for child_key, child in node.properties.items()
            ]
        elif isinstance(node, ArrayNode):
            children = [
                ("", item, ARRAY_MARKER, _join_path(path, str(index)))
                for index, item in enumerate(node.items)
            ]
        else:
            raise TypeError(f"Unexpected diff node: {node!r}")

        for child_key, child, marker, child_path in children:
            child_lines = self.render_diff(
                child, child_key, lead, marker, child_path, force
            )
            if child_lines:
                lead = _blank(lead)
            lines.extend(child_lines)
        return lines


def _blank(lead: str) -> str:
    return " " * len(lead)


def _is_open(node: DiffNode) -> bool:
    """True for a container that renders its children rather than a literal."""
    if isinstance(node, ObjectNode):
        return bool(node.properties)
    if isinstance(node, ArrayNode):
        return bool(node.items)
    return False


def _join_path(path: str, part: str) -> str:
    if not part:
        return path
    if not path:
        return part
    return f"{path}/{part}"


def _coerce_options(options: OptionsLike) -> RenderOptions:
    if isinstance(options, RenderOptions):
        return options
    return RenderOptions.from_dict(options)


@lru_cache(maxsize=None)
def _style(color: str) -> Style:
    return Style(color=color)


__all__ = [
    "ARRAY_MARKER",
    "COLORS",
    "ICONS",
    "Line",
    "format_line",
    "get_diff_lines",
    "get_object_diff",
    "json_literal",
]
