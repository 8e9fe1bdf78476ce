from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import InvalidOptionsError


class ValueKind(str, Enum):
    """Shape of a JSON value as seen by the comparator."""

    PRIMITIVE = "primitive"
    ARRAY = "array"
    OBJECT = "object"


class Action(str, Enum):
    """Classification of a position in the diff tree."""

    DEFAULT = "Default"
    ADD = "Add"
    REMOVE = "Remove"
    REPLACE = "Replace"


@dataclass(frozen=True)
class Primitive:
    value: Any

    @property
    def kind(self) -> ValueKind:
        return ValueKind.PRIMITIVE


@dataclass(frozen=True)
class ObjectNode:
    # Insertion ordered: before-keys first, then after-only keys.
    properties: Dict[str, "Diff"] = field(default_factory=dict)

    @property
    def kind(self) -> ValueKind:
        return ValueKind.OBJECT


@dataclass(frozen=True)
class ArrayNode:
    items: List["Diff"] = field(default_factory=list)

    @property
    def kind(self) -> ValueKind:
        return ValueKind.ARRAY


DiffNode = Union[Primitive, ObjectNode, ArrayNode]


@dataclass(frozen=True)
class Change:
    """
    A node that is unchanged, added or removed.

    Attributes:
        action: Action.DEFAULT, Action.ADD or Action.REMOVE
        node: The classified content at this position
    """

    action: Action
    node: DiffNode


@dataclass(frozen=True)
class Replace:
    """
    A position whose value changed in a way that needs both sides shown.

    The two nodes may have different kinds (e.g. a string that became an
    object) or be primitives with different values.
    """

    before: DiffNode
    after: DiffNode

    @property
    def action(self) -> Action:
        return Action.REPLACE


Diff = Union[Change, Replace]


_OPTION_ALIASES = {
    "showColor": "show_color",
    "show_color": "show_color",
    "showUnchangedProperties": "show_unchanged_properties",
    "show_unchanged_properties": "show_unchanged_properties",
    "colorOverride": "color_override",
    "color_override": "color_override",
    "iconOverride": "icon_override",
    "icon_override": "icon_override",
}


@dataclass(frozen=True)
class RenderOptions:
    """
    Configuration for the line renderer.

    Attributes:
        show_color: Wrap each line in ANSI colour codes for its action
        show_unchanged_properties: Keep subtrees without changes in the output
        color_override: Colour name forced on every line (e.g. "cyan")
        icon_override: Icon forced on every line (e.g. "↓")
    """

    show_color: bool = True
    show_unchanged_properties: bool = False
    color_override: Optional[str] = None
    icon_override: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RenderOptions":
        """Build options from a mapping using camelCase or snake_case keys."""
        if data is None:
            return cls()
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                raise InvalidOptionsError(f"Unknown render option: {key!r}", option=key)
            kwargs[name] = value
        return cls(**kwargs)
