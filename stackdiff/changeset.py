"""Rendering of CloudFormation change sets.

Works on the JSON document returned by ``DescribeChangeSet`` (for example
``aws cloudformation describe-change-set --include-property-values``),
already fetched and parsed. Each resource change becomes a before/after
pair that is diffed and rendered under its logical id:

    - before/after come from ``BeforeContext``/``AfterContext`` with the
      resource type injected as a ``Type`` key
    - stack tag changes reported in ``Details`` become a ``StackTags`` key
    - details that force recreation become change notes on the property
    - nested stack change sets are rendered as ``Parent/Child``
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .core.canon import fingerprint
from .core.errors import ChangeSetError
from .core.render import Line, format_line, get_object_diff
from .core.types import Action, RenderOptions

logger = logging.getLogger(__name__)

REPLACEMENT_NOTES = {
    "Always": "WARNING: Causes Replacement!",
    "Conditionally": "WARNING: May Cause Replacement",
}

REPLACEMENT_WARNING = "WARNING may be replaced due to the following changes:"


@dataclass(frozen=True)
class ActionStyle:
    icon: str
    color: str


CHANGE_ACTIONS: Dict[str, ActionStyle] = {
    "Add": ActionStyle("+", "green"),
    "Modify": ActionStyle("~", "yellow"),
    "Remove": ActionStyle("-", "red"),
    "Import": ActionStyle("↓", "cyan"),
    "Dynamic": ActionStyle("?", "magenta"),
}


@dataclass
class ChangeSetTotals:
    """Number of resources per change action."""

    add: int = 0
    modify: int = 0
    remove: int = 0
    import_: int = 0
    dynamic: int = 0

    def record(self, change: "ResourceChange") -> None:
        if change.may_be_replaced:
            self.add += 1
            self.remove += 1
        elif change.action == "Add":
            self.add += 1
        elif change.action == "Modify":
            self.modify += 1
        elif change.action == "Remove":
            self.remove += 1
        elif change.action == "Import":
            self.import_ += 1
        elif change.action == "Dynamic":
            self.dynamic += 1

    def merge(self, other: "ChangeSetTotals") -> None:
        self.add += other.add
        self.modify += other.modify
        self.remove += other.remove
        self.import_ += other.import_
        self.dynamic += other.dynamic

    def summary_lines(self) -> List[str]:
        return [
            f"{self.add} resources added",
            f"{self.modify} resources modified",
            f"{self.remove} resources removed",
            f"{self.import_} resources imported",
            f"{self.dynamic} undetermined resources",
        ]

    def to_dict(self) -> Dict[str, int]:
        return {
            "Add": self.add,
            "Modify": self.modify,
            "Remove": self.remove,
            "Import": self.import_,
            "Dynamic": self.dynamic,
        }


@dataclass(frozen=True)
class ResourceChange:
    """
    One resource entry of a change set.

    Attributes:
        action: Add, Modify, Remove, Import or Dynamic (None if not reported)
        logical_id: Logical id, prefixed with the parent path for nested stacks
        resource_type: e.g. AWS::S3::Bucket
        replacement: True, False or Conditional (Modify only)
        before: Parsed resource definition before the change, with Type injected
        after: Parsed resource definition after the change, with Type injected
        change_notes: Notes keyed by slash-joined property path
        change_set_id: Nested stack change set id, if any
    """

    action: Optional[str]
    logical_id: str
    resource_type: Optional[str] = None
    replacement: Optional[str] = None
    before: Any = None
    after: Any = None
    change_notes: Dict[str, str] = field(default_factory=dict)
    change_set_id: Optional[str] = None

    @property
    def may_be_replaced(self) -> bool:
        return self.action == "Modify" and self.replacement not in (None, "False")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], prefix: str = "") -> "ResourceChange":
        """Build from a ``Changes[]`` entry or its ``ResourceChange`` member."""
        change = data.get("ResourceChange", data)
        logical_id = change.get("LogicalResourceId")
        if not logical_id:
            raise ChangeSetError("Resource change without LogicalResourceId")
        logical_id = f"{prefix}{logical_id}"
        resource_type = change.get("ResourceType")

        before = _parse_context(
            change.get("BeforeContext"), "BeforeContext", logical_id
        )
        after = _parse_context(change.get("AfterContext"), "AfterContext", logical_id)
        details = change.get("Details") or []

        before_tags, after_tags = _stack_tags(details)
        if isinstance(before, dict):
            if resource_type:
                before["Type"] = resource_type
            if before_tags:
                before["StackTags"] = before_tags
        if isinstance(after, dict):
            if resource_type:
                after["Type"] = resource_type
            if after_tags:
                after["StackTags"] = after_tags

        return cls(
            action=change.get("Action"),
            logical_id=logical_id,
            resource_type=resource_type,
            replacement=change.get("Replacement"),
            before=before,
            after=after,
            change_notes=_change_notes(details, logical_id),
            change_set_id=change.get("ChangeSetId"),
        )

    def render(self, options: RenderOptions) -> List[str]:
        lines: List[str] = []
        if self.may_be_replaced:
            warning = Line(
                Action.REMOVE, f"{self.logical_id}: # {REPLACEMENT_WARNING}"
            )
            lines.append(format_line(warning, options))
        if self.action == "Import":
            style = CHANGE_ACTIONS["Import"]
            options = replace(
                options, icon_override=style.icon, color_override=style.color
            )
        lines.extend(
            get_object_diff(
                self.before,
                self.after,
                options,
                self.change_notes,
                key=self.logical_id,
            )
        )
        return lines


@dataclass
class ChangeSetReport:
    lines: List[str] = field(default_factory=list)
    totals: ChangeSetTotals = field(default_factory=ChangeSetTotals)

    def text(self) -> str:
        return "\n".join(self.lines + [""] + self.totals.summary_lines())


def render_change_set(
    response: Mapping[str, Any],
    options: Optional[RenderOptions] = None,
    nested: Optional[Mapping[str, Mapping[str, Any]]] = None,
    prefix: str = "",
) -> ChangeSetReport:
    """Render every resource change of a DescribeChangeSet response.

    Args:
        response: Parsed DescribeChangeSet response
        options: Render options (defaults to RenderOptions())
        nested: Responses of nested stack change sets, keyed by change set id
        prefix: Logical id prefix, used when rendering nested stacks

    Returns:
        ChangeSetReport with the rendered lines and per-action totals
    """
    options = options or RenderOptions()
    nested = nested or {}
    report = ChangeSetReport()
    changes = response.get("Changes")
    if changes is None:
        raise ChangeSetError("Change set document has no 'Changes' list")
    if response.get("NextToken"):
        logger.warning(
            "change set %s is paginated; only the supplied page is rendered",
            response.get("ChangeSetName") or response.get("ChangeSetId"),
        )

    for entry in changes:
        is_resource = entry.get("Type") in (None, "Resource")
        if "ResourceChange" not in entry and not is_resource:
            logger.debug("skipping change of type %s", entry.get("Type"))
            continue
        change = ResourceChange.from_dict(entry, prefix=prefix)
        logger.debug(
            "rendering %s (%s) before=%s after=%s",
            change.logical_id,
            change.action,
            fingerprint(change.before),
            fingerprint(change.after),
        )
        report.lines.append("")
        report.lines.extend(change.render(options))
        report.totals.record(change)

        if change.change_set_id:
            child = nested.get(change.change_set_id)
            if child is None:
                logger.warning(
                    "nested change set %s for %s was not supplied; skipping",
                    change.change_set_id,
                    change.logical_id,
                )
                continue
            child_report = render_change_set(
                child, options, nested, prefix=f"{change.logical_id}/"
            )
            report.lines.extend(child_report.lines)
            report.totals.merge(child_report.totals)
    return report


def parse_tag_value(raw: Any) -> Any:
    """Parse a tag value reported as a JSON string, falling back to the raw value."""
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _parse_context(raw: Optional[str], name: str, logical_id: str) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ChangeSetError(
            f"{name} is not valid JSON: {exc}", logical_id=logical_id
        ) from exc


def _stack_tags(
    details: List[Mapping[str, Any]],
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    before: Dict[str, Any] = {}
    after: Dict[str, Any] = {}
    for detail in details:
        target = detail.get("Target") or {}
        if target.get("Attribute") != "Tags" or not target.get("Name"):
            continue
        name = target["Name"]
        if "BeforeValue" in target:
            before[name] = parse_tag_value(target["BeforeValue"])
        if "AfterValue" in target:
            after[name] = parse_tag_value(target["AfterValue"])
    return before, after


def _change_notes(details: List[Mapping[str, Any]], logical_id: str) -> Dict[str, str]:
    notes: Dict[str, str] = {}
    for detail in details:
        target = detail.get("Target") or {}
        note = REPLACEMENT_NOTES.get(target.get("RequiresRecreation"))
        if not note:
            continue
        path = _target_path(target)
        if path:
            notes[f"{logical_id}/{path}"] = note
    return notes


def _target_path(target: Mapping[str, Any]) -> Optional[str]:
    if target.get("Path"):
        return target["Path"].strip("/")
    attribute = target.get("Attribute")
    if not attribute:
        return None
    if target.get("Name"):
        return f"{attribute}/{target['Name']}"
    return attribute


__all__ = [
    "ActionStyle",
    "CHANGE_ACTIONS",
    "ChangeSetReport",
    "ChangeSetTotals",
    "REPLACEMENT_NOTES",
    "ResourceChange",
    "parse_tag_value",
    "render_change_set",
]
