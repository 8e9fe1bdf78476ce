"""Tests for render options, pruning, change notes and colors."""

from __future__ import annotations

import unittest

from stackdiff.core.errors import InvalidOptionsError
from stackdiff.core.json_diff import build_diff
from stackdiff.core.render import Line, format_line, get_diff_lines, get_object_diff
from stackdiff.core.types import Action, RenderOptions

PLAIN = RenderOptions(show_color=False, show_unchanged_properties=True)
CHANGED_ONLY = RenderOptions(show_color=False, show_unchanged_properties=False)


class TestRenderOptions(unittest.TestCase):
    def test_defaults(self):
        options = RenderOptions()
        self.assertTrue(options.show_color)
        self.assertFalse(options.show_unchanged_properties)
        self.assertIsNone(options.color_override)
        self.assertIsNone(options.icon_override)

    def test_from_camel_case(self):
        options = RenderOptions.from_dict(
            {
                "showColor": False,
                "showUnchangedProperties": True,
                "colorOverride": "cyan",
                "iconOverride": "↓",
            }
        )
        self.assertEqual(
            options,
            RenderOptions(
                show_color=False,
                show_unchanged_properties=True,
                color_override="cyan",
                icon_override="↓",
            ),
        )

    def test_from_snake_case(self):
        options = RenderOptions.from_dict({"show_color": False})
        self.assertFalse(options.show_color)

    def test_from_none(self):
        self.assertEqual(RenderOptions.from_dict(None), RenderOptions())

    def test_unknown_option_raises(self):
        with self.assertRaises(InvalidOptionsError) as ctx:
            RenderOptions.from_dict({"showColour": True})
        self.assertEqual(ctx.exception.option, "showColour")

    def test_unknown_option_is_a_value_error(self):
        with self.assertRaises(ValueError):
            get_object_diff(1, 2, {"bogus": True})


class TestPruning(unittest.TestCase):
    def test_unchanged_siblings_are_hidden(self):
        before = {"hello": {"foo": {"yee": "haw"}, "world": {"goodbye": "world"}}}
        after = {"hello": {"foo": {"yee": "haw"}, "world": {"goodbye": "moon"}}}
        self.assertEqual(
            get_object_diff(before, after, CHANGED_ONLY),
            [
                "  hello:",
                "    world:",
                '-     goodbye: "world"',
                '+     goodbye: "moon"',
            ],
        )

    def test_unchanged_array_items_are_hidden(self):
        self.assertEqual(
            get_object_diff(["a", "b", "c"], ["a", "x", "c"], CHANGED_ONLY),
            ['- - "b"', '+ - "x"'],
        )

    def test_marker_moves_to_first_visible_property(self):
        before = {"Tags": [{"Key": "a", "Value": "1"}]}
        after = {"Tags": [{"Key": "a", "Value": "2"}]}
        self.assertEqual(
            get_object_diff(before, after, CHANGED_ONLY),
            [
                "  Tags:",
                '-   - Value: "1"',
                '+     Value: "2"',
            ],
        )
        self.assertEqual(
            get_object_diff(before, after, PLAIN),
            [
                "  Tags:",
                '    - Key: "a"',
                '-     Value: "1"',
                '+     Value: "2"',
            ],
        )

    def test_no_changes_renders_nothing(self):
        value = {"a": [1, {"b": 2}]}
        self.assertEqual(get_object_diff(value, dict(value), CHANGED_ONLY), [])

    def test_added_empty_containers_are_shown(self):
        self.assertEqual(
            get_object_diff({"a": 1}, {"a": 1, "b": {}, "c": []}, CHANGED_ONLY),
            ["+ b: {}", "+ c: []"],
        )


class TestKeysAndPrefixes(unittest.TestCase):
    def test_root_key(self):
        self.assertEqual(
            get_object_diff(None, {"Type": "AWS::SNS::Topic"}, PLAIN, key="Topic"),
            ["+ Topic:", '+   Type: "AWS::SNS::Topic"'],
        )

    def test_root_key_on_primitive(self):
        self.assertEqual(
            get_object_diff("a", "b", PLAIN, key="Name"),
            ['- Name: "a"', '+ Name: "b"'],
        )

    def test_array_prefix_is_used_once(self):
        diff = build_diff({"a": 1, "b": 2}, {"a": 1, "b": 3})
        self.assertEqual(
            get_diff_lines(diff, PLAIN, array_prefix="  - "),
            [
                "    - a: 1",
                "-     b: 2",
                "+     b: 3",
            ],
        )

    def test_array_prefix_on_replaced_first_line(self):
        diff = build_diff({"a": 1}, {"a": 2})
        self.assertEqual(
            get_diff_lines(diff, PLAIN, array_prefix="  - "),
            ["-   - a: 1", "+     a: 2"],
        )


class TestChangeNotes(unittest.TestCase):
    BEFORE = {"Properties": {"BucketName": "a", "Versioning": "Enabled"}}
    AFTER = {"Properties": {"BucketName": "b", "Versioning": "Enabled"}}

    def test_note_on_replaced_value(self):
        lines = get_object_diff(
            self.BEFORE,
            self.AFTER,
            CHANGED_ONLY,
            {"Bucket/Properties/BucketName": "WARNING: Causes Replacement!"},
            key="Bucket",
        )
        self.assertEqual(
            lines,
            [
                "  Bucket:",
                "    Properties:",
                '-     BucketName: "a"',
                '+     BucketName: "b" # WARNING: Causes Replacement!',
            ],
        )

    def test_note_on_header_line(self):
        lines = get_object_diff(
            self.BEFORE, self.AFTER, CHANGED_ONLY, {"Properties": "changed"}
        )
        self.assertEqual(lines[0], "  Properties: # changed")
        self.assertNotIn("#", lines[1])

    def test_note_on_unchanged_line(self):
        lines = get_object_diff(
            self.BEFORE, self.AFTER, PLAIN, {"Properties/Versioning": "kept"}
        )
        self.assertIn('    Versioning: "Enabled" # kept', lines)

    def test_note_on_array_item(self):
        lines = get_object_diff(
            {"Tags": ["a"]}, {"Tags": ["a", "b"]}, PLAIN, {"Tags/1": "new tag"}
        )
        self.assertEqual(lines, ["  Tags:", '    - "a"', '+   - "b" # new tag'])

    def test_missing_path_adds_nothing(self):
        lines = get_object_diff(
            self.BEFORE, self.AFTER, PLAIN, {"Nowhere/Else": "unused"}
        )
        self.assertFalse(any("#" in line for line in lines))


class TestColors(unittest.TestCase):
    def assertColored(self, line: str, code: str, text: str) -> None:
        self.assertTrue(line.startswith(f"\x1b[{code}m"), repr(line))
        self.assertTrue(line.endswith("\x1b[0m"), repr(line))
        self.assertIn(text, line)

    def test_action_colors(self):
        options = RenderOptions(show_color=True, show_unchanged_properties=True)
        lines = get_object_diff({"a": 1, "b": 2}, {"a": 1, "b": 3}, options)
        self.assertEqual(len(lines), 3)
        self.assertColored(lines[0], "37", "  a: 1")
        self.assertColored(lines[1], "31", "- b: 2")
        self.assertColored(lines[2], "32", "+ b: 3")

    def test_color_and_icon_override(self):
        options = RenderOptions(
            show_color=True, color_override="cyan", icon_override="↓"
        )
        lines = get_object_diff(None, {"a": 1, "b": [2]}, options)
        self.assertEqual(len(lines), 3)
        for line in lines:
            self.assertColored(line, "36", "↓ ")

    def test_icon_override_without_color(self):
        options = RenderOptions(show_color=False, icon_override="↓")
        self.assertEqual(get_object_diff(None, {"a": 1}, options), ["↓ a: 1"])

    def test_format_line_plain(self):
        line = Line(Action.REMOVE, "a: 1")
        self.assertEqual(format_line(line, RenderOptions(show_color=False)), "- a: 1")


if __name__ == "__main__":
    unittest.main()
